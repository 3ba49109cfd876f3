"""Data access layer: repository interfaces and shared persistence models."""

from drawit.dal.models import Room, RoomStatus, User
from drawit.dal.room_repository import RoomRepository
from drawit.dal.user_repository import UserRepository

__all__ = [
    "Room",
    "RoomRepository",
    "RoomStatus",
    "User",
    "UserRepository",
]
