"""In-memory repository implementations sharing a single store."""

from drawit.memory.room_repository import InMemoryRoomRepository
from drawit.memory.store import InMemoryStore
from drawit.memory.user_repository import InMemoryUserRepository

__all__ = [
    "InMemoryRoomRepository",
    "InMemoryStore",
    "InMemoryUserRepository",
]
