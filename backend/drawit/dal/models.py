"""Persistence models for rooms and users."""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class RoomStatus(IntEnum):
    """Known room lifecycle states.

    Room.status is a plain int so that states added by newer services read
    back unchanged; compare against these members.
    """

    LOBBY = 0
    IN_GAME = 1
    FINISHED = 2


class Room(BaseModel, frozen=True):
    """A game session that users join with a short code."""

    id: str  # join code, assigned by the caller
    host_id: int  # user id of the host; not enforced by the store
    settings: dict[str, Any] = Field(default_factory=dict)
    status: int = RoomStatus.LOBBY  # stored verbatim, may hold values RoomStatus does not name

    @field_validator("settings", mode="before")
    @classmethod
    def _default_settings(cls, v: dict[str, Any] | None) -> dict[str, Any]:
        return {} if v is None else v


class User(BaseModel, frozen=True):
    """A player, optionally seated in a room."""

    id: int  # allocated by UserRepository.get_next_id
    name: str
    room_id: str | None = None
    is_connected: bool = False
    is_ready: bool = False
