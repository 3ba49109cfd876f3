"""Abstract interface for room persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from drawit.dal.models import Room


class RoomRepository(ABC):
    """Abstract interface for room persistence.

    Implementations are backed by PostgreSQL or process memory. Every
    method is a self-contained unit of work and may be called from
    multiple threads.
    """

    @abstractmethod
    def save(self, room: Room) -> None:
        """Insert the room or replace every column of the existing row."""

    @abstractmethod
    def delete_by_id(self, room_id: str) -> bool:
        """Delete a room, returning whether it existed.

        Users seated in the room keep their rows with room_id cleared.
        """

    @abstractmethod
    def find_by_id(self, room_id: str) -> Room | None: ...

    @abstractmethod
    def get_all(self) -> list[Room]: ...

    @abstractmethod
    def exists_by_id(self, room_id: str) -> bool: ...
