"""Abstract interface for user persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from drawit.dal.models import User


class UserRepository(ABC):
    """Abstract interface for user persistence.

    Implementations are backed by PostgreSQL or process memory.
    """

    @abstractmethod
    def save(self, user: User) -> None:
        """Insert the user or replace every column of the existing row.

        Raises ValueError when room_id names a room that does not exist.
        """

    @abstractmethod
    def delete_by_id(self, user_id: int) -> bool: ...

    @abstractmethod
    def find_by_id(self, user_id: int) -> User | None: ...

    @abstractmethod
    def get_all(self) -> list[User]: ...

    @abstractmethod
    def get_next_id(self) -> int:
        """Allocate the next user id from the identity sequence.

        Ids are strictly increasing and never handed out twice, even after
        the user is deleted. An allocated id that is never saved is skipped.
        """

    @abstractmethod
    def find_by_room_id(self, room_id: str) -> list[User]: ...
