"""In-memory user repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from drawit.dal.user_repository import UserRepository

if TYPE_CHECKING:
    from drawit.dal.models import User
    from drawit.memory.store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """Dict-backed UserRepository sharing its store with InMemoryRoomRepository."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def save(self, user: User) -> None:
        """Upsert a user. Raises ValueError if room_id names a missing room."""
        with self._store.lock:
            if user.room_id is not None and user.room_id not in self._store.rooms:
                raise ValueError(f"Room '{user.room_id}' does not exist")
            self._store.users[user.id] = user

    def delete_by_id(self, user_id: int) -> bool:
        with self._store.lock:
            return self._store.users.pop(user_id, None) is not None

    def find_by_id(self, user_id: int) -> User | None:
        with self._store.lock:
            return self._store.users.get(user_id)

    def get_all(self) -> list[User]:
        with self._store.lock:
            return list(self._store.users.values())

    def get_next_id(self) -> int:
        with self._store.lock:
            return self._store.next_user_id()

    def find_by_room_id(self, room_id: str) -> list[User]:
        with self._store.lock:
            return [u for u in self._store.users.values() if u.room_id == room_id]
