"""In-memory room repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from drawit.dal.room_repository import RoomRepository

if TYPE_CHECKING:
    from drawit.dal.models import Room
    from drawit.memory.store import InMemoryStore


class InMemoryRoomRepository(RoomRepository):
    """Dict-backed RoomRepository for single-process deployments and tests.

    Rooms are deep-copied in and out: settings is a mutable dict, and a
    caller editing it must not change what is stored.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def save(self, room: Room) -> None:
        with self._store.lock:
            self._store.rooms[room.id] = room.model_copy(deep=True)

    def delete_by_id(self, room_id: str) -> bool:
        with self._store.lock:
            if self._store.rooms.pop(room_id, None) is None:
                return False
            for user_id, user in list(self._store.users.items()):
                if user.room_id == room_id:
                    self._store.users[user_id] = user.model_copy(update={"room_id": None})
            return True

    def find_by_id(self, room_id: str) -> Room | None:
        with self._store.lock:
            room = self._store.rooms.get(room_id)
            return room.model_copy(deep=True) if room is not None else None

    def get_all(self) -> list[Room]:
        with self._store.lock:
            return [room.model_copy(deep=True) for room in self._store.rooms.values()]

    def exists_by_id(self, room_id: str) -> bool:
        with self._store.lock:
            return room_id in self._store.rooms
