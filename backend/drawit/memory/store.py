"""Shared state for the in-memory repositories."""

import itertools
import threading

from drawit.dal.models import Room, User


class InMemoryStore:
    """Rooms, users and the user id sequence, guarded by a single lock.

    Both in-memory repositories share one store so that deleting a room
    can clear room_id on its members and saving a user can check that
    its room exists, mirroring the foreign key in the PostgreSQL schema.
    """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.rooms: dict[str, Room] = {}
        self.users: dict[int, User] = {}
        self._user_ids = itertools.count(1)

    def next_user_id(self) -> int:
        """Return the next user id. Caller must hold the lock."""
        return next(self._user_ids)
