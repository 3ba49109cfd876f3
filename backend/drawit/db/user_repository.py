"""PostgreSQL-backed user repository."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from psycopg2 import errors

from drawit.dal.models import User
from drawit.dal.user_repository import UserRepository
from drawit.db.connection import SCHEMA, USER_ID_SEQUENCE
from drawit.db.cursor import execute

if TYPE_CHECKING:
    from drawit.db.connection import PostgresConnectionFactory

_COLUMNS = "id, name, room_id, is_connected, is_ready"

_UPSERT_SQL = f"""\
INSERT INTO {SCHEMA}.users (id, name, room_id, is_connected, is_ready)
VALUES (%(id)s, %(name)s, %(room_id)s, %(is_connected)s, %(is_ready)s)
ON CONFLICT (id) DO UPDATE SET
    name = EXCLUDED.name,
    room_id = EXCLUDED.room_id,
    is_connected = EXCLUDED.is_connected,
    is_ready = EXCLUDED.is_ready"""


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository.

    User ids come from the drawit.users_id_seq sequence via get_next_id.
    Allocation and save run on separate connections, so an id allocated
    by a caller that never saves is skipped for good.
    """

    def __init__(self, connections: PostgresConnectionFactory) -> None:
        self._connections = connections

    def save(self, user: User) -> None:
        """Upsert a user. Raises ValueError if room_id names a missing room."""
        params = {
            "id": user.id,
            "name": user.name,
            "room_id": user.room_id,
            "is_connected": user.is_connected,
            "is_ready": user.is_ready,
        }
        with self._connections.connection() as conn, conn.cursor() as cursor:
            try:
                execute(cursor, _UPSERT_SQL, params)
            except errors.ForeignKeyViolation as exc:
                raise ValueError(f"Room '{user.room_id}' does not exist") from exc

    def delete_by_id(self, user_id: int) -> bool:
        with self._connections.connection() as conn, conn.cursor() as cursor:
            execute(cursor, f"DELETE FROM {SCHEMA}.users WHERE id = %(id)s", {"id": user_id})
            return cursor.rowcount > 0

    def find_by_id(self, user_id: int) -> User | None:
        with self._connections.connection() as conn, conn.cursor() as cursor:
            execute(cursor, f"SELECT {_COLUMNS} FROM {SCHEMA}.users WHERE id = %(id)s", {"id": user_id})
            row = cursor.fetchone()
        if row is None:
            return None
        return _map_user(row)

    def get_all(self) -> list[User]:
        with self._connections.connection() as conn, conn.cursor() as cursor:
            execute(cursor, f"SELECT {_COLUMNS} FROM {SCHEMA}.users")
            rows = cursor.fetchall()
        return [_map_user(row) for row in rows]

    def get_next_id(self) -> int:
        """Allocate the next id from the sequence.

        psycopg2 returns BIGINT as int; NUMERIC-typed results arrive as
        Decimal and are narrowed to int.
        """
        with self._connections.connection() as conn, conn.cursor() as cursor:
            execute(cursor, f"SELECT nextval('{USER_ID_SEQUENCE}')")
            row = cursor.fetchone()

        value = row[0] if row is not None else None
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, Decimal):
            return int(value)
        raise RuntimeError("Unable to retrieve next user id from sequence")

    def find_by_room_id(self, room_id: str) -> list[User]:
        with self._connections.connection() as conn, conn.cursor() as cursor:
            execute(
                cursor,
                f"SELECT {_COLUMNS} FROM {SCHEMA}.users WHERE room_id = %(room_id)s",
                {"room_id": room_id},
            )
            rows = cursor.fetchall()
        return [_map_user(row) for row in rows]


def _map_user(row: tuple[Any, ...]) -> User:
    user_id, name, room_id, is_connected, is_ready = row
    return User(
        id=user_id,
        name=name,
        room_id=room_id,
        is_connected=is_connected,
        is_ready=is_ready,
    )
