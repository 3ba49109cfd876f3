"""PostgreSQL-backed room repository."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import structlog
from psycopg2.extras import Json

from drawit.dal.models import Room
from drawit.dal.room_repository import RoomRepository
from drawit.db.connection import SCHEMA
from drawit.db.cursor import execute

if TYPE_CHECKING:
    from drawit.db.connection import PostgresConnectionFactory

logger = structlog.get_logger()

# settings is read as text so that decoding stays under our control
_COLUMNS = "id, host_id, settings::text, status"

_UPSERT_SQL = f"""\
INSERT INTO {SCHEMA}.rooms (id, host_id, settings, status)
VALUES (%(id)s, %(host_id)s, %(settings)s::jsonb, %(status)s)
ON CONFLICT (id) DO UPDATE SET
    host_id = EXCLUDED.host_id,
    settings = EXCLUDED.settings,
    status = EXCLUDED.status"""


class PostgresRoomRepository(RoomRepository):
    """PostgreSQL implementation of RoomRepository.

    Each call opens its own connection, runs a single statement and closes
    the connection before returning. Saves are last-writer-wins.
    """

    def __init__(self, connections: PostgresConnectionFactory) -> None:
        self._connections = connections

    def save(self, room: Room) -> None:
        with self._connections.connection() as conn, conn.cursor() as cursor:
            execute(
                cursor,
                _UPSERT_SQL,
                {
                    "id": room.id,
                    "host_id": room.host_id,
                    "settings": Json(room.settings or {}),
                    "status": int(room.status),
                },
            )

    def delete_by_id(self, room_id: str) -> bool:
        """Delete a room. Member users have room_id set to NULL by the foreign key."""
        with self._connections.connection() as conn, conn.cursor() as cursor:
            execute(cursor, f"DELETE FROM {SCHEMA}.rooms WHERE id = %(id)s", {"id": room_id})
            return cursor.rowcount > 0

    def find_by_id(self, room_id: str) -> Room | None:
        with self._connections.connection() as conn, conn.cursor() as cursor:
            execute(cursor, f"SELECT {_COLUMNS} FROM {SCHEMA}.rooms WHERE id = %(id)s", {"id": room_id})
            row = cursor.fetchone()
        if row is None:
            return None
        return _map_room(row)

    def get_all(self) -> list[Room]:
        with self._connections.connection() as conn, conn.cursor() as cursor:
            execute(cursor, f"SELECT {_COLUMNS} FROM {SCHEMA}.rooms")
            rows = cursor.fetchall()
        return [_map_room(row) for row in rows]

    def exists_by_id(self, room_id: str) -> bool:
        with self._connections.connection() as conn, conn.cursor() as cursor:
            execute(cursor, f"SELECT 1 FROM {SCHEMA}.rooms WHERE id = %(id)s", {"id": room_id})
            return cursor.fetchone() is not None


def _map_room(row: tuple[Any, ...]) -> Room:
    room_id, host_id, raw_settings, status = row
    return Room(
        id=room_id,
        host_id=host_id,
        settings=_parse_settings(room_id, raw_settings),
        status=status,
    )


def _parse_settings(room_id: str, raw: str | dict[str, Any] | None) -> dict[str, Any]:
    """Decode stored settings, falling back to empty settings on bad data."""
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw

    try:
        value = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.warning("room settings are not valid JSON, using defaults", room_id=room_id)
        return {}

    if not isinstance(value, dict):
        logger.warning("room settings are not a JSON object, using defaults", room_id=room_id)
        return {}
    return value
