"""Parameter binding shared by the PostgreSQL repositories."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from psycopg2.extensions import cursor as PgCursor

from drawit.db.errors import DriverMismatchError

if TYPE_CHECKING:
    from collections.abc import Mapping


def execute(cursor: object, query: str, params: Mapping[str, Any] | None = None) -> PgCursor:
    """Run one statement with psycopg2 named parameters (``%(name)s``).

    Raises DriverMismatchError when handed anything other than a psycopg2
    cursor; repositories only ever receive connections from
    PostgresConnectionFactory, so this signals a wiring bug.
    """
    if not isinstance(cursor, PgCursor):
        msg = f"Expected psycopg2 cursor when interacting with PostgreSQL, got {type(cursor).__name__}"
        raise DriverMismatchError(msg)
    cursor.execute(query, params)
    return cursor
