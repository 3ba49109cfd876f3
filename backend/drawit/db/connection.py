"""PostgreSQL connection factory and one-time schema provisioning."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

import psycopg2
import structlog

from drawit.db.errors import DatabaseConnectionError, SchemaProvisioningError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from psycopg2.extensions import connection as PgConnection

logger = structlog.get_logger()

SCHEMA = "drawit"
USER_ID_SEQUENCE = f"{SCHEMA}.users_id_seq"

# Every statement must be safe to re-run: a failed run leaves the factory
# uninitialized and the whole script executes again on the next connection.
_SCHEMA_SQL = f"""\
CREATE SCHEMA IF NOT EXISTS {SCHEMA};

CREATE SEQUENCE IF NOT EXISTS {USER_ID_SEQUENCE} AS BIGINT START 1;

CREATE TABLE IF NOT EXISTS {SCHEMA}.rooms (
    id TEXT PRIMARY KEY,
    host_id BIGINT NOT NULL,
    settings JSONB NOT NULL DEFAULT '{{}}'::jsonb,
    status INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS {SCHEMA}.users (
    id BIGINT PRIMARY KEY DEFAULT nextval('{USER_ID_SEQUENCE}'),
    name TEXT NOT NULL,
    room_id TEXT NULL REFERENCES {SCHEMA}.rooms(id) ON DELETE SET NULL,
    is_connected BOOLEAN NOT NULL DEFAULT FALSE,
    is_ready BOOLEAN NOT NULL DEFAULT FALSE
);

CREATE UNIQUE INDEX IF NOT EXISTS users_id_unique ON {SCHEMA}.users (id);
CREATE INDEX IF NOT EXISTS users_room_id_index ON {SCHEMA}.users (room_id);
ALTER SEQUENCE {USER_ID_SEQUENCE} OWNED BY {SCHEMA}.users.id;
"""

_DRIVER_URL_PREFIXES = ("postgresql+psycopg2://", "postgresql+asyncpg://")


def normalize_dsn(connection_string: str) -> str:
    """Strip SQLAlchemy-style driver prefixes so libpq accepts the URL."""
    for prefix in _DRIVER_URL_PREFIXES:
        if connection_string.startswith(prefix):
            return "postgresql://" + connection_string[len(prefix) :]
    return connection_string


class PostgresConnectionFactory:
    """Opens PostgreSQL connections and provisions the schema on first use.

    Provisioning uses double-checked locking: the common path reads the
    initialized flag without the lock, and only a thread that sees it unset
    takes the lock, re-checks, and runs the schema script. The flag is set
    only after the script succeeds.
    """

    def __init__(self, connection_string: str) -> None:
        self._dsn = normalize_dsn(connection_string)
        self._initialized = False
        self._init_lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    def create_connection(self) -> PgConnection:
        """Open a new autocommit connection. The caller must close it.

        Raises DatabaseConnectionError when the server is unreachable and
        SchemaProvisioningError when the first-use schema script fails.
        """
        # OperationalError for an unreachable server, ProgrammingError for a malformed DSN
        try:
            conn = psycopg2.connect(self._dsn)
        except psycopg2.Error as exc:
            msg = "Failed to open PostgreSQL connection"
            raise DatabaseConnectionError(msg) from exc

        conn.autocommit = True
        try:
            self._ensure_initialized(conn)
        except BaseException:
            conn.close()
            raise
        return conn

    @contextmanager
    def connection(self) -> Iterator[PgConnection]:
        """Yield a new connection and close it on every exit path."""
        conn = self.create_connection()
        try:
            yield conn
        finally:
            conn.close()

    def _ensure_initialized(self, conn: PgConnection) -> None:
        if self._initialized:
            return

        with self._init_lock:
            if self._initialized:
                return

            try:
                with conn.cursor() as cursor:
                    cursor.execute(_SCHEMA_SQL)
            except psycopg2.Error as exc:
                msg = f"Failed to provision schema '{SCHEMA}'"
                raise SchemaProvisioningError(msg) from exc

            self._initialized = True
            logger.info("postgres schema ensured", schema=SCHEMA)
