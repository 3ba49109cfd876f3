"""PostgreSQL storage layer: connection management and repository implementations."""

from drawit.db.connection import PostgresConnectionFactory
from drawit.db.errors import (
    DatabaseConnectionError,
    DatabaseError,
    DriverMismatchError,
    SchemaProvisioningError,
)
from drawit.db.room_repository import PostgresRoomRepository
from drawit.db.user_repository import PostgresUserRepository

__all__ = [
    "DatabaseConnectionError",
    "DatabaseError",
    "DriverMismatchError",
    "PostgresConnectionFactory",
    "PostgresRoomRepository",
    "PostgresUserRepository",
    "SchemaProvisioningError",
]
