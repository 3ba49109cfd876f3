"""Errors raised by the PostgreSQL storage layer."""


class DatabaseError(Exception):
    """Base class for storage failures surfaced to repository callers."""


class DatabaseConnectionError(DatabaseError):
    """The physical connection to PostgreSQL could not be opened."""


class SchemaProvisioningError(DatabaseError):
    """The schema script failed. The next connection attempt runs it again."""


class DriverMismatchError(DatabaseError):
    """A cursor from an unexpected driver reached parameter binding."""
