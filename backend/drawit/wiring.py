"""Select and build the repository backend once at startup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from drawit.db import PostgresConnectionFactory, PostgresRoomRepository, PostgresUserRepository
from drawit.memory import InMemoryRoomRepository, InMemoryStore, InMemoryUserRepository
from drawit.settings import RepositorySettings, RepositoryType

if TYPE_CHECKING:
    from drawit.dal import RoomRepository, UserRepository

logger = structlog.get_logger()


@dataclass(frozen=True)
class Repositories:
    rooms: RoomRepository
    users: UserRepository
    connections: PostgresConnectionFactory | None = None  # set for the db backend only


def create_repositories(settings: RepositorySettings | None = None) -> Repositories:
    """Build room and user repositories for the configured backend.

    Reads RepositorySettings from the environment when none is given, which
    raises a ValidationError if the db backend is selected without a
    connection string. Both repositories share one connection factory (db)
    or one store (inmem).
    """
    if settings is None:
        settings = RepositorySettings()

    if settings.repository_type == RepositoryType.DB:
        connection_string = settings.postgres_connection_string
        if not connection_string:
            # only reachable with settings built by model_construct, which skips validation
            raise ValueError("PostgreSQL connection string was not provided")
        connections = PostgresConnectionFactory(connection_string)
        repositories = Repositories(
            rooms=PostgresRoomRepository(connections),
            users=PostgresUserRepository(connections),
            connections=connections,
        )
    else:
        store = InMemoryStore()
        repositories = Repositories(
            rooms=InMemoryRoomRepository(store),
            users=InMemoryUserRepository(store),
        )

    logger.info("repositories configured", backend=settings.repository_type)
    return repositories
