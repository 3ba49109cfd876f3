"""Repository backend configuration via environment variables."""

from enum import StrEnum
from typing import Self

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings


class RepositoryType(StrEnum):
    DB = "db"
    INMEM = "inmem"


class RepositorySettings(BaseSettings):
    model_config = {"env_prefix": "DRAWIT_", "populate_by_name": True}

    # Unrecognized values fall back to the in-memory backend.
    repository_type: RepositoryType = RepositoryType.INMEM

    # Required when repository_type is "db". Accepts a libpq DSN or a postgresql:// URL.
    postgres_connection_string: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DRAWIT_POSTGRES_CONNECTION_STRING", "DATABASE_URL"),
        repr=False,
    )

    @field_validator("repository_type", mode="before")
    @classmethod
    def _parse_repository_type(cls, v: object) -> RepositoryType:
        if isinstance(v, RepositoryType):
            return v
        try:
            return RepositoryType(str(v).strip().lower())
        except ValueError:
            return RepositoryType.INMEM

    @model_validator(mode="after")
    def _require_connection_string(self) -> Self:
        if self.repository_type == RepositoryType.DB and not (self.postgres_connection_string or "").strip():
            raise ValueError("PostgreSQL connection string was not provided")
        return self
