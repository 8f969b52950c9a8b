"""Database location helpers.

The resolver reads the application's own database, so there is no local
default: ``DATABASE_URI`` has to name it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import require_env_var

DATABASE_URI_ENV_VAR: Final[str] = "DATABASE_URI"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_database_config() -> DatabaseConfig:
    return DatabaseConfig(uri=require_env_var(DATABASE_URI_ENV_VAR))
