"""Domain port definitions for adapters."""

from __future__ import annotations

from .execution import CommandExecutor
from .records import LocalizationOracle, RecordStore
from .schema import SchemaIntrospection
from .unit_of_work import (
    LocalizationRepositories,
    LocalizationUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CommandExecutor",
    "LocalizationOracle",
    "LocalizationRepositories",
    "LocalizationUnitOfWork",
    "RecordStore",
    "RepositoryCollection",
    "SchemaIntrospection",
    "UnitOfWork",
]
