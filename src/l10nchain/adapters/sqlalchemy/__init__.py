"""SQLAlchemy adapter package for l10nchain."""

from __future__ import annotations

from .repositories import (
    SqlAlchemyLocalizationOracle,
    SqlAlchemyRecordStore,
    SqlAlchemyTableRepository,
)
from .tables import ReflectedTables, UnknownColumnError
from .unit_of_work import (
    SqlAlchemyLocalizationUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "ReflectedTables",
    "SqlAlchemyLocalizationOracle",
    "SqlAlchemyLocalizationUnitOfWork",
    "SqlAlchemyRecordStore",
    "SqlAlchemyTableRepository",
    "StartupError",
    "UnknownColumnError",
    "is_started",
    "shutdown",
    "startup",
]
