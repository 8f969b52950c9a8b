"""Reflection of the existing tables the resolver reads from.

l10nchain does not own the schema; rows live in the application's database
and are described by ``sqlalchemy.Table`` objects reflected on first use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sqlalchemy import MetaData, Table

from l10nchain.domain.model import UID_FIELD

if TYPE_CHECKING:
    from sqlalchemy import Column
    from sqlalchemy.engine import Connection

log = logging.getLogger(__name__)


class UnknownColumnError(LookupError):
    """Raised when configuration names a column the reflected table lacks."""

    def __init__(self, table: str, column: str) -> None:
        self.table = table
        self.column = column
        super().__init__(f"Table {table!r} has no column {column!r}")


@dataclass(slots=True)
class ReflectedTables:
    """Lazily reflected table cache, one per database."""

    metadata: MetaData = field(default_factory=MetaData)

    def table(self, name: str, connection: Connection) -> Table:
        existing = self.metadata.tables.get(name)
        if existing is not None:
            return existing
        log.debug("Reflecting table %s", name)
        return Table(name, self.metadata, autoload_with=connection)


def column(table: Table, name: str) -> Column[object]:
    try:
        return table.c[name]
    except KeyError as exc:
        raise UnknownColumnError(table.name, name) from exc


def uid_column(table: Table) -> Column[object]:
    return column(table, UID_FIELD)
