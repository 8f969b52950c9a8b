"""Ports for reading records and their existing localizations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from l10nchain.domain.model import Record


@runtime_checkable
class RecordStore(Protocol):
    """Read access to default-language rows.

    Visibility rules (deleted rows, workspaces) are the store's business.
    """

    def fetch(self, table: str, uid: int) -> Record | None: ...


@runtime_checkable
class LocalizationOracle(Protocol):
    """Lookup of an existing translation of a record."""

    def find_localization(self, table: str, uid: int, language: int) -> Record | None:
        """Return the row translating ``table#uid`` into ``language``.

        Implementations return at most one row and break ties by lowest uid.
        """
        ...
