"""Dict-backed adapters for the resolver ports.

Useful for tests and for callers that already hold the rows they want to
resolve. Tables are rows keyed by ``uid``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from l10nchain.domain.commands import CommandBatch
from l10nchain.domain.model import UID_FIELD, Visibility, as_int, as_positive_id, record_uid
from l10nchain.domain.schema import LocalizationSchema

if TYPE_CHECKING:
    from collections.abc import Mapping

    from l10nchain.domain.model import Record


@dataclass(slots=True)
class InMemoryRecordStore:
    """Record store and localization oracle over in-memory tables.

    Localizations are found the way a database query would find them: rows
    of the same table whose translation pointer column equals the source uid
    and whose language column equals the requested language. The lowest uid
    wins when several rows match.
    """

    schema: LocalizationSchema = field(default_factory=LocalizationSchema)
    visibility: Visibility = field(default_factory=Visibility)
    _rows: dict[str, dict[int, dict[str, object]]] = field(
        default_factory=dict["str", "dict[int, dict[str, object]]"], repr=False
    )

    def add(self, table: str, **values: object) -> dict[str, object]:
        """Insert or replace a row; ``uid`` is required."""

        uid = record_uid(values)
        if uid is None:
            raise ValueError(f"Row for {table} needs an integer {UID_FIELD!r} column")
        row = dict(values)
        self._rows.setdefault(table, {})[uid] = row
        return row

    def fetch(self, table: str, uid: int) -> Record | None:
        row = self._rows.get(table, {}).get(uid)
        if row is None or not self._is_visible(table, row):
            return None
        return dict(row)

    def find_localization(self, table: str, uid: int, language: int) -> Record | None:
        pointer_field = self.schema.translation_pointer_field(table)
        language_field = self.schema.language_field(table)
        if pointer_field is None or language_field is None:
            return None

        for _row_uid, row in sorted(self._rows.get(table, {}).items()):
            if (
                as_positive_id(row.get(pointer_field)) == uid
                and as_int(row.get(language_field)) == language
                and self._is_visible(table, row)
            ):
                return dict(row)
        return None

    def _is_visible(self, table: str, row: Mapping[str, object]) -> bool:
        settings = self.schema.table(table)
        return self.visibility.allows(
            deleted=row.get(settings.deleted_field) if settings.deleted_field else None,
            workspace=row.get(settings.workspace_field) if settings.workspace_field else None,
        )


@dataclass(slots=True)
class RecordingCommandExecutor:
    """Executor that keeps a snapshot of every batch it is asked to run."""

    executed: list[CommandBatch] = field(default_factory=list["CommandBatch"])

    def execute(self, batch: CommandBatch) -> None:
        self.executed.append(batch.copy())

    def command_maps(self) -> list[dict[str, dict[int, dict[str, object]]]]:
        return [batch.to_command_map() for batch in self.executed]


if TYPE_CHECKING:
    from l10nchain.domain.ports import CommandExecutor, LocalizationOracle, RecordStore

    _store_check: RecordStore = InMemoryRecordStore()
    _oracle_check: LocalizationOracle = InMemoryRecordStore()
    _executor_check: CommandExecutor = RecordingCommandExecutor()
