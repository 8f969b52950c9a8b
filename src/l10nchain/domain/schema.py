"""Static localization schema: which columns make a table localizable."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class TableLocalization:
    """Localization-related columns of one table.

    ``language_field`` holds the language id of a row, and
    ``translation_pointer_field`` points a translated row at its
    default-language source. Either one missing makes the table opaque to the
    resolver. ``deleted_field`` and ``workspace_field`` only drive store-side
    visibility filtering.
    """

    language_field: str | None = None
    translation_pointer_field: str | None = None
    deleted_field: str | None = None
    workspace_field: str | None = None

    @property
    def localizable(self) -> bool:
        return bool(self.language_field) and bool(self.translation_pointer_field)


@dataclass(frozen=True, slots=True)
class LocalizationSchema:
    """Schema introspection backed by an immutable table mapping."""

    tables: Mapping[str, TableLocalization] = field(
        default_factory=dict["str", "TableLocalization"]
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "tables", MappingProxyType(dict(self.tables)))

    def table(self, table: str) -> TableLocalization:
        return self.tables.get(table, TableLocalization())

    def language_field(self, table: str) -> str | None:
        return self.table(table).language_field or None

    def translation_pointer_field(self, table: str) -> str | None:
        return self.table(table).translation_pointer_field or None
