"""Port for localization schema introspection."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SchemaIntrospection(Protocol):
    """Answers which columns make a table localizable.

    ``None`` from either method means the table cannot be localized.
    """

    def language_field(self, table: str) -> str | None: ...

    def translation_pointer_field(self, table: str) -> str | None: ...
