"""Record primitives shared by the resolver, ports and adapters.

Records are plain mappings read from a store; the resolver never owns them.
Identity is the pair of table name and the integer ``uid`` column.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Iterator

UID_FIELD: Final[str] = "uid"

type Record = Mapping[str, object]


class RecordKey(NamedTuple):
    """Identity of one record: table name plus integer uid."""

    table: str
    uid: int

    def __str__(self) -> str:
        return f"{self.table}#{self.uid}"


def as_int(value: object) -> int | None:
    """Coerce an int or numeric string column value; anything else is ``None``."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def as_positive_id(value: object) -> int | None:
    """Interpret ``value`` as a record id, or ``None`` when it cannot be one.

    Database drivers hand back ints, numeric strings or ``None``; zero and
    negative values mean "no record".
    """

    number = as_int(value)
    return number if number is not None and number > 0 else None


def record_uid(record: Record) -> int | None:
    """Return the record's ``uid`` as an int, ``None`` when the column is absent."""

    if UID_FIELD not in record:
        return None
    return as_int(record[UID_FIELD])


@dataclass(slots=True)
class RecordSet:
    """Mutable ``table -> {uid}`` index, insertion ordered.

    Used both for the visited set and for the implicitly localized
    records handed back to the caller.
    """

    _uids_by_table: dict[str, dict[int, None]] = field(
        default_factory=dict["str", "dict[int, None]"], repr=False
    )

    def add(self, key: RecordKey) -> None:
        self._uids_by_table.setdefault(key.table, {})[key.uid] = None

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:  # noqa: PLR2004
            return False
        table, uid = key
        return uid in self._uids_by_table.get(table, {})

    def __iter__(self) -> Iterator[RecordKey]:
        for table, uids in self._uids_by_table.items():
            for uid in uids:
                yield RecordKey(table, uid)

    def __len__(self) -> int:
        return sum(len(uids) for uids in self._uids_by_table.values())

    def uids_for(self, table: str) -> tuple[int, ...]:
        return tuple(self._uids_by_table.get(table, {}))

    def to_mapping(self) -> dict[str, dict[int, bool]]:
        """Render as ``{table: {uid: True}}``, the shape downstream tooling expects."""

        return {
            table: dict.fromkeys(uids, True)
            for table, uids in self._uids_by_table.items()
            if uids
        }


@dataclass(frozen=True, slots=True)
class Visibility:
    """Caller-supplied visibility context handed to store adapters.

    Rows flagged deleted stay hidden unless ``include_deleted`` is set; rows of
    a workspace other than the live one (0) or ``workspace`` are hidden.
    """

    workspace: int = 0
    include_deleted: bool = False

    def allows(self, *, deleted: object = None, workspace: object = None) -> bool:
        if not self.include_deleted and _is_set(deleted):
            return False
        row_workspace = as_int(workspace)
        return row_workspace in (None, 0, self.workspace)


def _is_set(flag: object) -> bool:
    if isinstance(flag, bool):
        return flag
    return as_int(flag) not in (None, 0)
