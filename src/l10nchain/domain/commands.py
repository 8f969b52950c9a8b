"""Localization commands and the batch that accumulates them.

A batch maps a record key to its pending commands, one per kind. The
resolver builds it incrementally; the caller executes whatever is left when
resolution returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, ClassVar, Final

from .model import RecordKey

if TYPE_CHECKING:
    from collections.abc import Iterator

LOCALIZE: Final[str] = "localize"
INLINE_LOCALIZE_SYNCHRONIZE: Final[str] = "inlineLocalizeSynchronize"


@dataclass(frozen=True, slots=True)
class LocalizeCommand:
    """Translate exactly this record into ``language``."""

    name: ClassVar[str] = LOCALIZE

    language: int

    def to_payload(self) -> dict[str, object]:
        return {LOCALIZE: self.language}


@dataclass(slots=True)
class InlineSynchronizeCommand:
    """Translate the children listed in ``ids`` through the parent's ``field``.

    The command targets the *localized* parent row. ``ids`` keeps the order in
    which children were encountered.
    """

    name: ClassVar[str] = INLINE_LOCALIZE_SYNCHRONIZE

    field: str
    language: int
    ids: list[int] = field(default_factory=list[int])

    def append(self, uid: int) -> None:
        if uid not in self.ids:
            self.ids.append(uid)

    def to_payload(self) -> dict[str, object]:
        return {
            INLINE_LOCALIZE_SYNCHRONIZE: {
                "field": self.field,
                "language": self.language,
                "action": LOCALIZE,
                "ids": list(self.ids),
            }
        }


type Command = LocalizeCommand | InlineSynchronizeCommand


@dataclass(slots=True)
class CommandBatch:
    """Insertion-ordered ``RecordKey -> {command name: Command}`` mapping.

    A record carries at most one ``localize`` and at most one inline
    synchronization. Both can be pending for the same record.
    """

    _entries: dict[RecordKey, dict[str, Command]] = field(
        default_factory=dict["RecordKey", "dict[str, Command]"], repr=False
    )

    @classmethod
    def single(cls, key: RecordKey, command: Command) -> CommandBatch:
        batch = cls()
        batch.put(key, command)
        return batch

    def localization(self, key: RecordKey) -> LocalizeCommand | None:
        command = self._entries.get(key, {}).get(LOCALIZE)
        return command if isinstance(command, LocalizeCommand) else None

    def synchronization(self, key: RecordKey) -> InlineSynchronizeCommand | None:
        command = self._entries.get(key, {}).get(INLINE_LOCALIZE_SYNCHRONIZE)
        return command if isinstance(command, InlineSynchronizeCommand) else None

    def commands_for(self, key: RecordKey) -> tuple[Command, ...]:
        return tuple(self._entries.get(key, {}).values())

    def put(self, key: RecordKey, command: Command) -> Command | None:
        """Install ``command`` at ``key``; return the same-kind command it replaced."""

        entry = self._entries.setdefault(key, {})
        previous = entry.get(command.name)
        entry[command.name] = command
        return previous

    def pop(self, key: RecordKey, kind: type[Command]) -> Command | None:
        """Remove the ``kind`` command at ``key``; the key goes once nothing is left."""

        entry = self._entries.get(key)
        if entry is None:
            return None
        command = entry.pop(kind.name, None)
        if not entry:
            del self._entries[key]
        return command

    def copy(self) -> CommandBatch:
        """Return a batch whose commands no longer share state with this one."""

        duplicate = CommandBatch()
        for key, commands in self.items():
            for command in commands:
                if isinstance(command, InlineSynchronizeCommand):
                    command = replace(command, ids=list(command.ids))  # noqa: PLW2901
                duplicate.put(key, command)
        return duplicate

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[RecordKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> Iterator[tuple[RecordKey, tuple[Command, ...]]]:
        for key, entry in self._entries.items():
            yield key, tuple(entry.values())

    def to_command_map(self) -> dict[str, dict[int, dict[str, object]]]:
        """Render as ``{table: {uid: {command name: payload}}}``."""

        command_map: dict[str, dict[int, dict[str, object]]] = {}
        for key, commands in self.items():
            payload: dict[str, object] = {}
            for command in commands:
                payload.update(command.to_payload())
            command_map.setdefault(key.table, {})[key.uid] = payload
        return command_map
