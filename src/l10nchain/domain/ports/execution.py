"""Port for executing localization commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from l10nchain.domain.commands import CommandBatch


@runtime_checkable
class CommandExecutor(Protocol):
    """Synchronously execute a batch against the localization engine.

    Once ``execute`` returns, the entries are committed. Failures propagate
    to the caller; nothing is retried or rolled back.
    """

    def execute(self, batch: CommandBatch) -> None: ...
