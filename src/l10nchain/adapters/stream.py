"""Executor that writes command maps as JSON lines."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from l10nchain.domain.commands import CommandBatch

log = getLogger(__name__)


def _default_stream() -> TextIO:
    return sys.stdout


@dataclass(slots=True)
class JsonLinesCommandExecutor:
    """Emit each executed batch as one ``{"commands": ...}`` JSON line.

    The stream is the hand-off to whatever engine applies the commands, so
    the line order is the execution order.
    """

    stream: TextIO = field(default_factory=_default_stream)
    executed: int = 0

    def execute(self, batch: CommandBatch) -> None:
        if not len(batch):
            return
        line = json.dumps({"commands": batch.to_command_map()}, separators=(",", ":"))
        self.stream.write(line + "\n")
        self.stream.flush()
        self.executed += 1
        log.debug("Wrote batch %s with %s command(s)", self.executed, len(batch))


if TYPE_CHECKING:
    from l10nchain.domain.ports import CommandExecutor

    _executor_check: CommandExecutor = JsonLinesCommandExecutor()
