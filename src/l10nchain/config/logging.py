"""Shared logging helpers for l10nchain."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once.

    Defaults to INFO and a terse format suitable for CLI output, since stdout
    is reserved for command output and log records go to stderr. Pass
    ``force=True`` to reconfigure during tests or from the ``--verbose`` flag.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
