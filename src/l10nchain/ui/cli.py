from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from l10nchain.adapters.stream import JsonLinesCommandExecutor
from l10nchain.app import localize_records_and_parents
from l10nchain.config import configure_logging, get_resolver_config
from l10nchain.domain.model import Visibility

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resolve the parent records a record needs before it can be localized"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser(
        "resolve",
        help="Emit localization commands for a record and its required parents",
    )
    resolve.add_argument("--table", type=str, required=True, help="Table of the record")
    resolve.add_argument(
        "--uid",
        type=int,
        action="append",
        required=True,
        help="Uid of a record to localize; repeat to resolve siblings into one batch",
    )
    resolve.add_argument(
        "--language",
        type=int,
        required=True,
        help="Language id to localize into",
    )
    resolve.add_argument(
        "--config",
        type=Path,
        help="Relation configuration file (defaults to $L10NCHAIN_CONFIG)",
    )
    resolve.add_argument(
        "--workspace",
        type=int,
        default=0,
        help="Workspace whose rows are visible besides the live ones (default: %(default)s)",
    )
    resolve.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the pending batch instead of executing it",
    )

    return parser.parse_args(list(argv))


def _validate(args: argparse.Namespace) -> None:
    if any(uid <= 0 for uid in args.uid):
        raise ValueError("--uid must be positive")
    if args.language < 0:
        raise ValueError("--language must be non-negative")
    if args.workspace < 0:
        raise ValueError("--workspace must be non-negative")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        _validate(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    if parsed_args.verbose:
        configure_logging(level=logging.DEBUG, force=True)

    try:
        if parsed_args.command != "resolve":
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
        config = get_resolver_config(path=parsed_args.config)
        result = localize_records_and_parents(
            parsed_args.table,
            parsed_args.uid,
            parsed_args.language,
            config=config,
            executor=JsonLinesCommandExecutor(stream=sys.stdout),
            visibility=Visibility(workspace=parsed_args.workspace),
            execute=not parsed_args.dry_run,
        )
        if parsed_args.dry_run:
            summary = {
                "commands": result.batch.to_command_map(),
                "implicit": result.implicit.to_mapping(),
            }
            sys.stdout.write(json.dumps(summary, separators=(",", ":")) + "\n")
    except Exception:
        log.exception("Fatal error during resolution")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
