from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from cellrecon.app import column_stats, record_new_entity, rewrite_project_file
from cellrecon.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve cells reconciled to new entities")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    mapping = subparsers.add_parser(
        "map",
        help="Record the permanent id assigned to a provisional entity",
    )
    mapping.add_argument("--project", required=True, help="Project the mapping belongs to")
    mapping.add_argument("provisional_id", type=int, help="Record id of the new cell")
    mapping.add_argument("permanent_id", help="Identifier returned by the knowledge base")

    rewrite = subparsers.add_parser(
        "rewrite",
        help="Rewrite cells of a project document against known new entities",
    )
    rewrite.add_argument("--project", required=True, help="Project the mappings belong to")
    rewrite.add_argument("path", type=Path, help="Project JSON document")
    rewrite.add_argument(
        "--revert",
        action="store_true",
        help="Turn matched cells back into new ones",
    )
    rewrite.add_argument(
        "--output",
        type=Path,
        help="Where to write the rewritten document (defaults to overwriting PATH)",
    )

    stats = subparsers.add_parser("stats", help="Show reconciliation statistics per column")
    stats.add_argument("path", type=Path, help="Project JSON document")

    return parser.parse_args(list(argv))


def _validate(args: argparse.Namespace) -> None:
    if args.command == "map" and not args.permanent_id.strip():
        raise ValueError("Permanent id must not be blank")
    if args.command in {"rewrite", "stats"} and not args.path.is_file():
        raise ValueError(f"Project document not found: {args.path}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        parsed_args = _parse_args(argv if argv is not None else sys.argv[1:])
        configure_logging(level=logging.DEBUG if parsed_args.verbose else None)
        _validate(parsed_args)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "map":
            record_new_entity(
                project=parsed_args.project,
                provisional_id=parsed_args.provisional_id,
                permanent_id=parsed_args.permanent_id.strip(),
            )
        elif parsed_args.command == "rewrite":
            result = rewrite_project_file(
                parsed_args.path,
                project=parsed_args.project,
                reverse=parsed_args.revert,
                output=parsed_args.output,
            )
            log.info(
                "Rewrite finished: cells=%s, columns=%s",
                result.rewritten_cells,
                sorted(result.affected_columns),
            )
        elif parsed_args.command == "stats":
            for name, stats in column_stats(parsed_args.path).items():
                log.info(
                    "%s: non_blank=%s, matched=%s, new=%s, none=%s",
                    name,
                    stats.non_blanks,
                    stats.matched_topics,
                    stats.new_topics,
                    stats.none_topics,
                )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during reconciliation")
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
