from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from lensindex.app import index_lens_logs
from lensindex.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {value}")
    return number


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Index Lens social-graph events")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest = subparsers.add_parser("ingest", help="Reconcile and index Lens hub logs")
    ingest.add_argument(
        "--logs",
        type=Path,
        required=True,
        help="JSON-lines file with raw Lens hub log records",
    )
    ingest.add_argument(
        "--batch-size",
        type=_positive_int,
        default=None,
        help="Number of log records per reconciliation batch (defaults to config)",
    )
    ingest.add_argument(
        "--skip-index",
        action="store_true",
        help="Only update the database, do not fetch metadata or push to Sepana",
    )
    return parser.parse_args(list(argv))


def _run_ingest(args: argparse.Namespace) -> None:
    result = index_lens_logs(
        logs_path=args.logs,
        batch_size=args.batch_size,
        skip_index=args.skip_index,
    )
    print(  # noqa: T201
        f"Processed {result.batches} batches: events={result.events}, "
        f"dropped={result.dropped}, new_entities={result.created}, indexed={result.indexed}"
    )


_COMMANDS: dict[str, Callable[[argparse.Namespace], None]] = {
    "ingest": _run_ingest,
}


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "ingest" and not args.logs.is_file():
        print(f"Error: log file not found: {args.logs}", file=sys.stderr)  # noqa: T201
        sys.exit(2)

    try:
        _COMMANDS[args.command](args)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)  # noqa: T201
        sys.exit(2)
    except Exception as exc:
        log.exception("Indexing run failed")
        print(f"Error: {exc}", file=sys.stderr)  # noqa: T201
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")  # noqa: T201
    sys.exit(0)


if __name__ == "__main__":
    main()
