from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import ValidationError

from mortgage_actions.app import process_actions
from mortgage_actions.config import configure_logging
from mortgage_actions.domain.errors import MalformedActionError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

STDIN_MARKER = "-"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply model-proposed mortgage actions")
    subparsers = parser.add_subparsers(dest="command", required=True)

    apply = subparsers.add_parser("apply", help="Run an action batch against a state snapshot")
    apply.add_argument(
        "--actions",
        type=str,
        required=True,
        help="Path to the actions JSON ('-' reads stdin)",
    )
    apply.add_argument(
        "--state",
        type=str,
        required=True,
        help="Path to the application state JSON",
    )
    apply.add_argument(
        "--no-resolve",
        action="store_true",
        help="Skip address resolution even when a Places API key is configured",
    )
    apply.add_argument(
        "--output",
        type=str,
        help="Write the JSON report to this path instead of stdout",
    )
    apply.add_argument(
        "--verbose",
        action="store_true",
        help="Log pipeline progress at DEBUG level",
    )

    return parser.parse_args(list(argv))


def _read_json(source: str) -> object:
    try:
        text = sys.stdin.read() if source == STDIN_MARKER else Path(source).read_text("utf-8")
    except OSError as exc:
        raise ValueError(f"Cannot read {source}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {source}: {exc}") from exc


def _write_report(report: dict[str, object], output: str | None) -> None:
    text = json.dumps(report, indent=2)
    if output is None:
        sys.stdout.write(text + "\n")
    else:
        Path(output).write_text(text + "\n", "utf-8")
        log.info(f"Wrote report to {output}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(verbose=parsed_args.verbose)

    try:
        if parsed_args.command != "apply":
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
        actions_payload = _read_json(parsed_args.actions)
        state_payload = _read_json(parsed_args.state)
    except ValueError:
        log.exception("CLI input error")
        sys.exit(2)

    try:
        report = process_actions(
            actions_payload,
            state_payload,
            resolve=not parsed_args.no_resolve,
        )
    except (MalformedActionError, ValidationError):
        log.exception("Malformed input payload")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error while applying actions")
        sys.exit(1)

    _write_report(report, parsed_args.output)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
