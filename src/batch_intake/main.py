#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import re
import sys
from datetime import UTC, datetime
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from batch_intake.app import register_batch_received
from batch_intake.config import configure_logging, get_repository_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

_ROUND_TRIP_NUMBER = re.compile(r"[+-]?[0-9]+")

ARGUMENT_NAMES = (
    "batch_id",
    "round_trip",
    "agent",
    "repository_url",
    "username",
    "password",
    "identifier_url",
)

USAGE = """\
Not the right amount of arguments
Receives the following arguments (in this order) to register a received batch roundtrip:
Batch ID, roundtrip number, agent name, URL to the event repository, repository username,
repository password, URL to the identifier (PID) generator."""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="batch-intake",
        description="Register a received batch roundtrip and stop the roundtrips it supersedes",
        add_help=False,
    )
    parser.add_argument("batch_id", help="Batch identifier")
    parser.add_argument("round_trip", help="Roundtrip number (positive integer)")
    parser.add_argument("agent", help="Agent recorded on every event")
    parser.add_argument("repository_url", help="Event repository endpoint or database URL")
    parser.add_argument("username", help="Repository username")
    parser.add_argument("password", help="Repository password")
    parser.add_argument("identifier_url", help="Identifier (PID) generator endpoint")
    return parser


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    # "--" keeps values such as passwords starting with "-" positional
    return _build_parser().parse_args(["--", *argv])


def _parse_round_trip_number(value: str) -> int:
    if not _ROUND_TRIP_NUMBER.fullmatch(value):
        raise ValueError(f"Roundtrip number is not an integer: {value!r}")
    number = int(value)
    if number < 1:
        raise ValueError(f"Roundtrip number must be positive, got {number}")
    return number


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    log.info("Entered main")
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    if len(args_list) != len(ARGUMENT_NAMES):
        print(USAGE)
        sys.exit(1)

    now = datetime.now(UTC)
    try:
        parsed_args = _parse_args(args_list)
        round_trip_number = _parse_round_trip_number(parsed_args.round_trip)
        config = get_repository_config(
            endpoint_url=parsed_args.repository_url,
            username=parsed_args.username,
            password=parsed_args.password,
            identifier_service_url=parsed_args.identifier_url,
        )
        register_batch_received(
            batch_id=parsed_args.batch_id,
            round_trip_number=round_trip_number,
            agent=parsed_args.agent,
            config=config,
            now=now,
        )
    except Exception as exc:
        print(f"Failed adding event to batch, due to: {exc}", file=sys.stderr)
        log.exception("Caught exception")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(1)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
