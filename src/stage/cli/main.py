"""Main entry point for the rock-paper-scissors stage CLI.

Usage:
    rps-stage config
    rps-stage turn --session <id> "<user message>"
    rps-stage respond --session <id> "<generated reply>"
    rps-stage play --session <id>
    rps-stage status --session <id>
    rps-stage sessions
    rps-stage reset --session <id>
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from config import ConfigLoader
from stage.cli.commands import (
    finish_turn,
    get_session_status,
    list_sessions,
    play_session,
    reset_session,
    run_turn,
    show_config,
)
from stage.cli.formatters import JsonFormatter, TextFormatter, get_formatter
from stage.domain.entities import Participants
from stage.engine import DEFAULT_CHARACTER_ID, DEFAULT_USER_ID, StageEngine


def setup_logging(verbose: bool = False, level: str = "WARNING", quiet: Optional[List[str]] = None) -> None:
    root_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=root_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    for noisy_logger in quiet or ["httpx", "httpcore"]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rps-stage",
        description="Rock-paper-scissors narrative stage for role-play chats",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--config-dir",
        help="Directory holding stage.yaml and models.yaml",
    )
    parser.add_argument(
        "--user", "-u",
        default="User",
        help="Display name substituted for {{user}} (default: User)",
    )
    parser.add_argument(
        "--char", "-c",
        default="",
        help="Display name substituted for {{char}}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("config", help="Show the loaded configuration")

    turn_parser = subparsers.add_parser(
        "turn",
        help="Run detection and outcome for one user message",
    )
    turn_parser.add_argument("--session", "-s", required=True, help="Session ID")
    turn_parser.add_argument("content", help="User message text")

    respond_parser = subparsers.add_parser(
        "respond",
        help="Sanitize a generated reply and report the record",
    )
    respond_parser.add_argument("--session", "-s", required=True, help="Session ID")
    respond_parser.add_argument("content", nargs="?", default=None, help="Generated reply text")

    play_parser = subparsers.add_parser(
        "play",
        help="Play interactively, one message per line",
    )
    play_parser.add_argument("--session", "-s", default="default", help="Session ID (default: default)")

    status_parser = subparsers.add_parser("status", help="Get session record")
    status_parser.add_argument("--session", "-s", required=True, help="Session ID")

    subparsers.add_parser("sessions", help="List stored sessions")

    reset_parser = subparsers.add_parser("reset", help="Delete a session's snapshot and turn log")
    reset_parser.add_argument("--session", "-s", required=True, help="Session ID")

    return parser


class InteractiveCLI:
    def __init__(self, engine: StageEngine, formatter: TextFormatter | JsonFormatter):
        self._engine = engine
        self._formatter = formatter

    def get_input(self) -> str:
        return input("\nYou: ").strip()

    def show_output(self, message: str) -> None:
        print(f"\n{message}")

    async def run_config(self) -> int:
        result = show_config(self._engine)
        print(self._formatter.format_config(result.data or {}))
        return 0

    async def run_turn(self, session_id: str, content: str) -> int:
        result = await run_turn(self._engine, session_id, content)
        print(self._formatter.format_result(result))
        return 0 if result.success else 1

    async def run_respond(self, session_id: str, content: Optional[str]) -> int:
        result = await finish_turn(self._engine, session_id, content)
        print(self._formatter.format_result(result))
        if result.success and result.data and result.data.get("system_message") and isinstance(self._formatter, TextFormatter):
            print(result.data["system_message"])
        return 0 if result.success else 1

    async def run_play(self, session_id: str) -> int:
        result = await play_session(
            self._engine,
            session_id,
            self.get_input,
            self.show_output,
        )
        if not result.success:
            print(self._formatter.format_error(result.message, result.error))
            return 1
        self.show_output(result.message)
        return 0

    async def run_status(self, session_id: str) -> int:
        result = get_session_status(self._engine, session_id)
        if result.success and result.data:
            print(self._formatter.format_status(result.data))
        else:
            print(self._formatter.format_error(result.message, result.error))
        return 0 if result.success else 1

    async def run_sessions(self) -> int:
        result = list_sessions(self._engine)
        print(self._formatter.format_sessions((result.data or {}).get("sessions", [])))
        return 0

    async def run_reset(self, session_id: str) -> int:
        result = reset_session(self._engine, session_id)
        print(self._formatter.format_result(result))
        return 0 if result.success else 1


def build_engine(args: argparse.Namespace) -> StageEngine:
    participants = Participants(
        users={DEFAULT_USER_ID: args.user},
        characters={DEFAULT_CHARACTER_ID: args.char},
    )
    return StageEngine(config_dir=args.config_dir, participants=participants)


async def async_main(args: argparse.Namespace, engine: Optional[StageEngine] = None) -> int:
    formatter = get_formatter(args.json)
    engine = engine or build_engine(args)
    cli = InteractiveCLI(engine, formatter)

    try:
        if args.command == "config":
            return await cli.run_config()

        elif args.command == "turn":
            return await cli.run_turn(args.session, args.content)

        elif args.command == "respond":
            return await cli.run_respond(args.session, args.content)

        elif args.command == "play":
            return await cli.run_play(args.session)

        elif args.command == "status":
            return await cli.run_status(args.session)

        elif args.command == "sessions":
            return await cli.run_sessions()

        elif args.command == "reset":
            return await cli.run_reset(args.session)

        else:
            return 1

    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    finally:
        await engine.close()


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    logging_config = ConfigLoader(args.config_dir).load_stage_config().logging
    setup_logging(args.verbose, logging_config.level, logging_config.quiet_loggers)
    return asyncio.run(async_main(args))


if __name__ == "__main__":
    sys.exit(main())
