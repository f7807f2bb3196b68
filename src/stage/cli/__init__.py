"""CLI interface package for the stage."""

from stage.cli.commands import (
    CommandResult,
    finish_turn,
    get_session_status,
    list_sessions,
    play_session,
    reset_session,
    run_turn,
    show_config,
)

__all__ = [
    "CommandResult",
    "finish_turn",
    "get_session_status",
    "list_sessions",
    "play_session",
    "reset_session",
    "run_turn",
    "show_config",
]
