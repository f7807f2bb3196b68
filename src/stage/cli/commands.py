"""CLI command handlers for the stage.

Each command wraps one engine operation in a ``CommandResult`` so the
entry point and the tests can treat failures uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from stage.engine import StageEngine
from stage.outcome import format_record

EXIT_COMMANDS = ("quit", "exit", "/quit", "/exit")


@dataclass
class CommandResult:
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


def show_config(engine: StageEngine) -> CommandResult:
    stage_config = engine.stage_config
    models_config = engine.models_config
    active = models_config.get_active_config()

    return CommandResult(
        success=True,
        message="Configuration loaded.",
        data={
            "provider": models_config.provider,
            "base_url": active.base_url,
            "timeout": active.timeout,
            "candidate_labels": stage_config.detection.candidate_labels,
            "hypothesis_template": stage_config.detection.hypothesis_template,
            "multi_label": stage_config.detection.multi_label,
            "marker": stage_config.rewriter.marker,
            "separator": stage_config.rewriter.separator,
            "storage_dir": str(engine.store.storage_dir),
        },
    )


async def run_turn(engine: StageEngine, session_id: str, content: str) -> CommandResult:
    try:
        response = await engine.run_turn(session_id, content)
    except (ValueError, OSError) as e:
        return CommandResult(
            success=False,
            message="Failed to run turn.",
            error=str(e),
        )

    state = response.message_state
    return CommandResult(
        success=True,
        message=response.stage_directions or "",
        data={
            "session_id": session_id,
            "stage_directions": response.stage_directions,
            "user_played": state.user_played.value if state.user_played else None,
            "other_played": state.other_played.value if state.other_played else None,
            "state": state.to_snapshot(),
        },
    )


async def finish_turn(
    engine: StageEngine,
    session_id: str,
    content: Optional[str],
) -> CommandResult:
    try:
        response = await engine.finish_turn(session_id, content)
    except (ValueError, OSError) as e:
        return CommandResult(
            success=False,
            message="Failed to finish turn.",
            error=str(e),
        )

    return CommandResult(
        success=True,
        message=response.modified_message or "",
        data={
            "session_id": session_id,
            "modified_message": response.modified_message,
            "system_message": response.system_message,
            "state": response.message_state.to_snapshot(),
        },
    )


def get_session_status(engine: StageEngine, session_id: str) -> CommandResult:
    try:
        stored = engine.store.load_session(session_id)
    except ValueError as e:
        return CommandResult(
            success=False,
            message=f"Session not found: {session_id}",
            error=str(e),
        )

    state = stored.state
    return CommandResult(
        success=True,
        message="Session status retrieved.",
        data={
            "session_id": session_id,
            "record": format_record(state),
            "wins": state.wins,
            "losses": state.losses,
            "ties": state.ties,
            "turn_count": engine.store.turn_count(session_id),
            "updated_at": stored.updated_at.isoformat(),
        },
    )


def list_sessions(engine: StageEngine) -> CommandResult:
    sessions = [
        {
            "session_id": s.session_id,
            "record": format_record(s.state),
            "updated_at": s.updated_at.isoformat(),
        }
        for s in engine.store.list_sessions()
    ]
    return CommandResult(
        success=True,
        message=f"Found {len(sessions)} session(s).",
        data={"sessions": sessions},
    )


def reset_session(engine: StageEngine, session_id: str) -> CommandResult:
    try:
        deleted = engine.reset_session(session_id)
    except ValueError as e:
        return CommandResult(
            success=False,
            message=f"Failed to reset session: {session_id}",
            error=str(e),
        )

    if deleted:
        return CommandResult(success=True, message=f"Session reset: {session_id}")
    return CommandResult(
        success=False,
        message=f"Session not found: {session_id}",
        error="not found",
    )


async def play_session(
    engine: StageEngine,
    session_id: str,
    input_func: Callable[[], str],
    output_func: Callable[[str], None],
) -> CommandResult:
    turns = 0
    while True:
        try:
            content = input_func()
        except EOFError:
            break

        if content.strip().lower() in EXIT_COMMANDS:
            break
        if not content.strip():
            continue

        turn = await run_turn(engine, session_id, content)
        if not turn.success:
            return turn
        output_func(turn.message)

        finished = await finish_turn(engine, session_id, None)
        if finished.data and finished.data.get("system_message"):
            output_func(finished.data["system_message"])
        turns += 1

    return CommandResult(
        success=True,
        message=f"Played {turns} turn(s).",
        data={"session_id": session_id, "turns": turns},
    )
