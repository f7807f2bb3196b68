"""Domain models for the stage."""

from stage.domain.entities import (
    ChatMessage,
    LoadResult,
    Participants,
    Play,
    SessionState,
    SnapshotError,
    StageResponse,
    TurnOutcome,
    TurnRecord,
)

__all__ = [
    "ChatMessage",
    "LoadResult",
    "Participants",
    "Play",
    "SessionState",
    "SnapshotError",
    "StageResponse",
    "TurnOutcome",
    "TurnRecord",
]
