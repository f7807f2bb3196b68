"""Rock-paper-scissors stage: play detection, outcomes and message rewriting."""

from stage.detection import PlayDetector, replace_tags
from stage.domain import (
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
from stage.engine import StageEngine
from stage.outcome import OutcomeEngine, TurnResult, format_record, judge, scoreboard_note
from stage.rewriter import MessageRewriter
from stage.stage import RpsStage
from stage.storage import SnapshotStore, StoredSession

__all__ = [
    "PlayDetector",
    "replace_tags",
    "ChatMessage",
    "LoadResult",
    "Participants",
    "Play",
    "SessionState",
    "SnapshotError",
    "StageResponse",
    "TurnOutcome",
    "TurnRecord",
    "StageEngine",
    "OutcomeEngine",
    "TurnResult",
    "format_record",
    "judge",
    "scoreboard_note",
    "MessageRewriter",
    "RpsStage",
    "SnapshotStore",
    "StoredSession",
]
