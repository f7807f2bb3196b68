"""Domain entities for the rock-paper-scissors stage.

This module defines the core domain entities:
- Play: one of the three throws
- SessionState: the per-session snapshot carried from turn to turn
- TurnOutcome: which narrative branch a turn resolved into
- ChatMessage / StageResponse: the host-facing turn contract
- Participants: display names for users and characters
- TurnRecord: one persisted line of the turn log
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator


class SnapshotError(ValueError):
    """Raised when a persisted snapshot cannot be turned back into state."""


class Play(str, Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"

    def beats(self, other: "Play") -> bool:
        return BEATS[self] is other


BEATS: Dict[Play, Play] = {
    Play.ROCK: Play.SCISSORS,
    Play.SCISSORS: Play.PAPER,
    Play.PAPER: Play.ROCK,
}


class TurnOutcome(str, Enum):
    WIN = "win"
    LOSS = "loss"
    TIE = "tie"
    NONE = "none"


class SessionState(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    ties: int = Field(default=0, ge=0)
    user_played: Optional[Play] = Field(default=None, alias="userPlayed")
    other_played: Optional[Play] = Field(default=None, alias="otherPlayed")

    @field_validator("wins", "losses", "ties", mode="before")
    @classmethod
    def missing_counter_is_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("user_played", "other_played", mode="before")
    @classmethod
    def normalize_play(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @model_validator(mode="after")
    def plays_come_in_pairs(self) -> "SessionState":
        if (self.user_played is None) != (self.other_played is None):
            raise ValueError("userPlayed and otherPlayed must be set together")
        return self

    @classmethod
    def initial(cls) -> "SessionState":
        return cls()

    @classmethod
    def from_snapshot(cls, data: Any) -> "SessionState":
        if isinstance(data, SessionState):
            return data
        if isinstance(data, (str, bytes)):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as exc:
                raise SnapshotError(f"Snapshot is not valid JSON: {exc}") from exc
        if data is None:
            return cls.initial()
        if not isinstance(data, dict):
            raise SnapshotError(f"Snapshot must be an object, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise SnapshotError(f"Malformed snapshot: {exc}") from exc

    def to_snapshot(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @property
    def total_games(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def has_play(self) -> bool:
        return self.user_played is not None

    def without_plays(self) -> "SessionState":
        return self.model_copy(update={"user_played": None, "other_played": None})


class ChatMessage(BaseModel):
    content: Optional[str] = None
    anonymized_id: Optional[str] = None
    prompt_for_id: Optional[str] = None
    is_bot: bool = False


class Participants(BaseModel):
    users: Dict[str, str] = Field(default_factory=dict)
    characters: Dict[str, str] = Field(default_factory=dict)

    def user_name(self, user_id: Optional[str]) -> str:
        if not user_id:
            return ""
        return self.users.get(user_id, "")

    def character_name(self, character_id: Optional[str]) -> str:
        if not character_id:
            return ""
        return self.characters.get(character_id, "")

    def replacements_for(self, message: ChatMessage) -> Dict[str, str]:
        return {
            "user": self.user_name(message.anonymized_id),
            "char": self.character_name(message.prompt_for_id),
        }


class StageResponse(BaseModel):
    stage_directions: Optional[str] = None
    message_state: SessionState
    modified_message: Optional[str] = None
    system_message: Optional[str] = None
    error: Optional[str] = None


class LoadResult(BaseModel):
    success: bool = True
    error: Optional[str] = None


class TurnRecord(BaseModel):
    session_id: str
    turn_index: int
    timestamp: datetime = Field(default_factory=datetime.now)
    outcome: TurnOutcome
    user_played: Optional[Play] = None
    other_played: Optional[Play] = None
    wins: int = 0
    losses: int = 0
    ties: int = 0
