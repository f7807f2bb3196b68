"""Turn handler binding detection, outcome and rewriting together.

Every handler takes the previous ``SessionState`` and returns the next one
inside a ``StageResponse``; the stage itself keeps no per-session state.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from config.models import StageConfig
from models.base import ClassifierClient
from stage.detection import PlayDetector
from stage.domain.entities import (
    ChatMessage,
    LoadResult,
    Participants,
    SessionState,
    SnapshotError,
    StageResponse,
)
from stage.outcome import OutcomeEngine, TurnResult, scoreboard_note
from stage.rewriter import MessageRewriter

logger = logging.getLogger(__name__)


class RpsStage:
    def __init__(
        self,
        participants: Optional[Participants] = None,
        detector: Optional[PlayDetector] = None,
        engine: Optional[OutcomeEngine] = None,
        rewriter: Optional[MessageRewriter] = None,
    ):
        self._participants = participants or Participants()
        self._detector = detector or PlayDetector()
        self._engine = engine or OutcomeEngine()
        self._rewriter = rewriter or MessageRewriter()

    @classmethod
    def from_config(
        cls,
        config: StageConfig,
        participants: Optional[Participants] = None,
        engine: Optional[OutcomeEngine] = None,
    ) -> "RpsStage":
        return cls(
            participants=participants,
            detector=PlayDetector(config=config.detection),
            engine=engine,
            rewriter=MessageRewriter.from_config(config.rewriter),
        )

    @property
    def participants(self) -> Participants:
        return self._participants

    @property
    def detector(self) -> PlayDetector:
        return self._detector

    async def load(self, client_factory: Callable[[], ClassifierClient]) -> LoadResult:
        try:
            self._detector = self._detector.with_client(client_factory())
        except Exception as exc:
            logger.error("Error connecting to classifier backend: %s", exc)
            self._detector = self._detector.with_client(None)

        logger.info("Finished loading stage.")
        return LoadResult(success=True, error=None)

    def restore_state(
        self,
        snapshot: Any,
        fallback: Optional[SessionState] = None,
    ) -> SessionState:
        try:
            return SessionState.from_snapshot(snapshot)
        except SnapshotError as exc:
            logger.warning("Discarding unreadable snapshot: %s", exc)
            return fallback if fallback is not None else SessionState.initial()

    async def resolve_turn(self, state: SessionState, message: ChatMessage) -> TurnResult:
        user_played = await self._detector.detect(
            message.content,
            self._participants.replacements_for(message),
        )
        return self._engine.resolve(state, user_played)

    @staticmethod
    def prompt_response(result: TurnResult) -> StageResponse:
        return StageResponse(
            stage_directions=result.stage_directions,
            message_state=result.state,
            modified_message=None,
            system_message=None,
            error=None,
        )

    async def before_prompt(self, state: SessionState, message: ChatMessage) -> StageResponse:
        return self.prompt_response(await self.resolve_turn(state, message))

    async def after_response(self, state: SessionState, message: ChatMessage) -> StageResponse:
        return StageResponse(
            stage_directions=None,
            message_state=state,
            modified_message=self._rewriter.rewrite(message.content),
            system_message=scoreboard_note(state),
            error=None,
        )
