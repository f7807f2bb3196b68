"""Stage engine for wiring configuration, classifier and storage."""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Optional

from config import ConfigLoader, ModelsConfig, StageConfig
from models import ClassifierRegistry
from stage.domain.entities import (
    ChatMessage,
    Participants,
    SessionState,
    SnapshotError,
    StageResponse,
    TurnRecord,
)
from stage.outcome import OutcomeEngine
from stage.stage import RpsStage
from stage.storage.session_store import SnapshotStore

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "user"
DEFAULT_CHARACTER_ID = "char"


class StageEngine:
    def __init__(
        self,
        config_dir: Optional[Path] = None,
        base_dir: Optional[Path] = None,
        participants: Optional[Participants] = None,
        rng: Optional[random.Random] = None,
    ):
        self._config_loader = ConfigLoader(config_dir)
        self._stage_config: StageConfig = self._config_loader.load_stage_config()
        self._models_config: ModelsConfig = self._config_loader.load_models_config()

        if base_dir is None:
            base_dir = Path(__file__).parent.parent.parent

        self._base_dir = base_dir
        self._registry = ClassifierRegistry(self._models_config)
        self._store = SnapshotStore(config=self._stage_config, base_dir=base_dir)
        self._stage = RpsStage.from_config(
            self._stage_config,
            participants=participants,
            engine=OutcomeEngine(rng),
        )
        self._loaded = False
        logger.info("StageEngine initialized with base_dir=%s", base_dir)

    @property
    def stage_config(self) -> StageConfig:
        return self._stage_config

    @property
    def models_config(self) -> ModelsConfig:
        return self._models_config

    @property
    def registry(self) -> ClassifierRegistry:
        return self._registry

    @property
    def store(self) -> SnapshotStore:
        return self._store

    @property
    def stage(self) -> RpsStage:
        return self._stage

    async def ensure_loaded(self) -> None:
        if self._loaded:
            return
        await self._stage.load(self._registry.get_classifier_client)
        self._loaded = True

    def get_state(self, session_id: str) -> SessionState:
        if not self._store.snapshot_exists(session_id):
            return SessionState.initial()
        try:
            return self._store.load_snapshot(session_id)
        except SnapshotError as exc:
            logger.warning("Snapshot for %s is unreadable, starting over: %s", session_id, exc)
            return SessionState.initial()

    async def run_turn(
        self,
        session_id: str,
        content: str,
        user_id: Optional[str] = DEFAULT_USER_ID,
        character_id: Optional[str] = DEFAULT_CHARACTER_ID,
    ) -> StageResponse:
        await self.ensure_loaded()

        state = self.get_state(session_id)
        message = ChatMessage(
            content=content,
            anonymized_id=user_id,
            prompt_for_id=character_id,
        )
        result = await self._stage.resolve_turn(state, message)
        response = self._stage.prompt_response(result)

        self._store.save_snapshot(session_id, result.state)
        self._store.append_turn(
            TurnRecord(
                session_id=session_id,
                turn_index=self._store.turn_count(session_id),
                outcome=result.outcome,
                user_played=result.state.user_played,
                other_played=result.state.other_played,
                wins=result.state.wins,
                losses=result.state.losses,
                ties=result.state.ties,
            )
        )
        return response

    async def finish_turn(self, session_id: str, content: Optional[str]) -> StageResponse:
        state = self.get_state(session_id)
        response = await self._stage.after_response(
            state, ChatMessage(content=content, is_bot=True)
        )
        self._store.save_snapshot(session_id, response.message_state)
        return response

    def reset_session(self, session_id: str) -> bool:
        return self._store.delete_session(session_id)

    async def close(self) -> None:
        await self._registry.close()
        logger.info("StageEngine closed")
