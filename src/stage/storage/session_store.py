"""Storage layer for session snapshots and turn logs."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from config import ConfigLoader, StageConfig
from stage.domain.entities import SessionState, SnapshotError, TurnRecord

logger = logging.getLogger(__name__)


class StoredSession(BaseModel):
    session_id: str
    updated_at: datetime = Field(default_factory=datetime.now)
    state: SessionState = Field(default_factory=SessionState.initial)


class SnapshotStore:
    def __init__(
        self,
        config: Optional[StageConfig] = None,
        base_dir: Optional[Path] = None,
    ):
        if config is None:
            loader = ConfigLoader()
            config = loader.load_stage_config()

        self._config = config

        if base_dir is None:
            base_dir = Path(__file__).parent.parent.parent.parent

        self._storage_dir = Path(base_dir) / config.directories.storage_dir
        self._snapshots_dir = self._storage_dir / "snapshots"
        self._turns_dir = self._storage_dir / "turns"

        self._ensure_directories()

    def _ensure_directories(self) -> None:
        self._snapshots_dir.mkdir(parents=True, exist_ok=True)
        self._turns_dir.mkdir(parents=True, exist_ok=True)

    @property
    def storage_dir(self) -> Path:
        return self._storage_dir

    @staticmethod
    def _check_session_id(session_id: str) -> str:
        if not session_id or session_id in (".", "..") or "/" in session_id or "\\" in session_id:
            raise ValueError(f"Invalid session id: {session_id!r}")
        return session_id

    def _snapshot_file(self, session_id: str) -> Path:
        self._check_session_id(session_id)
        return self._snapshots_dir / f"{session_id}.json"

    def _turns_file(self, session_id: str) -> Path:
        self._check_session_id(session_id)
        return self._turns_dir / f"{session_id}.jsonl"

    def save_snapshot(self, session_id: str, state: SessionState) -> None:
        data = {
            "session_id": session_id,
            "updated_at": datetime.now().isoformat(),
            "state": state.to_snapshot(),
        }

        with open(self._snapshot_file(session_id), "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.debug("Saved snapshot %s", session_id)

    def load_raw(self, session_id: str) -> dict:
        snapshot_file = self._snapshot_file(session_id)

        if not snapshot_file.exists():
            raise ValueError(f"Session not found: {session_id}")

        with open(snapshot_file, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise SnapshotError(f"Snapshot file for {session_id} is not valid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise SnapshotError(f"Snapshot file for {session_id} must hold an object")
        return data

    def load_snapshot(self, session_id: str) -> SessionState:
        return SessionState.from_snapshot(self.load_raw(session_id).get("state"))

    def load_session(self, session_id: str) -> StoredSession:
        data = self.load_raw(session_id)
        return StoredSession(
            session_id=data.get("session_id", session_id),
            updated_at=data.get("updated_at") or datetime.now(),
            state=SessionState.from_snapshot(data.get("state")),
        )

    def snapshot_exists(self, session_id: str) -> bool:
        return self._snapshot_file(session_id).exists()

    def delete_session(self, session_id: str) -> bool:
        deleted = False

        for path in (self._snapshot_file(session_id), self._turns_file(session_id)):
            if path.exists():
                path.unlink()
                deleted = True

        if deleted:
            logger.info("Deleted session %s", session_id)

        return deleted

    def list_sessions(self) -> List[StoredSession]:
        sessions = []

        for snapshot_file in sorted(self._snapshots_dir.glob("*.json")):
            try:
                sessions.append(self.load_session(snapshot_file.stem))
            except (ValueError, OSError) as exc:
                logger.error("Failed to load session %s: %s", snapshot_file.stem, exc)

        return sessions

    def append_turn(self, record: TurnRecord) -> None:
        with open(self._turns_file(record.session_id), "a", encoding="utf-8") as f:
            f.write(json.dumps(record.model_dump(mode="json"), ensure_ascii=False) + "\n")

    def get_turns(self, session_id: str) -> List[TurnRecord]:
        turns_file = self._turns_file(session_id)

        if not turns_file.exists():
            return []

        turns = []
        with open(turns_file, "r", encoding="utf-8") as f:
            for line in f:
                if line.strip():
                    turns.append(TurnRecord.model_validate(json.loads(line)))

        return turns

    def turn_count(self, session_id: str) -> int:
        return len(self.get_turns(session_id))
