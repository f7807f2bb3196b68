"""Storage module for session snapshots."""

from stage.storage.session_store import SnapshotStore, StoredSession

__all__ = [
    "SnapshotStore",
    "StoredSession",
]
