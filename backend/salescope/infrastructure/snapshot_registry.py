"""Snapshot Registry — process-wide SnapshotStore and its FastAPI dependency.

Invariants:
    - Exactly one SnapshotStore per process once init_snapshot_store() ran
    - get_snapshot_store() raises DataUnavailableError when the store was never
      initialized (configuration fault), never when the dataset is merely empty

Design Decisions:
    - Module-level singleton mirrors db_manager: lifespan owns initialization
      (ADR: single-process uvicorn; each worker holds its own snapshot)
"""

from salescope.core.errors import DataUnavailableError
from salescope.core.transaction_snapshot import SnapshotStore

snapshot_store: SnapshotStore | None = None


def init_snapshot_store() -> SnapshotStore:
    global snapshot_store
    snapshot_store = SnapshotStore()
    return snapshot_store


def get_snapshot_store() -> SnapshotStore:
    """FastAPI dependency for the current snapshot store."""
    if snapshot_store is None:
        raise DataUnavailableError()
    return snapshot_store
