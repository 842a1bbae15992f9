"""Transaction Snapshot — immutable, versioned views of the transaction dataset.

Invariants:
    - A published snapshot is never mutated (frozen dataclass over a tuple)
    - Versions increase by exactly 1 per publish; the empty store is version 0
    - publish() builds the next snapshot out of place, then swaps ONE reference:
      readers see either the complete old or the complete new dataset
    - Readers call current() once per query and use only that pinned snapshot

Design Decisions:
    - Lock on the writer side only: publishes are rare (administrative imports),
      and a reference read is atomic, so readers never block
    - Store order of the tuple is the natural listing order
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable

from salescope.core.domain_types import Transaction


@dataclass(frozen=True)
class TransactionSnapshot:
    """One complete version of the dataset, observed consistently by a query."""
    transactions: tuple[Transaction, ...] = ()
    version: int = 0
    loaded_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    @classmethod
    def empty(cls) -> "TransactionSnapshot":
        return cls()

    def __len__(self) -> int:
        return len(self.transactions)


class SnapshotStore:
    """Holds the reference to the current snapshot."""

    def __init__(self, initial: TransactionSnapshot | None = None):
        self._current = (
            initial if initial is not None else TransactionSnapshot.empty()
        )
        self._publish_lock = threading.Lock()

    def current(self) -> TransactionSnapshot:
        """Pin the snapshot a query will read."""
        return self._current

    def publish(self, transactions: Iterable[Transaction]) -> TransactionSnapshot:
        """Publish a new complete dataset as the next version."""
        items = tuple(transactions)
        with self._publish_lock:
            snapshot = TransactionSnapshot(
                transactions=items, version=self._current.version + 1,
            )
            self._current = snapshot
        return snapshot
