"""Seed Import — replaces the persisted dataset and publishes the matching snapshot.

Invariants:
    - Every record is validated (SeedRecord) before the database is touched;
      duplicate ids are a source error, not a constraint violation
    - Delete + insert happen in ONE transaction: a failed import leaves the old
      rows and the old snapshot in place
    - The new snapshot is published only after the commit succeeds
    - Snapshot order == payload order == row_id order

Design Decisions:
    - Snapshot built from validated records, not re-read from the DB: the
      values are identical after SeedRecord normalization, and a re-read
      would double the import cost
    - load_snapshot() rebuilds the snapshot from rows on startup
"""

import logging
from dataclasses import dataclass

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from salescope.core.errors import SeedSourceError
from salescope.core.transaction_snapshot import SnapshotStore, TransactionSnapshot
from salescope.infrastructure.seed_client import ResilientSeedClient
from salescope.models.transaction import TransactionRecord
from salescope.schemas.transaction import SeedRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportResult:
    inserted: int
    snapshot_version: int


def validate_records(payload: list[dict]) -> list[SeedRecord]:
    """Validate raw seed dicts; the whole import fails on the first bad record."""
    records = []
    seen_ids: set[int] = set()
    for index, raw in enumerate(payload):
        try:
            record = SeedRecord.model_validate(raw)
        except ValidationError as e:
            raise SeedSourceError(
                f"Invalid seed record at index {index}: {e.error_count()} error(s)",
            ) from e
        if record.id in seen_ids:
            raise SeedSourceError(
                f"Duplicate seed record id {record.id} at index {index}",
            )
        seen_ids.add(record.id)
        records.append(record)
    return records


async def import_transactions(
    db: AsyncSession, records: list[SeedRecord], store: SnapshotStore,
) -> ImportResult:
    """Replace all rows with `records`, then publish them as a new snapshot."""
    try:
        await db.execute(delete(TransactionRecord))
        db.add_all([
            TransactionRecord(**r.model_dump(by_alias=False)) for r in records
        ])
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    snapshot = store.publish(r.to_domain() for r in records)
    logger.info(
        f"Imported {len(records)} transactions",
        extra={"inserted": len(records), "snapshot_version": snapshot.version},
    )
    return ImportResult(inserted=len(records), snapshot_version=snapshot.version)


async def fetch_and_import(
    db: AsyncSession, client: ResilientSeedClient, store: SnapshotStore,
) -> ImportResult:
    """Download the seed dataset and import it."""
    payload = await client.fetch_records()
    records = validate_records(payload)
    return await import_transactions(db, records, store)


async def load_snapshot(db: AsyncSession, store: SnapshotStore) -> TransactionSnapshot:
    """Publish the persisted rows, in store order, as the current snapshot."""
    result = await db.execute(
        select(TransactionRecord).order_by(TransactionRecord.row_id),
    )
    rows = result.scalars().all()
    snapshot = store.publish(row.to_domain() for row in rows)
    logger.info(
        f"Loaded {len(snapshot)} transactions from database",
        extra={"snapshot_version": snapshot.version},
    )
    return snapshot
