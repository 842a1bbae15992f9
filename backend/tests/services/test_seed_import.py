"""Seed import — one-transaction replace, then snapshot publish.

Invariants:
    - Rows are replaced, never appended
    - Snapshot published only after commit; version increments per import
    - Snapshot rebuilt from rows equals the one published at import
    - Invalid records abort the import before the database is touched
"""

from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from salescope.core.errors import SeedSourceError
from salescope.core.transaction_snapshot import SnapshotStore
from salescope.models.transaction import TransactionRecord
from salescope.services.seed_import import (
    fetch_and_import, import_transactions, load_snapshot, validate_records,
)
from tests.factories import seed_payload


async def _row_count(db) -> int:
    return (await db.execute(select(func.count(TransactionRecord.row_id)))).scalar_one()


async def test_import_inserts_rows_and_publishes_snapshot(test_db, store):
    result = await import_transactions(test_db, validate_records(seed_payload()), store)
    assert result.inserted == 3
    assert result.snapshot_version == 1
    assert await _row_count(test_db) == 3
    assert [t.id for t in store.current().transactions] == [1, 2, 3]


async def test_reimport_replaces_rows(test_db, store):
    records = validate_records(seed_payload())
    await import_transactions(test_db, records, store)
    result = await import_transactions(test_db, records[:1], store)
    assert result.snapshot_version == 2
    assert await _row_count(test_db) == 1
    assert len(store.current()) == 1


async def test_loaded_snapshot_equals_imported_snapshot(test_db, test_session_factory, store):
    await import_transactions(test_db, validate_records(seed_payload()), store)
    imported = store.current().transactions

    reloaded_store = SnapshotStore()
    async with test_session_factory() as db:
        snapshot = await load_snapshot(db, reloaded_store)

    assert [t.id for t in snapshot.transactions] == [t.id for t in imported]
    assert [t.price for t in snapshot.transactions] == [t.price for t in imported]
    assert [t.date_of_sale.month for t in snapshot.transactions] == [1, 1, 2]
    assert snapshot.transactions[2].price == Decimal("999.99")


async def test_invalid_record_aborts_before_db(test_db, store):
    payload = seed_payload()
    payload[1]["price"] = -3
    with pytest.raises(SeedSourceError, match="index 1"):
        validate_records(payload)
    assert await _row_count(test_db) == 0
    assert store.current().version == 0


async def test_duplicate_ids_are_a_source_error(test_db, store):
    await import_transactions(test_db, validate_records(seed_payload()), store)
    with pytest.raises(SeedSourceError, match="id 1 at index 3"):
        validate_records(seed_payload() + seed_payload()[:1])
    assert store.current().version == 1
    assert await _row_count(test_db) == 3


async def test_failed_commit_keeps_previous_rows_and_snapshot(test_db, store):
    records = validate_records(seed_payload())
    await import_transactions(test_db, records, store)
    with pytest.raises(IntegrityError):
        await import_transactions(test_db, records + records[:1], store)
    assert store.current().version == 1
    assert await _row_count(test_db) == 3


async def test_fetch_and_import(test_db, store, seed_client):
    result = await fetch_and_import(test_db, seed_client, store)
    assert result.inserted == 3
    assert store.current().version == 1
