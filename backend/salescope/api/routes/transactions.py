"""Transaction Routes — searchable paginated listing and dataset initialization.

Invariants:
    - GET /transactions: search matches title, description, or price text;
      optional month narrows further; out-of-range pages return empty items
      with the correct total
    - GET /transactions/all returns the whole snapshot without paging
    - POST /transactions/initialize replaces the dataset atomically: readers
      see the old snapshot until the new one is published

Design Decisions:
    - Initialization is POST (it mutates), unlike a GET-triggered reseed
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from salescope.api.dependencies import (
    get_analytics_service, get_seed_client, listing_query,
)
from salescope.core.transaction_snapshot import SnapshotStore
from salescope.infrastructure.database import get_db
from salescope.infrastructure.seed_client import ResilientSeedClient
from salescope.infrastructure.snapshot_registry import get_snapshot_store
from salescope.schemas.transaction import (
    ImportResponse, ListingQuery, PageResponse, TransactionResponse,
)
from salescope.services.analytics_service import AnalyticsService
from salescope.services.seed_import import fetch_and_import

router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])


@router.get("", response_model=PageResponse)
async def list_transactions(
    query: ListingQuery = Depends(listing_query),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """List transactions with search and pagination."""
    month = service.resolve_month(query.month) if query.month else None
    page = service.list_transactions(
        search=query.search, page=query.page,
        per_page=query.per_page, month=month,
    )
    return PageResponse.from_domain(page)


@router.get("/all", response_model=list[TransactionResponse])
async def list_all_transactions(
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Every transaction of the current snapshot, in store order."""
    return [TransactionResponse.from_domain(t) for t in service.all_transactions()]


@router.post("/initialize", response_model=ImportResponse)
async def initialize_transactions(
    db: AsyncSession = Depends(get_db),
    client: ResilientSeedClient = Depends(get_seed_client),
    store: SnapshotStore = Depends(get_snapshot_store),
):
    """Fetch the seed dataset and replace all transactions with it."""
    result = await fetch_and_import(db, client, store)
    return ImportResponse(
        inserted=result.inserted, snapshot_version=result.snapshot_version,
    )
