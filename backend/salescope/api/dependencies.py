"""Route Dependencies — typed boundary objects built before handlers run.

Invariants:
    - Month path params are resolved here: an invalid name raises
      InvalidMonthError before any aggregation runs
    - Listing params are validated by FastAPI (400 on page < 1, perPage out
      of range) and handed on as one ListingQuery
    - The analytics service is bound to the process snapshot store

Design Decisions:
    - Depends() chain over per-route parsing: one place for defaults/limits
"""

from fastapi import Depends, Query

from salescope.config import get_settings
from salescope.core.domain_types import MonthNumber
from salescope.core.resolve_month import resolve_month
from salescope.core.transaction_snapshot import SnapshotStore
from salescope.infrastructure.seed_client import ResilientSeedClient
from salescope.infrastructure.snapshot_registry import get_snapshot_store
from salescope.schemas.transaction import ListingQuery
from salescope.services.analytics_service import AnalyticsService

_settings = get_settings()


def get_analytics_service(
    store: SnapshotStore = Depends(get_snapshot_store),
) -> AnalyticsService:
    return AnalyticsService(store)


def month_number(month: str) -> MonthNumber:
    """Resolve the {month} path parameter."""
    return resolve_month(month)


def listing_query(
    search: str = Query("", max_length=200),
    page: int = Query(1, ge=1),
    per_page: int = Query(
        _settings.default_per_page, alias="perPage",
        ge=1, le=_settings.max_per_page,
    ),
    month: str | None = Query(None),
) -> ListingQuery:
    return ListingQuery(search=search, page=page, per_page=per_page, month=month)


def get_seed_client() -> ResilientSeedClient:
    settings = get_settings()
    return ResilientSeedClient(
        settings.seed_url,
        max_retries=settings.seed_max_retries,
        base_delay_ms=settings.seed_base_delay_ms,
        max_delay_ms=settings.seed_max_delay_ms,
        timeout_seconds=settings.seed_timeout_seconds,
    )
