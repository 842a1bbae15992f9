"""Analytics Service — the logical query interface over the snapshot store.

Invariants:
    - Every query calls store.current() exactly once and reads only that snapshot
    - Month names are resolved before any filtering or aggregation runs
    - An empty dataset yields zero-valued results, never an error

Design Decisions:
    - Month arguments are already-resolved numbers; resolve_month is exposed
      here so routes validate at the boundary (ADR: reject early)
    - Stateless apart from the store reference: one instance per request is cheap
"""

import logging

from salescope.core.aggregate_categories import compute_category_breakdown
from salescope.core.aggregate_price_histogram import compute_price_histogram
from salescope.core.aggregate_statistics import compute_statistics
from salescope.core.domain_types import (
    CategoryCount, CombinedView, MonthNumber, Page, PriceBucket,
    StatisticsSummary, Transaction,
)
from salescope.core.filter_predicates import apply_predicate, build_predicate
from salescope.core.paginate import paginate
from salescope.core.resolve_month import resolve_month
from salescope.core.transaction_snapshot import SnapshotStore, TransactionSnapshot
from salescope.services.combined_view import build_combined_view

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Month-scoped analytics and transaction listing."""

    def __init__(self, store: SnapshotStore):
        self.store = store

    @staticmethod
    def resolve_month(name: str) -> MonthNumber:
        return resolve_month(name)

    def filter_by_month(self, month: int) -> list[Transaction]:
        snapshot = self.store.current()
        matches = self._month_matches(snapshot, month)
        self._log("filter_by_month", snapshot, month, len(matches))
        return matches

    def all_transactions(self) -> list[Transaction]:
        """Every transaction in store order, unfiltered and unpaged."""
        snapshot = self.store.current()
        items = list(snapshot.transactions)
        self._log("all_transactions", snapshot, None, len(items))
        return items

    def list_transactions(
        self,
        search: str = "",
        page: int = 1,
        per_page: int = 10,
        month: int | None = None,
    ) -> Page:
        """Search, then page. No month constraint unless one is given."""
        snapshot = self.store.current()
        matches = apply_predicate(
            snapshot.transactions, build_predicate(month=month, search=search),
        )
        self._log("list_transactions", snapshot, month, len(matches))
        return paginate(matches, page, per_page)

    def statistics(self, month: int) -> StatisticsSummary:
        snapshot = self.store.current()
        matches = self._month_matches(snapshot, month)
        self._log("statistics", snapshot, month, len(matches))
        return compute_statistics(matches)

    def histogram(self, month: int) -> tuple[PriceBucket, ...]:
        snapshot = self.store.current()
        matches = self._month_matches(snapshot, month)
        self._log("histogram", snapshot, month, len(matches))
        return compute_price_histogram(matches)

    def category_breakdown(self, month: int) -> tuple[CategoryCount, ...]:
        snapshot = self.store.current()
        matches = self._month_matches(snapshot, month)
        self._log("category_breakdown", snapshot, month, len(matches))
        return compute_category_breakdown(matches)

    async def combined_view(self, month: int) -> CombinedView:
        snapshot = self.store.current()
        view = await build_combined_view(snapshot, month)
        self._log(
            "combined_view", snapshot, month,
            view.statistics.total_sold_items + view.statistics.total_not_sold_items,
        )
        return view

    @staticmethod
    def _month_matches(
        snapshot: TransactionSnapshot, month: int,
    ) -> list[Transaction]:
        return apply_predicate(snapshot.transactions, build_predicate(month=month))

    @staticmethod
    def _log(
        query: str, snapshot: TransactionSnapshot,
        month: int | None, match_count: int,
    ) -> None:
        logger.info(
            f"Analytics query {query}",
            extra={
                "month": month,
                "snapshot_version": snapshot.version,
                "match_count": match_count,
            },
        )
