"""Combined-View Orchestrator — statistics, bar chart, and pie chart from one pinned snapshot.

Invariants:
    - The snapshot is filtered ONCE; all three aggregations read the same tuple
    - All three run concurrently and are joined before merging
    - Any failure fails the whole view with AggregationFailureError naming the
      failed sub-aggregation(s) — never a partially merged result
    - No retries: aggregations are pure, a retry would reproduce the fault
    - Same snapshot + month always yields an identical CombinedView

Design Decisions:
    - asyncio.to_thread per aggregation: keeps the event loop free while
      large months are aggregated (ADR: no fan-out to sibling HTTP endpoints,
      which could each observe a different dataset version)
    - gather(return_exceptions=True): collect every failure, not just the first
"""

import asyncio
import logging
from typing import Callable

from salescope.core.aggregate_categories import compute_category_breakdown
from salescope.core.aggregate_price_histogram import compute_price_histogram
from salescope.core.aggregate_statistics import compute_statistics
from salescope.core.domain_types import CombinedView, SubAggregation, Transaction
from salescope.core.errors import AggregationFailureError, ErrorContext
from salescope.core.filter_predicates import apply_predicate, build_predicate
from salescope.core.transaction_snapshot import TransactionSnapshot

logger = logging.getLogger(__name__)

AGGREGATORS: dict[SubAggregation, Callable[[tuple[Transaction, ...]], object]] = {
    SubAggregation.STATISTICS: compute_statistics,
    SubAggregation.BAR_CHART: compute_price_histogram,
    SubAggregation.PIE_CHART: compute_category_breakdown,
}


async def build_combined_view(
    snapshot: TransactionSnapshot, month: int,
) -> CombinedView:
    """Run the three aggregations over `month` of the pinned snapshot."""
    filtered = tuple(
        apply_predicate(snapshot.transactions, build_predicate(month=month)),
    )
    names = list(AGGREGATORS)
    results = await asyncio.gather(
        *(asyncio.to_thread(AGGREGATORS[name], filtered) for name in names),
        return_exceptions=True,
    )

    failures = [
        (name, result) for name, result in zip(names, results)
        if isinstance(result, BaseException)
    ]
    if failures:
        failed = [name.value for name, _ in failures]
        for name, exc in failures:
            logger.error(
                f"Sub-aggregation {name.value} failed: {exc}",
                exc_info=exc,
                extra={
                    "month": month, "snapshot_version": snapshot.version,
                    "failed": name.value,
                },
            )
        raise AggregationFailureError(
            failed,
            ErrorContext(month=month, snapshot_version=snapshot.version),
        ) from failures[0][1]

    by_name = dict(zip(names, results))
    return CombinedView(
        statistics=by_name[SubAggregation.STATISTICS],
        bar_chart=by_name[SubAggregation.BAR_CHART],
        pie_chart=by_name[SubAggregation.PIE_CHART],
    )
