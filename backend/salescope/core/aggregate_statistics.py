"""Statistics Aggregator — sales totals for a filtered transaction sequence.

Invariants:
    - total_sold_items + total_not_sold_items == len(input)
    - Never raises on empty input — returns the zero-valued summary
"""

from decimal import Decimal
from typing import Sequence

from salescope.core.domain_types import StatisticsSummary, Transaction


def compute_statistics(transactions: Sequence[Transaction]) -> StatisticsSummary:
    """Sum prices and count sold / not-sold items. Pure, no IO."""
    total = sum((t.price for t in transactions), Decimal("0"))
    sold = sum(1 for t in transactions if t.sold)
    return StatisticsSummary(
        total_sales_amount=total,
        total_sold_items=sold,
        total_not_sold_items=len(transactions) - sold,
    )
