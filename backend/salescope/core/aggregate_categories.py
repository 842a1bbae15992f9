"""Category Aggregator — item counts per category present in the input.

Invariants:
    - Grouping is by exact, case-sensitive category string
    - One entry per category present; absent categories are omitted
    - Output ordered by first appearance in store order (stable, no duplicates)
    - Sum of item counts == len(input)
"""

from collections import Counter
from typing import Sequence

from salescope.core.domain_types import CategoryCount, Transaction


def compute_category_breakdown(
    transactions: Sequence[Transaction],
) -> tuple[CategoryCount, ...]:
    """Group by category. Pure, no IO."""
    # Counter keeps insertion order, i.e. first appearance
    counts = Counter(t.category for t in transactions)
    return tuple(
        CategoryCount(category=category, item_count=count)
        for category, count in counts.items()
    )
