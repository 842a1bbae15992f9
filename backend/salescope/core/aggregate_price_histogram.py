"""Price Histogram Aggregator — fixed ten-bucket price distribution.

Invariants:
    - Always returns all 10 buckets in declared order, empty ones with count 0
    - Sum of bucket counts == len(input)
    - A price belongs to the bucket with the greatest lower bound <= price,
      so label ranges are inclusive at the top (900 -> "801-900")
    - Negative prices violate the data model and raise ValueError

Design Decisions:
    - bisect over lower bounds instead of per-bucket range checks: fractional
      prices between two labels (100.5) fall to the lower bucket, no gaps
"""

from bisect import bisect_right
from decimal import Decimal
from typing import Sequence

from salescope.core.domain_types import PriceBucket, Transaction

# (label, lower bound) in declared order; the last bucket is open-ended
BUCKETS: tuple[tuple[str, Decimal], ...] = (
    ("0-100", Decimal(0)),
    ("101-200", Decimal(101)),
    ("201-300", Decimal(201)),
    ("301-400", Decimal(301)),
    ("401-500", Decimal(401)),
    ("501-600", Decimal(501)),
    ("601-700", Decimal(601)),
    ("701-800", Decimal(701)),
    ("801-900", Decimal(801)),
    ("901-above", Decimal(901)),
)

_LOWER_BOUNDS: tuple[Decimal, ...] = tuple(lower for _, lower in BUCKETS)


def bucket_index(price: Decimal) -> int:
    """Index into BUCKETS for a non-negative price."""
    if price < 0:
        raise ValueError(f"price must be non-negative, got {price}")
    return bisect_right(_LOWER_BOUNDS, price) - 1


def compute_price_histogram(
    transactions: Sequence[Transaction],
) -> tuple[PriceBucket, ...]:
    """Count transactions per price bucket. Pure, no IO."""
    counts = [0] * len(BUCKETS)
    for t in transactions:
        counts[bucket_index(t.price)] += 1
    return tuple(
        PriceBucket(range=label, count=count)
        for (label, _), count in zip(BUCKETS, counts)
    )
