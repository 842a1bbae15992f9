"""Domain Types — immutable value types shared by the analytics core.

Invariants:
    - Transaction is frozen: the core never mutates a record
    - price >= 0 and date_of_sale is always set (enforced at the import boundary)
    - Derived values (buckets, counts, summaries, pages) are never persisted

Design Decisions:
    - Frozen dataclasses over ORM objects: core stays free of IO and sessions
      (ADR: functional core, imperative shell)
    - Decimal for money: sums are exact, canonical string form is stable
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Callable, NewType


MonthNumber = NewType("MonthNumber", int)   # 1–12


class SubAggregation(str, Enum):
    """The three aggregations merged into a combined view."""
    STATISTICS = "statistics"
    BAR_CHART = "bar_chart"
    PIE_CHART = "pie_chart"


@dataclass(frozen=True)
class Transaction:
    """One product-sale record."""
    id: int
    title: str
    description: str
    category: str
    price: Decimal
    image: str
    sold: bool
    date_of_sale: datetime


Predicate = Callable[[Transaction], bool]


@dataclass(frozen=True)
class StatisticsSummary:
    total_sales_amount: Decimal
    total_sold_items: int
    total_not_sold_items: int


@dataclass(frozen=True)
class PriceBucket:
    """Count of transactions in one fixed price range."""
    range: str
    count: int


@dataclass(frozen=True)
class CategoryCount:
    category: str
    item_count: int


@dataclass(frozen=True)
class Page:
    """One slice of a filtered listing plus the total match count."""
    items: tuple[Transaction, ...]
    total: int
    page: int
    per_page: int


@dataclass(frozen=True)
class CombinedView:
    statistics: StatisticsSummary
    bar_chart: tuple[PriceBucket, ...]
    pie_chart: tuple[CategoryCount, ...]
