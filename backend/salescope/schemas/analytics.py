"""Analytics Schemas — response bodies for statistics, charts, and the combined view."""

from pydantic import BaseModel

from salescope.core.domain_types import (
    CategoryCount, CombinedView, PriceBucket, StatisticsSummary,
)
from salescope.schemas.transaction import CamelModel


class StatisticsResponse(CamelModel):
    total_sales_amount: float
    total_sold_items: int
    total_not_sold_items: int

    @classmethod
    def from_domain(cls, s: StatisticsSummary) -> "StatisticsResponse":
        return cls(
            total_sales_amount=float(s.total_sales_amount),
            total_sold_items=s.total_sold_items,
            total_not_sold_items=s.total_not_sold_items,
        )


class PriceBucketResponse(BaseModel):
    range: str
    count: int


class CategoryCountResponse(CamelModel):
    category: str
    item_count: int


def bar_chart_response(buckets: tuple[PriceBucket, ...]) -> list[PriceBucketResponse]:
    return [PriceBucketResponse(range=b.range, count=b.count) for b in buckets]


def pie_chart_response(
    counts: tuple[CategoryCount, ...],
) -> list[CategoryCountResponse]:
    return [
        CategoryCountResponse(category=c.category, item_count=c.item_count)
        for c in counts
    ]


class CombinedViewResponse(CamelModel):
    """Combined view — {statistics, barChart, pieChart}."""
    statistics: StatisticsResponse
    bar_chart: list[PriceBucketResponse]
    pie_chart: list[CategoryCountResponse]

    @classmethod
    def from_domain(cls, view: CombinedView) -> "CombinedViewResponse":
        return cls(
            statistics=StatisticsResponse.from_domain(view.statistics),
            bar_chart=bar_chart_response(view.bar_chart),
            pie_chart=pie_chart_response(view.pie_chart),
        )
