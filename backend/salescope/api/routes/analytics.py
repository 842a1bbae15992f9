"""Analytics Routes — month-scoped statistics, bar chart, pie chart, and combined view.

Invariants:
    - {month} is a full English month name, any case; invalid → 400 INVALID_MONTH
    - Every response is computed from exactly one pinned snapshot
    - /combined never returns partial data (AggregationFailureError → 500)
"""

from fastapi import APIRouter, Depends

from salescope.api.dependencies import get_analytics_service, month_number
from salescope.core.domain_types import MonthNumber
from salescope.schemas.analytics import (
    CategoryCountResponse, CombinedViewResponse, PriceBucketResponse,
    StatisticsResponse, bar_chart_response, pie_chart_response,
)
from salescope.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/api/v1", tags=["analytics"])


@router.get("/statistics/{month}", response_model=StatisticsResponse)
async def get_statistics(
    month_num: MonthNumber = Depends(month_number),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Total sales amount, sold and not-sold counts for a month."""
    return StatisticsResponse.from_domain(service.statistics(month_num))


@router.get("/barchart/{month}", response_model=list[PriceBucketResponse])
async def get_bar_chart(
    month_num: MonthNumber = Depends(month_number),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Ten fixed price buckets, in order, zero counts included."""
    return bar_chart_response(service.histogram(month_num))


@router.get("/piechart/{month}", response_model=list[CategoryCountResponse])
async def get_pie_chart(
    month_num: MonthNumber = Depends(month_number),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Item count per category present in the month."""
    return pie_chart_response(service.category_breakdown(month_num))


@router.get("/combined/{month}", response_model=CombinedViewResponse)
async def get_combined_view(
    month_num: MonthNumber = Depends(month_number),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Statistics, bar chart, and pie chart from one snapshot."""
    view = await service.combined_view(month_num)
    return CombinedViewResponse.from_domain(view)
