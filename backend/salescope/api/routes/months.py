"""Month Routes — month names and per-month transaction lists.

Invariants:
    - GET /months lists the accepted names in calendar order
    - Month filtering spans every year in the dataset
"""

from fastapi import APIRouter, Depends

from salescope.api.dependencies import get_analytics_service, month_number
from salescope.core.domain_types import MonthNumber
from salescope.core.resolve_month import MONTH_NAMES
from salescope.schemas.transaction import TransactionResponse
from salescope.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/api/v1/months", tags=["months"])


@router.get("", response_model=list[str])
async def list_months():
    return list(MONTH_NAMES)


@router.get("/{month}/transactions", response_model=list[TransactionResponse])
async def get_month_transactions(
    month_num: MonthNumber = Depends(month_number),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """All transactions sold in the month, in store order."""
    return [
        TransactionResponse.from_domain(t)
        for t in service.filter_by_month(month_num)
    ]
