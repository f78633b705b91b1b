from typing import Optional

from fastapi import APIRouter, Depends

from ..models import DashboardData
from ..schemas import CardsResponse, SummaryResponse
from ..state import get_dashboard

router = APIRouter(tags=["summary"])


@router.get("/summary", response_model=Optional[SummaryResponse])
def get_summary(dashboard: DashboardData = Depends(get_dashboard)):
    """
    Full dashboard summary: headline numbers and every chart series.
    Returns null when no records were loaded.
    """
    if dashboard.summary is None:
        return None
    return SummaryResponse.from_summary(dashboard.summary)


@router.get("/summary/cards", response_model=CardsResponse)
def get_cards(dashboard: DashboardData = Depends(get_dashboard)):
    """Values for the summary cards (total, average duration, invalid plates)."""
    summary = dashboard.summary
    if summary is None:
        return CardsResponse()
    return CardsResponse(total=summary.total, avg=summary.avg, invalid=summary.invalid)
