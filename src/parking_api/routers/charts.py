from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..models import DashboardData
from ..schemas import (
    BayUsageResponse,
    DailyCountResponse,
    DurationBucketResponse,
    HourlyCountResponse,
    daily_series,
    duration_series,
    hourly_series,
)
from ..state import get_dashboard

router = APIRouter(prefix="/charts", tags=["charts"])


@router.get("/daily", response_model=List[DailyCountResponse])
def get_sessions_by_day(dashboard: DashboardData = Depends(get_dashboard)):
    """Sessions per arrival day, 'Time Unknown' included, sorted by day label."""
    return daily_series(dashboard.summary)


@router.get("/hourly", response_model=List[HourlyCountResponse])
def get_arrivals_by_hour(dashboard: DashboardData = Depends(get_dashboard)):
    """Arrivals per hour of day. Always 24 entries."""
    return hourly_series(dashboard.summary)


@router.get("/durations", response_model=List[DurationBucketResponse])
def get_duration_breakdown(dashboard: DashboardData = Depends(get_dashboard)):
    return duration_series(dashboard.summary)


@router.get("/bays", response_model=List[BayUsageResponse])
def get_bay_usage(
    top_k: Optional[int] = Query(None, ge=1, le=500, description="Only return the K busiest bays"),
    dashboard: DashboardData = Depends(get_dashboard),
):
    """Sessions per bay, busiest first."""
    if dashboard.summary is None:
        return []
    usage = dashboard.summary.bay_usage
    if top_k is not None:
        usage = usage[:top_k]
    return [BayUsageResponse(bay_id=b.bay_id, count=b.count) for b in usage]
