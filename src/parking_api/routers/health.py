from fastapi import APIRouter, Depends

from ..config import Settings
from ..models import DashboardData
from ..schemas import HealthResponse
from ..state import get_dashboard, get_settings

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def get_health(
    dashboard: DashboardData = Depends(get_dashboard),
    settings: Settings = Depends(get_settings),
):
    return HealthResponse(
        status="ok" if not dashboard.is_empty else "empty",
        data_source=settings.data_source,
        record_count=len(dashboard.records),
        timezone=settings.timezone,
    )
