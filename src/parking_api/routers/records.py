from fastapi import APIRouter, Depends, Query

from ..models import DashboardData
from ..schemas import RecordPage, RecordResponse
from ..state import get_dashboard

router = APIRouter(tags=["records"])


@router.get("/records", response_model=RecordPage)
def list_records(
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of rows to return"),
    offset: int = Query(0, ge=0, description="Number of rows to skip"),
    dashboard: DashboardData = Depends(get_dashboard),
):
    """
    Raw rows for the data table, in file order.

    Query Parameters:
        - limit: Max rows (default 100, max 1000)
        - offset: Skip N rows for pagination
    """
    window = dashboard.records[offset:offset + limit]
    return RecordPage(
        total=len(dashboard.records),
        limit=limit,
        offset=offset,
        items=[RecordResponse.from_record(offset + i, r) for i, r in enumerate(window)],
    )
