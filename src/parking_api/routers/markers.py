from fastapi import APIRouter, Depends

from ..config import Settings
from ..models import DashboardData
from ..schemas import MapMarker, MapResponse, finite_or_none
from ..services.aggregator import marker_color
from ..state import get_dashboard, get_settings

router = APIRouter(tags=["map"])


@router.get("/map", response_model=MapResponse)
def get_map(
    dashboard: DashboardData = Depends(get_dashboard),
    settings: Settings = Depends(get_settings),
):
    """
    Map view settings and one marker per session.

    Sessions with unparsable coordinates are still listed, with null
    latitude/longitude; the map client decides how to show them.
    """
    markers = [
        MapMarker(
            bay_id=r.bay_id,
            license_plate=r.license_plate,
            latitude=finite_or_none(r.latitude),
            longitude=finite_or_none(r.longitude),
            duration_seconds=finite_or_none(r.duration_seconds),
            color=marker_color(r.duration_seconds),
        )
        for r in dashboard.records
    ]
    return MapResponse(
        center=list(settings.map.center),
        zoom=settings.map.zoom,
        tile_url=settings.map.tile_url,
        markers=markers,
    )
