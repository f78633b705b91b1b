import math
from typing import List, Optional

from pydantic import BaseModel, Field

from .models import ParkingRecord, SummaryView

# Pie slice colors, in duration bucket order
CHART_COLORS = ["#4ade80", "#60a5fa", "#facc15", "#f87171"]


def finite_or_none(value: float) -> Optional[float]:
    """JSON has no NaN; unparsable numbers go out as null."""
    return value if math.isfinite(value) else None


class DailyCountResponse(BaseModel):
    day: str = Field(..., description="Date prefix of arrival_time or 'Time Unknown'")
    count: int = Field(..., ge=0)


class HourlyCountResponse(BaseModel):
    hour: int = Field(..., ge=0, le=23)
    label: str = Field(..., description="Axis label, e.g. '9:00'")
    count: int = Field(..., ge=0)


class DurationBucketResponse(BaseModel):
    name: str
    label: str
    value: int = Field(..., ge=0)
    color: str = Field(..., description="Hex color for the pie slice")


class BayUsageResponse(BaseModel):
    bay_id: str
    count: int = Field(..., ge=1)


class SummaryResponse(BaseModel):
    """All chart series plus the headline numbers."""
    total: int
    avg: int
    invalid: int
    daily: List[DailyCountResponse]
    hourly: List[HourlyCountResponse]
    duration_breakdown: List[DurationBucketResponse]
    bay_usage: List[BayUsageResponse]

    @classmethod
    def from_summary(cls, summary: SummaryView) -> "SummaryResponse":
        return cls(
            total=summary.total,
            avg=summary.avg,
            invalid=summary.invalid,
            daily=daily_series(summary),
            hourly=hourly_series(summary),
            duration_breakdown=duration_series(summary),
            bay_usage=[BayUsageResponse(bay_id=b.bay_id, count=b.count) for b in summary.bay_usage],
        )


class CardsResponse(BaseModel):
    total: int = 0
    avg: Optional[int] = None
    invalid: int = 0


class RecordResponse(BaseModel):
    index: int = Field(..., ge=0, description="Position of the row in the loaded file")
    bay_id: str
    license_plate: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    arrival_time: Optional[str] = None
    duration_seconds: Optional[float] = None

    @classmethod
    def from_record(cls, index: int, record: ParkingRecord) -> "RecordResponse":
        return cls(
            index=index,
            bay_id=record.bay_id,
            license_plate=record.license_plate,
            latitude=finite_or_none(record.latitude),
            longitude=finite_or_none(record.longitude),
            arrival_time=record.arrival_time,
            duration_seconds=finite_or_none(record.duration_seconds),
        )


class RecordPage(BaseModel):
    total: int
    limit: int
    offset: int
    items: List[RecordResponse]


class MapMarker(BaseModel):
    bay_id: str
    license_plate: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    duration_seconds: Optional[float] = None
    color: str = Field(..., description="red (>24h), orange (>1h) or green")


class MapResponse(BaseModel):
    center: List[float] = Field(..., min_length=2, max_length=2)
    zoom: int
    tile_url: str
    markers: List[MapMarker]


class HealthResponse(BaseModel):
    status: str
    data_source: str
    record_count: int
    timezone: str


def daily_series(summary: Optional[SummaryView]) -> List[DailyCountResponse]:
    if summary is None:
        return []
    return [DailyCountResponse(day=d.day, count=d.count) for d in summary.daily]


def hourly_series(summary: Optional[SummaryView]) -> List[HourlyCountResponse]:
    if summary is None:
        return [HourlyCountResponse(hour=h, label=f"{h}:00", count=0) for h in range(24)]
    return [HourlyCountResponse(hour=h.hour, label=f"{h.hour}:00", count=h.count) for h in summary.hourly]


def duration_series(summary: Optional[SummaryView]) -> List[DurationBucketResponse]:
    if summary is None:
        return []
    return [
        DurationBucketResponse(
            name=bucket.name,
            label=bucket.label,
            value=bucket.value,
            color=CHART_COLORS[i % len(CHART_COLORS)],
        )
        for i, bucket in enumerate(summary.duration_breakdown)
    ]
