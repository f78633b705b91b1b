"""
Parking Session Domain Models.

Immutable in-memory types shared by the loader, the aggregator and the API
layer. Records are built once at load time and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


TIME_UNKNOWN = "Time Unknown"


@dataclass(frozen=True)
class ParkingRecord:
    """One parking session (one CSV row)."""
    bay_id: str
    license_plate: Optional[str]
    latitude: float
    longitude: float
    arrival_time: Optional[str]
    duration_seconds: float


@dataclass(frozen=True)
class DailyCount:
    day: str
    count: int


@dataclass(frozen=True)
class HourlyCount:
    hour: int
    count: int


@dataclass(frozen=True)
class DurationBucket:
    name: str
    label: str
    value: int


@dataclass(frozen=True)
class BayUsage:
    bay_id: str
    count: int


@dataclass(frozen=True)
class SummaryView:
    total: int
    avg: int
    invalid: int
    daily: Tuple[DailyCount, ...]
    hourly: Tuple[HourlyCount, ...]
    duration_breakdown: Tuple[DurationBucket, ...]
    bay_usage: Tuple[BayUsage, ...]


@dataclass(frozen=True)
class DashboardData:
    """Loaded records paired with their summary (None when there are no records)."""
    records: Tuple[ParkingRecord, ...] = ()
    summary: Optional[SummaryView] = None

    @property
    def is_empty(self) -> bool:
        return not self.records
