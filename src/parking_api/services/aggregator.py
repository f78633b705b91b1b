"""
Parking Session Aggregator.

Pure transform from a list of ParkingRecord to the SummaryView behind the
dashboard cards and charts. Nothing here reads the clock, the locale or the
network, so the same input always produces the same summary.

NaN convention: a NaN (or infinite) duration counts as 0 everywhere, both in
the average numerator and in the Short bucket.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from datetime import datetime
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from ..models import (
    TIME_UNKNOWN,
    BayUsage,
    DailyCount,
    DurationBucket,
    HourlyCount,
    ParkingRecord,
    SummaryView,
)

ONE_HOUR = 3600
ONE_DAY = 86400

# (name, display label) in chart order
DURATION_BUCKETS = [
    ("Short", "Short (<1h)"),
    ("Medium", "Medium (1h-24h)"),
    ("Long", "Long (>24h)"),
]

_TIME_SEPARATOR = re.compile(r"[T ]")


def effective_duration(seconds: float) -> float:
    return seconds if math.isfinite(seconds) else 0.0


def is_invalid_plate(plate: Optional[str]) -> bool:
    return not plate or plate.lower() == "null"


def day_key(arrival_time: Optional[str]) -> str:
    """Date-only prefix of the arrival text, or the Time Unknown bucket."""
    if not arrival_time:
        return TIME_UNKNOWN
    return _TIME_SEPARATOR.split(arrival_time.strip(), maxsplit=1)[0]


def arrival_hour(arrival_time: Optional[str], tz: str = "UTC") -> Optional[int]:
    """
    Hour of day (0-23) of an arrival timestamp.

    Naive timestamps keep the hour written in the text. Offset-aware ones are
    converted to `tz` first. Returns None for missing or unparsable values.
    """
    if not arrival_time:
        return None
    try:
        dt = datetime.fromisoformat(arrival_time.strip())
    except ValueError:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(ZoneInfo(tz))
    return dt.hour


def duration_bucket(seconds: float) -> str:
    seconds = effective_duration(seconds)
    if seconds < ONE_HOUR:
        return "Short"
    if seconds < ONE_DAY:
        return "Medium"
    return "Long"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def aggregate(records: Sequence[ParkingRecord], tz: str = "UTC") -> Optional[SummaryView]:
    """
    Compute the dashboard summary for `records`.

    Returns None for an empty sequence. Daily counts include a Time Unknown
    bucket and are sorted lexicographically by day; hourly counts always hold
    24 entries and skip records without a parsable arrival time.
    """
    if not records:
        return None

    total = len(records)
    durations = [effective_duration(r.duration_seconds) for r in records]
    avg = _round_half_up(sum(durations) / total)
    invalid = sum(1 for r in records if is_invalid_plate(r.license_plate))

    by_day = Counter(day_key(r.arrival_time) for r in records)
    daily = tuple(DailyCount(day=day, count=count) for day, count in sorted(by_day.items()))

    by_hour: Counter = Counter()
    for r in records:
        hour = arrival_hour(r.arrival_time, tz)
        if hour is not None:
            by_hour[hour] += 1
    hourly = tuple(HourlyCount(hour=h, count=by_hour.get(h, 0)) for h in range(24))

    by_bucket = Counter(duration_bucket(d) for d in durations)
    duration_breakdown = tuple(
        DurationBucket(name=name, label=label, value=by_bucket.get(name, 0))
        for name, label in DURATION_BUCKETS
    )

    # Counter keeps first-seen order and sorted() is stable, so ties stay in that order
    by_bay = Counter(r.bay_id for r in records)
    bay_usage = tuple(
        BayUsage(bay_id=bay_id, count=count)
        for bay_id, count in sorted(by_bay.items(), key=lambda item: item[1], reverse=True)
    )

    return SummaryView(
        total=total,
        avg=avg,
        invalid=invalid,
        daily=daily,
        hourly=hourly,
        duration_breakdown=duration_breakdown,
        bay_usage=bay_usage,
    )


def marker_color(duration_seconds: float) -> str:
    """Map marker color for a session; NaN compares false and ends up green."""
    if duration_seconds > ONE_DAY:
        return "red"
    if duration_seconds > ONE_HOUR:
        return "orange"
    return "green"
