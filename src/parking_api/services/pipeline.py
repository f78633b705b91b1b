import logging

from ..models import DashboardData
from .aggregator import aggregate
from .loader import load_records

logger = logging.getLogger(__name__)


async def build_dashboard(source: str, *, tz: str = "UTC", timeout: float = 10.0) -> DashboardData:
    """Load the CSV at `source` once and pair the records with their summary."""
    records = await load_records(source, timeout=timeout)
    summary = aggregate(records, tz=tz)

    if summary is None:
        logger.warning("No parking records available; serving empty dashboard")
    else:
        logger.info(
            f"📊 Summary ready: {summary.total} sessions, {len(summary.bay_usage)} bays, "
            f"{summary.invalid} invalid plates, avg duration {summary.avg}s"
        )

    return DashboardData(records=tuple(records), summary=summary)
