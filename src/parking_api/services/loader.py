"""
Parking CSV Record Loader.

Turns a CSV document of parking sessions into typed ParkingRecord values.
Every cell is read as text first; numeric columns are then cast leniently so a
bad latitude or duration becomes NaN instead of failing the row. The only row
that is dropped is one whose bay identifier is empty or absent; a
whitespace-only identifier is kept as written.
"""

from __future__ import annotations

import asyncio
import io
import logging
import time
from pathlib import Path
from typing import List, Optional, Union

import httpx
import polars as pl

from ..models import ParkingRecord

logger = logging.getLogger(__name__)


TEXT_COLUMNS = ["bay_id", "license_plate", "arrival_time"]
NUMERIC_COLUMNS = ["latitude", "longitude", "duration_seconds"]
EXPECTED_COLUMNS = TEXT_COLUMNS + NUMERIC_COLUMNS


class RecordLoadError(Exception):
    """The resource could not be read or decoded as CSV."""


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


def _read_frame(data: Union[bytes, str]) -> pl.DataFrame:
    if isinstance(data, str):
        data = data.encode("utf-8")

    try:
        # infer_schema_length=0 keeps every column as String
        # truncate_ragged_lines drops cells past the header width
        df = pl.read_csv(io.BytesIO(data), infer_schema_length=0, truncate_ragged_lines=True)
    except pl.exceptions.PolarsError as exc:
        raise RecordLoadError(f"Could not parse CSV: {exc}") from exc

    return df.rename({c: c.lstrip("\ufeff").strip() for c in df.columns})


def parse_records(data: Union[bytes, str]) -> List[ParkingRecord]:
    """
    Decode a CSV document (header row required) into parking records.

    Column order does not matter and unknown columns are ignored. An expected
    column that is missing from the header is treated as empty in every row.
    Rows with more cells than the header keep the leading cells.

    Numeric cells must parse as a whole after trimming: "-31.93abc" is NaN,
    not -31.93.

    Raises:
        RecordLoadError: if the document is not readable as CSV.
    """
    df = _read_frame(data)

    missing = [c for c in EXPECTED_COLUMNS if c not in df.columns]
    if missing:
        logger.warning(f"CSV is missing expected columns {missing}; treating them as empty")
        df = df.with_columns([pl.lit(None, dtype=pl.String).alias(c) for c in missing])

    df = (
        df
        .select(EXPECTED_COLUMNS)
        .with_columns([
            pl.col(NUMERIC_COLUMNS)
            .str.strip_chars()
            .cast(pl.Float64, strict=False)
            .fill_null(float("nan"))
        ])
        .filter(pl.col("bay_id").is_not_null() & (pl.col("bay_id") != ""))
    )

    records: List[ParkingRecord] = []
    for row in df.iter_rows(named=True):
        records.append(ParkingRecord(
            bay_id=row["bay_id"],
            license_plate=row["license_plate"] or None,
            latitude=row["latitude"],
            longitude=row["longitude"],
            arrival_time=_clean_text(row["arrival_time"]),
            duration_seconds=row["duration_seconds"],
        ))
    return records


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def _fetch(source: str, timeout: float) -> bytes:
    if _is_url(source):
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(source)
            response.raise_for_status()
            return response.content
    return await asyncio.to_thread(Path(source).read_bytes)


async def load_records(source: str, *, timeout: float = 10.0) -> List[ParkingRecord]:
    """
    Fetch and decode the CSV at `source` (local path or http(s) URL).

    Any fetch or parse failure is logged once and yields an empty list. There is
    no retry and no partial result.
    """
    start_time = time.time()
    try:
        raw = await _fetch(source, timeout)
        records = parse_records(raw)
    except (httpx.HTTPError, OSError, RecordLoadError) as e:
        logger.error(f"❌ Failed to load parking data from {source}: {e}")
        return []

    elapsed = time.time() - start_time
    logger.info(f"✓ Loaded {len(records)} parking records from {source} in {elapsed:.2f}s")
    return records
