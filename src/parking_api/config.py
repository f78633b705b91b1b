from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

logger = logging.getLogger(__name__)


DEFAULT_DATA_SOURCE = "data/parking-data.csv"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_FETCH_TIMEOUT = 10.0
DEFAULT_MAP_CONFIG_PATH = "config/map.yaml"

DEFAULT_MAP_CENTER = (-31.9321, 115.9523)
DEFAULT_MAP_ZOOM = 18
DEFAULT_TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


@dataclass(frozen=True)
class MapSettings:
    center: Tuple[float, float] = DEFAULT_MAP_CENTER
    zoom: int = DEFAULT_MAP_ZOOM
    tile_url: str = DEFAULT_TILE_URL


@dataclass(frozen=True)
class Settings:
    data_source: str = DEFAULT_DATA_SOURCE
    timezone: str = DEFAULT_TIMEZONE
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    map: MapSettings = MapSettings()


def _resolve_timezone(name: str) -> str:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to %s", name, DEFAULT_TIMEZONE)
        return DEFAULT_TIMEZONE
    return name


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_FETCH_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid PARKING_FETCH_TIMEOUT %r, using %.1fs", raw, DEFAULT_FETCH_TIMEOUT)
        return DEFAULT_FETCH_TIMEOUT
    return value if value > 0 else DEFAULT_FETCH_TIMEOUT


def load_map_settings(path: str | Path) -> MapSettings:
    """Read map display options from YAML.

    The file is optional. A missing file, a non-mapping document or a bad value
    keeps the corresponding default.
    """
    path = Path(path)
    if not path.exists():
        logger.info("Map config not found: %s (using defaults)", path)
        return MapSettings()

    try:
        raw: Any = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.exception("Failed to load map config (%s): %s", path, exc)
        return MapSettings()

    if not isinstance(raw, dict):
        logger.warning("Map config must be a mapping, got %s: %s", type(raw).__name__, path)
        return MapSettings()

    values: Dict[str, Any] = {}

    center = raw.get("center")
    if center is not None:
        try:
            lat, lon = (float(c) for c in center)
            values["center"] = (lat, lon)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid map center %r", center)

    zoom = raw.get("zoom")
    if zoom is not None:
        try:
            values["zoom"] = int(zoom)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid map zoom %r", zoom)

    tile_url = str(raw.get("tile_url") or "").strip()
    if tile_url:
        values["tile_url"] = tile_url

    return MapSettings(**values)


def load_settings() -> Settings:
    """Build settings from the environment at call time."""
    return Settings(
        data_source=os.getenv("PARKING_DATA_SOURCE", DEFAULT_DATA_SOURCE),
        timezone=_resolve_timezone(os.getenv("PARKING_TIMEZONE", DEFAULT_TIMEZONE)),
        fetch_timeout=_parse_timeout(os.getenv("PARKING_FETCH_TIMEOUT")),
        map=load_map_settings(os.getenv("PARKING_MAP_CONFIG", DEFAULT_MAP_CONFIG_PATH)),
    )


def get_cors_origins() -> list[str]:
    cors_origins_env = os.getenv("CORS_ALLOW_ORIGINS")
    if not cors_origins_env:
        return DEFAULT_CORS_ORIGINS
    return [origin.strip() for origin in cors_origins_env.split(",") if origin.strip()]
