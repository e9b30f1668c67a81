"""
Purpose: Process-level configuration, read once from the environment (.env supported).
What it does:

- reads the start / end locations (required)
- reads the segmentation mode and its parameter and turns them into a SegmentationPolicy
- reads collaborator URLs and the output directory (optional)

Rule: Only this module reads os.environ for the directions run.
Everything downstream receives a DirectionsConfig.
"""

# directions/config.py

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

from geo.errors import DirectionsError
from rendering.policy import LabelPolicy, MapPolicy, default_label_policy, default_map_policy
from routing.models import Location
from segments.policy import (
    METERS_PER_MILE,
    SegmentationPolicy,
    SegmentMode,
    count_policy,
    distance_policy,
    step_policy,
)

WALKING_HOURS_PER_DAY = 8
WAYPOINTS_PER_SEGMENT = 2


class ConfigError(DirectionsError):
    """A required setting is missing or malformed."""
    pass


@dataclass(frozen=True)
class DirectionsConfig:
    start: Location
    end: Location
    segmentation: SegmentationPolicy
    map_policy: MapPolicy = field(default_factory=default_map_policy)
    label_policy: LabelPolicy = field(default_factory=default_label_policy)
    waypoints_per_segment: int = WAYPOINTS_PER_SEGMENT
    walking_hours_per_day: int = WALKING_HOURS_PER_DAY
    output_dir: str = "output"
    render_workers: int = 1
    osrm_base_url: Optional[str] = None
    nominatim_url: Optional[str] = None
    overpass_url: Optional[str] = None


def load_config(env: Optional[Mapping[str, str]] = None) -> DirectionsConfig:
    """
    Build a DirectionsConfig from `env` (defaults to os.environ after .env is loaded).
    Raises ConfigError naming the offending variable.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    start = _location(env, "START")
    end = _location(env, "END")

    return DirectionsConfig(
        start=start,
        end=end,
        segmentation=segmentation_from_env(env),
        output_dir=env.get("OUTPUT_DIR") or "output",
        render_workers=_int(env, "RENDER_WORKERS", 1),
        osrm_base_url=env.get("OSRM_BASE_URL") or None,
        nominatim_url=env.get("NOMINATIM_URL") or None,
        overpass_url=env.get("OVERPASS_URL") or None,
    )


def segmentation_from_env(env: Mapping[str, str]) -> SegmentationPolicy:
    raw_mode = (env.get("SEGMENT_MODE") or SegmentMode.DISTANCE.value).strip().lower()
    try:
        mode = SegmentMode(raw_mode)
    except ValueError:
        raise ConfigError(f"SEGMENT_MODE must be one of distance, count, steps (got {raw_mode!r})")

    try:
        if mode is SegmentMode.COUNT:
            return count_policy(_int(env, "NUM_SEGMENTS", 10))
        if mode is SegmentMode.STEPS:
            return step_policy(_int(env, "STEPS_PER_SEGMENT", 8))
        return distance_policy(_float(env, "MILES_PER_SEGMENT", 1.0) * METERS_PER_MILE)
    except ValueError as exc:
        raise ConfigError(f"invalid segmentation settings: {exc}") from exc


# -------------------------
# Internal helpers
# -------------------------

def _required(env: Mapping[str, str], name: str) -> str:
    value = env.get(name)
    if value is None or not value.strip():
        raise ConfigError(f"Missing required environment variable: {name}")
    return value.strip()


def _location(env: Mapping[str, str], prefix: str) -> Location:
    lat = _parse_float(f"{prefix}_LAT", _required(env, f"{prefix}_LAT"))
    lon = _parse_float(f"{prefix}_LON", _required(env, f"{prefix}_LON"))
    if not -90 <= lat <= 90:
        raise ConfigError(f"{prefix}_LAT out of range: {lat}")
    if not -180 <= lon <= 180:
        raise ConfigError(f"{prefix}_LON out of range: {lon}")

    return Location(
        lat=lat,
        lon=lon,
        name=_required(env, f"{prefix}_NAME"),
        address=_required(env, f"{prefix}_ADDRESS"),
    )


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number (got {raw!r})")


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    return _parse_float(name, raw.strip())


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer (got {raw!r})")
