"""
Purpose: Pure geometric primitives used by segmentation and rendering.

What it does:
- great-circle (haversine) distance on a spherical Earth
- path length over consecutive coordinate pairs
- padded bounding regions
- index-stride decimation for rendering
- quick degree-space helpers for nearest-point lookups

Rule: No I/O, no logging, no configuration lookups. Callers pass every parameter.
"""
from __future__ import annotations

import math
from typing import List, Sequence

from .errors import InsufficientGeometryError
from .models import BoundingRegion, LonLat

EARTH_RADIUS_METERS = 6371000.0


def great_circle_distance(a: LonLat, b: LonLat) -> float:
    """Haversine distance in meters between two (lon, lat) points."""
    lon1, lat1 = a
    lon2, lat2 = b
    if lon1 == lon2 and lat1 == lat2:
        return 0.0

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def path_length(coordinates: Sequence[LonLat]) -> float:
    """Sum of great-circle distances over consecutive pairs. 0 for fewer than 2 points."""
    total = 0.0
    for i in range(1, len(coordinates)):
        total += great_circle_distance(coordinates[i - 1], coordinates[i])
    return total


def bounding_region(coordinates: Sequence[LonLat], padding_fraction: float) -> BoundingRegion:
    """
    Compute the raw extent of `coordinates`, grow each axis by
    padding_fraction * range on both sides, and center on the padded extremes.

    Raises InsufficientGeometryError for an empty sequence.
    """
    if not coordinates:
        raise InsufficientGeometryError("cannot compute a bounding region for zero coordinates")

    lons = [lon for lon, _ in coordinates]
    lats = [lat for _, lat in coordinates]
    min_lat, max_lat = min(lats), max(lats)
    min_lon, max_lon = min(lons), max(lons)

    lat_pad = (max_lat - min_lat) * padding_fraction
    lon_pad = (max_lon - min_lon) * padding_fraction

    return BoundingRegion.from_extents(
        min_lat=min_lat - lat_pad,
        max_lat=max_lat + lat_pad,
        min_lon=min_lon - lon_pad,
        max_lon=max_lon + lon_pad,
    )


def decimate(coordinates: Sequence[LonLat], max_points: int) -> List[LonLat]:
    """
    Down-sample to roughly max_points by keeping every stride-th element,
    stride = max(1, len // max_points).

    Index based: the final coordinate is only kept when its index is a
    multiple of the stride.
    """
    if len(coordinates) <= max_points:
        return list(coordinates)

    stride = max(1, len(coordinates) // max_points)
    return [coord for i, coord in enumerate(coordinates) if i % stride == 0]


def euclidean_distance(a: LonLat, b: LonLat) -> float:
    """Distance in degree space. Only meaningful for comparisons at a similar latitude."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def nearest_coordinate_index(coordinates: Sequence[LonLat], location: LonLat) -> int:
    """Index of the coordinate closest to `location` in degree space (first one on ties)."""
    if not coordinates:
        raise InsufficientGeometryError("cannot search an empty coordinate sequence")

    best_index = 0
    best_dist = math.inf
    for i, (lon, lat) in enumerate(coordinates):
        dist = (lon - location[0]) ** 2 + (lat - location[1]) ** 2
        if dist < best_dist:
            best_dist = dist
            best_index = i
    return best_index
