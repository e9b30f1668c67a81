"""
Purpose: Web-Mercator tile math and geographic -> pixel projection.
What it does:

- tile_index / tile_bounds: slippy-map tile addressing and its inverse
- choose_zoom: zoom level that fits a region into a viewport, clamped
- adjust_for_aspect_ratio: grow the constrained axis so the viewport is not stretched
- project: linear lon/lat -> pixel mapping over an adjusted region (y inverted)
- tiles_covering: every tile intersecting a region at a zoom

Rule: Decides WHICH tiles are needed and WHERE things land. Never fetches anything.
"""

# rendering/projector.py

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from geo.models import BoundingRegion, LonLat

from .policy import Viewport

# Pixel point inside a viewport: (x, y), y grows downwards
Pixel = Tuple[float, float]

# Web-Mercator is undefined at the poles
MAX_MERCATOR_LAT = 85.05112878

# Guards cos(lat) near the poles
_MIN_LAT_CORRECTION = 1e-6


@dataclass(frozen=True, order=True)
class TileReference:
    x: int
    y: int
    zoom: int

    def url(self, template: str) -> str:
        return (
            template.replace("{z}", str(self.zoom))
            .replace("{x}", str(self.x))
            .replace("{y}", str(self.y))
        )


def tile_index(lat: float, lon: float, zoom: int) -> Tuple[int, int]:
    """Slippy-map (x, y) of the tile holding lat/lon at `zoom`."""
    n = 2 ** zoom
    lat = max(-MAX_MERCATOR_LAT, min(MAX_MERCATOR_LAT, lat))
    lat_rad = math.radians(lat)

    x = math.floor((lon + 180.0) / 360.0 * n)
    y = math.floor((1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi) / 2.0 * n)

    # lon == 180 and lat == -MAX_MERCATOR_LAT land one past the last tile
    return min(max(x, 0), n - 1), min(max(y, 0), n - 1)


def tile_bounds(x: int, y: int, zoom: int) -> BoundingRegion:
    """Lat/lon extent of a tile (inverse Mercator via atan(sinh(...)))."""
    n = 2 ** zoom

    min_lon = x / n * 360.0 - 180.0
    max_lon = (x + 1) / n * 360.0 - 180.0

    max_lat = math.degrees(math.atan(math.sinh(math.pi * (1 - 2 * y / n))))
    min_lat = math.degrees(math.atan(math.sinh(math.pi * (1 - 2 * (y + 1) / n))))

    return BoundingRegion.from_extents(min_lat=min_lat, max_lat=max_lat, min_lon=min_lon, max_lon=max_lon)


def choose_zoom(
    region: BoundingRegion,
    viewport_width: int,
    viewport_height: int,
    *,
    min_zoom: int = 12,
    max_zoom: int = 16,
    tile_size: int = 256,
) -> int:
    """
    Zoom that fits `region` into the viewport, one level above ideal so
    tiles are downscaled rather than blown up, clamped to [min_zoom, max_zoom].
    """
    degrees_per_pixel = max(region.lon_range / viewport_width, region.lat_range / viewport_height)
    if degrees_per_pixel <= 0:
        return max_zoom

    ideal_zoom = math.log2(360.0 / (tile_size * degrees_per_pixel))
    return max(min_zoom, min(max_zoom, math.ceil(ideal_zoom + 1)))


def adjust_for_aspect_ratio(region: BoundingRegion, viewport_width: int, viewport_height: int) -> BoundingRegion:
    """
    Grow whichever axis is not the constraint so the region's ground
    aspect (longitude corrected by cos(center lat)) matches the viewport.
    Keeps north up and the path unstretched. The center does not move.

    A single-point region comes back unchanged.
    """
    lat_range = region.lat_range
    lon_range = region.lon_range
    center_lat = (region.min_lat + region.max_lat) / 2
    center_lon = (region.min_lon + region.max_lon) / 2

    if lat_range <= 0 and lon_range <= 0:
        return BoundingRegion.from_extents(region.min_lat, region.max_lat, region.min_lon, region.max_lon)

    lat_correction = max(math.cos(math.radians(center_lat)), _MIN_LAT_CORRECTION)
    adjusted_lon_range = lon_range * lat_correction
    viewport_aspect = viewport_width / viewport_height

    new_lat_range = lat_range
    new_lon_range = lon_range

    if lat_range <= 0 or adjusted_lon_range / lat_range > viewport_aspect:
        # wider than the viewport: longitude is the constraint
        new_lat_range = adjusted_lon_range / viewport_aspect
    else:
        new_lon_range = lat_range * viewport_aspect / lat_correction

    return BoundingRegion.from_extents(
        min_lat=center_lat - new_lat_range / 2,
        max_lat=center_lat + new_lat_range / 2,
        min_lon=center_lon - new_lon_range / 2,
        max_lon=center_lon + new_lon_range / 2,
    )


def project(lon: float, lat: float, region: BoundingRegion, width: float, height: float) -> Pixel:
    """
    Linear map of lon onto [0, width] and lat onto [height, 0].
    A region without extent on either axis maps everything to the viewport center.
    """
    if region.is_degenerate:
        return (width / 2, height / 2)

    x = (lon - region.min_lon) / region.lon_range * width
    y = height - (lat - region.min_lat) / region.lat_range * height
    return (x, y)


def tiles_covering(region: BoundingRegion, zoom: int) -> List[TileReference]:
    """All tiles between the north-west and south-east corner tiles, x-major order."""
    min_x, min_y = tile_index(region.max_lat, region.min_lon, zoom)
    max_x, max_y = tile_index(region.min_lat, region.max_lon, zoom)

    return [
        TileReference(x=x, y=y, zoom=zoom)
        for x in range(min_x, max_x + 1)
        for y in range(min_y, max_y + 1)
    ]


@dataclass(frozen=True)
class Projection:
    """
    Pixel-projection function for one render: the aspect-adjusted region
    plus the viewport it maps onto.
    """
    region: BoundingRegion
    viewport: Viewport

    @classmethod
    def fit(cls, raw_region: BoundingRegion, viewport: Viewport) -> Projection:
        return cls(
            region=adjust_for_aspect_ratio(raw_region, viewport.width, viewport.height),
            viewport=viewport,
        )

    def __call__(self, coordinate: LonLat) -> Pixel:
        lon, lat = coordinate
        return project(lon, lat, self.region, self.viewport.width, self.viewport.height)

    def project_path(self, coordinates: Sequence[LonLat]) -> List[Pixel]:
        return [self(coordinate) for coordinate in coordinates]
