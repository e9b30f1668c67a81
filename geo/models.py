"""
Purpose: Geographic value types.

Coordinates are stored as (lon, lat) tuples in degrees, the same order
OSRM and GeoJSON use. Trig calls convert to radians at the call site.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Internal coordinate type: (lon, lat)
LonLat = Tuple[float, float]


@dataclass(frozen=True)
class BoundingRegion:
    """
    Padded rectangle in lat/lon space.

    center_lat / center_lon are the midpoint of the min/max extremes,
    not the centroid of the coordinates that produced the region.
    """
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float
    center_lat: float
    center_lon: float

    @classmethod
    def from_extents(cls, min_lat: float, max_lat: float, min_lon: float, max_lon: float) -> BoundingRegion:
        return cls(
            min_lat=min_lat,
            max_lat=max_lat,
            min_lon=min_lon,
            max_lon=max_lon,
            center_lat=(min_lat + max_lat) / 2,
            center_lon=(min_lon + max_lon) / 2,
        )

    @property
    def lat_range(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lon_range(self) -> float:
        return self.max_lon - self.min_lon

    @property
    def is_degenerate(self) -> bool:
        return self.lat_range <= 0 or self.lon_range <= 0

    def contains(self, lon: float, lat: float) -> bool:
        return (
            self.min_lon <= lon <= self.max_lon
            and self.min_lat <= lat <= self.max_lat
        )
