"""
Geo package.

Public API:
- Models: LonLat, BoundingRegion
- Errors: DirectionsError, InsufficientGeometryError, UpstreamDataMissingError
- GeoMath: great_circle_distance, path_length, bounding_region, decimate
"""
from .errors import (
    DirectionsError,
    InsufficientGeometryError,
    UpstreamDataMissingError,
)
from .models import LonLat, BoundingRegion
from .geomath import (
    EARTH_RADIUS_METERS,
    great_circle_distance,
    path_length,
    bounding_region,
    decimate,
    euclidean_distance,
    nearest_coordinate_index,
)

__all__ = [
    "DirectionsError",
    "InsufficientGeometryError",
    "UpstreamDataMissingError",
    "LonLat",
    "BoundingRegion",
    "EARTH_RADIUS_METERS",
    "great_circle_distance",
    "path_length",
    "bounding_region",
    "decimate",
    "euclidean_distance",
    "nearest_coordinate_index",
]
