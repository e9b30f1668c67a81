"""
Purpose: Domain models for the segmentation capability.
What it does:
- RouteSegment (index, coordinate subsequence, endpoints, region, metrics, step range)
- Waypoint (named road stretch inside a segment, filled by the geocoding collaborator)

Rule: No splitting rules here. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from geo.errors import InsufficientGeometryError
from geo.geomath import bounding_region, path_length
from geo.models import BoundingRegion, LonLat


@dataclass(frozen=True)
class Waypoint:
    road: str
    distance: float


@dataclass
class RouteSegment:
    """
    A contiguous chunk of the route.

    step_range is inclusive [first_step_index, last_step_index] into the
    route's step list, or None when no step falls in the segment.
    step_range and waypoints are filled once before the segment goes
    downstream; nothing else changes after construction.
    """
    index: int
    coordinates: List[LonLat]
    start_coordinate: LonLat
    end_coordinate: LonLat
    bounding_region: BoundingRegion
    distance: float
    duration: float
    step_range: Optional[Tuple[int, int]] = None
    waypoints: List[Waypoint] = field(default_factory=list)

    @staticmethod  # Factory method computing region + metrics from a coordinate run
    def new(
        index: int,
        coordinates: Sequence[LonLat],
        *,
        padding_fraction: float,
        walking_speed_mps: float,
        distance: Optional[float] = None,
        step_range: Optional[Tuple[int, int]] = None,
    ) -> RouteSegment:
        coords = list(coordinates)
        if len(coords) < 2:
            raise InsufficientGeometryError(f"segment {index} needs at least 2 coordinates, got {len(coords)}")

        if distance is None:
            distance = path_length(coords)

        return RouteSegment(
            index=index,
            coordinates=coords,
            start_coordinate=coords[0],
            end_coordinate=coords[-1],
            bounding_region=bounding_region(coords, padding_fraction),
            distance=distance,
            duration=distance / walking_speed_mps,
            step_range=step_range,
        )
