"""
Segments domain package.

Public API:
- Domain models: RouteSegment, Waypoint
- Policy: SegmentationPolicy, SegmentMode and its factories
- Segmentation entry: segment_route
- Step placement: find_segment_for_coordinate, group_steps_by_segment
"""
from .models import RouteSegment, Waypoint
from .policy import (
    SegmentationPolicy,
    SegmentMode,
    METERS_PER_MILE,
    default_policy,
    distance_policy,
    count_policy,
    step_policy,
)
from .engine import segment_route
from .assignment import find_segment_for_coordinate, group_steps_by_segment

__all__ = [
    "RouteSegment",
    "Waypoint",
    "SegmentationPolicy",
    "SegmentMode",
    "METERS_PER_MILE",
    "default_policy",
    "distance_policy",
    "count_policy",
    "step_policy",
    "segment_route",
    "find_segment_for_coordinate",
    "group_steps_by_segment",
]
