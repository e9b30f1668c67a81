"""
Purpose: Decide which segment a navigation step (or any point) belongs to.
What it does:

- assign_steps_by_location: map each step to its nearest route coordinate and
  find the segment whose coordinate-index range holds that index
- find_segment_for_coordinate: fallback scorer when no index ranges are known
- group_steps_by_segment: per-segment step lists for the document layer

Rule: Assignment never changes segment geometry.
"""

# segments/assignment.py

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from geo.errors import UpstreamDataMissingError
from geo.geomath import euclidean_distance, nearest_coordinate_index
from geo.models import LonLat
from routing.models import NavigationStep

from .models import RouteSegment
from .splitters import IndexRange


def assign_steps_by_location(
    coordinates: Sequence[LonLat],
    steps: Sequence[NavigationStep],
    index_ranges: Sequence[IndexRange],
) -> List[Optional[IndexRange]]:
    """
    Step range per coordinate-index range.

    A step belongs to the range holding its nearest coordinate index.
    The search for each step starts at the previous step's index, so a
    route that loops back past an earlier point keeps its steps in travel
    order and the returned ranges never overlap.
    Consecutive ranges share their boundary index; the boundary belongs
    to the later range, except the route's final coordinate which belongs
    to the last range.

    Returns inclusive (first_step, last_step) per range, or None when no
    step landed in it.
    """
    assigned: List[List[int]] = [[] for _ in index_ranges]
    if not index_ranges:
        return []

    last_range = len(index_ranges) - 1
    floor = 0
    for step_index, step in enumerate(steps):
        coord_index = floor + nearest_coordinate_index(coordinates[floor:], step.location)
        floor = coord_index
        for range_index, (start, end) in enumerate(index_ranges):
            if start <= coord_index < end or (range_index == last_range and coord_index == end):
                assigned[range_index].append(step_index)
                break

    return [(min(ids), max(ids)) if ids else None for ids in assigned]


def find_segment_for_coordinate(point: LonLat, segments: Sequence[RouteSegment]) -> int:
    """
    Position (0-based) of the segment that best matches `point`.

    score = degree-space distance to the nearer of the segment's start/end,
    halved when the point lies inside the segment's bounding region.
    Lowest score wins; ties go to the first segment scanned.
    """
    if not segments:
        raise UpstreamDataMissingError("no segments to match the coordinate against")

    best_segment = 0
    best_score = math.inf

    for i, segment in enumerate(segments):
        start_dist = euclidean_distance(point, segment.start_coordinate)
        end_dist = euclidean_distance(point, segment.end_coordinate)
        min_dist = min(start_dist, end_dist)

        in_bounds = segment.bounding_region.contains(point[0], point[1])
        score = min_dist * 0.5 if in_bounds else min_dist

        if score < best_score:
            best_score = score
            best_segment = i

    return best_segment


def group_steps_by_segment(
    steps: Sequence[NavigationStep],
    segments: Sequence[RouteSegment],
) -> List[List[NavigationStep]]:
    """
    Steps for each segment, in segment order.

    Uses step_range when the segmenter recorded any; otherwise every step
    is placed with find_segment_for_coordinate.
    """
    if any(segment.step_range is not None for segment in segments):
        grouped: List[List[NavigationStep]] = []
        for segment in segments:
            if segment.step_range is None:
                grouped.append([])
                continue
            start, end = segment.step_range
            grouped.append(list(steps[start:end + 1]))
        return grouped

    # Fallback
    segment_steps: List[List[NavigationStep]] = [[] for _ in segments]
    if not segments:
        return segment_steps
    for step in steps:
        segment_steps[find_segment_for_coordinate(step.location, segments)].append(step)
    return segment_steps
