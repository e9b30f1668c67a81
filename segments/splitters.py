"""
Purpose: The three splitting rules, expressed as index arithmetic.
What it does:

- split_by_distance: cut whenever the accumulated great-circle distance reaches
  the target (coordinate index ranges, consecutive ranges share their boundary index)
- split_by_count: exactly N near-equal index ranges, last range absorbs the remainder
- distribute_steps_by_count: spread K steps over N segments, remainder to the earliest
- group_steps: fixed number of steps per group, each group rebuilt into its own polyline

Outputs are plain index ranges / coordinate runs. engine.py turns them into RouteSegments.

Rule: No RouteSegment construction here, only partitioning.
"""

# segments/splitters.py

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from geo.geomath import euclidean_distance, great_circle_distance
from geo.models import LonLat
from routing.models import NavigationStep

# Inclusive [start_index, end_index] into a coordinate sequence
IndexRange = Tuple[int, int]


def split_by_distance(coordinates: Sequence[LonLat], target_distance_m: float) -> List[IndexRange]:
    """
    Walk the route accumulating distance and close a range at coordinate i when:
      - the accumulated distance has reached the target, or
      - the range already has length and the next edge would carry it past the target.

    The second rule keeps a range from overshooting by a whole edge, so a
    route of 1000 m edges with a 1500 m target splits 1000 / 1000 instead of 2000.
    An edge longer than the target gets a range of its own.

    Every range has >= 2 coordinates and range[k].end == range[k + 1].start.
    """
    ranges: List[IndexRange] = []
    if len(coordinates) < 2:
        return ranges

    start = 0
    accumulated = 0.0

    for i in range(1, len(coordinates)):
        edge = great_circle_distance(coordinates[i - 1], coordinates[i])

        if accumulated > 0 and accumulated + edge > target_distance_m:
            ranges.append((start, i - 1))
            start = i - 1
            accumulated = 0.0

        accumulated += edge

        if accumulated >= target_distance_m:
            ranges.append((start, i))
            start = i
            accumulated = 0.0

    # route ends mid-range
    if start < len(coordinates) - 1:
        ranges.append((start, len(coordinates) - 1))

    return ranges


def split_by_count(coordinates: Sequence[LonLat], segment_count: int) -> Tuple[List[LonLat], List[IndexRange]]:
    """
    Divide the coordinates into exactly `segment_count` index ranges of
    len // segment_count points each, the last range running to the end.

    With too few points for every range to hold two coordinates
    (len <= segment_count) the longest edges are bisected first, so the
    returned coordinate list can be longer than the input.
    """
    coords = list(coordinates)
    if len(coords) < segment_count + 1:
        coords = _densify(coords, segment_count + 1)

    total_points = len(coords)
    points_per_segment = total_points // segment_count

    ranges: List[IndexRange] = []
    for i in range(segment_count):
        start_index = i * points_per_segment
        end_index = total_points - 1 if i == segment_count - 1 else (i + 1) * points_per_segment
        ranges.append((start_index, end_index))

    return coords, ranges


def distribute_steps_by_count(step_count: int, segment_count: int) -> List[Optional[IndexRange]]:
    """
    Give each segment step_count // segment_count steps, plus one extra for the
    first step_count % segment_count segments. Segments that get no step have None.
    """
    per_segment = step_count // segment_count
    extra = step_count % segment_count

    ranges: List[Optional[IndexRange]] = []
    step_index = 0
    for i in range(segment_count):
        count = per_segment + (1 if i < extra else 0)
        if count == 0:
            ranges.append(None)
            continue
        ranges.append((step_index, step_index + count - 1))
        step_index += count

    return ranges


def group_steps(steps: Sequence[NavigationStep], steps_per_segment: int) -> List[Tuple[IndexRange, List[LonLat], float]]:
    """
    Group consecutive steps and rebuild each group's polyline from the steps'
    own geometry (or their maneuver location when a step has none), dropping
    consecutive duplicates.

    Groups whose geometry collapses to fewer than 2 points fall back to
    [first step location, last step location].

    Returns (step_range, coordinates, summed step distance) per group.
    """
    groups: List[Tuple[IndexRange, List[LonLat], float]] = []

    for first in range(0, len(steps), steps_per_segment):
        group = list(steps[first:first + steps_per_segment])
        last = first + len(group) - 1

        coords: List[LonLat] = []
        for step in group:
            points = step.geometry if step.geometry else (step.location,)
            for point in points:
                if not coords or coords[-1] != point:
                    coords.append(point)

        if len(coords) < 2:
            coords = [group[0].location, group[-1].location]

        distance = sum(step.distance for step in group)
        groups.append(((first, last), coords, distance))

    return groups


def _densify(coordinates: List[LonLat], target_points: int) -> List[LonLat]:
    """Bisect the longest edge (degree space) until there are target_points coordinates."""
    coords = list(coordinates)
    if not coords:
        return coords
    if len(coords) == 1:
        coords.append(coords[0])

    while len(coords) < target_points:
        longest = max(range(1, len(coords)), key=lambda i: euclidean_distance(coords[i - 1], coords[i]))
        (lon1, lat1), (lon2, lat2) = coords[longest - 1], coords[longest]
        coords.insert(longest, ((lon1 + lon2) / 2, (lat1 + lat2) / 2))

    return coords
