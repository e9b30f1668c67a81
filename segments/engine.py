"""
Purpose: The segmentation "orchestrator" (single entry point).
What it does:

Coordinates the pipeline end-to-end:

- validates the route geometry (UpstreamDataMissingError when unusable)

- picks the splitter for the policy's mode (splitters.py)

- attaches step ranges (assignment.py or the count / step-group rules)

- builds RouteSegment values, dropping any candidate with < 2 coordinates,
  and numbers the survivors 1..N

Typical public function signature:

- segment_route(coordinates, steps, policy=...) -> List[RouteSegment]

Rule: Engine is the only file other modules should call directly for segmentation.
"""

# segments/engine.py

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from geo.errors import UpstreamDataMissingError
from geo.models import LonLat
from routing.models import NavigationStep

from .assignment import assign_steps_by_location
from .models import RouteSegment
from .policy import SegmentationPolicy, SegmentMode, default_policy
from .splitters import (
    IndexRange,
    distribute_steps_by_count,
    group_steps,
    split_by_count,
    split_by_distance,
)

logger = logging.getLogger(__name__)


def segment_route(
    coordinates: Sequence[LonLat],
    steps: Optional[Sequence[NavigationStep]] = None,
    *,
    policy: Optional[SegmentationPolicy] = None,
) -> List[RouteSegment]:
    """
    Main segmentation entry point (pure algorithm).

    Parameters
    ----------
    coordinates:
        Route geometry in travel order, (lon, lat).
    steps:
        Navigation steps in travel order. May be empty; DISTANCE and COUNT
        modes then segment on coordinates alone and STEPS mode returns one
        segment spanning the whole route.
    policy:
        SegmentationPolicy selecting the mode and its parameter.

    Returns
    -------
    Ordered RouteSegments with 1-based sequential indices.
    """
    policy = policy or default_policy()
    policy.validate()

    if len(coordinates) < 2:
        raise UpstreamDataMissingError(f"route geometry needs at least 2 coordinates, got {len(coordinates)}")

    steps = list(steps or [])

    if policy.mode is SegmentMode.DISTANCE:
        segments = _segment_by_distance(coordinates, steps, policy)
    elif policy.mode is SegmentMode.COUNT:
        segments = _segment_by_count(coordinates, steps, policy)
    else:
        segments = _segment_by_steps(coordinates, steps, policy)

    logger.info("Route split into %d segments (%s mode)", len(segments), policy.mode.value)
    return segments


def _segment_by_distance(
    coordinates: Sequence[LonLat],
    steps: List[NavigationStep],
    policy: SegmentationPolicy,
) -> List[RouteSegment]:
    ranges = split_by_distance(coordinates, policy.target_distance_m)
    step_ranges = assign_steps_by_location(coordinates, steps, ranges) if steps else [None] * len(ranges)
    return _build(coordinates, ranges, step_ranges, policy)


def _segment_by_count(
    coordinates: Sequence[LonLat],
    steps: List[NavigationStep],
    policy: SegmentationPolicy,
) -> List[RouteSegment]:
    coords, ranges = split_by_count(coordinates, policy.segment_count)
    if steps:
        step_ranges = distribute_steps_by_count(len(steps), policy.segment_count)
    else:
        step_ranges = [None] * len(ranges)
    return _build(coords, ranges, step_ranges, policy)


def _segment_by_steps(
    coordinates: Sequence[LonLat],
    steps: List[NavigationStep],
    policy: SegmentationPolicy,
) -> List[RouteSegment]:
    if not steps:
        return [
            RouteSegment.new(
                1,
                coordinates,
                padding_fraction=policy.padding_fraction,
                walking_speed_mps=policy.walking_speed_mps,
            )
        ]

    segments: List[RouteSegment] = []
    for step_range, coords, distance in group_steps(steps, policy.steps_per_segment):
        segments.append(
            RouteSegment.new(
                len(segments) + 1,
                coords,
                padding_fraction=policy.padding_fraction,
                walking_speed_mps=policy.walking_speed_mps,
                distance=distance,
                step_range=step_range,
            )
        )
    return segments


def _build(
    coordinates: Sequence[LonLat],
    ranges: Sequence[IndexRange],
    step_ranges: Sequence[Optional[IndexRange]],
    policy: SegmentationPolicy,
) -> List[RouteSegment]:
    segments: List[RouteSegment] = []

    for (start, end), step_range in zip(ranges, step_ranges):
        coords = coordinates[start:end + 1]
        if len(coords) < 2:
            logger.debug("Dropping candidate segment [%d, %d]: fewer than 2 coordinates", start, end)
            continue

        segments.append(
            RouteSegment.new(
                len(segments) + 1,
                coords,
                padding_fraction=policy.padding_fraction,
                walking_speed_mps=policy.walking_speed_mps,
                step_range=step_range,
            )
        )

    return segments
