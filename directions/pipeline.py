"""
Purpose: End-to-end run (single entry point for a directions document).
What it does:

1. fetch the walking route (routing collaborator)
2. segment it (segments.engine)
3. name each segment's endpoints and intermediate roads (geocoder, optional)
4. group navigation steps per segment
5. fetch POIs per segment region (POI collaborator, optional)
6. build the overview + per-segment render packages

Collaborators are passed in, so tests drive the pipeline with fakes and no network.

Rule: No HTTP and no file I/O here. The script owns output.
"""

# directions/pipeline.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from geo.errors import UpstreamDataMissingError
from rendering.package import RenderPackage, build_overview_package, build_segment_packages
from routing.models import NavigationStep, PointOfInterest, Route, SegmentLocation
from segments.assignment import group_steps_by_segment
from segments.engine import segment_route
from segments.models import RouteSegment

from .config import DirectionsConfig

logger = logging.getLogger(__name__)


@dataclass
class DirectionsDocument:
    route: Route
    steps: List[NavigationStep]
    segments: List[RouteSegment]
    locations: List[SegmentLocation]
    segment_steps: List[List[NavigationStep]]
    overview: RenderPackage
    segment_packages: List[RenderPackage]
    segment_pois: List[List[PointOfInterest]] = field(default_factory=list)


def generate_directions(config: DirectionsConfig, osrm, geocoder=None, poi_client=None) -> DirectionsDocument:
    """
    Run the whole pipeline.

    Args:
        config: DirectionsConfig (start / end + policies)
        osrm: anything with fetch_walking_route(start, end) -> Route
        geocoder: optional, with fetch_segment_locations / fetch_segment_waypoints
        poi_client: optional, with fetch_pois_for_segments(regions)

    Raises:
        UpstreamDataMissingError if the route has fewer than 2 coordinates
    """
    route = osrm.fetch_walking_route(config.start, config.end)
    if route is None or len(route.geometry) < 2:
        raise UpstreamDataMissingError("routing service returned no usable route geometry")
    logger.info("Route found: %.0f m, %d steps", route.distance, len(route.steps))

    steps = list(route.steps)
    segments = segment_route(route.geometry, steps, policy=config.segmentation)

    if geocoder is not None:
        locations = geocoder.fetch_segment_locations(segments)
        geocoder.fetch_segment_waypoints(segments, config.waypoints_per_segment)
    else:
        locations = [SegmentLocation(start_name="Unknown", end_name="Unknown") for _ in segments]

    segment_steps = group_steps_by_segment(steps, segments)

    if poi_client is not None:
        segment_pois = poi_client.fetch_pois_for_segments([s.bounding_region for s in segments])
    else:
        segment_pois = [[] for _ in segments]

    overview = build_overview_package(route.geometry, config.map_policy)
    segment_packages = build_segment_packages(
        segments,
        segment_pois,
        policy=config.map_policy,
        label_policy=config.label_policy,
        max_workers=config.render_workers,
    )

    return DirectionsDocument(
        route=route,
        steps=steps,
        segments=segments,
        locations=locations,
        segment_steps=segment_steps,
        overview=overview,
        segment_packages=segment_packages,
        segment_pois=segment_pois,
    )
