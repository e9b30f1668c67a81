"""
Purpose: Assemble render-ready geometry for the overview map and each segment map.
What it does:

- fits a Projection to the (padded, aspect-adjusted) region
- picks the zoom and the covering tiles, with resolved URLs and pixel rectangles
- projects the decimated path and the start / end markers
- places POI labels (segment maps only)

Output is inert data (RenderPackage). Markup is left to the document layer.

Per-segment packages are independent, so build_segment_packages can fan out
over a thread pool and reassembles results by segment index.
"""

# rendering/package.py

from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from geo.errors import InsufficientGeometryError
from geo.geomath import bounding_region, decimate
from geo.models import BoundingRegion, LonLat
from routing.models import PointOfInterest
from segments.models import RouteSegment

from .labeler import LabelPlacement, place_labels
from .policy import LabelPolicy, MapPolicy, Viewport, default_label_policy, default_map_policy
from .projector import Pixel, Projection, TileReference, choose_zoom, tile_bounds, tiles_covering

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TilePlacement:
    """A tile with its resolved URL and where it lands in the viewport."""
    tile: TileReference
    url: str
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class RenderPackage:
    viewport: Viewport
    region: BoundingRegion
    zoom: int
    path: List[Pixel]
    tiles: List[TilePlacement]
    start_marker: Pixel
    end_marker: Pixel
    labels: List[LabelPlacement] = field(default_factory=list)


def place_tiles(projection: Projection, zoom: int, url_template: str) -> List[TilePlacement]:
    placements: List[TilePlacement] = []
    for tile in tiles_covering(projection.region, zoom):
        bounds = tile_bounds(tile.x, tile.y, tile.zoom)
        left, top = projection((bounds.min_lon, bounds.max_lat))
        right, bottom = projection((bounds.max_lon, bounds.min_lat))
        placements.append(
            TilePlacement(
                tile=tile,
                url=tile.url(url_template),
                x=left,
                y=top,
                width=right - left,
                height=bottom - top,
            )
        )
    return placements


def build_overview_package(coordinates: Sequence[LonLat], policy: Optional[MapPolicy] = None) -> RenderPackage:
    """Whole-route map: no labels, label-free tile set."""
    policy = policy or default_map_policy()
    if len(coordinates) < 2:
        raise InsufficientGeometryError(f"overview needs at least 2 coordinates, got {len(coordinates)}")

    projection = Projection.fit(bounding_region(coordinates, policy.padding_fraction), policy.overview)
    zoom = _zoom_for(projection, policy)

    return RenderPackage(
        viewport=policy.overview,
        region=projection.region,
        zoom=zoom,
        path=projection.project_path(decimate(coordinates, policy.max_overview_points)),
        tiles=place_tiles(projection, zoom, policy.overview_tile_url_template),
        start_marker=projection(coordinates[0]),
        end_marker=projection(coordinates[-1]),
    )


def build_segment_package(
    segment: RouteSegment,
    pois: Sequence[PointOfInterest] = (),
    policy: Optional[MapPolicy] = None,
    label_policy: Optional[LabelPolicy] = None,
) -> RenderPackage:
    policy = policy or default_map_policy()
    label_policy = label_policy or default_label_policy()

    projection = Projection.fit(bounding_region(segment.coordinates, policy.padding_fraction), policy.segment)
    zoom = _zoom_for(projection, policy)
    start_marker = projection(segment.start_coordinate)
    end_marker = projection(segment.end_coordinate)

    labels = place_labels(
        pois,
        segment.coordinates,
        projection,
        start_marker,
        end_marker,
        label_policy,
    )

    return RenderPackage(
        viewport=policy.segment,
        region=projection.region,
        zoom=zoom,
        path=projection.project_path(decimate(segment.coordinates, policy.max_segment_points)),
        tiles=place_tiles(projection, zoom, policy.tile_url_template),
        start_marker=start_marker,
        end_marker=end_marker,
        labels=labels,
    )


def build_segment_packages(
    segments: Sequence[RouteSegment],
    pois_by_segment: Optional[Sequence[Sequence[PointOfInterest]]] = None,
    *,
    policy: Optional[MapPolicy] = None,
    label_policy: Optional[LabelPolicy] = None,
    max_workers: int = 1,
) -> List[RenderPackage]:
    """
    One RenderPackage per segment, in segment order.
    With max_workers > 1 the segments are rendered on a thread pool.
    """
    policy = policy or default_map_policy()
    label_policy = label_policy or default_label_policy()
    policy.validate()
    label_policy.validate()

    pois_by_segment = list(pois_by_segment or [])

    def pois_for(position: int) -> Sequence[PointOfInterest]:
        return pois_by_segment[position] if position < len(pois_by_segment) else ()

    if max_workers <= 1 or len(segments) <= 1:
        return [
            build_segment_package(segment, pois_for(i), policy, label_policy)
            for i, segment in enumerate(segments)
        ]

    results: Dict[int, RenderPackage] = {}
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(build_segment_package, segment, pois_for(i), policy, label_policy): segment.index
            for i, segment in enumerate(segments)
        }
        for future in concurrent.futures.as_completed(futures):
            results[futures[future]] = future.result()

    logger.info("Rendered %d segment maps on %d workers", len(results), max_workers)
    return [results[segment.index] for segment in segments]


def unique_tiles(packages: Sequence[RenderPackage]) -> List[TileReference]:
    """
    Distinct tiles across packages, first-seen order. Neighbouring segments
    share tiles, so a fetch layer should request each (x, y, zoom) once.
    """
    seen = {}
    for package in packages:
        for placement in package.tiles:
            seen.setdefault(placement.tile, None)
    return list(seen)


def _zoom_for(projection: Projection, policy: MapPolicy) -> int:
    return choose_zoom(
        projection.region,
        projection.viewport.width,
        projection.viewport.height,
        min_zoom=policy.min_zoom,
        max_zoom=policy.max_zoom,
        tile_size=policy.tile_size,
    )
