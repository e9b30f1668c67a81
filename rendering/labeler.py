"""
Purpose: Put up to three POI markers + labels on a segment map without collisions.
What it does:

- filters candidates to those near the route (proximity threshold in degrees)
- keeps the upstream priority order and stops at the display cap
- projects each POI, drops it if it is well outside the viewport, clamps it if only just outside
- picks a preferred side (left / right of the nearest route point)
- greedy search over radial offsets x vertical shifts, preferred side first,
  accepting the first box that clears the viewport margin, the route line,
  the start / end markers and every label already placed
- falls back to a clamped box beside the dot when nothing validates

Rule: Placement never fails; it only degrades (LabelPlacement.degraded).
"""

# rendering/labeler.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from shapely.geometry import LineString, Point, box

from geo.geomath import euclidean_distance
from geo.models import LonLat
from routing.models import PointOfInterest

from .policy import LabelPolicy, default_label_policy
from .projector import Pixel, Projection

# (x1, y1, x2, y2) in viewport pixels
PixelBox = Tuple[float, float, float, float]

ELLIPSIS = "…"


class Side(Enum):
    LEFT = -1
    RIGHT = 1

    @property
    def opposite(self) -> Side:
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


@dataclass(frozen=True)
class LabelPlacement:
    """
    One placed POI: the dot (anchor) and the top-left corner of its label box.
    """
    anchor: Pixel
    label_box: Pixel
    label_size: Tuple[float, float]
    poi: PointOfInterest
    display_name: str
    icon_key: str
    side: Side
    degraded: bool = False

    @property
    def box(self) -> PixelBox:
        x, y = self.label_box
        width, height = self.label_size
        return (x, y, x + width, y + height)


def truncate_name(name: str, max_chars: int) -> str:
    """Shorten to max_chars characters, the last one an ellipsis."""
    if len(name) <= max_chars:
        return name
    return name[:max_chars - 1].rstrip() + ELLIPSIS


def label_size(text: str, policy: LabelPolicy) -> Tuple[float, float]:
    width = len(text) * policy.char_width_px + 2 * policy.label_padding_px
    height = policy.label_height_px + 2 * policy.label_padding_px
    return (width, height)


def place_labels(
    pois: Sequence[PointOfInterest],
    route_coordinates: Sequence[LonLat],
    projection: Projection,
    start_marker: Pixel,
    end_marker: Pixel,
    policy: Optional[LabelPolicy] = None,
) -> List[LabelPlacement]:
    """
    Place labels for `pois` (already sorted by priority) on one rendered view.

    Args:
        pois: candidates in priority order
        route_coordinates: the segment's route, (lon, lat)
        projection: the segment's pixel projection
        start_marker / end_marker: pixel centers of the segment's endpoint markers
        policy: label sizes, thresholds and search order

    Returns:
        at most policy.max_labels placements, in candidate order
    """
    policy = policy or default_label_policy()
    policy.validate()

    if not pois or not route_coordinates or policy.max_labels == 0:
        return []

    path = _path_geometry(projection.project_path(route_coordinates))
    markers = [Point(start_marker), Point(end_marker)]
    threshold_deg = policy.proximity_m / policy.meters_per_degree

    placements: List[LabelPlacement] = []

    for poi in pois:
        if len(placements) >= policy.max_labels:
            break

        if not _near_route(poi.coordinate, route_coordinates, threshold_deg):
            continue

        anchor = _visible_anchor(projection(poi.coordinate), projection, policy)
        if anchor is None:
            continue

        display_name = truncate_name(poi.name, policy.name_max_chars)
        size = label_size(display_name, policy)
        preferred = preferred_side(anchor, path)

        found = _search(anchor, size, preferred, path, markers, placements, projection, policy)
        if found is not None:
            corner, side = found
            degraded = False
        else:
            corner, side = _fallback(anchor, size, preferred, projection, policy), preferred
            degraded = True

        placements.append(
            LabelPlacement(
                anchor=anchor,
                label_box=corner,
                label_size=size,
                poi=poi,
                display_name=display_name,
                icon_key=poi.icon_key,
                side=side,
                degraded=degraded,
            )
        )

    return placements


def preferred_side(anchor: Pixel, path) -> Side:
    """LEFT when the dot sits left of the nearest route point, else RIGHT."""
    dot = Point(anchor)
    if isinstance(path, LineString):
        nearest = path.interpolate(path.project(dot))
    else:
        nearest = path
    return Side.LEFT if anchor[0] < nearest.x else Side.RIGHT


def candidate_box(anchor: Pixel, size: Tuple[float, float], side: Side, offset: float, shift: float) -> PixelBox:
    """Label box `offset` px beside the dot on `side`, vertically centered then shifted."""
    width, height = size
    x, y = anchor
    top = y - height / 2 + shift
    left = x + offset if side is Side.RIGHT else x - offset - width
    return (left, top, left + width, top + height)


# -------------------------
# Internal helpers
# -------------------------

def _path_geometry(path_pixels: List[Pixel]):
    # all points may project onto the viewport center for a degenerate region
    distinct = []
    for p in path_pixels:
        if not distinct or distinct[-1] != p:
            distinct.append(p)
    if len(distinct) < 2:
        return Point(distinct[0])
    return LineString(distinct)


def _near_route(coordinate: LonLat, route: Iterable[LonLat], threshold_deg: float) -> bool:
    return any(euclidean_distance(coordinate, point) <= threshold_deg for point in route)


def _visible_anchor(raw: Pixel, projection: Projection, policy: LabelPolicy) -> Optional[Pixel]:
    width = projection.viewport.width
    height = projection.viewport.height
    tol = policy.outside_tolerance_px
    x, y = raw

    if x < -tol or x > width + tol or y < -tol or y > height + tol:
        return None

    r = policy.dot_radius_px
    return (min(max(x, r), width - r), min(max(y, r), height - r))


def _search(
    anchor: Pixel,
    size: Tuple[float, float],
    preferred: Side,
    path,
    markers: List[Point],
    placed: List[LabelPlacement],
    projection: Projection,
    policy: LabelPolicy,
) -> Optional[Tuple[Pixel, Side]]:
    for side in (preferred, preferred.opposite):
        for offset in policy.radial_offsets_px:
            for shift in policy.vertical_shifts_px:
                candidate = candidate_box(anchor, size, side, offset, shift)
                if _is_valid(candidate, path, markers, placed, projection, policy):
                    return (candidate[0], candidate[1]), side
    return None


def _is_valid(
    candidate: PixelBox,
    path,
    markers: List[Point],
    placed: List[LabelPlacement],
    projection: Projection,
    policy: LabelPolicy,
) -> bool:
    x1, y1, x2, y2 = candidate
    margin = policy.viewport_margin_px
    if x1 < margin or y1 < margin:
        return False
    if x2 > projection.viewport.width - margin or y2 > projection.viewport.height - margin:
        return False

    rect = box(x1, y1, x2, y2)

    if rect.distance(path) < policy.min_path_distance_px:
        return False

    if any(rect.distance(marker) < policy.min_marker_distance_px for marker in markers):
        return False

    for other in placed:
        if rect.distance(box(*other.box)) < policy.min_label_separation_px:
            return False

    return True


def _fallback(anchor: Pixel, size: Tuple[float, float], side: Side, projection: Projection, policy: LabelPolicy) -> Pixel:
    left, top, _, _ = candidate_box(anchor, size, side, policy.fallback_offset_px, 0.0)
    width, height = size
    max_left = max(projection.viewport.width - width, 0.0)
    max_top = max(projection.viewport.height - height, 0.0)
    return (min(max(left, 0.0), max_left), min(max(top, 0.0), max_top))
