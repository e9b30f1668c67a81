"""
Purpose: Central configuration for map rendering and label placement.
What it does:

Stores all tunable sizes and thresholds:

OVERVIEW viewport = 700 x 180, SEGMENT viewport = 120 x 120

BOUNDS_PADDING = 0.35

MAX_OVERVIEW_POINTS = 200, MAX_SEGMENT_POINTS = 100

ZOOM clamp = [12, 16]

MAX_LABELS = 3, POI proximity = 500 m

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

VOYAGER_TILES = "https://a.basemaps.cartocdn.com/rastertiles/voyager/{z}/{x}/{y}.png"
VOYAGER_NOLABELS_TILES = "https://a.basemaps.cartocdn.com/rastertiles/voyager_nolabels/{z}/{x}/{y}.png"


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int

    @property
    def aspect(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class MapPolicy:
    """
    Central configuration for map projection and tile selection.
    """

    # --- Viewports (pixels) ---
    overview: Viewport = field(default_factory=lambda: Viewport(700, 180))
    segment: Viewport = field(default_factory=lambda: Viewport(120, 120))

    # --- Bounds ---
    # Fraction of each axis' range added on both sides.
    padding_fraction: float = 0.35

    # --- Path simplification ---
    max_overview_points: int = 200
    max_segment_points: int = 100

    # --- Tiles ---
    # Templates must contain {z}, {x} and {y}.
    tile_url_template: str = VOYAGER_TILES
    # Overview uses a tile set without labels for a cleaner look.
    overview_tile_url_template: str = VOYAGER_NOLABELS_TILES
    tile_size: int = 256

    # Zoom clamp. Below 12 the street grid disappears, above 16 tiles get huge.
    min_zoom: int = 12
    max_zoom: int = 16

    def validate(self) -> None:
        for name, viewport in (("overview", self.overview), ("segment", self.segment)):
            if viewport.width <= 0 or viewport.height <= 0:
                raise ValueError(f"{name} viewport dimensions must be > 0")

        if self.padding_fraction < 0:
            raise ValueError("padding_fraction must be >= 0")

        if self.max_overview_points < 2 or self.max_segment_points < 2:
            raise ValueError("max path points must be >= 2")

        for template in (self.tile_url_template, self.overview_tile_url_template):
            if not all(part in template for part in ("{z}", "{x}", "{y}")):
                raise ValueError(f"tile url template needs {{z}}/{{x}}/{{y}}: {template}")

        if self.tile_size <= 0:
            raise ValueError("tile_size must be > 0")

        if not 0 <= self.min_zoom <= self.max_zoom:
            raise ValueError("zoom clamp must satisfy 0 <= min_zoom <= max_zoom")


@dataclass(frozen=True)
class LabelPolicy:
    """
    Central configuration for POI marker / label placement on segment maps.
    All distances are pixels unless the name says otherwise.
    """

    # --- Selection ---
    max_labels: int = 3
    # POIs farther than this from every route point are skipped.
    proximity_m: float = 500.0
    # Degree approximation used for the proximity test (1 degree of latitude).
    meters_per_degree: float = 111320.0

    # --- Label text ---
    name_max_chars: int = 14
    char_width_px: float = 3.6
    label_height_px: float = 8.0
    label_padding_px: float = 2.0

    # --- Marker ---
    dot_radius_px: float = 2.5
    # A projected POI further outside the viewport than this is dropped,
    # anything closer is clamped onto the edge.
    outside_tolerance_px: float = 6.0

    # --- Placement constraints ---
    viewport_margin_px: float = 2.0
    min_path_distance_px: float = 3.0
    min_marker_distance_px: float = 6.0
    min_label_separation_px: float = 2.0

    # --- Search order ---
    radial_offsets_px: Tuple[float, ...] = (6.0, 10.0, 16.0, 24.0)
    vertical_shifts_px: Tuple[float, ...] = (0.0, -8.0, 8.0, -16.0, 16.0)
    fallback_offset_px: float = 5.0

    def validate(self) -> None:
        if self.max_labels < 0:
            raise ValueError("max_labels must be >= 0")

        if self.proximity_m <= 0 or self.meters_per_degree <= 0:
            raise ValueError("proximity_m and meters_per_degree must be > 0")

        if self.name_max_chars < 2:
            raise ValueError("name_max_chars must be >= 2")

        if self.char_width_px <= 0 or self.label_height_px <= 0:
            raise ValueError("label metrics must be > 0")

        if not self.radial_offsets_px or not self.vertical_shifts_px:
            raise ValueError("search order needs at least one offset and one shift")

        if list(self.radial_offsets_px) != sorted(self.radial_offsets_px):
            raise ValueError("radial_offsets_px must be increasing")

        if min(self.min_path_distance_px, self.min_marker_distance_px, self.min_label_separation_px) < 0:
            raise ValueError("minimum distances must be >= 0")


def default_map_policy() -> MapPolicy:
    """
    Convenience factory for the default map policy.
    """
    p = MapPolicy()
    p.validate()
    return p


def default_label_policy() -> LabelPolicy:
    p = LabelPolicy()
    p.validate()
    return p
