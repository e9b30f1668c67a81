"""
Rendering package.

Public API:
- Policies: MapPolicy, LabelPolicy, Viewport (+ default factories)
- Projector: TileReference, Projection, tile_index, tile_bounds, choose_zoom,
  adjust_for_aspect_ratio, project, tiles_covering
- Labeler: LabelPlacement, Side, place_labels, truncate_name
- Packages: RenderPackage, TilePlacement, build_overview_package,
  build_segment_package, build_segment_packages, unique_tiles
"""
from .policy import (
    MapPolicy,
    LabelPolicy,
    Viewport,
    default_map_policy,
    default_label_policy,
)
from .projector import (
    TileReference,
    Projection,
    tile_index,
    tile_bounds,
    choose_zoom,
    adjust_for_aspect_ratio,
    project,
    tiles_covering,
)
from .labeler import LabelPlacement, Side, place_labels, truncate_name
from .package import (
    RenderPackage,
    TilePlacement,
    build_overview_package,
    build_segment_package,
    build_segment_packages,
    unique_tiles,
)

__all__ = [
    "MapPolicy",
    "LabelPolicy",
    "Viewport",
    "default_map_policy",
    "default_label_policy",
    "TileReference",
    "Projection",
    "tile_index",
    "tile_bounds",
    "choose_zoom",
    "adjust_for_aspect_ratio",
    "project",
    "tiles_covering",
    "LabelPlacement",
    "Side",
    "place_labels",
    "truncate_name",
    "RenderPackage",
    "TilePlacement",
    "build_overview_package",
    "build_segment_package",
    "build_segment_packages",
    "unique_tiles",
]
