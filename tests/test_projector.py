import pytest
import math
import random

from geo.models import BoundingRegion
from rendering.policy import Viewport
from rendering.projector import (
    Projection,
    TileReference,
    adjust_for_aspect_ratio,
    choose_zoom,
    project,
    tile_bounds,
    tile_index,
    tiles_covering,
)


def region_around(lat: float, lon: float, lat_span: float, lon_span: float) -> BoundingRegion:
    return BoundingRegion.from_extents(
        min_lat=lat - lat_span / 2,
        max_lat=lat + lat_span / 2,
        min_lon=lon - lon_span / 2,
        max_lon=lon + lon_span / 2,
    )


def test_small_region_clamps_to_max_zoom():
    region = region_around(0.0, 0.0, 0.01, 0.01)
    assert choose_zoom(region, 700, 180) == 16


def test_large_region_clamps_to_min_zoom():
    region = region_around(41.0, -73.0, 10.0, 10.0)
    assert choose_zoom(region, 120, 120) == 12


def test_zoom_between_clamps():
    # 0.03 degrees over 120 px: ideal ~ 12.46, plus one level -> 14
    assert choose_zoom(region_around(0.0, 0.0, 0.03, 0.03), 120, 120) == 14
    # 0.05 degrees: ideal ~ 11.72 -> 13
    assert choose_zoom(region_around(0.0, 0.0, 0.05, 0.05), 120, 120) == 13


def test_zoom_always_within_clamp():
    rng = random.Random(3)
    for _ in range(200):
        region = region_around(
            rng.uniform(-60, 60), rng.uniform(-170, 170),
            rng.uniform(1e-6, 5.0), rng.uniform(1e-6, 5.0),
        )
        zoom = choose_zoom(region, rng.randint(1, 1000), rng.randint(1, 1000))
        assert 12 <= zoom <= 16


def test_zero_extent_region_uses_max_zoom():
    region = BoundingRegion.from_extents(1.0, 1.0, 2.0, 2.0)
    assert choose_zoom(region, 120, 120) == 16


def test_tile_index_known_values():
    assert tile_index(0.0, 0.0, 1) == (1, 1)
    assert tile_index(85.0, -180.0, 3) == (0, 0)
    # antimeridian and the southern mercator limit stay on the grid
    assert tile_index(-89.0, 180.0, 2) == (3, 3)


def test_tile_bounds_contains_the_point():
    rng = random.Random(9)
    for _ in range(100):
        lat, lon = rng.uniform(-80, 80), rng.uniform(-179, 179)
        zoom = rng.randint(0, 18)
        x, y = tile_index(lat, lon, zoom)
        assert tile_bounds(x, y, zoom).contains(lon, lat)


def test_tile_bounds_world_tile():
    bounds = tile_bounds(0, 0, 0)
    assert bounds.min_lon == -180.0
    assert bounds.max_lon == 180.0
    assert bounds.max_lat == pytest.approx(85.0511, abs=1e-4)
    assert bounds.min_lat == pytest.approx(-85.0511, abs=1e-4)


def test_adjust_for_aspect_ratio_matches_viewport():
    region = region_around(40.0, -74.0, 0.01, 0.01)

    adjusted = adjust_for_aspect_ratio(region, 700, 180)

    correction = math.cos(math.radians(40.0))
    ground_aspect = adjusted.lon_range * correction / adjusted.lat_range
    assert ground_aspect == pytest.approx(700 / 180)
    # latitude was the constraint, so it is untouched
    assert adjusted.lat_range == pytest.approx(0.01)
    assert adjusted.center_lat == pytest.approx(40.0)
    assert adjusted.center_lon == pytest.approx(-74.0)


def test_adjust_for_aspect_ratio_grows_latitude_for_wide_region():
    region = region_around(0.0, 0.0, 0.01, 0.04)

    adjusted = adjust_for_aspect_ratio(region, 120, 120)

    assert adjusted.lon_range == pytest.approx(0.04)
    assert adjusted.lat_range == pytest.approx(0.04)


def test_adjust_for_aspect_ratio_single_point_unchanged():
    region = BoundingRegion.from_extents(1.0, 1.0, 2.0, 2.0)
    assert adjust_for_aspect_ratio(region, 120, 120) == region


def test_project_corners_and_inverted_y():
    region = BoundingRegion.from_extents(min_lat=10.0, max_lat=11.0, min_lon=20.0, max_lon=22.0)

    assert project(20.0, 11.0, region, 200, 100) == (0.0, 0.0)
    assert project(22.0, 10.0, region, 200, 100) == (200.0, 100.0)
    assert project(21.0, 10.5, region, 200, 100) == (100.0, 50.0)


def test_project_degenerate_region_returns_center():
    flat = BoundingRegion.from_extents(min_lat=10.0, max_lat=10.0, min_lon=20.0, max_lon=22.0)
    assert project(21.0, 10.0, flat, 120, 80) == (60.0, 40.0)


def test_tiles_covering_single_tile():
    bounds = tile_bounds(10, 20, 5)
    eps = 1e-6
    inner = BoundingRegion.from_extents(
        bounds.min_lat + eps, bounds.max_lat - eps, bounds.min_lon + eps, bounds.max_lon - eps
    )
    assert tiles_covering(inner, 5) == [TileReference(x=10, y=20, zoom=5)]


def test_tiles_covering_spans_corner_tiles():
    nw = tile_bounds(10, 20, 5)
    se = tile_bounds(11, 21, 5)
    region = BoundingRegion.from_extents(
        min_lat=se.min_lat + 1e-6,
        max_lat=nw.max_lat - 1e-6,
        min_lon=nw.min_lon + 1e-6,
        max_lon=se.max_lon - 1e-6,
    )

    tiles = tiles_covering(region, 5)

    assert sorted(tiles) == [
        TileReference(10, 20, 5),
        TileReference(10, 21, 5),
        TileReference(11, 20, 5),
        TileReference(11, 21, 5),
    ]


def test_tile_reference_url():
    tile = TileReference(x=3, y=7, zoom=14)
    assert tile.url("https://tiles.example/{z}/{x}/{y}.png") == "https://tiles.example/14/3/7.png"


def test_projection_fit_uses_adjusted_region():
    raw = region_around(0.0, 0.0, 0.01, 0.04)
    projection = Projection.fit(raw, Viewport(120, 120))

    assert projection.region.lat_range == pytest.approx(0.04)
    assert projection((0.0, 0.0)) == pytest.approx((60.0, 60.0))
    assert projection.project_path([(0.0, 0.0), (0.0, 0.0)]) == [projection((0.0, 0.0))] * 2
