import pytest
import random

from geo.errors import InsufficientGeometryError
from geo.geomath import decimate
from rendering.package import (
    build_overview_package,
    build_segment_package,
    build_segment_packages,
    unique_tiles,
)
from rendering.policy import MapPolicy, default_map_policy
from routing.models import POICategory, PointOfInterest
from segments import count_policy, segment_route


@pytest.fixture
def walking_route():
    # ~25 km wander north-east out of Manhattan
    rng = random.Random(21)
    lon, lat = -73.9626, 40.8075
    route = [(lon, lat)]
    for _ in range(499):
        lon += rng.uniform(0.0, 0.0006)
        lat += rng.uniform(0.0, 0.0006)
        route.append((lon, lat))
    return route


def test_overview_package(walking_route):
    policy = default_map_policy()
    package = build_overview_package(walking_route, policy)

    assert package.viewport == policy.overview
    assert 12 <= package.zoom <= 16
    assert len(package.path) == len(decimate(walking_route, policy.max_overview_points))
    assert package.start_marker == package.path[0]
    assert package.labels == []
    assert package.tiles
    assert all("voyager_nolabels" in t.url for t in package.tiles)
    assert all(str(package.zoom) in t.url for t in package.tiles)


def test_overview_requires_two_coordinates():
    with pytest.raises(InsufficientGeometryError):
        build_overview_package([(0.0, 0.0)])


def test_tiles_cover_the_viewport(walking_route):
    package = build_overview_package(walking_route)

    left = min(t.x for t in package.tiles)
    top = min(t.y for t in package.tiles)
    right = max(t.x + t.width for t in package.tiles)
    bottom = max(t.y + t.height for t in package.tiles)

    assert left <= 0 and top <= 0
    assert right >= package.viewport.width
    assert bottom >= package.viewport.height


def test_segment_package_places_labels(walking_route):
    segment = segment_route(walking_route, policy=count_policy(5))[0]
    lon, lat = segment.coordinates[len(segment.coordinates) // 2]
    pois = [PointOfInterest(id=1, coordinate=(lon + 0.0005, lat), name="Fire Dept", category=POICategory.FIRE_STATION)]

    package = build_segment_package(segment, pois)

    assert package.viewport.width == 120
    assert len(package.labels) == 1
    assert package.labels[0].icon_key == "fire-station"
    assert all("voyager/" in t.url for t in package.tiles)


def test_segment_map_honours_padding_fraction(walking_route):
    segment = segment_route(walking_route, policy=count_policy(5))[2]

    tight = build_segment_package(segment, policy=MapPolicy(padding_fraction=0.0))
    default = build_segment_package(segment)
    loose = build_segment_package(segment, policy=MapPolicy(padding_fraction=1.0))

    assert tight.region.lat_range < default.region.lat_range < loose.region.lat_range
    assert tight.region.lon_range < default.region.lon_range < loose.region.lon_range


def test_parallel_packages_match_sequential(walking_route):
    segments = segment_route(walking_route, policy=count_policy(6))

    sequential = build_segment_packages(segments)
    parallel = build_segment_packages(segments, max_workers=4)

    assert len(parallel) == 6
    assert parallel == sequential


def test_missing_pois_for_later_segments(walking_route):
    segments = segment_route(walking_route, policy=count_policy(3))
    poi = PointOfInterest(id=7, coordinate=segments[0].coordinates[3], name="PS 165", category=POICategory.SCHOOL)

    packages = build_segment_packages(segments, [[poi]])

    assert len(packages) == 3
    assert packages[1].labels == [] and packages[2].labels == []


def test_unique_tiles_dedupes_shared_tiles(walking_route):
    segments = segment_route(walking_route, policy=count_policy(4))
    packages = build_segment_packages(segments)

    tiles = unique_tiles(packages + packages)

    assert len(tiles) == len(set(tiles))
    assert set(tiles) == {placement.tile for package in packages for placement in package.tiles}
