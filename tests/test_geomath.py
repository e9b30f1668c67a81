import pytest
import math
import random

from geo.errors import InsufficientGeometryError
from geo.geomath import (
    bounding_region,
    decimate,
    great_circle_distance,
    nearest_coordinate_index,
    path_length,
)


@pytest.fixture
def random_points():
    rng = random.Random(42)
    return [(rng.uniform(-180, 180), rng.uniform(-85, 85)) for _ in range(50)]


def test_one_degree_of_longitude_at_equator():
    assert great_circle_distance((0.0, 0.0), (1.0, 0.0)) == pytest.approx(111195, abs=1)


def test_distance_is_symmetric(random_points):
    for a, b in zip(random_points, reversed(random_points)):
        assert great_circle_distance(a, b) == pytest.approx(great_circle_distance(b, a), abs=1e-6)


def test_distance_zero_only_for_identical_points(random_points):
    for point in random_points:
        assert great_circle_distance(point, point) == 0.0
    assert great_circle_distance((10.0, 10.0), (10.0, 10.000001)) > 0


def test_path_length_edge_cases():
    assert path_length([]) == 0.0
    assert path_length([(3.0, 4.0)]) == 0.0
    assert path_length([(3.0, 4.0)] * 5) == 0.0


def test_path_length_sums_consecutive_pairs(random_points):
    expected = sum(
        great_circle_distance(random_points[i - 1], random_points[i])
        for i in range(1, len(random_points))
    )
    assert path_length(random_points) == pytest.approx(expected)
    assert path_length(random_points) > 0


def test_bounding_region_padding_and_center():
    region = bounding_region([(0.0, 0.0), (1.0, 2.0)], 0.35)

    assert region.min_lon == pytest.approx(-0.35)
    assert region.max_lon == pytest.approx(1.35)
    assert region.min_lat == pytest.approx(-0.7)
    assert region.max_lat == pytest.approx(2.7)
    # center of the padded extremes
    assert region.center_lon == pytest.approx(0.5)
    assert region.center_lat == pytest.approx(1.0)


def test_bounding_region_contains_every_input(random_points):
    for padding in (0.0, 0.35):
        region = bounding_region(random_points, padding)
        for lon, lat in random_points:
            assert region.contains(lon, lat)


def test_bounding_region_single_point_is_degenerate():
    region = bounding_region([(5.0, 5.0)], 0.35)
    assert region.is_degenerate
    assert region.center_lon == 5.0


def test_bounding_region_rejects_empty_input():
    with pytest.raises(InsufficientGeometryError):
        bounding_region([], 0.35)


def test_decimate_stride_arithmetic():
    coords = [(float(i), 0.0) for i in range(250)]

    result = decimate(coords, 100)

    # stride = 250 // 100 = 2
    assert len(result) == 125
    assert result[0] == coords[0]
    assert result[1] == coords[2]
    # index based: the final coordinate (index 249) is not kept
    assert result[-1] == coords[248]


def test_decimate_short_input_unchanged():
    coords = [(float(i), 1.0) for i in range(10)]
    assert decimate(coords, 100) == coords
    assert decimate(coords, 10) == coords


def test_nearest_coordinate_index_prefers_first_on_ties():
    coords = [(0.0, 0.0), (2.0, 0.0), (1.0, 1.0), (1.0, -1.0)]
    assert nearest_coordinate_index(coords, (1.0, 0.0)) == 0
    assert nearest_coordinate_index(coords, (2.1, 0.0)) == 1


def test_nearest_coordinate_index_empty():
    with pytest.raises(InsufficientGeometryError):
        nearest_coordinate_index([], (0.0, 0.0))


def test_haversine_matches_arc_length():
    # quarter of a meridian
    assert great_circle_distance((0.0, 0.0), (0.0, 90.0)) == pytest.approx(6371000 * math.pi / 2)
