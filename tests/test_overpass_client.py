import pytest
from unittest.mock import MagicMock, patch

import requests

from geo.models import BoundingRegion
from routing.models import POICategory
from routing.overpass_client import OverpassClient, build_poi_query, parse_pois


@pytest.fixture
def region():
    return BoundingRegion.from_extents(min_lat=41.0, max_lat=41.1, min_lon=-73.6, max_lon=-73.5)


def element(element_id, amenity, name="Somewhere", lon=-73.55, lat=41.05):
    tags = {"amenity": amenity}
    if name:
        tags["name"] = name
    return {"id": element_id, "lon": lon, "lat": lat, "tags": tags}


def test_build_poi_query(region):
    query = build_poi_query(region)
    assert "(41.0,-73.6,41.1,-73.5)" in query
    assert "hospital|fire_station|police|place_of_worship|fuel|school" in query
    assert '["name"]' in query


def test_parse_pois_filters_and_sorts():
    elements = [
        element(1, "school", "Sherman School"),
        element(2, "fuel", None),
        element(3, "hospital", "New Milford Hospital"),
        element(4, "cafe", "Bean There"),
        element(5, "police", "State Police Troop L"),
    ]

    pois = parse_pois(elements)

    assert [p.id for p in pois] == [3, 5, 1]
    assert pois[0].category is POICategory.HOSPITAL
    assert pois[0].coordinate == (-73.55, 41.05)


def test_parse_pois_caps_at_ten():
    pois = parse_pois([element(i, "school", f"School {i}") for i in range(15)])
    assert [p.id for p in pois] == list(range(10))


def test_fetch_pois(region):
    response = MagicMock()
    response.json.return_value = {"elements": [element(1, "fire_station", "Engine 1")]}
    client = OverpassClient(base_url="https://overpass.example/api/interpreter")

    with patch("routing.overpass_client.requests.post", return_value=response) as mock_post:
        pois = client.fetch_pois(region)

    assert [p.name for p in pois] == ["Engine 1"]
    assert mock_post.call_args[0][0] == "https://overpass.example/api/interpreter"
    assert "data" in mock_post.call_args[1]["data"]


def test_fetch_pois_failure_returns_empty(region):
    client = OverpassClient(base_url="https://overpass.example/api/interpreter")
    with patch("routing.overpass_client.requests.post", side_effect=requests.ConnectionError("down")):
        assert client.fetch_pois(region) == []


def test_fetch_pois_for_segments_batches(region):
    sleeps = []
    client = OverpassClient(base_url="https://overpass.example/api/interpreter", sleep=sleeps.append)
    client.fetch_pois = MagicMock(side_effect=[[i] for i in range(7)])

    results = client.fetch_pois_for_segments([region] * 7, batch_size=3, pause_s=1.0)

    assert results == [[i] for i in range(7)]
    # pause between batches, not after the last one
    assert sleeps == [1.0, 1.0]
