import pytest
from unittest.mock import MagicMock, patch

import requests

from routing.models import InstructionKind, Location, StepIcon
from routing.osrm_client import OSRMClient, OSRMError


@pytest.fixture
def start():
    return Location(lat=40.8075, lon=-73.9626, name="Columbia University", address="116th St & Broadway")


@pytest.fixture
def end():
    return Location(lat=40.8150, lon=-73.9550, name="Harlem", address="125th St")


@pytest.fixture
def osrm_payload():
    return {
        "code": "Ok",
        "routes": [{
            "distance": 1340.0,
            "duration": 600.0,
            "geometry": {"type": "LineString", "coordinates": [[-73.9626, 40.8075], [-73.9600, 40.8100], [-73.9550, 40.8150]]},
            "legs": [{
                "steps": [
                    {
                        "name": "Broadway",
                        "distance": 670.0,
                        "maneuver": {"type": "depart", "location": [-73.9626, 40.8075]},
                        "geometry": {"coordinates": [[-73.9626, 40.8075], [-73.9600, 40.8100]]},
                    },
                    {
                        "name": "West 125th Street",
                        "distance": 670.0,
                        "maneuver": {"type": "turn", "modifier": "slight right", "location": [-73.9600, 40.8100]},
                        "geometry": {"coordinates": [[-73.9600, 40.8100], [-73.9550, 40.8150]]},
                    },
                    {"name": "no maneuver", "distance": 5.0},
                    {
                        "name": "",
                        "distance": 0.0,
                        "maneuver": {"type": "teleport", "location": [-73.9550, 40.8150]},
                    },
                ],
            }],
        }],
    }


def mock_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


def test_fetch_walking_route(start, end, osrm_payload):
    client = OSRMClient(base_url="https://osrm.example/routed-foot")

    with patch("routing.osrm_client.requests.get", return_value=mock_response(osrm_payload)) as mock_get:
        route = client.fetch_walking_route(start, end)

    url = mock_get.call_args[0][0]
    assert url == "https://osrm.example/routed-foot/route/v1/foot/-73.9626,40.8075;-73.955,40.815"
    assert mock_get.call_args[1]["params"] == {"overview": "full", "geometries": "geojson", "steps": "true"}
    assert mock_get.call_args[1]["timeout"] == 30

    assert route.geometry[0] == (-73.9626, 40.8075)
    assert route.distance == 1340.0
    # walking speed, not the server's duration
    assert route.duration == pytest.approx(1000.0)


def test_extract_steps(start, end, osrm_payload):
    client = OSRMClient(base_url="https://osrm.example/routed-foot")
    steps = client.extract_steps(osrm_payload["routes"][0])

    assert len(steps) == 3
    assert steps[0].instruction is InstructionKind.DEPART
    assert steps[0].icon is StepIcon.START
    assert steps[1].modifier == "slight right"
    assert steps[1].icon is StepIcon.SLIGHT_RIGHT
    assert steps[1].geometry == ((-73.96, 40.81), (-73.955, 40.815))
    assert steps[1].duration == pytest.approx(500.0)
    # unknown maneuver types are kept as OTHER
    assert steps[2].instruction is InstructionKind.OTHER
    assert steps[2].geometry == ()


def test_error_code_raises(start, end):
    client = OSRMClient(base_url="https://osrm.example/routed-foot")
    payload = {"code": "NoRoute", "message": "Impossible route between points"}

    with patch("routing.osrm_client.requests.get", return_value=mock_response(payload)):
        with pytest.raises(OSRMError, match="Impossible route"):
            client.fetch_walking_route(start, end)


def test_empty_routes_raise():
    client = OSRMClient(base_url="https://osrm.example/routed-foot")
    with pytest.raises(OSRMError):
        client.parse_route({"code": "Ok", "routes": []})


def test_network_failure_raises(start, end):
    client = OSRMClient(base_url="https://osrm.example/routed-foot")

    with patch("routing.osrm_client.requests.get", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(OSRMError):
            client.fetch_walking_route(start, end)
