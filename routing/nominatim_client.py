#Purpose: Reverse-geocoding adapter (Nominatim).
#Turns segment endpoints and sample points into place / road names.
#Nominatim allows ~1 request per second, so the client object owns its
#own "last request" timestamp and spaces calls out. No module-level state.
#Failures are logged and come back as None, a missing name never stops a run.

from __future__ import annotations

from dotenv import load_dotenv
import logging
import os
import time
from typing import Callable, Dict, List, Optional

import requests

from geo.geomath import path_length
from routing.models import SegmentLocation
from segments.models import RouteSegment, Waypoint

load_dotenv()
NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/reverse")
USER_AGENT = "EmergencyDirectionsGenerator/1.0"

logger = logging.getLogger(__name__)

# Most specific first
NAME_FIELDS = [
    "neighbourhood",
    "suburb",
    "town",
    "village",
    "hamlet",
    "city_district",
    "borough",
    "city",
    "municipality",
]

# Too broad to tell the reader anything
GENERIC_NAMES = {"City of New York", "New York"}

# Shorter road stretches are not worth a waypoint line
MIN_WAYPOINT_DISTANCE_M = 200.0


def extract_location_name(data: Optional[Dict]) -> str:
    """Best place name from a Nominatim reverse response, "Unknown" if none."""
    if not data or not data.get("address"):
        return "Unknown"

    address = data["address"]
    candidates = [address[key] for key in NAME_FIELDS if address.get(key)]
    if not candidates:
        return "Unknown"

    name = candidates[0]

    # If the name is too generic, add road context
    if address.get("road") and name in GENERIC_NAMES:
        if address.get("neighbourhood"):
            name = f"{address['neighbourhood']} ({address['road']})"
        else:
            name = address["road"]

    return name


class NominatimClient:
    """
    Rate-limited reverse geocoder.

    last_request_at is the monotonic time of the previous request; each
    call waits until min_interval_s has passed since then.
    """
    def __init__(
        self,
        base_url: Optional[str] = None,
        min_interval_s: float = 1.1,
        timeout: int = 30,
        zoom: int = 18,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = base_url or NOMINATIM_URL
        self.min_interval_s = min_interval_s
        self.timeout = timeout
        self.zoom = zoom #18 = building / street level detail
        self.last_request_at: Optional[float] = None
        self._clock = clock
        self._sleep = sleep

    def _wait_for_slot(self) -> None:
        now = self._clock()
        if self.last_request_at is not None:
            elapsed = now - self.last_request_at
            if elapsed < self.min_interval_s:
                self._sleep(self.min_interval_s - elapsed)
        self.last_request_at = self._clock()

    def reverse(self, lat: float, lon: float) -> Optional[Dict]:
        """Raw reverse-geocoding response, or None on any failure."""
        self._wait_for_slot()

        try:
            response = requests.get(
                self.base_url,
                params={
                    "lat": lat,
                    "lon": lon,
                    "format": "json",
                    "zoom": self.zoom,
                    "addressdetails": 1,
                },
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Failed to fetch place name for %s,%s: %s", lat, lon, exc)
            return None

    def fetch_segment_locations(self, segments: List[RouteSegment]) -> List[SegmentLocation]:
        """Start / end names for every segment, in segment order."""
        logger.info("Fetching location names for %d segments", len(segments))
        locations: List[SegmentLocation] = []

        for segment in segments:
            start_lon, start_lat = segment.start_coordinate
            end_lon, end_lat = segment.end_coordinate
            start_data = self.reverse(start_lat, start_lon)
            end_data = self.reverse(end_lat, end_lon)

            location = SegmentLocation(
                start_name=extract_location_name(start_data),
                end_name=extract_location_name(end_data),
                start_address=(start_data or {}).get("address"),
                end_address=(end_data or {}).get("address"),
            )
            locations.append(location)
            logger.info("Segment %d: %s -> %s", segment.index, location.start_name, location.end_name)

        return locations

    def fetch_segment_waypoints(self, segments: List[RouteSegment], samples_per_segment: int) -> None:
        """
        Sample each segment's interior and record road stretches longer than
        MIN_WAYPOINT_DISTANCE_M in segment.waypoints.
        """
        logger.info("Fetching intermediate waypoints for %d segments", len(segments))
        for segment in segments:
            segment.waypoints = self._waypoints_for(segment, samples_per_segment)
            logger.info("Segment %d: %d waypoints", segment.index, len(segment.waypoints))

    def _waypoints_for(self, segment: RouteSegment, samples: int) -> List[Waypoint]:
        coords = segment.coordinates
        step = len(coords) // (samples + 1)
        if step < 1:
            return []

        waypoints: List[Waypoint] = []
        last_road = ""
        last_road_start = 0

        for i in range(step, len(coords) - step, step):
            lon, lat = coords[i]
            data = self.reverse(lat, lon)
            road = ((data or {}).get("address") or {}).get("road")
            if not road:
                continue

            if last_road and road != last_road:
                distance = path_length(coords[last_road_start:i])
                if distance > MIN_WAYPOINT_DISTANCE_M:
                    waypoints.append(Waypoint(road=last_road, distance=distance))

            if road != last_road:
                last_road = road
                last_road_start = i

        # final stretch
        if last_road and last_road_start < len(coords) - 1:
            distance = path_length(coords[last_road_start:])
            if distance > MIN_WAYPOINT_DISTANCE_M:
                waypoints.append(Waypoint(road=last_road, distance=distance))

        return waypoints
