#Purpose: The OSRM "adapter/client" for walking routes.
#Sole responsibility: talk to OSRM via HTTP and return normalized outputs.
#Encapsulates OSRM-specific details:
#coordinate formatting (lon,lat)
#URL construction (/route/v1/{profile}/...)
#timeouts and error handling
#parsing response JSON into Route / NavigationStep
#It should not contain segmentation or rendering rules.


from dotenv import load_dotenv
import logging
import os
from typing import List, Dict, Any, Optional
import requests

from geo.models import LonLat
from routing.models import InstructionKind, Location, NavigationStep, Route, WALKING_SPEED_MPS

# Read OSRM base URL from environment
# Example in .env:
# OSRM_BASE_URL=https://routing.openstreetmap.de/routed-foot
load_dotenv()
DEFAULT_BASE_URL = "https://routing.openstreetmap.de/routed-foot"
BASE_URL = os.getenv("OSRM_BASE_URL", DEFAULT_BASE_URL)

logger = logging.getLogger(__name__)


class OSRMError(Exception):
    """Custom exception for OSRM client errors."""
    pass


class OSRMClient:
    """
    OSRM Adapter / Client

    Sole responsibility:
    - Talk to OSRM via HTTP
    - Convert Location -> OSRM "lon,lat"
    - Return a Route with walking-speed durations

    """
    def __init__(self, profile: str = "foot", timeout: int = 30, base_url: Optional[str] = None,
                 walking_speed_mps: float = WALKING_SPEED_MPS):
        self.base_url = (base_url or BASE_URL).rstrip("/")
        self.timeout = timeout #seconds to wait for OSRM before giving up
        self.profile = profile #routing profile, the public foot server only knows "foot"
        self.walking_speed_mps = walking_speed_mps

        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set OSRM_BASE_URL in the .env file.")

    #----------------
    # Internal helpers
    #----------------
    def format_coordinates(self, locations: List[Location]) -> str:
        """Convert list of Location to OSRM format 'lon,lat;lon,lat;...'"""
        return ';'.join([f"{location.lon},{location.lat}" for location in locations])

    #----------------
    # Public methods
    #----------------
    def fetch_walking_route(self, start: Location, end: Location) -> Route:
        """
        Calls the OSRM /route endpoint with full GeoJSON geometry and steps.

        Returns:
            Route with geometry [(lon, lat), ...], distance in meters,
            duration re-derived from walking speed, and flattened steps.
        """
        coordinates = self.format_coordinates([start, end])
        url = f"{self.base_url}/route/v1/{self.profile}/{coordinates}"

        logger.info("Fetching route from OSRM: %s -> %s", start.name, end.name)
        try:
            response = requests.get(
                url,
                params={
                    "overview": "full",
                    "geometries": "geojson",
                    "steps": "true",
                },
                timeout=self.timeout,
            )
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise OSRMError(f"OSRM request failed: {exc}") from exc

        return self.parse_route(data)

    def parse_route(self, data: Dict[str, Any]) -> Route:
        """Normalize a raw OSRM /route response (also used for saved JSON files)."""
        #validating OSRM response
        if data.get("code") != "Ok":
            raise OSRMError(f"OSRM error: {data.get('message', data.get('code', 'Unknown error'))}")
        if not data.get("routes"):
            raise OSRMError("OSRM returned no routes")

        raw_route = data["routes"][0] #take the first route (OSRM may return alternatives)
        geometry: List[LonLat] = [
            (float(lon), float(lat)) for lon, lat in raw_route["geometry"]["coordinates"]
        ]
        distance = float(raw_route["distance"])

        return Route(
            geometry=geometry,
            distance=distance,
            # OSRM foot durations are unreliable, use our own walking speed
            duration=distance / self.walking_speed_mps,
            steps=self.extract_steps(raw_route),
        )

    def extract_steps(self, raw_route: Dict[str, Any]) -> List[NavigationStep]:
        """Flatten leg steps into NavigationSteps, skipping steps without a maneuver."""
        steps: List[NavigationStep] = []

        for leg in raw_route.get("legs", []):
            for step in leg.get("steps", []):
                maneuver = step.get("maneuver")
                if not maneuver:
                    continue

                distance = float(step.get("distance", 0.0))
                geometry = step.get("geometry") or {}
                lon, lat = maneuver["location"]
                steps.append(
                    NavigationStep(
                        instruction=InstructionKind.parse(maneuver.get("type")),
                        modifier=maneuver.get("modifier"),
                        road_name=step.get("name") or "",
                        distance=distance,
                        duration=distance / self.walking_speed_mps,
                        location=(float(lon), float(lat)),
                        geometry=tuple((float(x), float(y)) for x, y in geometry.get("coordinates", [])),
                    )
                )

        return steps
