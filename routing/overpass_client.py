#Purpose: Point-of-interest adapter (Overpass API).
#Queries named amenity nodes inside a bounding region and returns them
#already filtered (name present, known category) and sorted by priority,
#which is exactly what the label placer expects to receive.
#Failures are logged and degrade to "no POIs" for that region.

from __future__ import annotations

from dotenv import load_dotenv
import logging
import os
import time
from typing import Callable, List, Optional, Sequence

import requests

from geo.models import BoundingRegion
from routing.models import POICategory, PointOfInterest

load_dotenv()
OVERPASS_URL = os.getenv("OVERPASS_URL", "https://overpass.kumi.systems/api/interpreter")

logger = logging.getLogger(__name__)

# Fetch a few more than the map can show so the labeler can skip crowded ones
MAX_POIS_PER_REGION = 10


def build_poi_query(region: BoundingRegion, limit: int = 20) -> str:
    bbox = f"{region.min_lat},{region.min_lon},{region.max_lat},{region.max_lon}"
    amenities = "|".join(category.amenity for category in POICategory.known())
    return (
        "[out:json][timeout:5];\n"
        "(\n"
        f'  node["amenity"~"{amenities}"]["name"]({bbox});\n'
        ");\n"
        f"out body {limit};"
    )


def parse_pois(elements: Sequence[dict]) -> List[PointOfInterest]:
    """Named elements of known categories, sorted by priority (stable)."""
    pois: List[PointOfInterest] = []
    for element in elements:
        tags = element.get("tags") or {}
        category = POICategory.from_amenity(tags.get("amenity"))
        if not tags.get("name") or category is POICategory.OTHER:
            continue
        pois.append(
            PointOfInterest(
                id=element["id"],
                coordinate=(float(element["lon"]), float(element["lat"])),
                name=tags["name"],
                category=category,
            )
        )

    pois.sort(key=lambda poi: poi.priority_rank)
    return pois[:MAX_POIS_PER_REGION]


class OverpassClient:
    def __init__(self, base_url: Optional[str] = None, timeout: int = 10,
                 sleep: Callable[[float], None] = time.sleep):
        self.base_url = base_url or OVERPASS_URL
        self.timeout = timeout
        self._sleep = sleep

    def fetch_pois(self, region: BoundingRegion) -> List[PointOfInterest]:
        try:
            response = requests.post(
                self.base_url,
                data={"data": build_poi_query(region)},
                timeout=self.timeout,
            )
            response.raise_for_status()
            elements = response.json().get("elements", [])
        except (requests.RequestException, ValueError) as exc:
            logger.error("Overpass API error: %s", exc)
            return []

        unhandled = sorted({
            (el.get("tags") or {}).get("amenity")
            for el in elements
            if POICategory.from_amenity((el.get("tags") or {}).get("amenity")) is POICategory.OTHER
        } - {None})
        if unhandled:
            logger.debug("Unhandled amenity types: %s", ", ".join(unhandled))

        return parse_pois(elements)

    def fetch_pois_for_segments(
        self,
        regions: Sequence[BoundingRegion],
        batch_size: int = 3,
        pause_s: float = 1.0,
    ) -> List[List[PointOfInterest]]:
        """
        POIs for each region, in region order. Requests go out in batches
        of batch_size with a pause between batches to stay polite.
        """
        logger.info("Fetching POIs for %d segments", len(regions))
        results: List[List[PointOfInterest]] = []

        for start in range(0, len(regions), batch_size):
            batch = regions[start:start + batch_size]
            for offset, region in enumerate(batch):
                pois = self.fetch_pois(region)
                logger.info("Segment %d: %d POIs found", start + offset + 1, len(pois))
                results.append(pois)

            if start + batch_size < len(regions):
                self._sleep(pause_s)

        return results
