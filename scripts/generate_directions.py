import argparse
import json
import logging
import os
import time
from dataclasses import asdict
from enum import Enum

import pandas as pd

from directions.config import load_config
from directions.instructions import days_needed, format_distance, format_duration, format_step_instruction
from directions.pipeline import DirectionsDocument, generate_directions
from routing.nominatim_client import NominatimClient
from routing.osrm_client import OSRMClient
from routing.overpass_client import OverpassClient


class SavedRouteClient:
    """Serves a saved OSRM /route JSON instead of calling the server."""
    def __init__(self, path: str, osrm: OSRMClient):
        self.path = path
        self.osrm = osrm

    def fetch_walking_route(self, start, end):
        with open(self.path, "r") as f:
            data = json.load(f)
        return self.osrm.parse_route(data)


def _json_default(value):
    if isinstance(value, Enum):
        return value.name
    raise TypeError(f"not JSON serializable: {type(value).__name__}")


def write_outputs(document: DirectionsDocument, output_dir: str) -> None:
    os.makedirs(output_dir, exist_ok=True)

    packages_path = os.path.join(output_dir, "render_packages.json")
    with open(packages_path, "w") as f:
        json.dump(
            {
                "overview": asdict(document.overview),
                "segments": [asdict(package) for package in document.segment_packages],
            },
            f,
            default=_json_default,
        )

    rows = []
    for segment, location, steps, package in zip(
        document.segments, document.locations, document.segment_steps, document.segment_packages
    ):
        rows.append({
            "segment": segment.index,
            "from": location.start_name,
            "to": location.end_name,
            "distance_m": round(segment.distance, 1),
            "distance": format_distance(segment.distance),
            "duration": format_duration(segment.duration),
            "steps": len(steps),
            "waypoints": "; ".join(w.road for w in segment.waypoints),
            "zoom": package.zoom,
            "tiles": len(package.tiles),
            "labels": "; ".join(label.display_name for label in package.labels),
        })

    csv_path = os.path.join(output_dir, "segments.csv")
    pd.DataFrame(rows).to_csv(csv_path, index=False)

    print(f"Render packages written to: {packages_path}")
    print(f"Segment summary written to: {csv_path}")


def run(route_file=None, skip_geocoding=False, skip_pois=False):
    print("=== Walking Directions Generator ===\n")
    start_time = time.time()

    config = load_config()

    osrm = OSRMClient(base_url=config.osrm_base_url)
    if route_file:
        print(f"Using saved route: {route_file}")
        osrm = SavedRouteClient(route_file, osrm)

    geocoder = None if skip_geocoding else NominatimClient(base_url=config.nominatim_url)
    poi_client = None if skip_pois else OverpassClient(base_url=config.overpass_url)

    document = generate_directions(config, osrm, geocoder, poi_client)

    route = document.route
    print(f"Route: {config.start.name} -> {config.end.name}")
    print(f"  {format_distance(route.distance)}, {format_duration(route.duration)} walking, "
          f"~{days_needed(route.duration, config.walking_hours_per_day)} day(s)")
    print(f"  {len(document.steps)} navigation steps, {len(document.segments)} segments\n")

    for segment, location, steps in zip(document.segments, document.locations, document.segment_steps):
        print(f"Segment {segment.index}: {location.start_name} -> {location.end_name} "
              f"({format_distance(segment.distance)}, {format_duration(segment.duration)})")
        for step in steps:
            print(f"    {format_step_instruction(step)}")

    print()
    write_outputs(document, config.output_dir)
    print(f"Total time: {time.time() - start_time:.1f}s")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate segmented walking directions")
    parser.add_argument("--route-file", help="saved OSRM /route JSON (offline run)")
    parser.add_argument("--skip-geocoding", action="store_true", help="do not call Nominatim")
    parser.add_argument("--skip-pois", action="store_true", help="do not call Overpass")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run(args.route_file, args.skip_geocoding, args.skip_pois)
