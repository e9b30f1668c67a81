import json
import argparse

import numpy as np

EARTH_RADIUS_METERS = 6371000.0

ROAD_NAMES = [
    "Broadway", "Main Street", "Riverside Drive", "Mill Road", "Church Street",
    "Old Post Road", "Maple Avenue", "Route 7", "Hillside Lane", "Elm Street",
]
MODIFIERS = ["left", "right", "slight left", "slight right", "straight", "sharp left", "sharp right"]


def haversine_m(lons, lats):
    """Edge lengths in meters for consecutive points (numpy arrays)."""
    lon1, lat1 = np.radians(lons[:-1]), np.radians(lats[:-1])
    lon2, lat2 = np.radians(lons[1:]), np.radians(lats[1:])
    a = np.sin((lat2 - lat1) / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def generate_mock_route(
    start=(40.8075, -73.9626),
    end=(41.5787, -73.4959),
    num_points=1500,
    points_per_step=60,
    wiggle=0.0008,
    seed=7,
    output_file="mock_route.json",
):
    """
    Writes an OSRM-shaped /route response for offline runs.

    The path is a straight line between start and end (lat, lon) with a
    random-walk offset pinned to zero at both ends, so it meanders like a
    road but still starts and finishes exactly at the given points.
    """
    rng = np.random.default_rng(seed)

    t = np.linspace(0.0, 1.0, num_points)
    walk = np.cumsum(rng.normal(0.0, wiggle, size=(num_points, 2)), axis=0)
    # pin the walk to zero at both ends
    walk -= np.outer(t, walk[-1])
    lats = start[0] + t * (end[0] - start[0]) + walk[:, 0]
    lons = start[1] + t * (end[1] - start[1]) + walk[:, 1]

    edges = haversine_m(lons, lats)
    coordinates = [[round(float(lon), 6), round(float(lat), 6)] for lon, lat in zip(lons, lats)]

    steps = []
    boundaries = list(range(0, num_points - 1, points_per_step)) + [num_points - 1]
    for i, (first, last) in enumerate(zip(boundaries[:-1], boundaries[1:])):
        maneuver = {"type": "turn", "modifier": str(rng.choice(MODIFIERS)), "location": coordinates[first]}
        if i == 0:
            maneuver = {"type": "depart", "location": coordinates[first]}
        distance = float(edges[first:last].sum())
        steps.append({
            "name": str(rng.choice(ROAD_NAMES)),
            "distance": round(distance, 1),
            "duration": round(distance / 1.34, 1),
            "maneuver": maneuver,
            "geometry": {"type": "LineString", "coordinates": coordinates[first:last + 1]},
        })
    steps.append({
        "name": steps[-1]["name"] if steps else "",
        "distance": 0.0,
        "duration": 0.0,
        "maneuver": {"type": "arrive", "location": coordinates[-1]},
        "geometry": {"type": "LineString", "coordinates": [coordinates[-1], coordinates[-1]]},
    })

    total = float(edges.sum())
    data = {
        "code": "Ok",
        "routes": [{
            "distance": round(total, 1),
            "duration": round(total / 1.34, 1),
            "geometry": {"type": "LineString", "coordinates": coordinates},
            "legs": [{"distance": round(total, 1), "steps": steps}],
        }],
    }

    with open(output_file, "w") as f:
        json.dump(data, f)

    print(f"✅ Generated mock route: {num_points} points, {len(steps)} steps, {total / 1609.34:.1f} mi -> '{output_file}'")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate a synthetic OSRM route JSON")
    parser.add_argument("--points", type=int, default=1500)
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--output", default="mock_route.json")
    args = parser.parse_args()

    generate_mock_route(num_points=args.points, seed=args.seed, output_file=args.output)
