#Marks routing as a package.
#Re-exports the route / place / POI collaborators and their models so other
#modules import from routing without knowing internal file names.
#No business logic.

from .models import (
    WALKING_SPEED_MPS,
    InstructionKind,
    Location,
    NavigationStep,
    POICategory,
    PointOfInterest,
    Route,
    SegmentLocation,
    StepIcon,
)
from .osrm_client import OSRMClient, OSRMError
from .nominatim_client import NominatimClient, extract_location_name
from .overpass_client import OverpassClient

__all__ = [
    "WALKING_SPEED_MPS",
    "InstructionKind",
    "Location",
    "NavigationStep",
    "POICategory",
    "PointOfInterest",
    "Route",
    "SegmentLocation",
    "StepIcon",
    "OSRMClient",
    "OSRMError",
    "NominatimClient",
    "extract_location_name",
    "OverpassClient",
]
