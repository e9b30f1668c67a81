"""
Purpose: Domain models for what the routing collaborators hand to the core.
What it does:
- Defines core data structures:
- Location (named start / end point)
- NavigationStep (one OSRM maneuver, with optional own geometry)
- Route (geometry + distance/duration + ordered steps)
- PointOfInterest (named amenity near the route, immutable once fetched)
- SegmentLocation (reverse-geocoded start / end names of a segment)

Defines enums with an explicit fallback member:
- InstructionKind = depart | arrive | turn | ... | OTHER
- StepIcon = start | end | left | right | ... | straight
- POICategory = hospital | fire_station | ... | OTHER

Rule: No HTTP calls, no segmentation logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from geo.models import LonLat

WALKING_SPEED_MPS = 1.34  # ~3 mph


class InstructionKind(str, Enum):
    """
    OSRM maneuver types. Anything OSRM adds later maps to OTHER.
    """
    DEPART = "depart"
    ARRIVE = "arrive"
    TURN = "turn"
    NEW_NAME = "new name"
    CONTINUE = "continue"
    MERGE = "merge"
    FORK = "fork"
    END_OF_ROAD = "end of road"
    ROUNDABOUT = "roundabout"
    ON_RAMP = "on ramp"
    OFF_RAMP = "off ramp"
    NOTIFICATION = "notification"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Optional[str]) -> InstructionKind:
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class StepIcon(str, Enum):
    """Icon key for a direction line."""
    START = "start"
    END = "end"
    ROUNDABOUT = "roundabout"
    FORK = "fork"
    MERGE = "merge"
    LEFT = "left"
    RIGHT = "right"
    SLIGHT_LEFT = "slight-left"
    SLIGHT_RIGHT = "slight-right"
    SHARP_LEFT = "sharp-left"
    SHARP_RIGHT = "sharp-right"
    UTURN = "uturn"
    STRAIGHT = "straight"

    @classmethod
    def for_maneuver(cls, kind: InstructionKind, modifier: Optional[str]) -> StepIcon:
        """
        Special maneuvers get their own icon, everything else is an arrow
        picked by the modifier. Unknown modifiers are STRAIGHT.
        """
        if kind in _KIND_ICONS:
            return _KIND_ICONS[kind]
        return _MODIFIER_ICONS.get(modifier or "", cls.STRAIGHT)


_KIND_ICONS: Dict[InstructionKind, StepIcon] = {
    InstructionKind.DEPART: StepIcon.START,
    InstructionKind.ARRIVE: StepIcon.END,
    InstructionKind.ROUNDABOUT: StepIcon.ROUNDABOUT,
    InstructionKind.FORK: StepIcon.FORK,
    InstructionKind.MERGE: StepIcon.MERGE,
}

_MODIFIER_ICONS: Dict[str, StepIcon] = {
    "left": StepIcon.LEFT,
    "right": StepIcon.RIGHT,
    "slight left": StepIcon.SLIGHT_LEFT,
    "slight right": StepIcon.SLIGHT_RIGHT,
    "sharp left": StepIcon.SHARP_LEFT,
    "sharp right": StepIcon.SHARP_RIGHT,
    "uturn": StepIcon.UTURN,
}


class POICategory(Enum):
    """
    Amenity categories worth marking on a walking map.
    Value = (osm amenity tag, display label, icon key, priority rank).
    Lower rank = more important.
    """
    HOSPITAL = ("hospital", "Hospital", "hospital", 1)
    FIRE_STATION = ("fire_station", "Fire Station", "fire-station", 2)
    POLICE = ("police", "Police", "police", 3)
    PLACE_OF_WORSHIP = ("place_of_worship", "Church", "church", 4)
    FUEL = ("fuel", "Gas", "gas", 5)
    SCHOOL = ("school", "School", "school", 6)
    OTHER = ("other", "Place", "poi", 99)

    @property
    def amenity(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @property
    def icon_key(self) -> str:
        return self.value[2]

    @property
    def priority(self) -> int:
        return self.value[3]

    @classmethod
    def from_amenity(cls, amenity: Optional[str]) -> POICategory:
        for category in cls:
            if category is not cls.OTHER and category.amenity == amenity:
                return category
        return cls.OTHER

    @classmethod
    def known(cls) -> List[POICategory]:
        return [c for c in cls if c is not cls.OTHER]


@dataclass(frozen=True)
class Location:
    """A named route endpoint."""
    lat: float
    lon: float
    name: str
    address: str

    @property
    def lon_lat(self) -> LonLat:
        return (self.lon, self.lat)


@dataclass(frozen=True)
class NavigationStep:
    """
    One maneuver from the routing API.
    `location` is where the maneuver happens; `geometry` is the step's own
    polyline when the API returned one.
    """
    instruction: InstructionKind
    road_name: str
    distance: float
    location: LonLat
    modifier: Optional[str] = None
    duration: float = 0.0
    geometry: Tuple[LonLat, ...] = ()

    @property
    def icon(self) -> StepIcon:
        return StepIcon.for_maneuver(self.instruction, self.modifier)


@dataclass(frozen=True)
class Route:
    """
    A resolved walking route. geometry is in travel order and never empty
    for a valid route.
    """
    geometry: List[LonLat]
    distance: float
    duration: float
    steps: List[NavigationStep] = field(default_factory=list)


@dataclass(frozen=True)
class PointOfInterest:
    """
    A named amenity returned by the POI collaborator. Candidates arrive
    sorted by priority_rank (lower first).
    """
    id: int
    coordinate: LonLat
    name: str
    category: POICategory

    @property
    def priority_rank(self) -> int:
        return self.category.priority

    @property
    def icon_key(self) -> str:
        return self.category.icon_key


@dataclass(frozen=True)
class SegmentLocation:
    """Human-readable start / end place names for one segment."""
    start_name: str
    end_name: str
    start_address: Optional[Dict[str, str]] = None
    end_address: Optional[Dict[str, str]] = None
