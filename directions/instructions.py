"""
Purpose: Human wording for distances, durations and navigation steps.
Plain text only; whoever builds the printed page adds markup.
"""

# directions/instructions.py

from __future__ import annotations

import math
from typing import Optional

from routing.models import InstructionKind, NavigationStep
from segments.policy import METERS_PER_MILE

from .config import WALKING_HOURS_PER_DAY

# Shorter steps are shown without a distance
MIN_STEP_DISTANCE_M = 50.0


def format_distance(meters: float) -> str:
    """1609.34 -> '1.0 mi'"""
    return f"{meters / METERS_PER_MILE:.1f} mi"


def format_duration(seconds: float) -> str:
    """3900 -> '1h 5m', 300 -> '5m'"""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def days_needed(seconds: float, hours_per_day: int = WALKING_HOURS_PER_DAY) -> int:
    return math.ceil(seconds / 3600 / hours_per_day)


def format_action(kind: InstructionKind, modifier: Optional[str] = None) -> str:
    direction = modifier.upper() if modifier else ""

    if kind is InstructionKind.DEPART:
        return "Start"
    if kind is InstructionKind.ARRIVE:
        return "Arrive"
    if kind is InstructionKind.TURN:
        return f"Turn {direction}".strip()
    if kind is InstructionKind.CONTINUE:
        return "Continue"
    if kind is InstructionKind.MERGE:
        return f"Merge {direction}" if direction else "Merge"
    if kind is InstructionKind.FORK:
        return f"At the fork, take a {direction}" if direction else "At the fork"
    if kind is InstructionKind.END_OF_ROAD:
        return f"At the end of the road, take a {direction}" if direction else "At the end of the road"
    if kind is InstructionKind.ROUNDABOUT:
        return f"At the roundabout, take a {direction}" if direction else "Roundabout"
    if kind is InstructionKind.ON_RAMP:
        return f"On ramp {direction}" if direction else "On ramp"
    if kind is InstructionKind.OFF_RAMP:
        return f"Off ramp {direction}" if direction else "Off ramp"
    if kind is InstructionKind.NOTIFICATION:
        return "Note"

    # NEW_NAME and anything unrecognized
    return f"Continue {direction}" if direction else "Continue"


def format_step_instruction(step: NavigationStep) -> str:
    """
    'Turn LEFT onto Main St (0.3 mi)'. Turns land "onto" a road, everything
    else stays "on" it. Very short steps drop the distance.
    """
    action = format_action(step.instruction, step.modifier)
    distance = f" ({format_distance(step.distance)})" if step.distance > MIN_STEP_DISTANCE_M else ""

    if step.road_name:
        onto = step.instruction in (InstructionKind.TURN, InstructionKind.END_OF_ROAD)
        preposition = "onto" if onto else "on"
        return f"{action} {preposition} {step.road_name}{distance}"
    return f"{action}{distance}"
