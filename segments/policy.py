"""
Purpose: Central configuration for route segmentation (single source of truth).
What it does:

Stores the splitting mode and its numeric parameter:

DISTANCE -> target_distance_m per segment (default 1 mile)

COUNT -> segment_count segments (default 10)

STEPS -> steps_per_segment navigation steps per segment (default 8)

Plus the values every segment needs: padding for its bounding region and
the walking speed used to derive duration.

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

METERS_PER_MILE = 1609.34


class SegmentMode(str, Enum):
    DISTANCE = "distance"
    COUNT = "count"
    STEPS = "steps"


@dataclass(frozen=True)
class SegmentationPolicy:
    """
    Exactly one mode is active per run. The parameters of the inactive
    modes are ignored.
    """

    mode: SegmentMode = SegmentMode.DISTANCE

    # --- DISTANCE mode ---
    target_distance_m: float = METERS_PER_MILE

    # --- COUNT mode ---
    segment_count: int = 10

    # --- STEPS mode ---
    steps_per_segment: int = 8

    # --- Per-segment metrics ---
    # Bounding region padding as a fraction of each axis' range.
    padding_fraction: float = 0.35

    # Average walking speed (3 mph).
    walking_speed_mps: float = 1.34

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if not isinstance(self.mode, SegmentMode):
            raise ValueError(f"unknown segment mode: {self.mode!r}")

        if self.target_distance_m <= 0:
            raise ValueError("target_distance_m must be > 0")

        if self.segment_count < 1:
            raise ValueError("segment_count must be >= 1")

        if self.steps_per_segment < 1:
            raise ValueError("steps_per_segment must be >= 1")

        if self.padding_fraction < 0:
            raise ValueError("padding_fraction must be >= 0")

        if self.walking_speed_mps <= 0:
            raise ValueError("walking_speed_mps must be > 0")


def default_policy() -> SegmentationPolicy:
    """
    Convenience factory for the default policy (one segment per mile).
    """
    p = SegmentationPolicy()
    p.validate()
    return p


def distance_policy(target_distance_m: float) -> SegmentationPolicy:
    p = SegmentationPolicy(mode=SegmentMode.DISTANCE, target_distance_m=target_distance_m)
    p.validate()
    return p


def count_policy(segment_count: int) -> SegmentationPolicy:
    p = SegmentationPolicy(mode=SegmentMode.COUNT, segment_count=segment_count)
    p.validate()
    return p


def step_policy(steps_per_segment: int) -> SegmentationPolicy:
    p = SegmentationPolicy(mode=SegmentMode.STEPS, steps_per_segment=steps_per_segment)
    p.validate()
    return p
