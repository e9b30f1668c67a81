"""
Purpose: Public API for a complete directions run.

- load_config / DirectionsConfig: environment-backed settings
- generate_directions / DirectionsDocument: the end-to-end pipeline
- instruction wording helpers for the printed page
"""

from .config import ConfigError, DirectionsConfig, load_config, segmentation_from_env
from .instructions import (
    days_needed,
    format_action,
    format_distance,
    format_duration,
    format_step_instruction,
)
from .pipeline import DirectionsDocument, generate_directions

__all__ = [
    "ConfigError",
    "DirectionsConfig",
    "load_config",
    "segmentation_from_env",
    "days_needed",
    "format_action",
    "format_distance",
    "format_duration",
    "format_step_instruction",
    "DirectionsDocument",
    "generate_directions",
]
