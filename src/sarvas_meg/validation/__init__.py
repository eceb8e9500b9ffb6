"""
Validation Module for Sarvas MEG

Provides configuration file validation and sensor placement checks.
"""

from __future__ import annotations

from sarvas_meg.validation.input_validators import (
    ConfigValidationResult,
    PlacementResult,
    validate_config_file,
    validate_sensor_placement,
)

__all__ = [
    "ConfigValidationResult",
    "PlacementResult",
    "validate_config_file",
    "validate_sensor_placement",
]
