"""
Input Validators for Sarvas MEG

Provides validation for:
- YAML configuration file parsing
- Sensor (coil) placement relative to the bound dipole

Validators collect problems into result records instead of raising, so that
callers sweeping many sensors can report degenerate placements in one pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from sarvas_meg.exceptions import FieldSingularityError
from sarvas_meg.physics.analytic_meg import AnalyticSolutionMEG
from sarvas_meg.physics.coordinates import as_coordinate

logger = logging.getLogger(__name__)


# =============================================================================
# Validation Result Types
# =============================================================================


@dataclass
class ConfigValidationResult:
    """Result of YAML configuration file validation.

    Attributes
    ----------
    is_valid : bool
        True if config loaded and validated successfully.
    config : dict | None
        Loaded configuration (None if load failed).
    file_path : Path | None
        Path to the config file (None if using defaults).
    warnings : list[str]
        Non-fatal warnings (e.g., missing optional fields).
    errors : list[str]
        Fatal errors (e.g., parse failures).
    recovery_suggestions : list[str]
        Actionable suggestions for fixing issues.
    """

    is_valid: bool
    config: dict[str, Any] | None
    file_path: Path | None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    recovery_suggestions: list[str] = field(default_factory=list)


@dataclass
class PlacementResult:
    """Result of sensor placement validation.

    Attributes
    ----------
    is_valid : bool
        True if both primary and total field are defined at the point.
    point : np.ndarray
        The evaluated sensor position.
    distance_to_dipole_m : float
        Distance from the sensor to the bound dipole.
    distance_to_center_m : float
        Distance from the sensor to the sphere center.
    warnings : list[str]
        Non-fatal warnings (e.g., sensor not outside the dipole radius).
    errors : list[str]
        Singularities hit while evaluating the fields.
    """

    is_valid: bool
    point: np.ndarray
    distance_to_dipole_m: float
    distance_to_center_m: float
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


# =============================================================================
# Configuration File Validation
# =============================================================================

# Required sections in config
REQUIRED_CONFIG_SECTIONS = ["solver"]

# Type specifications for validation: (type, min, max)
CONFIG_TYPE_SPECS = {
    "solver": {
        "scaling_factor": (float, -1e12, 1e12),
        "singularity_rtol": (float, 0.0, 1e-3),
    },
}

LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _check_sphere_center(
    value: Any, errors: list[str], suggestions: list[str]
) -> None:
    try:
        as_coordinate(value, "solver.sphere_center_m")
    except (TypeError, ValueError) as e:
        errors.append(f"INVALID SPHERE CENTER: {e}")
        suggestions.append(
            "Set solver.sphere_center_m to a list of three numbers, e.g. [0.0, 0.0, 0.0]."
        )


def validate_config_file(
    config_path: Path | str | None = None,
    strict: bool = False,
) -> ConfigValidationResult:
    """
    Load and validate YAML configuration file.

    Provides graceful error handling with helpful messages for:
    - Missing files (falls back to defaults)
    - Malformed YAML (syntax errors)
    - Invalid parameter values (type/range checks)

    Parameters
    ----------
    config_path : Path or str, optional
        Path to YAML config file. If None, uses default_solver.yaml.
    strict : bool
        If True, treat warnings as errors. Default False.

    Returns
    -------
    ConfigValidationResult
        Validation result with loaded config and any issues found.

    Examples
    --------
    >>> result = validate_config_file("nonexistent.yaml")
    >>> result.is_valid
    True
    >>> len(result.warnings) > 0
    True
    """
    from sarvas_meg.config import DEFAULT_CONFIG_PATH, get_default_config

    warnings = []
    errors = []
    suggestions = []

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    config = None
    file_exists = config_path.exists()

    if not file_exists:
        warnings.append(
            f"CONFIG FILE NOT FOUND: '{config_path}' does not exist. "
            "Using built-in defaults."
        )
        suggestions.append(
            f"Create config file at '{config_path}' or use load_config() without path."
        )
        config = get_default_config()
    else:
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
            # Empty YAML file
            if config is None:
                warnings.append(
                    f"CONFIG FILE EMPTY: '{config_path}' contains no data. "
                    "Using built-in defaults."
                )
                config = get_default_config()
            elif not isinstance(config, dict):
                errors.append(
                    f"INVALID STRUCTURE: '{config_path}' must contain a mapping, "
                    f"got {type(config).__name__}."
                )
                config = get_default_config()
        except yaml.YAMLError as e:
            errors.append(f"YAML PARSE ERROR in '{config_path}': {e}")
            suggestions.append(
                "Check YAML syntax: proper indentation (2 spaces), "
                "colons after keys, no tabs."
            )
            config = get_default_config()
        except OSError as e:
            errors.append(f"FILE READ ERROR for '{config_path}': {e}")
            suggestions.append("Check file permissions and path.")
            config = get_default_config()

    defaults = get_default_config()

    for section in REQUIRED_CONFIG_SECTIONS:
        if not isinstance(config.get(section), dict):
            if strict:
                errors.append(
                    f"MISSING REQUIRED SECTION: '{section}' not found in config."
                )
            else:
                warnings.append(
                    f"MISSING SECTION: '{section}' not found. Using defaults."
                )
            config[section] = defaults[section]

    for section, specs in CONFIG_TYPE_SPECS.items():
        for param, (expected_type, min_val, max_val) in specs.items():
            if param not in config[section]:
                continue
            value = config[section][param]

            # bool is an int subclass but never a valid numeric parameter
            if isinstance(value, bool) or not isinstance(value, (expected_type, int)):
                message = (
                    f"TYPE ERROR: {section}.{param} should be {expected_type.__name__}, "
                    f"got {type(value).__name__}."
                )
                try:
                    if isinstance(value, bool):
                        raise TypeError(message)
                    value = expected_type(value)
                except (ValueError, TypeError):
                    errors.append(message)
                    continue
                if strict:
                    errors.append(message)
                else:
                    warnings.append(f"{message} Converted to {value!r}.")
                    config[section][param] = value

            if value < min_val or value > max_val:
                warnings.append(
                    f"RANGE WARNING: {section}.{param}={value} is outside "
                    f"expected range [{min_val}, {max_val}]."
                )

    if "sphere_center_m" in config["solver"]:
        _check_sphere_center(config["solver"]["sphere_center_m"], errors, suggestions)

    logging_section = config.get("logging") or {}
    if not isinstance(logging_section, dict):
        warnings.append(
            f"INVALID SECTION: 'logging' should be a mapping, got "
            f"{type(logging_section).__name__}. Ignoring it."
        )
        suggestions.append("Write the level as a key, e.g. 'logging:\\n  level: DEBUG'.")
        logging_section = {}

    level = logging_section.get("level")
    if level is not None and str(level).upper() not in LOGGING_LEVELS:
        warnings.append(
            f"UNKNOWN LOGGING LEVEL: '{level}'. Expected one of {', '.join(LOGGING_LEVELS)}."
        )

    is_valid = len(errors) == 0
    if strict:
        is_valid = is_valid and len(warnings) == 0

    return ConfigValidationResult(
        is_valid=is_valid,
        config=config,
        file_path=config_path if file_exists else None,
        warnings=warnings,
        errors=errors,
        recovery_suggestions=suggestions,
    )


# =============================================================================
# Sensor Placement Validation
# =============================================================================


def validate_sensor_placement(
    solver: AnalyticSolutionMEG,
    point: Any,
) -> PlacementResult:
    """
    Check that both fields are defined at a sensor position.

    Evaluates the primary and total field for the solver's bound dipole and
    records any singularity as an error instead of raising.

    Parameters
    ----------
    solver : AnalyticSolutionMEG
        Solver with a bound dipole.
    point : array_like
        Sensor position, shape (3,).

    Returns
    -------
    PlacementResult

    Raises
    ------
    DipoleNotBoundError
        If no dipole is bound to ``solver``.

    Examples
    --------
    >>> solver = AnalyticSolutionMEG([0.0, 0.0, 0.0])
    >>> solver.bind_arrays([0.0, 0.0, 0.07], [1.0, 0.0, 0.0])
    >>> validate_sensor_placement(solver, [0.0, 0.0, 0.035]).is_valid
    False
    """
    dipole = solver.dipole
    if dipole is None:
        # Let the solver raise its own precondition error
        solver.total_field(point)

    point = as_coordinate(point, "point")
    distance_to_center = float(np.linalg.norm(point - solver.sphere_center))
    distance_to_dipole = float(np.linalg.norm(point - dipole.position))
    dipole_radius = float(np.linalg.norm(dipole.position - solver.sphere_center))

    warnings = []
    errors = []

    if distance_to_center <= dipole_radius:
        warnings.append(
            f"SENSOR NOT EXTERNAL: distance to center ({distance_to_center:.6g}) "
            f"does not exceed the dipole radius ({dipole_radius:.6g})."
        )

    for name, evaluate in (
        ("primary", solver.primary_field),
        ("total", solver.total_field),
    ):
        try:
            evaluate(point)
        except FieldSingularityError as e:
            errors.append(f"SINGULAR {name.upper()} FIELD: {e.reason}.")

    if errors:
        logger.info("Sensor at %s is singular: %s", point.tolist(), "; ".join(errors))

    return PlacementResult(
        is_valid=len(errors) == 0,
        point=point,
        distance_to_dipole_m=distance_to_dipole,
        distance_to_center_m=distance_to_center,
        warnings=warnings,
        errors=errors,
    )
