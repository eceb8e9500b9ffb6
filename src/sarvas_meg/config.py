"""
Configuration Management for Sarvas MEG

Loads solver parameters from YAML config files with fallback to
hardcoded defaults in physics.constants.

Usage:
    from sarvas_meg.config import load_config

    cfg = load_config()  # Load default config
    cfg = load_config("configs/custom.yaml")  # Load custom config

    # Access parameters
    center = cfg["solver"]["sphere_center_m"]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# File is at: src/sarvas_meg/config.py
# Project root: src/sarvas_meg -> src -> project_root
_THIS_FILE = Path(__file__)
PROJECT_ROOT = _THIS_FILE.parent.parent.parent

DEFAULT_CONFIG_PATH = PROJECT_ROOT / "configs" / "default_solver.yaml"


def get_config_path(config_name: str = "default_solver.yaml") -> Path:
    """
    Get the full path to a config file.

    Parameters
    ----------
    config_name : str
        Name of the config file (with or without .yaml extension).

    Returns
    -------
    Path
        Full path to the config file.
    """
    if not config_name.endswith(".yaml"):
        config_name = f"{config_name}.yaml"
    return PROJECT_ROOT / "configs" / config_name


def get_default_config() -> dict[str, Any]:
    """
    Return hardcoded default configuration.

    Used as fallback when config file is missing.
    """
    # Import here to keep config importable without the physics package
    from sarvas_meg.physics.constants import (
        DEFAULT_SCALING_FACTOR,
        DEFAULT_SPHERE_CENTER_M,
        SINGULARITY_RTOL,
    )

    return {
        "solver": {
            "sphere_center_m": list(DEFAULT_SPHERE_CENTER_M),
            "scaling_factor": DEFAULT_SCALING_FACTOR,
            "singularity_rtol": SINGULARITY_RTOL,
        },
        "logging": {
            "level": "INFO",
        },
    }


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file with fallback to defaults.

    Parameters
    ----------
    config_path : str or Path, optional
        Path to YAML config file. If None, uses default_solver.yaml.
        If file doesn't exist, falls back to hardcoded defaults.

    Returns
    -------
    dict
        Configuration dictionary.

    Notes
    -----
    This function never raises; problems are logged at WARNING and the
    defaults are returned. Use ``load_config_safe`` or
    ``validation.validate_config_file`` for the messages themselves.

    Examples
    --------
    >>> cfg = load_config()
    >>> cfg["solver"]["scaling_factor"]
    1.0
    """
    config, errors = load_config_safe(config_path)
    for message in errors:
        logger.warning(message)
    return config


def load_config_safe(
    config_path: str | Path | None = None,
) -> tuple[dict[str, Any], list[str]]:
    """
    Load configuration with detailed error reporting.

    Parameters
    ----------
    config_path : str or Path, optional
        Path to YAML config file.

    Returns
    -------
    tuple[dict, list[str]]
        (config_dict, error_messages). Config is always usable (defaults used
        on error). error_messages is empty if load succeeded.

    Examples
    --------
    >>> cfg, errors = load_config_safe("bad_config.yaml")
    >>> if errors:
    ...     print("Warnings:", errors)
    """
    errors = []

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        errors.append(f"Config file not found: {config_path}. Using defaults.")
        return get_default_config(), errors

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        errors.append(
            f"YAML parse error in {config_path}: {e}. "
            "Check indentation and syntax. Using defaults."
        )
        return get_default_config(), errors
    except OSError as e:
        errors.append(f"Cannot read {config_path}: {e}. Using defaults.")
        return get_default_config(), errors

    if config is None:
        errors.append(f"Config file is empty: {config_path}. Using defaults.")
        return get_default_config(), errors
    if not isinstance(config, dict):
        errors.append(
            f"Config file {config_path} must contain a mapping, "
            f"got {type(config).__name__}. Using defaults."
        )
        return get_default_config(), errors

    logger.debug("Loaded config from %s", config_path)
    return config, errors


def save_config(config: dict[str, Any], config_path: str | Path) -> None:
    """
    Save configuration to a YAML file.

    Parameters
    ----------
    config : dict
        Configuration dictionary.
    config_path : str or Path
        Output path for the YAML file.
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
