"""
Configuration Utilities

Loads configuration from config/settings.yaml, merged over defaults.
Persisting the user's chosen preset is the host's job, so there is no save.
"""

import copy
import logging
import os
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_CONFIG = {
    "filter": {
        "frequency": 60.0,
        "preset": "balanced",
        "slider_position": None   # overrides preset when set
    },
    "pipeline": {
        "latency_warn_ms": 5.0,
        "max_latency_samples": 1000
    }
}


def default_config_path() -> str:
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
    return os.path.join(project_root, "config", "settings.yaml")


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to config file. If None, looks in config/settings.yaml

    Returns:
        Configuration dictionary (a fresh copy, safe to mutate)
    """
    if config_path is None:
        config_path = default_config_path()

    if not os.path.exists(config_path):
        logger.info("No config file found. Using defaults.")
        return copy.deepcopy(DEFAULT_CONFIG)

    logger.info(f"Loading config from {config_path}")
    try:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config: {e}. Using defaults.")
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(loaded, dict):
        logger.warning(f"Config root must be a mapping, got {type(loaded).__name__}. Using defaults.")
        return copy.deepcopy(DEFAULT_CONFIG)

    return merge_config(DEFAULT_CONFIG, loaded)
