"""
Configuration loading for SearchRanker.

Settings live in a JSON file next to this module. Values found in the file
override the built-in defaults key by key, so a partial file is valid.
"""
import copy
import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.json")

DEFAULT_CONFIG = {
    "pagerank": {
        "decay": 0.85,
        "epsilon": 0.0001,
        "max_iterations": 200
    },
    "search": {
        "top_k": 5,
        "sort_by": "relevance"
    }
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge `override` into a copy of `base`."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file and merge it over the defaults.

    Args:
        config_path: Path to a config file. When omitted the packaged
            config.json is used, and a missing file silently yields defaults.

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If an explicitly given config_path does not exist
    """
    explicit = config_path is not None
    path = config_path or DEFAULT_CONFIG_PATH

    if not os.path.exists(path):
        if explicit:
            raise FileNotFoundError(f"Config file not found: {path}")
        logger.debug("No config.json found, using default settings")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not load config %s: %s, using default settings", path, e)
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(loaded, dict):
        logger.warning("Config %s is not a JSON object, using default settings", path)
        return copy.deepcopy(DEFAULT_CONFIG)

    logger.debug("Loaded configuration from %s", path)
    return _merge(DEFAULT_CONFIG, loaded)
