"""
Settings Module for Grid Solver

Keeps command line defaults in a JSON file in the working directory.
Unknown keys are preserved; known keys holding a value of the wrong type
fall back to their default.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "topology": "classic",
    "max_solutions": 2,
    "debug_enabled": False,
    "log_file": None,
    "image_dir": "debug",
}

# Acceptance test per known key
_CHECKS: Dict[str, Callable[[Any], bool]] = {
    "topology": lambda v: isinstance(v, str) and bool(v),
    "max_solutions": lambda v: isinstance(v, int) and not isinstance(v, bool) and v >= 1,
    "debug_enabled": lambda v: isinstance(v, bool),
    "log_file": lambda v: v is None or isinstance(v, str),
    "image_dir": lambda v: isinstance(v, str) and bool(v),
}


def _settings_path(path: Optional[Path]) -> Path:
    return Path(path) if path is not None else SETTINGS_FILE


def _apply(overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Layer user values over the defaults, dropping rejected ones."""
    merged = DEFAULT_SETTINGS.copy()
    for key, value in overrides.items():
        check = _CHECKS.get(key)
        if check is not None and not check(value):
            logger.warning(f"Ignoring invalid setting {key}={value!r}, "
                           f"keeping {DEFAULT_SETTINGS[key]!r}")
            continue
        merged[key] = value
    return merged


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Read preferences, layered over DEFAULT_SETTINGS.

    Args:
        path: File to read instead of SETTINGS_FILE

    Returns:
        Complete settings dictionary. A missing, unreadable or non-object
        file yields a copy of the defaults.
    """
    settings_file = _settings_path(path)
    if not settings_file.exists():
        logger.debug(f"No {settings_file}, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            stored = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Cannot read {settings_file}: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()

    if not isinstance(stored, dict):
        logger.warning(f"{settings_file} must hold a JSON object, using defaults")
        return DEFAULT_SETTINGS.copy()

    settings = _apply(stored)
    logger.debug(f"Settings from {settings_file}: {settings}")
    return settings


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Write preferences as indented JSON.

    Args:
        settings: Values to store
        path: File to write instead of SETTINGS_FILE
    """
    settings_file = _settings_path(path)
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings written to {settings_file}")
    except IOError as e:
        logger.error(f"Cannot write {settings_file}: {e}")
