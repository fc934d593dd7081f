"""Configuration and constants for star counting."""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

# White sensitivity in range from 0 (black) to 255 (white).
DEFAULT_SENSITIVITY = 20
MIN_SENSITIVITY = 0
MAX_SENSITIVITY = 255

# Rendered masks are written next to the source as <stem>-starred.jpg
OUTPUT_SUFFIX = "-starred"
OUTPUT_EXTENSION = ".jpg"

SUPPORTED_EXTS = (".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff")


def default_settings() -> Dict[str, Union[int, str]]:
    return {
        "sensitivity": DEFAULT_SENSITIVITY,
        "output_suffix": OUTPUT_SUFFIX,
        "output_extension": OUTPUT_EXTENSION,
    }


def load_settings(settings_file: Optional[Path] = None) -> Dict[str, Union[int, str]]:
    """Load run settings from a JSON file, merged over the defaults.

    Args:
        settings_file: Optional path to a settings JSON file

    Returns:
        Dictionary with sensitivity, output_suffix and output_extension

    Raises:
        ValueError: If the file sets a sensitivity outside [0, 255]
    """
    settings = default_settings()

    if settings_file is None:
        return settings

    if not settings_file.exists():
        logger.warning("Settings file not found, using defaults: %s", settings_file)
        return settings

    try:
        with settings_file.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        logger.warning("Could not parse %s (%s), using defaults", settings_file, exc)
        return settings

    if not isinstance(data, dict):
        logger.warning("Settings file %s is not a JSON object, using defaults", settings_file)
        return settings

    settings.update({k: v for k, v in data.items() if k in settings})

    sensitivity = settings["sensitivity"]
    if isinstance(sensitivity, bool) or not isinstance(sensitivity, int):
        raise ValueError(f"sensitivity must be an integer, got {sensitivity!r}")
    if not (MIN_SENSITIVITY <= sensitivity <= MAX_SENSITIVITY):
        raise ValueError(
            f"sensitivity must be in range [{MIN_SENSITIVITY}, {MAX_SENSITIVITY}], got {sensitivity}"
        )

    extension = str(settings["output_extension"])
    if not extension.startswith("."):
        extension = "." + extension
    settings["output_extension"] = extension
    settings["output_suffix"] = str(settings["output_suffix"])
    return settings


def save_settings(settings: Dict[str, Union[int, str]], settings_file: Path) -> None:
    """Persist settings to disk for later CLI runs."""
    settings_file.parent.mkdir(parents=True, exist_ok=True)
    with settings_file.open("w", encoding="utf-8") as f:
        json.dump(dict(settings), f, indent=2)
