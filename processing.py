"""Core processing pipeline functions."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from clustering import count_clusters
from config import default_settings
from image_io import derive_output_path, load_luminance, save_mask
from models import StarCountResult
from rendering import render_mask
from thresholding import threshold_grid

logger = logging.getLogger(__name__)


def count_stars(intensity: Any, sensitivity: int) -> Tuple[int, np.ndarray]:
    """Threshold an in-memory intensity grid and count its clusters.

    Returns:
        Tuple of (star_count, occupancy)
    """
    occupancy = threshold_grid(intensity, sensitivity)
    return count_clusters(occupancy), occupancy


def analyze_image(path: Path, sensitivity: int) -> Tuple[StarCountResult, np.ndarray]:
    """Load an image file, threshold it and count its stars.

    Returns:
        Tuple of (result, occupancy); the occupancy grid is kept for rendering
    """
    intensity = load_luminance(path)
    height, width = intensity.shape

    star_count, occupancy = count_stars(intensity, sensitivity)
    logger.info("%s: %d star(s) at sensitivity %d", path.name, star_count, sensitivity)

    result = StarCountResult(
        filename=path.name,
        width=width,
        height=height,
        sensitivity=sensitivity,
        star_count=star_count,
        active_pixels=int(np.count_nonzero(occupancy)),
    )
    return result, occupancy


def write_mask(
    source: Path,
    occupancy: np.ndarray,
    output_name: Optional[Union[str, Path]] = None,
    settings: Optional[Dict[str, Any]] = None,
) -> Path:
    """Render the occupancy grid and save it next to source (or to output_name)."""
    settings = settings or default_settings()
    mask_path = derive_output_path(
        source,
        output_name,
        suffix=settings["output_suffix"],
        extension=settings["output_extension"],
    )
    return save_mask(render_mask(occupancy), mask_path)


def process_image(
    path: Path,
    sensitivity: int,
    output_image: bool = False,
    output_name: Optional[Union[str, Path]] = None,
    settings: Optional[Dict[str, Any]] = None,
) -> StarCountResult:
    """Count stars in a single image file.

    Args:
        path: Path to image file
        sensitivity: Luminance cutoff (0-255); brighter pixels are active
        output_image: Whether to render and save the binary mask
        output_name: Explicit mask path; derived from path when None
        settings: Loaded settings (output suffix/extension); defaults when None

    Returns:
        StarCountResult; mask_path is set only when output_image is True
    """
    result, occupancy = analyze_image(path, sensitivity)
    if output_image:
        result.mask_path = write_mask(path, occupancy, output_name, settings)
    return result
