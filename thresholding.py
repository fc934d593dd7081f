"""Luminance thresholding: intensity grid -> occupancy grid."""

from typing import Any

import numpy as np

from config import MAX_SENSITIVITY, MIN_SENSITIVITY


def validate_sensitivity(sensitivity: Any) -> int:
    """Return sensitivity as int, rejecting values outside [0, 255]."""
    if isinstance(sensitivity, (bool, np.bool_)) or not isinstance(sensitivity, (int, np.integer)):
        raise ValueError(f"sensitivity must be an integer, got {sensitivity!r}")
    if not (MIN_SENSITIVITY <= sensitivity <= MAX_SENSITIVITY):
        raise ValueError(
            f"sensitivity must be in range [{MIN_SENSITIVITY}, {MAX_SENSITIVITY}], got {sensitivity}"
        )
    return int(sensitivity)


def validate_intensity_grid(grid: Any) -> np.ndarray:
    """Check that grid is a non-empty 2D array of samples in [0, 255].

    Args:
        grid: 2D array-like indexed [y, x] (rows of equal length)

    Returns:
        The grid as a uint8 numpy array

    Raises:
        ValueError: If the grid is ragged, not 2D, empty, or out of range
    """
    try:
        arr = np.asarray(grid)
    except ValueError as exc:
        # numpy refuses inhomogeneous nested sequences
        raise ValueError(f"Intensity grid rows must all have the same length: {exc}") from exc

    if arr.dtype == object:
        raise ValueError("Intensity grid rows must all have the same length")
    if arr.ndim != 2:
        raise ValueError(f"Intensity grid must be 2D, got {arr.ndim} dimension(s)")
    height, width = arr.shape
    if width == 0 or height == 0:
        raise ValueError(f"Intensity grid must not be empty, got {width}x{height}")
    if arr.dtype == np.uint8:
        return arr
    if not (np.issubdtype(arr.dtype, np.integer) or np.issubdtype(arr.dtype, np.floating)):
        raise ValueError(f"Intensity grid must be numeric, got dtype {arr.dtype}")
    # Casting to uint8 would truncate 20.7 to 20; NaN also fails this check
    if np.issubdtype(arr.dtype, np.floating) and not np.array_equal(arr, np.floor(arr)):
        raise ValueError("Intensity samples must be whole numbers")
    if arr.min() < 0 or arr.max() > 255:
        raise ValueError(
            f"Intensity samples must be in range [0, 255], got [{arr.min()}, {arr.max()}]"
        )
    return arr.astype(np.uint8)


def is_active(sample: int, sensitivity: int) -> bool:
    """A sample equal to the sensitivity is inactive."""
    return sample > sensitivity


def threshold_grid(intensity: Any, sensitivity: int) -> np.ndarray:
    """Binarize an intensity grid with a single sensitivity cutoff.

    Each cell is True iff its intensity strictly exceeds the sensitivity.
    The returned occupancy grid is read-only.
    """
    grid = validate_intensity_grid(intensity)
    sensitivity = validate_sensitivity(sensitivity)

    occupancy = grid > sensitivity
    occupancy.flags.writeable = False
    return occupancy
