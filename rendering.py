"""Binary mask rendering for star detection output."""

from typing import Any

import numpy as np
from PIL import Image

MASK_ON = 255
MASK_OFF = 0


def render_mask(occupancy: Any) -> np.ndarray:
    """Render an occupancy grid as a black/white intensity grid.

    Active cells become full brightness and every other cell is black; the
    original intensities are not carried over.

    Args:
        occupancy: 2D boolean grid indexed [y, x]

    Returns:
        uint8 numpy array of the same shape with values MASK_ON or MASK_OFF
    """
    grid = np.asarray(occupancy, dtype=bool)
    if grid.ndim != 2:
        raise ValueError(f"Occupancy grid must be 2D, got {grid.ndim} dimension(s)")

    mask = np.full(grid.shape, MASK_OFF, dtype=np.uint8)
    mask[grid] = MASK_ON
    return mask


def mask_to_image(mask: np.ndarray) -> Image.Image:
    """Wrap a rendered mask as a single-channel PIL image."""
    # 2D uint8 arrays map to mode "L"
    return Image.fromarray(np.ascontiguousarray(mask, dtype=np.uint8))
