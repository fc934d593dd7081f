"""Image I/O utilities for star counting."""

import logging
import os
from pathlib import Path
from typing import Iterable, Optional, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from config import OUTPUT_EXTENSION, OUTPUT_SUFFIX, SUPPORTED_EXTS
from rendering import mask_to_image

logger = logging.getLogger(__name__)

# Try importing OpenCV for faster image loading (optional)
try:
    import cv2
    OPENCV_AVAILABLE = True
except ImportError:
    OPENCV_AVAILABLE = False
    cv2 = None

# Global flag to enable/disable OpenCV optimization
USE_OPENCV = OPENCV_AVAILABLE  # Can be toggled for testing


def iter_images(images_dir: Path, suffix: str = OUTPUT_SUFFIX) -> Iterable[Path]:
    """Yield supported images in a directory, sorted by name.

    Masks rendered by earlier runs (names ending in suffix) are skipped so a
    batch can be re-run in place.
    """
    if not images_dir.is_dir():
        raise FileNotFoundError(f"Images directory not found: {images_dir}")

    paths = []
    with os.scandir(images_dir) as entries:
        for entry in entries:
            if not entry.is_file():
                continue
            path = Path(entry.path)
            if path.suffix.lower() not in SUPPORTED_EXTS:
                continue
            if suffix and path.stem.endswith(suffix):
                continue
            paths.append(path)
    for path in sorted(paths):
        yield path


def ensure_output(output_dir: Path) -> None:
    """Ensure output directory exists."""
    output_dir.mkdir(parents=True, exist_ok=True)


def load_luminance(path: Path) -> np.ndarray:
    """Decode an image file into a single-channel luminance grid.

    Uses OpenCV if available for faster loading, otherwise falls back to PIL.

    Args:
        path: Path to image file

    Returns:
        Grayscale image as uint8 numpy array of shape (height, width)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be decoded as an image
    """
    if not path.is_file():
        raise FileNotFoundError(f"Image not found: {path}")

    if USE_OPENCV:
        # PIL does not apply EXIF orientation, so OpenCV must not either
        gray_np = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE | cv2.IMREAD_IGNORE_ORIENTATION)
        if gray_np is None:
            raise ValueError(f"Failed to load image: {path}")
        logger.debug("Loaded %s with OpenCV: %s", path, gray_np.shape)
        return gray_np

    try:
        with Image.open(path) as img:
            gray_np = np.array(img.convert("L"))
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError(f"Failed to load image: {path} ({exc})") from exc
    logger.debug("Loaded %s with PIL: %s", path, gray_np.shape)
    return gray_np


def save_mask(mask: np.ndarray, path: Path) -> Path:
    """Encode a rendered mask to disk; the format follows the path's extension."""
    ensure_output(path.parent)
    mask_to_image(mask).save(path)
    logger.info("Saved mask to %s", path)
    return path


def derive_output_path(
    source: Union[str, Path],
    output_name: Optional[Union[str, Path]] = None,
    suffix: str = OUTPUT_SUFFIX,
    extension: str = OUTPUT_EXTENSION,
) -> Path:
    """Work out where the rendered mask for source goes.

    An explicit output_name is used as-is. Otherwise the source file name is
    cut at its first "." and suffix + extension appended, so
    "photos/night.sky.png" becomes "photos/night-starred.jpg".

    Raises:
        ValueError: If the chosen name carries no file extension
    """
    if output_name is not None:
        output_path = Path(output_name)
        if not output_path.suffix:
            raise ValueError(f"Output name must include a file extension: {output_name}")
        return output_path

    source = Path(source)
    stem, dot, _ = source.name.partition(".")
    if not dot or not stem:
        raise ValueError(f"File does not contain a file extension: {source}")
    return source.with_name(f"{stem}{suffix}{extension}")
