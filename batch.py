"""Batch processing functions for star counting."""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from config import default_settings
from image_io import derive_output_path, iter_images
from models import StarCountResult
from output import write_csv
from processing import process_image
from progress import ProgressRenderer

logger = logging.getLogger(__name__)


def process_batch(
    images_dir: Path,
    sensitivity: int,
    output_image: bool = False,
    output_csv: Optional[Path] = None,
    progress_renderer: Optional[ProgressRenderer] = None,
    progress_cb: Optional[Callable[[int, int, float], None]] = None,
    settings: Optional[Dict[str, Any]] = None,
) -> Dict[str, object]:
    """Count stars in every supported image of a directory.

    Args:
        images_dir: Directory containing input images
        sensitivity: Luminance cutoff (0-255) shared by every image
        output_image: Whether to render a mask next to each image
        output_csv: Optional path for a CSV summary
        progress_renderer: Optional terminal progress bar
        progress_cb: Optional callback, signature (current, total, elapsed)
        settings: Loaded settings passed through to process_image

    Returns:
        Dictionary with processing summary
    """
    settings = settings or default_settings()
    # Masks from earlier runs share the configured suffix and are not sources
    image_paths = list(iter_images(images_dir, suffix=settings["output_suffix"]))
    if not image_paths:
        raise FileNotFoundError(f"No images found in {images_dir}")

    if progress_renderer is not None:
        progress_renderer.reset(len(image_paths))

    results: List[StarCountResult] = []
    failed: List[str] = []
    mask_sources: Dict[Path, str] = {}
    start_time = time.time()

    for idx, path in enumerate(image_paths):
        try:
            if output_image:
                mask_path = derive_output_path(
                    path,
                    suffix=settings["output_suffix"],
                    extension=settings["output_extension"],
                )
                if mask_path in mask_sources:
                    logger.warning(
                        "%s and %s both render to %s; keeping the mask of %s",
                        mask_sources[mask_path], path.name, mask_path.name, path.name,
                    )
                mask_sources[mask_path] = path.name
            result = process_image(
                path,
                sensitivity,
                output_image=output_image,
                settings=settings,
            )
        except (ValueError, OSError) as exc:
            # One unreadable or unwritable file should not abort the whole directory
            logger.warning("Skipping %s: %s", path.name, exc)
            failed.append(path.name)
            result = None
        else:
            results.append(result)

        if progress_renderer is not None:
            progress_renderer.update(
                idx + 1,
                stars=result.star_count if result is not None else 0,
                failed=result is None,
            )
        if progress_cb is not None:
            progress_cb(idx + 1, len(image_paths), time.time() - start_time)

    if output_csv is not None:
        write_csv(output_csv, results, sensitivity)
        logger.info("Wrote summary for %d image(s) to %s", len(results), output_csv)

    return {
        "processed": len(results),
        "total_stars": sum(r.star_count for r in results),
        "results": results,
        "failed": failed,
    }
