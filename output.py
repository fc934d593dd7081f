"""Output generation functions for star counting."""

import csv
from pathlib import Path
from typing import Iterable, List

from models import StarCountResult


def write_csv(
    output_csv: Path,
    results: Iterable[StarCountResult],
    sensitivity: int,
) -> None:
    """Write CSV with one row per image followed by overall stats."""
    result_list: List[StarCountResult] = list(results)
    total_stars = sum(r.star_count for r in result_list)

    output_csv.parent.mkdir(parents=True, exist_ok=True)
    with output_csv.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)

        # Section 1: per-image stats
        writer.writerow(
            [
                "Filename",
                "Width",
                "Height",
                "Sensitivity",
                "Star_Count",
                "Active_Pixels",
                "Active_Ratio",
                "Mask_Path",
            ]
        )
        for r in result_list:
            writer.writerow(
                [
                    r.filename,
                    r.width,
                    r.height,
                    r.sensitivity,
                    r.star_count,
                    r.active_pixels,
                    f"{r.active_ratio:.6f}",
                    str(r.mask_path) if r.mask_path is not None else "",
                ]
            )

        # Section 2: summary totals
        writer.writerow([])
        writer.writerow(["Statistic", "Value"])
        writer.writerow(["Total_Images", len(result_list)])
        writer.writerow(["Total_Stars", total_stars])
        writer.writerow(["Sensitivity", sensitivity])
