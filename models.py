"""Data models for star counting."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class StarCountResult:
    """Result of counting stars in a single image."""
    filename: str
    width: int
    height: int
    sensitivity: int
    star_count: int
    active_pixels: int  # Cells above the sensitivity cutoff
    mask_path: Optional[Path] = None  # Set only when a mask was rendered

    @property
    def total_pixels(self) -> int:
        return self.width * self.height

    @property
    def active_ratio(self) -> float:
        return self.active_pixels / self.total_pixels if self.total_pixels else 0.0
