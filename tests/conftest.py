"""Shared fixtures for the star counting tests."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

import image_io


@pytest.fixture(autouse=True)
def pil_only(monkeypatch):
    """Decode through PIL so results do not depend on an OpenCV install."""
    monkeypatch.setattr(image_io, "USE_OPENCV", False)


@pytest.fixture
def write_gray(tmp_path):
    """Save a 2D uint8 grid (rows indexed [y][x]) as a lossless grayscale image."""

    def _write(grid, name: str = "sky.png") -> Path:
        path = tmp_path / name
        Image.fromarray(np.asarray(grid, dtype=np.uint8)).save(path)
        return path

    return _write
