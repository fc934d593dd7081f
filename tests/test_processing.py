"""Tests for the single-image pipeline."""

import numpy as np
import pytest
from PIL import Image

from clustering import CoverageError
from processing import analyze_image, count_stars, process_image, write_mask


class TestCountStars:
    """Tests for count_stars on in-memory grids."""

    def test_all_bright_3x3(self):
        count, occupancy = count_stars(np.full((3, 3), 200, dtype=np.uint8), 20)
        assert count == 1
        assert occupancy.all()

    def test_five_by_one_with_gap(self):
        # Width 5, height 1; cell at x=2 is dark
        count, _ = count_stars([[255, 255, 0, 255, 255]], 20)
        assert count == 2

    def test_max_sensitivity_counts_nothing(self):
        grid = np.array([[255, 10], [3, 255]], dtype=np.uint8)
        count, occupancy = count_stars(grid, 255)
        assert count == 0
        assert not occupancy.any()

    def test_equal_to_sensitivity_is_dark(self):
        count, _ = count_stars([[20, 20], [20, 20]], 20)
        assert count == 0

    def test_bad_sensitivity(self):
        with pytest.raises(ValueError):
            count_stars([[1]], 300)


class TestProcessImage:
    """Tests for process_image and its parts."""

    def test_counts_without_writing(self, write_gray, tmp_path):
        grid = np.zeros((5, 6), dtype=np.uint8)
        grid[0, 0] = 255
        grid[3:5, 3:5] = 120
        path = write_gray(grid)
        result = process_image(path, 20)
        assert result.filename == "sky.png"
        assert (result.width, result.height) == (6, 5)
        assert result.star_count == 2
        assert result.active_pixels == 5
        assert result.mask_path is None
        assert sorted(p.name for p in tmp_path.iterdir()) == ["sky.png"]

    def test_default_mask_path(self, write_gray, tmp_path):
        path = write_gray([[0, 255], [255, 0]])
        result = process_image(path, 20, output_image=True)
        assert result.mask_path == tmp_path / "sky-starred.jpg"
        assert result.mask_path.exists()

    def test_custom_mask_is_black_and_white(self, write_gray, tmp_path):
        grid = np.array([[0, 30, 20], [200, 21, 5]], dtype=np.uint8)
        path = write_gray(grid)
        out = tmp_path / "masks" / "out.png"
        result = process_image(path, 20, output_image=True, output_name=out)
        assert result.mask_path == out
        with Image.open(out) as img:
            assert np.array(img).tolist() == [[0, 255, 0], [255, 255, 0]]

    def test_settings_change_default_name(self, write_gray, tmp_path):
        path = write_gray([[255]])
        settings = {"sensitivity": 20, "output_suffix": "_mask", "output_extension": ".png"}
        result = process_image(path, 20, output_image=True, settings=settings)
        assert result.mask_path == tmp_path / "sky_mask.png"

    def test_analyze_then_write(self, write_gray, tmp_path):
        path = write_gray([[255, 0, 255]])
        result, occupancy = analyze_image(path, 20)
        assert result.star_count == 2
        mask_path = write_mask(path, occupancy, tmp_path / "m.png")
        with Image.open(mask_path) as img:
            assert np.array(img).tolist() == [[255, 0, 255]]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            process_image(tmp_path / "none.png", 20)

    def test_coverage_error_propagates(self, write_gray, monkeypatch):
        import clustering

        monkeypatch.setattr(clustering, "mark_cluster", lambda start, occupancy, visited: 0)
        with pytest.raises(CoverageError):
            process_image(write_gray([[255]]), 20)
