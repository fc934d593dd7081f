"""Tests for binary mask rendering."""

import numpy as np
import pytest

from rendering import MASK_OFF, MASK_ON, mask_to_image, render_mask
from thresholding import threshold_grid


class TestRenderMask:
    """Tests for render_mask."""

    def test_all_inactive_renders_black(self):
        mask = render_mask(np.zeros((3, 4), dtype=bool))
        assert mask.shape == (3, 4)
        assert mask.dtype == np.uint8
        assert not mask.any()

    def test_active_cells_full_brightness(self):
        mask = render_mask([[True, False], [False, True]])
        assert mask.tolist() == [[MASK_ON, MASK_OFF], [MASK_OFF, MASK_ON]]

    def test_does_not_copy_original_intensity(self):
        intensity = np.array([[30, 100], [5, 0]], dtype=np.uint8)
        mask = render_mask(threshold_grid(intensity, 20))
        assert mask.tolist() == [[255, 255], [0, 0]]

    @pytest.mark.parametrize("sensitivity", [0, 1, 127, 254])
    def test_rethreshold_round_trip(self, sensitivity):
        rng = np.random.default_rng(sensitivity)
        occupancy = rng.random((9, 13)) < 0.4
        assert np.array_equal(threshold_grid(render_mask(occupancy), sensitivity), occupancy)

    def test_not_2d_rejected(self):
        with pytest.raises(ValueError):
            render_mask([True, False])


class TestMaskToImage:
    """Tests for mask_to_image."""

    def test_grayscale_image_matches_mask(self):
        mask = render_mask([[True, False, False], [False, False, True]])
        img = mask_to_image(mask)
        assert img.mode == "L"
        assert img.size == (3, 2)  # PIL reports (width, height)
        assert np.array_equal(np.array(img), mask)
