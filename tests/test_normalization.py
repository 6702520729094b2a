"""Tests for rounding and clipping per color mode."""

from __future__ import annotations

import numpy as np
import pytest

from picblur.errors import UnsupportedMode
from picblur.image_processing.normalization import normalize, round_half_up
from picblur.models import ColorMode, Picture


def _row_picture(values, mode: ColorMode) -> Picture:
    """A 1-pixel-high picture, one pixel per entry of values."""
    pixels = np.asarray([values], dtype=np.float64)
    return Picture(pixels=pixels, mode=mode, width=len(values), height=1)


class TestRoundHalfUp:
    def test_halves_go_up(self):
        np.testing.assert_array_equal(
            round_half_up(np.array([128.5, 0.5, -0.5, -1.5, 2.4])),
            [129.0, 1.0, 0.0, -1.0, 2.0],
        )

    def test_two_decimals(self):
        np.testing.assert_allclose(round_half_up(np.array([0.125, 0.494, 0.3333]), 2), [0.13, 0.49, 0.33])


class TestNormalizeRGB:
    def test_rgb_examples(self):
        picture = _row_picture([[-10.4, 257.6, 128.5]], ColorMode.RGB)
        normalize(picture)
        np.testing.assert_array_equal(picture.pixels, [[[0, 255, 129]]])

    def test_integer_grid(self):
        picture = _row_picture([[1.2, 2.7, 3.5]], ColorMode.RGB)
        normalize(picture)
        assert np.issubdtype(picture.pixels.dtype, np.integer)

    def test_rgba_alpha_is_clipped_too(self):
        picture = _row_picture([[10, 20, 30, 300.2]], ColorMode.RGBA)
        normalize(picture)
        np.testing.assert_array_equal(picture.pixels, [[[10, 20, 30, 255]]])

    def test_grey(self):
        picture = _row_picture([[-3.0], [99.49], [1000.0]], ColorMode.GREY)
        normalize(picture)
        np.testing.assert_array_equal(picture.pixels[0, :, 0], [0, 99, 255])


class TestNormalizeOtherModes:
    def test_cmyk(self):
        picture = _row_picture([[-1.0, 50.5, 100.4, 180.0]], ColorMode.CMYK)
        normalize(picture)
        np.testing.assert_array_equal(picture.pixels, [[[0, 51, 100, 100]]])

    @pytest.mark.parametrize("mode", [ColorMode.HSL, ColorMode.HSV])
    def test_hue_models_round_to_two_decimals(self, mode):
        picture = _row_picture([[0.123, 1.7, -0.2]], mode)
        normalize(picture)
        np.testing.assert_allclose(picture.pixels, [[[0.12, 1.0, 0.0]]])
        assert np.issubdtype(picture.pixels.dtype, np.floating)

    def test_lab_channels(self):
        picture = _row_picture([[150, -200, 40.6], [-5, 300, -128.4]], ColorMode.LAB)
        normalize(picture)
        np.testing.assert_array_equal(picture.pixels, [[[100, -128, 41], [0, 127, -128]]])


class TestNormalizeProperties:
    @pytest.mark.parametrize(
        "mode, values",
        [
            (ColorMode.RGB, [[-10.4, 257.6, 128.5], [0.5, 254.5, 3.3]]),
            (ColorMode.CMYK, [[12.5, 99.5, -1, 150]]),
            (ColorMode.HSL, [[0.005, 0.295, 0.9999]]),
            (ColorMode.HSV, [[0.125, 0.555, 1.2]]),
            (ColorMode.LAB, [[50.5, -0.5, 127.5]]),
        ],
    )
    def test_idempotent(self, mode, values):
        picture = _row_picture(values, mode)
        normalize(picture)
        once = picture.pixels.copy()
        normalize(picture)
        np.testing.assert_array_equal(picture.pixels, once)

    def test_unknown_mode_rejected(self):
        picture = _row_picture([[1, 2, 3]], ColorMode.RGB)
        picture.mode = "XYZ"
        with pytest.raises(UnsupportedMode):
            normalize(picture)
