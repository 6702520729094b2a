"""Shared test fixtures."""

from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from picblur.models import ColorMode, Picture


def _uniform_picture(value, width: int, height: int, mode: ColorMode = ColorMode.RGB) -> Picture:
    """A picture where every pixel holds the same components."""
    pixels = np.tile(np.asarray(value, dtype=np.float64), (height, width, 1))
    return Picture(pixels=pixels, mode=mode, width=width, height=height, filename="sample", format="png")


@pytest.fixture
def white_5x5() -> Picture:
    return _uniform_picture([255, 255, 255], 5, 5)


@pytest.fixture
def gradient_rgba() -> Picture:
    """7x6 RGBA picture with varying colors and a patterned alpha channel."""
    height, width = 6, 7
    rows, cols = np.mgrid[0:height, 0:width]
    pixels = np.stack(
        [rows * 40, cols * 30, (rows + cols) * 10, (rows * width + cols) % 5 * 50],
        axis=-1,
    ).astype(np.float64)
    return Picture(pixels=pixels, mode=ColorMode.RGBA, width=width, height=height, filename="gradient")


@pytest.fixture
def png_bytes() -> bytes:
    """A 4x3 RGB PNG with a red top row."""
    image = Image.new("RGB", (4, 3), (0, 0, 255))
    for x in range(4):
        image.putpixel((x, 0), (255, 0, 0))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def uniform_picture():
    """Factory for single-color pictures."""
    return _uniform_picture
