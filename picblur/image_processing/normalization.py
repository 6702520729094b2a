"""Rounding and clipping of pixel values to the range of their color mode."""

import numpy as np

from ..errors import UnsupportedMode
from ..models import ColorMode, Picture

# (decimal places, low, high) per mode; LAB is special-cased per channel
_RANGES = {
    ColorMode.RGB: (0, 0, 255),
    ColorMode.RGBA: (0, 0, 255),
    ColorMode.GREY: (0, 0, 255),
    ColorMode.CMYK: (0, 0, 100),
    ColorMode.HSL: (2, 0.0, 1.0),
    ColorMode.HSV: (2, 0.0, 1.0),
}

LAB_LIGHTNESS_RANGE = (0, 100)
LAB_CHROMA_RANGE = (-128, 127)


def round_half_up(values: np.ndarray, decimals: int = 0) -> np.ndarray:
    """Round to the given number of decimals, with halves going up.

    AIDEV-NOTE: np.round rounds halves to even (128.5 -> 128). Picture
    values round halves towards +inf instead, so 128.5 -> 129 and
    -0.5 -> 0.
    """
    scale = 10.0**decimals
    return np.floor(np.asarray(values, dtype=np.float64) * scale + 0.5) / scale


def normalize(picture: Picture) -> None:
    """Round and clip the picture's pixels in place.

    Integer color modes end up with an integer grid, HSL and HSV keep
    floats rounded to two decimals.

    Raises:
        UnsupportedMode: If the picture's mode is not a known color model
    """
    mode = picture.mode
    if not isinstance(mode, ColorMode):
        raise UnsupportedMode(f"Unsupported color mode: {mode!r}")

    if mode == ColorMode.LAB:
        rounded = round_half_up(picture.pixels)
        rounded[..., :1] = np.clip(rounded[..., :1], *LAB_LIGHTNESS_RANGE)
        rounded[..., 1:] = np.clip(rounded[..., 1:], *LAB_CHROMA_RANGE)
        picture.pixels = rounded.astype(np.int64)
        return

    decimals, low, high = _RANGES[mode]
    clipped = np.clip(round_half_up(picture.pixels, decimals), low, high)
    picture.pixels = clipped if decimals else clipped.astype(np.int64)
