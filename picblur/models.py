"""Data models and constants for picture processing."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import numpy as np

from .errors import DimensionMismatch, UnsupportedMode

# Configuration file path
CONFIG_FILE = Path.home() / ".picblur_config.json"

GOOGLE_SEARCH_ENDPOINT = "https://www.googleapis.com/customsearch/v1"


class ColorMode(Enum):
    """Color models a picture can be expressed in.

    AIDEV-NOTE: The mode fixes both the channel count and the valid
    numeric range of every channel (see normalization.py).
    """

    RGB = "RGB"
    RGBA = "RGBA"
    GREY = "GREY"
    CMYK = "CMYK"
    HSL = "HSL"
    HSV = "HSV"
    LAB = "LAB"

    @classmethod
    def coerce(cls, value: "ColorMode | str") -> "ColorMode":
        """Return the ColorMode for an enum member or a mode name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise UnsupportedMode(f"Unsupported color mode: {value!r}") from None

    @property
    def components(self) -> int:
        """Canonical number of values per pixel."""
        return MODE_COMPONENTS[self]


MODE_COMPONENTS = {
    ColorMode.RGB: 3,
    ColorMode.RGBA: 4,
    ColorMode.GREY: 1,
    ColorMode.CMYK: 4,
    ColorMode.HSL: 3,
    ColorMode.HSV: 3,
    ColorMode.LAB: 3,
}


class BoundaryMode(Enum):
    """How convolution treats kernel taps that fall outside the grid.

    AIDEV-NOTE: EXCLUDE is the reference behavior and leaves a visible
    vignette along the borders. The other two remove it.
    """

    EXCLUDE = "exclude"  # Skip missing neighbors, keep their weight lost
    RENORMALIZE = "renormalize"  # Divide by the in-bounds weight sum
    REPLICATE = "replicate"  # Clamp neighbor coordinates to the nearest edge


@dataclass
class BlurConfig:
    """Settings for the blur pipeline."""

    radius: int = 3  # Kernel size in pixels, even values round up to odd
    boundary_mode: BoundaryMode = BoundaryMode.EXCLUDE
    blurred_suffix: str = "_blurred"  # Appended to the filename of the result
    output_format: str = "png"  # Used when a picture has no format of its own


@dataclass
class SearchConfig:
    """Credentials and endpoints for remote image search.

    AIDEV-NOTE: Keys are always injected here, never embedded in code.
    """

    api_key: str = ""
    engine_id: str = ""  # Custom search engine id ("cx")
    endpoint: str = GOOGLE_SEARCH_ENDPOINT
    fetch_proxy: "str | None" = None  # e.g. http://localhost:3000/fetch-image
    timeout: float = 30.0  # seconds


@dataclass(eq=False)
class Picture:
    """An image held as an in-memory pixel grid.

    AIDEV-NOTE: pixels is a numpy array of shape (height, width, components).
    Values may be fractional or out of range while a filter runs; only
    normalize() brings them back into the range of the color mode.
    """

    pixels: np.ndarray
    mode: ColorMode
    width: int
    height: int
    filename: str = ""
    format: str = ""
    components: "int | None" = None

    def __post_init__(self):
        self.mode = ColorMode.coerce(self.mode)
        if self.components is None:
            self.components = self.mode.components

        if self.components != self.mode.components:
            raise DimensionMismatch(
                f"{self.mode.value} pictures have {self.mode.components} "
                f"components per pixel, got {self.components}"
            )
        if self.width <= 0 or self.height <= 0:
            raise DimensionMismatch(
                f"Picture size must be positive, got {self.width}x{self.height}"
            )

        try:
            pixels = np.asarray(self.pixels)
        except ValueError as e:
            raise DimensionMismatch(f"Pixel grid is not rectangular: {e}") from e
        # A single-channel grid may come in without its channel axis
        if pixels.ndim == 2 and self.components == 1:
            pixels = pixels[:, :, np.newaxis]
        expected = (self.height, self.width, self.components)
        if pixels.shape != expected:
            raise DimensionMismatch(
                f"Pixel grid has shape {pixels.shape}, expected {expected}"
            )
        self.pixels = pixels

    @property
    def size(self) -> "tuple[int, int]":
        """(width, height) of the picture."""
        return self.width, self.height

    def blur(
        self,
        radius: int,
        boundary_mode: BoundaryMode = BoundaryMode.EXCLUDE,
    ) -> "Picture":
        """Return a Gaussian-blurred copy of this picture."""
        from .image_processing.processor import blur_image

        return blur_image(self, radius, boundary_mode=boundary_mode)
