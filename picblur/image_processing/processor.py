"""Main picture processor orchestrating the blur pipeline.

AIDEV-NOTE: A blur is kernel -> convolve -> normalize. The source picture
is only read; the result is a new Picture that owns a fresh buffer.
"""

import logging
from pathlib import Path

from ..models import BlurConfig, BoundaryMode, Picture
from .codec import load_image, save_image
from .convolution import convolve
from .kernel import generate_kernel
from .normalization import normalize

logger = logging.getLogger(__name__)

BLURRED_SUFFIX = "_blurred"


def blur_image(
    picture: Picture,
    radius: int,
    boundary_mode: BoundaryMode = BoundaryMode.EXCLUDE,
    suffix: str = BLURRED_SUFFIX,
) -> Picture:
    """Gaussian-blur a picture.

    Args:
        picture: Source picture, left untouched
        radius: Blur radius (kernel width in pixels)
        boundary_mode: Treatment of kernel taps outside the grid
        suffix: Appended to the filename of the result

    Returns:
        New Picture with rounded and clipped pixels

    Raises:
        InvalidRadius: If radius is not a positive integer
        UnsupportedMode: If the picture's mode is not a known color model
    """
    kernel = generate_kernel(radius)
    logger.debug(
        "Blurring %s (%dx%d %s) with a %dx%d kernel",
        picture.filename or "<unnamed>",
        picture.width,
        picture.height,
        picture.mode.value,
        kernel.shape[0],
        kernel.shape[1],
    )

    blurred = Picture(
        pixels=convolve(picture.pixels, kernel, picture.mode, boundary_mode),
        mode=picture.mode,
        width=picture.width,
        height=picture.height,
        filename=picture.filename + suffix,
        format=picture.format,
        components=picture.components,
    )
    normalize(blurred)
    return blurred


class ImageProcessor:
    """Loads, blurs and saves pictures according to a BlurConfig."""

    def __init__(self, blur_config: BlurConfig | None = None):
        self.blur_config = blur_config or BlurConfig()

    def load(self, file_path: str | Path) -> Picture:
        """Load a picture from disk.

        Raises:
            FileNotFoundError: If the file does not exist
            CodecError: If the file is not a readable image
        """
        return load_image(file_path)

    def blur(self, picture: Picture, radius: int | None = None) -> Picture:
        """Blur a picture, using the configured radius if none is given."""
        if radius is None:
            radius = self.blur_config.radius
        return blur_image(
            picture,
            radius,
            boundary_mode=self.blur_config.boundary_mode,
            suffix=self.blur_config.blurred_suffix,
        )

    def save(self, picture: Picture, directory: str | Path) -> Path:
        """Write a picture into a directory, returning the file path."""
        return save_image(picture, directory, default_format=self.blur_config.output_format)

    def process(
        self,
        file_path: str | Path,
        output_dir: str | Path,
        radius: int | None = None,
    ) -> Path:
        """Execute the complete load -> blur -> save pipeline.

        Args:
            file_path: Path to input image
            output_dir: Directory the blurred image is written to
            radius: Blur radius, config default if None

        Returns:
            Path of the written image
        """
        logger.info("Loading %s", file_path)
        picture = self.load(file_path)
        logger.info(
            "Loaded %s: %dx%d, mode %s",
            picture.filename,
            picture.width,
            picture.height,
            picture.mode.value,
        )

        blurred = self.blur(picture, radius)
        output_path = self.save(blurred, output_dir)
        logger.info("Saved blurred image to %s", output_path)
        return output_path
