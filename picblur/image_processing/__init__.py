"""Picture processing pipeline.

AIDEV-NOTE: Organized into modular components:
- kernel: Gaussian kernel synthesis
- convolution: kernel application with boundary handling
- normalization: rounding and clipping per color mode
- processor: blur_image and the ImageProcessor orchestrator
- codec: Pillow decode/encode and flat buffer conversion
- search: remote image search and download
"""

from .codec import load_bytes, load_image, save_bytes, save_image
from .convolution import convolve
from .kernel import generate_kernel
from .normalization import normalize
from .processor import ImageProcessor, blur_image
from .search import fetch_images, select_image_from_search

__all__ = [
    "ImageProcessor",
    "blur_image",
    "convolve",
    "fetch_images",
    "generate_kernel",
    "load_bytes",
    "load_image",
    "normalize",
    "save_bytes",
    "save_image",
    "select_image_from_search",
]
