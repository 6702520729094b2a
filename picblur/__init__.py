"""In-memory pictures and Gaussian blur."""

from .config_manager import ConfigManager
from .errors import (
    CodecError,
    DimensionMismatch,
    InvalidRadius,
    PictureError,
    SearchError,
    UnsupportedMode,
)
from .image_processing import (
    ImageProcessor,
    blur_image,
    convolve,
    fetch_images,
    generate_kernel,
    load_bytes,
    load_image,
    normalize,
    save_bytes,
    save_image,
    select_image_from_search,
)
from .models import BlurConfig, BoundaryMode, ColorMode, Picture, SearchConfig

__all__ = [
    "BlurConfig",
    "BoundaryMode",
    "CodecError",
    "ColorMode",
    "ConfigManager",
    "DimensionMismatch",
    "ImageProcessor",
    "InvalidRadius",
    "Picture",
    "PictureError",
    "SearchConfig",
    "SearchError",
    "UnsupportedMode",
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
