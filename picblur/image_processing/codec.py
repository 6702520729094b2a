"""Conversion between encoded images, flat buffers and Pictures.

AIDEV-NOTE: Pillow does all decoding and encoding. This module only maps
Pillow modes onto ColorMode and rescales channels between Pillow's 8-bit
storage and the numeric ranges used by normalization.py.
"""

import io
import logging
import re
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import CodecError, DimensionMismatch, UnsupportedMode
from ..models import ColorMode, Picture
from .normalization import normalize, round_half_up

logger = logging.getLogger(__name__)

# Pillow mode name for every ColorMode that has one
PIL_MODES = {
    ColorMode.RGB: "RGB",
    ColorMode.RGBA: "RGBA",
    ColorMode.GREY: "L",
    ColorMode.CMYK: "CMYK",
    ColorMode.HSV: "HSV",
    ColorMode.LAB: "LAB",
}
COLOR_MODES = {pil_mode: mode for mode, pil_mode in PIL_MODES.items()}

# Pillow modes that carry transparency and get widened to RGBA
_ALPHA_MODES = {"LA", "La", "PA", "RGBa", "RGBX"}

# Preferred file extension for Pillow format names
_FORMAT_EXTENSIONS = {"jpeg": "jpg", "tiff": "tif"}


def convert_flat(
    flat_pixels, width: int, height: int, components: int
) -> np.ndarray:
    """Group a flat, row-major, channel-interleaved buffer into a grid.

    Returns:
        Array of shape (height, width, components)

    Raises:
        DimensionMismatch: If the buffer length does not match the size
    """
    flat = np.asarray(flat_pixels)
    expected = width * height * components
    if flat.size != expected:
        raise DimensionMismatch(
            f"Buffer holds {flat.size} values, expected {expected} "
            f"for {width}x{height}x{components}"
        )
    return flat.reshape(height, width, components)


def flatten_pixels(pixels: np.ndarray) -> np.ndarray:
    """Flatten a pixel grid back into a 1D buffer."""
    return np.asarray(pixels).reshape(-1)


def _extension(format_name: str) -> str:
    name = format_name.lower()
    return _FORMAT_EXTENSIONS.get(name, name)


def _pil_format(extension: str) -> str:
    """Map a file extension onto the format name Pillow.save() expects."""
    extension = extension.lower().lstrip(".")
    return Image.registered_extensions().get("." + extension, extension.upper())


def _to_model_range(pixels: np.ndarray, mode: ColorMode) -> np.ndarray:
    """Rescale 8-bit Pillow channels into the range of the color mode."""
    values = pixels.astype(np.float64)
    if mode == ColorMode.CMYK:
        values = values * 100 / 255
    elif mode == ColorMode.HSV:
        values = values / 255
    elif mode == ColorMode.LAB:
        values[..., 0] = values[..., 0] * 100 / 255
        values[..., 1:] -= 128
    return values


def _to_pil_range(pixels: np.ndarray, mode: ColorMode) -> np.ndarray:
    """Inverse of _to_model_range, rounded and packed into bytes."""
    values = np.asarray(pixels, dtype=np.float64).copy()
    if mode == ColorMode.CMYK:
        values = values * 255 / 100
    elif mode == ColorMode.HSV:
        values = values * 255
    elif mode == ColorMode.LAB:
        values[..., 0] = values[..., 0] * 255 / 100
        values[..., 1:] += 128
    return np.clip(round_half_up(values), 0, 255).astype(np.uint8)


def load_bytes(
    data: bytes, filename: str = "", format: str | None = None
) -> Picture:
    """Decode encoded image data into a normalized Picture.

    Args:
        data: Encoded image (PNG, JPEG, ...)
        filename: Name given to the picture
        format: File extension to record, detected from the data if None

    Raises:
        CodecError: If the data is not a decodable image
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise CodecError(f"Failed to decode image: {e}") from e

    if image.mode not in COLOR_MODES:
        has_alpha = image.mode in _ALPHA_MODES or "transparency" in image.info
        target = "RGBA" if has_alpha else "RGB"
        logger.debug("Converting Pillow mode %s to %s", image.mode, target)
        image = image.convert(target)

    mode = COLOR_MODES[image.mode]
    width, height = image.size
    flat = np.frombuffer(image.tobytes(), dtype=np.uint8)
    pixels = convert_flat(flat, width, height, mode.components)

    picture = Picture(
        pixels=_to_model_range(pixels, mode),
        mode=mode,
        width=width,
        height=height,
        filename=filename,
        format=format or _extension(image.format or ""),
        components=mode.components,
    )
    normalize(picture)
    return picture


def save_bytes(picture: Picture, format: str | None = None) -> bytes:
    """Encode a picture with Pillow.

    HSV pictures are written as RGB.

    Args:
        picture: Picture to encode
        format: File extension or Pillow format name, picture.format if None

    Raises:
        UnsupportedMode: If the picture's mode has no Pillow representation
        CodecError: If Pillow cannot write the picture in that format
    """
    pil_mode = PIL_MODES.get(picture.mode)
    if pil_mode is None:
        raise UnsupportedMode(f"Cannot encode {picture.mode.value} pictures")

    format = format or picture.format
    if not format:
        raise CodecError("No output format given")

    buffer = _to_pil_range(picture.pixels, picture.mode)
    image = Image.frombytes(
        pil_mode, (picture.width, picture.height), flatten_pixels(buffer).tobytes()
    )
    if picture.mode == ColorMode.HSV:
        # No file format stores HSV
        logger.debug("Encoding HSV picture %s as RGB", picture.filename)
        image = image.convert("RGB")

    output = io.BytesIO()
    try:
        image.save(output, format=_pil_format(format))
    except (KeyError, ValueError, OSError) as e:
        raise CodecError(f"Failed to encode image as {format}: {e}") from e
    return output.getvalue()


def load_image(file_path: str | Path) -> Picture:
    """Load an image file into a Picture.

    The picture is named after the file stem and records the detected
    image type as its format.

    Raises:
        FileNotFoundError: If the path is not an existing file
        CodecError: If the file is not an image
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    return load_bytes(path.read_bytes(), filename=path.stem)


def _safe_name(filename: str) -> str:
    """Turn a picture name into a single path component."""
    name = re.sub(r"[\\/]", "_", filename).strip()
    if name in ("", ".", ".."):
        return "picture"
    return name


def save_image(
    picture: Picture, directory: str | Path, default_format: str = "png"
) -> Path:
    """Write a picture to <directory>/<filename>.<format>.

    Path separators in the filename are replaced, so the file always
    lands directly inside directory.

    Returns:
        Path of the written file
    """
    extension = _extension(picture.format or default_format)
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{_safe_name(picture.filename)}.{extension}"

    path.write_bytes(save_bytes(picture, extension))
    return path
