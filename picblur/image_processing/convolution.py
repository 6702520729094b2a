"""2D convolution of a pixel grid with a square kernel.

AIDEV-NOTE: Instead of visiting every pixel, each kernel tap is applied to
the whole grid at once as a shifted slice. Neighbors that fall outside
the grid are handled by trimming the slice bounds, which excludes them
from the sum exactly like a per-pixel bounds check would.
"""

import numpy as np

from ..errors import DimensionMismatch
from ..models import BoundaryMode, ColorMode


def convolve(
    pixels: np.ndarray,
    kernel: np.ndarray,
    mode: "ColorMode | str",
    boundary_mode: BoundaryMode = BoundaryMode.EXCLUDE,
) -> np.ndarray:
    """Apply a kernel to every channel of a pixel grid.

    Args:
        pixels: Grid of shape (height, width, components)
        kernel: Square, odd-sized weight matrix
        mode: Color mode of the grid; the alpha channel of RGBA is
            copied through instead of being blurred
        boundary_mode: Treatment of taps outside the grid

    Returns:
        New float64 grid of the same shape, unrounded and unclipped

    Raises:
        DimensionMismatch: If the kernel is not square and odd-sized, or
            pixels is not a 3D grid
    """
    mode = ColorMode.coerce(mode)
    kernel = np.asarray(kernel, dtype=np.float64)
    source = np.asarray(pixels, dtype=np.float64)

    if kernel.ndim != 2 or kernel.shape[0] != kernel.shape[1]:
        raise DimensionMismatch(f"Kernel must be square, got shape {kernel.shape}")
    if kernel.shape[0] % 2 == 0:
        raise DimensionMismatch(f"Kernel size must be odd, got {kernel.shape[0]}")
    if source.ndim != 3:
        raise DimensionMismatch(
            f"Pixels must be a (height, width, components) grid, got shape {source.shape}"
        )

    channels = source.shape[2]
    if mode == ColorMode.RGBA:
        channels -= 1
    blurred = np.zeros_like(source)

    if boundary_mode == BoundaryMode.REPLICATE:
        blurred[:, :, :channels] = _convolve_replicate(source[:, :, :channels], kernel)
    else:
        blurred[:, :, :channels] = _convolve_exclude(
            source[:, :, :channels],
            kernel,
            renormalize=boundary_mode == BoundaryMode.RENORMALIZE,
        )

    if channels < source.shape[2]:
        blurred[:, :, channels:] = source[:, :, channels:]

    return blurred


def _convolve_exclude(
    source: np.ndarray, kernel: np.ndarray, renormalize: bool = False
) -> np.ndarray:
    """Weighted sum over in-bounds neighbors only."""
    height, width = source.shape[:2]
    center = kernel.shape[0] // 2
    result = np.zeros_like(source)
    weight_sum = np.zeros((height, width, 1), dtype=np.float64)

    for dx in range(-center, center + 1):
        # Output rows whose neighbor row i + dx lies inside the grid
        row_lo, row_hi = max(0, -dx), min(height, height - dx)
        if row_lo >= row_hi:
            continue
        for dy in range(-center, center + 1):
            col_lo, col_hi = max(0, -dy), min(width, width - dy)
            if col_lo >= col_hi:
                continue

            weight = kernel[dx + center, dy + center]
            result[row_lo:row_hi, col_lo:col_hi] += (
                weight * source[row_lo + dx : row_hi + dx, col_lo + dy : col_hi + dy]
            )
            weight_sum[row_lo:row_hi, col_lo:col_hi] += weight

    if renormalize:
        result /= weight_sum

    return result


def _convolve_replicate(source: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Weighted sum with out-of-range neighbors clamped to the nearest edge."""
    height, width = source.shape[:2]
    center = kernel.shape[0] // 2
    padded = np.pad(source, ((center, center), (center, center), (0, 0)), mode="edge")
    result = np.zeros_like(source)

    for dx in range(-center, center + 1):
        for dy in range(-center, center + 1):
            rows = slice(center + dx, center + dx + height)
            cols = slice(center + dy, center + dy + width)
            result += kernel[dx + center, dy + center] * padded[rows, cols]

    return result
