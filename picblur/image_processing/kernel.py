"""Gaussian kernel synthesis.

AIDEV-NOTE: The kernel is sized directly by the blur radius (a radius of
5 gives a 5x5 kernel) and sigma is chosen so that +-3 sigma spans it.
"""

import math
from numbers import Integral

import numpy as np

from ..errors import InvalidRadius


def generate_kernel(radius: int) -> np.ndarray:
    """Build a normalized square Gaussian kernel.

    Args:
        radius: Kernel width in pixels. Even values are bumped to the next
            odd value so the kernel has a center cell.

    Returns:
        2D float64 array of shape (n, n), n odd, summing to 1.0

    Raises:
        InvalidRadius: If radius is not a positive integer
    """
    if isinstance(radius, bool) or not isinstance(radius, Integral):
        raise InvalidRadius(f"Blur radius must be an integer, got {radius!r}")
    radius = int(radius)
    if radius <= 0:
        raise InvalidRadius(f"Blur radius must be positive, got {radius}")

    if radius % 2 == 0:
        radius += 1

    # sigma is zero here, so the Gaussian degenerates to a single tap
    if radius == 1:
        return np.ones((1, 1), dtype=np.float64)

    sigma = (radius - 1) / 6
    center = radius // 2

    offsets = np.arange(radius) - center
    x, y = np.meshgrid(offsets, offsets, indexing="ij")
    two_sigma_sq = 2 * sigma * sigma
    kernel = (1 / (math.pi * two_sigma_sq)) * np.exp(-(x * x + y * y) / two_sigma_sq)

    return kernel / kernel.sum()
