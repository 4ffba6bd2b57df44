"""
Layer Blurring and Compositing
================================

Float-layer operations used to build the trail mask: Gaussian blur,
"screen" blending, and "source-over" painting of an anti-aliased stroke.

All layers are 2D float64 arrays holding intensities in [0, MAX_INTENSITY];
coverage layers hold per-pixel stroke coverage in [0, 1].
"""

import numpy as np
from scipy.ndimage import gaussian_filter

from trailmask.config import MAX_INTENSITY


def gaussian_blur(layer: np.ndarray, radius: float) -> np.ndarray:
    """Blur a layer with an isotropic Gaussian kernel.

    The canvas is treated as zero outside its borders, so intensity
    spreading past the edge is lost rather than reflected back.

    Args:
        layer: 2D float array.
        radius: Gaussian standard deviation in pixels. Values <= 0
            return an unblurred copy.

    Returns:
        New 2D float64 array of the same shape.
    """
    layer = np.asarray(layer, dtype=np.float64)
    if radius <= 0:
        return layer.copy()
    return gaussian_filter(layer, sigma=float(radius), mode="constant", cval=0.0)


def screen_composite(
    base: np.ndarray,
    top: np.ndarray,
    max_intensity: float = MAX_INTENSITY,
) -> np.ndarray:
    """Blend two layers with the "screen" operator.

    ``result = a + b - a * b / max``. Screening never darkens either input
    and saturates smoothly towards ``max_intensity``.

    Args:
        base: Bottom layer.
        top: Top layer, same shape as ``base``.
        max_intensity: Full-scale intensity.

    Returns:
        New float64 layer.
    """
    base = np.asarray(base, dtype=np.float64)
    top = np.asarray(top, dtype=np.float64)
    return base + top - base * top / float(max_intensity)


def brighten(
    layer: np.ndarray,
    passes: int,
    max_intensity: float = MAX_INTENSITY,
) -> np.ndarray:
    """Screen a layer onto itself ``passes`` times.

    Each pass maps a normalized value ``v`` to ``1 - (1 - v)**2``, which
    lifts a blurred centerline back towards full intensity while keeping
    zero-valued background at zero.
    """
    out = np.asarray(layer, dtype=np.float64)
    for _ in range(passes):
        out = screen_composite(out, out, max_intensity)
    return out


def source_over(
    base: np.ndarray,
    coverage: np.ndarray,
    intensity: float = MAX_INTENSITY,
) -> np.ndarray:
    """Paint a solid-intensity stroke over a base layer.

    ``result = coverage * intensity + (1 - coverage) * base``

    Args:
        base: Bottom intensity layer.
        coverage: Stroke coverage in [0, 1], same shape as ``base``.
        intensity: Stroke intensity.

    Returns:
        New float64 layer.
    """
    base = np.asarray(base, dtype=np.float64)
    coverage = np.asarray(coverage, dtype=np.float64)
    return coverage * float(intensity) + (1.0 - coverage) * base
