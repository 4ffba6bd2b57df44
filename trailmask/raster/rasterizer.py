"""
Trail Mask Rasterizer
=======================

Turn a set of reference trails into an intensity raster representing
"closeness to any reference trail".

The pipeline:
    1. **Stroke**: draw every trail as a round-capped polyline of width
       ``thickness`` at full intensity.
    2. **Blur** (if ``blur_radius > 0``): Gaussian-blur the stroked layer
       with sigma ``blur_radius``, then screen it onto itself
       ``SCREEN_PASSES`` times so the blurred centerline climbs back
       towards full intensity while the falloff stays smooth.
    3. **Overlay**: paint the unblurred stroke on top of the blurred base,
       so the exact centerline always reads at full intensity.

The blur is what relaxes the comparison tolerance: a wider blur lets
query points further from the reference still pick up intensity.

Example::

    from trailmask.core import MaskConfig, TrailSet
    from trailmask.raster import generate

    ref = TrailSet.from_trail([[0.1, 0.1], [0.5, 0.5], [0.9, 0.9]])
    raster = generate(ref, MaskConfig(width=512, height=512))
    print(raster.shape, raster.max())  # (512, 512) 255
"""

import logging

import numpy as np

from trailmask.config import MAX_INTENSITY, RASTER_DTYPE, SCREEN_PASSES
from trailmask.core.mask_config import MaskConfig
from trailmask.core.trail import TrailSet
from trailmask.raster.composite import brighten, gaussian_blur, source_over
from trailmask.raster.stroke import stroke_coverage, trail_segments_px

logger = logging.getLogger(__name__)


def _to_raster(layer: np.ndarray) -> np.ndarray:
    """Quantize a float layer to a read-only view of a new raster buffer."""
    out = np.clip(np.rint(layer), 0, MAX_INTENSITY).astype(RASTER_DTYPE)
    out.flags.writeable = False
    # numpy refuses to re-enable writes on a view of a read-only base
    return out.view()


def generate(trail_set: TrailSet, config: MaskConfig) -> np.ndarray:
    """Rasterize reference trails into a new intensity raster.

    Empty input (no trails, or only trails with fewer than two points) is
    a defined case and yields an all-zero raster.

    Args:
        trail_set: Reference trails in normalized coordinates.
        config: Raster size and drawing parameters.

    Returns:
        Read-only (height, width) uint8 array with values in
        [0, MAX_INTENSITY]. A new buffer is returned on every call.
    """
    shape = (config.height, config.width)
    layer = np.zeros(shape, dtype=np.float64)

    if not trail_set.is_drawable:
        logger.debug("No drawable trails, returning blank %dx%d raster",
                     config.width, config.height)
        return _to_raster(layer)

    segments = trail_segments_px(trail_set, config.width, config.height)
    coverage = stroke_coverage(shape, segments, config.thickness)

    if config.blur_radius > 0:
        stroked = coverage * MAX_INTENSITY
        blurred = gaussian_blur(stroked, config.blur_radius)
        layer = brighten(blurred, SCREEN_PASSES, MAX_INTENSITY)

    layer = source_over(layer, coverage, MAX_INTENSITY)

    logger.debug(
        "Generated %dx%d raster from %d segments "
        "(thickness=%.2f, blur_radius=%.2f)",
        config.width, config.height, len(segments),
        config.thickness, config.blur_radius,
    )
    return _to_raster(layer)
