"""
Polyline Stroking
===================

Rasterize trails as wide polylines with round caps and round joins.

Strokes are computed from a distance field: every pixel centre takes its
distance to the nearest segment of any trail, and pixels within half the
stroke width are covered. Because the distance to a segment grows
radially around its endpoints, the caps and joins come out round without
any special casing. Taking the minimum distance over all segments makes
overlapping segments a union (no double-painting), and a repeated point
(zero-length segment) draws a round dot.

The edge is anti-aliased over one pixel:

    coverage = clip(thickness / 2 + 0.5 - distance, 0, min(1, thickness))

The upper clip scales sub-pixel strokes down, so a zero-width stroke
covers nothing.
"""

import logging
import math
from typing import Tuple

import numpy as np

from trailmask.config import MAX_INTENSITY
from trailmask.core.trail import TrailSet, as_trail_set
from trailmask.raster.composite import source_over
from trailmask.utils.geometry import (
    norm_to_px,
    point_segment_distance,
    polyline_segments,
)

logger = logging.getLogger(__name__)


def trail_segments_px(trail_set: TrailSet, width: int, height: int) -> np.ndarray:
    """Collect the pixel-space segments of every drawable trail.

    Trails are converted independently, so no segment links the end of one
    trail to the start of the next. Trails with fewer than two points
    contribute no segments.

    Args:
        trail_set: Trails in normalized coordinates.
        width: Raster width in pixels.
        height: Raster height in pixels.

    Returns:
        (K, 2, 2) float64 array of (start, end) pixel coordinates.
    """
    segments = [
        polyline_segments(norm_to_px(trail.points, width, height))
        for trail in trail_set
        if trail.is_drawable
    ]
    if not segments:
        return np.empty((0, 2, 2), dtype=np.float64)
    return np.concatenate(segments, axis=0)


def stroke_coverage(
    shape: Tuple[int, int],
    segments: np.ndarray,
    thickness: float,
) -> np.ndarray:
    """Anti-aliased coverage of a round-capped, round-joined stroke.

    Args:
        shape: (height, width) of the output layer.
        segments: (K, 2, 2) array of pixel-space segments.
        thickness: Stroke width in pixels.

    Returns:
        (height, width) float64 array with values in [0, 1].
    """
    height, width = shape
    coverage = np.zeros((height, width), dtype=np.float64)
    if thickness <= 0 or len(segments) == 0:
        return coverage

    half = thickness / 2.0
    reach = half + 1.0
    dist = np.full((height, width), np.inf, dtype=np.float64)

    for start, end in segments:
        # Only pixels within reach of the segment's bounding box can be covered
        x0 = max(0, int(math.floor(min(start[0], end[0]) - reach)))
        x1 = min(width, int(math.ceil(max(start[0], end[0]) + reach)) + 1)
        y0 = max(0, int(math.floor(min(start[1], end[1]) - reach)))
        y1 = min(height, int(math.ceil(max(start[1], end[1]) + reach)) + 1)
        if x0 >= x1 or y0 >= y1:
            continue

        ys, xs = np.mgrid[y0:y1, x0:x1]
        d = point_segment_distance(xs, ys, start, end)
        window = dist[y0:y1, x0:x1]
        np.minimum(window, d, out=window)

    np.clip(half + 0.5 - dist, 0.0, min(1.0, thickness), out=coverage)
    return coverage


def stroke_trails(
    canvas: np.ndarray,
    trails,
    thickness: float,
    intensity: float = MAX_INTENSITY,
    clear: bool = False,
) -> np.ndarray:
    """Stroke trails onto a caller-owned float canvas, in place.

    All drawing parameters are passed explicitly; nothing is remembered
    between calls.

    Args:
        canvas: (height, width) float array, modified in place.
        trails: Trail data accepted by ``as_trail_set``.
        thickness: Stroke width in pixels.
        intensity: Stroke intensity painted at full coverage.
        clear: If True, zero the canvas before drawing.

    Returns:
        The same ``canvas`` array, for chaining.
    """
    trail_set = as_trail_set(trails)
    height, width = canvas.shape
    if clear:
        canvas[...] = 0.0

    segments = trail_segments_px(trail_set, width, height)
    logger.debug(
        "Stroking %d segments from %d trails (thickness=%.2f)",
        len(segments), len(trail_set), thickness,
    )
    coverage = stroke_coverage((height, width), segments, thickness)
    canvas[...] = source_over(canvas, coverage, intensity)
    return canvas
