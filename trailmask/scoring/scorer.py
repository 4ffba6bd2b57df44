"""
Trail Scoring
===============

Score a query trail against a precomputed trail-mask raster.

Every query point is mapped onto the raster grid with the same transform
used to draw the reference trails, and the raster intensity under it is
read out. Points that land off the raster read as 0 but still count. The
score is the mean sampled intensity, normalized to [0, 1]:

    score = (sum of sampled intensities / MAX_INTENSITY) / num_points

Trail boundaries play no part: all query points form one sample
population, so reordering points or trails never changes the score.

Example::

    from trailmask.scoring import score

    s = score(raster, [[[0.1, 0.1], [0.5, 0.5], [0.9, 0.9]]])
    print(f"score={s:.3f}")
"""

import logging

import numpy as np

from trailmask.config import MAX_INTENSITY
from trailmask.core.trail import as_trail_set
from trailmask.errors import InvalidInput
from trailmask.utils.geometry import in_bounds, norm_to_px

logger = logging.getLogger(__name__)


def sample_intensities(raster: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Read the raster intensity under each normalized point.

    Args:
        raster: (height, width) intensity array.
        points: (N, 2) array of normalized (x, y) points.

    Returns:
        (N,) int64 array of sampled intensities, in input order. Points
        mapping outside the raster sample as 0.
    """
    height, width = raster.shape
    px = norm_to_px(points, width, height)
    inside = in_bounds(px, width, height)

    values = np.zeros(len(px), dtype=np.int64)
    rows = px[inside, 1].astype(np.int64)
    cols = px[inside, 0].astype(np.int64)
    values[inside] = raster[rows, cols]
    return values


def score(raster: np.ndarray, query, max_intensity: float = MAX_INTENSITY) -> float:
    """Compute the normalized mean raster intensity under a query.

    The query coordinates are mapped using the raster's own width and
    height. A query recorded in a frame with a different aspect ratio is
    not rejected; it is just geometrically distorted.

    Args:
        raster: (height, width) intensity array.
        query: Trail data accepted by ``as_trail_set``.
        max_intensity: Full-scale raster intensity.

    Returns:
        Score in [0, 1]; higher means closer to the reference trails.

    Raises:
        InvalidInput: If the query holds no points, or is malformed.
    """
    points = as_trail_set(query).flatten()
    num_points = len(points)
    if num_points == 0:
        raise InvalidInput("Cannot score a query with no points")

    values = sample_intensities(raster, points)
    total = float(np.sum(values))
    result = (total / max_intensity) / num_points

    logger.debug("Scored %d points: %.4f", num_points, result)
    return result
