"""
Geometric Utility Functions
=============================

Common geometric operations used throughout trailmask: mapping normalized
coordinates onto the pixel grid, polyline measurements, and point-to-segment
distances.
"""

import numpy as np


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Round to the nearest integer, with halves rounded towards +inf.

    Unlike ``np.round`` (round-half-to-even), ``2.5 -> 3`` and
    ``-2.5 -> -2``. The result stays float64 so that far off-raster
    coordinates never overflow an integer cast.

    Args:
        values: Array of real values.

    Returns:
        float64 array of integral values.
    """
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def norm_to_px(points: np.ndarray, width: int, height: int) -> np.ndarray:
    """Convert 0-to-1 normalized coordinates to pixel coordinates.

    ``x = 0`` maps to column 0 and ``x = 1`` to column ``width - 1``
    (rows likewise), so the usable pixel range is ``[0, dim - 1]``.
    Coordinates outside [0, 1] map to off-raster pixels.

    Args:
        points: (N, 2) array of normalized (x, y) points.
        width: Raster width in pixels.
        height: Raster height in pixels.

    Returns:
        (N, 2) float64 array of integral (column, row) pixel coordinates.
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    scale = np.array([width - 1, height - 1], dtype=np.float64)
    return round_half_up(points * scale)


def in_bounds(px: np.ndarray, width: int, height: int) -> np.ndarray:
    """Boolean mask of pixel coordinates lying inside the raster.

    Args:
        px: (N, 2) array of (column, row) pixel coordinates.
        width: Raster width in pixels.
        height: Raster height in pixels.

    Returns:
        (N,) boolean array.
    """
    px = np.asarray(px).reshape(-1, 2)
    return (
        (px[:, 0] >= 0)
        & (px[:, 0] < width)
        & (px[:, 1] >= 0)
        & (px[:, 1] < height)
    )


def polyline_length(polyline: np.ndarray) -> float:
    """Compute total arc length of a 2D polyline.

    Args:
        polyline: (N, 2) array of points.

    Returns:
        Total length. Returns 0.0 if fewer than 2 points.
    """
    if len(polyline) < 2:
        return 0.0
    diffs = np.diff(polyline, axis=0)
    return float(np.sum(np.sqrt(np.sum(diffs**2, axis=1))))


def polyline_segments(polyline: np.ndarray) -> np.ndarray:
    """Split a polyline into its consecutive segments.

    Args:
        polyline: (N, 2) array of points.

    Returns:
        (N-1, 2, 2) array of (start, end) pairs. Empty (0, 2, 2) if
        fewer than 2 points.
    """
    polyline = np.asarray(polyline, dtype=np.float64).reshape(-1, 2)
    if len(polyline) < 2:
        return np.empty((0, 2, 2), dtype=np.float64)
    return np.stack([polyline[:-1], polyline[1:]], axis=1)


def point_segment_distance(
    xs: np.ndarray,
    ys: np.ndarray,
    start: np.ndarray,
    end: np.ndarray,
) -> np.ndarray:
    """Euclidean distance from query points to a line segment.

    A zero-length segment degenerates to the distance to a single point.

    Args:
        xs: Array of query x coordinates (any shape).
        ys: Array of query y coordinates, same shape as ``xs``.
        start: (2,) segment start point.
        end: (2,) segment end point.

    Returns:
        Array of distances with the shape of ``xs``.
    """
    ax, ay = float(start[0]), float(start[1])
    dx = float(end[0]) - ax
    dy = float(end[1]) - ay
    seg_len_sq = dx * dx + dy * dy

    rel_x = xs - ax
    rel_y = ys - ay
    if seg_len_sq == 0.0:
        return np.hypot(rel_x, rel_y)

    t = np.clip((rel_x * dx + rel_y * dy) / seg_len_sq, 0.0, 1.0)
    return np.hypot(rel_x - t * dx, rel_y - t * dy)
