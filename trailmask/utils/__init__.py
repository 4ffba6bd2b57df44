"""
Utility functions for trailmask.
"""

from trailmask.utils.geometry import (
    in_bounds,
    norm_to_px,
    point_segment_distance,
    polyline_length,
    polyline_segments,
    round_half_up,
)

__all__ = [
    "in_bounds",
    "norm_to_px",
    "point_segment_distance",
    "polyline_length",
    "polyline_segments",
    "round_half_up",
]
