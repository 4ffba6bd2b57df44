"""
Core data types and the trail comparison mask.

Trails and trail sets hold normalized point data, ``MaskConfig`` holds the
raster size and drawing parameters, and ``TrailMask`` ties them to a
rasterized intensity mask that query trails are scored against.
"""

from trailmask.core.trail import Trail, TrailSet, as_trail_set
from trailmask.core.mask_config import MaskConfig
from trailmask.core.mask import TrailMask, create_mask

__all__ = [
    "Trail",
    "TrailSet",
    "as_trail_set",
    "MaskConfig",
    "TrailMask",
    "create_mask",
]
