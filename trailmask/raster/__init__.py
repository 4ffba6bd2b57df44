"""
Rasterization of reference trails into an intensity mask.

The rasterizer strokes trails as round-capped polylines, optionally blurs
and brightens them, and overlays the sharp stroke on top.
"""

from trailmask.raster.composite import (
    brighten,
    gaussian_blur,
    screen_composite,
    source_over,
)
from trailmask.raster.rasterizer import generate
from trailmask.raster.stroke import stroke_coverage, stroke_trails, trail_segments_px

__all__ = [
    "brighten",
    "gaussian_blur",
    "generate",
    "screen_composite",
    "source_over",
    "stroke_coverage",
    "stroke_trails",
    "trail_segments_px",
]
