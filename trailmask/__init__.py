"""
trailmask: Spatial Similarity Scoring for Recorded Trails
==========================================================

trailmask scores how closely an observed path ("trail") follows one or
more previously recorded reference trails.

The reference trails are rasterized into an intensity mask: each trail is
stroked as a wide, round-capped polyline, optionally blurred to relax the
positional tolerance, and overlaid with its sharp centerline. A query is
scored by sampling the mask under each of its points and averaging.

Key capabilities:
    - Canonical trail containers for normalized 2D point data
    - Round-capped, round-joined polyline rasterization
    - Gaussian blur with screen-composite brightening
    - Order-invariant mean-intensity scoring in [0, 1]

Quick start::

    from trailmask import Trail, create_mask

    ref = Trail([[0.1, 0.1], [0.5, 0.5], [0.9, 0.9]])
    mask = create_mask(ref, width=512, height=512, thickness=64, blur_radius=32)

    score = mask.compare(Trail([[0.1, 0.12], [0.5, 0.52], [0.9, 0.91]]))
    print(f"score={score:.3f}")
"""

import logging

__version__ = "0.1.0"
__author__ = "trailmask Authors"

from trailmask.errors import InvalidInput, NoOpWarning, TrailMaskError
from trailmask.core.trail import Trail, TrailSet, as_trail_set
from trailmask.core.mask_config import MaskConfig
from trailmask.core.mask import TrailMask, create_mask
from trailmask.raster.rasterizer import generate
from trailmask.scoring.scorer import score

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "InvalidInput",
    "NoOpWarning",
    "TrailMaskError",
    "Trail",
    "TrailSet",
    "as_trail_set",
    "MaskConfig",
    "TrailMask",
    "create_mask",
    "generate",
    "score",
]
