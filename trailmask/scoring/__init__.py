"""
Scoring of query trails against a trail-mask raster.
"""

from trailmask.scoring.scorer import sample_intensities, score

__all__ = [
    "sample_intensities",
    "score",
]
