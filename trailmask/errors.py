"""
Exceptions and warnings raised by trailmask.
"""


class TrailMaskError(Exception):
    """Base class for all trailmask errors."""


class InvalidInput(TrailMaskError, ValueError):
    """Raised for malformed trail data, invalid mask parameters, or a
    query with no points to score."""


class NoOpWarning(UserWarning):
    """Emitted when a mask update is requested with nothing to change."""
