"""
Mask generation parameters.
"""

import math
import numbers
from dataclasses import asdict, dataclass, replace
from typing import Optional

from trailmask.config import DEFAULT_BLUR_RADIUS, DEFAULT_THICKNESS
from trailmask.errors import InvalidInput


def _check_size(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidInput(f"{name} must be positive, got {value}")
    return int(value)


def _check_length(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInput(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise InvalidInput(f"{name} must be finite and non-negative, got {value}")
    return value


@dataclass(frozen=True)
class MaskConfig:
    """Raster size and drawing parameters for a trail mask.

    The width and height fix the raster resolution. They need not match
    the frame the trails were recorded in, but should keep its aspect
    ratio. Thickness and blur radius are in raster pixels, so they should
    be scaled along with the resolution.

    Attributes:
        width: Raster width in pixels (> 0).
        height: Raster height in pixels (> 0).
        thickness: Stroke width in pixels (>= 0).
        blur_radius: Gaussian blur sigma in pixels (>= 0). Zero disables
            the blur.

    Raises:
        InvalidInput: If any field is out of range or of the wrong type.
    """

    width: int
    height: int
    thickness: float = DEFAULT_THICKNESS
    blur_radius: float = DEFAULT_BLUR_RADIUS

    def __post_init__(self):
        object.__setattr__(self, "width", _check_size("width", self.width))
        object.__setattr__(self, "height", _check_size("height", self.height))
        object.__setattr__(
            self, "thickness", _check_length("thickness", self.thickness)
        )
        object.__setattr__(
            self, "blur_radius", _check_length("blur_radius", self.blur_radius)
        )

    @property
    def shape(self):
        """Raster array shape, (height, width)."""
        return (self.height, self.width)

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    def updated(
        self,
        thickness: Optional[float] = None,
        blur_radius: Optional[float] = None,
    ) -> "MaskConfig":
        """Return a copy with the given drawing parameters replaced.

        Arguments left as None keep their current value.
        """
        changes = {}
        if thickness is not None:
            changes["thickness"] = thickness
        if blur_radius is not None:
            changes["blur_radius"] = blur_radius
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "MaskConfig":
        """Deserialize from a dictionary.

        Missing drawing parameters fall back to the package defaults.
        """
        return cls(
            width=data["width"],
            height=data["height"],
            thickness=data.get("thickness", DEFAULT_THICKNESS),
            blur_radius=data.get("blur_radius", DEFAULT_BLUR_RADIUS),
        )
