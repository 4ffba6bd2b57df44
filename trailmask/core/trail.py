"""
Trail Containers
==================

Canonical in-memory representation of trail data.

A ``Trail`` is an ordered sequence of normalized (x, y) points; consecutive
points define the drawn line segments. A ``TrailSet`` is an ordered group of
trails that are drawn and sampled independently: no segment ever joins the
last point of one trail to the first point of the next.

Coordinates are normalized to [0, 1] relative to a frame whose aspect ratio
matches the raster. Values outside [0, 1] are legal and simply map to
off-raster pixels.

Every public entry point accepts trail data through ``as_trail_set``:

    - a ``TrailSet`` is used as is,
    - a ``Trail`` is wrapped into a set of one,
    - any other sequence is read as a sequence of trails.

A bare list of points is therefore never guessed at; wrap it in ``Trail``
(or use ``TrailSet.from_trail``) to pass a single trail.

Example::

    from trailmask.core import Trail, TrailSet

    ref = TrailSet.from_trail([[0.1, 0.1], [0.5, 0.5], [0.9, 0.9]])
    pair = TrailSet.from_trails([
        [[0.1, 0.8], [0.3, 0.6]],
        [[0.6, 0.4], [0.9, 0.1]],
    ])
    print(pair.num_points)  # 4
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Sequence, Tuple, Union

import numpy as np

from trailmask.errors import InvalidInput
from trailmask.utils.geometry import polyline_length


def _coerce_points(points: Any) -> np.ndarray:
    """Validate raw point data and return it as an (N, 2) float64 array."""
    if isinstance(points, Trail):
        return points.points.copy()
    if isinstance(points, (str, bytes)) or points is None:
        raise InvalidInput(
            f"Trail points must be a sequence of (x, y) pairs, got {points!r}"
        )
    try:
        arr = np.array(points, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(
            f"Trail points must be numeric (x, y) pairs: {exc}"
        ) from exc

    if arr.ndim == 1 and arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidInput(
            f"Trail points must have shape (N, 2), got {arr.shape}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidInput("Trail points must be finite numbers")
    return arr


@dataclass(frozen=True, eq=False)
class Trail:
    """An ordered sequence of normalized 2D points.

    Attributes:
        points: (N, 2) float64 array of (x, y) points. N may be 0 (the
            trail contributes nothing) or 1 (no drawable segment, but
            still a valid sample location).

    Raises:
        InvalidInput: If a point is missing a coordinate or holds a
            non-numeric or non-finite value.
    """

    points: np.ndarray = field(default_factory=lambda: np.empty((0, 2)))

    def __post_init__(self):
        arr = _coerce_points(self.points)
        arr.flags.writeable = False
        object.__setattr__(self, "points", arr.view())

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self.points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trail):
            return NotImplemented
        return np.array_equal(self.points, other.points)

    def __hash__(self) -> int:
        # adding 0.0 folds -0.0 into 0.0 so equal trails hash alike
        return hash((self.points + 0.0).tobytes())

    @property
    def is_drawable(self) -> bool:
        """Whether the trail has at least one segment (two or more points)."""
        return len(self.points) >= 2

    @property
    def length(self) -> float:
        """Arc length of the trail in normalized units."""
        return polyline_length(self.points)


TrailLike = Union[Trail, Sequence[Sequence[float]], np.ndarray]


@dataclass(frozen=True)
class TrailSet:
    """An ordered group of independently drawn trails.

    Attributes:
        trails: Tuple of Trail objects, in input order.
    """

    trails: Tuple[Trail, ...] = ()

    def __post_init__(self):
        object.__setattr__(
            self,
            "trails",
            tuple(t if isinstance(t, Trail) else Trail(t) for t in self.trails),
        )

    @classmethod
    def from_trail(cls, trail: TrailLike) -> "TrailSet":
        """Wrap a single trail into a set of one."""
        return cls((trail if isinstance(trail, Trail) else Trail(trail),))

    @classmethod
    def from_trails(cls, trails: Iterable[TrailLike]) -> "TrailSet":
        """Build a set from a sequence of trail-like objects.

        Raises:
            InvalidInput: If ``trails`` is not a sequence of trails.
        """
        if isinstance(trails, (str, bytes)) or trails is None:
            raise InvalidInput(
                f"Expected a sequence of trails, got {trails!r}"
            )
        try:
            items = list(trails)
        except TypeError as exc:
            raise InvalidInput(
                f"Expected a sequence of trails, got {type(trails).__name__}"
            ) from exc
        return cls(tuple(items))

    def __len__(self) -> int:
        return len(self.trails)

    def __iter__(self) -> Iterator[Trail]:
        return iter(self.trails)

    def __getitem__(self, index: int) -> Trail:
        return self.trails[index]

    @property
    def num_points(self) -> int:
        """Total number of points across all trails."""
        return sum(len(t) for t in self.trails)

    @property
    def is_drawable(self) -> bool:
        """Whether any trail has at least one segment to stroke."""
        return any(t.is_drawable for t in self.trails)

    def flatten(self) -> np.ndarray:
        """Concatenate all points into one (M, 2) array, in input order.

        Trail boundaries are discarded.
        """
        if self.num_points == 0:
            return np.empty((0, 2), dtype=np.float64)
        return np.concatenate([t.points for t in self.trails if len(t)], axis=0)


def as_trail_set(trails: Union[TrailSet, Trail, Iterable[TrailLike]]) -> TrailSet:
    """Canonicalize trail input into a ``TrailSet``.

    Args:
        trails: A TrailSet (returned unchanged), a Trail (wrapped into a
            set of one), or a sequence of trail-like objects.

    Returns:
        The corresponding TrailSet.

    Raises:
        InvalidInput: If the data cannot be read as a sequence of trails
            of (x, y) points.
    """
    if isinstance(trails, TrailSet):
        return trails
    if isinstance(trails, Trail):
        return TrailSet.from_trail(trails)
    return TrailSet.from_trails(trails)
