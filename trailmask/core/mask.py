"""
Trail Comparison Mask
=======================

A ``TrailMask`` owns a set of reference trails, the parameters used to
draw them, and the intensity raster derived from the two. Query trails are
scored against the raster to measure how closely they follow the
reference.

The raster is built eagerly on construction and rebuilt in full on every
update, before ``update()`` returns. Each rebuild writes into a fresh
buffer which is then swapped in under a lock together with the trails and
config it was built from, so ``compare()`` and ``raster()`` always see a
consistent, fully built state even when called from other threads.

Example::

    from trailmask import create_mask

    # Make mask object from reference trail
    ref_trail = [[0.1, 0.1], [0.2, 0.2], [0.3, 0.3], [0.4, 0.4]]
    mask = create_mask([ref_trail], 512, 512)

    # Compare some other trail to the mask
    other_trail = [[0.1, 0.8], [0.2, 0.3], [0.5, 0.4], [0.7, 0.1]]
    print(mask.compare([other_trail]))

    # Loosen the tolerance
    mask.update(blur_radius=64)
"""

import logging
import threading
import time
import warnings
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

import numpy as np

from trailmask.config import DEFAULT_BLUR_RADIUS, DEFAULT_THICKNESS
from trailmask.core.mask_config import MaskConfig
from trailmask.core.trail import TrailSet, as_trail_set
from trailmask.errors import NoOpWarning
from trailmask.raster.rasterizer import generate
from trailmask.scoring.scorer import score

logger = logging.getLogger(__name__)


class _MaskState(NamedTuple):
    config: MaskConfig
    trails: TrailSet
    raster: np.ndarray


class TrailMask:
    """Intensity mask built from reference trails, used to score queries.

    The width/height determine the raster resolution, which in turn
    affects sensible choices of thickness and blur radius. They do not
    need to match the frame the trail data was recorded in, but should
    match its aspect ratio.

    Args:
        trails: Reference trail data accepted by ``as_trail_set``. An
            empty set gives an all-zero raster.
        width: Raster width in pixels.
        height: Raster height in pixels.
        thickness: Stroke width in pixels.
        blur_radius: Blur sigma in pixels; larger values tolerate more
            positional drift.

    Raises:
        InvalidInput: If the trail data or parameters are malformed.
    """

    def __init__(
        self,
        trails,
        width: int,
        height: int,
        thickness: float = DEFAULT_THICKNESS,
        blur_radius: float = DEFAULT_BLUR_RADIUS,
    ):
        config = MaskConfig(
            width=width,
            height=height,
            thickness=thickness,
            blur_radius=blur_radius,
        )
        trail_set = as_trail_set(trails)

        self._lock = threading.Lock()
        self._state = self._build(config, trail_set)

    @staticmethod
    def _build(config: MaskConfig, trail_set: TrailSet) -> _MaskState:
        t0 = time.time()
        raster = generate(trail_set, config)
        logger.debug(
            "Built %dx%d mask from %d trails (%d points) in %.3fs",
            config.width, config.height, len(trail_set),
            trail_set.num_points, time.time() - t0,
        )
        return _MaskState(config, trail_set, raster)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> MaskConfig:
        """Current mask parameters."""
        return self._state.config

    @property
    def trails(self) -> TrailSet:
        """Current reference trails."""
        return self._state.trails

    @property
    def width(self) -> int:
        return self._state.config.width

    @property
    def height(self) -> int:
        return self._state.config.height

    @property
    def thickness(self) -> float:
        return self._state.config.thickness

    @property
    def blur_radius(self) -> float:
        return self._state.config.blur_radius

    def raster(self) -> np.ndarray:
        """Read-only view of the current intensity raster.

        Returns:
            (height, width) uint8 array. Later updates replace the raster
            rather than modifying it, so a returned array never changes.
        """
        return self._state.raster

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def update(
        self,
        trails=None,
        thickness: Optional[float] = None,
        blur_radius: Optional[float] = None,
    ) -> None:
        """Change the reference trails and/or drawing parameters.

        The raster is fully regenerated before returning. Arguments left
        as None keep their current value. Calling with nothing to change
        is ignored with a ``NoOpWarning``.

        Args:
            trails: New reference trail data.
            thickness: New stroke width in pixels.
            blur_radius: New blur sigma in pixels.

        Raises:
            InvalidInput: If the new trail data or parameters are
                malformed. The mask is left unchanged.
        """
        if trails is None and thickness is None and blur_radius is None:
            logger.warning("No parameters given when updating mask, ignoring update")
            warnings.warn(
                "TrailMask.update() called with no parameters; ignoring update",
                NoOpWarning,
                stacklevel=2,
            )
            return

        new_trails = as_trail_set(trails) if trails is not None else None

        with self._lock:
            current = self._state
            config = current.config.updated(
                thickness=thickness, blur_radius=blur_radius
            )
            trail_set = new_trails if new_trails is not None else current.trails
            self._state = self._build(config, trail_set)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare(self, query) -> float:
        """Score how closely a query follows the reference trails.

        Args:
            query: Trail data accepted by ``as_trail_set``. All points of
                all trails are pooled together.

        Returns:
            Score in [0, 1], where higher values indicate a better match.

        Raises:
            InvalidInput: If the query holds no points, or is malformed.
        """
        return score(self._state.raster, query)

    def compare_batch(
        self,
        queries: Iterable[Any],
        verbose: bool = False,
    ) -> List[float]:
        """Score several queries against the same raster.

        Args:
            queries: Iterable of query trail data.
            verbose: Whether to log progress at INFO level.

        Returns:
            List of scores, in query order.
        """
        raster = self._state.raster
        results: List[float] = []
        t0 = time.time()

        for i, query in enumerate(queries):
            if verbose and (i + 1) % 50 == 0:
                logger.info("Comparing %d...", i + 1)
            results.append(score(raster, query))

        if verbose:
            logger.info(
                "Compared %d queries in %.1fs", len(results), time.time() - t0
            )
        return results

    def summary(self) -> Dict[str, Any]:
        """Summarize the mask parameters and raster contents.

        Returns:
            Dictionary of mask properties.
        """
        state = self._state
        raster = state.raster
        return {
            **state.config.to_dict(),
            "num_trails": len(state.trails),
            "num_points": state.trails.num_points,
            "coverage": float(np.count_nonzero(raster)) / raster.size,
            "mean_intensity": float(raster.mean()),
            "max_intensity": int(raster.max()),
        }

    def __repr__(self) -> str:
        cfg = self.config
        return (
            f"TrailMask(width={cfg.width}, height={cfg.height}, "
            f"thickness={cfg.thickness}, blur_radius={cfg.blur_radius}, "
            f"num_trails={len(self.trails)})"
        )


def create_mask(
    trails,
    width: int,
    height: int,
    thickness: float = DEFAULT_THICKNESS,
    blur_radius: float = DEFAULT_BLUR_RADIUS,
) -> TrailMask:
    """Create a trail mask; see ``TrailMask`` for the arguments."""
    return TrailMask(
        trails,
        width=width,
        height=height,
        thickness=thickness,
        blur_radius=blur_radius,
    )
