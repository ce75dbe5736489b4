"""Blue-noise point sampling over a rectangular region."""

from __future__ import annotations

import logging
import math

import numpy as np
from scipy.spatial import cKDTree

from isoterrain.exceptions import InvalidConfigError, SamplingExhaustedError

logger = logging.getLogger(__name__)


class PoissonDiskSampler:
    """Poisson-disk point sampler using dart throwing with an active list.

    Every pair of produced points is at least ``min_distance`` apart and each
    point (apart from the seed) was placed within ``max_distance`` of an
    earlier one. A uniform background grid with cell size
    ``min_distance / sqrt(2)`` holds at most one point per cell, so the
    neighbourhood test only inspects the surrounding 5 x 5 cells.

    Args:
        width: Region extent along x.
        height: Region extent along y.
        min_distance: Minimum distance between any two points.
        max_distance: Maximum distance from an active point to a candidate.
        max_tries: Candidates per active point before it is retired.
        seed: Random seed. None draws fresh entropy.
        origin: Lower-left corner of the region. Default: (0, 0).

    Raises:
        InvalidConfigError: If distances or region dimensions are invalid.

    Example:
        >>> sampler = PoissonDiskSampler(100, 100, min_distance=2,
        ...                              max_distance=10, seed=1)
        >>> points = sampler.sample()
        >>> points.shape[1]
        2
    """

    def __init__(
        self,
        width: float,
        height: float,
        min_distance: float,
        max_distance: float,
        max_tries: int = 30,
        seed: int | None = None,
        origin: tuple[float, float] = (0.0, 0.0),
    ):
        for name, value in (
            ("width", width),
            ("height", height),
            ("min_distance", min_distance),
            ("max_distance", max_distance),
        ):
            if not math.isfinite(value):
                raise InvalidConfigError(f"{name} must be finite, got {value}")
        if width <= 0 or height <= 0:
            raise InvalidConfigError(
                f"Region dimensions must be positive, got {width} x {height}"
            )
        if min_distance <= 0:
            raise InvalidConfigError("min_distance must be positive")
        if max_distance < min_distance:
            raise InvalidConfigError(
                f"max_distance ({max_distance}) must not be smaller than "
                f"min_distance ({min_distance})"
            )
        if max_tries < 1:
            raise InvalidConfigError("max_tries must be at least 1")

        self._width = float(width)
        self._height = float(height)
        self._min_distance = float(min_distance)
        self._max_distance = float(max_distance)
        self._max_tries = int(max_tries)
        self._seed = seed
        self._origin = (float(origin[0]), float(origin[1]))

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Return region bounding box as (xmin, ymin, xmax, ymax)."""
        x0, y0 = self._origin
        return (x0, y0, x0 + self._width, y0 + self._height)

    @property
    def cell_size(self) -> float:
        """Edge length of a background grid cell."""
        return self._min_distance / math.sqrt(2.0)

    def sample(self) -> np.ndarray:
        """Generate the point set.

        Returns:
            Array of shape (n, 2) with unique points inside the region.

        Raises:
            SamplingExhaustedError: If not even the seed point was placed.
        """
        rng = np.random.default_rng(self._seed)
        x0, y0, x1, y1 = self.bounds
        cell = self.cell_size
        min_d2 = self._min_distance**2

        grid_w = max(int(math.ceil(self._width / cell)), 1)
        grid_h = max(int(math.ceil(self._height / cell)), 1)
        grid = np.full((grid_h, grid_w), -1, dtype=np.int64)

        points: list[tuple[float, float]] = []
        active: list[int] = []

        def cell_of(x: float, y: float) -> tuple[int, int]:
            gx = min(int((x - x0) / cell), grid_w - 1)
            gy = min(int((y - y0) / cell), grid_h - 1)
            return gx, gy

        def fits(x: float, y: float) -> bool:
            gx, gy = cell_of(x, y)
            for j in range(max(gy - 2, 0), min(gy + 3, grid_h)):
                for i in range(max(gx - 2, 0), min(gx + 3, grid_w)):
                    k = grid[j, i]
                    if k < 0:
                        continue
                    px, py = points[k]
                    if (px - x) ** 2 + (py - y) ** 2 < min_d2:
                        return False
            return True

        def accept(x: float, y: float) -> None:
            gx, gy = cell_of(x, y)
            grid[gy, gx] = len(points)
            active.append(len(points))
            points.append((x, y))

        accept(rng.uniform(x0, x1), rng.uniform(y0, y1))

        while active:
            slot = int(rng.integers(len(active)))
            px, py = points[active[slot]]

            # Candidates for this point are drawn in one batch
            angles = rng.uniform(0.0, 2.0 * math.pi, self._max_tries)
            radii = rng.uniform(
                self._min_distance, self._max_distance, self._max_tries
            )
            cx = px + radii * np.cos(angles)
            cy = py + radii * np.sin(angles)

            for x, y in zip(cx.tolist(), cy.tolist()):
                if not (x0 <= x < x1 and y0 <= y < y1):
                    continue
                if fits(x, y):
                    accept(x, y)
                    break
            else:
                # Retired points stay in the output
                active[slot] = active[-1]
                active.pop()

        if not points:
            raise SamplingExhaustedError("Region admitted no sample points")

        result = np.array(points, dtype=float)
        logger.debug(
            "Sampled %d points in %.1f x %.1f region (min_distance=%.3g)",
            len(result),
            self._width,
            self._height,
            self._min_distance,
        )
        return result

    def __repr__(self) -> str:
        return (
            f"PoissonDiskSampler(bounds={self.bounds}, "
            f"min_distance={self._min_distance}, "
            f"max_distance={self._max_distance}, max_tries={self._max_tries})"
        )


def sample_points(
    width: float,
    height: float,
    min_distance: float,
    max_distance: float,
    max_tries: int = 30,
    seed: int | None = None,
) -> np.ndarray:
    """Convenience function for one-shot Poisson-disk sampling.

    Args:
        width: Region extent along x.
        height: Region extent along y.
        min_distance: Minimum distance between any two points.
        max_distance: Maximum distance from an active point to a candidate.
        max_tries: Candidates per active point. Default: 30.
        seed: Random seed.

    Returns:
        Array of shape (n, 2) with the sampled points.
    """
    sampler = PoissonDiskSampler(
        width, height, min_distance, max_distance, max_tries=max_tries, seed=seed
    )
    return sampler.sample()


def minimum_spacing(points: np.ndarray) -> float:
    """Return the smallest pairwise distance in a point set.

    Args:
        points: Array of shape (n, dim).

    Returns:
        Smallest distance between two distinct points, or inf for fewer
        than two points.
    """
    points = np.asarray(points, dtype=float)
    if len(points) < 2:
        return math.inf
    distances, _ = cKDTree(points).query(points, k=2)
    return float(distances[:, 1].min())
