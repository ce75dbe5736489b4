"""Deterministic 2D gradient noise used for terrain elevation."""

from __future__ import annotations

import math
from typing import Protocol

import numpy as np


class NoiseField(Protocol):
    """Protocol for scalar noise fields."""

    def sample(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        """Evaluate the field at (x, y), returning values in [-1, 1]."""
        ...


def _fade(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + (b - a) * t


class PerlinNoise2D:
    """Seeded Perlin gradient noise with optional fractal octaves.

    Gradients are unit vectors at random angles looked up through a shuffled
    permutation table, both drawn from ``numpy.random.default_rng(seed)``.
    A single octave of unit-gradient Perlin noise is bounded by sqrt(2)/2,
    so values are rescaled by sqrt(2) to span [-1, 1]. Octaves are summed
    with weights ``persistence**i`` and divided by the weight total.

    Args:
        seed: Seed for the permutation and gradient tables.
        octaves: Number of octaves summed. Default: 1.
        persistence: Amplitude ratio between successive octaves. Default: 0.5.
        lacunarity: Frequency ratio between successive octaves. Default: 2.0.

    Example:
        >>> noise = PerlinNoise2D(seed=3)
        >>> value = noise.sample(np.array([0.5]), np.array([1.25]))
    """

    def __init__(
        self,
        seed: int = 0,
        octaves: int = 1,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
    ):
        if octaves < 1:
            raise ValueError("octaves must be at least 1")

        self._seed = seed
        self._octaves = octaves
        self._persistence = persistence
        self._lacunarity = lacunarity

        rng = np.random.default_rng(seed)
        perm = rng.permutation(256)
        self._perm = np.concatenate([perm, perm])
        angles = rng.uniform(0.0, 2.0 * math.pi, 256)
        self._gradients = np.stack([np.cos(angles), np.sin(angles)], axis=1)

    @property
    def seed(self) -> int:
        """Seed the tables were drawn from."""
        return self._seed

    @property
    def octaves(self) -> int:
        """Number of summed octaves."""
        return self._octaves

    def _corner(
        self,
        ix: np.ndarray,
        iy: np.ndarray,
        dx: np.ndarray,
        dy: np.ndarray,
    ) -> np.ndarray:
        g = self._gradients[self._perm[self._perm[ix] + iy]]
        return g[..., 0] * dx + g[..., 1] * dy

    def _octave(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        xf = np.floor(x)
        yf = np.floor(y)
        xi = xf.astype(np.int64) & 255
        yi = yf.astype(np.int64) & 255
        fx = x - xf
        fy = y - yf

        n00 = self._corner(xi, yi, fx, fy)
        n10 = self._corner(xi + 1, yi, fx - 1.0, fy)
        n01 = self._corner(xi, yi + 1, fx, fy - 1.0)
        n11 = self._corner(xi + 1, yi + 1, fx - 1.0, fy - 1.0)

        u = _fade(fx)
        v = _fade(fy)
        return _lerp(_lerp(n00, n10, u), _lerp(n01, n11, u), v) * math.sqrt(2.0)

    def sample(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        """Evaluate noise at the given coordinates.

        Args:
            x: X coordinates, any shape.
            y: Y coordinates, broadcastable against x.

        Returns:
            Noise values in [-1, 1] with the broadcast shape of x and y.
        """
        x, y = np.broadcast_arrays(
            np.asarray(x, dtype=float), np.asarray(y, dtype=float)
        )

        total = np.zeros(x.shape)
        weight = 0.0
        amplitude = 1.0
        frequency = 1.0
        for _ in range(self._octaves):
            total += amplitude * self._octave(x * frequency, y * frequency)
            weight += amplitude
            amplitude *= self._persistence
            frequency *= self._lacunarity

        return np.clip(total / weight, -1.0, 1.0)

    def __repr__(self) -> str:
        return f"PerlinNoise2D(seed={self._seed}, octaves={self._octaves})"
