"""Terrain generation configuration."""

from __future__ import annotations

import math

from isoterrain.exceptions import InvalidConfigError


class TerrainConfig:
    """Parameters for one terrain generation run.

    Groups the sampler, noise and height settings consumed by
    ``generate_terrain``. All values are validated on construction.

    Args:
        width: Region extent along x.
        height: Region extent along y (the 3D z axis once elevated).
        min_distance: Minimum distance between sampled points.
        max_distance: Maximum step from an active point to a candidate.
        max_tries: Candidates per active point before it is retired.
        noise_seed: Seed of the default noise field.
        height_scale: Horizontal scale divisor applied before sampling noise.
        height_amplitude: Multiplier applied to noise values.
        sample_seed: Seed of the point sampler. None draws fresh entropy.
        octaves: Number of fractal octaves of the default noise field.

    Raises:
        InvalidConfigError: If any parameter is out of range.

    Example:
        >>> config = TerrainConfig(
        ...     width=100, height=100, min_distance=2, max_distance=10,
        ...     height_scale=40, height_amplitude=8,
        ... )
        >>> config.expected_point_count
        2500.0
    """

    def __init__(
        self,
        width: float,
        height: float,
        min_distance: float,
        max_distance: float,
        max_tries: int = 30,
        noise_seed: int = 0,
        height_scale: float = 1.0,
        height_amplitude: float = 1.0,
        sample_seed: int | None = None,
        octaves: int = 1,
    ):
        for name, value in (
            ("width", width),
            ("height", height),
            ("min_distance", min_distance),
            ("max_distance", max_distance),
            ("height_scale", height_scale),
            ("height_amplitude", height_amplitude),
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
        if height_scale <= 0:
            raise InvalidConfigError("height_scale must be positive")
        if octaves < 1:
            raise InvalidConfigError("octaves must be at least 1")

        self.width = float(width)
        self.height = float(height)
        self.min_distance = float(min_distance)
        self.max_distance = float(max_distance)
        self.max_tries = int(max_tries)
        self.noise_seed = int(noise_seed)
        self.height_scale = float(height_scale)
        self.height_amplitude = float(height_amplitude)
        self.sample_seed = sample_seed
        self.octaves = int(octaves)

    @classmethod
    def square(
        cls,
        size: float,
        min_distance: float,
        max_distance: float | None = None,
        **kwargs,
    ) -> TerrainConfig:
        """Create configuration for a square region.

        Args:
            size: Side length of the region.
            min_distance: Minimum distance between sampled points.
            max_distance: Maximum candidate step. Default: 2 * min_distance.
            **kwargs: Remaining TerrainConfig arguments.

        Returns:
            TerrainConfig for a size x size region.
        """
        if max_distance is None:
            max_distance = 2.0 * min_distance
        return cls(
            width=size,
            height=size,
            min_distance=min_distance,
            max_distance=max_distance,
            **kwargs,
        )

    @property
    def area(self) -> float:
        """Area of the sampling region."""
        return self.width * self.height

    @property
    def expected_point_count(self) -> float:
        """Order-of-magnitude point count, area / min_distance**2."""
        return self.area / self.min_distance**2

    def to_dict(self) -> dict:
        """Return the configuration as a plain dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "min_distance": self.min_distance,
            "max_distance": self.max_distance,
            "max_tries": self.max_tries,
            "noise_seed": self.noise_seed,
            "height_scale": self.height_scale,
            "height_amplitude": self.height_amplitude,
            "sample_seed": self.sample_seed,
            "octaves": self.octaves,
        }

    def __repr__(self) -> str:
        return (
            f"TerrainConfig(width={self.width}, height={self.height}, "
            f"min_distance={self.min_distance}, "
            f"max_distance={self.max_distance})"
        )
