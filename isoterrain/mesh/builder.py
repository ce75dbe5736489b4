"""High-level TerrainBuilder API for procedural terrain generation."""

from __future__ import annotations

import logging
import math

import numpy as np

from isoterrain.config import TerrainConfig
from isoterrain.exceptions import InvalidConfigError, IsoterrainError
from isoterrain.fields.noise import NoiseField, PerlinNoise2D
from isoterrain.geometry.sampling import PoissonDiskSampler
from isoterrain.mesh.heightfield import HeightFieldBuilder, TerrainMesh
from isoterrain.mesh.triangulation import (
    DelaunayTriangulator,
    Topology,
    Triangulator,
)

logger = logging.getLogger(__name__)


class TerrainBuilder:
    """High-level API for building procedural terrain meshes.

    Orchestrates the full generation workflow:
    1. Define the rectangular sampling region
    2. Configure point spacing
    3. Sample blue-noise points
    4. Triangulate them (Delaunay)
    5. Assign noise elevations and compute normals

    Args:
        width: Region extent along x.
        height: Region extent along y.

    Example:
        >>> from isoterrain import TerrainBuilder
        >>> mesh = (
        ...     TerrainBuilder(100, 100)
        ...     .set_spacing(min_distance=2, max_distance=10)
        ...     .set_height(scale=40, amplitude=8)
        ...     .set_noise(PerlinNoise2D(seed=7, octaves=3))
        ...     .set_sample_seed(1)
        ...     .build()
        ... )
    """

    def __init__(self, width: float | None = None, height: float | None = None):
        # Configuration (set via builder methods)
        self._width: float | None = None
        self._height: float | None = None
        self._min_distance: float | None = None
        self._max_distance: float | None = None
        self._max_tries = 30
        self._sample_seed: int | None = None
        self._scale = 1.0
        self._amplitude = 1.0

        # Collaborators
        self._noise: NoiseField | None = None
        self._triangulator: Triangulator | None = None

        # Generated objects (created during build)
        self._topology: Topology | None = None
        self._mesh: TerrainMesh | None = None

        if width is not None or height is not None:
            self.set_region(width, height)

    @classmethod
    def from_config(cls, config: TerrainConfig) -> TerrainBuilder:
        """Create a builder populated from a TerrainConfig.

        Args:
            config: Validated terrain configuration.

        Returns:
            New TerrainBuilder instance.
        """
        return (
            cls(config.width, config.height)
            .set_spacing(
                config.min_distance, config.max_distance, max_tries=config.max_tries
            )
            .set_height(config.height_scale, config.height_amplitude)
            .set_noise(PerlinNoise2D(seed=config.noise_seed, octaves=config.octaves))
            .set_sample_seed(config.sample_seed)
        )

    @property
    def is_configured(self) -> bool:
        """Return True if all required parameters are set."""
        return (
            self._width is not None
            and self._height is not None
            and self._min_distance is not None
            and self._max_distance is not None
        )

    def set_region(self, width: float, height: float) -> TerrainBuilder:
        """Set the sampling region size.

        Args:
            width: Region extent along x.
            height: Region extent along y.

        Returns:
            Self for method chaining.
        """
        if width is None or height is None:
            raise InvalidConfigError("Both region dimensions are required")
        if not (math.isfinite(width) and math.isfinite(height)):
            raise InvalidConfigError(
                f"Region dimensions must be finite, got {width} x {height}"
            )
        if width <= 0 or height <= 0:
            raise InvalidConfigError(
                f"Region dimensions must be positive, got {width} x {height}"
            )
        self._width = float(width)
        self._height = float(height)
        return self

    def set_spacing(
        self,
        min_distance: float,
        max_distance: float,
        max_tries: int = 30,
    ) -> TerrainBuilder:
        """Set point sampling distances.

        Args:
            min_distance: Minimum distance between points.
            max_distance: Maximum step from an active point to a candidate.
            max_tries: Candidates per active point. Default: 30.

        Returns:
            Self for method chaining.
        """
        self._min_distance = float(min_distance)
        self._max_distance = float(max_distance)
        self._max_tries = int(max_tries)
        return self

    def set_height(self, scale: float, amplitude: float) -> TerrainBuilder:
        """Set horizontal noise scale and vertical amplitude.

        Returns:
            Self for method chaining.
        """
        if not (math.isfinite(scale) and math.isfinite(amplitude)):
            raise InvalidConfigError("scale and amplitude must be finite")
        if scale <= 0:
            raise InvalidConfigError("scale must be positive")
        self._scale = float(scale)
        self._amplitude = float(amplitude)
        return self

    def set_noise(self, noise: NoiseField) -> TerrainBuilder:
        """Set the noise field used for elevations.

        Returns:
            Self for method chaining.
        """
        self._noise = noise
        return self

    def set_triangulator(self, triangulator: Triangulator) -> TerrainBuilder:
        """Set the triangulation backend.

        Returns:
            Self for method chaining.
        """
        self._triangulator = triangulator
        return self

    def set_sample_seed(self, seed: int | None) -> TerrainBuilder:
        """Set the point sampler seed.

        Returns:
            Self for method chaining.
        """
        self._sample_seed = seed
        return self

    def _validate_configuration(self) -> None:
        """Validate that all required parameters are set."""
        if self._width is None or self._height is None:
            raise IsoterrainError("Region not set. Call set_region() first.")
        if self._min_distance is None or self._max_distance is None:
            raise IsoterrainError("Spacing not set. Call set_spacing() first.")

    def sample_points(self) -> np.ndarray:
        """Sample the blue-noise point set for the configured region."""
        self._validate_configuration()
        sampler = PoissonDiskSampler(
            self._width,
            self._height,
            self._min_distance,
            self._max_distance,
            max_tries=self._max_tries,
            seed=self._sample_seed,
        )
        return sampler.sample()

    def build(self) -> TerrainMesh:
        """Build the terrain mesh.

        Returns:
            TerrainMesh with noise elevations and unit vertex normals.

        Raises:
            IsoterrainError: If required parameters are not set.
            InvalidConfigError: If sampling parameters are invalid.
            SamplingExhaustedError: If no points could be sampled.
            TriangulationError: If the points cannot be triangulated.
            MeshGenerationError: If the height field cannot be built.
        """
        self._validate_configuration()

        noise = self._noise if self._noise is not None else PerlinNoise2D()
        triangulator = (
            self._triangulator
            if self._triangulator is not None
            else DelaunayTriangulator()
        )

        # Step 1: Blue-noise points
        points = self.sample_points()

        # Step 2: Planar Delaunay topology
        topology = triangulator.triangulate(points)

        # Step 3: Elevations, winding and normals
        mesh = HeightFieldBuilder(noise, self._scale, self._amplitude).build(topology)

        self._topology = topology
        self._mesh = mesh
        logger.info(
            "Generated terrain: %d vertices, %d triangles",
            mesh.n_vertices,
            mesh.n_triangles,
        )
        return mesh

    def get_topology(self) -> Topology | None:
        """Return the planar topology (available after build)."""
        return self._topology

    def get_mesh_info(self) -> dict:
        """Return information about the built terrain.

        Returns:
            Dictionary with configuration and mesh statistics.
        """
        info = {
            "width": self._width,
            "height": self._height,
            "min_distance": self._min_distance,
            "max_distance": self._max_distance,
            "max_tries": self._max_tries,
            "scale": self._scale,
            "amplitude": self._amplitude,
        }

        if self._topology is not None:
            info["n_hull_edges"] = self._topology.n_hull_edges
            info["hull_area"] = self._topology.convex_hull.area

        if self._mesh is not None:
            info["n_vertices"] = self._mesh.n_vertices
            info["n_triangles"] = self._mesh.n_triangles
            info["elevation_range"] = self._mesh.elevation_range

        return info


def generate_terrain(
    config: TerrainConfig,
    noise: NoiseField | None = None,
    triangulator: Triangulator | None = None,
) -> TerrainMesh:
    """Run the full generation pipeline for a configuration.

    Args:
        config: Terrain configuration.
        noise: Noise field override. Default: PerlinNoise2D seeded with
            ``config.noise_seed``.
        triangulator: Triangulation backend. Default: DelaunayTriangulator.

    Returns:
        Generated TerrainMesh. No partial mesh is ever returned; failures
        raise an IsoterrainError subclass.
    """
    logger.debug("Generating terrain with %s", config.to_dict())
    builder = TerrainBuilder.from_config(config)
    if noise is not None:
        builder.set_noise(noise)
    if triangulator is not None:
        builder.set_triangulator(triangulator)
    return builder.build()
