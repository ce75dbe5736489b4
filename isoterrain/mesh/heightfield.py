"""Height-field meshes built from a planar topology and a noise field."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from isoterrain.exceptions import MeshGenerationError

if TYPE_CHECKING:
    from isoterrain.fields.noise import NoiseField
    from isoterrain.mesh.triangulation import Topology

logger = logging.getLogger(__name__)

# Tolerance on |normal| when validating a mesh
NORMAL_TOLERANCE = 1e-6


class TerrainMesh:
    """Immutable triangle mesh with per-vertex normals.

    Positions use the y axis for elevation: a planar point (x, y) is stored
    as (x, elevation, y). All arrays are copied and marked read-only.

    Args:
        positions: Vertex positions, shape (n, 3).
        triangles: Vertex indices per triangle, shape (m, 3).
        normals: Unit vertex normals, shape (n, 3).

    Raises:
        MeshGenerationError: If shapes disagree, an index is out of range
            or a normal is not unit length.
    """

    def __init__(
        self,
        positions: np.ndarray,
        triangles: np.ndarray,
        normals: np.ndarray,
    ):
        positions = np.array(positions, dtype=float).reshape(-1, 3)
        triangles = np.array(triangles, dtype=np.int64).reshape(-1, 3)
        normals = np.array(normals, dtype=float).reshape(-1, 3)

        if len(normals) != len(positions):
            raise MeshGenerationError(
                f"normals length ({len(normals)}) must match "
                f"number of positions ({len(positions)})"
            )
        if len(triangles) and (
            triangles.min() < 0 or triangles.max() >= len(positions)
        ):
            raise MeshGenerationError("Triangle index out of range")
        lengths = np.linalg.norm(normals, axis=1)
        if np.any(np.abs(lengths - 1.0) > NORMAL_TOLERANCE):
            raise MeshGenerationError("All normals must be unit length")

        for array in (positions, triangles, normals):
            array.flags.writeable = False

        self._positions = positions
        self._triangles = triangles
        self._normals = normals

    @classmethod
    def empty(cls) -> TerrainMesh:
        """Create a mesh without vertices or triangles."""
        return cls(np.empty((0, 3)), np.empty((0, 3), dtype=np.int64), np.empty((0, 3)))

    @property
    def positions(self) -> np.ndarray:
        """Vertex positions, shape (n, 3), read-only."""
        return self._positions

    @property
    def triangles(self) -> np.ndarray:
        """Triangle vertex indices, shape (m, 3), read-only."""
        return self._triangles

    @property
    def normals(self) -> np.ndarray:
        """Unit vertex normals, shape (n, 3), read-only."""
        return self._normals

    @property
    def n_vertices(self) -> int:
        """Number of vertices."""
        return len(self._positions)

    @property
    def n_triangles(self) -> int:
        """Number of triangles."""
        return len(self._triangles)

    @property
    def is_empty(self) -> bool:
        """Return True if the mesh has no triangles."""
        return self.n_triangles == 0

    @property
    def elevations(self) -> np.ndarray:
        """Vertex elevations (y column), shape (n,)."""
        return self._positions[:, 1]

    @property
    def elevation_range(self) -> tuple[float, float]:
        """Return (min, max) vertex elevation. (nan, nan) for an empty mesh."""
        if self.n_vertices == 0:
            return (float("nan"), float("nan"))
        return (float(self.elevations.min()), float(self.elevations.max()))

    @property
    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Return axis-aligned bounding box as (lower, upper) corners.

        Both corners are NaN for an empty mesh.
        """
        if self.n_vertices == 0:
            return np.full(3, np.nan), np.full(3, np.nan)
        return self._positions.min(axis=0), self._positions.max(axis=0)

    def __repr__(self) -> str:
        return (
            f"TerrainMesh(n_vertices={self.n_vertices}, "
            f"n_triangles={self.n_triangles})"
        )


def compute_vertex_normals(
    positions: np.ndarray,
    triangles: np.ndarray,
) -> np.ndarray:
    """Compute area-weighted unit vertex normals.

    Face normals are cross(B - A, C - A) for each triangle (A, B, C), summed
    into each of the triangle's vertices and then normalised.

    Args:
        positions: Vertex positions, shape (n, 3).
        triangles: Vertex indices per triangle, shape (m, 3).

    Returns:
        Unit normals, shape (n, 3).

    Raises:
        MeshGenerationError: If a vertex belongs to no triangle or its
            accumulated normal vanishes.
    """
    a = positions[triangles[:, 0]]
    b = positions[triangles[:, 1]]
    c = positions[triangles[:, 2]]
    face_normals = np.cross(b - a, c - a)

    normals = np.zeros_like(positions)
    for corner in range(3):
        np.add.at(normals, triangles[:, corner], face_normals)

    lengths = np.linalg.norm(normals, axis=1)
    if np.any(lengths == 0.0):
        n_bad = int(np.sum(lengths == 0.0))
        raise MeshGenerationError(
            f"{n_bad} vertices have no defined normal "
            f"(not part of any non-degenerate triangle)"
        )
    return normals / lengths[:, np.newaxis]


class HeightFieldBuilder:
    """Lift a planar topology into a 3D terrain mesh.

    Each vertex (x, y) receives elevation
    ``noise.sample(x / scale, y / scale) * amplitude`` and becomes the 3D
    point (x, elevation, y). Because the planar y axis maps onto the 3D z
    axis, counter-clockwise planar triangles would produce downward normals;
    triangle index order is therefore reversed before storage so that face
    normals point up.

    Args:
        noise: Noise field evaluated at scaled vertex coordinates.
        scale: Horizontal scale divisor. Must be positive.
        amplitude: Elevation multiplier.

    Example:
        >>> from isoterrain.fields import PerlinNoise2D
        >>> builder = HeightFieldBuilder(PerlinNoise2D(seed=1), scale=40, amplitude=8)
        >>> mesh = builder.build(topology)
    """

    def __init__(self, noise: NoiseField, scale: float = 1.0, amplitude: float = 1.0):
        if scale <= 0:
            raise ValueError("scale must be positive")
        self._noise = noise
        self._scale = float(scale)
        self._amplitude = float(amplitude)

    @property
    def scale(self) -> float:
        """Horizontal scale divisor."""
        return self._scale

    @property
    def amplitude(self) -> float:
        """Elevation multiplier."""
        return self._amplitude

    def elevations(self, vertices: np.ndarray) -> np.ndarray:
        """Return elevations for planar vertices of shape (n, 2)."""
        vertices = np.asarray(vertices, dtype=float)
        values = self._noise.sample(
            vertices[:, 0] / self._scale, vertices[:, 1] / self._scale
        )
        return np.asarray(values, dtype=float) * self._amplitude

    def build(self, topology: Topology) -> TerrainMesh:
        """Build the terrain mesh.

        Args:
            topology: Planar topology with counter-clockwise triangles.

        Returns:
            TerrainMesh with reversed-winding triangles and unit normals.

        Raises:
            MeshGenerationError: If elevations are not finite or a normal
                cannot be computed.
        """
        vertices = topology.vertices
        elevation = self.elevations(vertices)
        if not np.all(np.isfinite(elevation)):
            raise MeshGenerationError("Noise produced NaN or infinite elevations")

        positions = np.column_stack([vertices[:, 0], elevation, vertices[:, 1]])
        triangles = np.ascontiguousarray(topology.triangles[:, ::-1])
        normals = compute_vertex_normals(positions, triangles)

        mesh = TerrainMesh(positions, triangles, normals)
        low, high = mesh.elevation_range
        logger.debug(
            "Built height field: %d vertices, %d triangles, elevation [%.3f, %.3f]",
            mesh.n_vertices,
            mesh.n_triangles,
            low,
            high,
        )
        return mesh
