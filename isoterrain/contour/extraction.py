"""Horizontal-plane contour queries against a terrain mesh."""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np

from isoterrain.mesh.heightfield import TerrainMesh

# Triangle edges as (start corner, end corner)
_EDGES = ((0, 1), (1, 2), (2, 0))


class Segment(NamedTuple):
    """Line segment where a triangle crosses the query plane."""

    start: tuple[float, float, float]
    end: tuple[float, float, float]

    @property
    def length(self) -> float:
        """Euclidean length of the segment."""
        return math.dist(self.start, self.end)


def crossed_triangles(mesh: TerrainMesh, plane_y: float) -> np.ndarray:
    """Return a boolean mask of triangles strictly spanning ``plane_y``.

    A triangle is crossed iff min(y) < plane_y < max(y). Non-finite plane
    values match nothing.

    Args:
        mesh: Terrain mesh.
        plane_y: Elevation of the horizontal plane.

    Returns:
        Boolean mask of shape (n_triangles,).
    """
    if mesh.is_empty or not math.isfinite(plane_y):
        return np.zeros(mesh.n_triangles, dtype=bool)
    y = mesh.elevations[mesh.triangles]
    return (y.min(axis=1) < plane_y) & (y.max(axis=1) > plane_y)


class ContourExtractor:
    """Intersect a terrain mesh with horizontal planes.

    Each crossed triangle contributes one segment whose endpoints are
    linearly interpolated along the two edges that straddle the plane.
    Triangles with a vertex exactly on the plane have fewer than two
    straddling edges and contribute nothing. Segments are returned
    unordered and are not chained into polylines.

    The mesh is only read, so one extractor can be queried repeatedly.

    Args:
        mesh: Terrain mesh to query.

    Example:
        >>> extractor = ContourExtractor(mesh)
        >>> segments = extractor.extract(2.5)
        >>> segments.shape
        (k, 2, 3)
    """

    def __init__(self, mesh: TerrainMesh):
        self._mesh = mesh

    @property
    def mesh(self) -> TerrainMesh:
        """Return the queried mesh."""
        return self._mesh

    def extract(self, plane_y: float) -> np.ndarray:
        """Compute contour segments at ``plane_y``.

        Args:
            plane_y: Elevation of the horizontal plane.

        Returns:
            Segment endpoints, shape (k, 2, 3). Empty when the plane lies
            outside the mesh elevation range.
        """
        mask = crossed_triangles(self._mesh, plane_y)
        if not mask.any():
            return np.empty((0, 2, 3))

        corners = self._mesh.positions[self._mesh.triangles[mask]]

        points = []
        straddles = []
        for i, j in _EDGES:
            a = corners[:, i]
            b = corners[:, j]
            da = a[:, 1] - plane_y
            db = b[:, 1] - plane_y
            straddle = (da != 0) & (db != 0) & ((da < 0) != (db < 0))
            # Non-straddling edges get t = 0 and are masked out below
            denom = np.where(straddle, b[:, 1] - a[:, 1], 1.0)
            t = np.where(straddle, (plane_y - a[:, 1]) / denom, 0.0)
            points.append(a + t[:, np.newaxis] * (b - a))
            straddles.append(straddle)

        points = np.stack(points, axis=1)
        straddles = np.stack(straddles, axis=1)

        complete = straddles.sum(axis=1) == 2
        points = points[complete]
        straddles = straddles[complete]

        # Keep the two straddling edge points of each triangle, in edge order
        order = np.argsort(~straddles, axis=1, kind="stable")[:, :2]
        return np.take_along_axis(points, order[:, :, np.newaxis], axis=1)

    def segments(self, plane_y: float) -> list[Segment]:
        """Compute contour segments at ``plane_y`` as Segment tuples."""
        return [
            Segment(tuple(start), tuple(end))
            for start, end in self.extract(plane_y).tolist()
        ]


class FaceHighlighter:
    """Extract whole triangles crossing a horizontal plane.

    Uses the same crossing predicate as ContourExtractor but copies the
    three full vertices (position and normal) of each crossed triangle into
    a new mesh instead of computing intersection points.

    Args:
        mesh: Terrain mesh to query.
    """

    def __init__(self, mesh: TerrainMesh):
        self._mesh = mesh

    @property
    def mesh(self) -> TerrainMesh:
        """Return the queried mesh."""
        return self._mesh

    def extract(self, plane_y: float) -> TerrainMesh:
        """Build the highlight mesh for ``plane_y``.

        Args:
            plane_y: Elevation of the horizontal plane.

        Returns:
            New TerrainMesh holding one unshared vertex triple per crossed
            triangle. Empty when nothing crosses the plane.
        """
        mask = crossed_triangles(self._mesh, plane_y)
        if not mask.any():
            return TerrainMesh.empty()

        indices = self._mesh.triangles[mask].reshape(-1)
        positions = self._mesh.positions[indices]
        normals = self._mesh.normals[indices]
        triangles = np.arange(len(indices), dtype=np.int64).reshape(-1, 3)
        return TerrainMesh(positions, triangles, normals)


def query_contour(mesh: TerrainMesh, plane_y: float) -> list[Segment]:
    """Return the contour segments of ``mesh`` at elevation ``plane_y``."""
    return ContourExtractor(mesh).segments(plane_y)


def query_crossing_faces(mesh: TerrainMesh, plane_y: float) -> TerrainMesh:
    """Return a highlight mesh of the triangles crossing ``plane_y``."""
    return FaceHighlighter(mesh).extract(plane_y)


def contour_levels(
    mesh: TerrainMesh,
    step: float,
    min_y: float | None = None,
    max_y: float | None = None,
) -> np.ndarray:
    """Return plane heights for sweeping contours across a mesh.

    Args:
        mesh: Terrain mesh.
        step: Increment between levels. Must be positive.
        min_y: Lowest level. Default: mesh minimum elevation.
        max_y: Highest level. Default: mesh maximum elevation.

    Returns:
        Levels min_y, min_y + step, ... not exceeding max_y.

    Raises:
        ValueError: If step is not positive or min_y > max_y.
    """
    if step <= 0:
        raise ValueError("step must be positive")
    if mesh.n_vertices == 0 and (min_y is None or max_y is None):
        return np.empty(0)

    low, high = mesh.elevation_range
    min_y = low if min_y is None else float(min_y)
    max_y = high if max_y is None else float(max_y)
    if min_y > max_y:
        raise ValueError(f"min_y ({min_y}) must not exceed max_y ({max_y})")

    count = int(math.floor((max_y - min_y) / step + 1e-9)) + 1
    return min_y + step * np.arange(count)
