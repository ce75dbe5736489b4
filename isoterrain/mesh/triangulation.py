"""2D Delaunay triangulation of sampled point sets."""

from __future__ import annotations

import logging
from typing import Protocol

import numpy as np
from scipy.spatial import Delaunay, QhullError
from shapely.geometry import MultiPoint
from shapely.geometry import Polygon as ShapelyPolygon

from isoterrain.exceptions import TriangulationError

logger = logging.getLogger(__name__)


class Topology:
    """Planar triangle topology over a 2D vertex array.

    Triangles are stored counter-clockwise in the xy plane.

    Args:
        vertices: Vertex coordinates, shape (n, 2).
        triangles: Vertex indices per triangle, shape (m, 3).
        hull_edges: Vertex index pairs on the convex hull boundary, shape (h, 2).
    """

    def __init__(
        self,
        vertices: np.ndarray,
        triangles: np.ndarray,
        hull_edges: np.ndarray,
    ):
        self.vertices = np.asarray(vertices, dtype=float)
        self.triangles = np.asarray(triangles, dtype=np.int64)
        self.hull_edges = np.asarray(hull_edges, dtype=np.int64)

        if self.vertices.ndim != 2 or self.vertices.shape[1] != 2:
            raise ValueError("vertices must have shape (n, 2)")
        if self.triangles.ndim != 2 or self.triangles.shape[1] != 3:
            raise ValueError("triangles must have shape (m, 3)")

    @property
    def n_vertices(self) -> int:
        """Number of vertices."""
        return len(self.vertices)

    @property
    def n_triangles(self) -> int:
        """Number of triangles."""
        return len(self.triangles)

    @property
    def n_hull_edges(self) -> int:
        """Number of edges on the convex hull boundary."""
        return len(self.hull_edges)

    @property
    def convex_hull(self) -> ShapelyPolygon:
        """Return the convex hull of the vertices as a shapely Polygon."""
        return MultiPoint(self.vertices.tolist()).convex_hull

    @property
    def area(self) -> float:
        """Return the summed area of all triangles."""
        return float(triangle_areas(self.vertices, self.triangles).sum())

    def __repr__(self) -> str:
        return (
            f"Topology(n_vertices={self.n_vertices}, "
            f"n_triangles={self.n_triangles}, n_hull_edges={self.n_hull_edges})"
        )


class Triangulator(Protocol):
    """Protocol for 2D triangulation backends."""

    def triangulate(self, points: np.ndarray) -> Topology:
        """Triangulate a 2D point set."""
        ...


def triangle_areas(vertices: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    """Return signed areas of 2D triangles.

    Positive values mark counter-clockwise triangles.

    Args:
        vertices: Vertex coordinates, shape (n, 2).
        triangles: Vertex indices per triangle, shape (m, 3).

    Returns:
        Signed areas, shape (m,).
    """
    a = vertices[triangles[:, 0]]
    b = vertices[triangles[:, 1]]
    c = vertices[triangles[:, 2]]
    ab = b - a
    ac = c - a
    return 0.5 * (ab[:, 0] * ac[:, 1] - ab[:, 1] * ac[:, 0])


class DelaunayTriangulator:
    """Delaunay triangulation backed by scipy.spatial.Delaunay (Qhull).

    Qhull does not add auxiliary vertices, so the input points are returned
    unchanged as the topology vertices. Simplices are re-oriented
    counter-clockwise.

    Args:
        qhull_options: Extra options passed to Qhull. Default: None
            (scipy's defaults).

    Example:
        >>> topology = DelaunayTriangulator().triangulate(points)
        >>> topology.n_triangles
    """

    def __init__(self, qhull_options: str | None = None):
        self._qhull_options = qhull_options

    def triangulate(self, points: np.ndarray) -> Topology:
        """Triangulate a 2D point set.

        Args:
            points: Point coordinates, shape (n, 2).

        Returns:
            Delaunay Topology over the points.

        Raises:
            TriangulationError: If there are fewer than 3 points, the points
                are collinear, or Qhull drops any of them.
        """
        points = np.asarray(points, dtype=float)
        if points.ndim != 2 or points.shape[1] != 2:
            raise TriangulationError("points must have shape (n, 2)")
        if len(points) < 3:
            raise TriangulationError(
                f"At least 3 points are required, got {len(points)}"
            )

        try:
            tri = Delaunay(points, qhull_options=self._qhull_options)
        except QhullError as e:
            raise TriangulationError(f"Delaunay triangulation failed: {e}") from e

        triangles = np.asarray(tri.simplices, dtype=np.int64)
        if len(triangles) == 0:
            raise TriangulationError("Triangulation produced no triangles")

        areas = triangle_areas(points, triangles)
        if not np.any(np.abs(areas) > 0.0):
            raise TriangulationError("All points are collinear")
        if len(tri.coplanar):
            raise TriangulationError(
                f"{len(tri.coplanar)} points were not included in any triangle"
            )

        clockwise = areas < 0
        triangles[clockwise] = triangles[clockwise][:, ::-1]

        topology = Topology(tri.points, triangles, tri.convex_hull)
        logger.debug(
            "Triangulated %d points into %d triangles (%d hull edges)",
            topology.n_vertices,
            topology.n_triangles,
            topology.n_hull_edges,
        )
        return topology


def triangulate(
    points: np.ndarray,
    triangulator: Triangulator | None = None,
) -> Topology:
    """Convenience function to triangulate a point set.

    Args:
        points: Point coordinates, shape (n, 2).
        triangulator: Backend to use. Default: DelaunayTriangulator.

    Returns:
        Topology over the points.
    """
    if triangulator is None:
        triangulator = DelaunayTriangulator()
    return triangulator.triangulate(points)
