"""Mesh generation utilities."""

from isoterrain.mesh.builder import TerrainBuilder, generate_terrain
from isoterrain.mesh.heightfield import (
    HeightFieldBuilder,
    TerrainMesh,
    compute_vertex_normals,
)
from isoterrain.mesh.triangulation import (
    DelaunayTriangulator,
    Topology,
    Triangulator,
    triangle_areas,
    triangulate,
)

__all__ = [
    "TerrainBuilder",
    "generate_terrain",
    "HeightFieldBuilder",
    "TerrainMesh",
    "compute_vertex_normals",
    "DelaunayTriangulator",
    "Topology",
    "Triangulator",
    "triangle_areas",
    "triangulate",
]
