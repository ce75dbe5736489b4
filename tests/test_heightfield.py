"""Tests for height-field mesh construction."""
from __future__ import annotations

import numpy as np
import pytest

from isoterrain import MeshGenerationError, query_crossing_faces
from isoterrain.fields import PerlinNoise2D
from isoterrain.geometry import sample_points
from isoterrain.mesh import HeightFieldBuilder, TerrainMesh, Topology, triangulate


@pytest.fixture
def topology() -> Topology:
    return triangulate(sample_points(40, 40, min_distance=2, max_distance=5, seed=6))


def test_elevation_follows_scaled_noise(topology: Topology) -> None:
    noise = PerlinNoise2D(seed=21, octaves=2)
    mesh = HeightFieldBuilder(noise, scale=17.0, amplitude=4.5).build(topology)
    x = mesh.positions[:, 0]
    z = mesh.positions[:, 2]
    np.testing.assert_allclose(x, topology.vertices[:, 0])
    np.testing.assert_allclose(z, topology.vertices[:, 1])
    np.testing.assert_allclose(mesh.positions[:, 1], noise.sample(x / 17.0, z / 17.0) * 4.5)


def test_winding_is_reversed(topology: Topology) -> None:
    mesh = HeightFieldBuilder(PerlinNoise2D(seed=1), scale=10).build(topology)
    np.testing.assert_array_equal(mesh.triangles, topology.triangles[:, ::-1])


def test_normals_are_unit_length_and_point_up(topology: Topology) -> None:
    mesh = HeightFieldBuilder(PerlinNoise2D(seed=2), scale=10, amplitude=3).build(topology)
    assert len(mesh.normals) == len(mesh.positions)
    np.testing.assert_allclose(np.linalg.norm(mesh.normals, axis=1), 1.0, atol=1e-12)
    assert np.all(mesh.normals[:, 1] > 0)

    a, b, c = (mesh.positions[mesh.triangles[:, k]] for k in range(3))
    face_normals = np.cross(b - a, c - a)
    assert np.all(face_normals[:, 1] > 0)


class _FlatNoise:
    def sample(self, x, y):
        return np.zeros_like(np.asarray(x, dtype=float))


def test_flat_noise_gives_vertical_normals(topology: Topology) -> None:
    mesh = HeightFieldBuilder(_FlatNoise(), scale=1, amplitude=10).build(topology)
    assert mesh.elevation_range == (0.0, 0.0)
    np.testing.assert_allclose(mesh.normals, np.tile([0.0, 1.0, 0.0], (mesh.n_vertices, 1)))


def test_mesh_arrays_are_read_only(topology: Topology) -> None:
    mesh = HeightFieldBuilder(PerlinNoise2D(seed=3), scale=10).build(topology)
    with pytest.raises(ValueError):
        mesh.positions[0, 1] = 100.0
    with pytest.raises(ValueError):
        mesh.triangles[0, 0] = 0


def test_orphan_vertex_raises() -> None:
    topology = Topology(
        np.array([[0, 0], [1, 0], [0, 1], [5, 5]], dtype=float),
        np.array([[0, 1, 2]]),
        np.array([[0, 1], [1, 2], [2, 0]]),
    )
    with pytest.raises(MeshGenerationError):
        HeightFieldBuilder(PerlinNoise2D(), scale=1).build(topology)


def test_mesh_validates_invariants() -> None:
    positions = np.zeros((3, 3))
    normals = np.tile([0.0, 1.0, 0.0], (3, 1))
    with pytest.raises(MeshGenerationError):
        TerrainMesh(positions, [[0, 1, 3]], normals)
    with pytest.raises(MeshGenerationError):
        TerrainMesh(positions, [[0, 1, 2]], normals[:2])
    with pytest.raises(MeshGenerationError):
        TerrainMesh(positions, [[0, 1, 2]], normals * 2)


def test_empty_mesh() -> None:
    mesh = TerrainMesh.empty()
    assert mesh.is_empty
    assert mesh.n_vertices == 0
    lower, upper = mesh.bounds
    assert lower.shape == upper.shape == (3,)
    assert np.all(np.isnan(lower)) and np.all(np.isnan(upper))


def test_empty_highlight_has_nan_bounds(single_triangle) -> None:
    highlight = query_crossing_faces(single_triangle, 50.0)
    assert highlight.is_empty
    assert np.all(np.isnan(highlight.bounds[0]))
