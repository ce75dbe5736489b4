"""Shared fixtures for isoterrain tests."""
from __future__ import annotations

import numpy as np
import pytest

from isoterrain import TerrainConfig, generate_terrain
from isoterrain.mesh import TerrainMesh, compute_vertex_normals


@pytest.fixture
def small_config() -> TerrainConfig:
    return TerrainConfig(
        width=40,
        height=30,
        min_distance=2,
        max_distance=4,
        noise_seed=11,
        height_scale=15,
        height_amplitude=6,
        sample_seed=3,
    )


@pytest.fixture
def terrain(small_config: TerrainConfig) -> TerrainMesh:
    return generate_terrain(small_config)


def make_mesh(positions, triangles) -> TerrainMesh:
    positions = np.asarray(positions, dtype=float)
    triangles = np.asarray(triangles, dtype=np.int64)
    return TerrainMesh(positions, triangles, compute_vertex_normals(positions, triangles))


@pytest.fixture
def single_triangle() -> TerrainMesh:
    # Elevations 0, 0, 10
    return make_mesh(
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 10.0, 1.0)],
        [(0, 1, 2)],
    )
