"""Tests for the end-to-end terrain generation API."""
from __future__ import annotations

import numpy as np
import pytest

from isoterrain import (
    InvalidConfigError,
    IsoterrainError,
    TerrainBuilder,
    TerrainConfig,
    TriangulationError,
    generate_terrain,
)
from isoterrain.fields import PerlinNoise2D
from isoterrain.geometry import minimum_spacing


def test_end_to_end_point_count_and_euler_relation() -> None:
    config = TerrainConfig(
        width=100,
        height=100,
        min_distance=2,
        max_distance=10,
        height_scale=30,
        height_amplitude=5,
        sample_seed=17,
    )
    builder = TerrainBuilder.from_config(config)
    mesh = builder.build()
    topology = builder.get_topology()

    expected = config.expected_point_count
    assert expected / 10 <= mesh.n_vertices <= 2 * expected
    assert minimum_spacing(topology.vertices) >= config.min_distance - 1e-9
    assert mesh.n_triangles == 2 * mesh.n_vertices - 2 - topology.n_hull_edges


def test_generation_is_reproducible(small_config) -> None:
    a = generate_terrain(small_config)
    b = generate_terrain(small_config)
    np.testing.assert_array_equal(a.positions, b.positions)
    np.testing.assert_array_equal(a.triangles, b.triangles)


def test_noise_seed_changes_elevations_only(small_config) -> None:
    other = TerrainConfig(**{**small_config.to_dict(), "noise_seed": 99})
    a = generate_terrain(small_config)
    b = generate_terrain(other)
    np.testing.assert_array_equal(a.positions[:, [0, 2]], b.positions[:, [0, 2]])
    assert not np.allclose(a.positions[:, 1], b.positions[:, 1])


def test_custom_noise_is_used(small_config) -> None:
    noise = PerlinNoise2D(seed=4, octaves=3)
    mesh = generate_terrain(small_config, noise=noise)
    x = mesh.positions[:, 0] / small_config.height_scale
    z = mesh.positions[:, 2] / small_config.height_scale
    np.testing.assert_allclose(
        mesh.positions[:, 1], noise.sample(x, z) * small_config.height_amplitude
    )


class _FailingTriangulator:
    def triangulate(self, points):
        raise TriangulationError("no triangles")


def test_triangulation_failure_propagates(small_config) -> None:
    with pytest.raises(TriangulationError):
        generate_terrain(small_config, triangulator=_FailingTriangulator())


def test_tiny_region_cannot_be_triangulated() -> None:
    config = TerrainConfig(width=1, height=1, min_distance=5, max_distance=6, sample_seed=0)
    with pytest.raises(TriangulationError):
        generate_terrain(config)


@pytest.mark.parametrize(
    "overrides",
    [
        dict(width=0),
        dict(height=-5),
        dict(min_distance=0),
        dict(max_distance=1),
        dict(max_tries=0),
        dict(height_scale=0),
        dict(octaves=0),
    ],
)
def test_invalid_config_raises(overrides) -> None:
    params = dict(width=10, height=10, min_distance=2, max_distance=4)
    params.update(overrides)
    with pytest.raises(InvalidConfigError):
        TerrainConfig(**params)
    with pytest.raises(ValueError):
        TerrainConfig(**params)


def test_square_config_defaults() -> None:
    config = TerrainConfig.square(50, min_distance=2.5)
    assert config.width == config.height == 50
    assert config.max_distance == 5.0
    assert config.area == 2500
    assert config.expected_point_count == pytest.approx(400)


def test_builder_requires_configuration() -> None:
    with pytest.raises(IsoterrainError):
        TerrainBuilder().build()
    with pytest.raises(IsoterrainError):
        TerrainBuilder(10, 10).build()


def test_mesh_info_after_build(small_config) -> None:
    builder = TerrainBuilder.from_config(small_config)
    assert "n_triangles" not in builder.get_mesh_info()
    mesh = builder.build()
    info = builder.get_mesh_info()
    assert info["n_vertices"] == mesh.n_vertices
    assert info["n_triangles"] == mesh.n_triangles
    assert info["elevation_range"] == mesh.elevation_range
    assert 0 < info["hull_area"] <= small_config.area


@pytest.mark.parametrize("bad", [float("nan"), float("inf")])
@pytest.mark.parametrize(
    "field",
    ["width", "height", "min_distance", "max_distance", "height_scale", "height_amplitude"],
)
def test_non_finite_config_raises(field: str, bad: float) -> None:
    params = dict(width=10, height=10, min_distance=2, max_distance=4)
    params[field] = bad
    with pytest.raises(InvalidConfigError):
        TerrainConfig(**params)


@pytest.mark.parametrize(
    "region", [(0, 10), (10, -1), (float("nan"), 10), (10, float("inf"))]
)
def test_builder_rejects_bad_region_as_invalid_config(region) -> None:
    with pytest.raises(InvalidConfigError):
        TerrainBuilder(*region)
    with pytest.raises(InvalidConfigError):
        TerrainBuilder().set_region(*region)


@pytest.mark.parametrize("scale, amplitude", [(0, 1), (-2, 1), (float("nan"), 1), (1, float("inf"))])
def test_builder_rejects_bad_height_as_invalid_config(scale, amplitude) -> None:
    with pytest.raises(InvalidConfigError):
        TerrainBuilder(10, 10).set_height(scale, amplitude)
