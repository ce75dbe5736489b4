"""Tests for the contour session object."""
from __future__ import annotations

import pytest

from isoterrain import ContourSession, IsoterrainError, generate_terrain


def test_update_replaces_artifacts(single_triangle) -> None:
    session = ContourSession(single_triangle)
    assert session.artifacts is None

    first = session.update(5.0)
    assert session.artifacts is first
    assert first.n_segments == 1
    assert first.highlight.n_triangles == 1

    second = session.update(20.0)
    assert session.artifacts is second
    assert second.n_segments == 0
    assert second.highlight.is_empty
    # Superseded artifacts are left intact
    assert first.n_segments == 1
    assert first.plane_y == 5.0


def test_sweep_visits_each_level(single_triangle) -> None:
    session = ContourSession(single_triangle)
    planes = [artifacts.plane_y for artifacts in session.sweep(2.5)]
    assert planes == pytest.approx([0.0, 2.5, 5.0, 7.5, 10.0])
    # End levels touch vertices and cannot cross the triangle
    counts = [artifacts.n_segments for artifacts in session.sweep(2.5)]
    assert counts == [0, 1, 1, 1, 0]
    assert session.artifacts.plane_y == pytest.approx(10.0)


def test_context_manager_releases_artifacts(single_triangle) -> None:
    with ContourSession(single_triangle) as session:
        session.update(5.0)
    assert session.closed
    assert session.artifacts is None
    with pytest.raises(IsoterrainError):
        session.update(5.0)


def test_replace_mesh_drops_artifacts(single_triangle, small_config) -> None:
    session = ContourSession(single_triangle)
    session.update(5.0)
    terrain = generate_terrain(small_config)
    session.replace_mesh(terrain)
    assert session.mesh is terrain
    assert session.artifacts is None


def test_sweep_on_closed_session_raises_immediately(single_triangle) -> None:
    session = ContourSession(single_triangle)
    session.close()
    with pytest.raises(IsoterrainError):
        session.sweep(2.5)


def test_sweep_rejects_bad_step_immediately(single_triangle) -> None:
    with pytest.raises(ValueError):
        ContourSession(single_triangle).sweep(0.0)
