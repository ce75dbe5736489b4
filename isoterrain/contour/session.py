"""Session object owning the current contour visualisation artifacts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from isoterrain.contour.extraction import (
    ContourExtractor,
    FaceHighlighter,
    Segment,
    contour_levels,
)
from isoterrain.exceptions import IsoterrainError
from isoterrain.mesh.heightfield import TerrainMesh

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContourArtifacts:
    """Contour segments and highlight mesh for one plane height."""

    plane_y: float
    segments: tuple[Segment, ...]
    highlight: TerrainMesh

    @property
    def n_segments(self) -> int:
        """Number of contour segments."""
        return len(self.segments)


class ContourSession:
    """Owns a terrain mesh and the artifacts of the latest plane query.

    Each ``update`` builds a complete new ContourArtifacts and rebinds a
    single attribute to it; the previous artifacts are dropped, never
    modified. Callers holding an older ContourArtifacts keep a valid object.

    Args:
        mesh: Terrain mesh shared read-only with every query.

    Example:
        >>> with ContourSession(mesh) as session:
        ...     artifacts = session.update(2.5)
        ...     artifacts.n_segments
    """

    def __init__(self, mesh: TerrainMesh):
        self._mesh = mesh
        self._artifacts: ContourArtifacts | None = None
        self._closed = False

    @property
    def mesh(self) -> TerrainMesh:
        """Return the terrain mesh."""
        return self._mesh

    @property
    def artifacts(self) -> ContourArtifacts | None:
        """Return the artifacts of the latest update, or None."""
        return self._artifacts

    @property
    def closed(self) -> bool:
        """Return True once the session has been closed."""
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise IsoterrainError("Contour session is closed")

    def update(self, plane_y: float) -> ContourArtifacts:
        """Recompute artifacts for a new plane height.

        Args:
            plane_y: Elevation of the horizontal plane.

        Returns:
            The new current ContourArtifacts.

        Raises:
            IsoterrainError: If the session is closed.
        """
        self._check_open()
        plane_y = float(plane_y)
        artifacts = ContourArtifacts(
            plane_y=plane_y,
            segments=tuple(ContourExtractor(self._mesh).segments(plane_y)),
            highlight=FaceHighlighter(self._mesh).extract(plane_y),
        )
        self._artifacts = artifacts
        logger.debug(
            "Plane %.3f: %d segments, %d highlighted faces",
            plane_y,
            artifacts.n_segments,
            artifacts.highlight.n_triangles,
        )
        return artifacts

    def sweep(
        self,
        step: float,
        min_y: float | None = None,
        max_y: float | None = None,
    ) -> Iterator[ContourArtifacts]:
        """Update through evenly spaced plane heights.

        Args:
            step: Increment between plane heights.
            min_y: Lowest plane. Default: mesh minimum elevation.
            max_y: Highest plane. Default: mesh maximum elevation.

        Yields:
            ContourArtifacts for each level, in increasing order.

        Raises:
            IsoterrainError: If the session is closed.
            ValueError: If the step or bounds are invalid.
        """
        self._check_open()
        levels = contour_levels(self._mesh, step, min_y=min_y, max_y=max_y)
        return self._sweep(levels)

    def _sweep(self, levels) -> Iterator[ContourArtifacts]:
        for level in levels:
            yield self.update(float(level))

    def replace_mesh(self, mesh: TerrainMesh) -> None:
        """Swap in a regenerated terrain and drop the current artifacts."""
        self._check_open()
        self._mesh = mesh
        self._artifacts = None
        logger.debug("Session terrain replaced: %r", mesh)

    def close(self) -> None:
        """Release the current artifacts and close the session."""
        self._artifacts = None
        self._closed = True

    def __enter__(self) -> ContourSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        plane = None if self._artifacts is None else self._artifacts.plane_y
        return f"ContourSession(mesh={self._mesh!r}, plane_y={plane})"
