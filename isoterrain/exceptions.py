"""Custom exceptions for the isoterrain package."""


class IsoterrainError(Exception):
    """Base exception for isoterrain package."""

    pass


class InvalidConfigError(IsoterrainError, ValueError):
    """Terrain or sampler parameters are out of range."""

    pass


class SamplingExhaustedError(IsoterrainError):
    """Point sampling produced no points."""

    pass


class TriangulationError(IsoterrainError):
    """Delaunay triangulation failed."""

    pass


class MeshGenerationError(IsoterrainError):
    """Height-field mesh generation failed."""

    pass
