"""isoterrain - procedural terrain meshes and iso-contour queries.

Samples blue-noise points over a rectangle, triangulates them, lifts the
triangulation into a noise height field and intersects the result with
horizontal planes.

Example:
    >>> from isoterrain import TerrainConfig, generate_terrain, query_contour
    >>> config = TerrainConfig(
    ...     width=100, height=100, min_distance=2, max_distance=10,
    ...     height_scale=40, height_amplitude=8, sample_seed=1,
    ... )
    >>> mesh = generate_terrain(config)
    >>> segments = query_contour(mesh, 2.0)
"""

from isoterrain.config import TerrainConfig
from isoterrain.contour import (
    ContourSession,
    Segment,
    query_contour,
    query_crossing_faces,
)
from isoterrain.exceptions import (
    InvalidConfigError,
    IsoterrainError,
    MeshGenerationError,
    SamplingExhaustedError,
    TriangulationError,
)
from isoterrain.mesh import TerrainBuilder, TerrainMesh, generate_terrain

__version__ = "0.1.0"

__all__ = [
    # Main API
    "TerrainConfig",
    "TerrainBuilder",
    "TerrainMesh",
    "generate_terrain",
    "query_contour",
    "query_crossing_faces",
    "Segment",
    "ContourSession",
    # Exceptions
    "IsoterrainError",
    "InvalidConfigError",
    "SamplingExhaustedError",
    "TriangulationError",
    "MeshGenerationError",
]
