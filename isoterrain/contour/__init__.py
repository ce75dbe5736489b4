"""Contour queries against terrain meshes."""

from isoterrain.contour.extraction import (
    ContourExtractor,
    FaceHighlighter,
    Segment,
    contour_levels,
    crossed_triangles,
    query_contour,
    query_crossing_faces,
)
from isoterrain.contour.session import ContourArtifacts, ContourSession

__all__ = [
    "ContourExtractor",
    "FaceHighlighter",
    "Segment",
    "contour_levels",
    "crossed_triangles",
    "query_contour",
    "query_crossing_faces",
    "ContourArtifacts",
    "ContourSession",
]
