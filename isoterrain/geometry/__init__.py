"""Point sampling utilities."""

from isoterrain.geometry.sampling import (
    PoissonDiskSampler,
    minimum_spacing,
    sample_points,
)

__all__ = ["PoissonDiskSampler", "minimum_spacing", "sample_points"]
