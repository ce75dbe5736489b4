"""Scalar noise fields."""

from isoterrain.fields.noise import NoiseField, PerlinNoise2D

__all__ = ["NoiseField", "PerlinNoise2D"]
