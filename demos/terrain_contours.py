"""
Terrain Contour Demo

This script demonstrates using isoterrain to generate a procedural terrain
mesh and sweep a horizontal plane through it, the way an interactive
parameter panel would.

Usage:
    python terrain_contours.py [--seed N] [--step S]

The script will:
1. Sample blue-noise points over a 100 x 100 region
2. Triangulate them with scipy's Delaunay
3. Lift the triangulation into a Perlin noise height field
4. Sweep contour planes from the lowest to the highest elevation
"""

import argparse
import logging

from isoterrain import ContourSession, TerrainBuilder, TerrainConfig


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--seed", type=int, default=1, help="sampler and noise seed")
    parser.add_argument("--step", type=float, default=1.0, help="contour spacing")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = TerrainConfig(
        width=100,
        height=100,
        min_distance=2,
        max_distance=10,
        noise_seed=args.seed,
        height_scale=40,
        height_amplitude=8,
        sample_seed=args.seed,
        octaves=3,
    )

    print("Building terrain...")
    print(f"  Region: {config.width:.0f} x {config.height:.0f}")
    print(f"  Min/max distance: {config.min_distance} / {config.max_distance}")

    builder = TerrainBuilder.from_config(config)
    mesh = builder.build()
    info = builder.get_mesh_info()

    low, high = mesh.elevation_range
    print(f"\nTerrain generated successfully:")
    print(f"  Number of vertices: {mesh.n_vertices}")
    print(f"  Number of triangles: {mesh.n_triangles}")
    print(f"  Hull edges: {info['n_hull_edges']}")
    print(f"  Elevation range: [{low:.2f}, {high:.2f}]")

    print(f"\nContour sweep (step {args.step}):")
    with ContourSession(mesh) as session:
        for artifacts in session.sweep(args.step):
            length = sum(segment.length for segment in artifacts.segments)
            print(
                f"  y = {artifacts.plane_y:7.2f}: "
                f"{artifacts.n_segments:5d} segments, "
                f"{artifacts.highlight.n_triangles:5d} faces, "
                f"length {length:8.2f}"
            )

    return mesh


if __name__ == "__main__":
    main()
