"""
Slopes
======

Procedural "mountain range" line art for pen plotters.

This package generates a stack of noise-perturbed ridge lines, one per row,
and removes the parts of farther rows that nearer rows would hide. The
result is a flat list of polylines in page coordinates, ready to be
plotted or exported.

Components:
    - noise: Seeded 2D noise oracles
    - geometry: Bezier evaluation, margin clipping, polyline grouping
    - terrain: Amplitude envelope, row sampling, occlusion
    - generator: The end-to-end generation pipeline
    - export: SVG / JSON documents for plotting
    - main: FastAPI service exposing generation over HTTP

Example:
    from slopes import generate
    from slopes.models import GenerationConfig

    config = GenerationConfig(
        width=552,
        height=736,
        margins=(60, 50),
        distance_between_rows=9,
        perlin_ratio=0.8,
    )
    polylines = generate(config)
"""

__version__ = "0.1.0"
__author__ = "Slopes Project"

from slopes.generator import SlopesGenerator, generate

__all__ = [
    "__version__",
    "SlopesGenerator",
    "generate",
]
