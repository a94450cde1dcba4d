"""
Noise Module
============

Seeded 2D noise oracles.

The generator treats noise as a black box: it asks for a value at
(x, y) and never looks at how it was produced.

Components:
    - NoiseOracle: Protocol for noise backends
    - SimplexNoiseOracle: opensimplex-backed production oracle
    - MockNoiseOracle: Synthetic oracle for tests
"""

from slopes.noise.oracle import (
    DEFAULT_NOISE_SEED,
    MockNoiseOracle,
    NoiseOracle,
    SimplexNoiseOracle,
)

__all__ = [
    "DEFAULT_NOISE_SEED",
    "NoiseOracle",
    "SimplexNoiseOracle",
    "MockNoiseOracle",
]
