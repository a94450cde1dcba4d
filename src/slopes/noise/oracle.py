"""
Noise Oracle
============

Seeded 2D noise, consumed by the generator as an opaque oracle.

This module provides the NoiseOracle protocol, the production
SimplexNoiseOracle backed by `opensimplex`, and a MockNoiseOracle for
driving the pipeline with synthetic terrain in tests.

Design Rules:
    - An oracle is an explicit instance owned by a generation run
    - No module-level noise state; two oracles with the same seed agree
    - sample2d() is pure for a fixed seed and returns values in [-1, 1]
"""

import logging
from typing import Callable, Optional, Protocol

from opensimplex import OpenSimplex


logger = logging.getLogger(__name__)


DEFAULT_NOISE_SEED = 20


class NoiseOracle(Protocol):
    """
    Protocol for 2D noise backends.

    Implementations must be deterministic for a given seed.
    """

    def sample2d(self, x: float, y: float) -> float:
        """
        Sample noise at a point.

        Args:
            x: Noise-domain x coordinate
            y: Noise-domain y coordinate

        Returns:
            Noise value in [-1, 1]
        """
        ...


class SimplexNoiseOracle:
    """
    OpenSimplex noise with an explicit seed.

    Attributes:
        seed: Seed the underlying generator was built with
    """

    def __init__(self, seed: int = DEFAULT_NOISE_SEED) -> None:
        """
        Initialize a seeded simplex generator.

        Args:
            seed: Integer seed; equal seeds give identical noise fields
        """
        self._seed = seed
        self._simplex = OpenSimplex(seed=seed)

        logger.debug(f"SimplexNoiseOracle initialized: seed={seed}")

    @property
    def seed(self) -> int:
        return self._seed

    def reseed(self, seed: int) -> None:
        """Rebuild the noise field for a new seed."""
        self._seed = seed
        self._simplex = OpenSimplex(seed=seed)
        logger.debug(f"SimplexNoiseOracle reseeded: seed={seed}")

    def sample2d(self, x: float, y: float) -> float:
        return float(self._simplex.noise2(x, y))


class MockNoiseOracle:
    """
    Deterministic oracle for testing.

    Returns `fn(x, y)` if a function is given, otherwise a constant.
    Call count is tracked so tests can check the pipeline does not
    resample rows it has already cached.

    Example:
        # Row 0 (y == 0) is a deep valley, every other row is flat
        oracle = MockNoiseOracle(lambda x, y: -1.0 if y == 0 else 0.0)
    """

    def __init__(
        self,
        fn: Optional[Callable[[float, float], float]] = None,
        constant: float = 0.0,
    ) -> None:
        self.fn = fn
        self.constant = constant
        self.calls = 0

    def sample2d(self, x: float, y: float) -> float:
        self.calls += 1
        if self.fn is not None:
            return self.fn(x, y)
        return self.constant
