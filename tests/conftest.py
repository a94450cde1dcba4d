"""
Test Configuration
==================

Pytest fixtures and test configuration for the Slopes generator.
"""

import numpy as np
import pytest


@pytest.fixture
def scenario_config():
    """Tiny two-row config whose geometry can be worked out by hand."""
    from slopes.models.config import GenerationConfig

    return GenerationConfig(
        width=400,
        height=200,
        margins=(10, 20),
        distance_between_rows=5,
        perlin_ratio=1.0,
        samples_per_row=4,
        num_rows=2,
    )


@pytest.fixture
def small_config():
    """Small but realistic config for end-to-end runs."""
    from slopes.models.config import GenerationConfig

    return GenerationConfig(
        width=300,
        height=400,
        margins=(30, 25),
        distance_between_rows=6,
        perlin_ratio=0.7,
        samples_per_row=60,
        num_rows=14,
    )


@pytest.fixture
def valley_oracle():
    """
    Row 0 (noise y == 0) is pulled fully towards negative values, which
    lifts its ridge up the page; every other row sits at +0.5.
    """
    from slopes.noise import MockNoiseOracle

    return MockNoiseOracle(lambda x, y: -1.0 if y == 0 else 0.5)


@pytest.fixture
def seeded_jitter():
    """Factory for reproducible jitter streams."""
    def make(seed: int = 1234) -> np.random.Generator:
        return np.random.default_rng(seed)
    return make
