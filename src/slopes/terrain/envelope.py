"""
Amplitude Envelope
==================

Per-sample height values for every row.

Each height is built from:
    1. Seeded 2D noise at (sample mapped into a fixed noise range, row * 1.5)
    2. Uniform jitter in [-0.25, 0.25], mixed in by (1 - perlin_ratio)
    3. Per-row damping: even rows x0.85, odd rows x1.0
    4. A bell-shaped envelope raised to DAMPING_STRENGTH

Envelope Shape:
    The envelope is two mirrored cubic Bezier easings. The first half of
    the row ramps from 0 up to 1, the second half mirrors it back down:

        0 ......____......... 0
               /    \\
        ______/      \\______

    Raising it to the 4th power concentrates the peaks towards the
    horizontal centre of the page. The exponent is part of the look and
    must stay at 4.

Resolution Independence:
    Sample indices are mapped onto a noise range of PERLIN_RANGE_PER_ROW
    units regardless of samples_per_row, so changing the resolution only
    changes how finely the same ridge is traced.
"""

import logging
from typing import Optional

import numpy as np

from slopes.geometry.bezier import evaluate_cubic_bezier
from slopes.noise.oracle import NoiseOracle


logger = logging.getLogger(__name__)


PERLIN_RANGE_PER_ROW = 10.0
ROW_NOISE_SPACING = 1.5
JITTER_AMPLITUDE = 0.25
EVEN_ROW_DAMPING = 0.85
ODD_ROW_DAMPING = 1.0
DAMPING_STRENGTH = 4

RISING_CURVE = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (1.0, 1.0))
FALLING_CURVE = ((0.0, 1.0), (0.0, 1.0), (1.0, 0.0), (1.0, 0.0))


def normalize(
    value: float,
    current_min: float,
    current_max: float,
    new_min: float = 0.0,
    new_max: float = 1.0,
) -> float:
    """Linearly map `value` from one range onto another."""
    ratio = (value - current_min) / (current_max - current_min)
    return new_min + ratio * (new_max - new_min)


def row_damping(row_index: int) -> float:
    """Damping multiplier for a row; alternates between even and odd rows."""
    return EVEN_ROW_DAMPING if row_index % 2 == 0 else ODD_ROW_DAMPING


def envelope_at(sample_index: int, samples_per_row: int) -> float:
    """
    Bell envelope in [0, 1] at a sample position, before sharpening.

    Args:
        sample_index: Sample position; samples_per_row itself is allowed
        samples_per_row: Row resolution

    Returns:
        0 at both ends of the row, 1 at the centre
    """
    ratio = sample_index / samples_per_row

    if ratio < 0.5:
        curve, t = RISING_CURVE, ratio * 2
    else:
        curve, t = FALLING_CURVE, normalize(ratio, 0.5, 1.0)

    return evaluate_cubic_bezier(*curve, t).y


def damping_profile(samples_per_row: int) -> np.ndarray:
    """Sharpened envelope (envelope ** DAMPING_STRENGTH) for every sample index."""
    return np.array(
        [envelope_at(i, samples_per_row) ** DAMPING_STRENGTH for i in range(samples_per_row)],
        dtype=float,
    )


class AmplitudeEnvelope:
    """
    Height source for the row sampler.

    Combines noise, jitter, row damping and the bell envelope into one
    scalar height per (sample, row). Heights are in [-1, 1].

    The jitter source is an injectable numpy Generator. With no generator
    given, a fresh one is seeded from system entropy, which makes runs with
    perlin_ratio < 1 non-reproducible. Pass `np.random.default_rng(seed)`
    for reproducible runs.

    Attributes:
        noise: Noise oracle
        samples_per_row: Row resolution
        perlin_ratio: Noise weight in [0, 1]
    """

    def __init__(
        self,
        noise: NoiseOracle,
        samples_per_row: int,
        perlin_ratio: float,
        jitter: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Initialize the envelope.

        Args:
            noise: Seeded noise oracle
            samples_per_row: Number of samples per row
            perlin_ratio: 1.0 = pure noise, 0.0 = pure jitter
            jitter: Random generator for jitter draws
        """
        if samples_per_row <= 0:
            raise ValueError("samples_per_row must be positive")
        if not 0.0 <= perlin_ratio <= 1.0:
            raise ValueError("perlin_ratio must be in [0, 1]")

        self.noise = noise
        self.samples_per_row = samples_per_row
        self.perlin_ratio = perlin_ratio
        self._jitter = jitter if jitter is not None else np.random.default_rng()

        self._profile = damping_profile(samples_per_row)
        self._noise_x = np.array(
            [normalize(i, 0, samples_per_row, 0, PERLIN_RANGE_PER_ROW) for i in range(samples_per_row)],
            dtype=float,
        )

    @property
    def profile(self) -> np.ndarray:
        """Sharpened envelope per sample index (read-only view)."""
        view = self._profile.view()
        view.flags.writeable = False
        return view

    def height(self, sample_index: int, row_index: int) -> float:
        """
        Height at one sample of one row.

        Draws one value from the jitter stream.

        Args:
            sample_index: Sample position, in [0, samples_per_row]
            row_index: Row position, 0 is nearest

        Returns:
            Height in [-1, 1]; NaN if the noise oracle returned a non-finite value
        """
        noise_x = normalize(sample_index, 0, self.samples_per_row, 0, PERLIN_RANGE_PER_ROW)
        noise_val = self.noise.sample2d(noise_x, row_index * ROW_NOISE_SPACING)
        rnd = self._jitter.uniform(-JITTER_AMPLITUDE, JITTER_AMPLITUDE)

        value = noise_val * self.perlin_ratio + rnd * (1 - self.perlin_ratio)
        value *= row_damping(row_index)

        envelope = envelope_at(sample_index, self.samples_per_row) ** DAMPING_STRENGTH
        return _finite_or_nan(value * envelope)

    def row_heights(self, row_index: int) -> np.ndarray:
        """
        Heights for every sample of a row.

        Draws samples_per_row values from the jitter stream, in sample order.

        Args:
            row_index: Row position, 0 is nearest

        Returns:
            Array of samples_per_row heights; non-finite noise yields NaN
        """
        noise_y = row_index * ROW_NOISE_SPACING
        noise_vals = np.array(
            [self.noise.sample2d(float(x), noise_y) for x in self._noise_x],
            dtype=float,
        )
        rnd = self._jitter.uniform(-JITTER_AMPLITUDE, JITTER_AMPLITUDE, size=self.samples_per_row)

        with np.errstate(invalid="ignore"):
            values = noise_vals * self.perlin_ratio + rnd * (1 - self.perlin_ratio)
            values = values * row_damping(row_index) * self._profile

        values[~np.isfinite(values)] = np.nan
        return values


def _finite_or_nan(value: float) -> float:
    return float(value) if np.isfinite(value) else float("nan")
