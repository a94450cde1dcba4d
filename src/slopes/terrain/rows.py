"""
Row Sampling
============

Turn a row's heights into page-space geometry.

For sample i of row r:
    x = i * distance_between_samples + horizontal_margin
    y = height * row_height * amplification + row_offset(r)

where
    distance_between_samples = (width - 2 * horizontal_margin) / samples_per_row
    row_offset(r) = page_height - 2 * vertical_margin - r * distance_between_rows

Row 0 sits lowest on the page (nearest the viewer); every following row
is `distance_between_rows` higher up.

Each row is sampled ONCE per run into an immutable RowGeometry. Later
rows read earlier rows' geometry from that cache when testing occlusion,
so a row's jitter is drawn exactly once.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from slopes.models.config import GenerationConfig
from slopes.models.geometry import Point2D, Segment
from slopes.terrain.envelope import AmplitudeEnvelope, normalize


logger = logging.getLogger(__name__)


DEFAULT_ROW_AMPLIFICATION = 1.0


def row_offset(
    row_index: int,
    page_height: float,
    vertical_margin: float,
    distance_between_rows: float,
) -> float:
    """Vertical baseline of a row."""
    return page_height - vertical_margin * 2 - row_index * distance_between_rows


def sample_coordinates(
    value: float,
    sample_index: int,
    distance_between_samples: float,
    offset: float,
    row_height: float,
    horizontal_margin: float,
    amplification: float = DEFAULT_ROW_AMPLIFICATION,
) -> Point2D:
    """
    Page coordinates of one sample.

    Args:
        value: Height in [-1, 1]
        sample_index: Sample position within the row
        distance_between_samples: Horizontal spacing of samples
        offset: The row's baseline
        row_height: Peak displacement at amplification 1.0
        horizontal_margin: Left page margin
        amplification: Per-row peak multiplier

    Returns:
        Point in page coordinates
    """
    span = row_height * amplification
    return Point2D(
        sample_index * distance_between_samples + horizontal_margin,
        normalize(value, -1, 1, -span, span) + offset,
    )


@dataclass(frozen=True)
class RowGeometry:
    """
    Immutable sampled geometry of one row.

    Attributes:
        row_index: Row position, 0 is nearest
        offset: Baseline y of the row
        amplification: Peak multiplier used for this row
        max_displacement: Largest possible distance of a point from the baseline
        points: One point per sample; y is NaN for non-finite samples
    """

    row_index: int
    offset: float
    amplification: float
    max_displacement: float
    points: Tuple[Point2D, ...]

    @property
    def samples(self) -> int:
        return len(self.points)

    @property
    def skipped_samples(self) -> int:
        """Number of samples with non-finite coordinates."""
        return sum(1 for p in self.points if not p.is_finite)

    def segment(self, sample_index: int) -> Optional[Segment]:
        """
        Segment between samples (sample_index - 1, sample_index).

        Args:
            sample_index: End sample, in [1, samples)

        Returns:
            The segment, or None if either endpoint is non-finite

        Raises:
            IndexError: If sample_index is outside [1, samples)
        """
        if not 1 <= sample_index < len(self.points):
            raise IndexError(
                f"sample_index {sample_index} outside [1, {len(self.points)})"
            )

        start = self.points[sample_index - 1]
        end = self.points[sample_index]
        if not (start.is_finite and end.is_finite):
            return None

        return Segment(start, end, row_index=self.row_index, sample_index=sample_index)

    def segments(self) -> List[Optional[Segment]]:
        """All consecutive segments of the row, in sample order."""
        return [self.segment(i) for i in range(1, len(self.points))]


class RowSampler:
    """
    Samples rows into RowGeometry records.

    Attributes:
        config: Generation parameters
        envelope: Height source
    """

    def __init__(self, config: GenerationConfig, envelope: AmplitudeEnvelope) -> None:
        """
        Initialize the sampler.

        Args:
            config: Generation parameters
            envelope: Height source sharing config's samples_per_row
        """
        if envelope.samples_per_row != config.samples_per_row:
            raise ValueError(
                f"envelope samples_per_row ({envelope.samples_per_row}) does not "
                f"match config ({config.samples_per_row})"
            )

        self.config = config
        self.envelope = envelope

    def sample_row(
        self,
        row_index: int,
        amplification: float = DEFAULT_ROW_AMPLIFICATION,
    ) -> RowGeometry:
        """
        Sample one row.

        Args:
            row_index: Row position, 0 is nearest
            amplification: Per-row peak multiplier

        Returns:
            The row's geometry
        """
        config = self.config
        offset = row_offset(
            row_index,
            config.height,
            config.vertical_margin,
            config.distance_between_rows,
        )
        heights = self.envelope.row_heights(row_index)

        points = tuple(
            sample_coordinates(
                value=float(value),
                sample_index=i,
                distance_between_samples=config.distance_between_samples,
                offset=offset,
                row_height=config.row_height,
                horizontal_margin=config.horizontal_margin,
                amplification=amplification,
            )
            for i, value in enumerate(heights)
        )

        geometry = RowGeometry(
            row_index=row_index,
            offset=offset,
            amplification=amplification,
            max_displacement=config.row_height * amplification,
            points=points,
        )

        skipped = geometry.skipped_samples
        if skipped:
            logger.warning(
                f"Row {row_index}: {skipped} non-finite noise sample(s) skipped"
            )

        return geometry
