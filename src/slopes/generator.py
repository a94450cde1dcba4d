"""
Slopes Generator
================

End-to-end generation of the mountain-range drawing.

Pipeline:
    NoiseOracle + Bezier envelope -> AmplitudeEnvelope
        -> RowSampler (one RowGeometry per row, cached)
        -> OcclusionFilter (against cached nearer rows)
        -> PostProcessor (clip to margins, group polylines)
        -> [Polyline]

Ordering:
    Rows are generated strictly front to back (row 0 first). When row i
    is filtered, rows 0..i-1 are complete and never change again, and only
    they are consulted.

Reproducibility:
    The noise oracle is seeded (default seed 20). Jitter comes from a
    numpy Generator: pass one seeded with `np.random.default_rng(seed)`
    for fully reproducible output, or leave it out to draw from system
    entropy. With perlin_ratio == 1.0 jitter has no effect and output is
    reproducible either way.

Example:
    from slopes.generator import SlopesGenerator
    from slopes.models import GenerationConfig

    generator = SlopesGenerator(
        GenerationConfig(width=552, height=736, margins=(60, 50),
                         distance_between_rows=9, perlin_ratio=0.8),
    )
    drawing = generator.run_drawing()
    print(drawing.stats)
"""

import logging
import time
from typing import List, Mapping, Optional, Tuple, Union

import numpy as np
from pydantic import ValidationError

from slopes.errors import InvalidConfigurationError
from slopes.geometry.polylines import DEFAULT_GROUPING_TOLERANCE
from slopes.models.config import GenerationConfig
from slopes.models.geometry import Polyline, Segment
from slopes.models.output import Drawing, GenerationStats
from slopes.noise.oracle import DEFAULT_NOISE_SEED, NoiseOracle, SimplexNoiseOracle
from slopes.postprocess import PostProcessor
from slopes.terrain.envelope import AmplitudeEnvelope
from slopes.terrain.occlusion import OcclusionFilter, possibly_occluding_rows
from slopes.terrain.rows import DEFAULT_ROW_AMPLIFICATION, RowGeometry, RowSampler


logger = logging.getLogger(__name__)


ConfigInput = Union[GenerationConfig, Mapping]


def coerce_config(config: ConfigInput) -> GenerationConfig:
    """
    Validate a config given as a model or a plain mapping.

    Raises:
        InvalidConfigurationError: If validation fails
    """
    if isinstance(config, GenerationConfig):
        return config
    try:
        return GenerationConfig.model_validate(dict(config))
    except ValidationError as e:
        raise InvalidConfigurationError(f"Invalid generation config: {e}") from e


class SlopesGenerator:
    """
    One generation run.

    Owns the run's config, noise oracle, jitter stream, row cache and
    counters. Not shared between runs or threads.

    Attributes:
        config: Generation parameters
        noise: Noise oracle
        stats: Counters of the last run
    """

    def __init__(
        self,
        config: ConfigInput,
        noise: Optional[NoiseOracle] = None,
        jitter: Optional[np.random.Generator] = None,
        grouping_tolerance: float = DEFAULT_GROUPING_TOLERANCE,
    ) -> None:
        """
        Initialize a generator.

        Args:
            config: Generation parameters (model or mapping)
            noise: Noise oracle, defaults to SimplexNoiseOracle(seed=20)
            jitter: Jitter source, defaults to an entropy-seeded Generator
            grouping_tolerance: Endpoint tolerance for polyline grouping

        Raises:
            InvalidConfigurationError: If config is invalid
        """
        self.config = coerce_config(config)
        self.noise = noise if noise is not None else SimplexNoiseOracle()
        self.jitter = jitter if jitter is not None else np.random.default_rng()

        self.envelope = AmplitudeEnvelope(
            noise=self.noise,
            samples_per_row=self.config.samples_per_row,
            perlin_ratio=self.config.perlin_ratio,
            jitter=self.jitter,
        )
        self.sampler = RowSampler(self.config, self.envelope)
        self.occlusion = OcclusionFilter()
        self.postprocessor = PostProcessor(grouping_tolerance=grouping_tolerance)

        self.stats = GenerationStats()
        self._rows: List[RowGeometry] = []
        self._row_amplifications: List[float] = []

    @classmethod
    def from_seeds(
        cls,
        config: ConfigInput,
        noise_seed: int = DEFAULT_NOISE_SEED,
        jitter_seed: Optional[int] = None,
        grouping_tolerance: float = DEFAULT_GROUPING_TOLERANCE,
    ) -> "SlopesGenerator":
        """
        Build a generator with a simplex oracle and a jitter stream from seeds.

        Args:
            config: Generation parameters (model or mapping)
            noise_seed: Seed for the noise field
            jitter_seed: Seed for jitter, None for system entropy
            grouping_tolerance: Endpoint tolerance for polyline grouping
        """
        jitter = np.random.default_rng(jitter_seed) if jitter_seed is not None else None
        return cls(
            config,
            noise=SimplexNoiseOracle(seed=noise_seed),
            jitter=jitter,
            grouping_tolerance=grouping_tolerance,
        )

    @property
    def rows(self) -> Tuple[RowGeometry, ...]:
        """Rows sampled by the last run, nearest first."""
        return tuple(self._rows)

    @property
    def row_amplifications(self) -> Tuple[float, ...]:
        return tuple(self._row_amplifications)

    def _amplification_for(self, row_index: int) -> float:
        # Uniform across rows; recorded per row in RowGeometry.
        return DEFAULT_ROW_AMPLIFICATION

    def sample_rows(self) -> List[RowGeometry]:
        """
        Sample every row without occlusion.

        Resets the row cache. Consumes the jitter stream.

        Returns:
            One RowGeometry per row, nearest first
        """
        self._rows = []
        self._row_amplifications = []

        for row_index in range(self.config.num_rows):
            amplification = self._amplification_for(row_index)
            self._row_amplifications.append(amplification)
            self._rows.append(self.sampler.sample_row(row_index, amplification))

        return list(self._rows)

    def visible_segments(self) -> List[Segment]:
        """
        Sample every row and remove hidden lines.

        Returns:
            Visible segments, row by row, before margin clipping
        """
        self.occlusion.reset()
        self._rows = []
        self._row_amplifications = []

        raw_segments = 0
        skipped_samples = 0
        visible: List[Segment] = []

        for row_index in range(self.config.num_rows):
            amplification = self._amplification_for(row_index)
            row = self.sampler.sample_row(row_index, amplification)
            occluding = possibly_occluding_rows(row, self._rows)

            skipped_samples += row.skipped_samples

            for sample_index in range(1, row.samples):
                segment = row.segment(sample_index)
                if segment is None:
                    continue
                raw_segments += 1

                occluders = [r.segment(sample_index) for r in occluding]
                visible.extend(self.occlusion.occlude_parts(segment, occluders))

            logger.debug(
                f"Row {row_index}: offset={row.offset:.2f}, "
                f"occluders={[r.row_index for r in occluding]}"
            )

            # Only append after filtering: a row never occludes itself.
            self._row_amplifications.append(amplification)
            self._rows.append(row)

        occlusion_metrics = self.occlusion.get_metrics()
        self.stats = GenerationStats(
            rows=len(self._rows),
            raw_segments=raw_segments,
            hidden_segments=occlusion_metrics["hidden_segments"],
            occlusion_clipped_segments=occlusion_metrics["clipped_segments"],
            skipped_samples=skipped_samples,
        )

        return visible

    def run(self) -> List[Polyline]:
        """
        Generate the drawing.

        Returns:
            Polylines clipped to the page margins
        """
        config = self.config
        start_time = time.time()

        logger.info(
            f"Generating: {config.width}x{config.height}, rows={config.num_rows}, "
            f"samples_per_row={config.samples_per_row}, perlin_ratio={config.perlin_ratio}"
        )

        segments = self.visible_segments()
        polylines = self.postprocessor.process(
            segments,
            margins=config.margins,
            width=config.width,
            height=config.height,
        )

        elapsed_ms = (time.time() - start_time) * 1000
        self.stats = self.stats.model_copy(update={
            "output_segments": self.postprocessor.get_metrics()["output_segments"],
            "polylines": len(polylines),
            "elapsed_ms": round(elapsed_ms, 1),
        })

        logger.info(
            f"Generated {len(polylines)} polylines in {elapsed_ms:.1f}ms "
            f"(raw={self.stats.raw_segments}, hidden={self.stats.hidden_segments}, "
            f"clipped={self.stats.occlusion_clipped_segments}, "
            f"output={self.stats.output_segments})"
        )

        return polylines

    def run_drawing(self) -> Drawing:
        """Generate the drawing as a serialisable document."""
        polylines = self.run()
        return Drawing.from_polylines(
            polylines,
            width=self.config.width,
            height=self.config.height,
            margins=self.config.margins,
            stats=self.stats,
        )


def generate(
    config: ConfigInput,
    noise: Optional[NoiseOracle] = None,
    jitter: Optional[np.random.Generator] = None,
) -> List[Polyline]:
    """
    Generate a drawing.

    Args:
        config: Generation parameters (model or mapping)
        noise: Noise oracle, defaults to SimplexNoiseOracle(seed=20)
        jitter: Jitter source, defaults to an entropy-seeded Generator

    Returns:
        Polylines clipped to the page margins

    Raises:
        InvalidConfigurationError: If config is invalid
    """
    return SlopesGenerator(config, noise=noise, jitter=jitter).run()
