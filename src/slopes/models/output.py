"""
Output Models
=============

The serialisable output contract of a generation run.

Output Contract:
    {
        "width": 552.0,
        "height": 736.0,
        "margins": [60.0, 50.0],
        "polylines": [
            [[50.0, 616.0], [51.8, 615.9], ...],
            ...
        ],
        "stats": {
            "rows": 50,
            "raw_segments": 12450,
            "hidden_segments": 6120,
            "occlusion_clipped_segments": 310,
            "skipped_samples": 0,
            "output_segments": 6102,
            "polylines": 412,
            "elapsed_ms": 96.4
        }
    }

Design Rules:
    - Polylines are plain [x, y] pairs so any renderer can consume them
    - The consumer decides stroke width, colour and device pixel ratio
"""

from typing import List, Sequence, Tuple

from pydantic import BaseModel, Field

from slopes.models.geometry import Polyline


class GenerationStats(BaseModel):
    """
    Counters collected during one generation run.

    Attributes:
        rows: Number of rows generated
        raw_segments: Segments sampled before occlusion
        hidden_segments: Segments fully removed by occlusion
        occlusion_clipped_segments: Segments shortened or split by occlusion
        skipped_samples: Samples dropped because the noise was non-finite
        output_segments: Segments surviving occlusion and margin clipping
        polylines: Polylines after grouping
        elapsed_ms: Wall-clock generation time
    """

    rows: int = Field(default=0, ge=0)
    raw_segments: int = Field(default=0, ge=0)
    hidden_segments: int = Field(default=0, ge=0)
    occlusion_clipped_segments: int = Field(default=0, ge=0)
    skipped_samples: int = Field(default=0, ge=0)
    output_segments: int = Field(default=0, ge=0)
    polylines: int = Field(default=0, ge=0)
    elapsed_ms: float = Field(default=0.0, ge=0)


class Drawing(BaseModel):
    """
    Complete generated drawing.

    Attributes:
        width: Page width
        height: Page height
        margins: (vertical, horizontal) margins used for clipping
        polylines: Paths as lists of [x, y] pairs
        stats: Run counters
    """

    width: float = Field(..., gt=0, description="Page width")
    height: float = Field(..., gt=0, description="Page height")
    margins: Tuple[float, float] = Field(..., description="(vertical, horizontal)")

    polylines: List[List[Tuple[float, float]]] = Field(
        default_factory=list,
        description="Drawable paths, each a list of [x, y] points",
    )

    stats: GenerationStats = Field(default_factory=GenerationStats)

    @classmethod
    def from_polylines(
        cls,
        polylines: Sequence[Polyline],
        width: float,
        height: float,
        margins: Tuple[float, float],
        stats: GenerationStats,
    ) -> "Drawing":
        """Build the output document from generator polylines."""
        return cls(
            width=width,
            height=height,
            margins=margins,
            polylines=[list(p.as_tuples()) for p in polylines],
            stats=stats,
        )
