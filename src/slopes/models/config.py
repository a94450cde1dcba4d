"""
Generation Config Model
=======================

The immutable parameter set for one generation run.

A GenerationConfig is owned by a single call to the generator and is
never shared or mutated. Validation happens at construction, so a config
that reaches the pipeline is always drawable.

Page Layout:
    +-----------------------------------------+
    |            vertical margin              |
    |   +---------------------------------+   |
    | h |   row 49 (farthest)             | h |
    | o |   ...                           | o |
    | r |   row 1                         | r |
    | i |   row 0 (nearest)               | i |
    |   +---------------------------------+   |
    |            vertical margin              |
    +-----------------------------------------+

Example:
    config = GenerationConfig(
        width=552,
        height=736,
        margins=(60, 50),
        distance_between_rows=9,
        perlin_ratio=0.8,
    )
    print(config.row_height)                # 73.6
    print(config.distance_between_samples)  # 1.808
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_SAMPLES_PER_ROW = 250
DEFAULT_NUM_ROWS = 50
DEFAULT_ROW_HEIGHT_RATIO = 0.1


class GenerationConfig(BaseModel):
    """
    Parameters for one generation run.

    Attributes:
        width: Page width
        height: Page height
        margins: (vertical, horizontal) margins
        distance_between_rows: Vertical spacing between row baselines
        perlin_ratio: Mix between noise (1.0) and uniform jitter (0.0)
        samples_per_row: Horizontal resolution of every row
        num_rows: Number of rows, front to back
        row_height_ratio: Peak amplitude of a row as a fraction of page height
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    width: float = Field(..., gt=0, description="Page width")
    height: float = Field(..., gt=0, description="Page height")

    margins: Tuple[float, float] = Field(
        default=(0.0, 0.0),
        description="(vertical, horizontal) page margins",
    )

    distance_between_rows: float = Field(
        ...,
        gt=0,
        description="Vertical distance between consecutive row baselines",
    )

    perlin_ratio: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Weight of noise vs. random jitter (1.0 = pure noise)",
    )

    samples_per_row: int = Field(
        default=DEFAULT_SAMPLES_PER_ROW,
        ge=1,
        description="Number of height samples per row",
    )

    num_rows: int = Field(
        default=DEFAULT_NUM_ROWS,
        ge=1,
        description="Number of rows, row 0 is nearest to the viewer",
    )

    row_height_ratio: float = Field(
        default=DEFAULT_ROW_HEIGHT_RATIO,
        gt=0,
        description="Peak row amplitude as a fraction of page height",
    )

    @field_validator("margins")
    @classmethod
    def validate_margins(cls, v: Tuple[float, float]) -> Tuple[float, float]:
        """Margins must be non-negative."""
        if v[0] < 0 or v[1] < 0:
            raise ValueError("margins must be non-negative")
        return v

    @model_validator(mode="after")
    def validate_drawable_region(self) -> "GenerationConfig":
        """Margins must leave a non-empty drawable region."""
        vertical, horizontal = self.margins
        if vertical * 2 >= self.height:
            raise ValueError(
                f"vertical margin {vertical} must be less than half of height {self.height}"
            )
        if horizontal * 2 >= self.width:
            raise ValueError(
                f"horizontal margin {horizontal} must be less than half of width {self.width}"
            )
        return self

    @property
    def vertical_margin(self) -> float:
        return self.margins[0]

    @property
    def horizontal_margin(self) -> float:
        return self.margins[1]

    @property
    def row_height(self) -> float:
        """Maximum vertical displacement of a row at amplification 1.0."""
        return self.height * self.row_height_ratio

    @property
    def distance_between_samples(self) -> float:
        return (self.width - self.horizontal_margin * 2) / self.samples_per_row
