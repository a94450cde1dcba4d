"""
Input Models
============

Schema for generation requests received by the HTTP service.

Every field is optional. Missing fields fall back to the `generation`
section of the loaded settings, so an empty body `{}` generates the
default drawing.

Example Request:
    {
        "width": 400,
        "height": 600,
        "perlin_ratio": 1.0,
        "samples_per_row": 120,
        "noise_seed": 7
    }
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    """
    Request body for POST /generate.

    Range checks that depend on several fields (margins vs. page size)
    happen when the request is merged into a GenerationConfig.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    vertical_margin: Optional[float] = Field(default=None, ge=0)
    horizontal_margin: Optional[float] = Field(default=None, ge=0)
    distance_between_rows: Optional[float] = Field(default=None, gt=0)
    perlin_ratio: Optional[float] = Field(default=None, ge=0, le=1.0)
    samples_per_row: Optional[int] = Field(default=None, ge=1, le=5000)
    num_rows: Optional[int] = Field(default=None, ge=1, le=500)
    row_height_ratio: Optional[float] = Field(default=None, gt=0)

    noise_seed: Optional[int] = Field(default=None, description="Noise seed")
    jitter_seed: Optional[int] = Field(
        default=None,
        description="Jitter seed; omit for non-reproducible jitter",
    )
