"""
Data Models
===========

Models for the Slopes generator.

Models:
    Geometry:
        - Point2D, Segment, Polyline: Page-space line geometry

    Config:
        - GenerationConfig: Immutable parameters for one run

    Input:
        - GenerateRequest: HTTP generation request

    Output:
        - GenerationStats: Run counters
        - Drawing: Serialisable output document
"""

from slopes.models.geometry import Point2D, Polyline, Segment
from slopes.models.config import GenerationConfig
from slopes.models.input import GenerateRequest
from slopes.models.output import Drawing, GenerationStats

__all__ = [
    # Geometry
    "Point2D",
    "Segment",
    "Polyline",
    # Config
    "GenerationConfig",
    # Input
    "GenerateRequest",
    # Output
    "GenerationStats",
    "Drawing",
]
