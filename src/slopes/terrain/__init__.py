"""
Terrain Module
==============

Ridge-line generation and hidden-line removal.

This module provides:
    - AmplitudeEnvelope: Noise + jitter + bell envelope heights
    - RowSampler / RowGeometry: Page-space geometry per row
    - OcclusionFilter: Removal of lines hidden behind nearer rows
"""

from slopes.terrain.envelope import (
    AmplitudeEnvelope,
    DAMPING_STRENGTH,
    damping_profile,
    envelope_at,
    normalize,
    row_damping,
)
from slopes.terrain.rows import (
    DEFAULT_ROW_AMPLIFICATION,
    RowGeometry,
    RowSampler,
    row_offset,
    sample_coordinates,
)
from slopes.terrain.occlusion import (
    OcclusionFilter,
    hidden_span,
    possibly_occluding_rows,
)

__all__ = [
    # Envelope
    "AmplitudeEnvelope",
    "DAMPING_STRENGTH",
    "damping_profile",
    "envelope_at",
    "normalize",
    "row_damping",
    # Rows
    "DEFAULT_ROW_AMPLIFICATION",
    "RowGeometry",
    "RowSampler",
    "row_offset",
    "sample_coordinates",
    # Occlusion
    "OcclusionFilter",
    "hidden_span",
    "possibly_occluding_rows",
]
