"""
Geometry Module
===============

2D geometry helpers for the generation pipeline.

This module provides:
    - Cubic Bezier evaluation (used as an easing curve)
    - Clipping segments to the page's margin rectangle
    - Grouping segments into continuous polylines
"""

from slopes.geometry.bezier import evaluate_cubic_bezier
from slopes.geometry.clipping import ClipRect, clip_segment, clip_segments
from slopes.geometry.polylines import DEFAULT_GROUPING_TOLERANCE, group_polylines

__all__ = [
    "evaluate_cubic_bezier",
    "ClipRect",
    "clip_segment",
    "clip_segments",
    "DEFAULT_GROUPING_TOLERANCE",
    "group_polylines",
]
