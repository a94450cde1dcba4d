"""
Post-Processing
===============

Final cleanup of the visible segment set.

Stages:
    1. Drop missing (None), zero-length and non-finite segments
    2. Clip to the margin rectangle
    3. Group into polylines
"""

import logging
from typing import Iterable, List, Optional, Tuple

from slopes.geometry.clipping import clip_segments
from slopes.geometry.polylines import DEFAULT_GROUPING_TOLERANCE, group_polylines
from slopes.models.geometry import Polyline, Segment


logger = logging.getLogger(__name__)


class PostProcessor:
    """
    Cleans, clips and groups segments into polylines.

    Attributes:
        grouping_tolerance: Endpoint distance under which segments chain

    Example:
        processor = PostProcessor()
        polylines = processor.process(segments, margins=(60, 50), width=552, height=736)
    """

    def __init__(self, grouping_tolerance: float = DEFAULT_GROUPING_TOLERANCE) -> None:
        if grouping_tolerance <= 0:
            raise ValueError("grouping_tolerance must be positive")

        self.grouping_tolerance = grouping_tolerance

        self._input_segments = 0
        self._dropped_segments = 0
        self._clipped_away_segments = 0
        self._output_segments = 0
        self._polylines = 0

    def process(
        self,
        segments: Iterable[Optional[Segment]],
        margins: Tuple[float, float],
        width: float,
        height: float,
    ) -> List[Polyline]:
        """
        Turn raw visible segments into drawable polylines.

        Args:
            segments: Segments, possibly with None entries
            margins: (vertical, horizontal) margins
            width: Page width
            height: Page height

        Returns:
            Polylines inside the margin rectangle
        """
        segments = list(segments)
        present = [
            s for s in segments
            if s is not None and not s.is_empty and s.is_finite
        ]
        clipped = clip_segments(present, margins, width, height)
        polylines = group_polylines(clipped, self.grouping_tolerance)

        self._input_segments = len(segments)
        self._dropped_segments = len(segments) - len(present)
        self._clipped_away_segments = len(present) - len(clipped)
        self._output_segments = len(clipped)
        self._polylines = len(polylines)

        logger.debug(
            f"PostProcessor: in={len(segments)}, dropped={self._dropped_segments}, "
            f"outside_margins={self._clipped_away_segments}, polylines={len(polylines)}"
        )

        return polylines

    def get_metrics(self) -> dict:
        """Get counters from the last process() call."""
        return {
            "input_segments": self._input_segments,
            "dropped_segments": self._dropped_segments,
            "clipped_away_segments": self._clipped_away_segments,
            "output_segments": self._output_segments,
            "polylines": self._polylines,
        }
