"""
Polyline Grouping
=================

Chain segments that share endpoints into continuous polylines.

Two segments join when the end of one coincides with the start of the
other, within a tolerance. Chaining only ever follows segment direction.

Order Independence:
    Segments are put into a canonical order (by coordinates) before any
    chaining happens. The same SET of segments therefore always yields the
    same list of polylines, whatever order it arrived in.

Algorithm:
    1. Sort segments canonically and index their start points in a grid
       of `tolerance`-sized cells.
    2. Start a chain at every segment with no predecessor, following the
       first unused successor until none is left.
    3. Any segments still unused (closed loops) start chains of their own.
"""

import logging
import math
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from slopes.models.geometry import Point2D, Polyline, Segment


logger = logging.getLogger(__name__)


DEFAULT_GROUPING_TOLERANCE = 1e-6


Cell = Tuple[int, int]


class _StartIndex:
    """Grid lookup of segment start points."""

    def __init__(self, segments: List[Segment], tolerance: float) -> None:
        self.segments = segments
        self.tolerance = tolerance
        self._cells: Dict[Cell, List[int]] = defaultdict(list)

        for i, segment in enumerate(segments):
            self._cells[self._cell(segment.start)].append(i)

    def _cell(self, point: Point2D) -> Cell:
        return (
            math.floor(point.x / self.tolerance),
            math.floor(point.y / self.tolerance),
        )

    def starting_at(self, point: Point2D) -> List[int]:
        """Indices of segments starting within tolerance of `point`, ascending."""
        cx, cy = self._cell(point)
        found = []
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for i in self._cells.get((cx + dx, cy + dy), ()):
                    if self.segments[i].start.is_close(point, self.tolerance):
                        found.append(i)
        found.sort()
        return found


def _sort_key(segment: Segment) -> Tuple[float, float, float, float]:
    return (segment.start.x, segment.start.y, segment.end.x, segment.end.y)


def group_polylines(
    segments: Iterable[Segment],
    tolerance: float = DEFAULT_GROUPING_TOLERANCE,
) -> List[Polyline]:
    """
    Group segments into polylines.

    Args:
        segments: Segments to group; empty segments are ignored
        tolerance: Maximum per-axis distance for two endpoints to coincide

    Returns:
        Polylines in canonical order
    """
    if tolerance <= 0:
        raise ValueError("tolerance must be positive")

    ordered = sorted((s for s in segments if not s.is_empty), key=_sort_key)
    index = _StartIndex(ordered, tolerance)

    has_predecessor = [False] * len(ordered)
    for i, segment in enumerate(ordered):
        for j in index.starting_at(segment.end):
            if j != i:
                has_predecessor[j] = True

    used = [False] * len(ordered)

    def next_unused(point: Point2D) -> Optional[int]:
        for j in index.starting_at(point):
            if not used[j]:
                return j
        return None

    def walk(first: int) -> Polyline:
        used[first] = True
        current = ordered[first]
        points = [current.start, current.end]

        while (j := next_unused(current.end)) is not None:
            used[j] = True
            current = ordered[j]
            points.append(current.end)

        return Polyline(tuple(points))

    polylines = [
        walk(i)
        for i in range(len(ordered))
        if not has_predecessor[i] and not used[i]
    ]

    # Closed loops have no chain head; break them at their first segment.
    for i in range(len(ordered)):
        if not used[i]:
            polylines.append(walk(i))

    logger.debug(f"Grouped {len(ordered)} segments into {len(polylines)} polylines")

    return polylines
