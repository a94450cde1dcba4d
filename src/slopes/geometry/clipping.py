"""
Margin Clipping
===============

Clip segments to the page's margin rectangle.

The drawable region is:
    [horizontal_margin, width - horizontal_margin] x
    [vertical_margin, height - vertical_margin]

Segments fully inside are returned untouched (same object), segments
fully outside are dropped, and crossing segments are cut at the boundary
with shapely. Cut points are snapped onto the rectangle so that clipping
an already clipped set is a no-op.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from shapely.geometry import LineString, box

from slopes.models.geometry import Point2D, Segment


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClipRect:
    """Axis-aligned clipping rectangle in page coordinates."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_margins(
        cls,
        margins: Tuple[float, float],
        width: float,
        height: float,
    ) -> "ClipRect":
        """
        Build the rectangle left inside the page margins.

        Args:
            margins: (vertical, horizontal) margins
            width: Page width
            height: Page height
        """
        vertical, horizontal = margins
        return cls(
            min_x=horizontal,
            min_y=vertical,
            max_x=width - horizontal,
            max_y=height - vertical,
        )

    def contains(self, point: Point2D) -> bool:
        """True if the point is inside or on the boundary."""
        return (
            self.min_x <= point.x <= self.max_x
            and self.min_y <= point.y <= self.max_y
        )

    def snap(self, point: Point2D) -> Point2D:
        """Clamp a point onto the rectangle."""
        return Point2D(
            min(max(point.x, self.min_x), self.max_x),
            min(max(point.y, self.min_y), self.max_y),
        )


def clip_segment(segment: Segment, rect: ClipRect) -> Optional[Segment]:
    """
    Clip one segment to a rectangle.

    Args:
        segment: Segment to clip
        rect: Clipping rectangle

    Returns:
        The segment itself if fully inside, a shortened copy if it
        crosses the boundary, or None if nothing is left.
    """
    # Both endpoints inside a convex region means the whole segment is.
    if rect.contains(segment.start) and rect.contains(segment.end):
        return segment

    line = LineString([segment.start.as_tuple(), segment.end.as_tuple()])
    clipped = box(rect.min_x, rect.min_y, rect.max_x, rect.max_y).intersection(line)

    if clipped.is_empty or not isinstance(clipped, LineString) or clipped.length == 0:
        return None

    coords = list(clipped.coords)
    start = Point2D(*coords[0])
    end = Point2D(*coords[-1])

    # Overlay does not promise to keep the input direction.
    if _distance_sq(start, segment.start) > _distance_sq(end, segment.start):
        start, end = end, start

    start = segment.start if rect.contains(segment.start) else rect.snap(start)
    end = segment.end if rect.contains(segment.end) else rect.snap(end)

    if start == end:
        return None

    return segment.with_endpoints(start, end)


def clip_segments(
    segments: Iterable[Segment],
    margins: Tuple[float, float],
    width: float,
    height: float,
) -> List[Segment]:
    """
    Clip every segment to the margin rectangle of the page.

    Args:
        segments: Segments to clip
        margins: (vertical, horizontal) margins
        width: Page width
        height: Page height

    Returns:
        Surviving segments, in input order
    """
    rect = ClipRect.from_margins(margins, width, height)

    result = []
    for segment in segments:
        clipped = clip_segment(segment, rect)
        if clipped is not None:
            result.append(clipped)

    return result


def _distance_sq(a: Point2D, b: Point2D) -> float:
    return (a.x - b.x) ** 2 + (a.y - b.y) ** 2
