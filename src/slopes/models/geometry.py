"""
Geometry Models
===============

Value types for the line geometry produced by the generator.

All coordinates are in PAGE SPACE, in the same units as the page width
and height. Origin is the top-left corner of the page, X increases
rightward, Y increases downward.

Types:
    - Point2D: Immutable 2D coordinate
    - Segment: Ordered pair of points, tagged with the row/sample it came from
    - Polyline: Connected path of two or more points

These are plain slotted dataclasses rather than pydantic models: tens of
thousands of them are created per run, and they never cross a trust
boundary. The pydantic output document (see models.output) converts them
at the edge.
"""

import math
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Tuple


@dataclass(frozen=True, slots=True)
class Point2D:
    """
    2D point in page coordinates.

    Attributes:
        x: Horizontal coordinate
        y: Vertical coordinate (grows downward)
    """

    x: float
    y: float

    @property
    def is_finite(self) -> bool:
        """True if neither coordinate is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def lerp(self, other: "Point2D", t: float) -> "Point2D":
        """Linearly interpolate towards `other` by parameter t."""
        return Point2D(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
        )

    def is_close(self, other: "Point2D", tolerance: float) -> bool:
        """True if both coordinates are within `tolerance` of `other`."""
        return (
            abs(self.x - other.x) <= tolerance
            and abs(self.y - other.y) <= tolerance
        )

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Segment:
    """
    Ordered line segment between two points.

    Segments produced by the row sampler always connect two adjacent
    samples of the same row. `row_index` and `sample_index` record that
    provenance (sample_index is the index of the END sample, so the pair
    is (sample_index - 1, sample_index)). Segments built by hand, e.g. in
    tests, may leave both as None.

    Attributes:
        start: First endpoint
        end: Second endpoint
        row_index: Row this segment belongs to, if known
        sample_index: Index of the end sample within the row, if known
    """

    start: Point2D
    end: Point2D
    row_index: Optional[int] = None
    sample_index: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        """True for zero-length segments."""
        return self.start == self.end

    @property
    def is_finite(self) -> bool:
        return self.start.is_finite and self.end.is_finite

    @property
    def min_x(self) -> float:
        return min(self.start.x, self.end.x)

    @property
    def max_x(self) -> float:
        return max(self.start.x, self.end.x)

    def point_at(self, t: float) -> Point2D:
        """
        Point at parameter t along the segment.

        t=0 and t=1 return the original endpoints exactly, so that
        partially kept segments still chain with their neighbours.
        """
        if t <= 0.0:
            return self.start
        if t >= 1.0:
            return self.end
        return self.start.lerp(self.end, t)

    def y_at(self, x: float) -> float:
        """
        Height of the segment's supporting line at horizontal position x.

        Raises:
            ValueError: If the segment is vertical
        """
        dx = self.end.x - self.start.x
        if dx == 0:
            raise ValueError("y_at is undefined for a vertical segment")
        t = (x - self.start.x) / dx
        return self.start.y + (self.end.y - self.start.y) * t

    def sub_segment(self, t0: float, t1: float) -> "Segment":
        """Portion of this segment between parameters t0 and t1."""
        return replace(self, start=self.point_at(t0), end=self.point_at(t1))

    def with_endpoints(self, start: Point2D, end: Point2D) -> "Segment":
        """Copy of this segment with new endpoints, keeping provenance."""
        return replace(self, start=start, end=end)


@dataclass(frozen=True, slots=True)
class Polyline:
    """
    Continuous drawable path.

    Attributes:
        points: Ordered points, at least two
    """

    points: Tuple[Point2D, ...]

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise ValueError("Polyline must have at least 2 points")

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point2D]:
        return iter(self.points)

    @property
    def start(self) -> Point2D:
        return self.points[0]

    @property
    def end(self) -> Point2D:
        return self.points[-1]

    def as_tuples(self) -> Tuple[Tuple[float, float], ...]:
        return tuple(p.as_tuple() for p in self.points)
