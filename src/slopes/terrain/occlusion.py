"""
Occlusion Filter
================

Hidden-line removal between rows.

Rows are drawn front to back, so by the time a row is sampled every row
that could hide it already exists. A nearer row hides a point of a
farther row wherever the farther row's line dips BELOW the nearer row's
ridge (larger y, since y grows downward): that part of the farther row is
behind the nearer mountain.

Candidate Selection:
    Only rows whose band can reach the current row are compared. Row j is
    a candidate for row i when

        j < i  and  |offset_j - offset_i| <= max_displacement_j + max_displacement_i

Per-Segment Test:
    The current segment and each candidate's segment for the same sample
    pair are compared over their shared x-range. The vertical gap
    d = y_current - y_occluder is linear along x, so the hidden part
    (d > 0) is one interval, found from the gap at the two ends.

Multiple Occluders:
    Hidden intervals are subtracted cumulatively, nearest row first. A
    point is hidden if ANY candidate hides it, so the outcome does not
    depend on the order the candidates are applied in. Once nothing is
    visible the remaining candidates are skipped.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from slopes.models.geometry import Segment
from slopes.terrain.rows import RowGeometry


logger = logging.getLogger(__name__)


# Visible pieces shorter than this (in segment parameter space) are dropped.
MIN_VISIBLE_SPAN = 1e-12


Span = Tuple[float, float]


def possibly_occluding_rows(
    current: RowGeometry,
    previous: Sequence[RowGeometry],
) -> List[RowGeometry]:
    """
    Select the earlier rows that could overlap the current row's band.

    Args:
        current: Row being generated
        previous: Already generated rows

    Returns:
        Candidate rows, nearest (lowest index) first

    Raises:
        ValueError: If a "previous" row is not strictly nearer than current
    """
    candidates = []
    for row in previous:
        if row.row_index >= current.row_index:
            raise ValueError(
                f"row {row.row_index} cannot occlude row {current.row_index}: "
                f"only nearer rows may be occluders"
            )
        reach = row.max_displacement + current.max_displacement
        if abs(row.offset - current.offset) <= reach:
            candidates.append(row)

    candidates.sort(key=lambda r: r.row_index)
    return candidates


def _gap(segment: Segment, occluder: Segment, t: float) -> float:
    point = segment.start.lerp(segment.end, t)
    return point.y - occluder.y_at(point.x)


def hidden_span(segment: Segment, occluder: Segment) -> Optional[Span]:
    """
    Parameter interval of `segment` hidden behind `occluder`.

    Args:
        segment: Farther segment
        occluder: Nearer segment

    Returns:
        (t0, t1) with 0 <= t0 < t1 <= 1, or None if nothing is hidden
    """
    if occluder.start.x == occluder.end.x:
        return None

    sx, ex = segment.start.x, segment.end.x
    if sx == ex:
        if not occluder.min_x <= sx <= occluder.max_x:
            return None
        ta, tb = 0.0, 1.0
    else:
        t_lo = (occluder.min_x - sx) / (ex - sx)
        t_hi = (occluder.max_x - sx) / (ex - sx)
        ta = max(0.0, min(t_lo, t_hi))
        tb = min(1.0, max(t_lo, t_hi))
        if tb <= ta:
            return None

    da = _gap(segment, occluder, ta)
    db = _gap(segment, occluder, tb)

    if da <= 0 and db <= 0:
        return None
    if da > 0 and db > 0:
        return (ta, tb)

    crossing = ta + (tb - ta) * da / (da - db)
    if db > 0:
        return (crossing, tb)
    return (ta, crossing)


def _subtract(spans: List[Span], hidden: Span) -> List[Span]:
    h0, h1 = hidden
    remaining = []
    for a, b in spans:
        if h1 <= a or h0 >= b:
            remaining.append((a, b))
            continue
        if h0 - a > MIN_VISIBLE_SPAN:
            remaining.append((a, h0))
        if b - h1 > MIN_VISIBLE_SPAN:
            remaining.append((h1, b))
    return remaining


class OcclusionFilter:
    """
    Removes the parts of a segment hidden by nearer segments.

    Keeps running counters so the generator can report how much of the
    drawing was hidden.
    """

    def __init__(self) -> None:
        self._tested = 0
        self._hidden = 0
        self._clipped = 0

    def occlude_parts(
        self,
        segment: Segment,
        occluders: Sequence[Optional[Segment]],
    ) -> List[Segment]:
        """
        Visible pieces of a segment.

        Args:
            segment: Segment to test
            occluders: Nearer segments, nearest first; None entries are ignored

        Returns:
            Visible pieces in order along the segment. The segment itself
            (same object) if nothing is hidden, [] if fully hidden.
        """
        self._tested += 1
        spans: List[Span] = [(0.0, 1.0)]

        for occluder in occluders:
            if occluder is None:
                continue
            hidden = hidden_span(segment, occluder)
            if hidden is not None:
                spans = _subtract(spans, hidden)
            if not spans:
                break

        if spans == [(0.0, 1.0)]:
            return [segment]

        parts = [segment.sub_segment(a, b) for a, b in spans]
        parts = [p for p in parts if not p.is_empty]

        if parts:
            self._clipped += 1
        else:
            self._hidden += 1

        return parts

    def occlude(
        self,
        segment: Segment,
        occluders: Sequence[Optional[Segment]],
    ) -> Optional[Segment]:
        """
        Visible remainder of a segment, or None if fully hidden.

        Occluders spanning the segment's whole x-extent (as same-sample
        segments of nearer rows always do) can only hide a prefix or a
        suffix, so at most one piece survives. If occluders with a narrower
        extent split the segment, the first visible piece is returned; use
        occlude_parts() to get all of them.
        """
        parts = self.occlude_parts(segment, occluders)
        return parts[0] if parts else None

    def reset(self) -> None:
        self._tested = 0
        self._hidden = 0
        self._clipped = 0

    def get_metrics(self) -> dict:
        """Get filter counters for observability."""
        return {
            "tested_segments": self._tested,
            "hidden_segments": self._hidden,
            "clipped_segments": self._clipped,
        }
