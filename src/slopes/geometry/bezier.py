"""
Bezier Evaluation
=================

Cubic Bezier evaluation, used as a 1D easing function.

Formula:
    B(t) = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3,  t in [0, 1]

The caller is responsible for keeping t inside [0, 1]; values are not
clamped.
"""

from typing import Tuple

from slopes.models.geometry import Point2D


ControlPoint = Tuple[float, float]


def evaluate_cubic_bezier(
    p0: ControlPoint,
    p1: ControlPoint,
    p2: ControlPoint,
    p3: ControlPoint,
    t: float,
) -> Point2D:
    """
    Evaluate a cubic Bezier curve at parameter t.

    Args:
        p0: Start point
        p1: First control point
        p2: Second control point
        p3: End point
        t: Curve parameter in [0, 1]

    Returns:
        Point on the curve
    """
    u = 1.0 - t
    w0 = u * u * u
    w1 = 3.0 * u * u * t
    w2 = 3.0 * u * t * t
    w3 = t * t * t

    return Point2D(
        w0 * p0[0] + w1 * p1[0] + w2 * p2[0] + w3 * p3[0],
        w0 * p0[1] + w1 * p1[1] + w2 * p2[1] + w3 * p3[1],
    )
