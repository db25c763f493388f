"""Internal Bezier curve flattening.

Glyph outlines arrive as quadratic (TrueType) or cubic (CFF) segments; the
carver only understands straight edges, so curves are subdivided until every
piece is within tolerance of its chord. Not intended for public use.
"""

from glyphcarve.domain import Point2


def _mid(a: Point2, b: Point2) -> Point2:
    return Point2((a.x + b.x) / 2, (a.y + b.y) / 2)


def flatten_quadratic(
    p0: Point2,
    p1: Point2,
    p2: Point2,
    tolerance: float,
    depth: int = 0,
    max_depth: int = 16,
) -> list[Point2]:
    """Flatten a quadratic Bezier curve by recursive halving.

    The curve point at t=0.5 is compared with the chord midpoint; once they
    are within ``tolerance`` the chord stands in for the curve.

    Args:
        p0: Start point (on curve)
        p1: Control point
        p2: End point (on curve)
        tolerance: Maximum distance between curve and chord midpoints
        depth: Current recursion depth
        max_depth: Recursion cap for degenerate or huge curves

    Returns:
        Points along the curve from p0 to p2 inclusive
    """
    left_ctrl = _mid(p0, p1)
    right_ctrl = _mid(p1, p2)
    on_curve = _mid(left_ctrl, right_ctrl)

    if depth >= max_depth or on_curve.distance(_mid(p0, p2)) <= tolerance:
        return [p0, p2]

    left = flatten_quadratic(p0, left_ctrl, on_curve, tolerance, depth + 1, max_depth)
    right = flatten_quadratic(on_curve, right_ctrl, p2, tolerance, depth + 1, max_depth)

    # Both halves contain the shared midpoint
    return left[:-1] + right


def flatten_cubic(
    p0: Point2,
    p1: Point2,
    p2: Point2,
    p3: Point2,
    tolerance: float,
    depth: int = 0,
    max_depth: int = 16,
) -> list[Point2]:
    """Flatten a cubic Bezier curve using De Casteljau subdivision.

    Args:
        p0: Start point (on curve)
        p1: First control point
        p2: Second control point
        p3: End point (on curve)
        tolerance: Maximum distance between curve and chord midpoints
        depth: Current recursion depth
        max_depth: Recursion cap for degenerate or huge curves

    Returns:
        Points along the curve from p0 to p3 inclusive
    """
    q1 = _mid(p0, p1)
    q2 = _mid(p1, p2)
    q3 = _mid(p2, p3)
    r1 = _mid(q1, q2)
    r2 = _mid(q2, q3)
    on_curve = _mid(r1, r2)

    if depth >= max_depth or on_curve.distance(_mid(p0, p3)) <= tolerance:
        return [p0, p3]

    left = flatten_cubic(p0, q1, r1, on_curve, tolerance, depth + 1, max_depth)
    right = flatten_cubic(on_curve, r2, q3, p3, tolerance, depth + 1, max_depth)

    return left[:-1] + right
