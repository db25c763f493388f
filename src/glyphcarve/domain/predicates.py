"""Exact geometric predicates.

This module provides the yes/no questions the decomposition engine asks:
- Orientation of an ordered point triplet
- Whether a colinear point lies on a segment
- Whether two segments intersect
- Whether a point lies inside a polygon (ray casting)

All tests use exact float comparisons. No epsilon is applied, so callers that
need robustness against near-degenerate input must filter it beforehand.
"""

from collections.abc import Sequence
from enum import Enum, auto

from glyphcarve.domain.point import Point2
from glyphcarve.domain.segment import Segment

# Stand-in for +infinity as the far end of the containment ray
RAY_EXTENT = 1e9


class Orientation(Enum):
    """Turn direction of an ordered point triplet."""

    COLINEAR = auto()
    CLOCKWISE = auto()
    COUNTERCLOCKWISE = auto()


def orientation(p: Point2, q: Point2, r: Point2) -> Orientation:
    """Find the orientation of the ordered triplet (p, q, r).

    Uses the sign of the cross product of (q - p) and (r - q). Exactly zero
    is colinear.

    Args:
        p: First point
        q: Second point
        r: Third point

    Returns:
        Orientation of the triplet

    Examples:
        >>> orientation(Point2(0, 0), Point2(1, 1), Point2(2, 2))
        <Orientation.COLINEAR: 1>
        >>> orientation(Point2(0, 0), Point2(0, 1), Point2(1, 1))
        <Orientation.CLOCKWISE: 2>
    """
    val = (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)

    if val == 0:
        return Orientation.COLINEAR

    if val > 0:
        return Orientation.CLOCKWISE

    return Orientation.COUNTERCLOCKWISE


def on_segment(p: Point2, q: Point2, r: Point2) -> bool:
    """Check whether q lies on segment pr.

    Only meaningful when p, q and r are already known to be colinear: the
    test just checks that q is within the bounding box of p and r.

    Args:
        p: Segment start
        q: Point to test
        r: Segment end

    Returns:
        True if q is within the bounding box of p and r
    """
    return (
        min(p.x, r.x) <= q.x <= max(p.x, r.x)
        and min(p.y, r.y) <= q.y <= max(p.y, r.y)
    )


def segments_intersect(a: Segment, b: Segment) -> bool:
    """Determine whether two segments intersect.

    Classic four-orientation test with the four colinear special cases.
    Segments that only touch at an endpoint intersect.

    Args:
        a: First segment
        b: Second segment

    Returns:
        True if the segments share at least one point
    """
    o1 = orientation(a.p1, a.p2, b.p1)
    o2 = orientation(a.p1, a.p2, b.p2)
    o3 = orientation(b.p1, b.p2, a.p1)
    o4 = orientation(b.p1, b.p2, a.p2)

    # General case
    if o1 != o2 and o3 != o4:
        return True

    # b.p1 colinear with a and lying on it
    if o1 == Orientation.COLINEAR and on_segment(a.p1, b.p1, a.p2):
        return True

    # b.p2 colinear with a and lying on it
    if o2 == Orientation.COLINEAR and on_segment(a.p1, b.p2, a.p2):
        return True

    # a.p1 colinear with b and lying on it
    if o3 == Orientation.COLINEAR and on_segment(b.p1, a.p1, b.p2):
        return True

    # a.p2 colinear with b and lying on it
    if o4 == Orientation.COLINEAR and on_segment(b.p1, a.p2, b.p2):
        return True

    return False


def nearest_point_on_segment(point: Point2, segment: Segment) -> tuple[Point2, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment endpoints.

    Args:
        point: The point to project
        segment: Segment to project onto

    Returns:
        Tuple of (nearest_point, distance)

    Examples:
        >>> seg = Segment(Point2(0.0, 0.0), Point2(2.0, 0.0))
        >>> nearest_point_on_segment(Point2(1.0, 1.0), seg)
        (Point2(x=1.0, y=0.0), 1.0)
    """
    dx = segment.p2.x - segment.p1.x
    dy = segment.p2.y - segment.p1.y

    # Zero-length segment
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return segment.p1, point.distance(segment.p1)

    t = ((point.x - segment.p1.x) * dx + (point.y - segment.p1.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))

    nearest = Point2(segment.p1.x + t * dx, segment.p1.y + t * dy)
    return nearest, point.distance(nearest)


def point_in_polygon(
    point: Point2,
    polygon: Sequence[Point2],
    ray_extent: float = RAY_EXTENT,
) -> bool:
    """Determine if a point is inside a polygon by ray casting.

    Casts a horizontal ray from the point to ``(ray_extent, point.y)`` and
    counts polygon edges crossing it. If the point is colinear with a crossed
    edge the answer is whether it lies on that edge, so boundary points count
    as inside. Otherwise an odd crossing count means inside.

    Args:
        point: The point to test
        polygon: Points forming the polygon boundary, in traversal order
        ray_extent: X coordinate used as the far end of the ray

    Returns:
        True if the point is inside or on the polygon, False otherwise.
        Polygons with fewer than 3 points contain nothing.

    Examples:
        >>> square = [Point2(0, 0), Point2(0, 1), Point2(1, 1), Point2(1, 0)]
        >>> point_in_polygon(Point2(0.5, 0.5), square)
        True
        >>> point_in_polygon(Point2(3.0, 3.0), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    ray = Segment(point, Point2(ray_extent, point.y))

    count = 0
    for i in range(n):
        start = polygon[i]
        end = polygon[(i + 1) % n]

        if segments_intersect(Segment(start, end), ray):
            if orientation(start, point, end) == Orientation.COLINEAR:
                return on_segment(start, point, end)
            count += 1

    return count % 2 == 1
