"""Directed line segments and their parametric intersection."""

import math
from dataclasses import dataclass

from glyphcarve.domain.point import Point2


@dataclass(frozen=True, slots=True)
class Segment:
    """A line segment from ``p1`` to ``p2``.

    Segments are built on the fly by every predicate call and carry no
    identity. Endpoint order only matters for ``on_segment`` style checks.

    Attributes:
        p1: First endpoint
        p2: Second endpoint
    """

    p1: Point2
    p2: Point2

    def intersection(self, other: "Segment") -> Point2 | None:
        """Find the point where this segment crosses another.

        Solves the two parametric line equations. Returns None when the
        segments are parallel (zero denominator), when either parameter is
        not finite, or when the crossing lies outside either segment.

        Non-parallel segments sharing an endpoint intersect exactly at that
        endpoint, so the shared point itself is returned instead of a value
        rebuilt from the parameters. Parameters of exactly 0 or 1 snap to the
        corresponding endpoint for the same reason.

        Args:
            other: Segment to intersect with

        Returns:
            Intersection point, or None if the segments do not cross

        Examples:
            >>> a = Segment(Point2(0.0, 0.0), Point2(2.0, 2.0))
            >>> b = Segment(Point2(0.0, 2.0), Point2(2.0, 0.0))
            >>> a.intersection(b)
            Point2(x=1.0, y=1.0)
        """
        s1_x = self.p2.x - self.p1.x
        s1_y = self.p2.y - self.p1.y
        s2_x = other.p2.x - other.p1.x
        s2_y = other.p2.y - other.p1.y

        denom = -s2_x * s1_y + s1_x * s2_y
        if denom == 0:
            return None

        shared = self._shared_endpoint(other)
        if shared is not None:
            return shared

        s = (-s1_y * (self.p1.x - other.p1.x) + s1_x * (self.p1.y - other.p1.y)) / denom
        t = (s2_x * (self.p1.y - other.p1.y) - s2_y * (self.p1.x - other.p1.x)) / denom

        if not (math.isfinite(s) and math.isfinite(t)):
            return None

        if not (0 <= s <= 1 and 0 <= t <= 1):
            return None

        if t == 0:
            return self.p1
        if t == 1:
            return self.p2
        if s == 0:
            return other.p1
        if s == 1:
            return other.p2

        return Point2(self.p1.x + t * s1_x, self.p1.y + t * s1_y)

    def _shared_endpoint(self, other: "Segment") -> Point2 | None:
        for point in (self.p1, self.p2):
            if point == other.p1 or point == other.p2:
                return point
        return None
