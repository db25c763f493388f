"""Closed planar shapes.

A Shape is an ordered sequence of points describing a closed polygon together
with a center (the centroid unless overridden) and an origin used as the
reference point for scaling. Shapes are treated as values: every transform
returns a new Shape and the point list is never modified in place.
"""

import math
import random
from collections.abc import Iterator, Sequence
from functools import cmp_to_key

from glyphcarve.domain.point import Point2
from glyphcarve.domain.predicates import RAY_EXTENT, point_in_polygon
from glyphcarve.domain.segment import Segment
from glyphcarve.exceptions import GeometryError, MalformedShapeError

PLANE_ORIGIN = Point2(0.0, 0.0)


def centroid(points: Sequence[Point2]) -> Point2:
    """Average position of a set of points.

    Args:
        points: Points to average

    Returns:
        Mean point, or the plane origin for an empty sequence
    """
    if not points:
        return PLANE_ORIGIN
    sum_x = math.fsum(p.x for p in points)
    sum_y = math.fsum(p.y for p in points)
    return Point2(sum_x / len(points), sum_y / len(points))


class Shape:
    """A flat, closed arrangement of points.

    The boundary is assumed to be simple (non self-intersecting). Nothing
    here verifies it.

    Attributes:
        points: Boundary points in traversal order
        center: Centroid of the points, or a caller-supplied center
        origin: Reference point for ``scale``
    """

    __slots__ = ("_points", "center", "origin")

    def __init__(
        self,
        points: Sequence[Point2],
        center: Point2 | None = None,
        origin: Point2 = PLANE_ORIGIN,
    ) -> None:
        self._points: tuple[Point2, ...] = tuple(points)
        self.center = center if center is not None else centroid(self._points)
        self.origin = origin

    @property
    def points(self) -> tuple[Point2, ...]:
        """Boundary points in traversal order."""
        return self._points

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point2]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Point2:
        return self._points[index]

    def __repr__(self) -> str:
        return f"Shape(points={list(self._points)!r}, center={self.center!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return self._points == other._points and self.center == other.center

    def __hash__(self) -> int:
        return hash((self._points, self.center))

    def edges(self) -> Iterator[Segment]:
        """Iterate over boundary edges, closing back to the first point."""
        n = len(self._points)
        for i in range(n):
            yield Segment(self._points[i], self._points[(i + 1) % n])

    def bounds(self) -> tuple[Point2, Point2]:
        """Calculate the axis aligned bounding box.

        Returns:
            Tuple of (bottom_left, top_right) corner points

        Raises:
            MalformedShapeError: If the shape has no points
        """
        if not self._points:
            raise MalformedShapeError(0, "bound")

        xs = [p.x for p in self._points]
        ys = [p.y for p in self._points]
        return Point2(min(xs), min(ys)), Point2(max(xs), max(ys))

    def scale(self, factor: float) -> "Shape":
        """Scale every point radially about the origin.

        Each point moves along the ray from ``origin`` through it so that its
        distance from the origin becomes ``factor`` times the original
        distance. Behaves like plain scaling about the shape itself only when
        ``origin`` is the shape's center.

        Args:
            factor: Fraction of the original distance from the origin to keep

        Returns:
            New scaled shape (center scaled the same way)
        """
        return Shape(
            [self._scale_point(p, factor) for p in self._points],
            center=self._scale_point(self.center, factor),
            origin=self.origin,
        )

    def _scale_point(self, point: Point2, factor: float) -> Point2:
        offset = point - self.origin
        direction = offset.normalize()
        return self.origin + direction.scale(factor * self.origin.distance(point))

    def translate(self, amount: Point2) -> "Shape":
        """Move every point by the same amount.

        Args:
            amount: Offset to add to each point

        Returns:
            New translated shape
        """
        return Shape(
            [p + amount for p in self._points],
            center=self.center + amount,
            origin=self.origin,
        )

    def point_closest_to_center(self) -> int:
        """Find the point closest to the shape's center.

        Returns:
            Index of the closest point; the first one wins a tie

        Raises:
            MalformedShapeError: If the shape has no points
        """
        if not self._points:
            raise MalformedShapeError(0, "find the closest point of")

        best_distance = math.inf
        best_index = -1
        for i, point in enumerate(self._points):
            dist = self.center.distance(point)
            if dist < best_distance:
                best_distance = dist
                best_index = i
        return best_index

    def angular_less(self, a: Point2, b: Point2) -> bool:
        """Whether ``a`` comes before ``b`` walking clockwise around the center.

        Points right of (or on) the vertical through the center sort before
        points left of it. Two points on that vertical sort by height: higher
        first if either is at or above the center, lower first otherwise.
        Elsewhere the sign of the cross product (center -> a) x (center -> b)
        decides. Points on the same ray from the center sort farthest first.

        Args:
            a: First point
            b: Second point

        Returns:
            True if a sorts before b
        """
        c = self.center

        if a.x - c.x >= 0 and b.x - c.x < 0:
            return True

        if a.x - c.x < 0 and b.x - c.x >= 0:
            return False

        if a.x - c.x == 0 and b.x - c.x == 0:
            if a.y - c.y >= 0 or b.y - c.y >= 0:
                return a.y > b.y
            return b.y > a.y

        det = (a.x - c.x) * (b.y - c.y) - (b.x - c.x) * (a.y - c.y)
        if det < 0:
            return True
        if det > 0:
            return False

        d1 = (a.x - c.x) * (a.x - c.x) + (a.y - c.y) * (a.y - c.y)
        d2 = (b.x - c.x) * (b.x - c.x) + (b.y - c.y) * (b.y - c.y)
        return d1 > d2

    def _angular_compare(self, a: Point2, b: Point2) -> int:
        if self.angular_less(a, b):
            return -1
        if self.angular_less(b, a):
            return 1
        return 0

    def sorted_by_angle(self) -> "Shape":
        """Reorder the points into traversal order around the center.

        Used to turn an unordered point set into a polygon. The center is
        kept as is, not recomputed.

        Returns:
            New shape with points sorted by ``angular_less``
        """
        ordered = sorted(self._points, key=cmp_to_key(self._angular_compare))
        return Shape(ordered, center=self.center, origin=self.origin)

    def is_inside(self, point: Point2, ray_extent: float | None = None) -> bool:
        """Check whether a point lies inside or on the boundary.

        Args:
            point: Point to test
            ray_extent: Optional far end of the containment ray

        Returns:
            True if the point is inside the shape. Shapes with fewer than
            3 points contain nothing.
        """
        extent = RAY_EXTENT if ray_extent is None else ray_extent
        return point_in_polygon(point, self._points, extent)

    def random_point_in_shape(
        self,
        rng: random.Random | None = None,
        max_attempts: int | None = None,
    ) -> Point2:
        """Pick a random point inside the shape.

        Samples uniformly within the bounding box until a sample is inside.
        Without ``max_attempts`` this can loop for as long as it takes.

        Args:
            rng: Random generator (module level generator if None)
            max_attempts: Optional cap on the number of samples

        Returns:
            A point for which ``is_inside`` is True

        Raises:
            MalformedShapeError: If the shape has fewer than 3 points
            GeometryError: If ``max_attempts`` samples all fell outside
        """
        if len(self._points) < 3:
            raise MalformedShapeError(len(self._points), "sample a point in")

        generator = rng if rng is not None else random
        bottom_left, top_right = self.bounds()

        attempts = 0
        while max_attempts is None or attempts < max_attempts:
            attempts += 1
            candidate = Point2(
                generator.uniform(bottom_left.x, top_right.x),
                generator.uniform(bottom_left.y, top_right.y),
            )
            if self.is_inside(candidate):
                return candidate

        raise GeometryError(f"No point inside shape found after {attempts} samples")

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        Returns:
            Positive for counter-clockwise winding, negative for clockwise,
            0.0 for degenerate shapes
        """
        n = len(self._points)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self._points[i].x * self._points[j].y
            area -= self._points[j].x * self._points[i].y
        return area / 2.0

    def area(self) -> float:
        """Unsigned enclosed area."""
        return abs(self.signed_area())
