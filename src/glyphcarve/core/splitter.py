"""Splitting closed polygons at a vertical cut line.

A glyph outline may weave back and forth across the cut line several times,
so one side of the cut can hold several disjoint pieces, and a single piece
can touch the cut line along more than one stretch. The splitter handles both
by walking the boundary once per side and collecting Regions.

Where the boundary crosses the cut line it is entering or leaving the polygon's
interior along the line. Sorting the crossings by height and pairing them up
(first with second, third with fourth, ...) gives the stretches of the cut line
that lie inside the polygon. Every piece on either side closes itself along
those stretches. This pairing is the height-interval rule in another form: a
region that leaves at one crossing resumes at the next crossing whose height
falls within the stretch between that exit and its partner.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from glyphcarve.domain import Point2, Segment, Shape
from glyphcarve.exceptions import (
    InvariantViolationError,
    MalformedShapeError,
    UnsupportedGeometryError,
)


class Side(Enum):
    """Side of the vertical cut line."""

    LEFT = auto()
    RIGHT = auto()


@dataclass(frozen=True)
class _Crossing:
    """Point where the boundary edge (start, end) crosses the cut line."""

    edge: tuple[int, int]
    point: Point2


@dataclass
class _Region:
    """A piece under construction on one side of the cut line.

    Attributes:
        first: Crossing the region was opened at
        points: Accumulated points in walk order
        pending: Partner crossing the region resumes at, None while open
        lowest_y: Bottom of the cut line stretch the region resumes on
        highest_y: Top of the cut line stretch the region resumes on
        closed: True once the region has walked back to ``first``
    """

    first: _Crossing
    points: list[Point2] = field(default_factory=list)
    pending: _Crossing | None = None
    lowest_y: float = 0.0
    highest_y: float = 0.0
    closed: bool = False

    def suspend(self, exit_crossing: _Crossing, partner: _Crossing) -> None:
        self.pending = partner
        self.lowest_y = min(exit_crossing.point.y, partner.point.y)
        self.highest_y = max(exit_crossing.point.y, partner.point.y)

    def resumes_at(self, crossing: _Crossing) -> bool:
        return (
            not self.closed
            and self.pending is not None
            and self.lowest_y <= crossing.point.y <= self.highest_y
        )


class PolygonSplitter:
    """Partitions shapes at a vertical line into left and right pieces.

    The splitter is stateless; all bookkeeping is local to a ``split`` call.

    Example:
        splitter = PolygonSplitter()
        left, right = splitter.split(shape, 0.5)
    """

    def split(self, shape: Shape, vx: float) -> tuple[list[Shape], list[Shape]]:
        """Split a shape at the vertical line x = vx.

        Args:
            shape: Closed simple polygon to split
            vx: X coordinate of the cut line

        Returns:
            Tuple of (left_pieces, right_pieces). A shape that lies entirely
            on one side (touching the line counts) is returned unsplit.

        Raises:
            MalformedShapeError: If the shape has fewer than 3 points
            UnsupportedGeometryError: If a vertex lies exactly on a cut line
                that the shape crosses
        """
        if len(shape) < 3:
            raise MalformedShapeError(len(shape), "split")

        bottom_left, top_right = shape.bounds()
        if top_right.x <= vx:
            return [shape], []
        if bottom_left.x >= vx:
            return [], [shape]

        for point in shape:
            if point.x == vx:
                raise UnsupportedGeometryError(
                    f"Vertex ({point.x}, {point.y}) lies on the cut line x={vx}"
                )

        crossings = self._find_crossings(shape, vx)
        left = self.shapes_on_side(shape, vx, Side.LEFT, crossings)
        right = self.shapes_on_side(shape, vx, Side.RIGHT, crossings)
        return left, right

    def shapes_on_side(
        self,
        shape: Shape,
        vx: float,
        side: Side,
        crossings: dict[tuple[int, int], _Crossing] | None = None,
    ) -> list[Shape]:
        """Collect the pieces of a shape lying on one side of the cut line.

        The left side is walked in boundary order, the right side in reverse.
        The walk starts at the lowest point on the query side that directly
        follows a point on the other side, so output is deterministic.

        Args:
            shape: Shape to split (no vertex exactly on the line)
            vx: X coordinate of the cut line
            side: Which side to collect
            crossings: Precomputed crossings keyed by edge, computed if None

        Returns:
            One shape per piece, points in insertion order
        """
        points = shape.points
        n = len(points)
        sides = [self._side_of(p, vx) for p in points]

        order = list(range(n)) if side == Side.LEFT else list(reversed(range(n)))

        start = self._start_position(points, sides, order, side)
        if start is None:
            if all(s == side for s in sides):
                return [shape]
            return []

        if crossings is None:
            crossings = self._find_crossings(shape, vx)
        partners = self._pair_crossings(crossings)

        regions: list[_Region] = []
        current: _Region | None = None

        for step in range(n):
            position = (start + step) % n
            index = order[position]
            previous = order[position - 1]

            if sides[previous] != sides[index]:
                crossing = crossings[self._edge_key(previous, index, n)]

                if sides[index] == side:
                    current = self._enter(regions, crossing)
                else:
                    if current is None:
                        raise InvariantViolationError(
                            "Left the query side without an open region"
                        )
                    current.points.append(crossing.point)
                    self._leave(regions, current, crossing, partners[crossing.edge])
                    current = None

            if sides[index] == side:
                if current is None:
                    raise InvariantViolationError("Point on query side outside any region")
                current.points.append(points[index])

        if any(not region.closed for region in regions):
            raise InvariantViolationError(
                f"Boundary walk left {sum(not r.closed for r in regions)} region(s) open"
            )

        return [Shape(region.points, origin=shape.origin) for region in regions]

    @staticmethod
    def _side_of(point: Point2, vx: float) -> Side:
        return Side.LEFT if point.x < vx else Side.RIGHT

    @staticmethod
    def _edge_key(i: int, j: int, n: int) -> tuple[int, int]:
        """Key an edge by its forward direction so both walks agree."""
        if (i + 1) % n == j:
            return (i, j)
        return (j, i)

    def _find_crossings(self, shape: Shape, vx: float) -> dict[tuple[int, int], _Crossing]:
        points = shape.points
        n = len(points)
        bottom_left, top_right = shape.bounds()
        cut = Segment(Point2(vx, bottom_left.y - 1.0), Point2(vx, top_right.y + 1.0))

        crossings: dict[tuple[int, int], _Crossing] = {}
        for i in range(n):
            j = (i + 1) % n
            if self._side_of(points[i], vx) == self._side_of(points[j], vx):
                continue

            point = Segment(points[i], points[j]).intersection(cut)
            if point is None:
                raise InvariantViolationError(
                    f"Edge {i}->{j} changes side but does not meet the cut line"
                )
            # Pin to the cut line; the interpolated x can be off by an ulp
            crossings[(i, j)] = _Crossing(edge=(i, j), point=Point2(vx, point.y))

        if len(crossings) % 2 != 0:
            raise InvariantViolationError(f"Odd number of cut line crossings ({len(crossings)})")

        return crossings

    @staticmethod
    def _pair_crossings(
        crossings: dict[tuple[int, int], _Crossing],
    ) -> dict[tuple[int, int], _Crossing]:
        """Map each crossing to the other end of its inside stretch."""
        by_height = sorted(crossings.values(), key=lambda c: c.point.y)
        partners: dict[tuple[int, int], _Crossing] = {}
        for low, high in zip(by_height[0::2], by_height[1::2], strict=True):
            partners[low.edge] = high
            partners[high.edge] = low
        return partners

    @staticmethod
    def _start_position(
        points: tuple[Point2, ...],
        sides: list[Side],
        order: list[int],
        side: Side,
    ) -> int | None:
        best: int | None = None
        for position, index in enumerate(order):
            previous = order[position - 1]
            if sides[index] != side or sides[previous] == side:
                continue
            if best is None or points[index].y < points[order[best]].y:
                best = position
        return best

    @staticmethod
    def _enter(regions: list[_Region], crossing: _Crossing) -> _Region:
        for region in regions:
            if region.resumes_at(crossing):
                region.pending = None
                region.points.append(crossing.point)
                return region

        region = _Region(first=crossing, points=[crossing.point])
        regions.append(region)
        return region

    @staticmethod
    def _leave(
        regions: list[_Region],
        region: _Region,
        exit_crossing: _Crossing,
        partner: _Crossing,
    ) -> None:
        if partner.edge == region.first.edge:
            region.closed = True
            return

        # A region opened earlier continues this one along the cut line
        for other in regions:
            if other is not region and other.first.edge == partner.edge:
                if other.pending is None:
                    raise InvariantViolationError("Joined a region that never left the query side")
                region.points.extend(other.points)
                regions.remove(other)
                if other.pending.edge == region.first.edge:
                    region.closed = True
                else:
                    region.pending = other.pending
                    region.lowest_y = other.lowest_y
                    region.highest_y = other.highest_y
                return

        region.suspend(exit_crossing, partner)


def split_shape(shape: Shape, vx: float) -> tuple[list[Shape], list[Shape]]:
    """Split a shape at x = vx with a default splitter.

    Args:
        shape: Shape to split
        vx: X coordinate of the cut line

    Returns:
        Tuple of (left_pieces, right_pieces)
    """
    return PolygonSplitter().split(shape, vx)
