"""Recursive quad carving.

This module approximates the area surrounding a boundary with polygons. A
rectangle is tested against the boundary as a whole and, when the boundary
passes through it in a way that cannot be described by one small polygon,
split into four equal cells which are tested the same way.

Per cell:
1. Two or more boundary points strictly inside: subdivide
2. More than two boundary crossings on the cell sides: subdivide
3. No boundary contact: the cell is wholly inside or outside, outside cells
   are emitted as a quad
4. Otherwise the part of the cell outside the boundary (crossings, the
   interior point and the corners outside) is sorted around its centroid and
   turned into triangles, or subdivided when it has 6 or more corners or
   the sorted ring does not follow the cell sides and boundary edges

Cells at the depth limit that would subdivide are classified by their center.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from glyphcarve.config import CarveConfig, GeometryConfig
from glyphcarve.domain.predicates import nearest_point_on_segment
from glyphcarve.domain import OutputPolygon, Point2, Segment, Shape
from glyphcarve.exceptions import InvariantViolationError, MalformedShapeError

logger = structlog.get_logger("glyphcarve.carver")


@dataclass
class CarveTally:
    """Counters collected during one carve call.

    Attributes:
        cells: Cells examined
        subdivisions: Cells split into four
        quads: Whole cells emitted
        triangles: Triangles emitted from clipped cells
        cutoffs: Cells classified by their center at the depth or size limit
        touches: Cells the boundary only touched, classified by their center
        rejected: Clip rings that did not trace the outside region
    """

    cells: int = 0
    subdivisions: int = 0
    quads: int = 0
    triangles: int = 0
    cutoffs: int = 0
    touches: int = 0
    rejected: int = 0


class _Boundary:
    """The boundary being carved around, possibly made of several pieces.

    Containment is even-odd across the pieces so a hole inside an outline
    stays a hole.
    """

    def __init__(self, shapes: Sequence[Shape], ray_extent: float) -> None:
        self.shapes = list(shapes)
        self.ray_extent = ray_extent
        self.points: list[Point2] = [p for shape in self.shapes for p in shape]
        self.edges: list[tuple[Segment, float, float, float, float]] = []
        for shape in self.shapes:
            for edge in shape.edges():
                self.edges.append(
                    (
                        edge,
                        min(edge.p1.x, edge.p2.x),
                        min(edge.p1.y, edge.p2.y),
                        max(edge.p1.x, edge.p2.x),
                        max(edge.p1.y, edge.p2.y),
                    )
                )

    def contains(self, point: Point2) -> bool:
        inside_count = sum(1 for shape in self.shapes if shape.is_inside(point, self.ray_extent))
        return inside_count % 2 == 1


class QuadCarver:
    """Decomposes a rectangle minus a boundary into triangles and quads.

    The carver never modifies the boundary; only the cell under test shrinks
    as the recursion goes deeper.

    Example:
        carver = QuadCarver()
        polygons = carver.carve(10.0, 10.0, glyph_shape)
    """

    def __init__(
        self,
        config: CarveConfig | None = None,
        geometry: GeometryConfig | None = None,
    ) -> None:
        """Initialize the carver.

        Args:
            config: Recursion limits (defaults if None)
            geometry: Predicate tolerances (defaults if None)
        """
        self.config = config or CarveConfig()
        self.geometry = geometry or GeometryConfig()
        self.tally = CarveTally()

    def carve(
        self,
        width: float,
        height: float,
        boundary: Shape | Sequence[Shape],
        x: float = 0.0,
        y: float = 0.0,
    ) -> list[OutputPolygon]:
        """Carve the rectangle (x, y, width, height) around a boundary.

        Args:
            width: Rectangle width
            height: Rectangle height
            boundary: Boundary shape, or several pieces treated together
            x: Left edge of the rectangle
            y: Bottom edge of the rectangle

        Returns:
            Triangles and quads covering the part of the rectangle outside
            the boundary

        Raises:
            MalformedShapeError: If a boundary piece has fewer than 3 points
            InvariantViolationError: If a cell produces an impossible clip
        """
        shapes = [boundary] if isinstance(boundary, Shape) else list(boundary)
        for shape in shapes:
            if len(shape) < 3:
                raise MalformedShapeError(len(shape), "carve around")

        self.tally = CarveTally()
        output: list[OutputPolygon] = []

        if width <= 0 or height <= 0:
            return output

        bounds = _Boundary(shapes, self.geometry.ray_extent)
        self._sub_carve(bounds, x, y, width, height, 0, output)

        logger.debug(
            "Carve complete",
            width=width,
            height=height,
            pieces=len(shapes),
            cells=self.tally.cells,
            subdivisions=self.tally.subdivisions,
            quads=self.tally.quads,
            triangles=self.tally.triangles,
            cutoffs=self.tally.cutoffs,
        )
        return output

    def _sub_divide(
        self,
        bounds: _Boundary,
        x: float,
        y: float,
        width: float,
        height: float,
        depth: int,
        output: list[OutputPolygon],
    ) -> None:
        """Carve the four quarters of a cell, or classify it at the limit."""
        half_w = width / 2
        half_h = height / 2

        if depth >= self.config.max_depth or min(half_w, half_h) < self.config.min_cell_size:
            self.tally.cutoffs += 1
            self._classify_whole(bounds, x, y, width, height, output)
            return

        self.tally.subdivisions += 1
        self._sub_carve(bounds, x, y, half_w, half_h, depth + 1, output)
        self._sub_carve(bounds, x + half_w, y, half_w, half_h, depth + 1, output)
        self._sub_carve(bounds, x, y + half_h, half_w, half_h, depth + 1, output)
        self._sub_carve(bounds, x + half_w, y + half_h, half_w, half_h, depth + 1, output)

    def _sub_carve(
        self,
        bounds: _Boundary,
        x: float,
        y: float,
        width: float,
        height: float,
        depth: int,
        output: list[OutputPolygon],
    ) -> None:
        """Carve a single cell."""
        self.tally.cells += 1

        interior = self._interior_points(bounds, x, y, width, height)
        if len(interior) >= 2:
            self._sub_divide(bounds, x, y, width, height, depth, output)
            return

        intersections = self._cell_intersections(bounds, x, y, width, height)
        if intersections is None:
            self._sub_divide(bounds, x, y, width, height, depth, output)
            return

        if not interior and not intersections:
            self._classify_whole(bounds, x, y, width, height, output)
            return

        work = list(interior) + intersections
        for corner in (
            Point2(x, y),
            Point2(x, y + height),
            Point2(x + width, y + height),
            Point2(x + width, y),
        ):
            if not bounds.contains(corner):
                work.append(corner)

        if len(work) < 3:
            if interior:
                raise InvariantViolationError(
                    f"Cell ({x}, {y}, {width}, {height}) holds a boundary point "
                    f"but only {len(work)} clip points"
                )
            # Boundary only grazes the cell
            self.tally.touches += 1
            self._classify_whole(bounds, x, y, width, height, output)
            return

        if len(work) >= 6:
            self._sub_divide(bounds, x, y, width, height, depth, output)
            return

        ring = Shape(work).sorted_by_angle()
        triangles = self._triangulate(ring)
        if not self._clip_is_consistent(bounds, ring, triangles, x, y, width, height):
            self.tally.rejected += 1
            self._sub_divide(bounds, x, y, width, height, depth, output)
            return

        self.tally.triangles += len(triangles)
        output.extend(triangles)

    @staticmethod
    def _interior_points(
        bounds: _Boundary,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> list[Point2]:
        found: list[Point2] = []
        for point in bounds.points:
            if x < point.x < x + width and y < point.y < y + height:
                found.append(point)
                if len(found) >= 2:
                    break
        return found

    def _cell_intersections(
        self,
        bounds: _Boundary,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> list[Point2] | None:
        """Find where the boundary crosses the cell sides.

        Returns:
            Distinct crossing points, or None as soon as there are more than 2
        """
        right = x + width
        top = y + height
        sides = (
            Segment(Point2(x, y), Point2(right, y)),
            Segment(Point2(x, y), Point2(x, top)),
            Segment(Point2(right, y), Point2(right, top)),
            Segment(Point2(x, top), Point2(right, top)),
        )
        tolerance = self.geometry.merge_distance(max(width, height))

        found: list[Point2] = []
        for edge, min_x, min_y, max_x, max_y in bounds.edges:
            if max_x < x or min_x > right or max_y < y or min_y > top:
                continue
            for side in sides:
                point = edge.intersection(side)
                if point is None:
                    continue
                if any(point.distance(other) <= tolerance for other in found):
                    continue
                found.append(point)
                if len(found) > 2:
                    return None
        return found

    def _clip_is_consistent(
        self,
        bounds: _Boundary,
        ring: Shape,
        triangles: list[OutputPolygon],
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> bool:
        """Check that a sorted clip ring traces the part of the cell outside.

        Sorting around the centroid only recovers the traversal order when the
        clipped region is star shaped from there. Every ring edge has to run
        along a cell side or a boundary edge, and the fan triangles have to
        share one winding.
        """
        tolerance = self.geometry.merge_distance(max(width, height))
        right = x + width
        top = y + height

        points = ring.points
        n = len(points)
        for i in range(n):
            a = points[i]
            b = points[(i + 1) % n]
            if _on_common_side(a, b, (x, y, right, top), tolerance):
                continue
            if not any(
                nearest_point_on_segment(a, edge)[1] <= tolerance
                and nearest_point_on_segment(b, edge)[1] <= tolerance
                for edge, min_x, min_y, max_x, max_y in bounds.edges
                if min_x - tolerance <= min(a.x, b.x)
                and max(a.x, b.x) <= max_x + tolerance
                and min_y - tolerance <= min(a.y, b.y)
                and max(a.y, b.y) <= max_y + tolerance
            ):
                return False

        windings = {
            polygon.signed_area() > 0
            for polygon in triangles
            if abs(polygon.signed_area()) > tolerance * tolerance
        }
        return len(windings) <= 1

    def _classify_whole(
        self,
        bounds: _Boundary,
        x: float,
        y: float,
        width: float,
        height: float,
        output: list[OutputPolygon],
    ) -> None:
        if not bounds.contains(Point2(x + width / 2, y + height / 2)):
            self.tally.quads += 1
            output.append(OutputPolygon.quad(x, y, width, height))

    @staticmethod
    def _triangulate(ring: Shape) -> list[OutputPolygon]:
        """Turn 3 to 5 angularly sorted points into triangles."""
        p = ring.points

        if len(p) == 3:
            return [OutputPolygon.triangle(p[0], p[1], p[2])]

        if len(p) == 4:
            return [
                OutputPolygon.triangle(p[0], p[1], p[2]),
                OutputPolygon.triangle(p[0], p[2], p[3]),
            ]

        if len(p) == 5:
            pivot = ring.point_closest_to_center()
            return [
                OutputPolygon.triangle(p[pivot], p[(pivot + k) % 5], p[(pivot + k + 1) % 5])
                for k in range(1, 4)
            ]

        raise InvariantViolationError(f"Cannot triangulate {len(p)} clip points")


def _on_common_side(
    a: Point2,
    b: Point2,
    cell: tuple[float, float, float, float],
    tolerance: float,
) -> bool:
    left, bottom, right, top = cell
    return (
        (abs(a.x - left) <= tolerance and abs(b.x - left) <= tolerance)
        or (abs(a.x - right) <= tolerance and abs(b.x - right) <= tolerance)
        or (abs(a.y - bottom) <= tolerance and abs(b.y - bottom) <= tolerance)
        or (abs(a.y - top) <= tolerance and abs(b.y - top) <= tolerance)
    )


def carve(
    width: float,
    height: float,
    boundary: Shape | Sequence[Shape],
    config: CarveConfig | None = None,
) -> list[OutputPolygon]:
    """Carve the rectangle (0, 0, width, height) around a boundary.

    Args:
        width: Rectangle width
        height: Rectangle height
        boundary: Boundary shape or pieces
        config: Recursion limits (defaults if None)

    Returns:
        Triangles and quads covering the rectangle outside the boundary
    """
    return QuadCarver(config=config).carve(width, height, boundary)
