"""Unit tests for the recursive quad carver.

Boundaries use coordinates that never fall on a cell edge at any subdivision
depth, so the carved area can be checked against the exact area outside the
boundary.
"""

import pytest

from glyphcarve.config import CarveConfig
from glyphcarve.core.carver import QuadCarver, carve
from glyphcarve.domain import OutputPolygon, Point2, Shape
from glyphcarve.exceptions import InvariantViolationError, MalformedShapeError


def square(lo: float, hi: float) -> Shape:
    return Shape([Point2(lo, lo), Point2(lo, hi), Point2(hi, hi), Point2(hi, lo)])


def centroid(polygon: OutputPolygon) -> Point2:
    n = len(polygon.points)
    return Point2(
        sum(p.x for p in polygon.points) / n,
        sum(p.y for p in polygon.points) / n,
    )


def total_area(polygons: list[OutputPolygon]) -> float:
    return sum(polygon.area() for polygon in polygons)


class TestWholeCells:
    """Cells the boundary never touches."""

    def test_boundary_outside_rectangle(self):
        """Test a far away boundary leaves the rectangle as one quad."""
        polygons = carve(1.0, 1.0, square(2.3, 3.1))
        assert polygons == [OutputPolygon.quad(0.0, 0.0, 1.0, 1.0)]

    def test_boundary_covers_rectangle(self):
        """Test nothing is emitted inside the boundary."""
        assert carve(1.0, 1.0, square(-1.3, 2.1)) == []

    def test_offset_rectangle(self):
        carver = QuadCarver()
        polygons = carver.carve(2.0, 3.0, square(10.3, 11.1), x=5.0, y=-1.0)
        assert polygons == [OutputPolygon.quad(5.0, -1.0, 2.0, 3.0)]

    def test_degenerate_rectangle(self):
        assert carve(0.0, 1.0, square(0.3, 0.7)) == []


class TestClippedCells:
    """A single cell clipped by a boundary edge."""

    def test_corner_cut_off_gives_triangle(self):
        """Test a boundary leaving only the bottom-left corner."""
        boundary = Shape([Point2(-1, 1.5), Point2(1.5, -1), Point2(3, 3)])
        polygons = carve(1.0, 1.0, boundary)

        assert len(polygons) == 1
        assert polygons[0].is_triangle
        assert polygons[0].area() == pytest.approx(0.125)

    def test_corner_covered_gives_fan(self):
        """Test a boundary covering only the bottom-left corner."""
        boundary = Shape([Point2(-1, -1), Point2(-1, 1.5), Point2(1.5, -1)])
        polygons = carve(1.0, 1.0, boundary)

        assert len(polygons) == 3
        assert all(polygon.is_triangle for polygon in polygons)
        assert total_area(polygons) == pytest.approx(0.875)

    def test_fan_triangles_share_winding(self):
        boundary = Shape([Point2(-1, -1), Point2(-1, 1.5), Point2(1.5, -1)])
        signs = {polygon.signed_area() > 0 for polygon in carve(1.0, 1.0, boundary)}
        assert len(signs) == 1


class TestCarveArea:
    """Carved area matches the area outside the boundary."""

    def test_square_hole(self):
        polygons = carve(1.0, 1.0, square(0.3, 0.7))
        assert total_area(polygons) == pytest.approx(0.84, abs=1e-3)

    def test_square_hole_leaves_boundary_empty(self):
        for polygon in carve(1.0, 1.0, square(0.3, 0.7)):
            c = centroid(polygon)
            assert not (0.3 < c.x < 0.7 and 0.3 < c.y < 0.7)

    def test_every_polygon_has_three_or_four_points(self):
        for polygon in carve(1.0, 1.0, square(0.3, 0.7)):
            assert len(polygon.points) in (3, 4)

    def test_diamond_hole(self):
        """Test a boundary with slanted edges."""
        diamond = Shape(
            [Point2(0.51, 0.23), Point2(0.79, 0.52), Point2(0.49, 0.81), Point2(0.22, 0.47)]
        )
        polygons = carve(1.0, 1.0, diamond)

        assert total_area(polygons) == pytest.approx(1.0 - diamond.area(), abs=2e-3)
        for polygon in polygons:
            if polygon.area() > 1e-12:
                c = centroid(polygon)
                assert not diamond.is_inside(c) or polygon.area() < 1e-4

    def test_hole_inside_outline(self):
        """Test an inner contour carves back the area inside it."""
        outline = [square(0.2, 0.8), square(0.4, 0.6)]
        polygons = carve(1.0, 1.0, outline)
        assert total_area(polygons) == pytest.approx(1.0 - 0.36 + 0.04, abs=2e-3)

    def test_separate_pieces(self):
        pieces = [
            Shape([Point2(0.1, 0.1), Point2(0.1, 0.4), Point2(0.4, 0.4), Point2(0.4, 0.1)]),
            Shape([Point2(0.6, 0.6), Point2(0.6, 0.9), Point2(0.9, 0.9), Point2(0.9, 0.6)]),
        ]
        polygons = carve(1.0, 1.0, pieces)
        assert total_area(polygons) == pytest.approx(1.0 - 0.18, abs=2e-3)


class TestQuadCarver:
    """Configuration and bookkeeping."""

    def test_depth_limit_classifies_by_center(self):
        """Test cells at the depth limit become whole quads or nothing."""
        carver = QuadCarver(config=CarveConfig(max_depth=1))
        polygons = carver.carve(1.0, 1.0, square(0.3, 0.7))

        assert len(polygons) == 4
        assert all(not polygon.is_triangle for polygon in polygons)
        assert total_area(polygons) == pytest.approx(1.0)
        assert carver.tally.cutoffs == 4
        assert carver.tally.subdivisions == 1

    def test_deeper_limit_is_more_accurate(self):
        shallow = carve(1.0, 1.0, square(0.3, 0.7), config=CarveConfig(max_depth=3))
        deep = carve(1.0, 1.0, square(0.3, 0.7), config=CarveConfig(max_depth=9))
        assert abs(total_area(deep) - 0.84) <= abs(total_area(shallow) - 0.84)

    def test_tally(self):
        carver = QuadCarver()
        polygons = carver.carve(1.0, 1.0, square(0.3, 0.7))

        assert carver.tally.quads + carver.tally.triangles == len(polygons)
        assert carver.tally.triangles > 0
        assert carver.tally.cutoffs > 0

    def test_tally_resets_between_calls(self):
        carver = QuadCarver()
        carver.carve(1.0, 1.0, square(0.3, 0.7))
        carver.carve(1.0, 1.0, square(2.3, 3.1))
        assert carver.tally.cells == 1
        assert carver.tally.quads == 1

    def test_boundary_never_modified(self):
        boundary = square(0.3, 0.7)
        before = boundary.points
        carve(1.0, 1.0, boundary)
        assert boundary.points == before

    def test_malformed_boundary(self):
        with pytest.raises(MalformedShapeError):
            carve(1.0, 1.0, Shape([Point2(0.1, 0.1), Point2(0.2, 0.2)]))

    def test_malformed_piece_among_many(self):
        with pytest.raises(MalformedShapeError):
            carve(1.0, 1.0, [square(0.3, 0.7), Shape([])])


def shape(*coords: tuple[float, float]) -> Shape:
    return Shape([Point2(x, y) for x, y in coords])


class TestClipBranches:
    """Each way a single cell's clip points can be handled."""

    def test_four_points_split_on_diagonal(self):
        """Test a slanted edge leaving a trapezoid gives two triangles."""
        boundary = shape((0.3, -1), (0.6, 2), (3, 2), (3, -1))
        carver = QuadCarver()
        polygons = carver.carve(1.0, 1.0, boundary)

        assert len(polygons) == 2
        assert all(polygon.is_triangle for polygon in polygons)
        assert total_area(polygons) == pytest.approx(0.45)
        assert carver.tally.triangles == 2
        assert carver.tally.subdivisions == 0
        assert carver.tally.cells == 1

    def test_six_points_subdivide(self):
        """Test a boundary corner with three outside cell corners splits the cell."""
        boundary = shape((0.3, 0.3), (0.3, 2), (2, 2), (2, 0.3))
        carver = QuadCarver(config=CarveConfig(max_depth=1))
        polygons = carver.carve(1.0, 1.0, boundary)

        # Bottom-left quarter is cut off whole; its two neighbours are strips
        assert total_area(polygons) == pytest.approx(0.25 + 0.15 + 0.15)
        assert carver.tally.subdivisions == 1
        assert carver.tally.cutoffs == 1
        assert carver.tally.quads == 1
        assert carver.tally.triangles == 4
        assert carver.tally.cells == 5

    def test_six_points_converge_with_depth(self):
        boundary = shape((0.3, 0.3), (0.3, 2), (2, 2), (2, 0.3))
        polygons = carve(1.0, 1.0, boundary)
        assert total_area(polygons) == pytest.approx(0.51, abs=1e-3)

    def test_spike_with_seven_points(self):
        """Test a thin spike poking into the cell from the left."""
        boundary = shape((-1, 0.4), (0.55, 0.53), (-1, 0.6))
        carver = QuadCarver()
        polygons = carver.carve(1.0, 1.0, boundary)

        spike = 0.2 * 0.55**2 / (2 * 1.55)
        assert total_area(polygons) == pytest.approx(1.0 - spike, abs=1e-3)
        assert carver.tally.subdivisions >= 1
        assert carver.tally.quads + carver.tally.triangles == len(polygons)

    def test_boundary_touching_side(self):
        """Test a notch tip resting on the bottom side is a touch."""
        boundary = shape(
            (-1, -1), (-1, 2), (2, 2), (2, -1), (0.7, -1), (0.5, 0), (0.3, -1)
        )
        carver = QuadCarver()

        assert carver.carve(1.0, 1.0, boundary) == []
        assert carver.tally.touches == 1
        assert carver.tally.subdivisions == 0

    def test_inconsistent_ring_is_rejected(self):
        """Test a clip ring that sorts into a self-crossing order is subdivided."""
        boundary = shape((-1, 0.5), (0.9, 0.05), (2, 0.5), (2, 2), (-1, 2))
        carver = QuadCarver()
        polygons = carver.carve(1.0, 1.0, boundary)

        assert carver.tally.rejected > 0
        assert carver.tally.subdivisions > 0
        assert total_area(polygons) == pytest.approx(0.14797, abs=1e-3)

    def test_rejected_cells_never_cover_boundary(self):
        boundary = shape((-1, 0.5), (0.9, 0.05), (2, 0.5), (2, 2), (-1, 2))
        for polygon in carve(1.0, 1.0, boundary):
            if polygon.area() > 1e-6:
                assert not boundary.is_inside(centroid(polygon))

    def test_interior_point_without_clip_raises(self):
        """Test a slit whose two crossings merge leaves too few clip points."""
        boundary = shape(
            (-1, -1),
            (-1, 2),
            (2, 2),
            (2, 0.500000000001),
            (0.5, 0.5),
            (2, 0.5),
            (2, -1),
        )
        with pytest.raises(InvariantViolationError, match="only 2 clip points"):
            carve(1.0, 1.0, boundary)
