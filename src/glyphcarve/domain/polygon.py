"""Output polygons produced by the carver."""

from dataclasses import dataclass

from glyphcarve.domain.point import Point2
from glyphcarve.exceptions import MalformedShapeError


@dataclass(frozen=True, slots=True)
class OutputPolygon:
    """A flat triangle or quad, the terminal artifact of carving.

    Attributes:
        points: 3 or 4 corner points in traversal order
    """

    points: tuple[Point2, ...]

    def __post_init__(self) -> None:
        if len(self.points) not in (3, 4):
            raise MalformedShapeError(len(self.points), "emit")

    @classmethod
    def triangle(cls, a: Point2, b: Point2, c: Point2) -> "OutputPolygon":
        """Build a triangle."""
        return cls((a, b, c))

    @classmethod
    def quad(cls, x: float, y: float, width: float, height: float) -> "OutputPolygon":
        """Build the quad covering an axis aligned rectangle.

        Corners run bottom-left, top-left, top-right, bottom-right.
        """
        return cls(
            (
                Point2(x, y),
                Point2(x, y + height),
                Point2(x + width, y + height),
                Point2(x + width, y),
            )
        )

    @property
    def is_triangle(self) -> bool:
        return len(self.points) == 3

    def signed_area(self) -> float:
        """Shoelace area, positive for counter-clockwise corners."""
        n = len(self.points)
        total = 0.0
        for i in range(n):
            j = (i + 1) % n
            total += self.points[i].x * self.points[j].y
            total -= self.points[j].x * self.points[i].y
        return total / 2.0

    def area(self) -> float:
        return abs(self.signed_area())

    def translate(self, amount: Point2) -> "OutputPolygon":
        """Move every corner by the same amount."""
        return OutputPolygon(tuple(p + amount for p in self.points))

    def embed(self, elevation: float = 0.0) -> list[tuple[float, float, float]]:
        """Place the polygon in 3D space.

        The plane's x axis maps to x, its y axis maps to z and every vertex
        sits at height ``elevation``.

        Args:
            elevation: Value of the y axis for all vertices

        Returns:
            List of (x, y, z) vertex tuples
        """
        return [(p.x, elevation, p.y) for p in self.points]
