"""Two dimensional point values.

Point2 is the only coordinate type the decomposition engine works with.
Arithmetic always produces new values; points are never mutated.
"""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point2:
    """An immutable point (or vector) in the plane.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def __add__(self, other: "Point2") -> "Point2":
        return Point2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point2") -> "Point2":
        return Point2(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> "Point2":
        """Multiply both axes by a factor.

        Args:
            factor: Scale factor

        Returns:
            Scaled point
        """
        return Point2(self.x * factor, self.y * factor)

    def length(self) -> float:
        """Euclidean length when treated as a vector."""
        return math.hypot(self.x, self.y)

    def normalize(self) -> "Point2":
        """Unit vector in the same direction.

        The zero vector has no direction and is returned unchanged.

        Returns:
            Normalized vector
        """
        length = self.length()
        if length == 0:
            return self
        return Point2(self.x / length, self.y / length)

    def distance(self, other: "Point2") -> float:
        """Euclidean distance between two points."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point2":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"])
