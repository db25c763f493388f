"""Glyph outline representation.

This module defines the flattened glyph outline handed from the font reader
to the carving pipeline.
"""

from dataclasses import dataclass, field

from glyphcarve.domain.point import Point2
from glyphcarve.domain.shape import Shape


@dataclass
class GlyphOutline:
    """Outline of a single glyph as closed polygons.

    Curves are already flattened, so every contour is a plain polygon.

    Attributes:
        name: Glyph name (e.g., "A", "T", "exclam")
        advance_width: Horizontal advance width in font units
        contours: Closed polygons forming the glyph outline
        unicode: Unicode code point (None for unencoded glyphs)
    """

    name: str
    advance_width: int
    contours: list[list[Point2]] = field(default_factory=list)
    unicode: int | None = None

    def is_empty(self) -> bool:
        """Check if the glyph has no usable outline.

        Spaces and other non-printing characters have no contours; contours
        with fewer than 3 points cannot enclose anything either.

        Returns:
            True if no contour has at least 3 points
        """
        return not any(len(contour) >= 3 for contour in self.contours)

    def to_shapes(self) -> list[Shape]:
        """Convert usable contours to shapes.

        Returns:
            One Shape per contour with at least 3 points
        """
        return [Shape(contour) for contour in self.contours if len(contour) >= 3]
