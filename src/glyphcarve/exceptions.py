"""Exception hierarchy for Glyphcarve."""


class GlyphCarveError(Exception):
    """Base exception for all Glyphcarve errors."""

    pass


class FontError(GlyphCarveError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphNotFoundError(FontError):
    """Requested glyph or character not found in font."""

    def __init__(self, glyph_name: str) -> None:
        self.glyph_name = glyph_name
        super().__init__(f"Glyph '{glyph_name}' not found in font")


class ExportError(GlyphCarveError):
    """Error writing carved polygons to disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write mesh '{path}': {reason}")


class GeometryError(GlyphCarveError):
    """Errors in geometric calculations."""

    pass


class MalformedShapeError(GeometryError):
    """A shape has too few points for the requested operation."""

    def __init__(self, point_count: int, operation: str) -> None:
        self.point_count = point_count
        self.operation = operation
        super().__init__(
            f"Cannot {operation} a shape with {point_count} points (need at least 3)"
        )


class UnsupportedGeometryError(GeometryError):
    """Input geometry hits a degenerate case with no defined handling."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvariantViolationError(GeometryError):
    """Predicates or traversal produced an inconsistent result.

    This signals a bug in the decomposition rather than bad input, and aborts
    the decomposition in progress.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
