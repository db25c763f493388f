"""Converters from fonttools outlines to domain models.

Glyph outlines are recorded with a RecordingPen and flattened into plain
polygons: quadratic and cubic segments are replaced by polylines within the
configured tolerance, so nothing downstream ever sees a curve.
"""

from typing import Any

from fontTools.pens.basePen import decomposeQuadraticSegment, decomposeSuperBezierSegment
from fontTools.pens.recordingPen import RecordingPen
from fontTools.ttLib import TTFont

from glyphcarve.core._bezier import flatten_cubic, flatten_quadratic
from glyphcarve.domain import GlyphOutline, Point2


def fonttools_glyph_to_outline(
    name: str,
    fonttools_glyph: Any,
    font: TTFont,
    tolerance: float = 1.0,
) -> GlyphOutline:
    """Convert a fonttools glyph to a flattened GlyphOutline.

    Handles both TrueType (quadratic curves) and OpenType/CFF (cubic curves).
    Composite glyphs are drawn through the glyph set, so their components
    arrive already resolved.

    Args:
        name: Name of the glyph
        fonttools_glyph: The fonttools glyph object from a GlyphSet
        font: The TTFont object for accessing metrics
        tolerance: Curve flattening tolerance in font units

    Returns:
        GlyphOutline with one polygon per contour
    """
    pen = RecordingPen()
    fonttools_glyph.draw(pen)

    contours = recording_to_contours(pen.value, tolerance)

    advance_width = 0
    hmtx = font.get("hmtx")
    if hmtx and name in hmtx.metrics:
        advance_width, _lsb = hmtx.metrics[name]

    unicode_value = None
    cmap = font.getBestCmap()
    if cmap:
        for code_point, glyph_name in cmap.items():
            if glyph_name == name:
                unicode_value = code_point
                break

    return GlyphOutline(
        name=name,
        advance_width=advance_width,
        contours=contours,
        unicode=unicode_value,
    )


def recording_to_contours(
    recording: list[tuple[str, tuple[Any, ...]]],
    tolerance: float = 1.0,
) -> list[list[Point2]]:
    """Convert a RecordingPen recording to flattened contours.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), ..., (xn, yn)))  # last point None if all off-curve
    - ('curveTo', ((x1, y1), (x2, y2), (x3, y3)))
    - ('closePath', ()) / ('endPath', ())

    Args:
        recording: Drawing commands from a RecordingPen
        tolerance: Curve flattening tolerance

    Returns:
        List of contours, each a list of points without a repeated closing point
    """
    contours: list[list[Point2]] = []
    current: list[Point2] = []

    for command, args in recording:
        if command == "moveTo":
            _finish(contours, current)
            current = [Point2(*args[0])]

        elif command == "lineTo":
            current.append(Point2(*args[0]))

        elif command == "qCurveTo":
            _append_quadratic(current, args, tolerance)

        elif command == "curveTo":
            _append_cubic(current, args, tolerance)

        elif command in ("closePath", "endPath"):
            _finish(contours, current)
            current = []

    _finish(contours, current)
    return contours


def _append_quadratic(
    current: list[Point2],
    args: tuple[Any, ...],
    tolerance: float,
) -> None:
    if args[-1] is None:
        # TrueType contour with no on-curve points: starts between the last
        # and first control points
        controls = list(args[:-1])
        start = (
            (controls[-1][0] + controls[0][0]) / 2,
            (controls[-1][1] + controls[0][1]) / 2,
        )
        current.append(Point2(*start))
        args = (*controls, start)

    segments = decomposeQuadraticSegment(args) if len(args) > 1 else [(None, args[0])]
    for control, end in segments:
        start_point = current[-1]
        end_point = Point2(*end)
        if control is None:
            current.append(end_point)
            continue
        flat = flatten_quadratic(start_point, Point2(*control), end_point, tolerance)
        current.extend(flat[1:])


def _append_cubic(
    current: list[Point2],
    args: tuple[Any, ...],
    tolerance: float,
) -> None:
    segments = [args] if len(args) == 3 else decomposeSuperBezierSegment(args)
    for c1, c2, end in segments:
        flat = flatten_cubic(current[-1], Point2(*c1), Point2(*c2), Point2(*end), tolerance)
        current.extend(flat[1:])


def _finish(contours: list[list[Point2]], points: list[Point2]) -> None:
    """Clean up a finished contour and keep it if it is non-empty."""
    cleaned: list[Point2] = []
    for point in points:
        if not cleaned or cleaned[-1] != point:
            cleaned.append(point)

    while len(cleaned) > 1 and cleaned[-1] == cleaned[0]:
        cleaned.pop()

    if cleaned:
        contours.append(cleaned)
