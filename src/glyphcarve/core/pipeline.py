"""Text carving pipeline.

This module coordinates the full workflow for a text string:

1. Load the font and look up each character's glyph outline
2. Scale the outline into model units
3. Split it at its horizontal midpoint into left and right pieces
4. Carve each half of the glyph's bounding box around its pieces
5. Shift the polygons to the glyph's position in the line
6. Place the polygons in 3D: tilted on the floor, or wrapped around a ring
7. Write every face to an OBJ mesh

Key components:
- CarveResult: Polygons produced for one character
- TextCarver: Main orchestrator class
"""

import time
import traceback
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from glyphcarve.config import GlyphCarveSettings, get_default_settings
from glyphcarve.core.carver import QuadCarver
from glyphcarve.core.ring import RingBuilder
from glyphcarve.core.splitter import PolygonSplitter
from glyphcarve.domain import GlyphOutline, Mesh, MeshFace, OutputPolygon, Point2, Shape
from glyphcarve.exceptions import GlyphCarveError, UnsupportedGeometryError
from glyphcarve.io import FontReader, ObjWriter, get_output_path
from glyphcarve.utils import CarveLogger, CarveStats


@dataclass
class CarveResult:
    """Polygons produced for a single character.

    Attributes:
        char: The character carved
        glyph_name: Glyph the character maps to
        polygons: Carved polygons, already placed in the line
        split: False if the glyph was carved without splitting
        advance: Horizontal distance to the next glyph (model units)
        offset: Horizontal position of the glyph in the line (model units)
    """

    char: str
    glyph_name: str
    polygons: list[OutputPolygon] = field(default_factory=list)
    split: bool = True
    advance: float = 0.0
    offset: float = 0.0


class TextCarver:
    """Carves the glyphs of a text string into flat polygons.

    Example:
        carver = TextCarver(GlyphCarveSettings())
        stats = carver.process(
            font_path=Path("font.ttf"),
            text="Hello",
            output_path=Path("hello.obj"),
        )
    """

    def __init__(
        self,
        settings: GlyphCarveSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Application settings (defaults if None)
            logger: Logger to report to (the package logger if None)
        """
        self.settings = settings or get_default_settings()
        self.logger = logger or structlog.get_logger("glyphcarve")
        self.carve_logger = CarveLogger(self.logger)
        self.splitter = PolygonSplitter()
        self.carver = QuadCarver(config=self.settings.carve, geometry=self.settings.geometry)

    @property
    def stats(self) -> CarveStats:
        return self.carve_logger.stats

    def carve_glyph(self, outline: GlyphOutline, offset_x: float = 0.0) -> CarveResult:
        """Carve one glyph outline.

        The carved area is the glyph's bounding box grown by the layout
        margin. With splitting enabled each half of the box is carved around
        the pieces on its side of the midpoint, and the margin is left off the
        side facing the cut so the halves meet exactly.

        Args:
            outline: Flattened glyph outline in font units
            offset_x: Horizontal position of the glyph in the line

        Returns:
            CarveResult with polygons translated by ``offset_x``

        Raises:
            GeometryError: If the outline cannot be carved
        """
        layout = self.settings.layout
        result = CarveResult(
            char=chr(outline.unicode) if outline.unicode is not None else "",
            glyph_name=outline.name,
            advance=outline.advance_width * layout.scale + layout.letter_spacing,
            offset=offset_x,
        )

        shapes = [shape.scale(layout.scale) for shape in outline.to_shapes()]
        if not shapes:
            return result

        min_x, min_y, max_x, max_y = _combined_bounds(shapes)
        bottom = min_y - layout.margin
        height = (max_y + layout.margin) - bottom

        polygons: list[OutputPolygon] | None = None
        if layout.split:
            cut_x = (min_x + max_x) / 2
            try:
                left, right = self._split_all(shapes, cut_x)
            except UnsupportedGeometryError as e:
                self.carve_logger.log_split_fallback(outline.name, str(e))
                result.split = False
            else:
                self.carve_logger.log_split(outline.name, len(left), len(right))
                left_x = min_x - layout.margin
                polygons = self.carver.carve(cut_x - left_x, height, left, x=left_x, y=bottom)
                polygons += self.carver.carve(
                    max_x + layout.margin - cut_x, height, right, x=cut_x, y=bottom
                )
        else:
            result.split = False

        if polygons is None:
            left_x = min_x - layout.margin
            polygons = self.carver.carve(
                max_x + layout.margin - left_x, height, shapes, x=left_x, y=bottom
            )

        if offset_x:
            shift = Point2(offset_x, 0.0)
            polygons = [polygon.translate(shift) for polygon in polygons]

        result.polygons = polygons
        return result

    def place(self, results: list[CarveResult]) -> list[MeshFace]:
        """Place carved polygons in 3D.

        With the ring enabled the ring itself is built and all polygons are
        wrapped around its outer wall. Otherwise every glyph lies flat at the
        layout elevation, rotated by the layout tilt about the z axis through
        its position in the line.

        Args:
            results: Carved characters in line order

        Returns:
            Faces ready to be written
        """
        layout = self.settings.layout

        if self.settings.ring.enabled:
            ring = RingBuilder(self.settings.ring)
            polygons = [polygon for result in results for polygon in result.polygons]
            faces = ring.build()
            self.logger.info("Ring built", faces=len(faces), sides=self.settings.ring.sides)
            return faces + ring.wrap(polygons)

        mesh = Mesh()
        for result in results:
            glyph = Mesh.from_polygons(result.polygons, layout.elevation)
            if layout.tilt:
                glyph = glyph.rotate(layout.tilt, pivot=(result.offset, layout.elevation, 0.0))
            mesh = mesh.merge(glyph)
        return mesh.faces

    def _split_all(
        self, shapes: list[Shape], cut_x: float
    ) -> tuple[list[Shape], list[Shape]]:
        left: list[Shape] = []
        right: list[Shape] = []
        for shape in shapes:
            left_pieces, right_pieces = self.splitter.split(shape, cut_x)
            left.extend(left_pieces)
            right.extend(right_pieces)
        return left, right

    def carve_text(
        self,
        reader: FontReader,
        text: str,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> list[CarveResult]:
        """Carve every character of a text string, laid out left to right.

        Characters the font does not map and glyphs that fail to carve are
        logged and counted; the remaining characters are still carved.

        Args:
            reader: Loaded font reader
            text: Characters to carve
            progress_callback: Optional callback(completed, total, char, success)

        Returns:
            One CarveResult per successfully carved character
        """
        results: list[CarveResult] = []
        cursor = 0.0
        total = len(text)

        for position, char in enumerate(text, start=1):
            start_time = time.time()
            name = char
            success = False

            try:
                outline = reader.outline_for_char(char)
                name = outline.name
                self.carve_logger.log_glyph_start(char, name)

                if outline.is_empty():
                    self.carve_logger.log_glyph_skipped(name, "empty glyph")
                    cursor += outline.advance_width * self.settings.layout.scale
                    success = True
                else:
                    result = self.carve_glyph(outline, offset_x=cursor)
                    result.char = char
                    cursor += result.advance
                    results.append(result)
                    duration_ms = (time.time() - start_time) * 1000
                    self.carve_logger.log_glyph_complete(name, len(result.polygons), duration_ms)
                    success = True

            except GlyphCarveError as e:
                self.carve_logger.log_glyph_error(name, e, traceback.format_exc())

            if progress_callback:
                progress_callback(position, total, char, success)

        return results

    def process(
        self,
        font_path: Path,
        text: str,
        output_path: Path | None = None,
        dry_run: bool = False,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> CarveStats:
        """Carve a text string with a font and write the mesh.

        Args:
            font_path: Path to input font file (TTF or OTF)
            text: Characters to carve
            output_path: Path for the OBJ mesh (derived from the text if None)
            dry_run: Carve but do not write the mesh
            progress_callback: Optional callback(completed, total, char, success)

        Returns:
            CarveStats with counts, timing, and error details

        Raises:
            FontLoadError: If the font cannot be loaded
            ExportError: If the mesh cannot be written
        """
        stats = self.carve_logger.stats
        stats.start_time = time.time()

        if output_path is None:
            output_path = get_output_path(text)

        self.logger.info(
            "Starting text carving",
            font=str(font_path),
            text=text,
            output=str(output_path),
            dry_run=dry_run,
        )

        reader = FontReader(
            font_path,
            flatten_tolerance=self.settings.geometry.bezier_flatten_tolerance,
        )
        reader.load()

        try:
            self.logger.info("Font loaded", upm=reader.units_per_em)
            results = self.carve_text(reader, text, progress_callback)
        finally:
            reader.close()

        if not dry_run:
            writer = ObjWriter(output_path, elevation=self.settings.layout.elevation)
            writer.add_faces(self.place(results))
            writer.write()

        stats.end_time = time.time()

        self.logger.info(
            "Carving complete",
            carved=stats.carved_count,
            skipped=stats.skipped_count,
            unsplit=stats.unsplit_count,
            errors=stats.error_count,
            polygons=stats.polygons_emitted,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats


def _combined_bounds(shapes: list[Shape]) -> tuple[float, float, float, float]:
    """Bounding box of several shapes as (min_x, min_y, max_x, max_y)."""
    corners = [shape.bounds() for shape in shapes]
    return (
        min(low.x for low, _ in corners),
        min(low.y for low, _ in corners),
        max(high.x for _, high in corners),
        max(high.y for _, high in corners),
    )
