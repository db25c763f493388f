"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class for loading font files and
extracting flattened glyph outlines.
"""

from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from glyphcarve.domain import GlyphOutline
from glyphcarve.exceptions import FontLoadError, GlyphNotFoundError
from glyphcarve.io.converter import fonttools_glyph_to_outline


class FontReader:
    """Loads TTF/OTF fonts and extracts glyph outlines.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            outline = reader.outline_for_char("A")
            print(outline.name, len(outline.contours))
    """

    def __init__(self, font_path: Path, flatten_tolerance: float = 1.0) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
            flatten_tolerance: Curve flattening tolerance in font units
        """
        self._font_path = font_path
        self._flatten_tolerance = flatten_tolerance
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontLoadError: If the file is missing or is not a font
        """
        if not self._font_path.exists():
            raise FontLoadError(str(self._font_path), "file not found")

        try:
            self._font = TTFont(str(self._font_path))
        except (TTLibError, OSError, AssertionError) as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    def glyph_name_for_char(self, char: str) -> str:
        """Map a character to its glyph name through the best cmap.

        Args:
            char: Single character

        Returns:
            Glyph name

        Raises:
            GlyphNotFoundError: If the font does not map the character
            RuntimeError: If font has not been loaded yet
        """
        cmap = self._require_font().getBestCmap() or {}
        name = cmap.get(ord(char))
        if name is None:
            raise GlyphNotFoundError(char)
        return name

    def get_outline(self, name: str) -> GlyphOutline:
        """Get a glyph's flattened outline by glyph name.

        Args:
            name: Name of the glyph to retrieve

        Returns:
            GlyphOutline (possibly with no contours, e.g. for a space)

        Raises:
            GlyphNotFoundError: If the glyph is not in the font
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()

        glyph_set = font.getGlyphSet()
        if name not in glyph_set:
            raise GlyphNotFoundError(name)

        return fonttools_glyph_to_outline(
            name=name,
            fonttools_glyph=glyph_set[name],
            font=font,
            tolerance=self._flatten_tolerance,
        )

    def outline_for_char(self, char: str) -> GlyphOutline:
        """Get the flattened outline of the glyph a character maps to.

        Args:
            char: Single character

        Returns:
            GlyphOutline for the mapped glyph

        Raises:
            GlyphNotFoundError: If the font does not map the character
        """
        return self.get_outline(self.glyph_name_for_char(char))

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
