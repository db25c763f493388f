"""Unit tests for the font and mesh I/O layer.

Tests for FontReader, ObjWriter, and converter functions.
"""

from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest

from glyphcarve.domain import MeshFace, OutputPolygon, Point2
from glyphcarve.exceptions import ExportError, FontLoadError, GlyphNotFoundError
from glyphcarve.io.converter import fonttools_glyph_to_outline, recording_to_contours
from glyphcarve.io.reader import FontReader
from glyphcarve.io.writer import OBJ_HEADER, ObjWriter, get_output_path


class _SquareGlyph:
    """Stand-in for a glyph set entry that draws a 100 unit square."""

    def draw(self, pen):
        pen.moveTo((0, 0))
        pen.lineTo((0, 100))
        pen.lineTo((100, 100))
        pen.lineTo((100, 0))
        pen.closePath()


def _mock_font(cmap=None, glyphs=None, metrics=None):
    font = MagicMock()
    font.getBestCmap.return_value = cmap if cmap is not None else {}
    font.getGlyphSet.return_value = glyphs if glyphs is not None else {}
    font.get.return_value = Mock(metrics=metrics or {})
    return font


class TestRecordingToContours:
    """Tests for recording_to_contours()."""

    def test_straight_contour(self):
        """Test a closed square keeps its four corners."""
        recording = [
            ("moveTo", ((0, 0),)),
            ("lineTo", ((0, 10),)),
            ("lineTo", ((10, 10),)),
            ("lineTo", ((10, 0),)),
            ("closePath", ()),
        ]
        contours = recording_to_contours(recording)

        assert len(contours) == 1
        assert contours[0] == [Point2(0, 0), Point2(0, 10), Point2(10, 10), Point2(10, 0)]

    def test_repeated_points_dropped(self):
        """Test duplicate and closing points are removed."""
        recording = [
            ("moveTo", ((0, 0),)),
            ("lineTo", ((0, 10),)),
            ("lineTo", ((0, 10),)),
            ("lineTo", ((10, 0),)),
            ("lineTo", ((0, 0),)),
            ("closePath", ()),
        ]
        contours = recording_to_contours(recording)
        assert contours == [[Point2(0, 0), Point2(0, 10), Point2(10, 0)]]

    def test_quadratic_flattened(self):
        recording = [
            ("moveTo", ((0, 0),)),
            ("qCurveTo", ((50, 100), (100, 0))),
            ("closePath", ()),
        ]
        contour = recording_to_contours(recording, tolerance=1.0)[0]

        assert contour[0] == Point2(0, 0)
        assert contour[-1] == Point2(100, 0)
        assert len(contour) > 3
        assert all(0 <= p.y <= 50 for p in contour)

    def test_tighter_tolerance_gives_more_points(self):
        recording = [
            ("moveTo", ((0, 0),)),
            ("qCurveTo", ((50, 100), (100, 0))),
            ("closePath", ()),
        ]
        coarse = recording_to_contours(recording, tolerance=10.0)[0]
        fine = recording_to_contours(recording, tolerance=0.1)[0]
        assert len(fine) > len(coarse)

    def test_quadratic_without_on_curve_points(self):
        """Test a contour made only of off-curve points starts between them."""
        recording = [
            ("qCurveTo", ((0, 100), (100, 100), (100, 0), (0, 0), None)),
            ("closePath", ()),
        ]
        contour = recording_to_contours(recording)[0]

        assert contour[0] == Point2(0, 50)
        assert contour[-1] != contour[0]
        assert all(0 <= p.x <= 100 and 0 <= p.y <= 100 for p in contour)

    def test_cubic_flattened(self):
        recording = [
            ("moveTo", ((0, 0),)),
            ("curveTo", ((0, 100), (100, 100), (100, 0))),
            ("closePath", ()),
        ]
        contour = recording_to_contours(recording)[0]

        assert contour[0] == Point2(0, 0)
        assert contour[-1] == Point2(100, 0)
        assert len(contour) > 3

    def test_multiple_contours(self):
        recording = [
            ("moveTo", ((0, 0),)),
            ("lineTo", ((0, 10),)),
            ("lineTo", ((10, 0),)),
            ("closePath", ()),
            ("moveTo", ((20, 0),)),
            ("lineTo", ((20, 10),)),
            ("lineTo", ((30, 0),)),
            ("endPath", ()),
        ]
        contours = recording_to_contours(recording)
        assert len(contours) == 2
        assert contours[1][0] == Point2(20, 0)

    def test_empty_recording(self):
        assert recording_to_contours([]) == []


class TestFonttoolsGlyphToOutline:
    """Tests for fonttools_glyph_to_outline()."""

    def test_outline_fields(self):
        font = _mock_font(cmap={65: "A"}, metrics={"A": (600, 0)})
        outline = fonttools_glyph_to_outline("A", _SquareGlyph(), font)

        assert outline.name == "A"
        assert outline.advance_width == 600
        assert outline.unicode == 65
        assert len(outline.contours) == 1
        assert len(outline.contours[0]) == 4

    def test_unencoded_glyph(self):
        font = _mock_font(cmap={66: "B"}, metrics={"A": (600, 0)})
        outline = fonttools_glyph_to_outline("A", _SquareGlyph(), font)
        assert outline.unicode is None


class TestFontReader:
    """Tests for FontReader class."""

    def test_init(self):
        """Test FontReader initialization."""
        path = Path("test.ttf")
        reader = FontReader(path)
        assert reader._font_path == path
        assert reader._font is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FontLoadError."""
        reader = FontReader(Path("nonexistent.ttf"))
        with pytest.raises(FontLoadError, match="file not found"):
            reader.load()

    def test_load_not_a_font(self, tmp_path):
        path = tmp_path / "junk.ttf"
        path.write_bytes(b"not a font" * 10)

        reader = FontReader(path)
        with pytest.raises(FontLoadError) as exc_info:
            reader.load()
        assert exc_info.value.path == str(path)

    def test_units_per_em_before_load(self):
        """Test accessing units_per_em before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.units_per_em

    def test_outline_before_load(self):
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            reader.outline_for_char("A")

    @patch("glyphcarve.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_glyph_name_for_char(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        mock_ttfont.return_value = _mock_font(cmap={65: "A"})

        reader = FontReader(Path("test.ttf"))
        reader.load()

        assert reader.glyph_name_for_char("A") == "A"

    @patch("glyphcarve.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_unmapped_char(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        """Test a character missing from the cmap raises GlyphNotFoundError."""
        mock_ttfont.return_value = _mock_font(cmap={65: "A"})

        reader = FontReader(Path("test.ttf"))
        reader.load()

        with pytest.raises(GlyphNotFoundError) as exc_info:
            reader.glyph_name_for_char("Z")
        assert exc_info.value.glyph_name == "Z"

    @patch("glyphcarve.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_missing_glyph_name(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        mock_ttfont.return_value = _mock_font(cmap={65: "A"}, glyphs={})

        reader = FontReader(Path("test.ttf"))
        reader.load()

        with pytest.raises(GlyphNotFoundError):
            reader.get_outline("A")

    @patch("glyphcarve.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_outline_for_char(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        mock_ttfont.return_value = _mock_font(
            cmap={65: "A"},
            glyphs={"A": _SquareGlyph()},
            metrics={"A": (500, 0)},
        )

        reader = FontReader(Path("test.ttf"))
        reader.load()
        outline = reader.outline_for_char("A")

        assert outline.name == "A"
        assert outline.advance_width == 500
        assert not outline.is_empty()

    @patch("glyphcarve.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_context_manager_closes(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        mock_font = _mock_font()
        mock_ttfont.return_value = mock_font

        with FontReader(Path("test.ttf")) as reader:
            assert reader._font is mock_font

        mock_font.close.assert_called_once()
        assert reader._font is None


class TestObjWriter:
    """Tests for ObjWriter class."""

    def test_empty_mesh_is_header_only(self):
        writer = ObjWriter(Path("empty.obj"))
        assert writer.render() == OBJ_HEADER
        assert writer.polygon_count == 0

    def test_render_triangle_and_quad(self):
        """Test vertex, normal and face lines for two polygons."""
        writer = ObjWriter(Path("mesh.obj"))
        writer.add([OutputPolygon.triangle(Point2(0, 0), Point2(1, 0), Point2(0, 1))])
        writer.add([OutputPolygon.quad(2.0, 0.0, 1.0, 1.0)])

        lines = writer.render().splitlines()

        assert lines[:2] == ["mtllib master.mtl", "usemtl wood"]
        assert lines[2:9] == [
            "v 0.000000 0.000000 0.000000",
            "vn 0.000000 1.000000 0.000000",
            "v 1.000000 0.000000 0.000000",
            "vn 0.000000 1.000000 0.000000",
            "v 0.000000 0.000000 1.000000",
            "vn 0.000000 1.000000 0.000000",
            "f 1 2 3",
        ]
        assert lines[9] == "v 2.000000 0.000000 0.000000"
        assert lines[-1] == "f 4 5 6 7"
        assert writer.polygon_count == 2

    def test_elevation(self):
        writer = ObjWriter(Path("mesh.obj"), elevation=2.5)
        writer.add([OutputPolygon.triangle(Point2(0, 0), Point2(1, 0), Point2(0, 1))])
        assert "v 1.000000 2.500000 0.000000" in writer.render().splitlines()

    def test_write(self, tmp_path):
        path = tmp_path / "out.obj"
        writer = ObjWriter(path)
        writer.add([OutputPolygon.quad(0.0, 0.0, 1.0, 1.0)])

        assert writer.write() == path
        assert path.read_text(encoding="utf-8") == writer.render()

    def test_write_to_missing_directory(self, tmp_path):
        writer = ObjWriter(tmp_path / "missing" / "out.obj")
        with pytest.raises(ExportError):
            writer.write()

    def test_textured_face(self):
        """Test faces with texture coordinates reference them in the face line."""
        face = MeshFace.flat(
            ((0, 0, 0), (0, 1, 0), (1, 0, 0)),
            ((0.0, 0.0), (0.0, 1.0), (0.25, 0.0)),
        )
        writer = ObjWriter(Path("ring.obj"))
        writer.add_faces([face])

        lines = writer.render().splitlines()

        assert lines[2:5] == [
            "v 0.000000 0.000000 0.000000",
            "vn 0.000000 0.000000 -1.000000",
            "vt 0.000000 0.000000",
        ]
        assert "vt 0.250000 0.000000" in lines
        assert lines[-1] == "f 1/1 2/2 3/3"

    def test_mixed_faces_count_indices_separately(self):
        """Test untextured faces do not advance the texture coordinate index."""
        textured = MeshFace.flat(
            ((0, 0, 0), (0, 1, 0), (1, 0, 0)),
            ((0.0, 0.0), (0.0, 1.0), (1.0, 0.0)),
        )
        writer = ObjWriter(Path("mixed.obj"))
        writer.add_faces([textured])
        writer.add([OutputPolygon.quad(0.0, 0.0, 1.0, 1.0)])
        writer.add_faces([textured])

        faces = [line for line in writer.render().splitlines() if line.startswith("f ")]

        assert faces == ["f 1/1 2/2 3/3", "f 4 5 6 7", "f 8/4 9/5 10/6"]
        assert writer.polygon_count == 3

    def test_placed_face_normals_written(self):
        face = MeshFace(((0, 0, 0), (0, 1, 0), (0, 0, 1)), ((1.0, 0.0, 0.0),) * 3)
        writer = ObjWriter(Path("wall.obj"))
        writer.add_faces([face])

        normals = [line for line in writer.render().splitlines() if line.startswith("vn ")]
        assert normals == ["vn 1.000000 0.000000 0.000000"] * 3


class TestGetOutputPath:
    """Tests for get_output_path()."""

    def test_plain_text(self):
        assert get_output_path("Twitter") == Path("Twitter.obj")

    def test_unsafe_characters_replaced(self):
        assert get_output_path("a b/c") == Path("a_b_c.obj")

    def test_directory(self, tmp_path):
        assert get_output_path("Hi", tmp_path) == tmp_path / "Hi.obj"

    def test_empty_text(self):
        assert get_output_path("") == Path("carved.obj")
