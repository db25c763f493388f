"""I/O layer for glyphcarve.

This module handles reading glyph outlines from font files using fonttools and
writing carved polygons as Wavefront OBJ meshes.

Key responsibilities:
- Load TTF/OTF fonts
- Flatten glyph outlines into domain contours
- Write carved polygons and placed faces with vertices, normals, texture
  coordinates and faces

Key classes:
- FontReader: Load fonts and extract glyph outlines
- ObjWriter: Save carved polygons
"""

from glyphcarve.io.reader import FontReader
from glyphcarve.io.writer import ObjWriter, get_output_path

__all__ = [
    "FontReader",
    "ObjWriter",
    "get_output_path",
]
