"""Glyphcarve - Carve font glyph outlines into flat polygon meshes.

Glyphcarve reads glyph outlines from a TrueType/OpenType font, splits each
glyph at its horizontal midpoint and approximates the material surrounding the
outline with axis-aligned quads and clipped triangles. The resulting polygons
are written to a Wavefront OBJ file ready for extrusion.

Example:
    $ glyphcarve Twitter --font sample.ttf

This will create Twitter.obj in the current working directory.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
