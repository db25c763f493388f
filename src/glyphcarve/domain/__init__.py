"""Domain models for glyphcarve.

This module contains the geometric values the decomposition engine works on.
Models are designed to be:

- Immutable where possible (frozen dataclasses, transforms return new values)
- Independent of fonttools implementation details

Key modules:
- predicates: Orientation, segment intersection and point-in-polygon tests

Key classes:
- Point2: A 2D point / vector
- Segment: A line segment with parametric intersection
- Shape: A closed polygon with a center and a scale origin
- OutputPolygon: A carved triangle or quad
- GlyphOutline: A glyph's flattened contours
- MeshFace, Mesh: Faces placed in 3D space and collections of them
"""

from glyphcarve.domain.glyph import GlyphOutline
from glyphcarve.domain.mesh import Mesh, MeshFace
from glyphcarve.domain.point import Point2
from glyphcarve.domain.polygon import OutputPolygon
from glyphcarve.domain.segment import Segment
from glyphcarve.domain.shape import Shape

__all__: list[str] = [
    "GlyphOutline",
    "Mesh",
    "MeshFace",
    "OutputPolygon",
    "Point2",
    "Segment",
    "Shape",
]
