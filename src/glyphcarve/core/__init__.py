"""Core decomposition algorithms for glyphcarve.

This module contains the core algorithms for:

- Geometric predicates (defined in glyphcarve.domain.predicates, re-exported here)
- Splitting a closed polygon at a vertical cut line
- Recursive quad carving of a rectangle around a boundary
- Building a ring mesh and wrapping carved text around it

All services are designed to be:
- Single-threaded and synchronous
- Pure (shapes passed in are never modified)

Key functions:
- orientation: Turn direction of a point triplet
- segments_intersect: Test if two segments share a point
- point_in_polygon: Test if point is inside polygon
- split_shape: Split a shape at x = vx
- carve: Carve a rectangle around a boundary

Key classes:
- PolygonSplitter: Partitions shapes at a vertical line
- QuadCarver: Decomposes a rectangle minus a boundary into polygons
- RingBuilder: Builds the ring and bends flat polygons onto it

The text pipeline lives in ``glyphcarve.core.pipeline``; it depends on the
I/O layer and is not imported here.
"""

from glyphcarve.core.carver import CarveTally, QuadCarver, carve
from glyphcarve.core.ring import RingBuilder, make_square
from glyphcarve.core.splitter import PolygonSplitter, Side, split_shape
from glyphcarve.domain.predicates import (
    Orientation,
    nearest_point_on_segment,
    on_segment,
    orientation,
    point_in_polygon,
    segments_intersect,
)

__all__ = [
    # Carver
    "CarveTally",
    # Predicates
    "Orientation",
    # Splitter
    "PolygonSplitter",
    "QuadCarver",
    # Ring
    "RingBuilder",
    "Side",
    "carve",
    "make_square",
    "nearest_point_on_segment",
    "on_segment",
    "orientation",
    "point_in_polygon",
    "segments_intersect",
    "split_shape",
]
