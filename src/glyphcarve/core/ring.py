"""Ring mesh generation and wrapping carved text around it.

The ring is a hollow cylinder standing on the plane y = 0 with its axis
along y. Each of its ``sides`` panels contributes four quads: one on the
outer wall, one on the inner wall, one on the top and one on the bottom.
Every quad is emitted as two triangles with texture coordinates, so a
texture strip repeats ``texture_repeats`` times around the ring.

Carved text is flat. ``RingBuilder.wrap`` bends it onto the outer wall:
the text's horizontal extent becomes arc length along the wall and its
vertical extent is scaled to the ring height.
"""

import math
from collections.abc import Sequence

import structlog

from glyphcarve.config import RingConfig
from glyphcarve.domain.mesh import UV, MeshFace, Vec3
from glyphcarve.domain.polygon import OutputPolygon

logger = structlog.get_logger("glyphcarve.ring")


def make_square(
    bl: Vec3,
    tl: Vec3,
    tr: Vec3,
    br: Vec3,
    uvs: tuple[UV, UV, UV, UV] | None = None,
) -> list[MeshFace]:
    """Split the quad (bl, tl, tr, br) into the triangles (bl, tl, br) and (tl, tr, br).

    Args:
        bl: Bottom-left corner
        tl: Top-left corner
        tr: Top-right corner
        br: Bottom-right corner
        uvs: Texture coordinates of the four corners, in the same order

    Returns:
        Two faces; each carries the normal of its own triangle
    """
    if uvs is None:
        return [MeshFace.flat((bl, tl, br)), MeshFace.flat((tl, tr, br))]

    uv_bl, uv_tl, uv_tr, uv_br = uvs
    return [
        MeshFace.flat((bl, tl, br), (uv_bl, uv_tl, uv_br)),
        MeshFace.flat((tl, tr, br), (uv_tl, uv_tr, uv_br)),
    ]


class RingBuilder:
    """Builds the ring mesh and places carved text on it.

    Example:
        builder = RingBuilder(RingConfig(enabled=True))
        faces = builder.build() + builder.wrap(polygons)
    """

    def __init__(self, config: RingConfig | None = None) -> None:
        """Initialize the builder.

        Args:
            config: Ring dimensions (defaults if None)

        Raises:
            ValueError: If the inner radius is not smaller than the outer one
        """
        self.config = config or RingConfig()
        if self.config.inner_radius >= self.config.outer_radius:
            raise ValueError(
                f"Inner radius {self.config.inner_radius} must be smaller than "
                f"outer radius {self.config.outer_radius}"
            )

    def _angle(self, side: int) -> float:
        return 2 * math.pi * side / self.config.sides

    @staticmethod
    def _at(angle: float, radius: float, y: float) -> Vec3:
        return (math.cos(angle) * radius, y, math.sin(angle) * radius)

    def _u_range(self, side: int) -> tuple[float, float]:
        """Horizontal texture coordinates of a panel.

        Consecutive panels share a span of the texture; the span restarts
        every ``sides / texture_repeats`` panels.
        """
        span = max(1, self.config.sides // self.config.texture_repeats)
        start = side % span
        return start / span, (start + 1) / span

    def build(self) -> list[MeshFace]:
        """Build the ring as triangles.

        Returns:
            ``8 * sides`` faces: outer wall, inner wall, top and bottom
            triangles for every panel. Outer wall normals point away from
            the axis, inner wall normals towards it, the top up and the
            bottom down.
        """
        cfg = self.config
        outer = cfg.outer_radius
        inner = cfg.inner_radius
        top = cfg.height

        faces: list[MeshFace] = []
        for side in range(cfg.sides):
            a0 = self._angle(side)
            a1 = self._angle(side + 1)
            u0, u1 = self._u_range(side)

            faces += make_square(
                self._at(a0, outer, 0.0),
                self._at(a0, outer, top),
                self._at(a1, outer, top),
                self._at(a1, outer, 0.0),
                ((u0, 0.0), (u0, 1.0), (u1, 1.0), (u1, 0.0)),
            )
            # Reversed so the wall faces the axis
            faces += make_square(
                self._at(a1, inner, 0.0),
                self._at(a1, inner, top),
                self._at(a0, inner, top),
                self._at(a0, inner, 0.0),
                ((u1, 0.0), (u1, 1.0), (u0, 1.0), (u0, 0.0)),
            )
            faces += make_square(
                self._at(a1, inner, top),
                self._at(a1, outer, top),
                self._at(a0, outer, top),
                self._at(a0, inner, top),
                ((u1, 0.0), (u1, 1.0), (u0, 1.0), (u0, 0.0)),
            )
            faces += make_square(
                self._at(a0, inner, 0.0),
                self._at(a0, outer, 0.0),
                self._at(a1, outer, 0.0),
                self._at(a1, inner, 0.0),
                ((u0, 0.0), (u0, 1.0), (u1, 1.0), (u1, 0.0)),
            )

        logger.debug("Ring built", sides=cfg.sides, faces=len(faces))
        return faces

    def wrap(self, polygons: Sequence[OutputPolygon]) -> list[MeshFace]:
        """Bend flat carved polygons onto the outer wall.

        The text is scaled uniformly so its height matches the ring height.
        Its left edge sits at angle 0 and x becomes arc length along the
        outer wall; text longer than the circumference overlaps itself.

        Args:
            polygons: Carved polygons in model units

        Returns:
            One face per polygon, with normals pointing away from the axis
        """
        points = [p for polygon in polygons for p in polygon.points]
        if not points:
            return []

        min_x = min(p.x for p in points)
        min_y = min(p.y for p in points)
        text_height = max(p.y for p in points) - min_y
        if text_height <= 0:
            return []

        radius = self.config.outer_radius
        factor = self.config.height / text_height

        faces: list[MeshFace] = []
        for polygon in polygons:
            vertices: list[Vec3] = []
            normals: list[Vec3] = []
            for p in polygon.points:
                angle = (p.x - min_x) * factor / radius
                vertices.append(self._at(angle, radius, (p.y - min_y) * factor))
                normals.append(self._at(angle, 1.0, 0.0))
            faces.append(MeshFace(tuple(vertices), tuple(normals)))

        logger.debug(
            "Text wrapped",
            polygons=len(faces),
            arc=round((max(p.x for p in points) - min_x) * factor / radius, 4),
        )
        return faces
