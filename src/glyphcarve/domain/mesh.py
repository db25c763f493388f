"""Three dimensional faces and meshes.

Carved polygons are flat; once they are placed in space (laid on the floor,
tilted, wrapped around a ring) they become MeshFaces. A Mesh is an ordered
collection of faces that is moved as a whole.
"""

import math
from dataclasses import dataclass, field

from glyphcarve.domain.polygon import OutputPolygon
from glyphcarve.exceptions import MalformedShapeError

Vec3 = tuple[float, float, float]
UV = tuple[float, float]

UP: Vec3 = (0.0, 1.0, 0.0)


def face_normal(a: Vec3, b: Vec3, c: Vec3) -> Vec3:
    """Unit normal of the triangle (a, b, c), via (b - a) x (c - a).

    Degenerate triangles get the up vector.
    """
    ux, uy, uz = b[0] - a[0], b[1] - a[1], b[2] - a[2]
    vx, vy, vz = c[0] - a[0], c[1] - a[1], c[2] - a[2]
    nx = uy * vz - uz * vy
    ny = uz * vx - ux * vz
    nz = ux * vy - uy * vx
    length = math.sqrt(nx * nx + ny * ny + nz * nz)
    if length == 0:
        return UP
    return (nx / length, ny / length, nz / length)


def _rotate_about_z(point: Vec3, amount: float, pivot: Vec3) -> Vec3:
    x = point[0] - pivot[0]
    y = point[1] - pivot[1]
    radius = math.hypot(x, y)
    if radius == 0:
        return point
    angle = math.atan2(y, x) + amount
    return (
        math.cos(angle) * radius + pivot[0],
        math.sin(angle) * radius + pivot[1],
        point[2],
    )


@dataclass(frozen=True, slots=True)
class MeshFace:
    """A polygon in 3D space.

    Attributes:
        vertices: 3 or more corner positions in traversal order
        normals: One normal per vertex
        uvs: Optional texture coordinates, one per vertex
    """

    vertices: tuple[Vec3, ...]
    normals: tuple[Vec3, ...]
    uvs: tuple[UV, ...] | None = None

    def __post_init__(self) -> None:
        if len(self.vertices) < 3:
            raise MalformedShapeError(len(self.vertices), "build a face from")
        if len(self.normals) != len(self.vertices):
            raise ValueError("Every vertex needs exactly one normal")
        if self.uvs is not None and len(self.uvs) != len(self.vertices):
            raise ValueError("Every vertex needs exactly one texture coordinate")

    @classmethod
    def flat(cls, vertices: tuple[Vec3, ...], uvs: tuple[UV, ...] | None = None) -> "MeshFace":
        """Build a face whose vertices all share the normal of its first triangle."""
        normal = face_normal(vertices[0], vertices[1], vertices[2])
        return cls(vertices, (normal,) * len(vertices), uvs)

    @classmethod
    def from_polygon(cls, polygon: OutputPolygon, elevation: float = 0.0) -> "MeshFace":
        """Lay a carved polygon on the plane y = elevation, facing up."""
        vertices = tuple(polygon.embed(elevation))
        return cls(vertices, (UP,) * len(vertices))

    def translate(self, amount: Vec3) -> "MeshFace":
        return MeshFace(
            tuple((x + amount[0], y + amount[1], z + amount[2]) for x, y, z in self.vertices),
            self.normals,
            self.uvs,
        )

    def rotate(self, amount: float, pivot: Vec3 = (0.0, 0.0, 0.0)) -> "MeshFace":
        """Rotate about the z axis through ``pivot``.

        Args:
            amount: Angle in radians, counter-clockwise seen from +z
            pivot: Point the rotation axis passes through

        Returns:
            Rotated face; normals turn with it
        """
        return MeshFace(
            tuple(_rotate_about_z(v, amount, pivot) for v in self.vertices),
            tuple(_rotate_about_z(n, amount, (0.0, 0.0, 0.0)) for n in self.normals),
            self.uvs,
        )


@dataclass
class Mesh:
    """An ordered collection of faces moved as one piece.

    Attributes:
        faces: Faces in output order
    """

    faces: list[MeshFace] = field(default_factory=list)

    @classmethod
    def from_polygons(cls, polygons: list[OutputPolygon], elevation: float = 0.0) -> "Mesh":
        return cls([MeshFace.from_polygon(polygon, elevation) for polygon in polygons])

    def __len__(self) -> int:
        return len(self.faces)

    def merge(self, other: "Mesh") -> "Mesh":
        """New mesh with this mesh's faces followed by ``other``'s."""
        return Mesh(self.faces + other.faces)

    def translate(self, amount: Vec3) -> "Mesh":
        return Mesh([face.translate(amount) for face in self.faces])

    def rotate(self, amount: float, pivot: Vec3 = (0.0, 0.0, 0.0)) -> "Mesh":
        return Mesh([face.rotate(amount, pivot) for face in self.faces])
