"""Wavefront OBJ writer for carved polygons and placed faces.

Every face is written on its own: each corner is written as a ``v`` line
followed by its ``vn`` normal (and a ``vt`` texture coordinate when the face
has them), then an ``f`` line references the corners by 1-based index.
Vertices are not shared between faces.
"""

from collections.abc import Iterable
from pathlib import Path

import structlog

from glyphcarve.domain import MeshFace, OutputPolygon
from glyphcarve.exceptions import ExportError

logger = structlog.get_logger("glyphcarve.writer")

OBJ_HEADER = "mtllib master.mtl\nusemtl wood\n"


class ObjWriter:
    """Collects faces and writes them as an OBJ mesh.

    Flat carved polygons are laid on the plane y = elevation facing up;
    faces already placed in 3D are written as they are.

    Example:
        writer = ObjWriter(Path("hello.obj"))
        writer.add(polygons)
        writer.add_faces(ring_faces)
        writer.write()
    """

    def __init__(self, output_path: Path, elevation: float = 0.0) -> None:
        """Initialize the writer.

        Args:
            output_path: Path where the mesh will be saved
            elevation: Height at which flat polygons are embedded in 3D
        """
        self._output_path = output_path
        self._elevation = elevation
        self._faces: list[MeshFace] = []

    @property
    def polygon_count(self) -> int:
        return len(self._faces)

    def add(self, polygons: Iterable[OutputPolygon]) -> None:
        """Queue flat polygons for writing."""
        self._faces.extend(MeshFace.from_polygon(polygon, self._elevation) for polygon in polygons)

    def add_faces(self, faces: Iterable[MeshFace]) -> None:
        """Queue faces that are already placed in 3D."""
        self._faces.extend(faces)

    def render(self) -> str:
        """Render the queued faces as OBJ text.

        Vertex and texture coordinate indices are counted separately, so
        faces without texture coordinates can be mixed with faces that
        have them.
        """
        lines = [OBJ_HEADER]
        index = 1
        uv_index = 1
        for face in self._faces:
            count = len(face.vertices)
            for k, ((x, y, z), normal) in enumerate(zip(face.vertices, face.normals)):
                lines.append(f"v {x:f} {y:f} {z:f}\n")
                lines.append("vn {:f} {:f} {:f}\n".format(*normal))
                if face.uvs is not None:
                    lines.append("vt {:f} {:f}\n".format(*face.uvs[k]))

            if face.uvs is None:
                refs = " ".join(str(index + k) for k in range(count))
            else:
                refs = " ".join(f"{index + k}/{uv_index + k}" for k in range(count))
                uv_index += count
            lines.append(f"f {refs}\n")
            index += count
        return "".join(lines)

    def write(self) -> Path:
        """Write the mesh to the output path.

        Returns:
            The path written

        Raises:
            ExportError: If the file cannot be written
        """
        try:
            self._output_path.write_text(self.render(), encoding="utf-8")
        except OSError as e:
            raise ExportError(str(self._output_path), str(e)) from e

        logger.info(
            "Mesh written",
            path=str(self._output_path),
            faces=len(self._faces),
        )
        return self._output_path


def get_output_path(text: str, directory: Path | None = None) -> Path:
    """Generate the default mesh path for a carved text.

    Converts: "Hello" -> Hello.obj
              "a b/c" -> a_b_c.obj

    Args:
        text: Carved text
        directory: Directory for the file (current directory if None)

    Returns:
        Path ending in .obj
    """
    stem = "".join(c if c.isalnum() or c in "-_" else "_" for c in text) or "carved"
    return (directory or Path(".")) / f"{stem}.obj"
