"""Triangle meshes built from rectangles and quads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from pob_runtime.geometry import Point, Quad, Rect
from pob_runtime.primitives import DEFAULT_TEXTURE_ID, Color

# Two triangles per four-cornered shape: (0, 1, 3) and (1, 2, 3).
_CORNER_INDICES = (0, 1, 3, 1, 2, 3)


@dataclass(frozen=True)
class Vertex:
    """One mesh vertex: position, texture coordinate, color and texture array layer."""

    pos: Point
    uv: Point
    color: Color
    layer_idx: int = 0


@dataclass
class Mesh:
    """Indexed triangles that are all drawn with one texture."""

    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    texture_id: int = DEFAULT_TEXTURE_ID

    def _add_corners(
        self,
        positions: Iterable[Point],
        uvs: Iterable[Point],
        color: Color,
        layer_idx: int,
    ) -> None:
        base = len(self.vertices)
        self.indices.extend(base + offset for offset in _CORNER_INDICES)
        self.vertices.extend(
            Vertex(pos, uv, color, layer_idx) for pos, uv in zip(positions, uvs)
        )

    def add_rect(self, rect: Rect, uv: Rect, color: Color, layer_idx: int) -> None:
        """Append a rectangle as two triangles, corners clockwise from the top left."""
        self._add_corners(
            (rect.top_left(), rect.top_right(), rect.bottom_right(), rect.bottom_left()),
            (uv.top_left(), uv.top_right(), uv.bottom_right(), uv.bottom_left()),
            color,
            layer_idx,
        )

    def add_quad(self, quad: Quad, uv: Quad, color: Color, layer_idx: int) -> None:
        """Append a quad as two triangles, corners in the quad's own order."""
        self._add_corners(
            (quad.p0, quad.p1, quad.p2, quad.p3),
            (uv.p0, uv.p1, uv.p2, uv.p3),
            color,
            layer_idx,
        )

    def is_empty(self) -> bool:
        return not self.vertices and not self.indices


@dataclass
class ClippedMesh:
    """A mesh of which only the part inside ``clip_rect`` is drawn."""

    clip_rect: Rect
    mesh: Mesh