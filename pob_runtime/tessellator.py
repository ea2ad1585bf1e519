"""Turns clipped draw primitives into clipped meshes ready for upload."""

from __future__ import annotations

from typing import Iterable

from pob_runtime.geometry import Point, Quad, Rect, Size
from pob_runtime.mesh import ClippedMesh, Mesh
from pob_runtime.primitives import (
    DEFAULT_TEXTURE_ID,
    ClippedPrimitive,
    QuadPrimitive,
    RectPrimitive,
    TextPrimitive,
)

# Texture coordinates used for shapes drawn without a texture of their own.
WHITE_UV_RECT = Rect.zero()
WHITE_UV_QUAD = Quad.zero()


def _normalize_uv(uv: Rect, atlas_size: Size) -> Rect:
    """Atlas pixel coordinates scaled into the 0..1 range."""
    return Rect(
        Point(uv.min.x / atlas_size.width, uv.min.y / atlas_size.height),
        Point(uv.max.x / atlas_size.width, uv.max.y / atlas_size.height),
    )


def _snap_to_pixel_grid(pos: Point, pixels_per_point: float) -> Point:
    physical = Point(pos.x * pixels_per_point, pos.y * pixels_per_point).round()
    return Point(physical.x / pixels_per_point, physical.y / pixels_per_point)


class Tessellator:
    """Converts primitives into meshes, merging neighbours that share clip and texture."""

    def __init__(self) -> None:
        self.last_clipped_meshes_size = 0

    def convert_clipped_primitives(
        self,
        clipped_primitives: Iterable[ClippedPrimitive],
        font_atlas_size: Size,
        pixels_per_point: float,
    ) -> list[ClippedMesh]:
        clipped_meshes: list[ClippedMesh] = []
        for clipped_primitive in clipped_primitives:
            self.convert_clipped_primitive(
                clipped_primitive, font_atlas_size, pixels_per_point, clipped_meshes
            )
        self.last_clipped_meshes_size = len(clipped_meshes)
        return clipped_meshes

    def convert_clipped_primitive(
        self,
        clipped_primitive: ClippedPrimitive,
        font_atlas_size: Size,
        pixels_per_point: float,
        out_clipped_meshes: list[ClippedMesh],
    ) -> None:
        """Append one primitive to the last mesh in the list, or to a new one."""
        clip_rect = clipped_primitive.clip_rect
        primitive = clipped_primitive.primitive

        if clip_rect.is_empty():
            return

        last = out_clipped_meshes[-1] if out_clipped_meshes else None
        if (
            last is None
            or last.clip_rect != clip_rect
            or last.mesh.texture_id != primitive.texture_id()
        ):
            last = ClippedMesh(clip_rect, Mesh())
            out_clipped_meshes.append(last)

        if isinstance(primitive, RectPrimitive):
            self._convert_rect(primitive, last.mesh)
        elif isinstance(primitive, QuadPrimitive):
            self._convert_quad(primitive, last.mesh)
        elif isinstance(primitive, TextPrimitive):
            self._convert_text(primitive, font_atlas_size, pixels_per_point, last.mesh)
        else:
            raise TypeError(f"unsupported draw primitive: {type(primitive).__name__}")

        # A new mesh stays empty when a text primitive has no glyphs; drop it.
        if last.mesh.is_empty():
            out_clipped_meshes.pop()

    @staticmethod
    def _convert_rect(primitive: RectPrimitive, out: Mesh) -> None:
        texture = primitive.texture
        if texture is None:
            texture_id, uv, layer_idx = DEFAULT_TEXTURE_ID, WHITE_UV_RECT, 0
        else:
            texture_id, uv, layer_idx = texture.texture_id, texture.uv, texture.layer_idx
        out.add_rect(primitive.rect, uv, primitive.color, layer_idx)
        out.texture_id = texture_id

    @staticmethod
    def _convert_quad(primitive: QuadPrimitive, out: Mesh) -> None:
        texture = primitive.texture
        if texture is None:
            texture_id, uv, layer_idx = DEFAULT_TEXTURE_ID, WHITE_UV_QUAD, 0
        else:
            texture_id, uv, layer_idx = texture.texture_id, texture.uv, texture.layer_idx
        out.add_quad(primitive.quad, uv, primitive.color, layer_idx)
        out.texture_id = texture_id

    @staticmethod
    def _convert_text(
        primitive: TextPrimitive,
        font_atlas_size: Size,
        pixels_per_point: float,
        out: Mesh,
    ) -> None:
        """Add one rectangle per glyph.

        The layout is expected to have ``rows``, each with ``glyphs`` that carry a
        ``rect`` relative to the layout origin, a ``uv`` in atlas pixels and a ``color``.
        """
        layout = primitive.layout
        if not layout.rows:
            return
        # Glyphs assume the layout origin lies on the start of a physical pixel.
        offset = _snap_to_pixel_grid(primitive.pos, pixels_per_point).to_vector()
        for row in layout.rows:
            for glyph in row.glyphs:
                out.add_rect(
                    glyph.rect.translate(offset),
                    _normalize_uv(glyph.uv, font_atlas_size),
                    glyph.color,
                    0,
                )