from dataclasses import dataclass, field

import pytest

from pob_runtime.geometry import Point, Quad, Rect, Size, Vector
from pob_runtime.primitives import (
    DEFAULT_TEXTURE_ID,
    ClippedPrimitive,
    QuadPrimitive,
    QuadTexture,
    RectPrimitive,
    RectTexture,
    TextPrimitive,
)
from pob_runtime.tessellator import WHITE_UV_QUAD, WHITE_UV_RECT, Tessellator

WHITE = (255, 255, 255, 255)
ATLAS = Size(64, 64)
CLIP = Rect(Point(0, 0), Point(100, 100))


@dataclass
class _Glyph:
    rect: Rect
    uv: Rect
    color: tuple


@dataclass
class _Row:
    glyphs: list = field(default_factory=list)


@dataclass
class _Layout:
    rows: list = field(default_factory=list)


def _rect(x0, y0, x1, y1):
    return Rect(Point(x0, y0), Point(x1, y1))


def _rect_prim(texture=None, clip=CLIP):
    return ClippedPrimitive(clip, RectPrimitive(_rect(1, 1, 5, 5), WHITE, texture))


def test_empty_clip_rect_is_skipped():
    meshes = Tessellator().convert_clipped_primitives(
        [_rect_prim(clip=_rect(5, 5, 5, 10))], ATLAS, 1.0
    )
    assert meshes == []


def test_same_clip_and_texture_share_a_mesh():
    meshes = Tessellator().convert_clipped_primitives(
        [_rect_prim(), _rect_prim()], ATLAS, 1.0
    )
    assert len(meshes) == 1
    assert len(meshes[0].mesh.vertices) == 8
    assert len(meshes[0].mesh.indices) == 12


def test_different_texture_starts_new_mesh():
    texture = RectTexture(9, _rect(0, 0, 1, 1), 2)
    meshes = Tessellator().convert_clipped_primitives(
        [_rect_prim(), _rect_prim(texture), _rect_prim(texture)], ATLAS, 1.0
    )
    assert [m.mesh.texture_id for m in meshes] == [DEFAULT_TEXTURE_ID, 9]
    assert len(meshes[1].mesh.vertices) == 8
    assert all(v.layer_idx == 2 for v in meshes[1].mesh.vertices)


def test_different_clip_starts_new_mesh():
    other = _rect(0, 0, 50, 50)
    meshes = Tessellator().convert_clipped_primitives(
        [_rect_prim(), _rect_prim(clip=other)], ATLAS, 1.0
    )
    assert [m.clip_rect for m in meshes] == [CLIP, other]


def test_untextured_rect_uses_white_uv():
    meshes = Tessellator().convert_clipped_primitives([_rect_prim()], ATLAS, 1.0)
    vertices = meshes[0].mesh.vertices
    assert vertices[0].uv == WHITE_UV_RECT.top_left()
    assert vertices[2].uv == WHITE_UV_RECT.bottom_right()
    assert all(v.layer_idx == 0 for v in vertices)


def test_quad_primitive_with_and_without_texture():
    quad = Quad.from_size(Size(3, 4))
    uv = Quad.from_size(Size(1, 1))
    primitives = [
        ClippedPrimitive(CLIP, QuadPrimitive(quad, WHITE)),
        ClippedPrimitive(CLIP, QuadPrimitive(quad, WHITE, QuadTexture(4, uv, 1))),
    ]
    meshes = Tessellator().convert_clipped_primitives(primitives, ATLAS, 1.0)
    assert len(meshes) == 2
    assert meshes[0].mesh.vertices[1].uv == WHITE_UV_QUAD.p1
    assert meshes[1].mesh.texture_id == 4
    assert [v.uv for v in meshes[1].mesh.vertices] == [uv.p0, uv.p1, uv.p2, uv.p3]


def test_text_without_rows_adds_no_mesh():
    text = ClippedPrimitive(CLIP, TextPrimitive(Point(0, 0), _Layout()))
    assert Tessellator().convert_clipped_primitives([text], ATLAS, 1.0) == []


def test_text_with_empty_row_drops_new_mesh():
    text = ClippedPrimitive(CLIP, TextPrimitive(Point(0, 0), _Layout([_Row()])))
    assert Tessellator().convert_clipped_primitives([text], ATLAS, 1.0) == []


def test_text_glyphs_are_positioned_and_uv_normalized():
    glyph = _Glyph(_rect(0, 0, 2, 3), _rect(8, 16, 16, 32), (1, 2, 3, 4))
    layout = _Layout([_Row([glyph])])
    text = ClippedPrimitive(CLIP, TextPrimitive(Point(10, 5), layout))
    meshes = Tessellator().convert_clipped_primitives([text], ATLAS, 1.0)
    vertices = meshes[0].mesh.vertices
    moved = glyph.rect.translate(Vector(10, 5))
    assert vertices[0].pos == moved.top_left()
    assert vertices[2].pos == moved.bottom_right()
    assert vertices[0].uv.x * ATLAS.width == glyph.uv.min.x
    assert vertices[2].uv.y * ATLAS.height == glyph.uv.max.y
    assert vertices[0].color == (1, 2, 3, 4)


@pytest.mark.parametrize("ppp", [1.0, 2.0, 1.5])
def test_text_origin_snaps_to_physical_pixels(ppp):
    glyph = _Glyph(_rect(0, 0, 1, 1), _rect(0, 0, 1, 1), WHITE)
    text = ClippedPrimitive(
        CLIP, TextPrimitive(Point(1.3, 2.2), _Layout([_Row([glyph])]))
    )
    pos = Tessellator().convert_clipped_primitives([text], ATLAS, ppp)[0].mesh.vertices[0].pos
    assert (pos.x * ppp) == pytest.approx(round(pos.x * ppp))
    assert (pos.y * ppp) == pytest.approx(round(pos.y * ppp))
    assert abs(pos.x - 1.3) <= 0.5 / ppp + 1e-9
    assert abs(pos.y - 2.2) <= 0.5 / ppp + 1e-9


def test_text_merges_with_untextured_rect():
    glyph = _Glyph(_rect(0, 0, 1, 1), _rect(0, 0, 1, 1), WHITE)
    text = ClippedPrimitive(CLIP, TextPrimitive(Point(0, 0), _Layout([_Row([glyph])])))
    meshes = Tessellator().convert_clipped_primitives([_rect_prim(), text], ATLAS, 1.0)
    assert len(meshes) == 1
    assert len(meshes[0].mesh.vertices) == 8


def test_convert_single_appends_to_given_list_and_tracks_size():
    tessellator = Tessellator()
    out = []
    tessellator.convert_clipped_primitive(_rect_prim(), ATLAS, 1.0, out)
    tessellator.convert_clipped_primitive(_rect_prim(), ATLAS, 1.0, out)
    assert len(out) == 1
    result = tessellator.convert_clipped_primitives([_rect_prim(), _rect_prim(RectTexture(3, CLIP))], ATLAS, 1.0)
    assert tessellator.last_clipped_meshes_size == len(result)


def test_unknown_primitive_raises():
    with pytest.raises(TypeError):
        Tessellator().convert_clipped_primitives([ClippedPrimitive(CLIP, object())], ATLAS, 1.0)