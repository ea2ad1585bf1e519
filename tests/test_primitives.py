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

WHITE = (255, 255, 255, 255)
UV = Rect(Point(0.0, 0.0), Point(1.0, 1.0))


def test_rect_translate_moves_rect_in_place():
    original = Rect(Point(1.0, 2.0), Point(4.0, 6.0))
    prim = RectPrimitive(original, WHITE)
    by = Vector(10.0, 20.0)
    prim.translate(by)
    assert prim.rect == original.translate(by)
    prim.translate(-by)
    assert prim.rect == original


def test_rect_texture_id_default_and_explicit():
    rect = Rect(Point(0.0, 0.0), Point(1.0, 1.0))
    assert RectPrimitive(rect, WHITE).texture_id() == DEFAULT_TEXTURE_ID
    textured = RectPrimitive(rect, WHITE, RectTexture(7, UV, 2))
    assert textured.texture_id() == 7


def test_quad_translate_and_texture_id():
    quad = Quad.from_size(Size(2.0, 3.0))
    prim = QuadPrimitive(quad, WHITE, QuadTexture(5, Quad.from_size(Size(1.0, 1.0))))
    by = Vector(-1.0, 0.5)
    prim.translate(by)
    assert prim.quad == quad.translate(by)
    assert prim.texture_id() == 5
    assert QuadPrimitive(quad, WHITE).texture_id() == DEFAULT_TEXTURE_ID


def test_text_translate_and_texture_id():
    layout = object()
    prim = TextPrimitive(Point(3.0, 4.0), layout)
    prim.translate(Vector(1.0, 1.0))
    assert prim.pos == Point(3.0, 4.0) + Vector(1.0, 1.0)
    assert prim.layout is layout
    assert prim.texture_id() == DEFAULT_TEXTURE_ID


def test_clipped_primitive_holds_values():
    clip = Rect(Point(0.0, 0.0), Point(100.0, 100.0))
    prim = RectPrimitive(Rect(Point(1.0, 1.0), Point(2.0, 2.0)), WHITE)
    clipped = ClippedPrimitive(clip, prim)
    assert clipped.clip_rect == clip
    assert clipped.primitive.texture_id() == DEFAULT_TEXTURE_ID


def test_primitive_equality():
    rect = Rect(Point(0.0, 0.0), Point(1.0, 1.0))
    assert RectPrimitive(rect, WHITE) == RectPrimitive(rect, WHITE)
    assert RectPrimitive(rect, WHITE) != RectPrimitive(rect, (0, 0, 0, 255))