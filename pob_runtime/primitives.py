"""Draw primitives queued by the scripts before they are turned into meshes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from pob_runtime.geometry import Point, Quad, Rect, Vector

DEFAULT_TEXTURE_ID = 0

Color = tuple[int, int, int, int]


@dataclass(frozen=True)
class RectTexture:
    """A texture region, as a normalized rectangle, applied to a rectangle."""

    texture_id: int
    uv: Rect
    layer_idx: int = 0


@dataclass(frozen=True)
class QuadTexture:
    """A texture region, as a normalized quad, applied to a quad."""

    texture_id: int
    uv: Quad
    layer_idx: int = 0


@dataclass
class RectPrimitive:
    rect: Rect
    color: Color
    texture: RectTexture | None = None

    def translate(self, direction: Vector) -> None:
        self.rect = self.rect.translate(direction)

    def texture_id(self) -> int:
        return DEFAULT_TEXTURE_ID if self.texture is None else self.texture.texture_id


@dataclass
class QuadPrimitive:
    quad: Quad
    color: Color
    texture: QuadTexture | None = None

    def translate(self, direction: Vector) -> None:
        self.quad = self.quad.translate(direction)

    def texture_id(self) -> int:
        return DEFAULT_TEXTURE_ID if self.texture is None else self.texture.texture_id


@dataclass
class TextPrimitive:
    """A laid-out block of text drawn with its origin at ``pos``."""

    pos: Point
    layout: Any

    def translate(self, direction: Vector) -> None:
        self.pos = self.pos + direction

    def texture_id(self) -> int:
        """Text is always drawn from the font atlas, the default texture."""
        return DEFAULT_TEXTURE_ID


DrawPrimitive = Union[RectPrimitive, QuadPrimitive, TextPrimitive]


@dataclass
class ClippedPrimitive:
    """A primitive together with the rectangle it is clipped to."""

    clip_rect: Rect
    primitive: DrawPrimitive