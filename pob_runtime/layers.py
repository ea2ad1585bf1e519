"""Per-layer queues of draw primitives, positioned relative to a viewport."""

from __future__ import annotations

import copy
import itertools
from typing import Iterator

from pob_runtime.geometry import Rect
from pob_runtime.primitives import (
    ClippedPrimitive,
    DrawPrimitive,
    QuadPrimitive,
    RectPrimitive,
    TextPrimitive,
)


class Layers:
    """Collects draw primitives by (layer, sublayer).

    Positions are taken relative to the current viewport; primitives are moved to
    screen positions and clipped by the viewport when added.
    """

    def __init__(self) -> None:
        self._layers: dict[tuple[int, int], list[ClippedPrimitive]] = {}
        self.current_layer: tuple[int, int] = (0, 0)
        self.viewport: Rect = Rect.zero()

    def reset(self) -> None:
        self.current_layer = (0, 0)
        self._layers.clear()

    def consume_layers(self) -> Iterator[ClippedPrimitive]:
        """Remove all primitives and return them in drawing order."""
        layers, self._layers = self._layers, {}
        return itertools.chain.from_iterable(layers[key] for key in sorted(layers))

    def set_viewport(self, viewport: Rect) -> None:
        self.viewport = viewport

    def set_draw_layer(self, layer: int, sublayer: int) -> None:
        self.current_layer = (layer, sublayer)

    def set_draw_sublayer(self, sublayer: int) -> None:
        self.set_draw_layer(self.current_layer[0], sublayer)

    def add_rect(self, rect: RectPrimitive) -> None:
        rect = copy.copy(rect)
        rect.translate(self.viewport.min.to_vector())
        self._push(rect)

    def add_quad(self, quad: QuadPrimitive) -> None:
        quad = copy.copy(quad)
        quad.translate(self.viewport.min.to_vector())
        self._push(quad)

    def add_text(self, text: TextPrimitive, is_absolute_position: bool) -> None:
        text = copy.copy(text)
        if not is_absolute_position:
            text.translate(self.viewport.min.to_vector())
        self._push(text)

    def _push(self, primitive: DrawPrimitive) -> None:
        self._layers.setdefault(self.current_layer, []).append(
            ClippedPrimitive(self.viewport, primitive)
        )