"""Sampling options attached to every texture."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar


class FilterMode(enum.Enum):
    """How texels are combined when a texture is scaled."""

    NEAREST = "nearest"
    LINEAR = "linear"


class AddressMode(enum.Enum):
    """What is sampled outside the 0..1 texture coordinate range."""

    CLAMP_TO_EDGE = "clamp-to-edge"
    REPEAT = "repeat"
    MIRROR_REPEAT = "mirror-repeat"
    CLAMP_TO_BORDER = "clamp-to-border"


@dataclass(frozen=True)
class TextureOptions:
    """Filtering, wrapping and mipmap settings for a texture.

    Two options that differ only in ``generate_mipmaps`` hash alike, since they
    share a sampler, but do not compare equal.
    """

    magnification: FilterMode = FilterMode.LINEAR
    minification: FilterMode = FilterMode.LINEAR
    wrap_mode: AddressMode = AddressMode.CLAMP_TO_EDGE
    mipmap_mode: FilterMode = FilterMode.LINEAR
    generate_mipmaps: bool = field(default=False, hash=False)

    LINEAR: ClassVar[TextureOptions]
    LINEAR_REPEAT: ClassVar[TextureOptions]


TextureOptions.LINEAR = TextureOptions()
TextureOptions.LINEAR_REPEAT = TextureOptions(wrap_mode=AddressMode.REPEAT)