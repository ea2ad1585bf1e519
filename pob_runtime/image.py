"""Decoded image data ready for upload, and loading it from files."""

from __future__ import annotations

import enum
import io
import string
import struct
from dataclasses import dataclass, field
from pathlib import Path

import zstandard
from PIL import Image

from pob_runtime.texture_options import TextureOptions

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

_DDS_MAGIC = b"DDS "
_DDS_HEADER_SIZE = 124
_DDS_PIXEL_FORMAT_OFFSET = len(_DDS_MAGIC) + 72
_DDS_DATA_OFFSET = len(_DDS_MAGIC) + _DDS_HEADER_SIZE
_DDS_DX10_SIZE = 20
_DDPF_FOURCC = 0x4
_DDPF_RGB = 0x40


class TextureFormat(enum.Enum):
    """Pixel formats the renderer accepts."""

    RGBA8_UNORM = "rgba8unorm"
    BC1_RGBA_UNORM = "bc1-rgba-unorm"
    BC2_RGBA_UNORM = "bc2-rgba-unorm"
    BC3_RGBA_UNORM = "bc3-rgba-unorm"
    BC7_RGBA_UNORM = "bc7-rgba-unorm"

    @property
    def is_compressed(self) -> bool:
        return self is not TextureFormat.RGBA8_UNORM


class DataOrder(enum.Enum):
    """Order of layers and mip levels in the pixel data.

    LAYER_MAJOR: layer 0 mips 0..n, then layer 1 mips 0..n (DDS files).
    MIP_MAJOR: mip 0 of every layer, then mip 1 of every layer (KTX files).
    """

    LAYER_MAJOR = "layer-major"
    MIP_MAJOR = "mip-major"


_DXGI_FORMATS = {
    28: TextureFormat.RGBA8_UNORM,
    71: TextureFormat.BC1_RGBA_UNORM,
    74: TextureFormat.BC2_RGBA_UNORM,
    77: TextureFormat.BC3_RGBA_UNORM,
    98: TextureFormat.BC7_RGBA_UNORM,
}

_FOURCC_FORMATS = {
    b"DXT1": TextureFormat.BC1_RGBA_UNORM,
    b"DXT3": TextureFormat.BC2_RGBA_UNORM,
    b"DXT5": TextureFormat.BC3_RGBA_UNORM,
}

_RGBA8_MASKS = (0x000000FF, 0x0000FF00, 0x00FF0000, 0xFF000000)


@dataclass
class ImageData:
    """Pixel data of a texture with all its layers and mip levels."""

    format: TextureFormat
    width: int
    height: int
    data: bytes = field(repr=False)
    array_layers: int = 1
    mipmap_count: int = 1
    data_order: DataOrder = field(default=DataOrder.LAYER_MAJOR, repr=False)

    def __post_init__(self) -> None:
        if self.mipmap_count < 1:
            raise ValueError("mipmap count must be at least 1")

    @staticmethod
    def from_solid_color(dimensions, color) -> ImageData:
        """An RGBA image of the given (width, height) filled with one color."""
        width, height = (int(n) for n in dimensions)
        pixel = bytes(color)
        if len(pixel) != 4:
            raise ValueError("color must have four components")
        return ImageData(TextureFormat.RGBA8_UNORM, width, height, pixel * (width * height))

    @staticmethod
    def from_image(image: Image.Image) -> ImageData:
        """RGBA data of a decoded image."""
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        return ImageData(TextureFormat.RGBA8_UNORM, rgba.width, rgba.height, rgba.tobytes())


@dataclass
class ImageDelta:
    """A new image for a texture together with how it is to be sampled."""

    image: ImageData
    options: TextureOptions = field(default_factory=TextureOptions)


def _dds_format(data: bytes, pixel_format_flags: int, fourcc: bytes, bit_count: int, masks):
    if pixel_format_flags & _DDPF_FOURCC:
        if fourcc == b"DX10":
            if len(data) < _DDS_DATA_OFFSET + _DDS_DX10_SIZE:
                raise ValueError("truncated DDS DX10 header")
            dxgi, _dimension, _misc, array_size, _misc2 = struct.unpack_from(
                "<5I", data, _DDS_DATA_OFFSET
            )
            fmt = _DXGI_FORMATS.get(dxgi)
            if fmt is None:
                raise ValueError("Unsupported dxgi format")
            return fmt, max(array_size, 1), _DDS_DATA_OFFSET + _DDS_DX10_SIZE
        fmt = _FOURCC_FORMATS.get(fourcc)
        if fmt is None:
            raise ValueError("Unsupported dxgi format")
        return fmt, 1, _DDS_DATA_OFFSET
    if pixel_format_flags & _DDPF_RGB and bit_count == 32 and tuple(masks) == _RGBA8_MASKS:
        return TextureFormat.RGBA8_UNORM, 1, _DDS_DATA_OFFSET
    raise ValueError("Unsupported dxgi format")


def _parse_dds(data: bytes) -> ImageData:
    if data[: len(_DDS_MAGIC)] != _DDS_MAGIC:
        raise ValueError("not a DDS file")
    if len(data) < _DDS_DATA_OFFSET:
        raise ValueError("truncated DDS header")
    size, _flags, height, width, _pitch, _depth, mip_count = struct.unpack_from(
        "<7I", data, len(_DDS_MAGIC)
    )
    if size != _DDS_HEADER_SIZE:
        raise ValueError(f"invalid DDS header size {size}")
    _pf_size, pf_flags, fourcc, bit_count, *masks = struct.unpack_from(
        "<II4sIIIII", data, _DDS_PIXEL_FORMAT_OFFSET
    )
    fmt, array_layers, offset = _dds_format(data, pf_flags, fourcc, bit_count, masks)
    return ImageData(
        format=fmt,
        width=width,
        height=height,
        data=data[offset:],
        array_layers=array_layers,
        mipmap_count=max(mip_count, 1),
        data_order=DataOrder.LAYER_MAJOR,
    )


def _resolve_case(path: Path) -> Path:
    """The path itself if it exists, else the same path with an ASCII-lowercased file name."""
    if path.exists():
        return path
    return path.with_name(path.name.translate(_ASCII_LOWER))


def load_image_file(path) -> ImageData:
    """Load a zstd-compressed DDS file (``*.dds.zst``) or any image Pillow can read.

    The scripts assume a case-insensitive file system, so a lowercased file name
    is tried when the given one does not exist.
    """
    path = _resolve_case(Path(path))

    if path.suffix == ".zst" and path.stem.endswith(".dds"):
        out = io.BytesIO()
        with open(path, "rb") as source:
            zstandard.ZstdDecompressor().copy_stream(source, out)
        return _parse_dds(out.getvalue())

    with Image.open(path) as image:
        image.load()
        return ImageData.from_image(image)