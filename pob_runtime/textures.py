"""Texture bookkeeping: ids, reference counts and pending uploads."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace

from pob_runtime.image import ImageData, ImageDelta, load_image_file
from pob_runtime.texture_options import TextureOptions
from pob_runtime.worker_pool import WorkerPool

_log = logging.getLogger(__name__)

FONT_ATLAS_TEXTURE_ID = 0
_WORKER_COUNT = 4


@dataclass
class TexturesDelta:
    """Textures to upload and textures to free since the last frame."""

    update: list[tuple[int, ImageDelta]] = field(default_factory=list)
    free: list[int] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.update and not self.free


@dataclass
class TextureMetaData:
    """What is known about an allocated texture."""

    name: str
    size: tuple[int, int]
    options: TextureOptions
    retain_count: int = 1


class TextureManager:
    """Hands out texture ids, counts references and queues changes. Thread safe."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._next_id = 0
        self._meta: dict[int, TextureMetaData] = {}
        self._delta = TexturesDelta()

    def _new_id(self, name: str, size: tuple[int, int], options: TextureOptions) -> int:
        texture_id = self._next_id
        self._next_id += 1
        self._meta[texture_id] = TextureMetaData(name, size, options)
        return texture_id

    def alloc(self, name: str, image: ImageData, options: TextureOptions | None = None) -> int:
        """Allocate a texture holding ``image`` and queue its upload."""
        options = options or TextureOptions()
        with self._lock:
            texture_id = self._new_id(name, (image.width, image.height), options)
            self._delta.update.append((texture_id, ImageDelta(image, options)))
            return texture_id

    def reserve(self, name: str, options: TextureOptions | None = None) -> int:
        """Allocate an id whose image is assigned later with :meth:`set`."""
        with self._lock:
            return self._new_id(name, (0, 0), options or TextureOptions())

    def set(self, texture_id: int, delta: ImageDelta) -> None:
        """Give an allocated texture a new image, dropping uploads queued for it."""
        with self._lock:
            meta = self._meta.get(texture_id)
            if meta is None:
                raise KeyError(f"texture {texture_id} is not allocated")
            meta.size = (delta.image.width, delta.image.height)
            self._delta.update = [
                entry for entry in self._delta.update if entry[0] != texture_id
            ]
            self._delta.update.append((texture_id, delta))

    def free(self, texture_id: int) -> None:
        """Drop one reference; the texture is freed when none remain."""
        with self._lock:
            meta = self._meta.get(texture_id)
            if meta is None:
                raise KeyError(f"texture {texture_id} is not allocated")
            meta.retain_count -= 1
            if meta.retain_count == 0:
                del self._meta[texture_id]
                self._delta.free.append(texture_id)

    def retain(self, texture_id: int) -> None:
        """Add a reference; each one needs a matching :meth:`free`."""
        with self._lock:
            meta = self._meta.get(texture_id)
            if meta is None:
                raise KeyError(f"texture {texture_id} is not allocated")
            meta.retain_count += 1

    def get_meta_data(self, texture_id: int) -> TextureMetaData | None:
        """A snapshot of a texture's metadata, or None if it is not allocated."""
        with self._lock:
            meta = self._meta.get(texture_id)
            return None if meta is None else replace(meta)

    def take_delta(self) -> TexturesDelta:
        """Return the changes since the last call and start a new record."""
        with self._lock:
            delta, self._delta = self._delta, TexturesDelta()
            return delta


class TextureHandle:
    """One reference to a texture; closing it releases the reference."""

    def __init__(self, manager: TextureManager, texture_id: int) -> None:
        self._manager = manager
        self._id = texture_id
        self._closed = False

    @property
    def id(self) -> int:
        return self._id

    def size(self) -> tuple[int, int]:
        meta = self._manager.get_meta_data(self._id)
        return (0, 0) if meta is None else meta.size

    def clone(self) -> TextureHandle:
        """Another handle to the same texture, holding its own reference."""
        self._manager.retain(self._id)
        return TextureHandle(self._manager, self._id)

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._manager.free(self._id)

    def __enter__(self) -> TextureHandle:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class WrappedTextureManager:
    """A texture manager that loads image files, optionally in the background.

    Texture 0 is allocated up front for the font atlas.
    """

    def __init__(self) -> None:
        self.manager = TextureManager()
        self.manager.alloc(
            "font_atlas_texture",
            ImageData.from_solid_color((0, 0), (0, 0, 0, 0)),
            TextureOptions(),
        )
        self._pool = WorkerPool(_WORKER_COUNT)

    def update_font_texture(self, delta: ImageDelta) -> None:
        self.manager.set(FONT_ATLAS_TEXTURE_ID, delta)

    def take_delta(self) -> TexturesDelta:
        return self.manager.take_delta()

    def _load_into(self, texture_id: int, image_path: str, options: TextureOptions) -> None:
        try:
            image = load_image_file(image_path)
        except Exception as exc:
            _log.warning("Unable to load image from %s: %s", image_path, exc)
            return
        self.manager.set(texture_id, ImageDelta(image, options))

    def _load_now(self, image_path: str) -> ImageData:
        try:
            return load_image_file(image_path)
        except Exception as exc:
            _log.warning("Unable to load image from %s: %s", image_path, exc)
            raise

    def load_texture(
        self,
        image_path: str,
        options: TextureOptions | None = None,
        is_async: bool = False,
    ) -> TextureHandle:
        """Load an image file into a new texture and return a handle to it.

        Asynchronous loads return at once with a texture of size (0, 0) that
        receives the image when it has been read; failures are only logged.
        """
        options = options or TextureOptions()
        image_path = str(image_path)
        if is_async:
            texture_id = self.manager.reserve(image_path, options)
            self._pool.execute(lambda: self._load_into(texture_id, image_path, options))
        else:
            image = self._load_now(image_path)
            texture_id = self.manager.alloc(image_path, image, options)
        return TextureHandle(self.manager, texture_id)

    def update_texture(
        self,
        texture_id: int,
        image_path: str,
        options: TextureOptions | None = None,
        is_async: bool = False,
    ) -> None:
        """Replace the image of an existing texture with one loaded from a file."""
        options = options or TextureOptions()
        image_path = str(image_path)
        if is_async:
            self._pool.execute(lambda: self._load_into(texture_id, image_path, options))
        else:
            image = self._load_now(image_path)
            self.manager.set(texture_id, ImageDelta(image, options))

    def close(self) -> None:
        """Finish pending background loads and stop the workers."""
        self._pool.close()

    def __enter__(self) -> WrappedTextureManager:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()