# pob_runtime

Building blocks for a Path of Building runtime in plain Python. The package
handles input state and key names, draw layers, tessellation into meshes,
image loading, texture bookkeeping and first-run installation of the
Path of Building scripts.

## Modules

- **`pob_runtime.geometry`** has the frozen value types `Point`, `Vector`,
  `Size`, `Rect` and `Quad`. `Rect` offers `zero`, `from_origin_and_size`,
  `translate`, `is_empty`, `width`, `height`, `intersection` (returns `None`
  when the two rectangles do not overlap) and the four corner helpers.
  `Point.round()` rounds halves away from zero.
- **`pob_runtime.input`** has `InputState`, which tracks held keys
  (`on_key`, `key_pressed`), held mouse buttons (`on_mouse_button`,
  `mouse_pressed`), the cursor (`move_cursor`, `mouse_pos`) and the modifier
  flags (`set_modifiers`, `modifiers`). `is_double_click(button, now=None)`
  records a click and returns `True` when it comes less than 400 ms after the
  previous click of the same button. The module also holds the `KeyCode`,
  `MouseButton` and `Modifiers` enums and the name lookups described below.
- **`pob_runtime.primitives`** has `RectPrimitive`, `QuadPrimitive` and
  `TextPrimitive`, the optional `RectTexture` / `QuadTexture`, and
  `ClippedPrimitive`.
- **`pob_runtime.layers`** has `Layers`, which collects primitives by
  `(layer, sublayer)`. Each added primitive is copied, moved by the origin of
  the current viewport (text can be left at an absolute position) and
  clipped to that viewport.
- **`pob_runtime.mesh`** has `Vertex`, `Mesh` and `ClippedMesh`. A rectangle
  or quad becomes four vertices and two triangles.
- **`pob_runtime.tessellator`** has `Tessellator`, which turns clipped
  primitives into `ClippedMesh` batches. Consecutive primitives that share a
  clip rectangle and a texture go into the same batch, and primitives with an
  empty clip rectangle are dropped.
- **`pob_runtime.texture_options`** has `TextureOptions` with the presets
  `TextureOptions.LINEAR` (the default) and `TextureOptions.LINEAR_REPEAT`,
  plus the `FilterMode` and `AddressMode` enums.
- **`pob_runtime.image`** has `ImageData`, `ImageDelta`, `TextureFormat`,
  `DataOrder` and `load_image_file`.
- **`pob_runtime.textures`** has `TextureManager`, `TextureHandle`,
  `WrappedTextureManager`, `TextureMetaData` and `TexturesDelta`.
- **`pob_runtime.worker_pool`** has `WorkerPool`, a fixed-size thread pool.
- **`pob_runtime.util`** has `get_executable_dir`, `change_working_directory`
  and `calculate_hash`, a 64-bit hash of a value's `repr` that stays the same
  from run to run.
- **`pob_runtime.installer`** downloads and unpacks the Path of Building
  scripts.

## Key names

Key names follow Path of Building's conventions:

```python
from pob_runtime.input import MouseButton, keycode_as_str, str_as_keycode, str_as_mousebutton

code = str_as_keycode("return")
assert keycode_as_str(code) == "RETURN"
assert keycode_as_str(str_as_keycode("A")) == "a"
assert str_as_keycode("not a key") is None

assert str_as_mousebutton("LeftButton") is MouseButton.LEFT
```

Lookups by name ignore case. The name of a letter key comes back in lower
case. Some keys that have no name of their own map to an existing one. For
example, `Equal` and `NumpadAdd` both give `"+"` and `NumpadEnter` gives
`"RETURN"`. A key with no name gives `None`.

## Drawing a frame

```python
from pob_runtime.geometry import Point, Rect, Size
from pob_runtime.layers import Layers
from pob_runtime.primitives import RectPrimitive
from pob_runtime.tessellator import Tessellator

white = (255, 255, 255, 255)

layers = Layers()
layers.set_viewport(Rect.from_origin_and_size(Point(10.0, 10.0), Size(200.0, 100.0)))
layers.set_draw_layer(1, 0)
layers.add_rect(RectPrimitive(Rect.from_origin_and_size(Point(0.0, 0.0), Size(20.0, 20.0)), white))

tessellator = Tessellator()
meshes = tessellator.convert_clipped_primitives(
    layers.consume_layers(), Size(1024.0, 1024.0), 1.0
)
```

`consume_layers` empties the layers and yields the primitives sorted by
`(layer, sublayer)`. Within one layer they keep the order in which they
were added.

A `TextPrimitive` carries a laid-out block of text. Its `layout` must have
`rows`, and each row must have `glyphs`. Each glyph has a `rect` relative to
the layout origin, a `uv` rectangle in font-atlas pixels and a `color`. The
tessellator snaps the layout origin to the physical pixel grid and scales the
glyph coordinates by the atlas size.

## Images and textures

`load_image_file(path)` reads a zstd-compressed DDS file (`*.dds.zst`) into
its stored format. Supported formats are BC1, BC2, BC3, BC7 and uncompressed
RGBA8, with all layers and mip levels kept. Any other file is decoded with
Pillow into RGBA8. If the path does not exist, the loader uses the same path
with the file name in lower case, because Path of Building expects a
case-insensitive filesystem.

`TextureManager` hands out texture ids, counts references and records
pending uploads and frees. `take_delta()` returns them as a `TexturesDelta`
and starts a new record. `set`, `free` and `retain` raise `KeyError` for an
id that is not allocated.

`WrappedTextureManager` allocates texture 0 for the font atlas. Its
`load_texture(path, options, is_async)` returns a `TextureHandle`:

- With `is_async=False`, the image is loaded at once, and a load failure is
  logged and raised.
- With `is_async=True`, the handle is returned straight away with size
  `(0, 0)`. The image is decoded on a worker thread and shows up in a later
  `take_delta()`. A failure there is only logged.

`TextureHandle.clone()` returns another reference to the same texture. Call
`close()` once for each handle, or use the handle as a context manager. The
texture is freed when the last reference is closed. Call
`WrappedTextureManager.close()` to let pending background loads finish and
stop the workers.

## Installing Path of Building

`run_installer(script_dir, game)` returns `False` and does nothing if
`Launch.lua` already exists in `script_dir`. Otherwise it does the following
and returns `True`:

1. It downloads the master archive of the Path of Building repository for
   `Game.POE1` or `Game.POE2`.
2. It extracts `src/` and `runtime/lua/` and the top-level `manifest.xml`,
   `help.txt`, `changelog.txt` and `LICENSE.md` into `script_dir`.
3. It replaces `manifest.xml` and `UpdateCheck.lua` with versions suited to
   this runtime.

`archive_target_path` and `extract_archive` expose the extraction rules on
their own. A failed download raises `RuntimeError`.

## What this package does not do

The package has no command-line entry point and no window or event loop. It
does not embed a Lua interpreter, so it does not run `Launch.lua` or
subscripts. It has no GPU renderer: it produces meshes and texture deltas
but does not draw them. It does no font shaping or text layout, so text
layouts must be built elsewhere.