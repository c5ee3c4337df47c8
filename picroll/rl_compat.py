"""Raylib compatibility layer - abstracts differences between raylibpy and python-raylib."""

from __future__ import annotations
import ctypes
import io
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .pixbuf import PixelBuffer

# Try to import raylib
try:
    import raylibpy as rl
    RL_VERSION = "raylibpy"
except Exception:
    import raylib as rl
    RL_VERSION = "python-raylib"

# raylib PixelFormat values for uncompressed 8-bit layouts, keyed by channel count
PIXELFORMATS = {
    1: getattr(rl, "PIXELFORMAT_UNCOMPRESSED_GRAYSCALE", 1),
    2: getattr(rl, "PIXELFORMAT_UNCOMPRESSED_GRAY_ALPHA", 2),
    3: getattr(rl, "PIXELFORMAT_UNCOMPRESSED_R8G8B8", 4),
    4: getattr(rl, "PIXELFORMAT_UNCOMPRESSED_R8G8B8A8", 7),
}


class _CTypesVec2(ctypes.Structure):
    """Fallback Vector2 structure for ctypes."""
    _fields_ = [
        ("x", ctypes.c_float),
        ("y", ctypes.c_float),
    ]


def make_vec2(x: float, y: float) -> Any:
    """Create a raylib Vector2 compatible with the current binding."""
    if hasattr(rl, 'Vector2'):
        try:
            return rl.Vector2(x, y)
        except Exception:
            pass
    if hasattr(rl, 'ffi'):
        v = rl.ffi.new("Vector2 *")
        v[0].x = float(x)
        v[0].y = float(y)
        return v[0]
    return _CTypesVec2(float(x), float(y))


def make_color(r: int, g: int, b: int, a: int) -> Any:
    """Create a raylib Color compatible with the current binding."""
    ctor = getattr(rl, "Color", None)
    if ctor:
        try:
            return ctor(int(r), int(g), int(b), int(a))
        except Exception:
            pass
    # Fallback: use Fade on a base color
    base = rl.WHITE if (int(r) + int(g) + int(b)) >= 384 else rl.BLACK
    alpha = max(0.0, min(1.0, int(a) / 255.0))
    try:
        return rl.Fade(base, float(alpha))
    except Exception:
        return base


def draw_text(text: str, x: int, y: int, size: int, color: Any) -> None:
    """Draw text with encoding fallback."""
    try:
        rl.DrawText(text, x, y, size, color)
    except TypeError:
        rl.DrawText(text.encode('utf-8'), x, y, size, color)


def measure_text(text: str, size: int) -> int:
    """Measure text width with encoding fallback."""
    try:
        return rl.MeasureText(text, size)
    except TypeError:
        return rl.MeasureText(text.encode('utf-8'), size)


def set_window_title(title: str) -> None:
    try:
        rl.SetWindowTitle(title)
    except TypeError:
        rl.SetWindowTitle(title.encode('utf-8'))


def texture_from_buffer(buf: "PixelBuffer") -> Any:
    """Upload a PixelBuffer to the GPU and return the texture.

    raylib wants tightly packed rows, so the row padding is stripped first.
    With the cffi binding the Image struct points straight at Python-owned
    memory, which stays alive until LoadTextureFromImage has copied it; the
    Image must not be passed to UnloadImage. Other bindings get a PNG in
    memory instead.
    """
    data = buf.packed()
    if hasattr(rl, 'ffi'):
        pixels = rl.ffi.from_buffer(data)
        img = rl.ffi.new("Image *")
        img[0].data = rl.ffi.cast("void *", pixels)
        img[0].width = buf.width
        img[0].height = buf.height
        img[0].mipmaps = 1
        img[0].format = PIXELFORMATS[buf.channels]
        return rl.LoadTextureFromImage(img[0])

    from .image_io import buffer_to_image
    out = io.BytesIO()
    buffer_to_image(buf).save(out, format="PNG")
    png = out.getvalue()
    img = rl.LoadImageFromMemory(b".png", png, len(png))
    try:
        return rl.LoadTextureFromImage(img)
    finally:
        try:
            rl.UnloadImage(img)
        except Exception:
            pass


def get_texture_id(tex: Any) -> int:
    """Safely get texture ID."""
    return getattr(tex, 'id', 0) or 0


def is_texture_valid(tex: Any) -> bool:
    """Check if texture is valid and loaded."""
    return get_texture_id(tex) > 0


def unload_texture(tex: Any) -> None:
    if is_texture_valid(tex):
        rl.UnloadTexture(tex)


# Re-export commonly used raylib items
__all__ = [
    'rl',
    'RL_VERSION',
    'PIXELFORMATS',
    'make_vec2',
    'make_color',
    'draw_text',
    'measure_text',
    'set_window_title',
    'texture_from_buffer',
    'get_texture_id',
    'is_texture_valid',
    'unload_texture',
]
