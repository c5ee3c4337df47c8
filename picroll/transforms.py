"""Pixel buffer transforms for picroll.

Provides the rotate and scale steps used by the transform pipeline. Both
return a newly allocated buffer and never touch their input, so a failed
step leaves the caller's buffer intact.
"""

from __future__ import annotations
from PIL import Image

from .errors import AllocationError
from .image_io import buffer_to_image, image_to_buffer
from .logging import debug
from .pixbuf import PixelBuffer
from .types import normalize_degrees


def rotate_buffer(src: PixelBuffer, degrees: int) -> PixelBuffer:
    """Rotate a buffer clockwise by 90, 180 or 270 degrees.

    Every sample is copied verbatim to its remapped position:

    - 90:  (x, y) -> (old_h - y - 1, x)
    - 180: (x, y) -> (old_w - x - 1, old_h - y - 1)
    - 270: (x, y) -> (y, old_w - x - 1)

    Args:
        src: Buffer to rotate. Not modified.
        degrees: Clockwise rotation, any multiple of 90 (negative allowed).

    Returns:
        A new buffer, or ``src`` itself when the rotation folds to 0.

    Raises:
        AllocationError: if the output buffer can't be allocated.
        ValueError: if degrees is not a multiple of 90.
    """
    degrees = normalize_degrees(degrees)
    if degrees == 0:
        return src
    if degrees not in (90, 180, 270):
        raise ValueError(f"Illegal rotation value {degrees}")

    w, h, c = src.width, src.height, src.channels
    if degrees == 180:
        dst = PixelBuffer.allocate(w, h, c)
    else:
        dst = PixelBuffer.allocate(h, w, c)

    debug(f"[ROTATE] {degrees}: {w}x{h} -> {dst.width}x{dst.height}")

    sdata, sstride = src.data, src.stride
    ddata, dstride = dst.data, dst.stride
    src_end = h * sstride

    try:
        if degrees == 180:
            # Row y lands on row h-y-1 with its pixel order reversed.
            for y in range(h):
                s = y * sstride
                d = (h - y - 1) * dstride
                for i in range(c):
                    ddata[d + i:d + w * c:c] = sdata[s + i:s + w * c:c][::-1]
        else:
            # Source column x becomes destination row x (90) or w-x-1 (270).
            for x in range(w):
                for i in range(c):
                    column = sdata[x * c + i:src_end:sstride]
                    if degrees == 90:
                        d = x * dstride
                        ddata[d + i:d + h * c:c] = column[::-1]
                    else:
                        d = (w - x - 1) * dstride
                        ddata[d + i:d + h * c:c] = column
    except MemoryError as e:
        raise AllocationError(f"out of memory rotating {w}x{h}") from e

    return dst


def scale_buffer(src: PixelBuffer, width: int, height: int) -> PixelBuffer:
    """Nearest-neighbour resample to exactly width x height.

    Raises:
        AllocationError: if the resample fails or yields an empty raster.
    """
    if width < 1 or height < 1:
        raise AllocationError(f"Error scaling to {width} x {height}")

    try:
        img = buffer_to_image(src)
        scaled = img.resize((int(width), int(height)), Image.NEAREST)
        result = image_to_buffer(scaled)
    except MemoryError as e:
        raise AllocationError(f"Error scaling to {width} x {height}: out of memory") from e

    if result.width < 1 or result.height < 1 or not result.is_valid:
        raise AllocationError(
            f"Error scaling to {width} x {height}: got {result.width} x {result.height}")

    debug(f"[SCALE] {src.width}x{src.height} -> {result.width}x{result.height}")
    return result
