"""Image I/O - Pillow decoding, orientation hints, file listing."""

from __future__ import annotations
import os
from typing import Iterable, List

from PIL import Image

from .config import IMG_EXTS
from .errors import DecodeError
from .interfaces import Decoder, MetadataReader
from .logging import log, debug
from .pixbuf import PixelBuffer, MODE_CHANNELS

EXIF_ORIENTATION_TAG = 0x0112

# EXIF orientation value -> clockwise rotation needed to display upright.
# Mirrored orientations (2, 4, 5, 7) are not supported and read as 0.
EXIF_ROTATIONS = {1: 0, 3: 180, 6: 90, 8: 270}


def image_to_buffer(img: Image.Image) -> PixelBuffer:
    """Copy a Pillow image into a new PixelBuffer (L, LA, RGB or RGBA)."""
    if img.mode not in MODE_CHANNELS:
        has_alpha = img.mode in ("PA", "La") or "transparency" in img.info
        img = img.convert("RGBA" if has_alpha else "RGB")
    channels = MODE_CHANNELS[img.mode]
    w, h = img.size
    return PixelBuffer.from_packed(w, h, channels, img.tobytes())


def buffer_to_image(buf: PixelBuffer) -> Image.Image:
    """Wrap a PixelBuffer as a Pillow image, honouring its row stride."""
    return Image.frombuffer(buf.mode, (buf.width, buf.height), bytes(buf.data),
                            "raw", buf.mode, buf.stride, 1)


class PillowDecoder(Decoder):
    """Decoder backed by Pillow. Multi-frame files yield their first frame."""

    def decode(self, path: str) -> PixelBuffer:
        try:
            with Image.open(path) as img:
                img.load()
                buf = image_to_buffer(img)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            log(f"[LOAD][ERR] {os.path.basename(path)}: {e}")
            raise DecodeError(path, str(e)) from e
        except MemoryError as e:
            log(f"[LOAD][ERR] {os.path.basename(path)}: out of memory")
            raise DecodeError(path, "out of memory") from e

        debug(f"[LOAD] {os.path.basename(path)}: {buf.width}x{buf.height} {buf.mode}")
        return buf


class ExifOrientationReader(MetadataReader):
    """Reads the EXIF Orientation tag with Pillow."""

    def read_orientation_hint(self, path: str) -> int:
        try:
            with Image.open(path) as img:
                value = img.getexif().get(EXIF_ORIENTATION_TAG)
        except (OSError, ValueError, SyntaxError) as e:
            debug(f"[EXIF] No orientation for {os.path.basename(path)}: {e}")
            return 0

        if value is None:
            return 0
        rot = EXIF_ROTATIONS.get(int(value), 0)
        if rot:
            debug(f"[EXIF] {os.path.basename(path)}: orientation={value} -> {rot}")
        return rot


def is_supported_image(filepath: str) -> bool:
    """Check if file has a supported image extension."""
    ext = os.path.splitext(filepath)[1].lower()
    return ext in IMG_EXTS


def list_images(dirpath: str) -> List[str]:
    """List all supported image files in directory, sorted by name.

    Args:
        dirpath: Directory path to scan.

    Returns:
        List of full paths to image files.
    """
    try:
        names = sorted(os.listdir(dirpath))
    except OSError as e:
        log(f"[DIR][ERR] {dirpath}: {e}")
        return []

    result = []
    for name in names:
        path = os.path.join(dirpath, name)
        if os.path.isfile(path) and is_supported_image(name):
            result.append(path)
    return result


def expand_paths(args: Iterable[str]) -> List[str]:
    """Turn command-line arguments into an ordered list of image paths.

    Directories expand to their supported images; plain files are kept as
    given, whatever their extension, so the decoder gets to decide.
    """
    paths: List[str] = []
    for a in args:
        if os.path.isdir(a):
            found = list_images(a)
            log(f"[ARGS] {a}: {len(found)} images")
            paths.extend(found)
        else:
            paths.append(a)
    return paths
