"""PixelBuffer - one decoded raster held in memory.

Samples are 8 bits per channel, rows are stored top to bottom and every row
is padded up to ``ROW_ALIGN`` bytes. Code that walks the samples must use
``stride`` to step between rows, never ``width * channels``.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .config import ROW_ALIGN
from .errors import AllocationError
from .types import Size

# Pillow mode names for each supported channel count
CHANNEL_MODES = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}
MODE_CHANNELS = {mode: n for n, mode in CHANNEL_MODES.items()}


def row_stride(width: int, channels: int, align: int = ROW_ALIGN) -> int:
    """Bytes per row for a raster of the given width, padded to ``align``."""
    raw = width * channels
    return (raw + align - 1) // align * align


@dataclass(eq=True)
class PixelBuffer:
    """A width x height raster of ``channels`` bytes per pixel."""
    width: int
    height: int
    channels: int
    stride: int
    data: bytearray

    @classmethod
    def allocate(cls, width: int, height: int, channels: int,
                 stride: Optional[int] = None) -> PixelBuffer:
        """Allocate a zero-filled raster.

        Raises:
            AllocationError: if the dimensions are invalid or memory runs out.
        """
        if width < 1 or height < 1:
            raise AllocationError(f"invalid raster size {width}x{height}")
        if channels not in CHANNEL_MODES:
            raise AllocationError(f"unsupported channel count {channels}")
        if stride is None:
            stride = row_stride(width, channels)
        if stride < width * channels:
            raise AllocationError(f"stride {stride} too small for {width}x{channels}")
        try:
            data = bytearray(stride * height)
        except MemoryError as e:
            raise AllocationError(f"out of memory allocating {width}x{height}") from e
        return cls(width, height, channels, stride, data)

    @classmethod
    def from_packed(cls, width: int, height: int, channels: int,
                    packed: bytes, stride: Optional[int] = None) -> PixelBuffer:
        """Build a buffer from tightly packed rows (no padding)."""
        buf = cls.allocate(width, height, channels, stride)
        row_len = width * channels
        if len(packed) < row_len * height:
            raise ValueError(f"expected {row_len * height} bytes, got {len(packed)}")
        if buf.stride == row_len:
            buf.data[:] = packed[:row_len * height]
            return buf
        for y in range(height):
            start = y * buf.stride
            buf.data[start:start + row_len] = packed[y * row_len:(y + 1) * row_len]
        return buf

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def mode(self) -> str:
        """Pillow mode string matching the channel layout."""
        return CHANNEL_MODES[self.channels]

    @property
    def row_bytes(self) -> int:
        """Meaningful bytes per row, excluding padding."""
        return self.width * self.channels

    @property
    def is_valid(self) -> bool:
        return (self.width >= 1 and self.height >= 1
                and self.stride >= self.row_bytes
                and len(self.data) >= self.stride * self.height)

    def offset(self, x: int, y: int) -> int:
        """Byte offset of the first sample of pixel (x, y)."""
        return y * self.stride + x * self.channels

    def pixel(self, x: int, y: int) -> bytes:
        """Samples of pixel (x, y)."""
        off = self.offset(x, y)
        return bytes(self.data[off:off + self.channels])

    def set_pixel(self, x: int, y: int, samples: bytes) -> None:
        off = self.offset(x, y)
        self.data[off:off + self.channels] = samples

    def row(self, y: int) -> memoryview:
        """The meaningful bytes of row y."""
        start = y * self.stride
        return memoryview(self.data)[start:start + self.row_bytes]

    def packed(self) -> bytes:
        """All rows concatenated without padding."""
        if self.stride == self.row_bytes:
            return bytes(self.data[:self.stride * self.height])
        return b"".join(bytes(self.row(y)) for y in range(self.height))

    def __repr__(self) -> str:
        return (f"PixelBuffer({self.width}x{self.height}, {self.mode}, "
                f"stride={self.stride})")
