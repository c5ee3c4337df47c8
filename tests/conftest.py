"""
Shared pytest fixtures and in-memory collaborators for picroll tests.

Nothing here touches raylib; images are synthetic PixelBuffers whose
pixels encode their own coordinates so rotations can be checked exactly.
"""
from typing import Dict, List, Tuple

import pytest

from picroll.errors import DecodeError
from picroll.interfaces import Decoder, DisplaySink, MetadataReader, Prompter
from picroll.pixbuf import PixelBuffer
from picroll.state import AppState, DisplayState


def patterned_buffer(w: int, h: int, channels: int = 3) -> PixelBuffer:
    """Pixel (x, y) holds x & 0xff, y & 0xff, (x + y) & 0xff (then 255s)."""
    buf = PixelBuffer.allocate(w, h, channels)
    for y in range(h):
        for x in range(w):
            samples = [x & 0xff, y & 0xff, (x + y) & 0xff, 255][:channels]
            buf.set_pixel(x, y, bytes(samples))
    return buf


class FakeDecoder(Decoder):
    """Decodes paths registered with a size; anything else fails."""

    def __init__(self, sizes: Dict[str, Tuple[int, int]]):
        self.sizes = dict(sizes)
        self.calls: List[str] = []

    def decode(self, path: str) -> PixelBuffer:
        self.calls.append(path)
        if path not in self.sizes:
            raise DecodeError(path, "not an image")
        w, h = self.sizes[path]
        return patterned_buffer(w, h)


class FakeMetadata(MetadataReader):
    def __init__(self, hints: Dict[str, int] = None):
        self.hints = hints or {}
        self.calls: List[str] = []

    def read_orientation_hint(self, path: str) -> int:
        self.calls.append(path)
        return self.hints.get(path, 0)


class FakePrompter(Prompter):
    """Answers every question with ``answer`` and remembers the questions."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.messages: List[str] = []

    def confirm(self, message: str, affirmative_keys: str, negative_keys: str) -> bool:
        self.messages.append(message)
        return self.answer


class FakeSink(DisplaySink):
    def __init__(self):
        self.presented: List[PixelBuffer] = []
        self.geometry: List[Tuple[int, int]] = []

    def present(self, buffer: PixelBuffer) -> None:
        self.presented.append(buffer)

    def notify_geometry_changed(self, width: int, height: int) -> None:
        self.geometry.append((width, height))


class FakeClock:
    def __init__(self, t: float = 100.0):
        self.t = t

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


@pytest.fixture
def display():
    """A small monitor so test images don't need to be huge."""
    return DisplayState(monitor_w=200, monitor_h=150)


@pytest.fixture
def prompter():
    return FakePrompter()


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_state(display):
    def _make(paths):
        state = AppState.from_paths(paths)
        state.display = display
        return state
    return _make
