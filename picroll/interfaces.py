"""Collaborator interfaces consumed by the viewer core.

The core never talks to a codec, a window or a dialog directly; it goes
through these small abstract classes so the windowing layer (and the test
suite) can plug in their own implementations.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .pixbuf import PixelBuffer


class Decoder(ABC):
    """Turns an image path into a PixelBuffer."""

    @abstractmethod
    def decode(self, path: str) -> "PixelBuffer":
        """Decode ``path``. Raises DecodeError with a readable message."""
        pass


class MetadataReader(ABC):
    """Reads the embedded orientation hint of an image."""

    @abstractmethod
    def read_orientation_hint(self, path: str) -> int:
        """Clockwise degrees the image should be shown at, 0 if unknown."""
        pass


class Prompter(ABC):
    """Asks the user a yes/no question."""

    @abstractmethod
    def confirm(self, message: str, affirmative_keys: str, negative_keys: str) -> bool:
        """Return True if the user answered with one of affirmative_keys."""
        pass


class DisplaySink(ABC):
    """The windowing layer that shows the live buffer."""

    @abstractmethod
    def present(self, buffer: "PixelBuffer") -> None:
        """Show ``buffer``, replacing whatever was shown before."""
        pass

    def notify_geometry_changed(self, width: int, height: int) -> None:
        """The live buffer may have a new size; resize or reposition if needed."""
        pass
