"""Core data types for picroll."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum, auto


class ScaleMode(IntEnum):
    """Policies for deriving the display size from the true size."""
    NORMAL = 0        # true size, shrunk to fit the monitor
    FULLSIZE = 1      # true size, even if bigger than the monitor
    FULLSCREEN = 2    # larger axis matches the monitor (or window), up or down
    SCREEN_RATIO = 3  # like NORMAL, then multiplied by the ratio
    IMAGE_RATIO = 4   # true size multiplied by the ratio


class DisplayMode(Enum):
    """How the window is placed on screen."""
    NORMAL = auto()
    PRESENTATION = auto()   # whole screen, image centered


class Boundary(Enum):
    """Navigation signals returned when the list can't move further."""
    END_OF_LIST = auto()
    START_OF_LIST = auto()


@dataclass(frozen=True)
class Size:
    """A width/height pair."""
    w: int
    h: int

    @property
    def swapped(self) -> Size:
        return Size(self.h, self.w)

    def exceeds(self, other: Size) -> bool:
        """True if either axis is larger than the other size's."""
        return self.w > other.w or self.h > other.h


def normalize_degrees(degrees: int) -> int:
    """Fold any multiple of 90 into [0, 360)."""
    return degrees % 360


def is_aspect_changing(degrees: int) -> bool:
    """90 and 270 swap width and height; 0 and 180 don't."""
    return normalize_degrees(degrees) % 180 != 0
