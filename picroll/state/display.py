"""Display state - monitor and window size, scale mode, display mode."""

from __future__ import annotations
from dataclasses import dataclass

from ..config import (
    DEFAULT_MONITOR_W, DEFAULT_MONITOR_H,
    DEFAULT_SCALE_RATIO, MIN_SCALE_RATIO, MAX_SCALE_RATIO,
)
from ..math_utils import clamp
from ..types import DisplayMode, ScaleMode


@dataclass
class DisplayState:
    """Everything the scale policy needs to know about the screen."""
    monitor_w: int = DEFAULT_MONITOR_W
    monitor_h: int = DEFAULT_MONITOR_H
    window_w: int = 0
    window_h: int = 0
    scale_mode: ScaleMode = ScaleMode.NORMAL
    scale_ratio: float = DEFAULT_SCALE_RATIO
    display_mode: DisplayMode = DisplayMode.NORMAL

    @property
    def is_presentation(self) -> bool:
        return self.display_mode == DisplayMode.PRESENTATION

    def set_ratio(self, ratio: float) -> None:
        """Set the scale ratio, kept within sane bounds."""
        self.scale_ratio = clamp(float(ratio), MIN_SCALE_RATIO, MAX_SCALE_RATIO)

    def toggle_mode(self, mode: ScaleMode) -> None:
        """Switch to ``mode``, or back to NORMAL if it's already active."""
        if self.scale_mode == mode:
            self.scale_mode = ScaleMode.NORMAL
        else:
            self.scale_mode = mode
        self.scale_ratio = DEFAULT_SCALE_RATIO

    def toggle_presentation(self) -> None:
        if self.is_presentation:
            self.display_mode = DisplayMode.NORMAL
        else:
            self.display_mode = DisplayMode.PRESENTATION

    @property
    def mode_label(self) -> str:
        """Short human-readable description, for the title bar."""
        if self.scale_mode == ScaleMode.FULLSCREEN:
            return "fullscreen"
        if self.scale_mode == ScaleMode.FULLSIZE:
            return "full size"
        if self.scale_ratio != 1.0:
            return f"x{self.scale_ratio:g}"
        return ""
