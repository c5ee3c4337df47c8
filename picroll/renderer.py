"""Renderer - the raylib display sink.

The Renderer owns the window-side copy of the live image (a GPU texture) and
draws it every frame. It never changes the image list or the scale settings;
the Viewer pushes new buffers into it through the DisplaySink interface.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .pixbuf import PixelBuffer
    from .state import AppState

from .interfaces import DisplaySink
from .rl_compat import (
    rl, make_vec2 as RL_V2, make_color as RL_Color,
    set_window_title, texture_from_buffer, unload_texture, is_texture_valid,
)
from .config import WINDOW_TITLE_PREFIX
from .logging import log, debug


class Renderer(DisplaySink):
    """
    Shows the live PixelBuffer in the raylib window.

    Usage:
        renderer = Renderer(state)
        renderer.present(buffer)         # from the Viewer
        renderer.begin_frame()
        renderer.draw_image()
        renderer.end_frame()
    """

    def __init__(self, state: "AppState"):
        self.state = state
        self._texture: Any = None
        self._tex_w = 0
        self._tex_h = 0

    @property
    def has_texture(self) -> bool:
        return is_texture_valid(self._texture)

    # ═══════════════════════════════════════════════════════════════════════
    # DisplaySink
    # ═══════════════════════════════════════════════════════════════════════

    def present(self, buffer: "PixelBuffer") -> None:
        tex = texture_from_buffer(buffer)
        old = self._texture
        self._texture, self._tex_w, self._tex_h = tex, buffer.width, buffer.height
        unload_texture(old)
        debug(f"[RENDER] Texture {buffer.width}x{buffer.height} id={getattr(tex, 'id', 0)}")

        self._sync_window(buffer.width, buffer.height)
        self._update_title()

    def notify_geometry_changed(self, width: int, height: int) -> None:
        self._sync_window(width, height)

    def _sync_window(self, width: int, height: int) -> None:
        """Fit the window to the image, or to the monitor in presentation mode."""
        display = self.state.display
        if display.is_presentation:
            width, height = display.monitor_w, display.monitor_h
        if (width, height) == (display.window_w, display.window_h):
            return
        rl.SetWindowSize(int(width), int(height))
        display.window_w, display.window_h = int(width), int(height)
        debug(f"[RENDER] Window resized to {width}x{height}")

    def _update_title(self) -> None:
        rec = self.state.current
        if rec is None:
            return
        title = f"{WINDOW_TITLE_PREFIX}: {rec.name} ({rec.true_width} x {rec.true_height})"
        label = self.state.display.mode_label
        if label:
            title += f" [{label}]"
        if rec.annotation:
            title += f" - {rec.annotation}"
        set_window_title(title)

    def release(self) -> None:
        """Drop the GPU texture."""
        unload_texture(self._texture)
        self._texture = None
        log("[RENDER] Texture released")

    # ═══════════════════════════════════════════════════════════════════════
    # Drawing
    # ═══════════════════════════════════════════════════════════════════════

    def begin_frame(self) -> None:
        """Begin a new frame."""
        rl.BeginDrawing()

    def end_frame(self) -> None:
        """End the current frame."""
        rl.EndDrawing()

    def draw_image(self) -> None:
        """Clear to black and draw the live image centered in the window."""
        rl.ClearBackground(RL_Color(0, 0, 0, 255))
        if not self.has_texture:
            return
        sw, sh = rl.GetScreenWidth(), rl.GetScreenHeight()
        x = (sw - self._tex_w) // 2
        y = (sh - self._tex_h) // 2
        rl.DrawTextureV(self._texture, RL_V2(x, y), RL_Color(255, 255, 255, 255))

    def draw_frame(self) -> None:
        """Draw a complete frame."""
        self.begin_frame()
        self.draw_image()
        self.end_frame()

