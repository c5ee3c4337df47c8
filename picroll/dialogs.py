"""Prompt overlay - modal yes/no questions drawn over the current image."""

from __future__ import annotations
from typing import Optional

from .interfaces import Prompter
from .renderer import Renderer
from .rl_compat import rl, make_color as RL_Color, draw_text, measure_text
from .config import (
    PROMPT_FONT_SIZE, PROMPT_PADDING, PROMPT_BG_ALPHA,
    KEY_ENTER, KEY_CLOSE,
)
from .logging import log


def _answer(ch: str, affirmative_keys: str, negative_keys: str) -> Optional[bool]:
    """Map one keypress to an answer; None means keep waiting."""
    if ch in affirmative_keys:
        return True
    if ch in negative_keys or not negative_keys:
        return False
    return None


def _describe(keys: str) -> str:
    return "/".join("Enter" if k == "\n" else "Space" if k == " " else k for k in keys)


class RaylibPrompter(Prompter):
    """Blocks in its own frame loop until the user answers.

    Escape or closing the window counts as "no".
    """

    def __init__(self, renderer: Renderer):
        self.renderer = renderer

    def confirm(self, message: str, affirmative_keys: str, negative_keys: str) -> bool:
        log(f"[PROMPT] {message}")
        hint = f"[{_describe(affirmative_keys)}]"
        if negative_keys:
            hint += f" / [{_describe(negative_keys)}]"

        # Drain whatever was typed before the prompt appeared
        while rl.GetCharPressed():
            pass

        while not rl.WindowShouldClose():
            answer = self._poll(affirmative_keys, negative_keys)
            if answer is not None:
                log(f"[PROMPT] -> {'yes' if answer else 'no'}")
                return answer
            self.renderer.begin_frame()
            self.renderer.draw_image()
            self._draw_overlay(message, hint)
            self.renderer.end_frame()

        log("[PROMPT] Window closed, treating as no")
        return False

    def _poll(self, affirmative_keys: str, negative_keys: str) -> Optional[bool]:
        if rl.IsKeyPressed(KEY_CLOSE):
            return False
        if rl.IsKeyPressed(KEY_ENTER):
            return _answer("\n", affirmative_keys, negative_keys)
        code = rl.GetCharPressed()
        while code:
            answer = _answer(chr(code), affirmative_keys, negative_keys)
            if answer is not None:
                return answer
            code = rl.GetCharPressed()
        return None

    def _draw_overlay(self, message: str, hint: str) -> None:
        sw, sh = rl.GetScreenWidth(), rl.GetScreenHeight()
        size = PROMPT_FONT_SIZE
        text_w = max(measure_text(message, size), measure_text(hint, size))
        box_w = text_w + 2 * PROMPT_PADDING
        box_h = 2 * size + 3 * PROMPT_PADDING
        x = max(0, (sw - box_w) // 2)
        y = max(0, (sh - box_h) // 2)

        rl.DrawRectangle(x, y, box_w, box_h, RL_Color(0, 0, 0, int(255 * PROMPT_BG_ALPHA)))
        rl.DrawRectangleLines(x, y, box_w, box_h, RL_Color(255, 255, 255, 160))
        white = RL_Color(255, 255, 255, 255)
        draw_text(message, x + PROMPT_PADDING, y + PROMPT_PADDING, size, white)
        draw_text(hint, x + PROMPT_PADDING, y + 2 * PROMPT_PADDING + size, size,
                  RL_Color(200, 200, 200, 255))
