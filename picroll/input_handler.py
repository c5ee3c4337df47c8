"""Input Handler - maps raylib input events to commands.

This module bridges the gap between raw raylib input and the command pattern.
It polls input each frame and returns a list of commands to execute.
Printable keys are read through GetCharPressed so that shifted letters
("R" vs "r") map to different commands; the rest are raylib key codes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .rl_compat import rl
from .commands import (
    Command,
    NextImage, PrevImage, FirstImage,
    Rotate, DoubleSize, HalfSize,
    ToggleFullScreen, ToggleFullSize, TogglePresentation,
    DeleteImage, ToggleNote,
    CloseApp,
)
from .config import (
    KEY_NEXT, KEY_PREV, KEY_HOME,
    KEY_ROTATE_RIGHT, KEY_ROTATE_RIGHT_KP, KEY_ROTATE_LEFT, KEY_ROTATE_LEFT_KP,
    KEY_ROTATE_180, KEY_HALF_SIZE_KP, KEY_CLOSE,
    CHARS_PREV, CHARS_ROTATE_RIGHT, CHARS_ROTATE_LEFT,
    CHARS_DOUBLE_SIZE, CHARS_HALF_SIZE,
    CHARS_FULLSCREEN, CHARS_FULLSIZE, CHARS_PRESENTATION,
    CHARS_DELETE, CHARS_QUIT, CHARS_NOTES,
)
from .logging import increment_event

KEYPAD_KEYS = (KEY_ROTATE_RIGHT_KP, KEY_ROTATE_LEFT_KP, KEY_HALF_SIZE_KP)


def _char_bindings() -> Dict[str, Command]:
    table: Dict[str, Command] = {}

    def bind(chars: str, cmd: Command) -> None:
        for ch in chars:
            table[ch] = cmd

    bind(CHARS_PREV, PrevImage())
    bind(CHARS_ROTATE_RIGHT, Rotate(90))
    bind(CHARS_ROTATE_LEFT, Rotate(-90))
    bind(CHARS_DOUBLE_SIZE, DoubleSize())
    bind(CHARS_HALF_SIZE, HalfSize())
    bind(CHARS_FULLSCREEN, ToggleFullScreen())
    bind(CHARS_FULLSIZE, ToggleFullSize())
    bind(CHARS_PRESENTATION, TogglePresentation())
    bind(CHARS_DELETE, DeleteImage())
    bind(CHARS_QUIT, CloseApp())
    for ch in CHARS_NOTES:
        table[ch] = ToggleNote(int(ch))
    return table


def _key_bindings() -> List[Tuple[int, Command]]:
    return [
        (KEY_NEXT, NextImage()),
        (KEY_PREV, PrevImage()),
        (KEY_HOME, FirstImage()),
        (KEY_ROTATE_RIGHT, Rotate(90)),
        (KEY_ROTATE_RIGHT_KP, Rotate(90)),
        (KEY_ROTATE_LEFT, Rotate(-90)),
        (KEY_ROTATE_LEFT_KP, Rotate(-90)),
        (KEY_ROTATE_180, Rotate(180)),
        (KEY_HALF_SIZE_KP, HalfSize()),
    ]


@dataclass
class InputHandler:
    """Handles input polling and command generation."""

    chars: Dict[str, Command] = field(default_factory=_char_bindings)
    keys: List[Tuple[int, Command]] = field(default_factory=_key_bindings)
    key_close: int = KEY_CLOSE

    def command_for_char(self, ch: str) -> Optional[Command]:
        return self.chars.get(ch)

    def poll(self) -> List[Command]:
        """Poll all inputs and return list of commands to execute."""
        commands: List[Command] = []

        # Always check for close
        if rl.IsKeyPressed(self.key_close):
            commands.append(CloseApp())
            return commands

        for key, cmd in self.keys:
            if rl.IsKeyPressed(key):
                commands.append(cmd)

        # Keypad keys also type digits and '-'; their key binding wins
        keypad = any(rl.IsKeyDown(k) for k in KEYPAD_KEYS)
        code = rl.GetCharPressed()
        while code:
            ch = chr(code)
            # Space is a key binding already; don't let it fire twice
            if not keypad and not ch.isspace():
                cmd = self.command_for_char(ch)
                if cmd is not None:
                    commands.append(cmd)
            code = rl.GetCharPressed()

        if commands:
            increment_event()
        return commands
