"""Command Pattern for input handling.

Commands encapsulate actions that can be triggered by key bindings.
Each command has an execute() method and optional can_execute() for guards;
both receive the session's Viewer.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .viewer import Viewer

from .errors import SessionEnded
from .logging import log
from .types import Boundary


class Command(ABC):
    """Base class for all commands."""

    @abstractmethod
    def execute(self, viewer: "Viewer") -> bool:
        """Execute the command. Returns True if action was taken."""
        pass

    def can_execute(self, viewer: "Viewer") -> bool:
        """Check if command can be executed. Override for guards."""
        return True


class _NeedsImage(Command, ABC):
    def can_execute(self, viewer: "Viewer") -> bool:
        return viewer.current is not None


# ═══════════════════════════════════════════════════════════════════════════
# Navigation Commands
# ═══════════════════════════════════════════════════════════════════════════

class NextImage(_NeedsImage):
    """Go to the next image; at the end of the list, offer to quit."""

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] NextImage: {viewer.state.position}/{viewer.state.count}")
        return not isinstance(viewer.next_image(), Boundary)


class PrevImage(_NeedsImage):
    """Go to the previous image."""

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] PrevImage: {viewer.state.position}/{viewer.state.count}")
        return not isinstance(viewer.prev_image(), Boundary)


class FirstImage(_NeedsImage):
    """Go back to the first image."""

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] FirstImage")
        return not isinstance(viewer.first_image(), Boundary)


# ═══════════════════════════════════════════════════════════════════════════
# Image Transformation Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class Rotate(_NeedsImage):
    """Rotate the current image; 90 is clockwise, -90 counter-clockwise."""
    degrees: int = 90

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] Rotate: {self.degrees}")
        return viewer.rotate(self.degrees)


class DoubleSize(_NeedsImage):
    """Show the current image at twice its on-screen size."""

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] DoubleSize")
        return viewer.double_size()


class HalfSize(_NeedsImage):
    """Show the current image at half its on-screen size."""

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] HalfSize")
        return viewer.half_size()


# ═══════════════════════════════════════════════════════════════════════════
# Mode Toggle Commands
# ═══════════════════════════════════════════════════════════════════════════

class ToggleFullScreen(_NeedsImage):
    """Toggle between fit-to-window and fit-to-screen."""

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] ToggleFullScreen")
        return viewer.toggle_fullscreen()


class ToggleFullSize(_NeedsImage):
    """Toggle between fit-to-window and native size."""

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] ToggleFullSize")
        return viewer.toggle_fullsize()


class TogglePresentation(_NeedsImage):
    """Toggle presentation mode (black full-monitor background)."""

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] TogglePresentation")
        return viewer.toggle_presentation()


# ═══════════════════════════════════════════════════════════════════════════
# File and Note Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class DeleteImage(_NeedsImage):
    """Delete the current image from disk after asking."""
    confirm: bool = True

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] DeleteImage: {viewer.current.path}")
        return viewer.delete_current(confirm=self.confirm)


@dataclass
class ToggleNote(_NeedsImage):
    """Add the current image to note list n, or take it off again."""
    n: int = 0

    def execute(self, viewer: "Viewer") -> bool:
        if not self.can_execute(viewer):
            return False
        log(f"[CMD] ToggleNote: {self.n}")
        viewer.set_note(self.n)
        return True


# ═══════════════════════════════════════════════════════════════════════════
# App Control Commands
# ═══════════════════════════════════════════════════════════════════════════

class CloseApp(Command):
    """Close the application."""

    def execute(self, viewer: "Viewer") -> bool:
        log(f"[CMD] CloseApp")
        raise SessionEnded("quit")


# ═══════════════════════════════════════════════════════════════════════════
# Command Queue
# ═══════════════════════════════════════════════════════════════════════════

class CommandQueue:
    """Runs commands and keeps a short history of the ones that did something."""

    def __init__(self, max_history: int = 100):
        self._history: list = []
        self._max_history = max_history

    def execute(self, command: Command, viewer: "Viewer") -> bool:
        """Execute a command and optionally track it."""
        if not command.can_execute(viewer):
            return False

        result = command.execute(viewer)
        if result and self._max_history > 0:
            self._history.append(command)
            if len(self._history) > self._max_history:
                self._history.pop(0)

        return result

    @property
    def history(self) -> list:
        """Get command history."""
        return self._history.copy()
