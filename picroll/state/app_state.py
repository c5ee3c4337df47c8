"""Composite AppState - everything one viewing session owns."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .display import DisplayState
from .images import ImageList, ImageRecord
from .notes import NotesState


@dataclass
class AppState:
    """
    Session context passed to every operation.

    Created at startup from the initial file list and torn down when the
    list empties or the user quits:
        state = AppState.from_paths(paths)
        state.images.current
        state.display.scale_mode
    """
    images: ImageList = field(default_factory=ImageList)
    display: DisplayState = field(default_factory=DisplayState)
    notes: NotesState = field(default_factory=NotesState)

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> AppState:
        return cls(images=ImageList.from_paths(paths))

    @property
    def current(self) -> Optional[ImageRecord]:
        return self.images.current

    @property
    def count(self) -> int:
        return len(self.images)

    @property
    def position(self) -> int:
        """1-based position of the current record, 0 if none."""
        cur = self.images.current
        if cur is None:
            return 0
        return self.images.position(cur) + 1
