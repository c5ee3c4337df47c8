"""State management submodules for picroll."""

from .images import ImageRecord, ImageList
from .display import DisplayState
from .notes import NotesState
from .app_state import AppState

__all__ = [
    'ImageRecord',
    'ImageList',
    'DisplayState',
    'NotesState',
    'AppState',
]
