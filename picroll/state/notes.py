"""Notes state - numbered lists of paths the user flagged during a session."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List

from ..config import NOTE_LISTS


@dataclass
class NotesState:
    """Note lists 0 through 9, printed when the session ends."""
    lists: Dict[int, List[str]] = field(
        default_factory=lambda: {n: [] for n in range(NOTE_LISTS)})

    def toggle(self, n: int, path: str) -> bool:
        """Add path to list n, or take it out if it's already there.

        Returns:
            True if the path is now in the list.
        """
        if n not in self.lists:
            raise ValueError(f"note list must be 0-{NOTE_LISTS - 1}, got {n}")
        notes = self.lists[n]
        if path in notes:
            notes.remove(path)
            return False
        notes.append(path)
        return True

    def forget(self, path: str) -> None:
        """Drop a path from every list (after it was deleted)."""
        for notes in self.lists.values():
            if path in notes:
                notes.remove(path)

    def format(self) -> List[str]:
        """One line per non-empty list: ``Note 3: a.jpg b.jpg``."""
        return [f"Note {n}: {' '.join(notes)}"
                for n, notes in sorted(self.lists.items()) if notes]
