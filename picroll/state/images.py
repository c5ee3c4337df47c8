"""Image list state - the circular list of records and the current cursor."""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Optional, Union

from ..errors import DecodeError, DeleteError
from ..logging import log, debug
from ..types import Boundary, Size


@dataclass
class ImageRecord:
    """Per-image bookkeeping. One per path given at startup."""
    path: str
    slot: int = -1
    true_width: int = 0     # 0 until the first successful load
    true_height: int = 0
    cur_width: int = 0
    cur_height: int = 0
    cur_rot: int = 0        # 0, 90, 180 or 270
    metadata_rot: int = 0   # orientation hint, read once
    annotation: Optional[str] = None
    next: Optional[int] = None
    prev: Optional[int] = None

    @property
    def is_loaded(self) -> bool:
        return self.true_width != 0 and self.true_height != 0

    @property
    def true_size(self) -> Size:
        return Size(self.true_width, self.true_height)

    @property
    def cur_size(self) -> Size:
        return Size(self.cur_width, self.cur_height)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


Loader = Callable[[ImageRecord], None]


@dataclass
class ImageList:
    """Circular doubly-linked list of ImageRecords.

    Records live in an arena (``slots``) and link to each other by slot
    index, so removing a record never invalidates the others. ``anchor`` is
    the first record in traversal order and ``cursor`` the current one
    (None until the first advance).
    """
    slots: List[Optional[ImageRecord]] = field(default_factory=list)
    anchor_slot: Optional[int] = None
    cursor_slot: Optional[int] = None
    count: int = 0

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> ImageList:
        images = cls()
        images.extend(paths)
        return images

    # ═══════════════════════════════════════════════════════════════════════
    # Structure
    # ═══════════════════════════════════════════════════════════════════════

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[ImageRecord]:
        """Records in traversal order, starting at the anchor."""
        rec = self.anchor
        for _ in range(self.count):
            yield rec
            rec = self.next_of(rec)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    @property
    def anchor(self) -> Optional[ImageRecord]:
        return self._at(self.anchor_slot)

    @property
    def current(self) -> Optional[ImageRecord]:
        return self._at(self.cursor_slot)

    def _at(self, slot: Optional[int]) -> Optional[ImageRecord]:
        if slot is None:
            return None
        return self.slots[slot]

    def next_of(self, rec: ImageRecord) -> ImageRecord:
        return self.slots[rec.next]

    def prev_of(self, rec: ImageRecord) -> ImageRecord:
        return self.slots[rec.prev]

    def position(self, rec: ImageRecord) -> int:
        """Zero-based position of rec in traversal order, -1 if absent."""
        for i, r in enumerate(self):
            if r is rec:
                return i
        return -1

    def append(self, path: str) -> ImageRecord:
        """Insert a record at the end (just before the anchor)."""
        slot = len(self.slots)
        rec = ImageRecord(path=path, slot=slot)
        self.slots.append(rec)
        anchor = self.anchor
        if anchor is None:
            rec.next = rec.prev = slot
            self.anchor_slot = slot
        else:
            last = self.prev_of(anchor)
            last.next = slot
            rec.prev = last.slot
            rec.next = anchor.slot
            anchor.prev = slot
        self.count += 1
        return rec

    def extend(self, paths: Iterable[str]) -> None:
        for p in paths:
            self.append(p)

    def clear(self) -> None:
        """Drop every record (and its annotation). Used when replacing the working set."""
        for rec in self.slots:
            if rec is not None:
                rec.annotation = None
                rec.next = rec.prev = None
        self.slots = []
        self.anchor_slot = None
        self.cursor_slot = None
        self.count = 0

    # ═══════════════════════════════════════════════════════════════════════
    # Navigation
    # ═══════════════════════════════════════════════════════════════════════

    def rewind(self) -> None:
        """Forget the cursor so the next advance lands on the anchor."""
        self.cursor_slot = None

    def advance(self, loader: Loader) -> Union[ImageRecord, Boundary]:
        """Move to the next loadable record.

        Unreadable records are skipped. If the end of the list is reached
        without loading anything the cursor goes back where it started.

        Args:
            loader: Called with each candidate; raises DecodeError to skip it.

        Returns:
            The newly current record, or Boundary.END_OF_LIST.
        """
        start = self.cursor_slot
        while True:
            if self.cursor_slot is None:
                if self.anchor_slot is None:
                    return Boundary.END_OF_LIST
                self.cursor_slot = self.anchor_slot
            else:
                cur = self.current
                if cur.next is None or cur.next == self.anchor_slot:
                    self.cursor_slot = start
                    return Boundary.END_OF_LIST
                self.cursor_slot = cur.next

            if self._try_load(loader):
                return self.current

    def retreat(self, loader: Loader) -> Union[ImageRecord, Boundary]:
        """Move to the previous loadable record.

        From the initial state (no cursor) this lands on the last record;
        at the anchor it reports Boundary.START_OF_LIST.
        """
        start = self.cursor_slot
        while True:
            if self.cursor_slot is None:
                anchor = self.anchor
                if anchor is None:
                    return Boundary.START_OF_LIST
                self.cursor_slot = anchor.prev if anchor.prev is not None else anchor.slot
            else:
                if self.cursor_slot == self.anchor_slot or self.current.prev is None:
                    self.cursor_slot = start
                    return Boundary.START_OF_LIST
                self.cursor_slot = self.current.prev

            if self._try_load(loader):
                return self.current

    def _try_load(self, loader: Loader) -> bool:
        rec = self.current
        try:
            loader(rec)
        except DecodeError as e:
            log(f"[NAV] Skipping {rec.name}: {e.message}")
            return False
        debug(f"[NAV] Now at {rec.name}")
        return True

    # ═══════════════════════════════════════════════════════════════════════
    # Removal
    # ═══════════════════════════════════════════════════════════════════════

    def remove(self, rec: ImageRecord,
               delete_file: Callable[[str], None] = os.remove) -> Optional[ImageRecord]:
        """Delete rec's file from disk, then unlink it.

        Raises:
            DeleteError: if the file can't be deleted. The list is unchanged.

        Returns:
            The new current record, or None if the list is now empty.
        """
        try:
            delete_file(rec.path)
        except OSError as e:
            log(f"[DELETE][ERR] Can't delete {rec.path}: {e}")
            raise DeleteError(rec.path, str(e)) from e
        log(f"[DELETE] Deleted {rec.path}")
        return self.unlink(rec)

    def unlink(self, rec: ImageRecord) -> Optional[ImageRecord]:
        """Take rec out of the ring, moving the cursor to a neighbour.

        Returns:
            The new current record, or None if the list is now empty.
        """
        if self.slots[rec.slot] is not rec:
            raise ValueError(f"{rec.path} is not in this list")

        was_anchor = rec.slot == self.anchor_slot
        prev = self.prev_of(rec)
        nxt = self.next_of(rec)

        if self.count == 1:
            # Only image: the list becomes empty.
            self.anchor_slot = None
            self.cursor_slot = None
            was_anchor = False
        elif prev is nxt:
            # One image left after this one.
            prev.next = prev.prev = prev.slot
            self.anchor_slot = self.cursor_slot = prev.slot
            was_anchor = False
        elif rec.next == self.anchor_slot:
            # Last image in traversal order: go back.
            self.cursor_slot = prev.slot
            prev.next = self.anchor_slot
            self.anchor.prev = prev.slot
        else:
            self.cursor_slot = nxt.slot
            nxt.prev = prev.slot
            prev.next = nxt.slot

        if was_anchor:
            self.anchor_slot = rec.next

        self.slots[rec.slot] = None
        self.count -= 1
        rec.annotation = None
        rec.next = rec.prev = None
        return self.current
