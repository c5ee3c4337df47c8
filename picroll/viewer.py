"""Viewer - navigation and lifecycle entry points for one session.

Everything a key binding can do goes through a Viewer method: moving
through the list, rotating, changing the scale mode, deleting, taking
notes. The Viewer ties the image list, the transform controller, the
slideshow timer and the collaborators together.
"""

from __future__ import annotations
import os
from typing import Callable, Optional, Union

from .config import (DELETE_YES_KEYS, DELETE_NO_KEYS, QUIT_YES_KEYS, QUIT_NO_KEYS,
                     PROMPT_DELETE, PROMPT_QUIT)
from .errors import DecodeError, DeleteError, SessionEnded
from .interfaces import Decoder, DisplaySink, MetadataReader, Prompter
from .logging import log, debug, now
from .pipeline import TransformController
from .slideshow import SlideshowTimer
from .state import AppState, ImageRecord
from .types import Boundary, ScaleMode

NavResult = Union[ImageRecord, Boundary]


class Viewer:
    """One viewing session over an AppState."""

    def __init__(
        self,
        state: AppState,
        decoder: Decoder,
        metadata: MetadataReader,
        prompter: Prompter,
        sink: DisplaySink,
        delay_seconds: float = 0,
        clock: Callable[[], float] = now,
        delete_file: Callable[[str], None] = os.remove,
    ):
        self.state = state
        self.prompter = prompter
        self.sink = sink
        self.controller = TransformController(decoder, metadata, state.display,
                                              sink=sink, prompter=prompter)
        self.slideshow = SlideshowTimer(self._on_slideshow_timer, delay_seconds, clock)
        self._delete_file = delete_file

    @property
    def current(self) -> Optional[ImageRecord]:
        return self.state.images.current

    def _require_current(self) -> ImageRecord:
        rec = self.state.images.current
        if rec is None:
            raise SessionEnded("no current image")
        return rec

    # ═══════════════════════════════════════════════════════════════════════
    # Lifecycle
    # ═══════════════════════════════════════════════════════════════════════

    def start(self) -> ImageRecord:
        """Show the first loadable image.

        Raises:
            SessionEnded: if no image in the list can be loaded.
        """
        result = self.next_image(ask_quit=False)
        if isinstance(result, Boundary):
            raise SessionEnded("no loadable images")
        log(f"[START] {result.path} ({self.state.count} images)")
        return result

    def update(self) -> None:
        """Per-frame housekeeping: fire the slideshow timer if it's due."""
        self.slideshow.update()

    def end_session(self) -> None:
        """Print the note lists and drop everything the session holds."""
        for line in self.state.notes.format():
            print(line)
        self.slideshow.cancel()
        self.controller.release()
        self.state.images.clear()
        log("[EXIT] Session ended")

    def show(self) -> None:
        """Hand the live buffer to the display and arm the slideshow."""
        buf = self.controller.buffer
        if buf is None:
            return
        self.sink.present(buf)
        self.slideshow.maybe_arm(self.state.count)

    # ═══════════════════════════════════════════════════════════════════════
    # Navigation
    # ═══════════════════════════════════════════════════════════════════════

    def next_image(self, ask_quit: bool = True) -> NavResult:
        """Advance to the next loadable image and show it.

        Raises:
            SessionEnded: if the end of the list was reached and the user
                confirmed quitting.
        """
        debug("[NAV] ================= next =================")
        result = self.state.images.advance(self.controller.load_and_rotate)
        if result is Boundary.END_OF_LIST:
            log("[NAV] End of list")
            if ask_quit and self.prompter.confirm(PROMPT_QUIT, QUIT_YES_KEYS, QUIT_NO_KEYS):
                raise SessionEnded("quit at end of list")
            return result
        self.show()
        return result

    def prev_image(self) -> NavResult:
        """Go back to the previous loadable image and show it."""
        debug("[NAV] ================= prev =================")
        result = self.state.images.retreat(self.controller.load_and_rotate)
        if result is Boundary.START_OF_LIST:
            log("[NAV] Start of list")
            return result
        self.show()
        return result

    def first_image(self) -> NavResult:
        """Jump back to the first loadable image."""
        images = self.state.images
        saved = images.cursor_slot
        images.rewind()
        result = self.next_image(ask_quit=False)
        if isinstance(result, Boundary):
            images.cursor_slot = saved
        return result

    def this_image(self) -> NavResult:
        """(Re)load and show the current image, moving on if it's unreadable."""
        rec = self._require_current()
        try:
            self.controller.load_and_rotate(rec)
        except DecodeError as e:
            log(f"[NAV] {e}")
            result = self.next_image(ask_quit=False)
            if result is Boundary.END_OF_LIST:
                result = self.prev_image()
            if isinstance(result, Boundary):
                raise SessionEnded("nothing left to show") from e
            return result
        self.show()
        return rec

    def _on_slideshow_timer(self) -> None:
        self.next_image(ask_quit=False)

    # ═══════════════════════════════════════════════════════════════════════
    # Transforms
    # ═══════════════════════════════════════════════════════════════════════

    def rotate(self, degrees: int) -> bool:
        """Rotate the current image by degrees (negative = counter-clockwise)."""
        rec = self._require_current()
        ok = self.controller.scale_and_rotate(rec, degrees)
        if ok:
            self.show()
        return ok

    def rescale(self) -> bool:
        """Re-apply the scale mode to the current image."""
        return self.rotate(0)

    def set_scale_mode(self, mode: ScaleMode, ratio: Optional[float] = None) -> bool:
        display = self.state.display
        display.scale_mode = mode
        if ratio is not None:
            display.set_ratio(ratio)
        log(f"[SCALE] mode={display.scale_mode.name} ratio={display.scale_ratio:g}")
        return self.rescale()

    def toggle_fullscreen(self) -> bool:
        self.state.display.toggle_mode(ScaleMode.FULLSCREEN)
        log(f"[SCALE] mode={self.state.display.scale_mode.name}")
        return self.rescale()

    def toggle_fullsize(self) -> bool:
        self.state.display.toggle_mode(ScaleMode.FULLSIZE)
        log(f"[SCALE] mode={self.state.display.scale_mode.name}")
        return self.rescale()

    def toggle_presentation(self) -> bool:
        self.state.display.toggle_presentation()
        log(f"[DISPLAY] mode={self.state.display.display_mode.name}")
        return self.rescale()

    def double_size(self) -> bool:
        return self._resize_by(2.0)

    def half_size(self) -> bool:
        return self._resize_by(0.5)

    def _resize_by(self, factor: float) -> bool:
        """Scale relative to what's on screen now, measured against the true size."""
        rec = self._require_current()
        if rec.true_width:
            ratio = rec.cur_width / rec.true_width * factor
        else:
            ratio = self.state.display.scale_ratio * factor
        return self.set_scale_mode(ScaleMode.IMAGE_RATIO, ratio)

    # ═══════════════════════════════════════════════════════════════════════
    # Deletion, notes, annotations
    # ═══════════════════════════════════════════════════════════════════════

    def delete_current(self, confirm: bool = True) -> bool:
        """Delete the current image from disk and show a neighbour.

        Returns:
            True if the file was deleted.

        Raises:
            SessionEnded: if that was the last image.
        """
        rec = self._require_current()
        if confirm and not self.prompter.confirm(PROMPT_DELETE.format(path=rec.path),
                                                 DELETE_YES_KEYS, DELETE_NO_KEYS):
            return False

        path = rec.path
        try:
            remaining = self.state.images.remove(rec, self._delete_file)
        except DeleteError as e:
            log(f"[DELETE][ERR] {e}")
            return False

        self.state.notes.forget(path)
        if self.controller.owner is rec:
            self.controller.release()
        if remaining is None:
            log("[DELETE] No more images")
            raise SessionEnded("last image deleted")

        self.this_image()
        return True

    def annotate(self, text: Optional[str]) -> None:
        """Attach a note to the current image; empty text clears it."""
        rec = self._require_current()
        rec.annotation = text or None
        debug(f"[NOTE] {rec.name}: {rec.annotation!r}")

    def set_note(self, n: int) -> bool:
        """Toggle the current image in note list n."""
        rec = self._require_current()
        added = self.state.notes.toggle(n, rec.path)
        log(f"[NOTE] {rec.name} {'added to' if added else 'removed from'} list {n}")
        return added

    def set_slideshow_delay(self, seconds: float) -> None:
        """0 stops the slideshow; otherwise arms it if nothing is pending."""
        self.slideshow.set_delay(seconds)
        if seconds > 0:
            self.slideshow.maybe_arm(self.state.count)
