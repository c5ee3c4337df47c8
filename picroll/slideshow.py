"""Slideshow timer - single-shot deferred advance, polled from the main loop."""

from __future__ import annotations
from typing import Callable, Optional

from .logging import now, log, debug


class SlideshowTimer:
    """Advances to the next image ``delay_seconds`` after each display.

    The timer never runs on its own thread: ``update()`` is called once per
    frame and fires the callback when the deadline has passed. Manual
    navigation does not cancel a pending timer, so a keypress shortly before
    it fires is followed by one more advance.
    """

    def __init__(self, on_fire: Callable[[], None], delay_seconds: float = 0,
                 clock: Callable[[], float] = now):
        self.delay_seconds = delay_seconds
        self._on_fire = on_fire
        self._clock = clock
        self._fire_at: Optional[float] = None

    @property
    def pending(self) -> bool:
        return self._fire_at is not None

    @property
    def enabled(self) -> bool:
        return self.delay_seconds > 0

    def set_delay(self, seconds: float) -> None:
        """Change the delay. 0 stops the slideshow at the next fire."""
        self.delay_seconds = max(0, seconds)
        log(f"[SLIDESHOW] delay={self.delay_seconds}s")

    def cancel(self) -> None:
        """Stop the slideshow. A pending fire becomes a no-op."""
        self.set_delay(0)

    def maybe_arm(self, list_size: int) -> bool:
        """Arm the timer after an image was shown.

        Returns:
            True if a new fire was scheduled.
        """
        if self.delay_seconds <= 0 or self.pending or list_size <= 1:
            return False
        self._fire_at = self._clock() + self.delay_seconds
        debug(f"[SLIDESHOW] Armed for {self.delay_seconds * 1000:.0f} msec")
        return True

    def update(self) -> bool:
        """Fire if the deadline has passed.

        Returns:
            True if the advance callback ran.
        """
        if self._fire_at is None or self._clock() < self._fire_at:
            return False
        self._fire_at = None
        if self.delay_seconds <= 0:
            debug("[SLIDESHOW] Fired after cancel, ignoring")
            return False
        debug("[SLIDESHOW] Timer fired")
        self._on_fire()
        return True
