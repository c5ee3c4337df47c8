"""Pure target-size calculations - no side effects, no state mutation.

All sizes passed in are already expressed in the orientation the image will
have once the pending rotation is applied.
"""

from __future__ import annotations

from .config import NORMAL_SCALE_SLOP, FULLSCREEN_SCALE_SLOP
from .errors import InvalidScaleMode
from .logging import debug
from .types import ScaleMode, Size


def fit_within(w: int, h: int, max_w: int, max_h: int) -> Size:
    """Scale (w, h) uniformly so it just fits in (max_w, max_h).

    The axis that needs the larger shrink (or the smaller growth) wins, and
    the same factor is applied to both axes. Integer cross-multiplication
    keeps the bound axis exact.
    """
    if w <= 0 or h <= 0:
        return Size(w, h)
    if max_w * h > max_h * w:
        # height bound
        return Size(w * max_h // h, max_h)
    return Size(max_w, h * max_w // w)


def apply_ratio(size: Size, ratio: float) -> Size:
    if ratio == 1.0:
        return size
    return Size(int(size.w * ratio), int(size.h * ratio))


def slop_distance(a: Size, b: Size) -> int:
    """L1 distance between two sizes."""
    return abs(a.w - b.w) + abs(a.h - b.h)


def snap_to_current(target: Size, current: Size, slop: int = NORMAL_SCALE_SLOP) -> Size:
    """Treat a target within ``slop`` of the current size as the current size."""
    if slop_distance(target, current) < slop:
        return current
    return target


def compute_target(
    mode: ScaleMode,
    true_w: int,
    true_h: int,
    cur_w: int,
    cur_h: int,
    monitor_w: int,
    monitor_h: int,
    window_w: int,
    window_h: int,
    ratio: float = 1.0,
    presentation: bool = False,
) -> Size:
    """Decide the display size for an image.

    Args:
        mode: Active scale mode.
        true_w, true_h: Full-resolution size of the image.
        cur_w, cur_h: Size of the buffer currently shown.
        monitor_w, monitor_h: Monitor size.
        window_w, window_h: Window size, the reference for FULLSCREEN in
            presentation mode (a virtual multi-monitor screen would be too big).
        ratio: User scale ratio for the *_RATIO and NORMAL modes.
        presentation: Whether the window is in presentation mode.

    Returns:
        Target size.

    Raises:
        InvalidScaleMode: for a mode this policy doesn't know.
    """
    true = Size(true_w, true_h)
    cur = Size(cur_w, cur_h)

    if mode == ScaleMode.FULLSIZE:
        return true

    if mode in (ScaleMode.NORMAL, ScaleMode.SCREEN_RATIO):
        target = true
        if true.exceeds(Size(monitor_w, monitor_h)):
            target = fit_within(true_w, true_h, monitor_w, monitor_h)
        target = apply_ratio(target, ratio)
        return snap_to_current(target, cur)

    if mode == ScaleMode.IMAGE_RATIO:
        return snap_to_current(apply_ratio(true, ratio), cur)

    if mode == ScaleMode.FULLSCREEN:
        if presentation:
            screen_w, screen_h = window_w, window_h
        else:
            screen_w, screen_h = monitor_w, monitor_h
        if (abs(cur_w - monitor_w) < FULLSCREEN_SCALE_SLOP
                or abs(cur_h - monitor_h) < FULLSCREEN_SCALE_SLOP):
            debug(f"[SCALE] {cur_w}x{cur_h} already close to {monitor_w}x{monitor_h}")
        return fit_within(true_w, true_h, screen_w, screen_h)

    raise InvalidScaleMode(f"Unknown scale mode {mode!r}")
