"""Transform pipeline - decides and applies scale/rotate for the live image.

Work is split in two phases:

- planning: pure functions (``plan_transform``, ``plan_execution``) that turn
  record state and display settings into plan values;
- execution: ``TransformController`` applies a plan to the single live
  PixelBuffer, committing nothing until every step has succeeded.

Record true/current sizes are always expressed in the record's current
orientation; a size in the "post-rotation frame" is what the image will
measure once the pending rotation has been applied.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import AllocationError, DecodeError
from .interfaces import Decoder, DisplaySink, MetadataReader, Prompter
from .logging import log, debug
from .pixbuf import PixelBuffer
from .scale_policy import compute_target
from .state.display import DisplayState
from .state.images import ImageRecord
from .transforms import rotate_buffer, scale_buffer
from .types import Size, normalize_degrees, is_aspect_changing

SCALE_FAILED_MESSAGE = "Couldn't scale up: probably out of memory"


@dataclass(frozen=True)
class TransformPlan:
    """What a scale_and_rotate call is going to do."""
    degrees: int    # rotation to apply; absolute when reload is set
    target: Size    # final size, post-rotation frame
    reload: bool    # decode again at full resolution before transforming


@dataclass(frozen=True)
class ExecutionPlan:
    """In which order to run the steps, and at what size to scale."""
    degrees: int
    rotate_first: bool
    scale_to: Optional[Size]   # None when the buffer is already the right size


def plan_transform(true: Size, cur: Size, cur_rot: int, degrees: int,
                   display: DisplayState) -> TransformPlan:
    """Decide the target size and whether a reload from disk is needed.

    Args:
        true: Record's true size, current orientation.
        cur: Record's current size, current orientation.
        cur_rot: Rotation already applied to the record.
        degrees: Rotation requested on top of cur_rot.
        display: Scale mode, ratio and screen sizes.

    Raises:
        InvalidScaleMode: if display.scale_mode is bogus.
    """
    degrees = normalize_degrees(degrees)
    if is_aspect_changing(degrees):
        true, cur = true.swapped, cur.swapped

    target = compute_target(
        display.scale_mode, true.w, true.h, cur.w, cur.h,
        display.monitor_w, display.monitor_h,
        display.window_w, display.window_h,
        display.scale_ratio, display.is_presentation,
    )

    # Growing a buffer that was shrunk earlier: go back to the file rather
    # than blowing up a lossy copy.
    reload = target.exceeds(cur) and cur.w < true.w and cur.h < true.h
    if reload:
        debug(f"[PLAN] Getting bigger, from {cur.w}x{cur.h} to "
              f"{target.w}x{target.h} -- need to reload")
        degrees = normalize_degrees(degrees + cur_rot)

    return TransformPlan(degrees=degrees, target=target, reload=reload)


def plan_execution(degrees: int, target: Size, cur: Size, buffer: Size) -> ExecutionPlan:
    """Order the rotate and scale steps so the rotation runs on the smaller buffer.

    Args:
        degrees: Rotation to apply to the buffer.
        target: Final size, post-rotation frame.
        cur: Current size, post-rotation frame.
        buffer: Actual size of the buffer about to be transformed.
    """
    degrees = normalize_degrees(degrees)
    aspect = is_aspect_changing(degrees)

    if degrees != 0 and target.exceeds(cur):
        # Getting bigger: rotate now, then scale in the final orientation.
        rotate_first = True
        scale_size = target
        at_scale = buffer.swapped if aspect else buffer
    else:
        rotate_first = False
        scale_size = target.swapped if aspect else target
        at_scale = buffer

    scale_to = None if scale_size == at_scale else scale_size
    return ExecutionPlan(degrees=degrees, rotate_first=rotate_first, scale_to=scale_to)


class TransformController:
    """Owns the one live PixelBuffer and keeps ImageRecords in sync with it."""

    def __init__(self, decoder: Decoder, metadata: MetadataReader,
                 display: DisplayState, sink: Optional[DisplaySink] = None,
                 prompter: Optional[Prompter] = None):
        self.decoder = decoder
        self.metadata = metadata
        self.display = display
        self.sink = sink
        self.prompter = prompter
        self._buffer: Optional[PixelBuffer] = None
        self._owner: Optional[ImageRecord] = None

    @property
    def buffer(self) -> Optional[PixelBuffer]:
        return self._buffer

    @property
    def owner(self) -> Optional[ImageRecord]:
        """The record the live buffer belongs to."""
        return self._owner

    def release(self) -> None:
        """Drop the live buffer."""
        self._buffer = None
        self._owner = None

    def _install(self, buf: PixelBuffer, record: ImageRecord) -> None:
        # Old buffer is dropped as soon as the new one is in place.
        self._buffer = buf
        self._owner = record

    # ═══════════════════════════════════════════════════════════════════════
    # Loading
    # ═══════════════════════════════════════════════════════════════════════

    def load(self, record: ImageRecord, fresh: bool = False) -> None:
        """Decode record's file and make it the live buffer, unscaled.

        On the record's first load this captures its true size and its
        orientation hint. With ``fresh`` the record also forgets any rotation
        it had, since the decoded buffer is in the file's own orientation.

        Raises:
            DecodeError: if the file can't be decoded. Nothing is changed.
        """
        first = not record.is_loaded
        buf = self.decoder.decode(record.path)
        self._install(buf, record)
        record.cur_width, record.cur_height = buf.width, buf.height
        if first or fresh:
            record.true_width, record.true_height = buf.width, buf.height
            record.cur_rot = 0
        if first:
            record.metadata_rot = self.metadata.read_orientation_hint(record.path)

    def load_and_rotate(self, record: ImageRecord) -> None:
        """Load a record for display after navigating to it.

        The first visit applies the orientation hint; later visits restore
        whatever rotation the user had given the image.

        Raises:
            DecodeError: if the file can't be decoded. The record is unchanged.
        """
        first = not record.is_loaded
        rot = record.cur_rot
        self.load(record, fresh=True)

        if first and record.metadata_rot != 0:
            self.scale_and_rotate(record, record.metadata_rot)
        else:
            self.scale_and_rotate(record, rot)

    # ═══════════════════════════════════════════════════════════════════════
    # Scale and rotate
    # ═══════════════════════════════════════════════════════════════════════

    def scale_and_rotate(self, record: ImageRecord, degrees: int) -> bool:
        """Rotate the live image by ``degrees`` and scale it per the scale mode.

        Args:
            record: Record to transform; loaded from disk first if needed.
            degrees: Rotation relative to record.cur_rot, any multiple of 90.

        Returns:
            True on success. False if a buffer couldn't be produced; the
            live buffer and the record are then left exactly as they were
            and the user has been told.

        Raises:
            DecodeError: if the record has never been loaded and can't be.
            InvalidScaleMode: if the configured scale mode is bogus.
        """
        degrees = normalize_degrees(degrees)
        debug(f"[XFORM] scale_and_rotate({degrees} (cur = {record.cur_rot})) {record.name}")

        if not record.is_loaded:
            debug(f"[XFORM] Loading {record.name}, first time")
            self.load(record)

        fresh = self._owner is not record
        if fresh:
            # Live buffer belongs to someone else: start from the file again,
            # in the file's own orientation.
            degrees = normalize_degrees(degrees + record.cur_rot)
            true = record.true_size
            if is_aspect_changing(record.cur_rot):
                true = true.swapped
            plan = plan_transform(true, true, 0, degrees, self.display)
        else:
            plan = plan_transform(record.true_size, record.cur_size, record.cur_rot,
                                  degrees, self.display)
        try:
            buf, true, rot = self._execute(record, plan, fresh)
        except (AllocationError, DecodeError) as e:
            log(f"[XFORM][ERR] {record.name}: {e}")
            if self.prompter is not None:
                self.prompter.confirm(SCALE_FAILED_MESSAGE, "\n ", "")
            return False

        self._install(buf, record)
        record.true_width, record.true_height = true.w, true.h
        record.cur_width, record.cur_height = buf.width, buf.height
        record.cur_rot = rot
        debug(f"[XFORM] Done: curRot={record.cur_rot} cur={buf.width}x{buf.height} "
              f"true={true.w}x{true.h}")

        if self.sink is not None:
            self.sink.notify_geometry_changed(buf.width, buf.height)
        return True

    def _execute(self, record: ImageRecord, plan: TransformPlan,
                 fresh: bool = False) -> Tuple[PixelBuffer, Size, int]:
        """Run a plan against copies of the live state.

        With ``fresh`` (or a reloading plan) the file is decoded again and the
        plan's degrees are taken from the file's own orientation.

        Returns:
            (new buffer, new true size, new cumulative rotation)
        """
        degrees = plan.degrees
        aspect = is_aspect_changing(degrees)
        buf = self._buffer
        cur_rot = record.cur_rot

        if plan.reload or fresh:
            # degrees is absolute now, measured from the file's own orientation.
            buf = self.decoder.decode(record.path)
            cur_rot = 0
            base_true = buf.size
            cur = base_true.swapped if aspect else base_true
        else:
            base_true = record.true_size
            cur = record.cur_size.swapped if aspect else record.cur_size

        true = base_true.swapped if aspect else base_true
        step = plan_execution(degrees, plan.target, cur, buf.size)
        debug(f"[XFORM] plan: {step}")

        if step.rotate_first and degrees:
            buf = rotate_buffer(buf, degrees)
        if step.scale_to is not None:
            buf = scale_buffer(buf, step.scale_to.w, step.scale_to.h)
        if not step.rotate_first and degrees:
            buf = rotate_buffer(buf, degrees)

        return buf, true, normalize_degrees(cur_rot + degrees)
