"""Exception types raised by the viewer core."""

from __future__ import annotations


class PicrollError(Exception):
    """Base class for all viewer errors."""


class DecodeError(PicrollError):
    """An image file could not be read or decoded."""

    def __init__(self, path: str, message: str):
        super().__init__(f"Can't open {path}: {message}")
        self.path = path
        self.message = message


class AllocationError(PicrollError):
    """A scale or rotate step could not allocate its output buffer."""


class DeleteError(PicrollError):
    """The file backing a record could not be removed from disk."""

    def __init__(self, path: str, message: str):
        super().__init__(f"Can't delete {path}: {message}")
        self.path = path
        self.message = message


class InvalidScaleMode(PicrollError):
    """The configured scale mode is not one the policy knows about."""


class SessionEnded(PicrollError):
    """The working set is exhausted or the user asked to quit."""
