"""Logging utilities with timing and event tracking."""

from __future__ import annotations
import sys
import time
from typing import Optional


class Logger:
    """Application logger with timestamps and event counts."""

    def __init__(self):
        self._start_time: float = time.perf_counter()
        self._event: int = 0
        self._debug: bool = False

    @property
    def event(self) -> int:
        """Current event number."""
        return self._event

    def increment_event(self) -> None:
        """Increment event counter."""
        self._event += 1

    @property
    def debug_enabled(self) -> bool:
        return self._debug

    @debug_enabled.setter
    def debug_enabled(self, value: bool) -> None:
        self._debug = bool(value)

    @property
    def elapsed(self) -> float:
        """Seconds since logger was created."""
        return time.perf_counter() - self._start_time

    def log(self, msg: str) -> None:
        """Log a message with timestamp and event number."""
        line = f"[{self.elapsed:7.3f}s E{self._event:05d}] {msg}\n"
        try:
            sys.stdout.write(line)
            sys.stdout.flush()
        except OSError:
            try:
                sys.stderr.write(line)
                sys.stderr.flush()
            except OSError:
                pass

    def debug(self, msg: str) -> None:
        """Log only when debug output was requested (-d)."""
        if self._debug:
            self.log(msg)

    def __call__(self, msg: str) -> None:
        """Shorthand for log()."""
        self.log(msg)


# Global logger instance
_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Get or create the global logger instance."""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def log(msg: str) -> None:
    """Log a message using the global logger."""
    get_logger().log(msg)


def debug(msg: str) -> None:
    """Log a debug message using the global logger."""
    get_logger().debug(msg)


def set_debug(enabled: bool) -> None:
    get_logger().debug_enabled = enabled


def increment_event() -> None:
    """Increment event counter."""
    get_logger().increment_event()


# Time utilities
def now() -> float:
    """Get current time in seconds (high precision)."""
    return time.perf_counter()
