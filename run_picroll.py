"""picroll - keyboard-driven image viewer for sorting through photos."""
from __future__ import annotations
import sys
import traceback

from picroll.app import main
from picroll.logging import log


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        log(f"[FATAL] Fatal error: {e!r}")
        log(f"[FATAL] Traceback:\n{traceback.format_exc()}")
        sys.exit(1)
