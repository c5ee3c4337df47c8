"""Command-line parsing."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from .config import DEFAULT_DELAY_SECONDS

USAGE = """Usage: picroll [-dhp] [-sN] image [image ...]
  -d    debug output
  -h    show this help
  -p    presentation mode
  -sN   slideshow, advance every N seconds (0 = off)

Directories are expanded to the images they contain.
Keys: space/backspace next/prev, home first, r/R rotate, up 180,
      f fullscreen, F full size, p presentation, +/- size, 0-9 notes,
      d delete, q quit
"""


@dataclass
class Options:
    paths: List[str] = field(default_factory=list)
    debug: bool = False
    presentation: bool = False
    delay_seconds: float = DEFAULT_DELAY_SECONDS
    show_help: bool = False


def parse_args(argv: List[str]) -> Options:
    """Walk argv the old-fashioned way; flags may come before or between files.

    Raises:
        ValueError: for an unknown flag or a bad slideshow delay.
    """
    opts = Options()
    files_only = False
    for arg in argv:
        if files_only or not arg.startswith("-") or arg == "-":
            opts.paths.append(arg)
            continue
        if arg == "--":
            files_only = True
            continue
        if arg in ("-h", "--help"):
            opts.show_help = True
        elif arg == "-d":
            opts.debug = True
        elif arg == "-p":
            opts.presentation = True
        elif arg.startswith("-s"):
            try:
                opts.delay_seconds = float(arg[2:])
            except ValueError:
                raise ValueError(f"bad slideshow delay {arg[2:]!r}") from None
            if opts.delay_seconds < 0:
                raise ValueError(f"bad slideshow delay {arg[2:]!r}")
        else:
            raise ValueError(f"unknown option {arg}")
    return opts
