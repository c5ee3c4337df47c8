"""Application configuration constants."""

from __future__ import annotations

# Performance
TARGET_FPS = 60

# Scaling
NORMAL_SCALE_SLOP = 5         # L1 distance below which a target snaps to current
FULLSCREEN_SCALE_SLOP = 20    # informational only, never elides the scale
DEFAULT_SCALE_RATIO = 1.0
MIN_SCALE_RATIO = 1.0 / 64
MAX_SCALE_RATIO = 64.0

# Pixel buffers
ROW_ALIGN = 4                 # rows are padded to this many bytes

# Slideshow
DEFAULT_DELAY_SECONDS = 0     # 0 = no slideshow

# Window defaults (used until the monitor size is known)
DEFAULT_MONITOR_W = 1920
DEFAULT_MONITOR_H = 1080
WINDOW_TITLE_PREFIX = "picroll"

# Notes
NOTE_LISTS = 10

# Prompt overlay
PROMPT_FONT_SIZE = 22
PROMPT_PADDING = 18
PROMPT_BG_ALPHA = 0.85

# Hotkeys (raylib key codes for non-character keys)
# See: https://github.com/raysan5/raylib/blob/master/src/raylib.h
KEY_NEXT = 32               # KEY_SPACE
KEY_PREV = 259              # KEY_BACKSPACE
KEY_HOME = 268              # KEY_HOME
KEY_ROTATE_RIGHT = 262      # KEY_RIGHT
KEY_ROTATE_RIGHT_KP = 326   # KEY_KP_6
KEY_ROTATE_LEFT = 263       # KEY_LEFT
KEY_ROTATE_LEFT_KP = 324    # KEY_KP_4
KEY_ROTATE_180 = 265        # KEY_UP
KEY_HALF_SIZE_KP = 333      # KEY_KP_SUBTRACT
KEY_ENTER = 257             # KEY_ENTER
KEY_CLOSE = 256             # KEY_ESCAPE

# Character bindings (read through GetCharPressed so shift is honoured)
CHARS_PREV = "-"
CHARS_ROTATE_RIGHT = "rt"
CHARS_ROTATE_LEFT = "RTlL"
CHARS_DOUBLE_SIZE = "+="
CHARS_HALF_SIZE = "/"
CHARS_FULLSCREEN = "f"
CHARS_FULLSIZE = "F"
CHARS_PRESENTATION = "p"
CHARS_DELETE = "d"
CHARS_QUIT = "q"
CHARS_NOTES = "0123456789"

# Prompts and their confirmation keys
PROMPT_QUIT = "Quit picroll?"
PROMPT_DELETE = "Delete file {path}?"
DELETE_YES_KEYS = "dD\n"
DELETE_NO_KEYS = "nN"
QUIT_YES_KEYS = "qx \n"
QUIT_NO_KEYS = "c"

# Supported image extensions
IMG_EXTS = frozenset({".png", ".jpg", ".jpeg", ".bmp", ".tga", ".gif",
                      ".tif", ".tiff", ".webp", ".ppm", ".pgm"})
