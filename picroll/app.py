"""Application - main loop orchestrator.

The Application class runs a simple frame loop that coordinates:
- Input handling (via InputHandler)
- Command execution against the Viewer
- Slideshow timing (via Viewer.update)
- Rendering (via Renderer)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import sys
import traceback

from .state import AppState
from .renderer import Renderer
from .dialogs import RaylibPrompter
from .input_handler import InputHandler
from .commands import Command, CommandQueue
from .viewer import Viewer
from .image_io import PillowDecoder, ExifOrientationReader, expand_paths
from .errors import SessionEnded
from .rl_compat import rl, RL_VERSION
from .config import TARGET_FPS, WINDOW_TITLE_PREFIX
from .cli import Options, USAGE, parse_args
from .logging import log, set_debug
from .types import DisplayMode


@dataclass
class Application:
    """
    Main application orchestrator.

    Usage:
        app = Application(options)
        if app.initialize():
            app.run()
    """

    options: Options
    state: AppState = field(default_factory=AppState)
    input_handler: InputHandler = field(default_factory=InputHandler)
    queue: CommandQueue = field(default_factory=CommandQueue)
    renderer: Optional[Renderer] = None
    viewer: Optional[Viewer] = None
    running: bool = False

    def initialize(self) -> bool:
        """
        Open the window and show the first image.

        Returns True if there is something to look at.
        """
        self.state = AppState.from_paths(self.options.paths)
        if self.state.images.is_empty:
            log("[APP][ERR] No images to show")
            return False

        self._init_window()
        if self.options.presentation:
            self.state.display.display_mode = DisplayMode.PRESENTATION

        self.renderer = Renderer(self.state)
        self.viewer = Viewer(
            self.state,
            decoder=PillowDecoder(),
            metadata=ExifOrientationReader(),
            prompter=RaylibPrompter(self.renderer),
            sink=self.renderer,
            delay_seconds=self.options.delay_seconds,
        )
        try:
            self.viewer.start()
        except SessionEnded as e:
            log(f"[APP][ERR] {e}")
            self._cleanup()
            return False

        log(f"[APP] Application initialized ({self.state.count} images)")
        return True

    def _init_window(self) -> None:
        log("[INIT] Starting window initialization")
        try:
            rl.InitWindow(640, 480, WINDOW_TITLE_PREFIX)
        except TypeError:
            rl.InitWindow(640, 480, WINDOW_TITLE_PREFIX.encode('utf-8'))

        try:
            rl.SetExitKey(0)
        except Exception:
            pass
        rl.SetTargetFPS(TARGET_FPS)

        display = self.state.display
        mon = getattr(rl, 'GetCurrentMonitor', lambda: 0)()
        w, h = rl.GetMonitorWidth(mon), rl.GetMonitorHeight(mon)
        if w > 0 and h > 0:
            display.monitor_w, display.monitor_h = w, h
        display.window_w, display.window_h = rl.GetScreenWidth(), rl.GetScreenHeight()
        log(f"[INIT] RL_VER={RL_VERSION} monitor={display.monitor_w}x{display.monitor_h}")

    def run(self) -> None:
        """Run the main loop until the session ends."""
        self.running = True
        log("[APP] Starting main loop")

        try:
            while self.running:
                self._frame()
        except SessionEnded as e:
            log(f"[APP] Session ended: {e}")
        except Exception as e:
            log(f"[APP][CRITICAL] Unhandled exception: {e!r}")
            log(f"[APP][CRITICAL] Traceback:\n{traceback.format_exc()}")
        finally:
            self._cleanup()

    def _frame(self) -> None:
        """Execute a single frame."""
        if rl.WindowShouldClose():
            self.running = False
            return

        # 1. Poll input and generate commands
        commands = self.input_handler.poll()

        # 2. Execute commands
        for cmd in commands:
            self._execute_command(cmd)

        # 3. Slideshow
        self.viewer.update()

        # 4. Render
        self.renderer.draw_frame()

    def _execute_command(self, cmd: Command) -> None:
        # SessionEnded passes through to run()
        self.queue.execute(cmd, self.viewer)

    def _cleanup(self) -> None:
        """Clean up resources."""
        log("[APP] Starting cleanup")
        self.running = False
        if self.viewer is not None:
            self.viewer.end_session()
        if self.renderer is not None:
            self.renderer.release()

        try:
            log("[APP] Closing window")
            rl.CloseWindow()
        except Exception:
            pass

        log("[APP] Cleanup complete")


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        opts = parse_args(argv)
    except ValueError as e:
        sys.stderr.write(f"picroll: {e}\n{USAGE}")
        return 2

    if opts.show_help:
        sys.stdout.write(USAGE)
        return 0

    set_debug(opts.debug)
    opts.paths = expand_paths(opts.paths)
    if not opts.paths:
        sys.stderr.write(USAGE)
        return 1

    app = Application(opts)
    if not app.initialize():
        return 1
    app.run()
    return 0
