"""The editor loop: render a frame, read a key, apply it, repeat."""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable

from tonne.buffer import TextBuffer, iter_file_lines
from tonne.config import EditorConfig
from tonne.keys import ARROW_KEYS, ENTER, ESC, Key, KeyDecoder, KeyEvent, ctrl_key
from tonne.render import Renderer
from tonne.state import EditorState
from tonne.terminal import CLEAR_SCREEN, CURSOR_HOME, Terminal
from tonne.viewport import ViewportController

logger = logging.getLogger(__name__)

QUIT_KEY = ctrl_key("q")
HELP_MESSAGE = "HELP: Ctrl-Q = quit"

# Keys that neither move the cursor nor insert text.
_IGNORED_KEYS = frozenset({ESC, ctrl_key("l")})


class LoopState(Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


class Editor:
    """Owns the editor state and drives the terminal.

    Construct it with a terminal, call :meth:`run`, and it returns the
    process exit code once the user quits. :class:`~tonne.errors.FatalError`
    propagates out of :meth:`run` after the terminal has been restored.
    """

    def __init__(
        self,
        terminal: Terminal,
        config: EditorConfig | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.terminal = terminal
        self.config = config or EditorConfig()
        self.state = EditorState(buffer=TextBuffer(self.config.tab_stop), clock=clock)
        self.decoder = KeyDecoder(terminal)
        self.viewport = ViewportController(self.state)
        self.renderer = Renderer(self.state, self.config)
        self.loop_state = LoopState.RUNNING

    # -- lifecycle ----------------------------------------------------------

    def run(self, filename: str | None = None) -> int:
        with self.terminal:
            self.init_screen()
            if filename is not None:
                self.open(filename)
            self.state.set_status_message(HELP_MESSAGE)

            while self.loop_state is LoopState.RUNNING:
                self.refresh_screen()
                self.process_keypress(self.decoder.read_key())

        return 0

    def init_screen(self) -> None:
        rows, cols = self.terminal.window_size()
        logger.info("window size %dx%d", cols, rows)
        self.state.screenrows = max(rows - self.config.reserved_rows, 0)
        self.state.screencols = cols

    def open(self, filename: str) -> None:
        self.state.filename = filename
        self.state.buffer.load(iter_file_lines(filename))
        logger.info("loaded %d rows from %s", self.state.numrows, filename)

    def refresh_screen(self) -> None:
        self.viewport.scroll()
        self.renderer.refresh(self.terminal)

    def quit(self) -> None:
        self.terminal.write(CLEAR_SCREEN + CURSOR_HOME)
        self.loop_state = LoopState.TERMINATED
        logger.info("quit")

    # -- input --------------------------------------------------------------

    def process_keypress(self, key: KeyEvent) -> None:
        if key == QUIT_KEY:
            self.quit()
        elif key in ARROW_KEYS:
            self.viewport.move_cursor(key)
        elif key in (Key.PAGE_UP, Key.PAGE_DOWN):
            self.viewport.page(key)
        elif key == Key.HOME:
            self.viewport.home()
        elif key == Key.END:
            self.viewport.end()
        elif key == ENTER:
            self.insert_newline()
        elif key in (Key.BACKSPACE, ctrl_key("h")):
            self.delete_backward()
        elif key == Key.DEL:
            self.delete_forward()
        elif key in _IGNORED_KEYS:
            pass
        else:
            self.insert_char(key)

    # -- editing ------------------------------------------------------------

    def insert_char(self, ch: int) -> None:
        s = self.state
        s.buffer.insert_char(s.cy, s.cx, ch)
        s.cx += 1

    def insert_newline(self) -> None:
        s = self.state
        s.buffer.insert_newline(s.cy, s.cx)
        s.cy += 1
        s.cx = 0

    def delete_backward(self) -> None:
        s = self.state
        if s.cy == s.numrows or (s.cx == 0 and s.cy == 0):
            return
        if s.cx > 0:
            s.buffer.delete_char(s.cy, s.cx - 1)
            s.cx -= 1
        else:
            s.cx = s.buffer[s.cy - 1].size
            s.buffer.join_with_next(s.cy - 1)
            s.cy -= 1

    def delete_forward(self) -> None:
        s = self.state
        row = s.current_row
        if row is None:
            return
        if s.cx < row.size:
            s.buffer.delete_char(s.cy, s.cx)
        else:
            s.buffer.join_with_next(s.cy)
