"""Frame composition.

A frame is built as a list of byte chunks and handed to the terminal with
a single ``write``, so the screen never shows a half-drawn state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tonne.config import EditorConfig
from tonne.state import EditorState

if TYPE_CHECKING:
    from tonne.terminal import Terminal

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_LINE = b"\x1b[K"
INVERSE = b"\x1b[7m"
RESET_ATTRS = b"\x1b[m"
NEWLINE = b"\r\n"
TILDE = b"~"

NO_NAME = "[No Name]"


def move_cursor_to(row: int, col: int) -> bytes:
    """``ESC [ row ; col H`` (1-based)."""
    return b"\x1b[%d;%dH" % (row, col)


class Renderer:
    """Draws the editor state onto a terminal."""

    def __init__(self, state: EditorState, config: EditorConfig | None = None) -> None:
        self.state = state
        self.config = config or EditorConfig()

    def refresh(self, terminal: Terminal) -> None:
        terminal.write(self.compose())

    def compose(self) -> bytes:
        """Build one complete frame."""
        s = self.state
        out: list[bytes] = [HIDE_CURSOR, CURSOR_HOME]

        self.draw_rows(out)
        self.draw_status_bar(out)
        self.draw_message_bar(out)

        out.append(move_cursor_to(s.cy - s.rowoffset + 1, s.rx - s.coloffset + 1))
        out.append(SHOW_CURSOR)
        return b"".join(out)

    def draw_rows(self, out: list[bytes]) -> None:
        s = self.state
        for y in range(s.screenrows):
            filerow = y + s.rowoffset
            if filerow >= s.numrows:
                if s.numrows == 0 and y == s.screenrows // 3:
                    out.append(self._welcome())
                else:
                    out.append(TILDE)
            else:
                render = s.buffer[filerow].render
                out.append(render[s.coloffset : s.coloffset + s.screencols])

            out.append(CLEAR_LINE)
            out.append(NEWLINE)

    def _welcome(self) -> bytes:
        cols = self.state.screencols
        welcome = self.config.welcome.encode()[:cols]
        padding = (cols - len(welcome)) // 2
        line = b""
        if padding:
            line += TILDE
            padding -= 1
        return line + b" " * padding + welcome

    def draw_status_bar(self, out: list[bytes]) -> None:
        s = self.state
        cols = s.screencols
        name = s.filename[:20] if s.filename else NO_NAME
        modified = " (modified)" if s.buffer.dirty else ""
        left = f"{name} - {s.numrows} lines{modified}".encode()[:cols]
        right = f"{s.cy + 1}/{s.numrows}".encode()

        out.append(INVERSE)
        out.append(left)
        length = len(left)
        while length < cols:
            if cols - length == len(right):
                out.append(right)
                break
            out.append(b" ")
            length += 1
        out.append(RESET_ATTRS)
        out.append(NEWLINE)

    def draw_message_bar(self, out: list[bytes]) -> None:
        s = self.state
        out.append(CLEAR_LINE)
        msg = s.status_msg.encode()[: s.screencols]
        if msg and s.clock() - s.status_msg_time < self.config.message_timeout:
            out.append(msg)
