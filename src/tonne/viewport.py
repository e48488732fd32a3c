"""Cursor movement and scrolling over the text buffer."""

from __future__ import annotations

from tonne.keys import Key
from tonne.state import EditorState


class ViewportController:
    """Moves the cursor and keeps it inside the visible window."""

    def __init__(self, state: EditorState) -> None:
        self.state = state

    def scroll(self) -> None:
        """Recompute ``rx`` and bring the cursor into view.

        Offsets change by the smallest amount that makes the cursor visible.
        """
        s = self.state
        row = s.current_row
        s.rx = row.cx_to_rx(s.cx) if row is not None else 0

        if s.cy < s.rowoffset:
            s.rowoffset = s.cy
        if s.cy >= s.rowoffset + s.screenrows:
            s.rowoffset = s.cy - s.screenrows + 1

        if s.rx < s.coloffset:
            s.coloffset = s.rx
        if s.rx >= s.coloffset + s.screencols:
            s.coloffset = s.rx - s.screencols + 1

    def move_cursor(self, key: int) -> None:
        s = self.state
        row = s.current_row

        if key == Key.ARROW_LEFT:
            if s.cx > 0:
                s.cx -= 1
            elif s.cy > 0:
                s.cy -= 1
                s.cx = s.buffer[s.cy].size
        elif key == Key.ARROW_RIGHT:
            if row is not None and s.cx < row.size:
                s.cx += 1
            elif row is not None and s.cx == row.size and s.cy + 1 < s.numrows:
                s.cy += 1
                s.cx = 0
        elif key == Key.ARROW_UP:
            if s.cy > 0:
                s.cy -= 1
        elif key == Key.ARROW_DOWN:
            if s.cy < s.numrows:
                s.cy += 1

        self._clamp_cx()

    def page(self, key: int) -> None:
        """Page up/down: jump to the window edge, then step a screenful."""
        s = self.state
        if key == Key.PAGE_UP:
            s.cy = min(s.rowoffset, s.numrows)
        elif key == Key.PAGE_DOWN:
            s.cy = max(min(s.rowoffset + s.screenrows - 1, s.numrows), 0)
        else:
            return

        self._clamp_cx()

        step = Key.ARROW_UP if key == Key.PAGE_UP else Key.ARROW_DOWN
        for _ in range(s.screenrows):
            self.move_cursor(step)

    def _clamp_cx(self) -> None:
        s = self.state
        row = s.current_row
        rowlen = row.size if row is not None else 0
        if s.cx > rowlen:
            s.cx = rowlen

    def home(self) -> None:
        self.state.cx = 0

    def end(self) -> None:
        row = self.state.current_row
        if row is not None:
            self.state.cx = row.size
