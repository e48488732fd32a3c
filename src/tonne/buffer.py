"""Text buffer: rows of raw bytes plus their rendered form.

Each :class:`Row` owns its raw characters and a render cache in which tabs
are expanded to spaces. Every mutation of the raw characters rebuilds the
render cache before returning, so the two never disagree.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from tonne.errors import FatalError

logger = logging.getLogger(__name__)

TAB = 0x09
DEFAULT_TAB_STOP = 8


class Row:
    """One line of text."""

    __slots__ = ("chars", "render", "tab_stop")

    def __init__(self, data: bytes = b"", tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.chars = bytearray(data)
        self.render = b""
        self.tab_stop = tab_stop
        self.update_render()

    def __repr__(self) -> str:
        return f"Row({bytes(self.chars)!r})"

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def update_render(self) -> None:
        """Rebuild the render cache from the raw characters."""
        out = bytearray()
        for ch in self.chars:
            if ch == TAB:
                out.append(ord(" "))
                while len(out) % self.tab_stop != 0:
                    out.append(ord(" "))
            else:
                out.append(ch)
        self.render = bytes(out)

    def cx_to_rx(self, cx: int) -> int:
        """Translate a raw column into the matching render column."""
        rx = 0
        for ch in self.chars[:cx]:
            if ch == TAB:
                rx += (self.tab_stop - 1) - (rx % self.tab_stop)
            rx += 1
        return rx

    # -- mutation -----------------------------------------------------------

    def insert_char(self, at: int, ch: int) -> None:
        at = max(0, min(at, self.size))
        self.chars.insert(at, ch)
        self.update_render()

    def delete_char(self, at: int) -> bool:
        if not 0 <= at < self.size:
            return False
        del self.chars[at]
        self.update_render()
        return True

    def append(self, data: bytes) -> None:
        self.chars.extend(data)
        self.update_render()

    def truncate(self, at: int) -> bytes:
        """Cut the row at *at* and return the removed tail."""
        tail = bytes(self.chars[at:])
        del self.chars[at:]
        self.update_render()
        return tail


class TextBuffer:
    """Ordered rows of text.

    Row indices run from ``0`` to ``numrows``; index ``numrows`` is the
    virtual empty line past the end, which becomes real the moment a
    character is typed on it.
    """

    def __init__(self, tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.rows: list[Row] = []
        self.tab_stop = tab_stop
        # Count of edits since load.
        self.dirty = 0

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def row_at(self, index: int) -> Row | None:
        """Return the row at *index*, or ``None`` for the past-end row."""
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    # -- loading ------------------------------------------------------------

    def append_row(self, data: bytes) -> Row:
        row = Row(data, self.tab_stop)
        self.rows.append(row)
        return row

    def load(self, lines: Iterator[bytes]) -> None:
        for line in lines:
            self.append_row(line)
        self.dirty = 0

    # -- editing ------------------------------------------------------------

    def insert_row(self, at: int, data: bytes) -> Row | None:
        if not 0 <= at <= len(self.rows):
            return None
        row = Row(data, self.tab_stop)
        self.rows.insert(at, row)
        self.dirty += 1
        return row

    def delete_row(self, at: int) -> None:
        if not 0 <= at < len(self.rows):
            return
        del self.rows[at]
        self.dirty += 1

    def insert_char(self, row: int, column: int, ch: int) -> None:
        """Insert *ch* at ``(row, column)``.

        Typing on the past-end row appends an empty row first.
        """
        if row == len(self.rows):
            self.append_row(b"")
        self.rows[row].insert_char(column, ch)
        self.dirty += 1

    def insert_newline(self, row: int, column: int) -> None:
        """Split *row* at *column*, moving the tail onto a new row below."""
        current = self.row_at(row)
        if column == 0 or current is None:
            self.insert_row(row, b"")
            return
        tail = current.truncate(column)
        self.insert_row(row + 1, tail)

    def delete_char(self, row: int, column: int) -> None:
        """Delete the character at ``(row, column)``."""
        current = self.row_at(row)
        if current is not None and current.delete_char(column):
            self.dirty += 1

    def join_with_next(self, row: int) -> None:
        """Append row ``row + 1`` onto *row* and drop it."""
        current = self.row_at(row)
        following = self.row_at(row + 1)
        if current is None or following is None:
            return
        current.append(bytes(following.chars))
        self.delete_row(row + 1)


def iter_file_lines(path: str | Path) -> Iterator[bytes]:
    """Yield the lines of *path* with trailing ``\\n``/``\\r`` stripped."""
    try:
        f = open(path, "rb")
    except OSError as exc:
        raise FatalError("fopen", exc) from exc

    with f:
        for line in f:
            yield line.rstrip(b"\r\n")
