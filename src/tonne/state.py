"""The editor's single mutable state object."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from tonne.buffer import Row, TextBuffer


@dataclass
class EditorState:
    """Everything the viewport and renderer read or change.

    ``screenrows``/``screencols`` describe the text area only; the status
    and message bars are not included.
    """

    screenrows: int = 0
    screencols: int = 0
    # Cursor in raw buffer coordinates
    cx: int = 0
    cy: int = 0
    # Cursor column in render coordinates
    rx: int = 0
    rowoffset: int = 0
    coloffset: int = 0
    buffer: TextBuffer = field(default_factory=TextBuffer)
    filename: str | None = None
    status_msg: str = ""
    status_msg_time: float = 0.0
    clock: Callable[[], float] = time.time

    @property
    def numrows(self) -> int:
        return self.buffer.numrows

    @property
    def current_row(self) -> Row | None:
        return self.buffer.row_at(self.cy)

    def set_status_message(self, fmt: str, *args: object) -> None:
        self.status_msg = fmt % args if args else fmt
        self.status_msg_time = self.clock()
