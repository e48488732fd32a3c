"""Small assertion helpers shared by the test modules."""

from __future__ import annotations

from tonne.buffer import TextBuffer


def buffer_lines(buf: TextBuffer) -> list[bytes]:
    """Return the raw bytes of every row in *buf*."""
    return [bytes(row.chars) for row in buf]
