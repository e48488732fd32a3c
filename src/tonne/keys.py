"""Keyboard input decoding.

Turns the raw byte stream coming from a raw-mode terminal into logical key
events. Plain bytes (printable characters and control codes) are returned
as ``int``; the escape sequences sent for arrows, paging, Home/End and
Delete are folded into :class:`Key` members.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tonne.terminal import Terminal

logger = logging.getLogger(__name__)

ESC = 0x1B
ENTER = 0x0D


def ctrl_key(char: str) -> int:
    """Return the byte sent for Ctrl + *char*."""
    return ord(char) & 0x1F


class Key(IntEnum):
    """Logical keys that are not a single byte (plus Backspace)."""

    BACKSPACE = 127
    ARROW_LEFT = 1000
    ARROW_RIGHT = 1001
    ARROW_UP = 1002
    ARROW_DOWN = 1003
    DEL = 1004
    HOME = 1005
    END = 1006
    PAGE_UP = 1007
    PAGE_DOWN = 1008


KeyEvent = int

ARROW_KEYS = frozenset({Key.ARROW_LEFT, Key.ARROW_RIGHT, Key.ARROW_UP, Key.ARROW_DOWN})

# ESC [ <digit> ~
_CSI_TILDE_KEYS: dict[int, Key] = {
    ord("1"): Key.HOME,
    ord("3"): Key.DEL,
    ord("4"): Key.END,
    ord("5"): Key.PAGE_UP,
    ord("6"): Key.PAGE_DOWN,
    ord("7"): Key.HOME,
    ord("8"): Key.END,
}

# ESC [ <letter>
_CSI_KEYS: dict[int, Key] = {
    ord("A"): Key.ARROW_UP,
    ord("B"): Key.ARROW_DOWN,
    ord("C"): Key.ARROW_RIGHT,
    ord("D"): Key.ARROW_LEFT,
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}

# ESC O <letter>
_SS3_KEYS: dict[int, Key] = {
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}


class KeyDecoder:
    """Reads one logical key at a time from a :class:`Terminal`."""

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal

    def read_key(self) -> KeyEvent:
        """Block until a key arrives and return it.

        A lone or unrecognised escape sequence decodes to :data:`ESC`.
        """
        byte = self.terminal.read_byte()
        while byte is None:
            byte = self.terminal.read_byte()

        if byte != ESC:
            return byte

        first = self.terminal.read_byte()
        if first is None:
            return ESC
        second = self.terminal.read_byte()
        if second is None:
            return _unrecognised(first)

        if first == ord("["):
            if ord("0") <= second <= ord("9"):
                third = self.terminal.read_byte()
                if third == ord("~") and second in _CSI_TILDE_KEYS:
                    return _CSI_TILDE_KEYS[second]
                return _unrecognised(first, second, third)
            if second in _CSI_KEYS:
                return _CSI_KEYS[second]
        elif first == ord("O"):
            if second in _SS3_KEYS:
                return _SS3_KEYS[second]

        return _unrecognised(first, second)


def _unrecognised(*follow: int | None) -> KeyEvent:
    seq = bytes(b for b in follow if b is not None)
    logger.debug("unrecognised escape sequence %r, reporting ESC", b"\x1b" + seq)
    return ESC
