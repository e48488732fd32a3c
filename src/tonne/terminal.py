"""Raw-mode access to the controlling terminal.

``TerminalSession`` puts the tty into raw mode for the lifetime of a
``with`` block. Reads wait at most ``VTIME`` tenths of a second for a
byte. When the kernel cannot report the window size it is measured by
parking the cursor in the far corner and asking where it ended up.
"""

from __future__ import annotations

import logging
import os
import re
import sys
import termios
from types import TracebackType
from typing import Protocol

from tonne.errors import FatalError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

CLEAR_SCREEN = b"\x1b[2J"
CURSOR_HOME = b"\x1b[H"
_CURSOR_FAR_CORNER = b"\x1b[999C\x1b[999B"
_QUERY_CURSOR_POSITION = b"\x1b[6n"

_CURSOR_POSITION_RE = re.compile(rb"^\x1b\[(\d+);(\d+)$")

# termios.tcgetattr() list indices
_IFLAG, _OFLAG, _CFLAG, _LFLAG, _CC = 0, 1, 2, 3, 6


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """The terminal operations the editor loop and renderer rely on."""

    def enable(self) -> None: ...

    def disable(self) -> None: ...

    def __enter__(self) -> Terminal: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    def read_byte(self) -> int | None: ...

    def write(self, data: bytes) -> None: ...

    def window_size(self) -> tuple[int, int]: ...


# ---------------------------------------------------------------------------
# TerminalSession implementation
# ---------------------------------------------------------------------------


class TerminalSession:
    """Raw-mode session on the process' controlling terminal.

    Use it as a context manager: entering enables raw mode and leaving
    restores the attributes captured by :meth:`enable`, whichever way the
    block is left.
    """

    def __init__(
        self,
        fd_in: int | None = None,
        fd_out: int | None = None,
        read_timeout_ds: int = 1,
    ) -> None:
        self._fd_in = sys.stdin.fileno() if fd_in is None else fd_in
        self._fd_out = sys.stdout.fileno() if fd_out is None else fd_out
        self._read_timeout_ds = read_timeout_ds
        self._original_termios: list | None = None

    # -- raw mode -----------------------------------------------------------

    @property
    def enabled(self) -> bool:
        return self._original_termios is not None

    def enable(self) -> None:
        """Capture the current attributes and switch to raw mode."""
        try:
            original = termios.tcgetattr(self._fd_in)
        except termios.error as exc:
            raise FatalError("tcgetattr", exc) from exc

        raw = list(original)
        raw[_CC] = list(original[_CC])
        raw[_IFLAG] &= ~(
            termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
        )
        raw[_OFLAG] &= ~termios.OPOST
        raw[_CFLAG] |= termios.CS8
        raw[_LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        # read() returns as soon as a byte is there, or after VTIME tenths of
        # a second with nothing.
        raw[_CC][termios.VMIN] = 0
        raw[_CC][termios.VTIME] = self._read_timeout_ds

        try:
            termios.tcsetattr(self._fd_in, termios.TCSAFLUSH, raw)
        except termios.error as exc:
            raise FatalError("tcsetattr", exc) from exc

        self._original_termios = original
        logger.debug("raw mode enabled on fd %d", self._fd_in)

    def disable(self) -> None:
        """Restore the attributes captured by :meth:`enable`."""
        if not self.enabled:
            return
        original, self._original_termios = self._original_termios, None
        try:
            termios.tcsetattr(self._fd_in, termios.TCSAFLUSH, original)
        except termios.error as exc:
            raise FatalError("tcsetattr", exc) from exc
        logger.debug("terminal attributes restored on fd %d", self._fd_in)

    def __enter__(self) -> TerminalSession:
        self.enable()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.disable()

    # -- I/O ----------------------------------------------------------------

    def read_byte(self) -> int | None:
        """Read one byte, or return ``None`` if the read timed out."""
        try:
            data = os.read(self._fd_in, 1)
        except (BlockingIOError, InterruptedError):
            return None
        except OSError as exc:
            raise FatalError("read", exc) from exc
        return data[0] if data else None

    def write(self, data: bytes) -> None:
        """Write *data* to the terminal in one go."""
        view = memoryview(data)
        while view:
            try:
                written = os.write(self._fd_out, view)
            except InterruptedError:
                continue
            except OSError as exc:
                raise FatalError("write", exc) from exc
            view = view[written:]

    # -- window size --------------------------------------------------------

    def window_size(self) -> tuple[int, int]:
        """Return ``(rows, cols)`` of the terminal window."""
        try:
            size = os.get_terminal_size(self._fd_out)
        except OSError:
            size = None

        if size is not None and size.columns > 0:
            return size.lines, size.columns

        logger.debug("window size query unavailable, probing cursor position")
        try:
            self.write(_CURSOR_FAR_CORNER)
        except FatalError as exc:
            raise FatalError("getWindowSize", exc.cause) from exc
        return self.cursor_position()

    def cursor_position(self) -> tuple[int, int]:
        """Ask the terminal where the cursor is via ``ESC [ 6 n``."""
        try:
            self.write(_QUERY_CURSOR_POSITION)
        except FatalError as exc:
            raise FatalError("getWindowSize", exc.cause) from exc

        reply = bytearray()
        while len(reply) < 31:
            byte = self.read_byte()
            if byte is None or byte == ord("R"):
                break
            reply.append(byte)

        return parse_cursor_position(bytes(reply))


def parse_cursor_position(reply: bytes) -> tuple[int, int]:
    """Parse the body of a ``ESC [ rows ; cols R`` reply (without the ``R``)."""
    match = _CURSOR_POSITION_RE.match(reply)
    if match is None:
        raise FatalError("getWindowSize", f"unexpected cursor position reply {reply!r}")
    return int(match.group(1)), int(match.group(2))
