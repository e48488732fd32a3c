"""Error types raised by the editor.

Only one class of error is ever raised out of the editor loop: a
:class:`FatalError`, which names the failing operation and carries the
underlying OS error so the CLI can report it the way ``perror`` would.
"""

from __future__ import annotations


class TonneError(Exception):
    """Base class for editor errors."""


class FatalError(TonneError):
    """An unrecoverable terminal or file failure.

    ``str(err)`` reads ``"<op>: <os error text>"``.
    """

    def __init__(self, op: str, cause: BaseException | str | None = None) -> None:
        self.op = op
        self.cause = cause
        super().__init__(self._format())

    def _format(self) -> str:
        detail = _describe(self.cause)
        return f"{self.op}: {detail}" if detail else self.op


def _describe(cause: BaseException | str | None) -> str:
    if cause is None:
        return ""
    if isinstance(cause, str):
        return cause
    if isinstance(cause, OSError) and cause.strerror:
        return cause.strerror
    # termios.error carries (errno, message)
    if len(cause.args) == 2 and isinstance(cause.args[1], str):
        return cause.args[1]
    return str(cause)
