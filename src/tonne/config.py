"""Editor configuration."""

from __future__ import annotations

from dataclasses import dataclass

from tonne import __version__


@dataclass
class EditorConfig:
    """Tunable editor constants."""

    tab_stop: int = 8
    # Seconds a status message stays on the message bar.
    message_timeout: float = 5.0
    # VTIME for the raw terminal, in tenths of a second.
    read_timeout_ds: int = 1
    # Screen rows taken by the status and message bars.
    reserved_rows: int = 2
    version: str = __version__

    @property
    def welcome(self) -> str:
        return f"Tonne editor -- version {self.version}"
