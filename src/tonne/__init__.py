"""tonne: a small terminal text editor with single-write screen redraws."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Text storage
from tonne.buffer import Row, TextBuffer, iter_file_lines  # noqa: E402

# Configuration and errors
from tonne.config import EditorConfig  # noqa: E402

# Editor loop
from tonne.editor import Editor, LoopState  # noqa: E402
from tonne.errors import FatalError, TonneError  # noqa: E402

# Keyboard input decoding
from tonne.keys import ESC, Key, KeyDecoder, ctrl_key  # noqa: E402

# Rendering
from tonne.render import Renderer  # noqa: E402
from tonne.state import EditorState  # noqa: E402

# Terminal interface and implementation
from tonne.terminal import Terminal, TerminalSession  # noqa: E402
from tonne.viewport import ViewportController  # noqa: E402

__all__ = [
    "ESC",
    "Editor",
    "EditorConfig",
    "EditorState",
    "FatalError",
    "Key",
    "KeyDecoder",
    "LoopState",
    "Renderer",
    "Row",
    "Terminal",
    "TerminalSession",
    "TextBuffer",
    "TonneError",
    "ViewportController",
    "ctrl_key",
    "iter_file_lines",
]
