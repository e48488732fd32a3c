"""CLI entry point for the tonne editor."""

from __future__ import annotations

import argparse
import logging
import sys

from tonne import __version__
from tonne.config import EditorConfig
from tonne.editor import Editor
from tonne.errors import FatalError
from tonne.terminal import CLEAR_SCREEN, CURSOR_HOME, Terminal, TerminalSession

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tonne",
        description="A small terminal text editor",
    )
    parser.add_argument("filename", nargs="?", help="File to open")
    parser.add_argument("--log-file", help="Write diagnostic logs to this file")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Log level used with --log-file (default: info)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def setup_logging(log_file: str | None, log_level: str) -> None:
    # The terminal belongs to the editor, so logs only ever go to a file.
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run(terminal: Terminal, filename: str | None, config: EditorConfig | None = None) -> int:
    """Run an editor on *terminal* and turn fatal errors into exit code 1."""
    editor = Editor(terminal, config)
    try:
        return editor.run(filename)
    except FatalError as exc:
        logger.error("fatal: %s", exc)
        try:
            terminal.write(CLEAR_SCREEN + CURSOR_HOME)
        except FatalError as clear_exc:
            logger.debug("could not clear the screen: %s", clear_exc)
        print(exc, file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.log_level)

    config = EditorConfig()
    terminal = TerminalSession(read_timeout_ds=config.read_timeout_ds)
    return run(terminal, args.filename, config)


if __name__ == "__main__":
    sys.exit(main())
