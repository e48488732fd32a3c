"""Tests for tonne.render -- frame composition.

Uses the VirtualTerminal to capture output and checks the frame layout
byte for byte where it matters.
"""

from __future__ import annotations

from tonne.buffer import TextBuffer
from tonne.config import EditorConfig
from tonne.render import Renderer
from tonne.state import EditorState

from .virtual_terminal import VirtualTerminal


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_state(
    lines: list[bytes] | None = None,
    screenrows: int = 6,
    screencols: int = 30,
    clock: FakeClock | None = None,
) -> EditorState:
    buf = TextBuffer()
    buf.load(iter(lines or []))
    return EditorState(
        screenrows=screenrows,
        screencols=screencols,
        buffer=buf,
        clock=clock or FakeClock(),
    )


def split_frame(frame: bytes) -> list[bytes]:
    """Split the frame into its screen lines, dropping the leading codes."""
    body = frame.removeprefix(b"\x1b[?25l\x1b[H")
    return body.split(b"\r\n")


# ---------------------------------------------------------------------------
# Frame envelope
# ---------------------------------------------------------------------------


class TestFrameEnvelope:
    def test_single_write_per_frame(self) -> None:
        term = VirtualTerminal()
        Renderer(make_state([b"hello"])).refresh(term)
        assert term.write_count == 1

    def test_hides_cursor_then_homes_first(self) -> None:
        frame = Renderer(make_state()).compose()
        assert frame.startswith(b"\x1b[?25l\x1b[H")

    def test_positions_and_shows_cursor_last(self) -> None:
        state = make_state([b"a\tbcd"] * 10)
        state.cy, state.rx = 7, 9
        state.rowoffset, state.coloffset = 3, 2
        frame = Renderer(state).compose()
        assert frame.endswith(b"\x1b[5;8H\x1b[?25h")

    def test_line_count(self) -> None:
        lines = split_frame(Renderer(make_state(screenrows=6)).compose())
        # six text rows, the status bar, then the message bar
        assert len(lines) == 8


# ---------------------------------------------------------------------------
# Text rows
# ---------------------------------------------------------------------------


class TestDrawRows:
    def test_rows_use_render_cache(self) -> None:
        lines = split_frame(Renderer(make_state([b"a\tb"])).compose())
        assert lines[0] == b"a       b\x1b[K"

    def test_tildes_after_content(self) -> None:
        lines = split_frame(Renderer(make_state([b"one", b"two"])).compose())
        assert lines[2:6] == [b"~\x1b[K"] * 4

    def test_rows_are_clipped_to_width(self) -> None:
        state = make_state([b"0123456789"], screencols=4)
        lines = split_frame(Renderer(state).compose())
        assert lines[0] == b"0123\x1b[K"

    def test_rows_start_at_column_offset(self) -> None:
        state = make_state([b"0123456789"], screencols=4)
        state.coloffset = 3
        lines = split_frame(Renderer(state).compose())
        assert lines[0] == b"3456\x1b[K"

    def test_offset_past_row_end_draws_nothing(self) -> None:
        state = make_state([b"ab", b"0123456789"], screencols=4)
        state.coloffset = 5
        lines = split_frame(Renderer(state).compose())
        assert lines[0] == b"\x1b[K"
        assert lines[1] == b"5678\x1b[K"

    def test_rows_start_at_row_offset(self) -> None:
        state = make_state([b"r%d" % i for i in range(20)], screenrows=3)
        state.rowoffset = 10
        lines = split_frame(Renderer(state).compose())
        assert lines[:3] == [b"r10\x1b[K", b"r11\x1b[K", b"r12\x1b[K"]


class TestWelcome:
    def test_banner_on_empty_buffer(self) -> None:
        state = make_state(screenrows=9, screencols=40)
        config = EditorConfig(version="9.9")
        lines = split_frame(Renderer(state, config).compose())
        welcome = b"Tonne editor -- version 9.9"
        padding = (40 - len(welcome)) // 2
        assert lines[3] == b"~" + b" " * (padding - 1) + welcome + b"\x1b[K"
        assert all(line == b"~\x1b[K" for i, line in enumerate(lines[:9]) if i != 3)

    def test_banner_clipped_to_narrow_screen(self) -> None:
        state = make_state(screenrows=3, screencols=5)
        lines = split_frame(Renderer(state).compose())
        assert lines[1] == b"Tonne\x1b[K"

    def test_no_banner_when_buffer_has_rows(self) -> None:
        frame = Renderer(make_state([b"x"], screenrows=9)).compose()
        assert b"Tonne editor" not in frame


# ---------------------------------------------------------------------------
# Status and message bars
# ---------------------------------------------------------------------------


class TestStatusBar:
    def test_layout(self) -> None:
        state = make_state([b"a", b"b", b"c"], screencols=30)
        state.filename = "notes.txt"
        state.cy = 1
        lines = split_frame(Renderer(state).compose())
        left = b"notes.txt - 3 lines"
        right = b"2/3"
        expected = left + b" " * (30 - len(left) - len(right)) + right
        assert lines[6] == b"\x1b[7m" + expected + b"\x1b[m"

    def test_placeholder_name(self) -> None:
        lines = split_frame(Renderer(make_state()).compose())
        assert lines[6].startswith(b"\x1b[7m[No Name] - 0 lines")
        assert lines[6].endswith(b"1/0\x1b[m")

    def test_long_filename_cut_to_twenty(self) -> None:
        state = make_state(screencols=60)
        state.filename = "a" * 40
        lines = split_frame(Renderer(state).compose())
        assert b"a" * 20 + b" - 0 lines" in lines[6]
        assert b"a" * 21 not in lines[6]

    def test_truncated_to_width_and_drops_right_part(self) -> None:
        state = make_state(screencols=8)
        lines = split_frame(Renderer(state).compose())
        assert lines[6] == b"\x1b[7m[No Name\x1b[m"

    def test_modified_marker(self) -> None:
        state = make_state([b"x"], screencols=40)
        state.buffer.insert_char(0, 0, ord("y"))
        lines = split_frame(Renderer(state).compose())
        assert b"[No Name] - 1 lines (modified)" in lines[6]


class TestMessageBar:
    def test_recent_message_is_shown(self) -> None:
        clock = FakeClock()
        state = make_state(clock=clock)
        state.set_status_message("HELP: %s", "Ctrl-Q")
        clock.now += 4.9
        lines = split_frame(Renderer(state).compose())
        assert lines[7].startswith(b"\x1b[KHELP: Ctrl-Q\x1b[")

    def test_expired_message_is_blank(self) -> None:
        clock = FakeClock()
        state = make_state(clock=clock)
        state.set_status_message("old news")
        clock.now += 5
        lines = split_frame(Renderer(state).compose())
        assert lines[7].startswith(b"\x1b[K\x1b[")
        assert b"old news" not in lines[7]

    def test_message_clipped_to_width(self) -> None:
        state = make_state(screencols=4)
        state.set_status_message("abcdefgh")
        lines = split_frame(Renderer(state).compose())
        assert lines[7].startswith(b"\x1b[Kabcd\x1b[")
