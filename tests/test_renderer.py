"""Tests for frame composition."""

import pytest
from unittest.mock import MagicMock

from skim.config import Settings
from skim.document import Document
from skim.errors import RenderError, ThemeMissing
from skim.highlight import HighlightAdapter
from skim.renderer import Renderer, center, line_number_label, line_number_width, printable
from skim.viewport import Position, Viewport


def make_renderer(terminal, theme="monokai", line_numbers=False):
    settings = Settings(theme=theme, line_numbers=line_numbers)
    return Renderer(terminal, HighlightAdapter(settings.theme), settings, version="1.2.3")


def test_center_pads_left_with_integer_division():
    assert center("abc", 9) == "   abc   "
    assert center("abc", 10) == "   abc    "
    assert len(center("abc", 10)) == 10


def test_center_truncates_when_too_wide():
    assert center("abcdef", 4) == "abcd"
    assert center("abc", 0) == ""


def test_line_number_label():
    assert line_number_label(0) == "   1 "
    assert line_number_label(41) == "  42 "


def test_line_number_label_keeps_all_digits():
    assert line_number_label(9999) == "10000 "
    assert line_number_label(12344) == "12345 "
    assert line_number_label(12344, line_number_width(20000)) == "12345 "
    assert line_number_label(41, line_number_width(20000)) == "   42 "


def test_line_number_width():
    assert line_number_width(0) == 5
    assert line_number_width(9999) == 5
    assert line_number_width(10000) == 6


def test_printable_replaces_control_characters():
    assert printable("a\tb") == "a\u2409b"
    assert printable("\x1b[2J") == "\u241b[2J"
    assert printable("\x7f\x9b") == "\u2421\ufffd"
    assert printable("caf\u00e9 \U0001F600") == "caf\u00e9 \U0001F600"


def test_status_bar_centered(make_terminal):
    terminal = make_terminal(width=40, height=10)
    doc = Document.from_lines(["a"], source_name="notes.txt")
    renderer = make_renderer(terminal)
    renderer.render(doc, Viewport.from_terminal_size(40, 10))

    text = "skim 1.2.3 - File: notes.txt"
    assert renderer.status_text(doc) == text
    assert terminal.screen_line(0) == " " * ((40 - len(text)) // 2) + text
    assert ('reverse', center(text, 40)) in terminal.ops


def test_status_bar_untitled(make_terminal):
    renderer = make_renderer(make_terminal())
    assert renderer.status_text(Document.from_lines([])).endswith("File: Untitled")


def test_rows_and_tilde_past_end(make_terminal):
    terminal = make_terminal(width=20, height=7)
    doc = Document.from_lines(["a", "bb", "ccc"])
    viewport = Viewport.from_terminal_size(20, 7)
    make_renderer(terminal).render(doc, viewport)

    assert viewport.height == 5
    assert [terminal.screen_line(r) for r in range(1, 6)] == ["a", "bb", "ccc", "~", "~"]


def test_each_row_cleared_before_drawing(make_terminal):
    terminal = make_terminal(width=20, height=5)
    make_renderer(terminal).render(Document.from_lines(["x"]), Viewport.from_terminal_size(20, 5))
    cleared_rows = {op[1] for op in terminal.ops if op[0] == 'clear_line'}
    assert {1, 2, 3} <= cleared_rows


def test_frame_order(make_terminal):
    terminal = make_terminal(width=20, height=5)
    make_renderer(terminal).render(Document.from_lines(["x"]), Viewport.from_terminal_size(20, 5))
    names = [op[0] for op in terminal.ops]
    assert names[0] == 'hide_cursor'
    assert names[-2:] == ['show_cursor', 'flush']
    assert names[-3] == 'move'


def test_unsupported_language_renders_plain(make_terminal):
    terminal = make_terminal(width=30, height=5)
    doc = Document.from_lines(["let x = <tag> 42;"], language_tag="xyz")
    renderer = make_renderer(terminal)
    renderer.render(doc, Viewport.from_terminal_size(30, 5))

    assert terminal.screen_line(1) == "let x = <tag> 42;"
    assert terminal.styled_spans == []
    spans = renderer.compose_row(doc.row(0), Viewport(30, 3), "xyz")
    assert len(spans) == 1
    assert spans[0].text == "let x = <tag> 42;"
    assert spans[0].style.is_plain


def test_missing_theme_renders_plain(make_terminal):
    terminal = make_terminal(width=30, height=5)
    doc = Document.from_lines(["x = 1"], language_tag="py")
    make_renderer(terminal, theme="nope").render(doc, Viewport.from_terminal_size(30, 5))
    assert terminal.screen_line(1) == "x = 1"
    assert terminal.styled_spans == []


def test_python_rows_are_styled(make_terminal):
    terminal = make_terminal(width=40, height=5)
    doc = Document.from_lines(["def f(): return 1"], language_tag="py")
    make_renderer(terminal).render(doc, Viewport.from_terminal_size(40, 5))
    assert terminal.screen_line(1) == "def f(): return 1"
    assert terminal.styled_spans
    assert all(row == 1 for row, _, _ in terminal.styled_spans)


def test_highlighter_failure_affects_only_that_line(make_terminal):
    terminal = make_terminal(width=20, height=6)
    highlighter = MagicMock(spec=HighlightAdapter)
    highlighter.plain.side_effect = HighlightAdapter.plain

    def highlight(text, tag):
        if text == "bad":
            raise ThemeMissing("x")
        return HighlightAdapter.plain(text.upper())

    highlighter.highlight.side_effect = highlight
    renderer = Renderer(terminal, highlighter, Settings(), version="0")
    renderer.render(Document.from_lines(["ok", "bad", "fine"]), Viewport.from_terminal_size(20, 6))
    assert [terminal.screen_line(r) for r in (1, 2, 3)] == ["OK", "bad", "FINE"]
    highlighter.report_failure.assert_called_once()


def test_horizontal_scroll_renders_visible_range(make_terminal):
    terminal = make_terminal(width=4, height=5)
    doc = Document.from_lines(["0123456789", "ab"])
    viewport = Viewport.from_terminal_size(4, 5)
    viewport.cursor = Position(6, 0)
    make_renderer(terminal).render(doc, viewport)

    assert viewport.offset.x == 3
    assert terminal.screen_line(1) == "3456"
    assert terminal.screen_line(2) == ""


def test_emoji_range_rendered_by_grapheme(make_terminal):
    terminal = make_terminal(width=2, height=3)
    doc = Document.from_lines(["😀😃😄😁"])
    viewport = Viewport.from_terminal_size(2, 3)
    viewport.cursor = Position(2, 0)
    make_renderer(terminal).render(doc, viewport)
    assert viewport.offset.x == 1
    row_writes = [op[1] for op in terminal.ops if op[0] == 'write']
    assert "😃😄" in row_writes


def test_vertical_scroll_follows_cursor(make_terminal):
    terminal = make_terminal(width=10, height=5)
    doc = Document.from_lines([f"line {i}" for i in range(20)])
    viewport = Viewport.from_terminal_size(10, 5)
    viewport.cursor = Position(0, 10)
    make_renderer(terminal).render(doc, viewport)

    assert viewport.offset.y == 8
    assert [terminal.screen_line(r) for r in (1, 2, 3)] == ["line 8", "line 9", "line 10"]
    assert terminal.cursor == (1 + 2, 0)


def test_cursor_placed_relative_to_offset(make_terminal):
    terminal = make_terminal(width=20, height=10)
    viewport = Viewport.from_terminal_size(20, 10)
    viewport.cursor = Position(2, 1)
    make_renderer(terminal).render(Document.from_lines(["abc", "abc"]), viewport)
    assert terminal.cursor == (2, 2)


def test_cursor_beyond_document_stays_on_screen(make_terminal):
    terminal = make_terminal(width=10, height=6)
    viewport = Viewport.from_terminal_size(10, 6)
    viewport.cursor = Position(30, 30)
    make_renderer(terminal).render(Document.from_lines(["a"]), viewport)
    row, col = terminal.cursor
    assert 1 <= row < 1 + viewport.height
    assert 0 <= col < viewport.width


def test_line_numbers_overlay(make_terminal):
    terminal = make_terminal(width=20, height=6)
    doc = Document.from_lines(["alpha", "beta"])
    make_renderer(terminal, line_numbers=True).render(doc, Viewport.from_terminal_size(20, 6))

    assert terminal.screen_line(1) == "alpha" + " " * 10 + "    1"
    assert terminal.screen_line(2) == "beta" + " " * 11 + "    2"
    assert terminal.screen_line(3) == "~"


def test_line_numbers_follow_scroll(make_terminal):
    terminal = make_terminal(width=20, height=5)
    doc = Document.from_lines([str(i) for i in range(50)])
    viewport = Viewport.from_terminal_size(20, 5)
    viewport.cursor = Position(0, 40)
    make_renderer(terminal, line_numbers=True).render(doc, viewport)
    assert terminal.screen_line(3).endswith("41")


def test_line_numbers_off_by_default(make_terminal):
    terminal = make_terminal(width=20, height=5)
    make_renderer(terminal).render(Document.from_lines(["alpha"]), Viewport.from_terminal_size(20, 5))
    assert terminal.screen_line(1) == "alpha"


def test_hint_line(make_terminal):
    terminal = make_terminal(width=40, height=6)
    viewport = Viewport.from_terminal_size(40, 6)
    viewport.cursor = Position(1, 2)
    doc = Document.from_lines(["a", "b", "cde"], language_tag="py")
    make_renderer(terminal).render(doc, viewport)
    hint = terminal.screen_line(5)
    assert hint.startswith(" Ln 3, Col 2  [py]")
    assert hint.endswith("q to quit")


def test_tiny_terminal_renders_only_status(make_terminal):
    terminal = make_terminal(width=40, height=1)
    viewport = Viewport.from_terminal_size(40, 1)
    make_renderer(terminal).render(Document.from_lines(["a"]), viewport)
    assert viewport.height == 0
    assert "File: Untitled" in terminal.screen_line(0)


def test_resize_picked_up_each_frame(make_terminal):
    terminal = make_terminal(width=20, height=10)
    viewport = Viewport.from_terminal_size(80, 24)
    make_renderer(terminal).render(Document.from_lines(["a"]), viewport)
    assert (viewport.width, viewport.height) == (20, 8)


def test_write_failure_raises_render_error_and_keeps_state(make_terminal):
    terminal = make_terminal(width=20, height=6)
    terminal.flush = MagicMock(side_effect=RenderError("broken pipe"))
    viewport = Viewport.from_terminal_size(20, 6)
    viewport.cursor = Position(1, 1)
    doc = Document.from_lines(["ab", "cd"])
    with pytest.raises(RenderError):
        make_renderer(terminal).render(doc, viewport)
    assert viewport.cursor == Position(1, 1)
    assert doc.row_count() == 2


def test_line_numbers_widen_for_long_documents(make_terminal):
    terminal = make_terminal(width=20, height=5)
    doc = Document.from_lines(["x"] * 12345)
    viewport = Viewport.from_terminal_size(20, 5)
    viewport.cursor = Position(0, 12344)
    make_renderer(terminal, line_numbers=True).render(doc, viewport)
    assert terminal.screen_line(3) == "x" + " " * 13 + "12345"
    assert terminal.screen_line(2) == "x" + " " * 13 + "12344"


def test_control_characters_never_reach_terminal(make_terminal):
    terminal = make_terminal(width=30, height=5)
    doc = Document.from_lines(["a\x1b[2Jb\tc\x07"], language_tag="py")
    renderer = make_renderer(terminal)
    renderer.render(doc, Viewport.from_terminal_size(30, 5))

    assert terminal.screen_line(1) == "a\u241b[2Jb\u2409c\u2407"
    writes = ''.join(op[1] for op in terminal.ops if op[0] == 'write')
    assert not any(ch in writes for ch in "\x1b\t\x07")
    spans = renderer.compose_row(doc.row(0), Viewport(30, 3), "py")
    assert len("".join(span.text for span in spans)) == doc.row(0).length()
