"""Tests for building frames from a session."""

from zin.buffer import Position, TextBuffer
from zin.highlighter import Category, Highlighter, Token
from zin.modes import CommandState, InsertState, Mode, VisualState
from zin.render import build_frame, selection_ranges
from zin.session import EditorSession
from zin.syntax import PLAIN, RUST
from zin.viewport import Viewport


def session_for(lines, height=6, syntax=PLAIN):
    return EditorSession(buffer=TextBuffer(lines, name="doc.rs"), viewport=Viewport(20, height),
                         syntax=syntax)


def test_frame_has_one_row_per_visible_line():
    session = session_for(["a", "b"], height=6)
    frame = build_frame(session, Highlighter(PLAIN))
    assert len(frame.rows) == 4
    assert frame.rows[0] == [Token(Category.PLAIN, "a")]
    assert frame.rows[1] == [Token(Category.PLAIN, "b")]


def test_rows_past_document_end_show_marker():
    session = session_for(["a"], height=5)
    frame = build_frame(session, Highlighter(PLAIN))
    assert frame.rows[1:] == [[Token(Category.PLAIN, "~")]] * 2


def test_empty_line_is_not_a_marker_row():
    session = session_for(["", "x"], height=5)
    frame = build_frame(session, Highlighter(PLAIN))
    assert frame.rows[0] == []


def test_rows_start_at_top_row():
    session = session_for([f"line {i}" for i in range(10)], height=5)
    session.viewport.top_row = 4
    session.viewport.row = 5
    session.viewport.col = 2
    frame = build_frame(session, Highlighter(PLAIN))
    assert frame.rows[0] == [Token(Category.PLAIN, "line 4")]
    assert (frame.cursor_y, frame.cursor_x) == (1, 2)


def test_rows_are_highlighted():
    session = session_for(["fn main"], syntax=RUST)
    frame = build_frame(session, Highlighter(RUST))
    assert frame.rows[0][0] == Token(Category.KEYWORD, "fn")


def test_status_and_mode():
    session = session_for(["a"])
    session.status = "Unknown command: :x"
    frame = build_frame(session, Highlighter(PLAIN))
    assert frame.status == "Unknown command: :x"
    assert frame.mode == Mode.NORMAL
    assert frame.mode_label == " NORMAL "
    assert frame.name == "doc.rs"
    assert frame.modified is False


def test_command_mode_shows_typed_text():
    session = session_for(["a"])
    session.status = "old"
    session.enter(CommandState(text=":F ma"))
    frame = build_frame(session, Highlighter(PLAIN))
    assert frame.status == ":F ma"
    assert frame.mode_label == " COMMAND "


def test_insert_mode_label():
    session = session_for(["a"])
    session.enter(InsertState())
    assert build_frame(session, Highlighter(PLAIN)).mode_label == " INSERT "


def test_no_selection_outside_visual_mode():
    session = session_for(["abc"])
    assert selection_ranges(session) == [None] * 4


def test_single_row_selection():
    session = session_for(["abcdefgh"])
    state = VisualState.anchored_at(Position(0, 6))
    state.selection.end = Position(0, 3)
    session.enter(state)
    assert selection_ranges(session)[0] == (3, 6)


def test_multi_row_selection():
    session = session_for(["first", "middle", "last", "after"], height=7)
    state = VisualState.anchored_at(Position(0, 2))
    state.selection.end = Position(2, 3)
    session.enter(state)
    assert selection_ranges(session) == [(2, 5), (0, 6), (0, 3), None, None]
