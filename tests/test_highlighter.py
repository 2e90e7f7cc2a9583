"""Tests for line tokenizing and classification."""

import pytest

from zin.highlighter import Category, Highlighter, LexerState, Token
from zin.syntax import PLAIN, PYTHON, RUST, SyntaxTable, syntax_for_path


def categories(tokens, text):
    return [t.category for t in tokens if t.text == text]


@pytest.fixture
def rust():
    return Highlighter(RUST)


def test_tokens_concatenate_back_to_line(rust):
    lines = [
        'fn main() {',
        '    let s: String = "hello world"; // greet',
        '',
        'x+y*z',
        '"unterminated',
    ]
    for line in lines:
        assert ''.join(t.text for t in rust.highlight_line(line)) == line


def test_keyword_type_and_operator(rust):
    tokens = rust.highlight_line("let x: u32 = a + b;")
    assert Token(Category.KEYWORD, "let") in tokens
    assert Token(Category.TYPE, "u32") in tokens
    assert Token(Category.OPERATOR, "=") in tokens
    assert Token(Category.OPERATOR, "+") in tokens
    assert Token(Category.PLAIN, "x") in tokens


def test_symbols_split_tokens(rust):
    tokens = rust.highlight_line("foo(bar)")
    assert [t.text for t in tokens] == ["foo", "(", "bar", ")"]


def test_empty_line_has_no_tokens(rust):
    assert rust.highlight_line("") == []


def test_string_toggles_state(rust):
    tokens = rust.highlight_line('let s = "fn if" ;')
    texts = [t.text for t in tokens]
    start = texts.index('"')
    end = len(texts) - 1 - texts[::-1].index('"')
    inside = tokens[start:end + 1]
    assert all(t.category == Category.STRING for t in inside)
    # Keywords inside the string are not keywords
    assert Token(Category.KEYWORD, "fn") not in tokens
    assert tokens[0] == Token(Category.KEYWORD, "let")
    assert tokens[-1] == Token(Category.PLAIN, ";")


def test_code_after_closing_quote_is_classified_again(rust):
    tokens = rust.highlight_line('"a" fn')
    assert tokens[-1] == Token(Category.KEYWORD, "fn")


def test_comment_colors_rest_of_line(rust):
    tokens = rust.highlight_line("let x = 1; // fn u32 \"q")
    marker = tokens.index(Token(Category.COMMENT, "//"))
    assert all(t.category == Category.COMMENT for t in tokens[marker:])
    assert tokens[0] == Token(Category.KEYWORD, "let")


def test_comment_at_line_start(rust):
    tokens = rust.highlight_line("// only a comment")
    assert tokens[0] == Token(Category.COMMENT, "//")
    assert {t.category for t in tokens} == {Category.COMMENT}


def test_comment_marker_inside_word(rust):
    tokens = rust.highlight_line("a//b")
    assert tokens == [
        Token(Category.PLAIN, "a"),
        Token(Category.COMMENT, "//"),
        Token(Category.COMMENT, "b"),
    ]


def test_state_resets_every_line(rust):
    rust.highlight_line('let s = "open')
    assert rust.state == LexerState.IN_STRING
    tokens = rust.highlight_line("fn next")
    assert tokens[0] == Token(Category.KEYWORD, "fn")

    rust.highlight_line("// comment")
    assert rust.state == LexerState.IN_COMMENT
    tokens = rust.highlight_line("let y")
    assert tokens[0] == Token(Category.KEYWORD, "let")


def test_keyword_check_precedes_type_check():
    table = SyntaxTable(keywords=frozenset({"str"}), types=frozenset({"str"}),
                        symbols=frozenset({" "}))
    tokens = Highlighter(table).highlight_line("str")
    assert tokens == [Token(Category.KEYWORD, "str")]


def test_plain_table_leaves_everything_plain():
    hl = Highlighter(PLAIN)
    line = 'fn main() { "x" // y }'
    tokens = hl.highlight_line(line)
    assert tokens == [Token(Category.PLAIN, line)]


def test_plain_table_handles_empty_line():
    assert Highlighter(PLAIN).highlight_line("") == []


def test_python_table():
    tokens = Highlighter(PYTHON).highlight_line("def f(x: int): # note")
    assert tokens[0] == Token(Category.KEYWORD, "def")
    assert Token(Category.TYPE, "int") in tokens
    assert Token(Category.COMMENT, "#") in tokens


def test_multibyte_text_is_kept_intact(rust):
    line = 'let é = "ü";'
    tokens = rust.highlight_line(line)
    assert ''.join(t.text for t in tokens) == line
    assert Token(Category.PLAIN, "é") in tokens


@pytest.mark.parametrize("path,expected", [
    ("main.rs", RUST),
    ("SRC/LIB.RS", RUST),
    ("script.py", PYTHON),
    ("notes.txt", PLAIN),
    ("Makefile", PLAIN),
    ("", PLAIN),
])
def test_syntax_for_path(path, expected):
    assert syntax_for_path(path) is expected
