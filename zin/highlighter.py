"""Line tokenizer and syntax highlighter."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from .syntax import SyntaxTable


class Category(Enum):
    """Color category of a token."""
    PLAIN = "plain"
    KEYWORD = "keyword"
    TYPE = "type"
    OPERATOR = "operator"
    STRING = "string"
    COMMENT = "comment"


class LexerState(Enum):
    """Where the lexer is within the current line."""
    NORMAL = "normal"
    IN_STRING = "in_string"
    IN_COMMENT = "in_comment"


class Token(NamedTuple):
    category: Category
    text: str


class Highlighter:
    """Splits lines into classified tokens using a SyntaxTable.

    The lexer state is reset to NORMAL at the start of every line, so a
    string or comment never carries over to the next line. Block comments
    and multi-line strings are therefore colored only on their first line.
    """

    def __init__(self, syntax: SyntaxTable):
        self.syntax = syntax
        self.state = LexerState.NORMAL

    def classify(self, token: str) -> Token:
        """Classify one token and advance the lexer state."""
        syntax = self.syntax
        if self.state == LexerState.IN_STRING:
            if token == syntax.string:
                self.state = LexerState.NORMAL
            return Token(Category.STRING, token)
        if self.state == LexerState.IN_COMMENT:
            return Token(Category.COMMENT, token)

        if token in syntax.keywords:
            return Token(Category.KEYWORD, token)
        if token in syntax.types:
            return Token(Category.TYPE, token)
        if token in syntax.operators:
            return Token(Category.OPERATOR, token)
        if syntax.string and token == syntax.string:
            self.state = LexerState.IN_STRING
            return Token(Category.STRING, token)
        if syntax.comment and token == syntax.comment:
            self.state = LexerState.IN_COMMENT
            return Token(Category.COMMENT, token)
        return Token(Category.PLAIN, token)

    def highlight_line(self, line: str) -> list[Token]:
        """Tokenize and classify a single line.

        Args:
            line: The line text (no line terminator)

        Returns:
            Tokens in line order; their texts concatenate back to the line.
        """
        self.state = LexerState.NORMAL
        comment = self.syntax.comment
        symbols = self.syntax.symbols
        # Only the first comment marker on the line is recognized
        comment_pos = line.find(comment) if comment else -1

        tokens: list[Token] = []
        pending: list[str] = []

        def flush():
            if pending:
                tokens.append(self.classify(''.join(pending)))
                pending.clear()

        index = 0
        while index < len(line):
            if index == comment_pos:
                flush()
                tokens.append(self.classify(comment))
                index += len(comment)
                continue
            ch = line[index]
            if ch in symbols:
                flush()
                tokens.append(self.classify(ch))
            else:
                pending.append(ch)
            index += 1
        flush()
        return tokens
