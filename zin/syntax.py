"""Per-language syntax tables used by the highlighter.

A table is static data: the words and characters the highlighter classifies.
Tables are chosen by file extension; unknown extensions get an empty table,
which leaves every token as plain text.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SyntaxTable:
    """Static description of one language.

    Attributes:
        name: Display name of the language
        keywords: Words colored as keywords
        types: Words colored as types
        operators: Tokens colored as operators
        symbols: Single characters that end the pending token and are
            emitted as tokens of their own
        string: String delimiter (toggles the string state)
        comment: Line comment marker
    """
    name: str = "plain"
    keywords: frozenset[str] = field(default_factory=frozenset)
    types: frozenset[str] = field(default_factory=frozenset)
    operators: frozenset[str] = field(default_factory=frozenset)
    symbols: frozenset[str] = field(default_factory=frozenset)
    string: str = ""
    comment: str = ""


PLAIN = SyntaxTable()

RUST = SyntaxTable(
    name="rust",
    keywords=frozenset({
        "as", "break", "const", "continue", "crate", "else", "enum",
        "extern", "false", "fn", "for", "if", "impl", "in", "let", "loop",
        "match", "mod", "move", "mut", "pub", "ref", "return", "self",
        "Self", "static", "struct", "super", "trait", "true", "type",
        "unsafe", "use", "where", "while",
    }),
    types=frozenset({
        "u8", "u16", "u32", "u64", "u128", "usize",
        "i8", "i16", "i32", "i64", "i128", "isize",
        "f32", "f64", "bool", "char", "str", "String",
    }),
    operators=frozenset({"+", "-", "*", "/", "=", ">", "<", "%"}),
    symbols=frozenset({
        ".", ",", " ", "(", ")", "{", "}", "+", "-", "*", "/", "=",
        ":", ";", "@", "<", ">", "&", '"',
    }),
    string='"',
    comment="//",
)

PYTHON = SyntaxTable(
    name="python",
    keywords=frozenset({
        "False", "None", "True", "and", "as", "assert", "async", "await",
        "break", "class", "continue", "def", "del", "elif", "else",
        "except", "finally", "for", "from", "global", "if", "import",
        "in", "is", "lambda", "nonlocal", "not", "or", "pass", "raise",
        "return", "try", "while", "with", "yield", "self",
    }),
    types=frozenset({
        "int", "float", "str", "bytes", "bool", "list", "dict", "set",
        "tuple", "frozenset", "object", "type",
    }),
    operators=frozenset({"+", "-", "*", "/", "=", ">", "<", "%", "@"}),
    symbols=frozenset({
        ".", ",", " ", "(", ")", "[", "]", "{", "}", "+", "-", "*", "/",
        "=", ":", ";", "@", "<", ">", "%", '"',
    }),
    string='"',
    comment="#",
)

# File extension -> table
_TABLES_BY_EXTENSION = {
    ".rs": RUST,
    ".py": PYTHON,
}


def syntax_for_path(path: str) -> SyntaxTable:
    """Return the syntax table for a file path, or the plain table."""
    ext = os.path.splitext(path)[1].lower()
    return _TABLES_BY_EXTENSION.get(ext, PLAIN)
