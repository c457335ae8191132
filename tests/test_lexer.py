"""Tests for the module map lexer."""

from __future__ import annotations

import pytest

from modulemap_parser.errors import ErrorKind, LexError
from modulemap_parser.lexer import tokenize, tokenize_all
from modulemap_parser.tokens import SourcePosition, TokenType


def _kinds_and_texts(text: str) -> list[tuple[TokenType, str]]:
    return [(tok.type, tok.text) for tok in tokenize_all(text)]


def test_empty_input_yields_only_end_of_input() -> None:
    """Empty text produces a single END_OF_INPUT token at 1:1."""
    tokens = tokenize_all("")
    assert len(tokens) == 1
    assert tokens[0].type is TokenType.END_OF_INPUT
    assert tokens[0].position == SourcePosition(1, 1, 0)


def test_module_declaration_tokens() -> None:
    """Dotted names are split into identifier/dot runs."""
    assert _kinds_and_texts('module Foo.Bar { header "a.h" }') == [
        (TokenType.IDENTIFIER, "module"),
        (TokenType.IDENTIFIER, "Foo"),
        (TokenType.PUNCTUATION, "."),
        (TokenType.IDENTIFIER, "Bar"),
        (TokenType.PUNCTUATION, "{"),
        (TokenType.IDENTIFIER, "header"),
        (TokenType.STRING_LITERAL, "a.h"),
        (TokenType.PUNCTUATION, "}"),
        (TokenType.END_OF_INPUT, ""),
    ]


def test_positions_track_lines_and_columns() -> None:
    """Line and column are 1-based and reset after newlines."""
    tokens = tokenize_all("module Foo {\n  header \"x.h\"\n}")
    positions = [(tok.text, tok.position.line, tok.position.column) for tok in tokens]
    assert positions == [
        ("module", 1, 1),
        ("Foo", 1, 8),
        ("{", 1, 12),
        ("header", 2, 3),
        ("x.h", 2, 10),
        ("}", 3, 1),
        ("", 3, 2),
    ]


def test_comments_are_skipped() -> None:
    """Line and block comments never produce tokens."""
    text = """
    // leading comment
    module /* inline */ Foo { // trailing
      /* multi
         line */ header "a.h"
    }
    """
    texts = [tok.text for tok in tokenize_all(text)]
    assert texts == ["module", "Foo", "{", "header", "a.h", "}", ""]


def test_unterminated_block_comment() -> None:
    """An unterminated block comment reports the comment start."""
    with pytest.raises(LexError) as exc_info:
        tokenize_all("module /* never closed")
    assert exc_info.value.kind is ErrorKind.UNTERMINATED_COMMENT
    assert exc_info.value.position.line == 1
    assert exc_info.value.position.column == 8


@pytest.mark.parametrize(
    "text",
    [
        'header "abc',
        'header "abc\n"',
        'header "abc\\"',
    ],
)
def test_unterminated_string(text: str) -> None:
    """Strings must close on the line they start."""
    with pytest.raises(LexError) as exc_info:
        tokenize_all(text)
    assert exc_info.value.kind is ErrorKind.UNTERMINATED_STRING
    assert exc_info.value.position == SourcePosition(1, 8, 7)


def test_string_escapes() -> None:
    """Escaped quotes and backslashes are unescaped; other escapes are kept."""
    tokens = tokenize_all('"a\\"b\\\\c" "d\\ne"')
    assert tokens[0].text == 'a"b\\c'
    assert tokens[1].text == "d\\ne"


def test_keyword_text_inside_string_is_not_split() -> None:
    """Keyword-like words inside string literals stay part of the string."""
    tokens = tokenize_all('"private header module.h"')
    assert tokens[0].type is TokenType.STRING_LITERAL
    assert tokens[0].text == "private header module.h"


def test_unknown_characters_become_punctuation() -> None:
    """Characters outside the grammar are left for the parser to reject."""
    assert _kinds_and_texts("; !") == [
        (TokenType.PUNCTUATION, ";"),
        (TokenType.PUNCTUATION, "!"),
        (TokenType.END_OF_INPUT, ""),
    ]


def test_tokenize_is_lazy() -> None:
    """Errors are only raised when the consumer reaches them."""
    tokens = tokenize('module Foo "oops')
    assert next(tokens).text == "module"
    assert next(tokens).text == "Foo"
    with pytest.raises(LexError):
        next(tokens)


def test_tokenize_is_deterministic() -> None:
    """The same text always yields the same tokens."""
    text = 'explicit module Foo.* { private textual header "x.h" }'
    assert tokenize_all(text) == tokenize_all(text)


def test_describe_token() -> None:
    """Token descriptions name the token kind for diagnostics."""
    ident, string, punct, eof = tokenize_all('foo "bar" {')
    assert ident.describe() == "identifier 'foo'"
    assert string.describe() == 'string "bar"'
    assert punct.describe() == "'{'"
    assert eof.describe() == "end of input"
