"""Lexical scanner for module map files.

Converts raw modulemap text into a lazy sequence of tokens. Whitespace and
comments are dropped; every token records where it started so the parser
can report precise positions.
"""

from __future__ import annotations

import logging
import string
from typing import Iterator, List

from modulemap_parser.errors import ErrorKind, LexError
from modulemap_parser.tokens import SourcePosition, Token, TokenType

logger = logging.getLogger("modulemap_parser.lexer")

_IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_WHITESPACE = frozenset(" \t\r\n\f\v")
_ESCAPABLE = frozenset('"\\')


def tokenize(text: str) -> Iterator[Token]:
    """Lazily tokenize modulemap text.

    The sequence always ends with a single END_OF_INPUT token. Tokens are
    produced on demand, so a lexical error is only raised once the consumer
    reaches it.

    Args:
        text: Full text of a modulemap file.

    Yields:
        Token objects in source order.

    Raises:
        LexError: On unterminated string literals or block comments.
    """
    return _Lexer(text).tokens()


def tokenize_all(text: str) -> List[Token]:
    """Tokenize `text` eagerly and return the complete token list."""
    return list(tokenize(text))


class _Lexer:
    """Scanner state over a single input text."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._line = 1
        self._column = 1

    def tokens(self) -> Iterator[Token]:
        count = 0
        while True:
            self._skip_whitespace_and_comments()
            if self._pos >= len(self._text):
                break
            yield self._scan_token()
            count += 1
        logger.debug("Tokenized %d characters into %d tokens", len(self._text), count)
        yield Token(TokenType.END_OF_INPUT, "", self._position())

    def _position(self) -> SourcePosition:
        return SourcePosition(self._line, self._column, self._pos)

    def _current(self) -> str:
        if self._pos < len(self._text):
            return self._text[self._pos]
        return ""

    def _peek(self) -> str:
        if self._pos + 1 < len(self._text):
            return self._text[self._pos + 1]
        return ""

    def _advance(self) -> str:
        ch = self._text[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _skip_whitespace_and_comments(self) -> None:
        while self._pos < len(self._text):
            ch = self._current()
            if ch in _WHITESPACE:
                self._advance()
            elif ch == "/" and self._peek() == "/":
                while self._pos < len(self._text) and self._current() != "\n":
                    self._advance()
            elif ch == "/" and self._peek() == "*":
                self._skip_block_comment()
            else:
                return

    def _skip_block_comment(self) -> None:
        start = self._position()
        self._advance()
        self._advance()
        while self._pos < len(self._text):
            if self._current() == "*" and self._peek() == "/":
                self._advance()
                self._advance()
                return
            self._advance()
        raise LexError(ErrorKind.UNTERMINATED_COMMENT, "unterminated block comment", start)

    def _scan_token(self) -> Token:
        start = self._position()
        ch = self._current()

        if ch == '"':
            return Token(TokenType.STRING_LITERAL, self._scan_string(start), start)

        if ch in _IDENTIFIER_CHARS:
            begin = self._pos
            while self._pos < len(self._text) and self._current() in _IDENTIFIER_CHARS:
                self._advance()
            return Token(TokenType.IDENTIFIER, self._text[begin : self._pos], start)

        # Unknown characters become punctuation as well; the parser rejects
        # them with a positioned UNEXPECTED_TOKEN error.
        self._advance()
        return Token(TokenType.PUNCTUATION, ch, start)

    def _scan_string(self, start: SourcePosition) -> str:
        self._advance()
        chars: List[str] = []
        while True:
            ch = self._current()
            if ch == "" or ch == "\n":
                raise LexError(
                    ErrorKind.UNTERMINATED_STRING, "unterminated string literal", start
                )
            if ch == '"':
                self._advance()
                return "".join(chars)
            if ch == "\\" and self._peek() in _ESCAPABLE:
                self._advance()
            chars.append(self._advance())


__all__ = ["tokenize", "tokenize_all"]
