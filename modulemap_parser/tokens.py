"""Token types produced by the module map lexer.

Tokens are immutable values carrying their raw text and the source position
where they start. Keyword recognition is left to the parser, which decides
from the grammar position whether an identifier acts as a keyword.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenType(str, Enum):
    """Kind of a lexical token."""

    IDENTIFIER = "identifier"
    STRING_LITERAL = "string_literal"
    PUNCTUATION = "punctuation"
    END_OF_INPUT = "end_of_input"


@dataclass(frozen=True)
class SourcePosition:
    """Location in the source text.

    Attributes:
        line: 1-based line number.
        column: 1-based column number.
        offset: 0-based character offset into the text.
    """

    line: int
    column: int
    offset: int = 0

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    """A lexical token.

    For string literals `text` holds the unescaped content without the
    surrounding quotes.
    """

    type: TokenType
    text: str
    position: SourcePosition

    def is_identifier(self, text: Optional[str] = None) -> bool:
        if self.type is not TokenType.IDENTIFIER:
            return False
        return text is None or self.text == text

    def is_punct(self, char: str) -> bool:
        return self.type is TokenType.PUNCTUATION and self.text == char

    @property
    def is_eof(self) -> bool:
        return self.type is TokenType.END_OF_INPUT

    def describe(self) -> str:
        """Human-readable rendering used in diagnostics."""
        if self.type is TokenType.END_OF_INPUT:
            return "end of input"
        if self.type is TokenType.STRING_LITERAL:
            return f'string "{self.text}"'
        if self.type is TokenType.PUNCTUATION:
            return f"'{self.text}'"
        return f"identifier '{self.text}'"


__all__ = ["SourcePosition", "Token", "TokenType"]
