"""Recursive-descent parser for module map files.

The parser pulls tokens lazily from the lexer with one token of lookahead
and builds an immutable declaration tree. Keywords are recognised purely by
position: the first token of a member selects its production, and module
names or string literals are never treated as keywords.

Supported subset::

    file        := module-decl*
    module-decl := [explicit] [framework] module module-id ('[' attr ']')* [block]
                 | extern module module-id "path"
    module-id   := identifier ('.' identifier)* | '*'
    block       := '{' member* '}'
    member      := module-decl
                 | [private] [textual | umbrella] header "path" [header-attrs]
                 | exclude header "path"
                 | umbrella "directory"
                 | opaque-keyword <tokens up to end of line or balanced delimiter>
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterator, List, Optional, Tuple, cast

from modulemap_parser.config.schema import ParserConfig
from modulemap_parser.declarations import (
    Declaration,
    ExcludeHeaderDeclaration,
    ExternModuleDeclaration,
    ModuleDeclaration,
    SingleHeaderDeclaration,
    UmbrellaDirectoryDeclaration,
    UnsupportedDeclaration,
)
from modulemap_parser.errors import ErrorKind, ModuleMapError, ParseError
from modulemap_parser.lexer import tokenize
from modulemap_parser.tokens import SourcePosition, Token, TokenType

logger = logging.getLogger("modulemap_parser.parser")

_MODULE_START = frozenset({"explicit", "framework", "module"})
_HEADER_START = frozenset({"private", "textual", "header"})
_HEADER_ATTRIBUTES = frozenset({"size", "mtime"})
_MEMBER_KEYWORDS = _MODULE_START | _HEADER_START | frozenset({"extern", "umbrella", "exclude"})


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a parse: either declarations or an error, never both."""

    declarations: Optional[Tuple[Declaration, ...]] = None
    error: Optional[ModuleMapError] = None

    def __post_init__(self) -> None:
        if (self.declarations is None) == (self.error is None):
            raise ValueError("ParseResult requires exactly one of declarations or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Tuple[Declaration, ...]:
        """Return the declarations or raise the stored error."""
        if self.error is not None:
            raise self.error
        return cast(Tuple[Declaration, ...], self.declarations)


def parse(text: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """Parse modulemap text into top-level declarations.

    Lexical and syntax errors are returned inside the result rather than
    raised, so callers can attach their own context (e.g. the file path).

    Args:
        text: Full text of a modulemap file.
        config: Parser settings; defaults are used when omitted.

    Returns:
        ParseResult holding either the declaration tuple or the error.
    """
    try:
        return ParseResult(declarations=parse_declarations(text, config))
    except ModuleMapError as exc:
        logger.debug("Module map parse failed: %s", exc)
        return ParseResult(error=exc)


def parse_declarations(
    text: str, config: Optional[ParserConfig] = None
) -> Tuple[Declaration, ...]:
    """Parse modulemap text, raising on failure.

    Raises:
        LexError: If the text cannot be tokenized.
        ParseError: If the tokens do not match the grammar.
    """
    decls = _Parser(text, config or ParserConfig()).parse_file()
    logger.debug("Parsed %d top-level declarations", len(decls))
    return decls


def _render(tok: Token) -> str:
    if tok.type is TokenType.STRING_LITERAL:
        escaped = tok.text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return tok.text


class _Parser:
    """Parser state for a single input; never reused across calls."""

    def __init__(self, text: str, config: ParserConfig) -> None:
        self._tokens: Iterator[Token] = tokenize(text)
        self._current: Token = next(self._tokens)
        self._max_depth = config.max_depth
        self._opaque_keywords: FrozenSet[str] = frozenset(config.opaque_keywords)
        self._depth = 0

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _advance(self) -> Token:
        tok = self._current
        if not tok.is_eof:
            self._current = next(self._tokens)
        return tok

    def _accept(self, keyword: str) -> bool:
        if self._current.is_identifier(keyword):
            self._advance()
            return True
        return False

    def _unexpected(self, expected: str) -> ParseError:
        found = self._current
        if found.is_eof and self._depth > 0:
            return ParseError(
                ErrorKind.UNBALANCED_BLOCK,
                f"unexpected end of input, expected {expected} before '}}'",
                found.position,
                expected=expected,
                found=found,
            )
        return ParseError.unexpected(expected, found)

    def _expect_keyword(self, keyword: str) -> Token:
        if self._current.is_identifier(keyword):
            return self._advance()
        raise self._unexpected(f"'{keyword}'")

    def _expect_identifier(self, expected: str) -> Token:
        if self._current.type is TokenType.IDENTIFIER:
            return self._advance()
        raise self._unexpected(expected)

    def _expect_string(self, expected: str) -> Token:
        if self._current.type is TokenType.STRING_LITERAL:
            return self._advance()
        raise self._unexpected(expected)

    def _expect_punct(self, char: str) -> Token:
        if self._current.is_punct(char):
            return self._advance()
        raise self._unexpected(f"'{char}'")

    # ------------------------------------------------------------------
    # Top level
    # ------------------------------------------------------------------

    def parse_file(self) -> Tuple[Declaration, ...]:
        decls: List[Declaration] = []
        try:
            while not self._current.is_eof:
                tok = self._current
                if tok.is_punct("}"):
                    raise ParseError(
                        ErrorKind.UNBALANCED_BLOCK,
                        "'}' without a matching '{'",
                        tok.position,
                    )
                if tok.type is TokenType.IDENTIFIER and tok.text in _MODULE_START:
                    decls.append(self._parse_module())
                elif tok.is_identifier("extern"):
                    decls.append(self._parse_extern_module())
                else:
                    raise self._unexpected("module declaration")
        except RecursionError:
            raise ParseError(
                ErrorKind.RECURSION_LIMIT_EXCEEDED,
                "module nesting exceeds the interpreter recursion limit",
                self._current.position,
            ) from None
        return tuple(decls)

    # ------------------------------------------------------------------
    # Modules
    # ------------------------------------------------------------------

    def _parse_module(self) -> ModuleDeclaration:
        position = self._current.position
        is_explicit = self._accept("explicit")
        is_framework = self._accept("framework")
        self._expect_keyword("module")
        name = self._parse_module_id()
        attributes = self._parse_attributes()

        members: Tuple[Declaration, ...] = ()
        if self._current.is_punct("{"):
            members = self._parse_block()

        return ModuleDeclaration(
            name=name,
            is_explicit=is_explicit,
            is_framework=is_framework,
            is_system="system" in attributes,
            attributes=attributes,
            members=members,
            position=position,
        )

    def _parse_extern_module(self) -> ExternModuleDeclaration:
        position = self._expect_keyword("extern").position
        self._expect_keyword("module")
        name = self._parse_module_id()
        path = self._expect_string("modulemap path string")
        return ExternModuleDeclaration(name=name, path=path.text, position=position)

    def _parse_module_id(self) -> str:
        if self._current.is_punct("*"):
            self._advance()
            return "*"
        parts = [self._expect_identifier("module name").text]
        while self._current.is_punct("."):
            self._advance()
            parts.append(self._expect_identifier("submodule name").text)
        return ".".join(parts)

    def _parse_attributes(self) -> Tuple[str, ...]:
        attributes: List[str] = []
        while self._current.is_punct("["):
            self._advance()
            attributes.append(self._expect_identifier("attribute name").text)
            self._expect_punct("]")
        return tuple(attributes)

    def _parse_block(self) -> Tuple[Declaration, ...]:
        open_brace = self._expect_punct("{")
        if self._depth >= self._max_depth:
            raise ParseError(
                ErrorKind.RECURSION_LIMIT_EXCEEDED,
                f"module nesting deeper than {self._max_depth} levels",
                open_brace.position,
            )
        self._depth += 1
        try:
            members: List[Declaration] = []
            while not self._current.is_punct("}"):
                if self._current.is_eof:
                    raise ParseError(
                        ErrorKind.UNBALANCED_BLOCK,
                        f"missing '}}' for block opened at {open_brace.position}",
                        self._current.position,
                    )
                members.append(self._parse_member())
            self._advance()
            return tuple(members)
        finally:
            self._depth -= 1

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def _parse_member(self) -> Declaration:
        tok = self._current
        if tok.type is TokenType.IDENTIFIER:
            word = tok.text
            if word in _MODULE_START:
                return self._parse_module()
            if word == "extern":
                return self._parse_extern_module()
            if word in _HEADER_START:
                return self._parse_header()
            if word == "umbrella":
                return self._parse_umbrella()
            if word == "exclude":
                return self._parse_exclude()
            if word in self._opaque_keywords:
                return self._parse_opaque(self._advance())
        raise self._unexpected("member declaration")

    def _parse_header(self) -> SingleHeaderDeclaration:
        position = self._current.position
        private = self._accept("private")
        textual = self._accept("textual")
        umbrella = not textual and self._accept("umbrella")
        return self._finish_header(position, private, textual, umbrella)

    def _parse_umbrella(self) -> Declaration:
        position = self._expect_keyword("umbrella").position
        if self._current.type is TokenType.STRING_LITERAL:
            return UmbrellaDirectoryDeclaration(
                path=self._advance().text, position=position
            )
        if not self._current.is_identifier("header"):
            raise self._unexpected("'header' or umbrella directory string")
        return self._finish_header(position, False, False, True)

    def _finish_header(
        self, position: SourcePosition, private: bool, textual: bool, umbrella: bool
    ) -> SingleHeaderDeclaration:
        self._expect_keyword("header")
        path = self._expect_string("header path string").text
        size: Optional[int] = None
        mtime: Optional[int] = None
        if self._current.is_punct("{"):
            self._advance()
            while not self._current.is_punct("}"):
                key = self._current
                if not (key.type is TokenType.IDENTIFIER and key.text in _HEADER_ATTRIBUTES):
                    raise self._unexpected("'size' or 'mtime'")
                self._advance()
                value = self._current
                if not (value.type is TokenType.IDENTIFIER and value.text.isdigit()):
                    raise self._unexpected(f"integer value for '{key.text}'")
                self._advance()
                if key.text == "size":
                    size = int(value.text)
                else:
                    mtime = int(value.text)
            self._advance()
        return SingleHeaderDeclaration(
            path=path,
            private=private,
            textual=textual,
            umbrella=umbrella,
            size=size,
            mtime=mtime,
            position=position,
        )

    def _parse_exclude(self) -> Declaration:
        keyword = self._expect_keyword("exclude")
        if not self._current.is_identifier("header"):
            return self._parse_opaque(keyword)
        self._advance()
        path = self._expect_string("header path string")
        return ExcludeHeaderDeclaration(path=path.text, position=keyword.position)

    def _parse_opaque(self, keyword: Token) -> UnsupportedDeclaration:
        """Consume an unmodelled statement and record its tokens.

        Known keywords are read by their own grammar, so a statement ends
        exactly where its syntax does. Keywords without a known grammar
        fall back to the line rule of `_take_rest_of_line`.
        """
        parts: List[str] = []
        production = _OPAQUE_PRODUCTIONS.get(keyword.text)
        if production is None:
            self._take_rest_of_line(keyword, parts)
        else:
            production(self, parts)
        return UnsupportedDeclaration(
            keyword=keyword.text, tokens=tuple(parts), position=keyword.position
        )

    # ------------------------------------------------------------------
    # Opaque statement productions
    # ------------------------------------------------------------------

    def _take(self, parts: List[str]) -> Token:
        tok = self._advance()
        parts.append(_render(tok))
        return tok

    def _take_identifier(self, parts: List[str], expected: str) -> Token:
        if self._current.type is not TokenType.IDENTIFIER:
            raise self._unexpected(expected)
        return self._take(parts)

    def _take_punct(self, parts: List[str], char: str) -> Token:
        if not self._current.is_punct(char):
            raise self._unexpected(f"'{char}'")
        return self._take(parts)

    def _take_string(self, parts: List[str], expected: str) -> Token:
        if self._current.type is not TokenType.STRING_LITERAL:
            raise self._unexpected(expected)
        return self._take(parts)

    def _take_module_id(
        self, parts: List[str], wildcard: bool = False, expected: str = "module name"
    ) -> None:
        if wildcard and self._current.is_punct("*"):
            self._take(parts)
            return
        self._take_identifier(parts, expected)
        while self._current.is_punct("."):
            self._take(parts)
            if wildcard and self._current.is_punct("*"):
                self._take(parts)
                return
            self._take_identifier(parts, expected)

    def _take_export(self, parts: List[str]) -> None:
        self._take_module_id(parts, wildcard=True)

    def _take_use(self, parts: List[str]) -> None:
        self._take_module_id(parts)

    def _take_export_as(self, parts: List[str]) -> None:
        self._take_identifier(parts, "module name")

    def _take_requires(self, parts: List[str]) -> None:
        while True:
            if self._current.is_punct("!"):
                self._take(parts)
            self._take_module_id(parts, expected="feature name")
            if not self._current.is_punct(","):
                return
            self._take(parts)

    def _take_link(self, parts: List[str]) -> None:
        if self._current.is_identifier("framework"):
            self._take(parts)
        self._take_string(parts, "library name string")

    def _take_config_macros(self, parts: List[str]) -> None:
        while self._current.is_punct("["):
            self._take(parts)
            self._take_identifier(parts, "attribute name")
            self._take_punct(parts, "]")
        # The macro list is optional; a member keyword starts the next member.
        word = self._current
        if word.type is not TokenType.IDENTIFIER:
            return
        if word.text in _MEMBER_KEYWORDS or word.text in self._opaque_keywords:
            return
        self._take(parts)
        while self._current.is_punct(","):
            self._take(parts)
            self._take_identifier(parts, "macro name")

    def _take_conflict(self, parts: List[str]) -> None:
        self._take_module_id(parts)
        self._take_punct(parts, ",")
        self._take_string(parts, "conflict message string")

    def _take_rest_of_line(self, keyword: Token, parts: List[str]) -> None:
        """Consume tokens of a statement with no known grammar.

        The statement continues while tokens stay on the line of the
        previous token, after a trailing ',' or inside '{}'/'[]' pairs.
        """
        last = keyword
        nesting = 0
        while True:
            tok = self._current
            if tok.is_eof:
                if nesting:
                    raise self._unexpected("closing delimiter")
                return
            if nesting == 0:
                if tok.is_punct("}"):
                    return
                if tok.position.line != last.position.line and not last.is_punct(","):
                    return
            if tok.is_punct("{") or tok.is_punct("["):
                nesting += 1
            elif tok.is_punct("}") or tok.is_punct("]"):
                if nesting == 0:
                    raise self._unexpected(f"continuation of '{keyword.text}' statement")
                nesting -= 1
            last = self._take(parts)


_OPAQUE_PRODUCTIONS: Dict[str, Callable[[_Parser, List[str]], None]] = {
    "export": _Parser._take_export,
    "use": _Parser._take_use,
    "export_as": _Parser._take_export_as,
    "requires": _Parser._take_requires,
    "link": _Parser._take_link,
    "config_macros": _Parser._take_config_macros,
    "conflict": _Parser._take_conflict,
}


__all__ = ["ParseResult", "parse", "parse_declarations"]
