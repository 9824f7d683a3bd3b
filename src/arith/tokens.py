"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arith.errors import LexErrorKind


class TokenType(Enum):
    # Literals
    CHAR_LITERAL = auto()  # 'c': value is the decoded character
    STRING_LITERAL = auto()  # "..." or """...""": value is the decoded text
    INT_LITERAL = auto()  # decimal, octal (0...) or hex (0x...): value is an int
    FLOAT_LITERAL = auto()  # 1.5, .5, 5.: value is a float

    IDENTIFIER = auto()  # letter (letter | digit | _)*
    OPERATOR = auto()  # longest match against the operator catalog
    BRACKET = auto()  # ( ) [ ] { }

    # Malformed span: value is the raw lexeme, kind in Token.error
    ERROR = auto()


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 0-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position (end exclusive)."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with decoded value and original source text."""

    type: TokenType
    value: str | int | float
    raw: str
    span: Span
    error: LexErrorKind | None = None

    @property
    def start(self) -> Position:
        return self.span.start

    @property
    def end(self) -> Position:
        return self.span.end

    @property
    def is_literal(self) -> bool:
        return self.type in _LITERAL_TYPES

    def is_operator(self, *lexemes: str) -> bool:
        """Return True if this is an operator token with one of *lexemes*."""
        return self.type == TokenType.OPERATOR and self.value in lexemes

    def is_bracket(self, ch: str) -> bool:
        return self.type == TokenType.BRACKET and self.value == ch


_LITERAL_TYPES = frozenset(
    {
        TokenType.CHAR_LITERAL,
        TokenType.STRING_LITERAL,
        TokenType.INT_LITERAL,
        TokenType.FLOAT_LITERAL,
    }
)

_BRACKETS = frozenset("(){}[]")


def is_bracket(ch: str) -> bool:
    """Return True if ch is one of the single-character bracket tokens."""
    return ch in _BRACKETS


def is_ident_start(ch: str) -> bool:
    return ch.isalpha()


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier."""
    return ch.isalnum() or ch == "_"


def is_hex_digit(ch: str) -> bool:
    """Return True if ch is a hexadecimal digit."""
    return ch in "0123456789abcdefABCDEF"


def is_octal_digit(ch: str) -> bool:
    return ch in "01234567"


def is_decimal_digit(ch: str) -> bool:
    return ch in "0123456789"
