"""Arith lexer: converts source text into a flat token stream.

The lexer never fails: every malformed span becomes an ERROR token carrying
the raw lexeme and a LexErrorKind, and scanning resumes right after it.
"""

from __future__ import annotations

from enum import Enum, auto

from arith.errors import LexErrorKind
from arith.escapes import EscapeError, decode_string, decode_symbol
from arith.source import SourceCode
from arith.tokens import (
    Token,
    TokenType,
    is_bracket,
    is_decimal_digit,
    is_hex_digit,
    is_ident_char,
    is_ident_start,
    is_octal_digit,
)
from arith.trie import OPERATORS, is_operator_start

_MAX_INT = 1 << 128


class _Num(Enum):
    START = auto()
    ZERO = auto()  # read "0"
    DECIMAL = auto()
    DOT = auto()  # read a leading "."
    OCTAL = auto()
    FLOAT = auto()
    HEX_PREFIX = auto()  # read "0x"
    HEX = auto()


class _Str(Enum):
    OPEN = auto()  # read opening "
    EMPTY = auto()  # read ""
    BODY = auto()
    CLOSED = auto()
    TRIPLE = auto()  # inside """..."""
    TRIPLE_QUOTE1 = auto()
    TRIPLE_QUOTE2 = auto()
    TRIPLE_CLOSED = auto()


class Lexer:
    """Tokenize arith source text into a list of Token objects."""

    def __init__(self, source: str | SourceCode) -> None:
        self._code = source if isinstance(source, SourceCode) else SourceCode(source)
        self._source = self._code.text
        self._pos = 0
        self._start = 0
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while self._pos < len(self._source):
            ch = self._peek()

            if is_ident_start(ch):
                self._lex_identifier()
            elif ch == "'":
                self._lex_char()
            elif ch == '"':
                self._lex_string()
            elif ch.isspace():
                self._pos += 1
            elif is_bracket(ch):
                self._lex_bracket()
            elif ch == "." or is_decimal_digit(ch):
                self._lex_number_or_dot()
            elif is_operator_start(ch):
                self._lex_operator()
            else:
                self._lex_recover()

        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _start_token(self) -> None:
        self._start = self._pos

    def _raw(self) -> str:
        return self._source[self._start : self._pos]

    def _emit(
        self,
        tt: TokenType,
        value: str | int | float,
        error: LexErrorKind | None = None,
    ) -> Token:
        span = self._code.span(self._start, self._pos)
        tok = Token(tt, value, self._raw(), span, error)
        self._tokens.append(tok)
        return tok

    def _emit_error(self, kind: LexErrorKind) -> Token:
        return self._emit(TokenType.ERROR, self._raw(), kind)

    # ------------------------------------------------------------------
    # Simple tokens
    # ------------------------------------------------------------------

    def _lex_identifier(self) -> None:
        self._start_token()
        while self._pos < len(self._source) and is_ident_char(self._peek()):
            self._pos += 1
        self._emit(TokenType.IDENTIFIER, self._raw())

    def _lex_bracket(self) -> None:
        self._start_token()
        self._pos += 1
        self._emit(TokenType.BRACKET, self._raw())

    def _lex_operator(self) -> None:
        self._start_token()
        self._pos, complete = OPERATORS.longest_match(self._source, self._pos)
        if complete:
            self._emit(TokenType.OPERATOR, self._raw())
        else:
            self._emit_error(LexErrorKind.UNEXPECTED_TOKEN)

    def _lex_recover(self, in_number: bool = False) -> None:
        """Swallow an unrecognised run up to the next delimiter.

        A malformed number keeps its dots so "1.5e3" is reported whole.
        """
        self._start_token()
        self._pos += 1
        while self._pos < len(self._source):
            ch = self._peek()
            if _is_delimiter(ch) and not (in_number and ch == "."):
                break
            self._pos += 1
        self._emit_error(LexErrorKind.UNEXPECTED_TOKEN)

    # ------------------------------------------------------------------
    # Char literals
    # ------------------------------------------------------------------

    def _lex_char(self) -> None:
        self._start_token()
        self._pos += 1  # opening quote

        closed = False
        escaped = False
        while self._pos < len(self._source):
            ch = self._peek()
            if ch == "\n":
                self._emit_error(LexErrorKind.UNTERMINATED_CHAR_LITERAL)
                return
            self._pos += 1
            if ch == "'" and not escaped:
                closed = True
                break
            escaped = ch == "\\" and not escaped

        if not closed:
            self._emit_error(LexErrorKind.UNTERMINATED_CHAR_LITERAL)
            return

        raw = self._raw()
        if len(raw) == 2:
            self._emit_error(LexErrorKind.EMPTY_CHAR_LITERAL)
            return
        if len(raw) == 3:
            self._emit(TokenType.CHAR_LITERAL, raw[1])
            return

        try:
            value, end = decode_symbol(raw, 1)
        except EscapeError as exc:
            self._emit_error(exc.kind)
            return
        if end + 1 < len(raw):
            self._emit_error(LexErrorKind.CHAR_LITERAL_TOO_LONG)
            return
        self._emit(TokenType.CHAR_LITERAL, value)

    # ------------------------------------------------------------------
    # String literals
    # ------------------------------------------------------------------

    def _lex_string(self) -> None:
        self._start_token()
        self._pos += 1  # opening quote
        state = _Str.OPEN

        while self._pos < len(self._source) and state is not _Str.CLOSED:
            ch = self._peek()

            if ch == "\n" and state in (_Str.OPEN, _Str.BODY):
                self._emit_error(LexErrorKind.UNTERMINATED_STRING_LITERAL)
                return

            if state is _Str.OPEN:
                state = _Str.EMPTY if ch == '"' else _Str.BODY
            elif state is _Str.EMPTY:
                if ch != '"':
                    break
                state = _Str.TRIPLE
            elif state is _Str.BODY:
                if ch == '"':
                    state = _Str.CLOSED
            elif state is _Str.TRIPLE:
                if ch == '"':
                    state = _Str.TRIPLE_QUOTE1
            elif state is _Str.TRIPLE_QUOTE1:
                state = _Str.TRIPLE_QUOTE2 if ch == '"' else _Str.TRIPLE
            elif state is _Str.TRIPLE_QUOTE2:
                state = _Str.TRIPLE_CLOSED if ch == '"' else _Str.TRIPLE
            elif state is _Str.TRIPLE_CLOSED:
                if ch != '"':
                    break
                # A quote straight after the closing delimiter
                self._pos += 1
                self._emit_error(LexErrorKind.BROKEN_STRING_LITERAL)
                return

            self._pos += 1

        raw = self._raw()
        if state is _Str.EMPTY:
            self._emit(TokenType.STRING_LITERAL, "")
        elif state is _Str.CLOSED:
            self._emit_decoded_string(raw[1:-1])
        elif state is _Str.TRIPLE_CLOSED:
            self._emit_decoded_string(raw[3:-3])
        else:
            self._emit_error(LexErrorKind.UNTERMINATED_STRING_LITERAL)

    def _emit_decoded_string(self, body: str) -> None:
        try:
            value = decode_string(body)
        except EscapeError as exc:
            self._emit_error(exc.kind)
            return
        self._emit(TokenType.STRING_LITERAL, value)

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def _lex_number_or_dot(self) -> None:
        self._start_token()
        state = _Num.START
        failed = False

        while self._pos < len(self._source):
            ch = self._peek()

            if state is _Num.START:
                if ch == "0":
                    state = _Num.ZERO
                elif ch == ".":
                    state = _Num.DOT
                else:
                    state = _Num.DECIMAL
            elif state is _Num.ZERO:
                if is_octal_digit(ch):
                    state = _Num.OCTAL
                elif ch == ".":
                    state = _Num.FLOAT
                elif ch == "x":
                    state = _Num.HEX_PREFIX
                elif _is_delimiter(ch):
                    break
                else:
                    failed = True
                    break
            elif state is _Num.DECIMAL:
                if is_decimal_digit(ch):
                    pass
                elif ch == ".":
                    state = _Num.FLOAT
                elif _is_delimiter(ch):
                    break
                else:
                    failed = True
                    break
            elif state is _Num.DOT:
                if not is_decimal_digit(ch):
                    break
                state = _Num.FLOAT
            elif state is _Num.OCTAL or state is _Num.FLOAT or state is _Num.HEX:
                if _continues(state, ch):
                    pass
                elif _is_delimiter(ch):
                    break
                else:
                    failed = True
                    break
            elif state is _Num.HEX_PREFIX:
                if not is_hex_digit(ch):
                    failed = True
                    break
                state = _Num.HEX

            self._pos += 1

        if failed:
            self._pos = self._start
            self._lex_recover(in_number=True)
            return

        raw = self._raw()
        if state is _Num.ZERO:
            self._emit(TokenType.INT_LITERAL, 0)
        elif state is _Num.DECIMAL:
            self._emit_int(raw, 10)
        elif state is _Num.OCTAL:
            self._emit_int(raw, 8)
        elif state is _Num.HEX:
            self._emit_int(raw[2:], 16)
        elif state is _Num.FLOAT:
            self._emit_float(raw)
        elif state is _Num.DOT:
            # Not a number after all: ".", ".." are operators
            self._pos = self._start
            self._lex_operator()
        else:
            self._emit_error(LexErrorKind.UNEXPECTED_TOKEN)

    def _emit_int(self, digits: str, base: int) -> None:
        try:
            value = int(digits, base)
        except ValueError:
            # Only reachable past the interpreter's digit limit
            value = _MAX_INT
        if value >= _MAX_INT:
            self._emit_error(LexErrorKind.INT_LITERAL_TOO_LONG)
        else:
            self._emit(TokenType.INT_LITERAL, value)

    def _emit_float(self, text: str) -> None:
        value = float(text)
        if value == float("inf"):
            self._emit_error(LexErrorKind.FLOAT_LITERAL_TOO_LONG)
        else:
            self._emit(TokenType.FLOAT_LITERAL, value)


def _is_delimiter(ch: str) -> bool:
    """Characters that may directly follow a number or end a recovery run."""
    return ch.isspace() or is_bracket(ch) or is_operator_start(ch)


def _continues(state: _Num, ch: str) -> bool:
    if state is _Num.OCTAL:
        return is_octal_digit(ch)
    if state is _Num.HEX:
        return is_hex_digit(ch)
    return is_decimal_digit(ch)


def tokenize(source: str | SourceCode) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source).tokenize()
