"""Error taxonomies for each stage, and formatted source context."""

from __future__ import annotations

from enum import Enum

from arith.tokens import Span


class LexErrorKind(Enum):
    """Why a span of source became an ERROR token."""

    UNTERMINATED_CHAR_LITERAL = "unterminated char literal"
    EMPTY_CHAR_LITERAL = "empty char literal"
    CHAR_LITERAL_TOO_LONG = "char literal holds more than one character"
    BROKEN_UNICODE_SEQUENCE = "broken unicode escape sequence"
    UNKNOWN_ESCAPE_SEQUENCE = "unknown escape sequence"
    UNEXPECTED_TOKEN = "unexpected token"
    BROKEN_STRING_LITERAL = "broken string literal"
    UNTERMINATED_STRING_LITERAL = "unterminated string literal"
    INT_LITERAL_TOO_LONG = "integer literal does not fit in 128 bits"
    FLOAT_LITERAL_TOO_LONG = "float literal is out of range"

    @property
    def description(self) -> str:
        return self.value


class ParseErrorKind(Enum):
    """Why the parser embedded an Error node."""

    TOKEN_EXPECTED = "Expected Token"
    UNEXPECTED_TOKEN = "Unexpected Token"
    RPAREN_EXPECTED = "Expected RPAREN"
    ATOM_EXPECTED = "Expected Identifier or Literal"
    LITERAL_EXPECTED = "Expected Literal"
    NESTING_TOO_DEEP = "Expression nested too deeply"

    @property
    def description(self) -> str:
        return self.value


class EvalErrorKind(Enum):
    EMPTY_VALUE = "empty value"
    UNSUPPORTED_LITERAL_KIND = "unsupported literal kind"
    # Reserved for identifier-kind literals; nothing raises it yet.
    UNSUPPORTED_IDENTIFIER = "unsupported identifier"
    UNKNOWN_VARIABLE = "unknown variable"
    UNKNOWN_OPERATOR = "unknown operator"
    VALUE_TOO_LARGE = "value too large"
    SYNTAX_ERROR = "syntax error"
    INVALID_ASSIGNMENT_TARGET = "invalid assignment target"
    NESTING_TOO_DEEP = "nesting too deep"


def format_context(message: str, span: Span, source: str, filename: str) -> str:
    """Render *message* with the offending source line and a caret underline.

    Positions are stored 0-based and displayed 1-based.
    """
    lines = source.splitlines(keepends=True)
    line_idx = span.start.line
    col = span.start.column + 1

    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    # Underline the full span when on one line, otherwise to end of line
    if span.end.line == span.start.line:
        underline_len = max(1, span.end.column - span.start.column)
    else:
        underline_len = max(1, len(source_line) - col + 1)

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(line_idx + 1)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{line_idx + 1}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class EvalError(Exception):
    """Raised when a syntax tree cannot be reduced to a number."""

    def __init__(self, kind: EvalErrorKind, message: str, span: Span, source: str = "") -> None:
        self.kind = kind
        self.message = message
        self.span = span
        self.source = source
        super().__init__(message)

    def format(self, filename: str = "<input>") -> str:
        if not self.source:
            return f"error: {self.message}"
        return format_context(self.message, self.span, self.source, filename)
