"""Escape sequence decoding shared by char and string literals."""

from __future__ import annotations

from arith.errors import LexErrorKind
from arith.tokens import is_hex_digit

_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "'": "'", "\\": "\\"}


class EscapeError(ValueError):
    """Raised by the decoder; the lexer turns it into an ERROR token."""

    def __init__(self, kind: LexErrorKind) -> None:
        self.kind = kind
        super().__init__(kind.description)


def decode_symbol(text: str, pos: int) -> tuple[str, int]:
    """Decode one symbol of *text* at *pos*.

    Returns the decoded character and the offset just past the symbol.
    Supported escapes: ``\\n \\r \\t \\' \\\\`` and ``\\uXXXX`` with exactly
    four hex digits.
    """
    ch = text[pos]
    if ch != "\\":
        return ch, pos + 1

    if pos + 1 >= len(text):
        raise EscapeError(LexErrorKind.BROKEN_STRING_LITERAL)

    esc = text[pos + 1]
    if esc in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[esc], pos + 2

    if esc == "u":
        digits = text[pos + 2 : pos + 6]
        if len(digits) != 4 or not all(is_hex_digit(d) for d in digits):
            raise EscapeError(LexErrorKind.BROKEN_UNICODE_SEQUENCE)
        codepoint = int(digits, 16)
        # Lone surrogates are not characters
        if 0xD800 <= codepoint <= 0xDFFF:
            raise EscapeError(LexErrorKind.BROKEN_UNICODE_SEQUENCE)
        return chr(codepoint), pos + 6

    raise EscapeError(LexErrorKind.UNKNOWN_ESCAPE_SEQUENCE)


def decode_string(body: str) -> str:
    """Decode every escape in a string literal body (quotes already stripped)."""
    chars: list[str] = []
    pos = 0
    while pos < len(body):
        ch, pos = decode_symbol(body, pos)
        chars.append(ch)
    return "".join(chars)


def encode_string(value: str, quote: str) -> str:
    """Inverse of the decoder, used when rendering literals back to source."""
    out: list[str] = []
    for ch in value:
        if ch == "\\":
            out.append("\\\\")
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif ch == "'" and quote == "'":
            out.append("\\'")
        elif ch == '"' and quote == '"':
            out.append("\\u0022")
        elif not ch.isprintable() and ord(ch) <= 0xFFFF:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return quote + "".join(out) + quote
