"""Test the number-or-dot scanner: decimal, octal, hex and float literals."""

from __future__ import annotations

from arith.errors import LexErrorKind
from arith.tokens import TokenType

from .conftest import assert_error, assert_types, assert_values

MAX_U128 = "340282366920938463463374607431768211455"


class TestIntegers:
    def test_zero(self, lex):
        tokens = lex("0")
        assert_types(tokens, [TokenType.INT_LITERAL])
        assert tokens[0].value == 0

    def test_decimal(self, lex):
        assert_values(lex("42"), [42])

    def test_octal(self, lex):
        assert_values(lex("0100"), [64])

    def test_hex(self, lex):
        tokens = lex("0x7f")
        assert_types(tokens, [TokenType.INT_LITERAL])
        assert tokens[0].value == 127

    def test_hex_zero(self, lex):
        assert_values(lex("0x0"), [0])

    def test_hex_uppercase_digits(self, lex):
        assert_values(lex("0xFF"), [255])

    def test_largest_u128(self, lex):
        assert_values(lex(MAX_U128), [int(MAX_U128)])

    def test_too_long(self, lex):
        too_big = str(int(MAX_U128) + 1)
        tokens = lex(too_big)
        assert_error(tokens[0], too_big, LexErrorKind.INT_LITERAL_TOO_LONG)

    def test_too_long_nines(self, lex):
        nines = "9" * 39
        tokens = lex(nines)
        assert_error(tokens[0], nines, LexErrorKind.INT_LITERAL_TOO_LONG)

    def test_hex_too_long(self, lex):
        raw = "0x1" + "0" * 32
        tokens = lex(raw)
        assert_error(tokens[0], raw, LexErrorKind.INT_LITERAL_TOO_LONG)

    def test_multiple(self, lex):
        assert_values(lex("5 7"), [5, 7])

    def test_with_operators(self, lex):
        assert_values(lex("5+7"), [5, "+", 7])


class TestFloats:
    def test_float(self, lex):
        tokens = lex("7.5")
        assert_types(tokens, [TokenType.FLOAT_LITERAL])
        assert tokens[0].value == 7.5

    def test_no_int_part(self, lex):
        assert_values(lex(".45"), [0.45])

    def test_no_fraction(self, lex):
        tokens = lex("42.")
        assert_types(tokens, [TokenType.FLOAT_LITERAL])
        assert tokens[0].value == 42.0

    def test_zero_point(self, lex):
        assert_values(lex("0.25"), [0.25])

    def test_second_dot_starts_new_token(self, lex):
        assert_values(lex("1.2.3"), [1.2, 0.3])

    def test_trailing_dot_then_dot_number(self, lex):
        assert_values(lex("1..2"), [1.0, 0.2])

    def test_overflow(self, lex):
        raw = "9" * 400 + ".0"
        tokens = lex(raw)
        assert_error(tokens[0], raw, LexErrorKind.FLOAT_LITERAL_TOO_LONG)


class TestMalformedNumbers:
    def test_bad_octal_digit(self, lex):
        tokens = lex("09")
        assert_error(tokens[0], "09", LexErrorKind.UNEXPECTED_TOKEN)

    def test_bare_hex_prefix(self, lex):
        tokens = lex("0x")
        assert_error(tokens[0], "0x", LexErrorKind.UNEXPECTED_TOKEN)

    def test_hex_prefix_then_operator(self, lex):
        tokens = lex("0x+1")
        assert_error(tokens[0], "0x", LexErrorKind.UNEXPECTED_TOKEN)
        assert_values(tokens[1:], ["+", 1])

    def test_bad_hex_digit(self, lex):
        tokens = lex("0x1g")
        assert_error(tokens[0], "0x1g", LexErrorKind.UNEXPECTED_TOKEN)

    def test_letters_after_float(self, lex):
        tokens = lex("1.5e3 x")
        assert_error(tokens[0], "1.5e3", LexErrorKind.UNEXPECTED_TOKEN)
        assert tokens[1].value == "x"

    def test_dot_number_then_letter(self, lex):
        tokens = lex(".5a")
        assert len(tokens) == 1
        assert_error(tokens[0], ".5a", LexErrorKind.UNEXPECTED_TOKEN)
