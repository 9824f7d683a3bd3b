"""Test identifiers, brackets, operators, whitespace and recovery."""

from arith.errors import LexErrorKind
from arith.tokens import TokenType

from .conftest import assert_error, assert_types, assert_values


class TestIdentifiers:
    def test_single(self, lex):
        tokens = lex("test")
        assert_types(tokens, [TokenType.IDENTIFIER])
        assert tokens[0].value == "test"

    def test_many(self, lex):
        tokens = lex("test success")
        assert_values(tokens, ["test", "success"])

    def test_digits_and_underscore(self, lex):
        tokens = lex("a_1b")
        assert_values(tokens, ["a_1b"])

    def test_leading_underscore_is_not_an_identifier(self, lex):
        tokens = lex("_a")
        assert_error(tokens[0], "_a", LexErrorKind.UNEXPECTED_TOKEN)

    def test_unicode_letters(self, lex):
        tokens = lex("café")
        assert_values(tokens, ["café"])

    def test_starting_with_number_is_error(self, lex):
        tokens = lex("1test")
        assert len(tokens) == 1
        assert_error(tokens[0], "1test", LexErrorKind.UNEXPECTED_TOKEN)


class TestBrackets:
    def test_all_brackets(self, lex):
        tokens = lex("(){}[]")
        assert_types(tokens, [TokenType.BRACKET] * 6)
        assert_values(tokens, list("(){}[]"))

    def test_brackets_end_numbers(self, lex):
        tokens = lex("(0)")
        assert_values(tokens, ["(", 0, ")"])


class TestOperators:
    def test_single(self, lex):
        tokens = lex("+")
        assert_types(tokens, [TokenType.OPERATOR])
        assert tokens[0].value == "+"

    def test_longest_match_double_colon(self, lex):
        tokens = lex("::")
        assert_types(tokens, [TokenType.OPERATOR])
        assert tokens[0].value == "::"

    def test_longest_match_then_rest(self, lex):
        tokens = lex(":::")
        assert_values(tokens, ["::", ":"])

    def test_compound_operators(self, lex):
        tokens = lex("a+=b|>c")
        assert_values(tokens, ["a", "+=", "b", "|>", "c"])

    def test_no_edge_splits_operators(self, lex):
        tokens = lex("=+")
        assert_values(tokens, ["=", "+"])

    def test_range_operator(self, lex):
        tokens = lex("..")
        assert_types(tokens, [TokenType.OPERATOR])
        assert tokens[0].value == ".."

    def test_dot_operator(self, lex):
        tokens = lex(".")
        assert_types(tokens, [TokenType.OPERATOR])
        assert tokens[0].value == "."

    def test_member_access(self, lex):
        tokens = lex("a.b")
        assert_values(tokens, ["a", ".", "b"])


class TestWhitespace:
    def test_whitespace_skipped(self, lex):
        assert lex(" \t\r\n ") == []

    def test_empty_source(self, lex):
        assert lex("") == []

    def test_newline_separates(self, lex):
        tokens = lex("a\nb")
        assert_values(tokens, ["a", "b"])
        assert tokens[1].start.line == 1
        assert tokens[1].start.column == 0


class TestRecovery:
    def test_unknown_character(self, lex):
        tokens = lex("@")
        assert_error(tokens[0], "@", LexErrorKind.UNEXPECTED_TOKEN)

    def test_recovery_stops_at_whitespace(self, lex):
        tokens = lex("@@x y")
        assert_error(tokens[0], "@@x", LexErrorKind.UNEXPECTED_TOKEN)
        assert tokens[1].value == "y"

    def test_recovery_stops_at_operator(self, lex):
        tokens = lex("#a+1")
        assert_error(tokens[0], "#a", LexErrorKind.UNEXPECTED_TOKEN)
        assert_values(tokens[1:], ["+", 1])

    def test_recovery_stops_at_bracket(self, lex):
        tokens = lex("($)")
        assert_values(tokens, ["(", "$", ")"])
        assert tokens[1].type == TokenType.ERROR


class TestSpans:
    def test_positions(self, lex):
        tokens = lex("ab + 12")
        assert tokens[0].start.column == 0
        assert tokens[0].end.column == 2
        assert tokens[1].start.column == 3
        assert tokens[2].start.offset == 5
        assert tokens[2].end.offset == 7

    def test_multiline_positions(self, lex):
        tokens = lex("a\n  b")
        assert tokens[1].start.line == 1
        assert tokens[1].start.column == 2

    def test_spans_reconstruct_source(self, lex):
        source = "x = 0x1f * (y - 'c')\n\t\"s\" @@ 1test \"\"\"a\nb\"\"\" .5 ::"
        tokens = lex(source)
        rebuilt = []
        cursor = 0
        for tok in tokens:
            gap = source[cursor : tok.start.offset]
            assert gap.strip() == "", f"non-whitespace gap {gap!r}"
            rebuilt.append(gap)
            assert source[tok.start.offset : tok.end.offset] == tok.raw
            rebuilt.append(tok.raw)
            cursor = tok.end.offset
        rebuilt.append(source[cursor:])
        assert "".join(rebuilt) == source

    def test_every_token_makes_progress(self, lex):
        source = "'\\u12' \"\\q\" 0x 09 1.2.3 '' '' ' \" @#$ ~!"
        for tok in lex(source):
            assert tok.end.offset > tok.start.offset
