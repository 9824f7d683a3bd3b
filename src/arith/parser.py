"""Arith parser: converts a token stream into an AST.

Grammar, lowest precedence first::

    Statement      ::= Identifier "=" Expression | Expression
    Expression     ::= Additive
    Additive       ::= Multiplicative (("+" | "-") Multiplicative)*
    Multiplicative ::= Unary (("*" | "/" | "%") Unary)*
    Unary          ::= ("+" | "-")? Term
    Term           ::= "(" Expression ")" | Atom
    Atom           ::= Identifier | Literal

Parsing never raises. A production that cannot be completed yields an
``Error`` node in place of the subtree and the enclosing production carries on.
Tokens left after the statement turn the root into an ``Error`` spanning the
whole input, holding the statement and the leftovers as its parts.
"""

from __future__ import annotations

from collections.abc import Sequence

from arith.ast import (
    Assignment,
    Binary,
    Empty,
    Error,
    Expression,
    Identifier,
    Literal,
    LiteralKind,
    Node,
    Unary,
)
from arith.errors import ParseErrorKind
from arith.lexer import tokenize
from arith.source import SourceCode
from arith.tokens import Position, Span, Token, TokenType


# Parenthesised groups deeper than this become a single Error node
MAX_NESTING = 100


class Parser:
    """Recursive descent parser for a single arith statement."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self._pos = 0
        self._depth = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _consume_type(self, tt: TokenType) -> Token | None:
        tok = self._peek()
        if tok is None or tok.type != tt:
            return None
        self._pos += 1
        return tok

    def _consume_operator(self, *lexemes: str) -> Token | None:
        tok = self._peek()
        if tok is None or not tok.is_operator(*lexemes):
            return None
        self._pos += 1
        return tok

    def _consume_bracket(self, ch: str) -> Token | None:
        tok = self._peek()
        if tok is None or not tok.is_bracket(ch):
            return None
        self._pos += 1
        return tok

    def _span_from(self, start: int) -> Span:
        """Span from the token at *start* to the last consumed token."""
        return Span(self._tokens[start].start, self._tokens[self._pos - 1].end)

    def _eof_span(self) -> Span:
        end = self._tokens[-1].end
        return Span(end, end)

    # ------------------------------------------------------------------
    # Statement level
    # ------------------------------------------------------------------

    def parse(self) -> Node:
        if not self._tokens:
            origin = Position(0, 0, 0)
            return Empty(Span(origin, origin))

        node = self._parse_statement()

        if self._pos < len(self._tokens):
            # Only one statement per input
            rest = Span(self._tokens[self._pos].start, self._tokens[-1].end)
            whole = Span(self._tokens[0].start, self._tokens[-1].end)
            trailing = Error(ParseErrorKind.UNEXPECTED_TOKEN, rest)
            return Error(ParseErrorKind.UNEXPECTED_TOKEN, whole, (node, trailing))
        return node

    def _parse_statement(self) -> Node:
        # "a" and "a = ..." share a prefix: try the assignment and rewind
        checkpoint = self._pos
        ident = self._consume_type(TokenType.IDENTIFIER)
        if ident is not None and self._consume_operator("=") is not None:
            target = Identifier(str(ident.value), ident.span)
            value = self._parse_expression()
            return Assignment(target, value, self._span_from(checkpoint))

        self._pos = checkpoint
        return self._parse_expression()

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self) -> Node:
        return self._parse_additive()

    def _parse_additive(self) -> Node:
        left = self._parse_multiplicative()
        while True:
            op = self._consume_operator("+", "-")
            if op is None:
                return left
            right = self._parse_multiplicative()
            left = Binary(left, str(op.value), right, Span(left.span.start, right.span.end))

    def _parse_multiplicative(self) -> Node:
        left = self._parse_unary()
        while True:
            op = self._consume_operator("*", "/", "%")
            if op is None:
                return left
            right = self._parse_unary()
            left = Binary(left, str(op.value), right, Span(left.span.start, right.span.end))

    def _parse_unary(self) -> Node:
        start = self._pos
        op = self._consume_operator("+", "-")
        if op is None:
            return self._parse_term()
        operand = self._parse_term()
        return Unary(str(op.value), operand, self._span_from(start))

    def _parse_term(self) -> Node:
        start = self._pos
        if self._consume_bracket("(") is None:
            return self._parse_atom()

        if self._depth >= MAX_NESTING:
            self._skip_group()
            return Error(ParseErrorKind.NESTING_TOO_DEEP, self._span_from(start))

        self._depth += 1
        inner = self._parse_expression()
        self._depth -= 1
        if self._consume_bracket(")") is None:
            return Error(ParseErrorKind.RPAREN_EXPECTED, self._span_from(start))
        return Expression(inner, self._span_from(start))

    def _skip_group(self) -> None:
        """Consume tokens up to the ``)`` closing an already consumed ``(``."""
        open_groups = 1
        while self._pos < len(self._tokens):
            tok = self._tokens[self._pos]
            self._pos += 1
            if tok.is_bracket("("):
                open_groups += 1
            elif tok.is_bracket(")"):
                open_groups -= 1
                if open_groups == 0:
                    return

    def _parse_atom(self) -> Node:
        tok = self._peek()
        if tok is None:
            return Error(ParseErrorKind.TOKEN_EXPECTED, self._eof_span())

        # The offending token is consumed so the caller can continue past it
        self._pos += 1
        if tok.type == TokenType.IDENTIFIER:
            return Identifier(str(tok.value), tok.span)
        if tok.is_literal:
            return Literal(_LITERAL_KINDS[tok.type], tok.value, tok.span)
        if tok.type == TokenType.ERROR:
            return Error(ParseErrorKind.UNEXPECTED_TOKEN, tok.span)
        return Error(ParseErrorKind.ATOM_EXPECTED, tok.span)


_LITERAL_KINDS: dict[TokenType, LiteralKind] = {
    TokenType.CHAR_LITERAL: LiteralKind.CHAR,
    TokenType.INT_LITERAL: LiteralKind.INT,
    TokenType.FLOAT_LITERAL: LiteralKind.FLOAT,
    TokenType.STRING_LITERAL: LiteralKind.STRING,
}


def parse(tokens: Sequence[Token]) -> Node:
    """Parse a token list into a single statement tree."""
    return Parser(tokens).parse()


def parse_source(source: str | SourceCode) -> Node:
    """Convenience function: tokenize and parse source text."""
    return parse(tokenize(source))
