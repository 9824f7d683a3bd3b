"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from arith.ast import Node
from arith.errors import LexErrorKind
from arith.lexer import tokenize
from arith.parser import parse_source
from arith.tokens import Position, Span, Token, TokenType

# Convenience span for hand-built AST nodes
S = Span(Position(0, 0, 0), Position(0, 0, 0))


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns the token list."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def parse_text():
    """Return a helper that tokenizes and parses source into a tree."""

    def _parse(source: str) -> Node:
        return parse_source(source)

    return _parse


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[object]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_error(token: Token, raw: str, kind: LexErrorKind) -> None:
    """Assert that *token* is an ERROR token for *raw* with the given kind."""
    assert token.type == TokenType.ERROR, f"Expected ERROR, got {token.type}"
    assert token.raw == raw, f"Expected raw {raw!r}, got {token.raw!r}"
    assert token.error == kind, f"Expected {kind}, got {token.error}"
