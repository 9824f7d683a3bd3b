"""--tokens / --debug dumps to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from arith.ast import Binary, Error, Identifier, Literal, Node, Unary, children
from arith.tokens import Span, Token, TokenType


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token: span, type and value."""
    for tok in tokens:
        if tok.type == TokenType.ERROR:
            assert tok.error is not None
            detail = f"{tok.raw!r} ({tok.error.description})"
        else:
            detail = repr(tok.value)
        file.write(f"{_span(tok.span)} {tok.type.name} {detail}\n")


def dump_ast(node: Node, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    stack = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        file.write(f"{_indent(depth)}{_describe(current)} {_span(current.span)}\n")
        stack.extend((child, depth + 1) for child in reversed(children(current)))


def _indent(depth: int) -> str:
    return "  " * depth


def _span(span: Span) -> str:
    return f"[{span.start}-{span.end}]"


def _describe(node: Node) -> str:
    if isinstance(node, Literal):
        return f"Literal {node.kind.name}({node.value!r})"
    if isinstance(node, Identifier):
        return f"Identifier {node.name}"
    if isinstance(node, (Unary, Binary)):
        return f"{type(node).__name__} {node.op}"
    if isinstance(node, Error):
        return f"Error {node.kind.name}"
    return type(node).__name__
