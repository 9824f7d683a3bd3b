"""Source renderer: converts an AST back to arith source text."""

from __future__ import annotations

from decimal import Decimal

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
    binary_chain,
)
from arith.escapes import encode_string


def render(node: Node) -> str:
    """Render a tree with single spaces around binary and assignment operators.

    Parentheses come only from Expression nodes, so a tree parsed from valid
    source renders to text that parses back to the same shape.
    """
    if isinstance(node, Empty):
        return "(empty)"
    if isinstance(node, Literal):
        return _render_literal(node)
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, Unary):
        return f"{node.op}{render(node.operand)}"
    if isinstance(node, Binary):
        first, chain = binary_chain(node)
        parts = [render(first)]
        for step in chain:
            parts.append(f"{step.op} {render(step.right)}")
        return " ".join(parts)
    if isinstance(node, Expression):
        return f"({render(node.inner)})"
    if isinstance(node, Assignment):
        return f"{render(node.target)} = {render(node.value)}"
    if isinstance(node, Error):
        return node.kind.description
    raise TypeError(f"cannot render {type(node).__name__}")


def _render_literal(node: Literal) -> str:
    if node.kind == LiteralKind.CHAR:
        return encode_string(str(node.value), "'")
    if node.kind == LiteralKind.STRING:
        return encode_string(str(node.value), '"')
    if node.kind == LiteralKind.FLOAT:
        return format_float(float(node.value))
    return str(node.value)


def format_float(value: float) -> str:
    """Positional notation with a decimal point, e.g. ``42.0``, ``0.00001``."""
    text = format(Decimal(repr(value)), "f")
    if "." not in text:
        text += ".0"
    return text
