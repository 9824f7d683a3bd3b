"""AST node types for parsed arith statements."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from arith.errors import ParseErrorKind
from arith.tokens import Span


class LiteralKind(Enum):
    CHAR = auto()
    INT = auto()
    FLOAT = auto()
    STRING = auto()


@dataclass(frozen=True, slots=True)
class Empty:
    """Placeholder for a statement with no tokens."""

    span: Span


@dataclass(frozen=True, slots=True)
class Literal:
    """Char, int, float or string literal with its decoded value."""

    kind: LiteralKind
    value: str | int | float
    span: Span


@dataclass(frozen=True, slots=True)
class Identifier:
    name: str
    span: Span


@dataclass(frozen=True, slots=True)
class Unary:
    """Prefix ``+`` or ``-`` applied to a term."""

    op: str
    operand: Node
    span: Span


@dataclass(frozen=True, slots=True)
class Binary:
    left: Node
    op: str
    right: Node
    span: Span


@dataclass(frozen=True, slots=True)
class Expression:
    """Parenthesised group, kept so rendering reproduces the parentheses."""

    inner: Node
    span: Span


@dataclass(frozen=True, slots=True)
class Assignment:
    """Top-level ``name = expr``; target is an Identifier when parsed."""

    target: Node
    value: Node
    span: Span


@dataclass(frozen=True, slots=True)
class Error:
    """A production that could not be completed; parsing carries on around it.

    *parts* holds whatever was parsed inside the failed span, e.g. a complete
    statement followed by the Error for tokens nothing could consume.
    """

    kind: ParseErrorKind
    span: Span
    parts: tuple[Node, ...] = ()


Node = Empty | Literal | Identifier | Unary | Binary | Expression | Assignment | Error


def children(node: Node) -> tuple[Node, ...]:
    """Direct subtrees of *node*, left to right."""
    if isinstance(node, Unary):
        return (node.operand,)
    if isinstance(node, Binary):
        return (node.left, node.right)
    if isinstance(node, Expression):
        return (node.inner,)
    if isinstance(node, Assignment):
        return (node.target, node.value)
    if isinstance(node, Error):
        return node.parts
    return ()


def walk(node: Node):
    """Yield *node* and all of its descendants, parents first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children(current)))


def binary_chain(node: Binary) -> tuple[Node, list[Binary]]:
    """Split a left-deep run of Binary nodes.

    Returns the leftmost operand and the Binary nodes above it, innermost
    first, so ``a + b - c`` gives ``a`` and ``[a + b, (a + b) - c]``.
    """
    chain: list[Binary] = []
    current: Node = node
    while isinstance(current, Binary):
        chain.append(current)
        current = current.left
    chain.reverse()
    return current, chain
