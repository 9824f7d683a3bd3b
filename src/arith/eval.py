"""Tree-walking evaluator: reduces a statement to a float against an Environment."""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

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
from arith.errors import EvalError, EvalErrorKind
from arith.tokens import Span

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


@dataclass
class Environment:
    """Variables of one evaluation session."""

    variables: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> Environment:
        return cls({name: float(value) for name, value in values.items()})

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def __len__(self) -> int:
        return len(self.variables)

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)

    def get(self, name: str) -> float | None:
        return self.variables.get(name)

    def assign(self, name: str, value: float) -> None:
        self.variables[name] = value

    def items(self) -> list[tuple[str, float]]:
        """Enumerate ``(name, value)`` pairs for listing."""
        return list(self.variables.items())


def evaluate(node: Node, env: Environment, source: str = "") -> float:
    """Reduce *node* to a float, raising EvalError on failure.

    *source* is only used to give raised errors their source context. The
    environment is written only by a successful Assignment.
    """
    try:
        return _Evaluator(env, source).eval(node)
    except RecursionError:
        # Only hand-built trees get this deep; parsed ones are depth limited
        raise EvalError(
            EvalErrorKind.NESTING_TOO_DEEP, "expression is nested too deeply", node.span, source
        ) from None


class _Evaluator:
    def __init__(self, env: Environment, source: str) -> None:
        self._env = env
        self._source = source

    def _error(self, kind: EvalErrorKind, message: str, span: Span) -> EvalError:
        return EvalError(kind, message, span, self._source)

    def eval(self, node: Node) -> float:
        if isinstance(node, Empty):
            raise self._error(EvalErrorKind.EMPTY_VALUE, "cannot compute empty value", node.span)

        if isinstance(node, Literal):
            return self._eval_literal(node)

        if isinstance(node, Identifier):
            value = self._env.get(node.name)
            if value is None:
                raise self._error(
                    EvalErrorKind.UNKNOWN_VARIABLE, f"unknown variable '{node.name}'", node.span
                )
            return value

        if isinstance(node, Unary):
            operand = self.eval(node.operand)
            if node.op == "+":
                return operand
            if node.op == "-":
                return -operand
            raise self._unknown_operator(node.op, node.span)

        if isinstance(node, Binary):
            # Long left-deep chains such as "1 + 1 + ... + 1" are folded in a loop
            first, chain = binary_chain(node)
            value = self.eval(first)
            for step in chain:
                value = self._apply(step.op, value, self.eval(step.right), step.span)
            return value

        if isinstance(node, Expression):
            return self.eval(node.inner)

        if isinstance(node, Error):
            raise self._error(EvalErrorKind.SYNTAX_ERROR, node.kind.description, node.span)

        if isinstance(node, Assignment):
            if not isinstance(node.target, Identifier):
                raise self._error(
                    EvalErrorKind.INVALID_ASSIGNMENT_TARGET,
                    f"cannot assign to {type(node.target).__name__}",
                    node.target.span,
                )
            value = self.eval(node.value)
            self._env.assign(node.target.name, value)
            return value

        raise TypeError(f"cannot evaluate {type(node).__name__}")

    def _eval_literal(self, node: Literal) -> float:
        if node.kind == LiteralKind.INT:
            value = int(node.value)
            if not _INT32_MIN <= value <= _INT32_MAX:
                raise self._error(
                    EvalErrorKind.VALUE_TOO_LARGE, f"{value} is too big", node.span
                )
            return float(value)
        if node.kind == LiteralKind.FLOAT:
            return float(node.value)
        kind = "char" if node.kind == LiteralKind.CHAR else "string"
        raise self._error(
            EvalErrorKind.UNSUPPORTED_LITERAL_KIND,
            f"{kind} literals are currently not supported",
            node.span,
        )

    def _apply(self, op: str, left: float, right: float, span: Span) -> float:
        if op == "+":
            return left + right
        if op == "-":
            return left - right
        if op == "*":
            return left * right
        if op == "/":
            return _divide(left, right)
        if op == "%":
            return _remainder(left, right)
        raise self._unknown_operator(op, span)

    def _unknown_operator(self, op: str, span: Span) -> EvalError:
        return self._error(EvalErrorKind.UNKNOWN_OPERATOR, f"{op}: unknown operator", span)


def _divide(left: float, right: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity, 0/0 is nan."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _remainder(left: float, right: float) -> float:
    """C ``fmod`` semantics: the result takes the sign of the dividend."""
    if right == 0.0 or math.isinf(left) or math.isnan(left) or math.isnan(right):
        return math.nan
    return math.fmod(left, right)
