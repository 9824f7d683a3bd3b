"""Arith expression language: lexer, parser and evaluator."""

from __future__ import annotations

from arith.errors import EvalError
from arith.eval import Environment, evaluate
from arith.lexer import tokenize
from arith.parser import parse

__version__ = "0.1.0"

__all__ = ["Environment", "EvalError", "calculate", "evaluate", "parse", "tokenize"]


def calculate(source: str, env: Environment | None = None) -> float:
    """Tokenize, parse and evaluate one statement."""
    if env is None:
        env = Environment()
    return evaluate(parse(tokenize(source)), env, source)
