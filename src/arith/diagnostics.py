"""Collect the errors embedded in tokens and trees as reportable diagnostics."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from arith.ast import Error, Node, walk
from arith.errors import EvalError, format_context
from arith.eval import Environment, evaluate
from arith.lexer import tokenize
from arith.parser import parse
from arith.tokens import Position, Span, Token, TokenType


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    message: str
    span: Span
    severity: Severity

    def format(self, source: str, filename: str = "<input>") -> str:
        return format_context(self.message, self.span, source, filename)


def lex_diagnostics(tokens: Iterable[Token]) -> list[Diagnostic]:
    """One diagnostic per ERROR token."""
    result: list[Diagnostic] = []
    for tok in tokens:
        if tok.type == TokenType.ERROR and tok.error is not None:
            result.append(Diagnostic(tok.error.description, tok.span, Severity.ERROR))
    return result


def parse_diagnostics(node: Node, tokens: Iterable[Token] = ()) -> list[Diagnostic]:
    """One diagnostic per Error node.

    Error nodes standing for an ERROR token already reported by the lexer are
    skipped when *tokens* is given. An Error that only wraps other parts is
    reported through those parts.
    """
    lexed = {tok.span for tok in tokens if tok.type == TokenType.ERROR}
    return [
        Diagnostic(n.kind.description, n.span, Severity.ERROR)
        for n in walk(node)
        if isinstance(n, Error) and not n.parts and n.span not in lexed
    ]


def check(source: str) -> list[Diagnostic]:
    """Lexical and syntactic diagnostics for one statement."""
    tokens = tokenize(source)
    return lex_diagnostics(tokens) + parse_diagnostics(parse(tokens), tokens)


def check_document(source: str, env: Environment | None = None) -> list[Diagnostic]:
    """Check and evaluate each non-blank line in order, sharing one environment.

    Syntax problems are errors; a line that is well formed but fails to
    evaluate gets a warning. Spans are relative to the whole document.
    """
    env = env if env is not None else Environment()
    diagnostics: list[Diagnostic] = []
    offset = 0
    for line_no, line in enumerate(source.split("\n")):
        line_offset = offset
        offset += len(line) + 1
        if not line.strip():
            continue

        tokens = tokenize(line)
        node = parse(tokens)
        found = lex_diagnostics(tokens) + parse_diagnostics(node, tokens)
        if not found:
            try:
                evaluate(node, env, line)
            except EvalError as exc:
                found.append(Diagnostic(exc.message, exc.span, Severity.WARNING))

        for diag in found:
            span = shift_span(diag.span, line_no, line_offset)
            diagnostics.append(Diagnostic(diag.message, span, diag.severity))
    return diagnostics


def shift_span(span: Span, line: int, offset: int) -> Span:
    """Move a line-relative span to document coordinates."""
    return Span(_shift_position(span.start, line, offset), _shift_position(span.end, line, offset))


def _shift_position(pos: Position, line: int, offset: int) -> Position:
    return Position(pos.line + line, pos.column, pos.offset + offset)
