"""Command-line interface for arith: one-shot, file and interactive modes."""

from __future__ import annotations

import argparse
import logging
import math
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from arith.debug import dump_ast, dump_tokens
from arith.diagnostics import Diagnostic, Severity, lex_diagnostics, parse_diagnostics, shift_span
from arith.errors import EvalError, EvalErrorKind, format_context
from arith.eval import Environment, evaluate
from arith.lexer import tokenize
from arith.parser import parse
from arith.source import SourceCode

logger = logging.getLogger("arith.cli")

CONFIG_NAME = "arith.toml"
DEFAULT_PROMPT = "> "


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    command: str | None
    variables: dict[str, float]
    prompt: str
    tokens: bool
    debug: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="arith",
        description="Evaluate arith expressions and assignments",
    )
    p.add_argument("input", nargs="?", help="File with one statement per line (default: REPL)")
    p.add_argument("-c", "--command", metavar="EXPR", help="Evaluate EXPR and exit")
    p.add_argument(
        "-e",
        "--var",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Preset a variable (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--tokens", action="store_true", help="Dump tokens to stderr")
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return p


def parse_var_arg(s: str) -> tuple[str, float]:
    """Parse a NAME=VALUE string into (name, value)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"invalid variable format (expected NAME=VALUE): {s}")
    name, _, raw = s.partition("=")
    name = name.strip()
    if not name:
        raise argparse.ArgumentTypeError(f"missing variable name: {s}")
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"variable value is not a number: {s}") from None
    return name, value


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_NAME

    if not path.is_file():
        logger.debug("no config at %s", path)
        return {}

    logger.debug("loading config %s", path)
    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input) if args.input else None
    search_dir = Path(".")
    if input_file is not None and input_file.parent.parts:
        search_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)

    # Variables: config < CLI
    variables: dict[str, float] = {}
    cfg_vars = config.get("variables")
    if isinstance(cfg_vars, dict):
        for k, v in cfg_vars.items():
            if isinstance(v, (int, float)) and not isinstance(v, bool):
                variables[str(k)] = float(v)
            else:
                logger.warning("ignoring non-numeric config variable %s = %r", k, v)
    for raw in args.var:
        name, value = parse_var_arg(raw)
        variables[name] = value

    prompt = DEFAULT_PROMPT
    cfg_repl = config.get("repl")
    if isinstance(cfg_repl, dict):
        cfg_prompt = cfg_repl.get("prompt")
        if isinstance(cfg_prompt, str):
            prompt = cfg_prompt

    return CliOptions(
        input_file=input_file,
        command=args.command,
        variables=variables,
        prompt=prompt,
        tokens=args.tokens,
        debug=args.debug,
        verbose=args.verbose,
    )


def format_result(value: float) -> str:
    """Integral results print without a fractional part."""
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def run_line(
    line: str,
    env: Environment,
    options: CliOptions,
    *,
    filename: str = "<stdin>",
    source: str | None = None,
    line_no: int = 0,
    line_offset: int = 0,
) -> bool:
    """Tokenize, parse and evaluate one line, printing the result or errors.

    *source*, *line_no* and *line_offset* place the line inside a larger file
    so reported positions are file-relative. Returns False on failure.
    """
    tokens = tokenize(line)
    if options.tokens:
        dump_tokens(tokens, file=sys.stderr)
    node = parse(tokens)
    if options.debug:
        dump_ast(node, file=sys.stderr)

    try:
        value = evaluate(node, env, line)
    except EvalError as exc:
        problems: list[Diagnostic]
        if exc.kind == EvalErrorKind.SYNTAX_ERROR:
            problems = lex_diagnostics(tokens) + parse_diagnostics(node, tokens)
        else:
            problems = [Diagnostic(exc.message, exc.span, Severity.ERROR)]
        text = source if source is not None else line
        for diag in problems:
            span = shift_span(diag.span, line_no, line_offset)
            print(format_context(diag.message, span, text, filename), file=sys.stderr)
        return False

    print(format_result(value))
    return True


def run_file(options: CliOptions, env: Environment) -> bool:
    """Evaluate each non-blank line of the input file in order."""
    assert options.input_file is not None
    source = SourceCode.from_file(options.input_file).text
    ok = True
    offset = 0
    for line_no, line in enumerate(source.split("\n")):
        line_offset = offset
        offset += len(line) + 1
        if not line.strip():
            continue
        logger.debug("line %d: %s", line_no + 1, line)
        if not run_line(
            line,
            env,
            options,
            filename=str(options.input_file),
            source=source,
            line_no=line_no,
            line_offset=line_offset,
        ):
            ok = False
    return ok


def repl(options: CliOptions, env: Environment, stdin: TextIO | None = None) -> None:
    """Read lines until EOF or ``quit``; ``list`` prints the variables."""
    stdin = stdin if stdin is not None else sys.stdin
    interactive = stdin.isatty()
    try:
        while True:
            if interactive:
                print(options.prompt, end="", flush=True)
            line = stdin.readline()
            if not line:
                break
            command = line.strip()
            if command in ("quit", "q"):
                break
            if command in ("list", "l"):
                for name, value in env.items():
                    print(f"{name} = {format_result(value)}")
                continue
            if not command:
                continue
            run_line(line.rstrip("\r\n"), env, options)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2

    env = Environment.from_mapping(options.variables)

    if options.command is not None:
        return 0 if run_line(options.command, env, options, filename="<command>") else 1

    if options.input_file is not None:
        try:
            ok = run_file(options, env)
        except OSError as exc:
            print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
            return 2
        return 0 if ok else 1

    repl(options, env)
    return 0
