from __future__ import annotations

import logging
from pathlib import Path

from . import ast as A
from .errors import SlpyError
from .interpreter import Context, evaluate, evaluate_expression
from .lexer import tokenize
from .parser import STATEMENT_KEYWORDS, parse, parse_expression
from .tokens import TokenKind


logger = logging.getLogger(__name__)


def parse_source(src: str) -> A.Program:
    toks = tokenize(src)
    logger.debug("lexed %d tokens", len(toks))
    program = parse(toks)
    logger.debug("parsed %d statements", len(program.main.statements))
    return program


def parse_file(path: str | Path) -> A.Program:
    p = Path(path).expanduser().resolve()
    src = p.read_text(encoding="utf-8")
    return parse_source(src)


def run_source(src: str, ctx: Context | None = None) -> Context:
    """Parse and run a whole program; returns the context it ran in."""
    if ctx is None:
        ctx = Context()
    evaluate(parse_source(src), ctx)
    return ctx


def run_file(path: str | Path, ctx: Context | None = None) -> Context:
    if ctx is None:
        ctx = Context()
    evaluate(parse_file(path), ctx)
    return ctx


def parse_and_evaluate(src: str, ctx: Context) -> int:
    """Evaluate `src` as one expression and return its value."""
    expr = parse_expression(tokenize(src))
    return evaluate_expression(expr, ctx)


def execute_line(src: str, ctx: Context) -> int | None:
    """Run one REPL line.

    The line is tried as an expression first, whose value is returned. If it
    does not parse as one, it is run as statements and None is returned.
    Lines starting with a statement keyword always run as statements. Errors
    raised while evaluating an expression are not retried.
    """
    toks = tokenize(src)
    first = toks.current()
    if first is None or (first.kind is TokenKind.IDENT and first.lexeme in STATEMENT_KEYWORDS):
        evaluate(parse(toks), ctx)
        return None
    try:
        expr = parse_expression(toks)
    except SlpyError:
        logger.debug("not an expression, running as statements: %r", src)
        toks.reset()
        evaluate(parse(toks), ctx)
        return None
    return evaluate_expression(expr, ctx)
