from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from typing import TextIO

from . import ast as A
from .errors import ErrorKind, SlpyError
from .spans import Span
from .tokens import Operator


I32_MIN = -(2**31)
I32_MAX = 2**31 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(slots=True)
class Context:
    """Variable environment plus the streams `print` and `input` use."""

    variables: dict[str, int] = field(default_factory=dict)
    output: TextIO = field(default_factory=lambda: sys.stdout)
    input: TextIO = field(default_factory=lambda: sys.stdin)

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def __getitem__(self, name: str) -> int:
        return self.variables[name]

    def assign(self, name: str, value: int) -> None:
        self.variables[name] = value


def _overflow(span: Span, what: str) -> SlpyError:
    return SlpyError(
        kind=ErrorKind.OVERFLOW,
        span=span,
        message=f"{what} does not fit in a 32-bit signed integer",
    )


def _interp_error(span: Span, msg: str, hint: str | None = None) -> SlpyError:
    return SlpyError(kind=ErrorKind.INTERPRETATION, span=span, message=msg, hint=hint)


def _checked(value: int, span: Span, what: str = "result") -> int:
    if value < I32_MIN or value > I32_MAX:
        raise _overflow(span, what)
    return value


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _power(base: int, exp: int, span: Span) -> int:
    if exp < 0:
        return 0
    if base in (0, 1):
        return base if exp else 1
    if base == -1:
        return -1 if exp % 2 else 1
    # |base| >= 2, so any exponent past 31 overflows.
    if exp > 31:
        raise _overflow(span, "result")
    return _checked(base**exp, span)


def apply_operator(op: Operator, left: int, right: int, span: Span) -> int:
    """Apply an infix operator with 32-bit signed semantics.

    Division truncates toward zero and the remainder takes the sign of the
    dividend, so that `(a // b) * b + a % b == a`.
    """
    if op is Operator.PLUS:
        return _checked(left + right, span)
    if op is Operator.MINUS:
        return _checked(left - right, span)
    if op is Operator.TIMES:
        return _checked(left * right, span)
    if op in (Operator.DIV, Operator.MOD):
        if right == 0:
            raise _interp_error(span, "division by zero")
        q = _trunc_div(left, right)
        if op is Operator.DIV:
            return _checked(q, span)
        return left - q * right
    if op is Operator.POW:
        return _power(left, right, span)
    raise _interp_error(span, f"{op.value!r} is not an arithmetic operator")


def _read_int(leaf: A.Input, ctx: Context) -> int:
    ctx.output.write(leaf.prompt)
    ctx.output.flush()
    line = ctx.input.readline()
    if not line:
        raise _interp_error(leaf.span, "end of input while reading a number")
    text = line.strip()
    if not _INT_RE.fullmatch(text):
        raise _interp_error(leaf.span, f"invalid number {text!r}", hint="enter a whole number such as 42 or -7")
    value = int(text)
    if value < I32_MIN or value > I32_MAX:
        raise _interp_error(leaf.span, f"number {text} is out of range")
    return value


def evaluate_expression(expr: A.Expression, ctx: Context) -> int:
    """Evaluate left operand, then right, then the operator.

    The walk keeps its own stack so that long chains like `1 + 1 + ... + 1`
    are not limited by Python's recursion depth.
    """
    values: list[int] = []
    pending: list[tuple[A.Expression, bool]] = [(expr, False)]
    while pending:
        node, operands_done = pending.pop()
        if not isinstance(node, A.BinaryOp):
            values.append(_evaluate_leaf(node, ctx))
        elif operands_done:
            right = values.pop()
            left = values.pop()
            values.append(apply_operator(node.op, left, right, node.span))
        else:
            pending.append((node, True))
            pending.append((node.right, False))
            pending.append((node.left, False))
    return values.pop()


def _evaluate_leaf(expr: A.Expression, ctx: Context) -> int:
    if isinstance(expr, A.Number):
        return _checked(expr.value, expr.span, f"literal {expr.value}")
    if isinstance(expr, A.Name):
        if expr.name not in ctx:
            raise _interp_error(expr.span, f"name {expr.name!r} is not defined")
        return ctx[expr.name]
    if isinstance(expr, A.Input):
        return _read_int(expr, ctx)
    raise TypeError(f"not an expression: {type(expr).__name__}")


def execute(stmt: A.Statement, ctx: Context) -> None:
    if isinstance(stmt, A.Assign):
        ctx.assign(stmt.name, evaluate_expression(stmt.value, ctx))
    elif isinstance(stmt, A.Print):
        ctx.output.write(f"{evaluate_expression(stmt.value, ctx)}\n")
    elif isinstance(stmt, A.Pass):
        pass
    else:
        raise TypeError(f"not a statement: {type(stmt).__name__}")


def evaluate(node: A.Node, ctx: Context) -> int | None:
    """Evaluate any AST node.

    Expressions produce their value; statements, blocks and programs produce
    None and act through `ctx`. The first error aborts evaluation.
    """
    if isinstance(node, A.Program):
        node = node.main
    if isinstance(node, A.Block):
        for stmt in node.statements:
            execute(stmt, ctx)
        return None
    if isinstance(node, A.Statement):
        execute(node, ctx)
        return None
    return evaluate_expression(node, ctx)
