from __future__ import annotations

from . import ast as A
from .spans import Span


def dump_program(prog: A.Program) -> str:
    """Render the tree one node per line, children indented by two spaces."""
    out = [f"Program {_span(prog.span)}"]
    out.extend(_dump_block(prog.main, indent=2))
    return "\n".join(out) + "\n"


def _span(sp: Span) -> str:
    return f"[{sp.start}-{sp.end}]"


def _indent(s: str, n: int) -> str:
    return (" " * n) + s


def _dump_block(block: A.Block, *, indent: int) -> list[str]:
    out = [_indent(f"Block {_span(block.span)}", indent)]
    for stmt in block.statements:
        out.extend(_dump_statement(stmt, indent=indent + 2))
    return out


def _dump_statement(stmt: A.Statement, *, indent: int) -> list[str]:
    if isinstance(stmt, A.Assign):
        head = _indent(f"Assign {stmt.name} {_span(stmt.span)}", indent)
        return [head, *_dump_expression(stmt.value, indent=indent + 2)]
    if isinstance(stmt, A.Print):
        head = _indent(f"Print {_span(stmt.span)}", indent)
        return [head, *_dump_expression(stmt.value, indent=indent + 2)]
    if isinstance(stmt, A.Pass):
        return [_indent(f"Pass {_span(stmt.span)}", indent)]
    return [_indent(f"<unsupported statement: {type(stmt).__name__}>", indent)]


def _dump_expression(expr: A.Expression, *, indent: int) -> list[str]:
    # explicit stack: left-leaning operator chains can be thousands deep
    out: list[str] = []
    pending: list[tuple[A.Expression, int]] = [(expr, indent)]
    while pending:
        node, n = pending.pop()
        if isinstance(node, A.BinaryOp):
            out.append(_indent(f"BinaryOp {node.op.value} {_span(node.span)}", n))
            pending.append((node.right, n + 2))
            pending.append((node.left, n + 2))
        elif isinstance(node, A.Name):
            out.append(_indent(f"Name {node.name} {_span(node.span)}", n))
        elif isinstance(node, A.Number):
            out.append(_indent(f"Number {node.value} {_span(node.span)}", n))
        elif isinstance(node, A.Input):
            out.append(_indent(f'Input "{node.prompt}" {_span(node.span)}', n))
        else:
            out.append(_indent(f"<unsupported expression: {type(node).__name__}>", n))
    return out
