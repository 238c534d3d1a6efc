from __future__ import annotations

from dataclasses import dataclass

from .spans import ORIGIN, Span
from .tokens import Operator


# Expressions


@dataclass(frozen=True, slots=True)
class Leaf:
    span: Span


@dataclass(frozen=True, slots=True)
class Name(Leaf):
    name: str


@dataclass(frozen=True, slots=True)
class Number(Leaf):
    value: int  # unsigned 32-bit literal


@dataclass(frozen=True, slots=True)
class Input(Leaf):
    """`input("prompt")`: reads one integer from the interpreter's input."""

    prompt: str


@dataclass(frozen=True, slots=True)
class BinaryOp:
    span: Span  # left start .. right end, fixed when the node is built
    left: "Expression"
    op: Operator
    right: "Expression"

    @classmethod
    def of(cls, left: "Expression", op: Operator, right: "Expression") -> "BinaryOp":
        return cls(span=left.span.join(right.span), left=left, op=op, right=right)


Expression = BinaryOp | Name | Number | Input


# Statements


@dataclass(frozen=True, slots=True)
class Statement:
    span: Span


@dataclass(frozen=True, slots=True)
class Assign(Statement):
    name: str
    value: Expression


@dataclass(frozen=True, slots=True)
class Pass(Statement):
    pass


@dataclass(frozen=True, slots=True)
class Print(Statement):
    value: Expression


@dataclass(frozen=True, slots=True)
class Block:
    statements: tuple[Statement, ...] = ()

    @property
    def span(self) -> Span:
        if not self.statements:
            return Span(start=ORIGIN, end=ORIGIN)
        return self.statements[0].span.join(self.statements[-1].span)


@dataclass(frozen=True, slots=True)
class Program:
    main: Block

    @property
    def span(self) -> Span:
        return self.main.span


Node = Program | Block | Statement | Expression
