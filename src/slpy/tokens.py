from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from .errors import ErrorKind, SlpyError
from .spans import ORIGIN, Span


class TokenKind(str, Enum):
    NEWLINE = "newline"
    COMMA = ","
    IDENT = "identifier"
    NUMBER = "number"
    STRING = "string"
    LPAREN = "("
    RPAREN = ")"
    OP = "operator"


class Operator(str, Enum):
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIV = "//"
    MOD = "%"
    ASSIGN = "="
    POW = "**"
    ADD_ASSIGN = "+="


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    lexeme: str
    span: Span
    # NUMBER: int value; OP: Operator
    value: int | Operator | None = None

    def matches(self, kind: TokenKind, value: object = None) -> bool:
        if self.kind is not kind:
            return False
        return value is None or self.value == value

    def describe(self) -> str:
        if self.kind is TokenKind.NEWLINE:
            return "end of line"
        if self.kind is TokenKind.STRING:
            return f'string "{self.lexeme}"'
        if self.kind in (TokenKind.IDENT, TokenKind.NUMBER):
            return f"{self.kind.value} {self.lexeme!r}"
        return repr(self.lexeme)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.lexeme!r}, {self.span.start}-{self.span.end})"


def _describe_expected(kind: TokenKind, value: object) -> str:
    if value is not None:
        return repr(getattr(value, "value", value))
    if kind is TokenKind.NEWLINE:
        return "end of line"
    if len(kind.value) == 1:
        return repr(kind.value)
    return kind.value


@dataclass(slots=True)
class TokenStream:
    """Tokens produced by the lexer plus the parser's read position."""

    tokens: list[Token] = field(default_factory=list)
    index: int = 0

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __getitem__(self, i: int) -> Token:
        return self.tokens[i]

    def append(self, tok: Token) -> None:
        self.tokens.append(tok)

    def reset(self) -> None:
        self.index = 0

    @property
    def exhausted(self) -> bool:
        return self.index >= len(self.tokens)

    def current(self) -> Token | None:
        return self.peek(0)

    def peek(self, n: int = 1) -> Token | None:
        j = self.index + n
        if j >= len(self.tokens):
            return None
        return self.tokens[j]

    def eof_span(self) -> Span:
        if not self.tokens:
            return Span.at(ORIGIN)
        return Span.at(self.tokens[-1].span.end)

    def current_or_error(self) -> Token:
        tok = self.current()
        if tok is None:
            raise SlpyError(
                kind=ErrorKind.UNEXPECTED_EOF,
                span=self.eof_span(),
                message="unexpected end of input",
            )
        return tok

    def advance(self) -> None:
        assert self.index < len(self.tokens), "advanced past the last token"
        self.index += 1

    def take(self) -> Token:
        """Return the current token and move past it."""
        tok = self.current_or_error()
        self.index += 1
        return tok

    def expect(self, kind: TokenKind, value: object = None) -> Token:
        tok = self.current_or_error()
        if not tok.matches(kind, value):
            want = _describe_expected(kind, value)
            raise SlpyError(
                kind=ErrorKind.PARSER,
                span=tok.span,
                message=f"expected {want}, got {tok.describe()}",
                expected=(kind, value),
                got=tok,
            )
        self.index += 1
        return tok
