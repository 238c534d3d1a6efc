from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .spans import Span

if TYPE_CHECKING:
    from .tokens import Token, TokenKind


class ErrorKind(str, Enum):
    TOKENIZATION = "tokenization failed"
    PARSER = "parsing failed"
    UNEXPECTED_EOF = "unexpected end of file"
    INTERPRETATION = "interpretation failed"
    OVERFLOW = "integer overflow"


@dataclass(slots=True)
class SlpyError(Exception):
    kind: ErrorKind
    span: Span
    message: str = ""
    hint: str | None = None
    # Parser mismatches only: (kind, value) wanted and the token found.
    expected: tuple[TokenKind, object] | None = None
    got: Token | None = None

    def format(self, file: str | None = None) -> str:
        base = f"{self.span.format(file)}: {self.message or self.kind.value}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base

    def __str__(self) -> str:
        return self.format()
