from __future__ import annotations

import string
from dataclasses import dataclass

from .errors import ErrorKind, SlpyError
from .spans import Loc, Span
from .tokens import Operator, Token, TokenKind, TokenStream


U32_MAX = 2**32 - 1

_DIGITS = frozenset(string.digits)
_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_CHARS = _IDENT_START | _DIGITS

_SINGLE: dict[str, tuple[TokenKind, Operator | None]] = {
    "(": (TokenKind.LPAREN, None),
    ")": (TokenKind.RPAREN, None),
    ",": (TokenKind.COMMA, None),
    "-": (TokenKind.OP, Operator.MINUS),
    "%": (TokenKind.OP, Operator.MOD),
    "=": (TokenKind.OP, Operator.ASSIGN),
}

# first char -> (second char, operator if both match, operator for the first char alone)
_DOUBLE: dict[str, tuple[str, Operator, Operator | None]] = {
    "*": ("*", Operator.POW, Operator.TIMES),
    "+": ("=", Operator.ADD_ASSIGN, Operator.PLUS),
    "/": ("/", Operator.DIV, None),
}


@dataclass(slots=True)
class _Cursor:
    src: str
    i: int = 0
    row: int = 1
    col: int = 1

    def eof(self) -> bool:
        return self.i >= len(self.src)

    def peek(self, n: int = 0) -> str:
        j = self.i + n
        if j >= len(self.src):
            return ""
        return self.src[j]

    def advance(self, n: int = 1) -> None:
        for _ in range(n):
            if self.eof():
                return
            ch = self.src[self.i]
            self.i += 1
            if ch == "\n":
                self.row += 1
                self.col = 1
            else:
                self.col += 1

    def pos(self) -> Loc:
        return Loc(row=self.row, col=self.col)


def tokenize(src: str) -> TokenStream:
    """Scan `src` into a token stream.

    Newlines are significant and every non-empty stream ends with a NEWLINE
    token, synthesized after the last character if the source has none.
    Comments run to the end of the line; a comment-only line produces no
    tokens at all.
    """
    cur = _Cursor(src=src)
    out = TokenStream()

    def line_open() -> bool:
        return bool(out.tokens) and out.tokens[-1].kind is not TokenKind.NEWLINE

    def emit(kind: TokenKind, lexeme: str, start: Loc, end: Loc, value: object = None) -> None:
        out.append(Token(kind, lexeme, Span(start=start, end=end), value))

    def error_at(start: Loc, msg: str, *, end: Loc | None = None, hint: str | None = None) -> SlpyError:
        return SlpyError(
            kind=ErrorKind.TOKENIZATION,
            span=Span(start=start, end=end or start),
            message=msg,
            hint=hint,
        )

    while not cur.eof():
        ch = cur.peek()

        # a CR is only accepted as part of a CRLF line ending
        if ch in " \t" or (ch == "\r" and cur.peek(1) == "\n"):
            cur.advance()
            continue

        start = cur.pos()

        if ch == "\n":
            cur.advance()
            emit(TokenKind.NEWLINE, "\n", start, start)
            continue

        if ch == "#":
            while not cur.eof() and cur.peek() != "\n":
                cur.advance()
            cur.advance()
            if line_open():
                emit(TokenKind.NEWLINE, "", start, start)
            continue

        double = _DOUBLE.get(ch)
        if double is not None:
            second, both, alone = double
            if cur.peek(1) == second:
                cur.advance(2)
                emit(TokenKind.OP, ch + second, start, Loc(start.row, start.col + 1), both)
                continue
            if alone is None:
                raise error_at(
                    start,
                    f"unexpected character {ch!r}",
                    hint=f"did you mean {ch + second!r}?",
                )
            cur.advance()
            emit(TokenKind.OP, ch, start, start, alone)
            continue

        single = _SINGLE.get(ch)
        if single is not None:
            kind, op = single
            cur.advance()
            emit(kind, ch, start, start, op)
            continue

        if ch in _DIGITS:
            begin = cur.i
            number = 0
            end = start
            while cur.peek() in _DIGITS:
                number = number * 10 + int(cur.peek())
                end = cur.pos()
                cur.advance()
            lexeme = src[begin : cur.i]
            if number > U32_MAX:
                raise error_at(
                    start,
                    f"integer literal {lexeme} is too large",
                    end=end,
                    hint=f"literals must not exceed {U32_MAX}",
                )
            emit(TokenKind.NUMBER, lexeme, start, end, number)
            continue

        if ch in _IDENT_START:
            begin = cur.i
            end = start
            while cur.peek() in _IDENT_CHARS:
                end = cur.pos()
                cur.advance()
            emit(TokenKind.IDENT, src[begin : cur.i], start, end)
            continue

        if ch == '"':
            cur.advance()
            buf: list[str] = []
            while True:
                c = cur.peek()
                if c in ("", "\n"):
                    raise error_at(start, "unterminated string literal", hint='close the string with "')
                if c == '"':
                    end = cur.pos()
                    cur.advance()
                    break
                buf.append(c)
                cur.advance()
            emit(TokenKind.STRING, "".join(buf), start, end)
            continue

        raise error_at(start, f"unexpected character {ch!r}")

    if line_open():
        eol = cur.pos()
        emit(TokenKind.NEWLINE, "", eol, eol)
    return out
