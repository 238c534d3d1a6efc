from __future__ import annotations

from dataclasses import dataclass

from . import ast as A
from .errors import ErrorKind, SlpyError
from .tokens import Operator, Token, TokenKind, TokenStream


# operator -> (left binding power, right binding power)
BINDING_POWER: dict[Operator, tuple[int, int]] = {
    Operator.PLUS: (1, 2),
    Operator.MINUS: (1, 2),
    Operator.TIMES: (3, 4),
    Operator.DIV: (3, 4),
    Operator.MOD: (3, 4),
    Operator.POW: (6, 5),
}

PASS = "pass"
PRINT = "print"
INPUT = "input"

STATEMENT_KEYWORDS = frozenset({PASS, PRINT})


def _unexpected(tok: Token, what: str, hint: str | None = None) -> SlpyError:
    return SlpyError(
        kind=ErrorKind.PARSER,
        span=tok.span,
        message=f"expected {what}, got {tok.describe()}",
        hint=hint,
        got=tok,
    )


@dataclass(slots=True)
class Parser:
    tokens: TokenStream

    def parse_program(self) -> A.Program:
        return A.Program(main=self.parse_block())

    def parse_block(self) -> A.Block:
        stmts: list[A.Statement] = []
        while not self.tokens.exhausted:
            # blank line
            if self.tokens.current_or_error().kind is TokenKind.NEWLINE:
                self.tokens.advance()
                continue
            stmts.append(self.parse_statement())
            tok = self.tokens.current()
            if tok is not None and tok.kind is TokenKind.NEWLINE:
                self.tokens.advance()
        return A.Block(statements=tuple(stmts))

    def parse_statement(self) -> A.Statement:
        tok = self.tokens.current_or_error()
        if tok.matches(TokenKind.IDENT) and tok.lexeme == PASS:
            self.tokens.advance()
            return A.Pass(span=tok.span)
        if tok.matches(TokenKind.IDENT) and tok.lexeme == PRINT:
            return self._parse_print()
        return self._parse_assign()

    def _parse_print(self) -> A.Print:
        kw = self.tokens.take()
        self.tokens.expect(TokenKind.LPAREN)
        value = self.parse_expression()
        close = self.tokens.expect(TokenKind.RPAREN)
        return A.Print(span=kw.span.join(close.span), value=value)

    def _parse_assign(self) -> A.Assign:
        tok = self.tokens.current_or_error()
        if tok.kind is not TokenKind.IDENT:
            raise _unexpected(tok, "a statement", hint="statements are pass, print(...) or name = expression")
        name = self.tokens.take()

        op = self.tokens.current_or_error()
        if op.matches(TokenKind.OP, Operator.ADD_ASSIGN):
            self.tokens.advance()
            rhs = self.parse_expression()
            # x += e  ==>  x = x + e
            left = A.Name(span=op.span, name=name.lexeme)
            value: A.Expression = A.BinaryOp.of(left, Operator.PLUS, rhs)
        elif op.matches(TokenKind.OP, Operator.ASSIGN):
            self.tokens.advance()
            value = self.parse_expression()
        else:
            raise _unexpected(op, "'=' or '+='")
        return A.Assign(span=name.span.join(value.span), name=name.lexeme, value=value)

    def parse_expression(self, min_bp: int = 0) -> A.Expression:
        """Precedence climbing over the infix operators in BINDING_POWER.

        A NEWLINE or ')' ends the expression and is left for the caller: a
        nested right-hand side must not swallow the end of the statement.
        """
        tok = self.tokens.current_or_error()
        if tok.kind is TokenKind.LPAREN:
            self.tokens.advance()
            left = self.parse_expression(0)
            self.tokens.expect(TokenKind.RPAREN)
        elif tok.kind in (TokenKind.IDENT, TokenKind.NUMBER):
            left = self.parse_leaf()
        else:
            raise _unexpected(tok, "an expression")

        while True:
            tok = self.tokens.current()
            if tok is None or tok.kind in (TokenKind.NEWLINE, TokenKind.RPAREN):
                break
            if tok.kind is not TokenKind.OP:
                raise _unexpected(tok, "an operator or end of line")

            assert isinstance(tok.value, Operator)
            bp = BINDING_POWER.get(tok.value)
            if bp is None:
                raise _unexpected(tok, "an arithmetic operator", hint=f"{tok.lexeme!r} is only valid after a name")
            lbp, rbp = bp
            if lbp < min_bp:
                break
            self.tokens.advance()
            right = self.parse_expression(rbp)
            left = A.BinaryOp.of(left, tok.value, right)
        return left

    def parse_leaf(self) -> A.Leaf:
        tok = self.tokens.current_or_error()
        if tok.kind is TokenKind.NUMBER:
            self.tokens.advance()
            assert isinstance(tok.value, int)
            return A.Number(span=tok.span, value=tok.value)
        if tok.kind is TokenKind.IDENT:
            nxt = self.tokens.peek()
            if tok.lexeme == INPUT and nxt is not None and nxt.kind is TokenKind.LPAREN:
                return self._parse_input()
            self.tokens.advance()
            return A.Name(span=tok.span, name=tok.lexeme)
        raise _unexpected(tok, "a name or number")

    def _parse_input(self) -> A.Input:
        kw = self.tokens.take()
        self.tokens.expect(TokenKind.LPAREN)
        prompt = self.tokens.expect(TokenKind.STRING)
        close = self.tokens.expect(TokenKind.RPAREN)
        return A.Input(span=kw.span.join(close.span), prompt=prompt.lexeme)


def _too_deep(tokens: TokenStream) -> SlpyError:
    tok = tokens.current()
    return SlpyError(
        kind=ErrorKind.PARSER,
        span=tok.span if tok is not None else tokens.eof_span(),
        message="expression nested too deeply",
        hint="split it into several assignments",
    )


def parse(tokens: TokenStream) -> A.Program:
    try:
        return Parser(tokens).parse_program()
    except RecursionError:
        raise _too_deep(tokens) from None


def parse_expression(tokens: TokenStream) -> A.Expression:
    """Parse a single expression that must use up the whole stream."""
    p = Parser(tokens)
    try:
        expr = p.parse_expression()
    except RecursionError:
        raise _too_deep(tokens) from None
    tok = tokens.current()
    if tok is not None and tok.kind is TokenKind.NEWLINE:
        tokens.advance()
        tok = tokens.current()
    if tok is not None:
        raise _unexpected(tok, "end of line")
    return expr
