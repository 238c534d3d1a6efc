from __future__ import annotations

import pytest

from slpy import ErrorKind, SlpyError, tokenize
from slpy.spans import Loc, Span
from slpy.tokens import Operator, TokenKind


def _kinds(src: str) -> list[tuple[TokenKind, object]]:
    return [(t.kind, t.value if t.kind is not TokenKind.IDENT else t.lexeme) for t in tokenize(src)]


def test_comment_line_is_discarded() -> None:
    toks = list(tokenize("#\nx"))
    assert [t.kind for t in toks if t.kind is not TokenKind.NEWLINE] == [TokenKind.IDENT]
    assert toks[0].lexeme == "x"
    assert toks[0].span == Span(Loc(2, 1), Loc(2, 1))
    # only the end-of-line terminator follows
    assert [t.kind for t in toks] == [TokenKind.IDENT, TokenKind.NEWLINE]


def test_trailing_comment_still_ends_the_line() -> None:
    assert _kinds("x = 1 # set x\ny") == [
        (TokenKind.IDENT, "x"),
        (TokenKind.OP, Operator.ASSIGN),
        (TokenKind.NUMBER, 1),
        (TokenKind.NEWLINE, None),
        (TokenKind.IDENT, "y"),
        (TokenKind.NEWLINE, None),
    ]


def test_lone_plus_falls_back_to_single_char() -> None:
    toks = list(tokenize("+"))
    assert toks[0].kind is TokenKind.OP
    assert toks[0].value is Operator.PLUS
    assert toks[0].span.start == toks[0].span.end == Loc(1, 1)


def test_two_char_operators() -> None:
    ops = [t.value for t in tokenize("a += b ** c * d // e") if t.kind is TokenKind.OP]
    assert ops == [Operator.ADD_ASSIGN, Operator.POW, Operator.TIMES, Operator.DIV]


def test_two_char_operator_span() -> None:
    tok = tokenize("x **")[1]
    assert tok.span == Span(Loc(1, 3), Loc(1, 4))


def test_single_slash_is_error() -> None:
    with pytest.raises(SlpyError) as e:
        tokenize("6 / 2")
    assert e.value.kind is ErrorKind.TOKENIZATION
    assert e.value.span.start == Loc(1, 3)
    assert "//" in (e.value.hint or "")


def test_synthetic_newline_after_last_char() -> None:
    toks = tokenize("ab")
    assert toks[-1].kind is TokenKind.NEWLINE
    assert toks[-1].span.start == Loc(1, 3)


def test_no_extra_newline_when_source_ends_with_one() -> None:
    assert [t.kind for t in tokenize("a\n")] == [TokenKind.IDENT, TokenKind.NEWLINE]


def test_empty_source() -> None:
    assert len(tokenize("")) == 0
    assert len(tokenize("# nothing here")) == 0


def test_rows_and_columns() -> None:
    toks = tokenize("x = 10\n\tyy = 3")
    num = toks[2]
    assert num.value == 10
    assert num.span == Span(Loc(1, 5), Loc(1, 6))
    yy = toks[4]
    assert yy.lexeme == "yy"
    assert yy.span == Span(Loc(2, 2), Loc(2, 3))


def test_identifiers_with_digits_and_underscores() -> None:
    assert tokenize("_a1b2")[0].lexeme == "_a1b2"
    assert _kinds("1abc")[:2] == [(TokenKind.NUMBER, 1), (TokenKind.IDENT, "abc")]


def test_keywords_are_plain_identifiers() -> None:
    assert [t.kind for t in tokenize("pass print input")][:3] == [TokenKind.IDENT] * 3


def test_string_literal() -> None:
    toks = tokenize('input("n? ")')
    s = toks[2]
    assert s.kind is TokenKind.STRING
    assert s.lexeme == "n? "
    assert s.span == Span(Loc(1, 7), Loc(1, 11))


def test_string_has_no_escapes() -> None:
    assert tokenize(r'"a\n"')[0].lexeme == r"a\n"


@pytest.mark.parametrize("src", ['"abc', '"abc\n"'])
def test_unterminated_string(src: str) -> None:
    with pytest.raises(SlpyError) as e:
        tokenize(src)
    assert e.value.kind is ErrorKind.TOKENIZATION
    assert "unterminated" in str(e.value)


def test_unsupported_character() -> None:
    with pytest.raises(SlpyError) as e:
        tokenize("x = 1\ny = $")
    assert e.value.kind is ErrorKind.TOKENIZATION
    assert e.value.span == Span(Loc(2, 5), Loc(2, 5))
    assert "'$'" in str(e.value)


def test_largest_literal() -> None:
    assert tokenize("4294967295")[0].value == 2**32 - 1


def test_literal_too_large() -> None:
    with pytest.raises(SlpyError) as e:
        tokenize("x = 4294967296")
    assert e.value.kind is ErrorKind.TOKENIZATION
    assert e.value.span == Span(Loc(1, 5), Loc(1, 14))


def test_crlf_line_endings() -> None:
    crlf = [(t.kind, t.lexeme, t.span.start) for t in tokenize("x = 1\r\nprint(x)\r\n") if t.kind is not TokenKind.NEWLINE]
    lf = [(t.kind, t.lexeme, t.span.start) for t in tokenize("x = 1\nprint(x)\n") if t.kind is not TokenKind.NEWLINE]
    assert crlf == lf
    assert [t.kind for t in tokenize("a\r\nb\r\n")] == [
        TokenKind.IDENT,
        TokenKind.NEWLINE,
        TokenKind.IDENT,
        TokenKind.NEWLINE,
    ]


def test_lone_carriage_return_is_error() -> None:
    with pytest.raises(SlpyError) as e:
        tokenize("x = 1\ry = 2")
    assert e.value.kind is ErrorKind.TOKENIZATION
    assert e.value.span.start == Loc(1, 6)
