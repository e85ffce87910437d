import pytest

from ferret.ferret_errors import ParseError
from ferret.ferret_lexer import Span, Token, TokenKind, tokenize
from ferret.ferret_stream import TokenStream


def stream(source: str) -> TokenStream:
    return TokenStream(tokenize(source), source)


def test_whitespace_is_skipped_newlines_kept() -> None:
    ts = stream("push  1\n")
    assert ts.next().kind is TokenKind.PUSH
    assert ts.next().kind is TokenKind.INT_LIT
    assert ts.next().kind is TokenKind.NEWLINE
    assert ts.next().kind is TokenKind.EOF


def test_peek_does_not_consume() -> None:
    ts = stream("pop")
    assert ts.peek() is TokenKind.POP
    assert ts.peek() is TokenKind.POP
    assert ts.at(TokenKind.POP)
    assert ts.next().kind is TokenKind.POP
    assert ts.peek() is TokenKind.EOF


def test_reading_past_end_yields_eof() -> None:
    ts = stream("")
    for _ in range(3):
        assert ts.peek() is TokenKind.EOF
        assert ts.next().kind is TokenKind.EOF


def test_eof_synthesized_when_missing() -> None:
    tokens = [Token(TokenKind.POP, "pop", Span(0, 3), 1, 1)]
    ts = TokenStream(tokens, "pop")
    ts.next()
    eof = ts.next()
    assert eof.kind is TokenKind.EOF
    assert eof.span == Span(3, 3)
    assert (eof.line, eof.col) == (1, 4)


def test_consume_matching_kind() -> None:
    ts = stream("set")
    tok = ts.consume(TokenKind.SET)
    assert tok.value == "set"


def test_consume_mismatch_raises_located_error() -> None:
    ts = stream("\n  push")
    ts.next()
    with pytest.raises(ParseError) as exc:
        ts.consume(TokenKind.SET)
    assert str(exc.value) == "Error at 2:3 = Expected set, got push"
    assert exc.value.line == 2
    assert exc.value.column == 3
    assert exc.value.token is not None and exc.value.token.kind is TokenKind.PUSH
