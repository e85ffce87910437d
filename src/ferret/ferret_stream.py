"""
One-token-lookahead adapter between the lexer and the parser.

``TokenStream`` drops WHITESPACE tokens, keeps everything else (NEWLINE
included, since statements end at line breaks) and guarantees that the parser
can always branch on a concrete kind: looking or reading past the end yields
the EOF token instead of failing.
"""

from typing import Iterable, Iterator

from ferret.ferret_constants import TokenKind
from ferret.ferret_errors import ParseError
from ferret.ferret_lexer import Span, Token


class TokenStream:
    """Wraps a token iterable with ``peek``/``next``/``consume``.

    Attributes:
        source (str): The source text, used to place a synthesized EOF token.
    """

    def __init__(self, tokens: Iterable[Token], source: str = "") -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._lookahead: Token | None = None
        self._eof: Token | None = None
        self.source = source

    def _pull(self) -> Token:
        if self._eof is not None:
            return self._eof
        for tok in self._tokens:
            if tok.kind is TokenKind.WHITESPACE:
                continue
            if tok.kind is TokenKind.EOF:
                self._eof = tok
            return tok
        # Underlying iterable ended without its own EOF token
        end = len(self.source)
        lines = self.source.split("\n")
        self._eof = Token(TokenKind.EOF, "", Span(end, end), len(lines), len(lines[-1]) + 1)
        return self._eof

    def peek_token(self) -> Token:
        if self._lookahead is None:
            self._lookahead = self._pull()
        return self._lookahead

    def peek(self) -> TokenKind:
        return self.peek_token().kind

    def at(self, kind: TokenKind) -> bool:
        return self.peek() is kind

    def next(self) -> Token:
        tok = self.peek_token()
        self._lookahead = None
        return tok

    def consume(self, expected: TokenKind) -> Token:
        """Consumes the next token, which must be of kind ``expected``.

        Raises:
            ParseError: ``Expected <expected>, got <actual>`` at the actual token.
        """
        tok = self.next()
        if tok.kind is not expected:
            raise self.error(tok, f"Expected {expected}, got {tok.describe()}")
        return tok

    @staticmethod
    def error(token: Token, message: str) -> ParseError:
        return ParseError(message, token.line, token.col, token)
