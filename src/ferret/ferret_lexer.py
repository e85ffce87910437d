"""
Lexical analyzer for the Ferret scripting language.

This module turns raw source text into a lazy stream of tokens:

Classes:
    CharacterStream: Character reader with offset, line and column tracking.
    Span: Half-open ``(start, end)`` offsets of a token in the source.
    Token: A single token with kind, source text, span and location.
    Lexer: Iterator converting a CharacterStream into Tokens.

Features:
    - Whitespace and newlines are emitted as tokens, not skipped; statements
      are newline-delimited so the parser needs to see them.
    - Longest-match recognition; keywords win over identifiers only when the
      whole identifier-shaped match is the keyword (``printer`` is an IDENT).
    - Unrecognized input becomes an ERROR token instead of raising.
    - Exactly one EOF token (zero-length span) closes the stream.

Example:
    >>> lexer = Lexer(CharacterStream("print 42"))
    >>> [tok.kind.name for tok in lexer]
    ['PRINT', 'WHITESPACE', 'INT_LIT', 'EOF']

Exports:
    - CharacterStream
    - Span
    - Token
    - Lexer
    - TokenKind
    - token_hashmap
"""

from typing import Iterator, NamedTuple

from ferret.ferret_constants import (
    DIGITS,
    IDENT_CHARS,
    IDENT_START,
    MAX_OPERATOR_LEN,
    WHITESPACE_CHARS,
    TokenKind,
    keyword_tokens,
    operator_tokens,
    token_hashmap,
)


class CharacterStream:
    """
    Reads characters from a source string with offset, line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character ``offset`` places ahead, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Span(NamedTuple):
    """Half-open range of source offsets covered by a token."""

    start: int
    end: int


class Token(NamedTuple):
    """A single, immutable lexical token.

    Attributes:
        kind (TokenKind): The token's kind.
        value (str): The exact source text matched (quotes included for strings).
        span (Span): Offsets of the match in the source.
        line (int): 1-based line where the token starts.
        col (int): 1-based column where the token starts.
    """

    kind: TokenKind
    value: str
    span: Span = Span(0, 0)
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r})"

    def describe(self) -> str:
        """Human-readable description used in syntax error messages.

        Kinds with variable text (identifiers, literals, error tokens) include
        the source text, e.g. ``identifier 'x'``; fixed tokens just give their
        kind, e.g. ``+`` or ``newline``.
        """
        if self.kind in (
            TokenKind.IDENT,
            TokenKind.INT_LIT,
            TokenKind.STRING_LIT,
            TokenKind.ERROR,
        ):
            return f"{self.kind} {self.value!r}"
        return str(self.kind)


class Lexer:
    """Lexical analyzer for Ferret.

    A Lexer is a one-shot iterator: once the EOF token has been produced,
    ``next_token()`` returns None and iteration stops.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream
        self.finished = False

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        tok = self.next_token()
        if tok is None:
            raise StopIteration
        return tok

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def _make(self, kind: TokenKind, start: int, line: int, col: int) -> Token:
        end = self.stream.position
        return Token(kind, self.stream.source[start:end], Span(start, end), line, col)

    def match_operator(self) -> TokenKind | None:
        """Consumes the longest operator at the current position, if any."""
        best: str | None = None
        candidate = ""
        for i in range(MAX_OPERATOR_LEN):
            ch = self.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in operator_tokens:
                best = candidate
        if best is None:
            return None
        for _ in best:
            self.advance()
        return operator_tokens[best]

    def string_literal_length(self) -> int:
        """Length of a well-formed string literal starting at the current ``"``.

        Returns 0 when the quote does not open a valid literal: the closing
        quote is missing or a backslash is followed by anything other than
        ``"`` or ``\\``.
        """
        i = 1
        while True:
            ch = self.peek(i)
            if ch == "":
                return 0
            if ch == '"':
                return i + 1
            if ch == "\\":
                if self.peek(i + 1) not in ('"', "\\"):
                    return 0
                i += 2
            else:
                i += 1

    def next_token(self) -> Token | None:
        """Consumes and returns the next token, or None once EOF was produced."""
        if self.finished:
            return None

        start = self.stream.position
        line, col = self.stream.line, self.stream.column

        if self.stream.end_of_file():
            self.finished = True
            return Token(TokenKind.EOF, "", Span(start, start), line, col)

        ch = self.peek()

        # 1. Whitespace run
        if ch in WHITESPACE_CHARS:
            while self.peek() != "" and self.peek() in WHITESPACE_CHARS:
                self.advance()
            return self._make(TokenKind.WHITESPACE, start, line, col)

        # 2. Newline
        if ch == "\n" or (ch == "\r" and self.peek(1) == "\n"):
            if ch == "\r":
                self.advance()
            self.advance()
            return self._make(TokenKind.NEWLINE, start, line, col)

        # 3. Identifier or keyword
        if ch in IDENT_START:
            while self.peek() != "" and self.peek() in IDENT_CHARS:
                self.advance()
            text = self.stream.source[start : self.stream.position]
            return self._make(keyword_tokens.get(text, TokenKind.IDENT), start, line, col)

        # 4. Integer
        if ch in DIGITS:
            while self.peek() != "" and self.peek() in DIGITS:
                self.advance()
            return self._make(TokenKind.INT_LIT, start, line, col)

        # 5. String
        if ch == '"':
            length = self.string_literal_length()
            if length:
                for _ in range(length):
                    self.advance()
                return self._make(TokenKind.STRING_LIT, start, line, col)
            self.advance()
            return self._make(TokenKind.ERROR, start, line, col)

        # 6. Operator or punctuation
        kind = self.match_operator()
        if kind is not None:
            return self._make(kind, start, line, col)

        # 7. Anything else
        self.advance()
        return self._make(TokenKind.ERROR, start, line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes ``source`` completely, EOF token included."""
    return list(Lexer(CharacterStream(source)))


__all__ = ["CharacterStream", "Lexer", "Span", "Token", "TokenKind", "token_hashmap", "tokenize"]
