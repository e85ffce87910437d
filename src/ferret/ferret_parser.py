"""
Ferret Language Parser

Turns the token stream produced by ``ferret_lexer`` into a list of statement
nodes from ``ferret_ast``.

Grammar
-------
One statement per line::

    set <ident> <expr>
    push <expr>
    check <expr>
    print <expr>
    pop

Expressions are infix and parsed by precedence climbing (Pratt parsing).
Loosest to tightest::

    or  <  and  <  == !=  <  < > <= >=  <  + -  <  * /  <  prefix -  <  prefix not

Infix operators are left-associative. ``pop`` inside an expression is a
reference to the top of the stack.

Parser Behavior
---------------
- Parses the whole program before anything is executed.
- Fails fast: the first syntax error raises ``ParseError`` with the line and
  column of the offending token.
- Running out of tokens where a statement or an expression must start raises
  ``UnexpectedEndOfInput``, which ``parse()`` treats as the normal end of the
  program. A trailing partial statement such as ``push 1 +`` is dropped.
- Every statement, the last one included, must end with a newline. A blank
  line is a syntax error.

Entry Points
------------
- ``parse()``: Parse a full program into a list of statements.
- ``parse_statement()``: Parse a single statement.
- ``parse_expression()``: Parse a single expression.
- ``parse_source()``: Lex and parse a source string in one call.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from ferret.ferret_ast import (
    BinaryOp,
    Check,
    Expr,
    Ident,
    Literal,
    Pop,
    Print,
    Push,
    Set,
    Stmt,
    UnaryOp,
)
from ferret.ferret_constants import (
    INT_MAX,
    INT_MIN,
    TokenKind,
    expression_terminators,
    infix_binding_power,
    prefix_binding_power,
)
from ferret.ferret_errors import UnexpectedEndOfInput
from ferret.ferret_lexer import CharacterStream, Lexer, Token
from ferret.ferret_stream import TokenStream

logger = logging.getLogger(__name__)


def unescape_string(text: str) -> str:
    """Strips the quotes from a string literal and resolves ``\\"`` and ``\\\\``."""
    body = text[1:-1]
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            out.append(body[i + 1])
            i += 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


class Parser:
    """
    Ferret Parser Class

    Recursive-descent statement parser driving a precedence-climbing
    expression parser.

    Attributes
    ----------
    tokens : TokenStream
        Lookahead adapter over the input tokens.
    source : str
        The source text, if known (used to place a synthesized EOF).

    Raises
    ------
    ParseError
        On any syntax error, located at the offending token.
    UnexpectedEndOfInput
        From ``parse_statement``/``parse_expression`` when input runs out.
    """

    def __init__(self, tokens: Iterable[Token], source: str = "") -> None:
        self.source = source
        self.tokens = TokenStream(tokens, source)

        self.statement_parsers: dict[TokenKind, Callable[[], Stmt]] = {
            TokenKind.SET: self.parse_set,
            TokenKind.PUSH: self.parse_push,
            TokenKind.CHECK: self.parse_check,
            TokenKind.POP: self.parse_pop,
            TokenKind.PRINT: self.parse_print,
        }

    def parse(self) -> list[Stmt]:
        """Parse a full program and return its statements in execution order."""
        program: list[Stmt] = []
        while True:
            try:
                program.append(self.parse_statement())
            except UnexpectedEndOfInput:
                break
        logger.debug("parsed %d statement(s)", len(program))
        return program

    # Statements

    def parse_statement(self) -> Stmt:
        """Parse one statement, dispatching on its leading keyword."""
        tok = self.tokens.peek_token()
        handler = self.statement_parsers.get(tok.kind)
        if handler is not None:
            return handler()
        if tok.kind is TokenKind.EOF:
            raise UnexpectedEndOfInput(tok.line, tok.col, tok)
        self.tokens.next()
        raise self.tokens.error(tok, f"Expected statement, got {tok.describe()}")

    def end_statement(self) -> None:
        self.tokens.consume(TokenKind.NEWLINE)

    def parse_set(self) -> Set:
        set_tok = self.tokens.consume(TokenKind.SET)
        target = self.tokens.next()
        # `pop` is accepted here so the interpreter can reject it as reserved
        if target.kind not in (TokenKind.IDENT, TokenKind.POP):
            raise self.tokens.error(
                target, f"Expected identifier, got {target.describe()}"
            )
        expr = self.parse_expression()
        self.end_statement()
        return Set(target.value, expr, line=set_tok.line, col=set_tok.col)

    def parse_push(self) -> Push:
        tok = self.tokens.consume(TokenKind.PUSH)
        expr = self.parse_expression()
        self.end_statement()
        return Push(expr, line=tok.line, col=tok.col)

    def parse_check(self) -> Check:
        tok = self.tokens.consume(TokenKind.CHECK)
        expr = self.parse_expression()
        self.end_statement()
        return Check(expr, line=tok.line, col=tok.col)

    def parse_pop(self) -> Pop:
        tok = self.tokens.consume(TokenKind.POP)
        self.end_statement()
        return Pop(line=tok.line, col=tok.col)

    def parse_print(self) -> Print:
        tok = self.tokens.consume(TokenKind.PRINT)
        expr = self.parse_expression()
        self.end_statement()
        return Print(expr, line=tok.line, col=tok.col)

    # Expressions

    def parse_expression(self, binding_power: int = 0) -> Expr:
        """Parse an expression whose operators bind at least ``binding_power``."""
        lhs = self.parse_primary()

        while True:
            tok = self.tokens.peek_token()
            if tok.kind in expression_terminators:
                break

            powers = infix_binding_power.get(tok.kind)
            if powers is None:
                if tok.kind in prefix_binding_power:
                    # `not` cannot continue an expression; let the caller decide
                    break
                self.tokens.next()
                raise self.tokens.error(
                    tok, f"Expected operator or terminator, got {tok.describe()}"
                )

            left_bp, right_bp = powers
            if left_bp < binding_power:
                break

            self.tokens.next()
            rhs = self.parse_expression(right_bp)
            lhs = BinaryOp(tok.kind, lhs, rhs, line=lhs.line, col=lhs.col)

        return lhs

    def parse_primary(self) -> Expr:
        tok = self.tokens.peek_token()
        kind = tok.kind

        if kind in (TokenKind.IDENT, TokenKind.POP):
            self.tokens.next()
            return Ident(tok.value, line=tok.line, col=tok.col)
        if kind in (
            TokenKind.INT_LIT,
            TokenKind.STRING_LIT,
            TokenKind.TRUE,
            TokenKind.FALSE,
        ):
            return self.parse_literal()
        if kind is TokenKind.LPAREN:
            return self.parse_grouping()
        if kind in prefix_binding_power:
            return self.parse_prefix_op()
        if kind is TokenKind.EOF:
            raise UnexpectedEndOfInput(tok.line, tok.col, tok)

        self.tokens.next()
        raise self.tokens.error(tok, f"Expected expression, got {tok.describe()}")

    def parse_literal(self) -> Literal:
        tok = self.tokens.next()
        if tok.kind is TokenKind.INT_LIT:
            number = int(tok.value)
            if not INT_MIN <= number <= INT_MAX:
                raise self.tokens.error(
                    tok, f"'{tok.value}' is not a valid integer literal"
                )
            return Literal(number, line=tok.line, col=tok.col)
        if tok.kind is TokenKind.STRING_LIT:
            return Literal(unescape_string(tok.value), line=tok.line, col=tok.col)
        if tok.kind is TokenKind.TRUE:
            return Literal(True, line=tok.line, col=tok.col)
        if tok.kind is TokenKind.FALSE:
            return Literal(False, line=tok.line, col=tok.col)
        raise AssertionError(f"Unexpected literal token: {tok}")  # pragma: no cover

    def parse_prefix_op(self) -> UnaryOp:
        op_tok = self.tokens.next()
        operand = self.parse_expression(prefix_binding_power[op_tok.kind])
        return UnaryOp(op_tok.kind, operand, line=op_tok.line, col=op_tok.col)

    def parse_grouping(self) -> Expr:
        self.tokens.consume(TokenKind.LPAREN)
        expr = self.parse_expression(0)
        self.tokens.consume(TokenKind.RPAREN)
        return expr


def parse_source(source: str) -> list[Stmt]:
    """Lex and parse ``source`` into a program."""
    return Parser(Lexer(CharacterStream(source)), source).parse()
