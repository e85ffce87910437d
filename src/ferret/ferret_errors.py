"""
Exception hierarchy for the Ferret interpreter.

Parse-time failures derive from ``SyntaxError`` and run-time failures from
``RuntimeError`` so callers can catch them with the builtin classes; both
share ``FerretError`` so a driver can catch everything the language raises.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ferret.ferret_lexer import Token


class FerretError(Exception):
    """Base class for every error raised by the Ferret pipeline."""


class ParseError(FerretError, SyntaxError):
    """A syntax error located at a token.

    Attributes:
        message (str): The bare error message.
        line (int): 1-based line of the offending token.
        column (int): 1-based column of the offending token.
        token (Token | None): The offending token, when there is one.
    """

    def __init__(
        self, message: str, line: int = 0, column: int = 0, token: Token | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.token = token

    def __str__(self) -> str:
        return f"Error at {self.line}:{self.column} = {self.message}"


class UnexpectedEndOfInput(ParseError):
    """Raised when the input ends where a statement or expression is required.

    At a statement boundary this is the normal end-of-program signal.
    """

    def __init__(
        self, line: int = 0, column: int = 0, token: Token | None = None
    ) -> None:
        super().__init__("Unexpected end of input", line, column, token)


class FerretRuntimeError(FerretError, RuntimeError):
    """Base class for errors raised while executing a program."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class FerretTypeError(FerretRuntimeError):
    """An operand had the wrong value kind."""


class UndefinedNameError(FerretRuntimeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is undefined")
        self.name = name


class EmptyStackError(FerretRuntimeError):
    def __init__(self) -> None:
        super().__init__("The stack is empty")


class ReservedIdentifierError(FerretRuntimeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot assign to reserved identifier '{name}'")
        self.name = name


class FerretArithmeticError(FerretRuntimeError, ArithmeticError):
    """Division by zero or a result outside the 64-bit integer range."""
