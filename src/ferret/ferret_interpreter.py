"""
Tree-walking interpreter for Ferret programs.

The ``Interpreter`` owns one ``Environment`` and executes statements in
order. Nodes are dispatched to ``visit_<kind>`` methods by their ``kind``; a
node kind without a visitor raises ``NotImplementedError`` rather than being
skipped.

Semantics:
    - ``and``/``or`` short-circuit on truthiness and always yield a boolean.
    - Truthiness: booleans are themselves, integers are true when nonzero,
      strings are true when *empty*.
    - Arithmetic and comparison operators need integer operands; the left
      operand is checked before the right one is evaluated.
    - ``/`` truncates toward zero; dividing by zero or leaving the signed
      64-bit range is a ``FerretArithmeticError``.
    - The identifier ``pop`` pops the stack instead of reading a variable and
      cannot be assigned.
    - A statement that raises leaves the environment as it found it.

Example:
    >>> from ferret.ferret_parser import parse_source
    >>> Interpreter().run(parse_source("set x 5\\nprint x * x\\n"))
    25
"""

import logging
import sys
from typing import Callable, TextIO

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
    RESERVED_STACK_IDENT,
    TokenKind,
    arith_ops,
    bool_ops,
    comparison_ops,
)
from ferret.ferret_env import Environment
from ferret.ferret_errors import (
    FerretArithmeticError,
    FerretRuntimeError,
    FerretTypeError,
    ReservedIdentifierError,
)
from ferret.ferret_value import BoolValue, IntValue, Value, from_literal

logger = logging.getLogger(__name__)


def checked_int(number: int) -> IntValue:
    if not INT_MIN <= number <= INT_MAX:
        raise FerretArithmeticError("Integer overflow")
    return IntValue(number)


def truncating_div(lhs: int, rhs: int) -> int:
    if rhs == 0:
        raise FerretArithmeticError("Division by zero")
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


arithmetic: dict[TokenKind, Callable[[int, int], int]] = {
    TokenKind.PLUS: lambda a, b: a + b,
    TokenKind.MINUS: lambda a, b: a - b,
    TokenKind.STAR: lambda a, b: a * b,
    TokenKind.SLASH: truncating_div,
}

comparisons: dict[TokenKind, Callable[[int, int], bool]] = {
    TokenKind.EQUALS: lambda a, b: a == b,
    TokenKind.NOT_EQUALS: lambda a, b: a != b,
    TokenKind.LESS: lambda a, b: a < b,
    TokenKind.LESS_EQ: lambda a, b: a <= b,
    TokenKind.GREATER: lambda a, b: a > b,
    TokenKind.GREATER_EQ: lambda a, b: a >= b,
}


class Interpreter:
    """Executes parsed Ferret statements against an environment.

    Attributes:
        env (Environment): Variables and stack for this run.
        out (TextIO): Destination of ``print`` output.
    """

    def __init__(self, env: Environment | None = None, out: TextIO | None = None) -> None:
        self.env = env if env is not None else Environment()
        self.out = out if out is not None else sys.stdout

    def run(self, program: list[Stmt]) -> None:
        """Executes ``program`` in order, stopping at the first run-time error."""
        for stmt in program:
            self.execute(stmt)

    def execute(self, stmt: Stmt) -> None:
        """Executes one statement; on failure the environment is left unchanged."""
        logger.debug("executing %s (line %d)", stmt, stmt.line)
        self.env.commit()
        try:
            self._visit(stmt)
        except FerretRuntimeError:
            self.env.rollback()
            raise
        self.env.commit()

    def evaluate(self, expr: Expr) -> Value:
        return self._visit(expr)  # type: ignore[no-any-return]

    def _visit(self, node: Expr | Stmt) -> Value | None:
        method = getattr(self, f"visit_{node.kind}", None)
        if method is None:
            raise NotImplementedError(
                f"No visitor for node kind '{node.kind}' (line {node.line}, col {node.col})"
            )
        return method(node)  # type: ignore[no-any-return]

    # Statements

    def visit_set(self, stmt: Set) -> None:
        if stmt.name == RESERVED_STACK_IDENT:
            raise ReservedIdentifierError(stmt.name)
        self.env.set(stmt.name, self.evaluate(stmt.expr))

    def visit_push(self, stmt: Push) -> None:
        self.env.push(self.evaluate(stmt.expr))

    def visit_pop(self, stmt: Pop) -> None:
        self.env.pop()

    def visit_check(self, stmt: Check) -> None:
        self.env.push(BoolValue(self.evaluate(stmt.expr).to_bool()))

    def visit_print(self, stmt: Print) -> None:
        print(self.evaluate(stmt.expr), file=self.out)

    # Expressions

    def visit_literal(self, expr: Literal) -> Value:
        return from_literal(expr.value)

    def visit_ident(self, expr: Ident) -> Value:
        if expr.name == RESERVED_STACK_IDENT:
            return self.env.pop()
        return self.env.get(expr.name)

    def visit_binary(self, expr: BinaryOp) -> Value:
        op = expr.op
        if op in bool_ops:
            return self.eval_short_circuit(op, expr)

        lhs = self.evaluate(expr.left).to_int()
        rhs = self.evaluate(expr.right).to_int()
        if op in arith_ops:
            return checked_int(arithmetic[op](lhs, rhs))
        if op in comparison_ops:
            return BoolValue(comparisons[op](lhs, rhs))
        raise NotImplementedError(f"Unsupported binary operator: {op}")

    def eval_short_circuit(self, op: TokenKind, expr: BinaryOp) -> BoolValue:
        lhs = self.evaluate(expr.left).to_bool()
        if op is TokenKind.AND:
            return BoolValue(lhs and self.evaluate(expr.right).to_bool())
        return BoolValue(lhs or self.evaluate(expr.right).to_bool())

    def visit_unary(self, expr: UnaryOp) -> Value:
        value = self.evaluate(expr.operand)
        if expr.op is TokenKind.MINUS:
            return checked_int(-value.to_int())
        if expr.op is TokenKind.NOT:
            if isinstance(value, (BoolValue, IntValue)):
                return BoolValue(not value.to_bool())
            raise FerretTypeError("Expected boolean or numerical expression")
        raise NotImplementedError(f"Unsupported prefix operator: {expr.op}")
