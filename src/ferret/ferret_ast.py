"""
Abstract syntax tree for the Ferret scripting language.

Expressions:
    Literal   -- integer, string or boolean constant
    Ident     -- variable reference (``pop`` reads the stack)
    BinaryOp  -- infix operator applied to two sub-expressions
    UnaryOp   -- prefix ``-`` or ``not`` applied to one sub-expression

Statements:
    Set, Push, Check, Pop, Print

Every node is an immutable dataclass. Nodes record the line/column of their
first token for diagnostics, but those positions do not take part in
equality, so trees built by hand compare equal to parsed ones.

Each node has a ``kind`` used by the interpreter's ``visit_<kind>`` dispatch,
a ``to_dict()`` for JSON-style dumps, and a ``str()`` giving the
parenthesized prefix form, e.g. ``set x 1 + 2`` -> ``(set x (+ 1 2))``.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, TypedDict, Union

from ferret.ferret_constants import TokenKind


class ASTDict(TypedDict, total=False):
    """Serialized form of a node.

    Fields:
        kind (str): Node kind (e.g. "set", "binary", "literal").
        value (Any): Literal value, identifier/variable name or operator text.
        line (int): Source line of the node.
        col (int): Source column of the node.
        children (list[ASTDict]): Sub-expressions in evaluation order.
    """

    kind: str
    value: Any
    line: int
    col: int
    children: list["ASTDict"]


def quote_string(text: str) -> str:
    """Renders ``text`` as a Ferret string literal, re-escaping ``"`` and ``\\``."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class Node:
    kind: ClassVar[str] = "node"

    line: int = field(default=0, compare=False, kw_only=True)
    col: int = field(default=0, compare=False, kw_only=True)

    def _dict(self, value: Any, children: list["Node"]) -> ASTDict:
        return {
            "kind": self.kind,
            "value": value,
            "line": self.line,
            "col": self.col,
            "children": [c.to_dict() for c in children],
        }

    def to_dict(self) -> ASTDict:
        raise NotImplementedError(f"to_dict not implemented for {self.kind}")


@dataclass(frozen=True, eq=False)
class Literal(Node):
    kind: ClassVar[str] = "literal"

    value: int | str | bool

    def __eq__(self, other: Any) -> bool:
        # bool is an int subclass; true must not equal 1
        return (
            isinstance(other, Literal)
            and type(self.value) is type(other.value)
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((type(self.value), self.value))

    def __str__(self) -> str:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        if isinstance(self.value, str):
            return quote_string(self.value)
        return str(self.value)

    def to_dict(self) -> ASTDict:
        return self._dict(self.value, [])


@dataclass(frozen=True)
class Ident(Node):
    kind: ClassVar[str] = "ident"

    name: str

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> ASTDict:
        return self._dict(self.name, [])


@dataclass(frozen=True)
class BinaryOp(Node):
    kind: ClassVar[str] = "binary"

    op: TokenKind
    left: "Expr"
    right: "Expr"

    def __str__(self) -> str:
        return f"({self.op} {self.left} {self.right})"

    def to_dict(self) -> ASTDict:
        return self._dict(str(self.op), [self.left, self.right])


@dataclass(frozen=True)
class UnaryOp(Node):
    kind: ClassVar[str] = "unary"

    op: TokenKind
    operand: "Expr"

    def __str__(self) -> str:
        return f"({self.op} {self.operand})"

    def to_dict(self) -> ASTDict:
        return self._dict(str(self.op), [self.operand])


Expr = Union[Literal, Ident, BinaryOp, UnaryOp]


@dataclass(frozen=True)
class Set(Node):
    kind: ClassVar[str] = "set"

    name: str
    expr: Expr

    def __str__(self) -> str:
        return f"(set {self.name} {self.expr})"

    def to_dict(self) -> ASTDict:
        return self._dict(self.name, [self.expr])


@dataclass(frozen=True)
class Push(Node):
    kind: ClassVar[str] = "push"

    expr: Expr

    def __str__(self) -> str:
        return f"(push {self.expr})"

    def to_dict(self) -> ASTDict:
        return self._dict(None, [self.expr])


@dataclass(frozen=True)
class Check(Node):
    kind: ClassVar[str] = "check"

    expr: Expr

    def __str__(self) -> str:
        return f"(check {self.expr})"

    def to_dict(self) -> ASTDict:
        return self._dict(None, [self.expr])


@dataclass(frozen=True)
class Pop(Node):
    kind: ClassVar[str] = "pop"

    def __str__(self) -> str:
        return "(pop)"

    def to_dict(self) -> ASTDict:
        return self._dict(None, [])


@dataclass(frozen=True)
class Print(Node):
    kind: ClassVar[str] = "print"

    expr: Expr

    def __str__(self) -> str:
        return f"(print {self.expr})"

    def to_dict(self) -> ASTDict:
        return self._dict(None, [self.expr])


Stmt = Union[Set, Push, Check, Pop, Print]
