"""
Run-time values of the Ferret interpreter.

Four immutable variants: ``IntValue``, ``StrValue``, ``BoolValue`` and
``CommentValue``. The interpreter never produces a ``CommentValue``; it exists
so stored programs can carry inert statement text in the future, and its
equality and truthiness are intentionally left unimplemented.

Equality only holds between values of the same variant, so
``IntValue(1) != BoolValue(True)``.
"""

from dataclasses import dataclass
from typing import Any, Union

from ferret.ferret_errors import FerretTypeError


@dataclass(frozen=True)
class IntValue:
    value: int

    def __str__(self) -> str:
        return str(self.value)

    def to_int(self) -> int:
        return self.value

    def to_bool(self) -> bool:
        return self.value != 0


@dataclass(frozen=True)
class StrValue:
    value: str

    def __str__(self) -> str:
        return self.value

    def to_int(self) -> int:
        raise FerretTypeError("Expected numerical expression")

    def to_bool(self) -> bool:
        # Empty strings are truthy, non-empty ones are not
        return self.value == ""


@dataclass(frozen=True)
class BoolValue:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"

    def to_int(self) -> int:
        raise FerretTypeError("Expected numerical expression")

    def to_bool(self) -> bool:
        return self.value


@dataclass(frozen=True, eq=False)
class CommentValue:
    value: str

    def __str__(self) -> str:
        return self.value

    def __eq__(self, other: Any) -> bool:
        raise NotImplementedError("equality is not defined for comment values")

    def __hash__(self) -> int:
        return hash(("comment", self.value))

    def to_int(self) -> int:
        raise FerretTypeError("Expected numerical expression")

    def to_bool(self) -> bool:
        raise NotImplementedError("truthiness is not defined for comment values")


Value = Union[IntValue, StrValue, BoolValue, CommentValue]


def from_literal(literal: int | str | bool) -> Value:
    """Wraps a parsed literal constant in its run-time value."""
    if isinstance(literal, bool):
        return BoolValue(literal)
    if isinstance(literal, int):
        return IntValue(literal)
    if isinstance(literal, str):
        return StrValue(literal)
    raise TypeError(f"Unsupported literal type: {type(literal).__name__}")
