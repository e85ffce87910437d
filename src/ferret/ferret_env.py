"""Run-time storage for one Ferret program run: named variables plus a value stack."""

from ferret.ferret_errors import EmptyStackError, UndefinedNameError
from ferret.ferret_value import Value


class Environment:
    """
    Variable mapping and last-in-first-out stack owned by one interpreter.

    Attributes:
        variables (dict[str, Value]): Name -> value; the last ``set`` wins.
        stack (list[Value]): The value stack, top of stack last.

    Values removed by ``pop`` are journaled until ``commit()``, so
    ``rollback()`` can put them back. Pops are the only writes a statement
    makes before it can still fail.
    """

    def __init__(self) -> None:
        self.variables: dict[str, Value] = {}
        self.stack: list[Value] = []
        self._popped: list[Value] = []

    def set(self, name: str, value: Value) -> None:
        self.variables[name] = value

    def get(self, name: str) -> Value:
        """
        Looks up a variable.

        Raises:
            UndefinedNameError: If ``name`` was never set.
        """
        try:
            return self.variables[name]
        except KeyError:
            raise UndefinedNameError(name) from None

    def push(self, value: Value) -> None:
        self.stack.append(value)

    def pop(self) -> Value:
        """
        Removes and returns the top of the stack.

        Raises:
            EmptyStackError: If the stack is empty.
        """
        if not self.stack:
            raise EmptyStackError()
        value = self.stack.pop()
        self._popped.append(value)
        return value

    def top(self) -> Value:
        if not self.stack:
            raise EmptyStackError()
        return self.stack[-1]

    def commit(self) -> None:
        self._popped.clear()

    def rollback(self) -> None:
        """Pushes back everything popped since the last ``commit()``."""
        while self._popped:
            self.stack.append(self._popped.pop())
