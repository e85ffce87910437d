import pytest

from ferret.ferret_env import Environment
from ferret.ferret_errors import EmptyStackError, UndefinedNameError
from ferret.ferret_value import IntValue, StrValue


def test_set_and_get_last_write_wins() -> None:
    env = Environment()
    env.set("x", IntValue(1))
    env.set("x", StrValue("two"))
    assert env.get("x") == StrValue("two")


def test_get_undefined() -> None:
    with pytest.raises(UndefinedNameError) as exc:
        Environment().get("nope")
    assert str(exc.value) == "nope is undefined"
    assert exc.value.name == "nope"


def test_stack_is_lifo() -> None:
    env = Environment()
    env.push(IntValue(1))
    env.push(IntValue(2))
    assert env.top() == IntValue(2)
    assert env.pop() == IntValue(2)
    assert env.pop() == IntValue(1)


def test_pop_empty_stack() -> None:
    env = Environment()
    with pytest.raises(EmptyStackError, match="The stack is empty"):
        env.pop()
    with pytest.raises(EmptyStackError):
        env.top()


def test_rollback_restores_popped_values_in_order() -> None:
    env = Environment()
    for n in (1, 2, 3):
        env.push(IntValue(n))
    env.commit()

    assert env.pop() == IntValue(3)
    assert env.pop() == IntValue(2)
    env.rollback()
    assert env.stack == [IntValue(1), IntValue(2), IntValue(3)]


def test_commit_forgets_earlier_pops() -> None:
    env = Environment()
    env.push(IntValue(1))
    env.push(IntValue(2))
    env.pop()
    env.commit()
    env.pop()
    env.rollback()
    assert env.stack == [IntValue(1)]
    env.rollback()
    assert env.stack == [IntValue(1)]


def test_environments_are_independent() -> None:
    a, b = Environment(), Environment()
    a.push(IntValue(1))
    a.set("x", IntValue(1))
    assert b.stack == []
    assert b.variables == {}
