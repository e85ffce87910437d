import io
import os
from typing import Callable

import pytest

from ferret.ferret_interpreter import Interpreter
from ferret.ferret_parser import parse_source

# Measure coverage in subprocesses started by the CLI tests
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


RunResult = tuple[Interpreter, str]


@pytest.fixture  # type: ignore[misc]
def run() -> Callable[[str], RunResult]:
    """Parses and runs a program, returning the interpreter and printed output."""

    def _run(source: str) -> RunResult:
        out = io.StringIO()
        interpreter = Interpreter(out=out)
        interpreter.run(parse_source(source))
        return interpreter, out.getvalue()

    return _run
