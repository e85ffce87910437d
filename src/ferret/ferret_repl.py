"""
Interactive read-eval-print loop for Ferret.

Each input line is parsed and executed against one persistent interpreter, so
variables and the stack survive between lines. Errors are reported and the
session continues; a statement that fails leaves the environment untouched.

Meta commands:
    :stack        print the stack, bottom first
    :vars         print the variables sorted by name
    verbose-mode  toggle echoing the parsed form of each statement
    exit / quit   leave the REPL
"""

import io
import traceback

from ferret.ferret_errors import FerretError
from ferret.ferret_interpreter import Interpreter
from ferret.ferret_parser import parse_source


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def handle_meta_command(src: str, interpreter: Interpreter) -> bool:
    """Runs ``:stack``/``:vars``; returns False if ``src`` is not a meta command."""
    if src == ":stack":
        if not interpreter.env.stack:
            print("[stack] >>> (empty)")
        for depth, value in enumerate(interpreter.env.stack):
            print(f"{depth:>4}  {value!r}")
        return True
    if src == ":vars":
        if not interpreter.env.variables:
            print("[vars] >>> (none)")
        for name, value in sorted(interpreter.env.variables.items()):
            print(f"{name:>12} = {value!r}")
        return True
    return False


def start_repl(verbose: bool = False) -> None:
    print("Ferret REPL. Type 'exit' or 'quit' to leave.")
    interpreter = Interpreter()

    while True:
        try:
            src = input(">>> ").strip()
            if not src:
                continue
            if src in ("exit", "quit"):
                print("Exiting Ferret REPL.")
                return
            if src == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            if handle_meta_command(src, interpreter):
                continue

            try:
                program = parse_source(src + "\n")
                for stmt in program:
                    if verbose:
                        print(f"[ast] >>> {stmt}")
                    interpreter.execute(stmt)
            except FerretError as e:
                print(f"[error] >>> {e}")
            except Exception:
                print_traceback()

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Ferret REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
