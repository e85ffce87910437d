"""
Ferret CLI Entrypoint.

This module provides the command-line interface for running Ferret programs.

Features:
    - Read source from a file or an inline string.
    - Lex, parse and run the program, printing its output.
    - Dump the token stream or the parenthesized AST instead of running.
    - Launch an interactive REPL.

Example usage:
    ferret program.fe
    ferret -s "print 1 + 2"
    ferret program.fe --ast
    ferret --repl --verbose

Exit codes:
    0 on success, 1 on a syntax or run-time error, 2 if the source file
    cannot be read.
"""

import argparse
import logging
import sys
from typing import TextIO

from ferret.ferret_errors import FerretRuntimeError, ParseError
from ferret.ferret_interpreter import Interpreter
from ferret.ferret_lexer import CharacterStream, Lexer
from ferret.ferret_parser import Parser

logger = logging.getLogger(__name__)


def run_ferret(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    show_ast: bool = False,
    out: TextIO | None = None,
) -> int:
    """
    Run the Ferret pipeline: read, lex, parse, then dump or execute.

    Args:
        source (str): Ferret source code, or a path to a source file.
        is_string (bool): If True, treats ``source`` as code instead of a path.
            Inline code is newline-terminated like a REPL line.
        show_tokens (bool): Print the token stream instead of running.
        show_ast (bool): Print one parenthesized statement per line instead of running.
        out (TextIO | None): Destination for program output. Defaults to stdout.

    Returns:
        int: The process exit code.
    """
    out = out if out is not None else sys.stdout

    # 1. Read source
    if not is_string:
        path = source
        try:
            with open(path, encoding="utf-8") as f:
                source = f.read()
        except OSError as e:
            print(f"error reading source file: {e}", file=sys.stderr)
            return 2
        logger.debug("read %d characters from %s", len(source), path)
    elif source and not source.endswith("\n"):
        source += "\n"

    # 2. Lexing
    lexer = Lexer(CharacterStream(source))
    if show_tokens:
        for tok in lexer:
            print(f"{tok.line}:{tok.col}\t{tok.kind.name}\t{tok.value!r}", file=out)
        return 0

    # 3. Parsing
    try:
        program = Parser(lexer, source).parse()
    except ParseError as e:
        print(e, file=sys.stderr)
        return 1

    if show_ast:
        for stmt in program:
            print(stmt, file=out)
        return 0

    # 4. Execution
    try:
        Interpreter(out=out).run(program)
    except FerretRuntimeError as e:
        print(e, file=sys.stderr)
        return 1
    return 0


def configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def main() -> None:
    """
    Entry point for the Ferret CLI.

    - Launches the REPL if no source is given or ``--repl`` is specified.
    - Otherwise runs the program and exits with ``run_ferret``'s code.

    Supported flags:
        - ``-s``, ``--string``: Interpret source as code instead of a file path.
        - ``--tokens``: Print the token stream.
        - ``--ast``: Print the parsed statements.
        - ``--repl``: Launch the interactive REPL.
        - ``-v``, ``--verbose``: Debug logging (and statement echo in the REPL).
    """
    parser = argparse.ArgumentParser(prog="ferret")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    dump = parser.add_mutually_exclusive_group()
    dump.add_argument(
        "--tokens", action="store_true", help="Print tokens instead of running"
    )
    dump.add_argument(
        "--ast", action="store_true", help="Print parsed statements instead of running"
    )
    parser.add_argument("--repl", action="store_true", help="Launch interactive REPL")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args()
    configure_logging(args.verbose)

    if args.repl or args.source is None:
        from ferret.ferret_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    code = run_ferret(
        source=args.source,
        is_string=args.string,
        show_tokens=args.tokens,
        show_ast=args.ast,
    )
    if code:
        sys.exit(code)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
