"""
Lox CLI Entrypoint.

This module provides the command-line interface for running Lox source code.
It supports running scripts, running inline strings, dumping the token stream
or the parsed tree, and an interactive REPL.

Example usage:
    lox hello.lox
    lox -s "print 1 + 2;"
    lox hello.lox --tokens
    lox -s "var x = 1;" --ast
    lox --repl --verbose

Exit codes (sysexits.h):
    0   success
    64  usage error
    65  lexical or syntax error in the input
    66  script could not be read
    70  runtime error

Environment:
    LOX_LOG_LEVEL: Log level name used when `--verbose` is not given.
    NO_COLOR: Disables colored diagnostics even with `--color`.

Functions:
    run_lox(source, is_string=False, tokens=False, ast=False, color=False) -> int:
        Executes the full Lox pipeline (lex → parse → evaluate) and returns an exit code.

    main(argv=None) -> int:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import logging
import os
import sys

from lox.lox_errors import ErrorReporter
from lox.lox_pipeline import Lox, RunStatus
from lox.lox_printer import AstPrinter

logger = logging.getLogger(__name__)

EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def configure_logging(verbose: bool = False) -> None:
    """Sends log records to stderr at DEBUG when verbose, else at `LOX_LOG_LEVEL` (default WARNING)."""
    if verbose:
        level = logging.DEBUG
    else:
        name = os.getenv("LOX_LOG_LEVEL", "WARNING").upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def run_lox(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    ast: bool = False,
    color: bool = False,
) -> int:
    """
    Run the Lox pipeline on a script file or literal source.

    Args:
        source (str): The Lox source code or path to a script.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens (bool): If True, print the token stream instead of running.
        ast (bool): If True, print the parenthesized tree instead of running.
        color (bool): If True, color diagnostics (ignored when NO_COLOR is set).

    Returns:
        int: The process exit code.

    Side Effects:
        - Prints program output to stdout.
        - Prints diagnostics to stderr.
    """
    if not is_string:
        try:
            with open(source, encoding="utf-8") as f:
                source = f.read()
        except OSError as e:
            print(f"Could not read script: {e}", file=sys.stderr)
            return EX_NOINPUT

    reporter = ErrorReporter(color=color and "NO_COLOR" not in os.environ)
    lox = Lox(reporter=reporter)

    if tokens:
        for tok in lox.tokenize(source):
            print(tok)
        return EX_DATAERR if reporter.had_error else EX_OK

    if ast:
        statements = lox.parse(source)
        if reporter.had_error:
            return EX_DATAERR
        print(AstPrinter().print_program(statements))
        return EX_OK

    status = lox.run(source)
    logger.debug("run finished with %s", status.name)
    if status is RunStatus.SYNTAX_ERROR:
        return EX_DATAERR
    if status is RunStatus.RUNTIME_ERROR:
        return EX_SOFTWARE
    return EX_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lox")
    parser.add_argument("source", nargs="?", help="Script path or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--tokens", action="store_true", help="Print tokens instead of running")
    mode.add_argument("--ast", action="store_true", help="Print the parsed tree instead of running")
    parser.add_argument("--color", action="store_true", help="Color diagnostics")
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of running a script",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Debug logging; AST echo in the REPL"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Lox CLI.

    Launches the REPL if no source is given or `--repl` is specified; otherwise
    runs the source and returns the pipeline's exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return EX_OK if e.code == 0 else EX_USAGE

    configure_logging(args.verbose)

    if args.repl or args.source is None:
        if args.string or args.tokens or args.ast:
            print("Usage: lox [script | -s source] [--tokens | --ast]", file=sys.stderr)
            return EX_USAGE
        from lox.lox_repl import start_repl

        start_repl(verbose=args.verbose)
        return EX_OK

    return run_lox(
        source=args.source,
        is_string=args.string,
        tokens=args.tokens,
        ast=args.ast,
        color=args.color,
    )


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    sys.exit(main())
