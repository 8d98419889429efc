"""
Interactive prompt for the Lox language.

Each input is lexed, parsed, and evaluated against one persistent `Lox`
session, so variables defined on one line are visible on the next. Errors are
reported and the prompt keeps going; the failure flags are cleared after every
input.

Input handling:
    - `exit` / `quit`, Ctrl-D, or Ctrl-C leave the prompt.
    - An input with unbalanced `{` continues on `... ` lines until the braces close.
    - A bare expression without a trailing `;` is evaluated and its value echoed.
    - `verbose-mode` toggles printing each input's parenthesized AST.
    - Lines starting with `//` are ignored.
"""

import io
import logging
import os
import traceback

from lox.lox_errors import LoxRuntimeError
from lox.lox_interpreter import stringify
from lox.lox_pipeline import Lox
from lox.lox_printer import AstPrinter

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "> "
CONTINUATION_PROMPT = "... "


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def read_source(prompt: str) -> str | None:
    """Reads one input, following brace continuations.

    Returns:
        str | None: The input text, or None if the user asked to leave.
    """
    src_lines: list[str] = []
    brace_count = 0
    while True:
        line = input(prompt if not src_lines else CONTINUATION_PROMPT)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            break
    return "\n".join(src_lines).strip()


def eval_line(lox: Lox, src: str, verbose: bool = False) -> None:
    """Runs one REPL input against the session, echoing bare expression values."""
    printer = AstPrinter()
    if not src.endswith((";", "}")):
        expr = lox.parse_expression(src, quiet=True)
        if expr is not None:
            if verbose:
                print(f"[ast] >>> {printer.print(expr)}")
            try:
                value = lox.interpreter.evaluate(expr)
            except LoxRuntimeError as err:
                lox.reporter.runtime_error(err)
                return
            lox.interpreter.write(stringify(value))
            return

    if verbose:
        lox.reporter.reset()
        statements = lox.parse(src)
        if lox.reporter.had_error:
            return
        print(f"[ast] >>> {printer.print_program(statements)}")
        lox.interpreter.execute(statements)
        return
    lox.run(src)


def start_repl(lox: Lox | None = None, verbose: bool = False) -> None:
    """Runs the read-eval-print loop until the user leaves.

    Args:
        lox: Session to evaluate against. A fresh one is created if omitted.
        verbose: Start with AST echo enabled.
    """
    session = lox if lox is not None else Lox()
    prompt = os.getenv("LOX_PROMPT", DEFAULT_PROMPT)
    print("Lox REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = read_source(prompt)
            if src is None:
                print("Exiting Lox REPL.")
                return
            if not src or src.startswith("//"):
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            try:
                eval_line(session, src, verbose)
            except Exception:
                logger.debug("internal error while evaluating %r", src)
                print_traceback()
            finally:
                session.reporter.reset()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting Lox REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
