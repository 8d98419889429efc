"""
Source-to-execution pipeline for the Lox language.

`Lox` wires the three stages together around one `ErrorReporter` and one
`Interpreter`, so a sequence of `run` calls (a REPL session, say) shares a
single root environment:

    source --scan_tokens--> tokens --Parser--> statements --Interpreter--> effects

Evaluation never starts if the lexer or parser reported anything.

Example:
    >>> out: list[str] = []
    >>> lox = Lox(write=out.append)
    >>> lox.run("var x = 1; print x + 1;")
    <RunStatus.OK: 0>
    >>> out
    ['2']
"""

import io
import logging
from collections.abc import Callable
from enum import Enum

from lox.lox_ast import Expr, Stmt, Value
from lox.lox_errors import ErrorReporter, LoxRuntimeError
from lox.lox_interpreter import Interpreter
from lox.lox_lexer import scan_tokens
from lox.lox_parser import Parser
from lox.lox_tokens import Token

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    """Outcome of one `Lox.run` call."""

    OK = 0
    SYNTAX_ERROR = 1
    RUNTIME_ERROR = 2


class Lox:
    """One interpreter session: error sink, output sink, and persistent environment.

    Attributes:
        reporter (ErrorReporter): Receives lexical, syntax, and runtime diagnostics.
        interpreter (Interpreter): Evaluator holding the session's root environment.
    """

    def __init__(
        self,
        write: Callable[[str], None] | None = None,
        reporter: ErrorReporter | None = None,
    ) -> None:
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.interpreter = Interpreter(write=write, reporter=self.reporter)

    def tokenize(self, source: str) -> list[Token]:
        return scan_tokens(source, self.reporter)

    def parse(self, source: str) -> list[Stmt]:
        """Lexes and parses `source`. Check `reporter.had_error` before using the result."""
        return Parser(self.tokenize(source), self.reporter).parse()

    def parse_expression(self, source: str, quiet: bool = False) -> Expr | None:
        """Lexes and parses `source` as one bare expression, or returns None on error.

        Args:
            source: The expression text, without a trailing semicolon.
            quiet: If True, diagnostics go to a scratch reporter and the session's
                failure flags are left untouched. The REPL uses this to try input as an expression.
        """
        reporter = ErrorReporter(stream=io.StringIO()) if quiet else self.reporter
        tokens = scan_tokens(source, reporter)
        if reporter.had_error:
            return None
        expr = Parser(tokens, reporter).parse_expression()
        return None if reporter.had_error else expr

    def run(self, source: str) -> RunStatus:
        """Lexes, parses, and, if both were clean, executes `source`.

        Failure flags left over from earlier calls are cleared first, so one
        broken input does not block the rest of the session.
        """
        self.reporter.reset()
        statements = self.parse(source)
        if self.reporter.had_error:
            logger.debug("skipping execution: source has syntax errors")
            return RunStatus.SYNTAX_ERROR
        if self.interpreter.execute(statements) is not None:
            return RunStatus.RUNTIME_ERROR
        return RunStatus.OK

    def evaluate(self, source: str) -> Value:
        """Evaluates a bare expression and returns its value.

        Raises:
            ValueError: If `source` is not a single valid expression.
            LoxRuntimeError: If evaluation fails. The error is reported first.
        """
        self.reporter.reset()
        expr = self.parse_expression(source)
        if expr is None or self.reporter.had_error:
            raise ValueError(f"Not a valid expression: {source!r}")
        try:
            return self.interpreter.evaluate(expr)
        except LoxRuntimeError as err:
            self.reporter.runtime_error(err)
            raise


__all__ = ["Lox", "RunStatus"]
