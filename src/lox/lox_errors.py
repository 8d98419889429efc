"""
Error types and the diagnostic sink for the Lox pipeline.

Three error kinds flow through the pipeline:

    - Lexical (`LoxLexicalError`): unexpected characters, unterminated strings.
      Recorded at scan time; the scan continues.
    - Syntax (`LoxParseError`): grammar violations. Recorded by the parser, which
      synchronizes and keeps going.
    - Runtime (`LoxRuntimeError`): operand type mismatches, undefined variables.
      Abort the current `execute` call.

Lexical and syntax errors never escape their stage. They are handed to an
`ErrorReporter`, which formats them, writes them to its stream, and raises the
`had_error` flag so the driver never evaluates a broken program. Runtime errors
raise `had_runtime_error` instead, letting the driver pick a distinct exit code.

Example:
    >>> reporter = ErrorReporter(stream=io.StringIO())
    >>> reporter.error(3, "Unexpected character.")
    >>> reporter.had_error
    True
"""

import sys
from typing import TextIO

from termcolor import colored

from lox.lox_tokens import Token, TokenType


class LoxError(Exception):
    """Base class for every diagnostic raised by the Lox pipeline.

    Attributes:
        line (int): The 1-based source line the error belongs to.
        message (str): Human-readable description, without location prefix.
    """

    def __init__(self, line: int, message: str) -> None:
        super().__init__(message)
        self.line = line
        self.message = message


class LoxLexicalError(LoxError):
    """Raised for characters or literals the lexer cannot turn into tokens."""


class LoxParseError(LoxError):
    """Raised when the token stream violates the grammar.

    Attributes:
        token (Token): The token the parser was looking at when it failed.
    """

    def __init__(self, token: Token, message: str) -> None:
        super().__init__(token.line, message)
        self.token = token


class LoxRuntimeError(LoxError):
    """Raised by the evaluator for type violations and undefined variables.

    Attributes:
        token (Token): The operator or identifier token that triggered the failure.
    """

    def __init__(self, token: Token, message: str) -> None:
        super().__init__(token.line, message)
        self.token = token


def where_of(token: Token) -> str:
    """Describes a token's position for a diagnostic: ` at end` or ` at 'lexeme'`."""
    if token.type == TokenType.EOF:
        return " at end"
    return f" at '{token.lexeme}'"


class ErrorReporter:
    """Collects and prints diagnostics for one pipeline instance.

    Attributes:
        stream (TextIO): Where formatted diagnostics are written. Defaults to stderr.
        color (bool): Whether to color the severity label with termcolor.
        had_error (bool): Set by any lexical or syntax diagnostic.
        had_runtime_error (bool): Set by any runtime diagnostic.
        diagnostics (list[str]): Every formatted diagnostic, in report order.
    """

    def __init__(self, stream: TextIO | None = None, color: bool = False) -> None:
        self.stream = stream
        self.color = color
        self.had_error = False
        self.had_runtime_error = False
        self.diagnostics: list[str] = []

    def report(self, line: int, where: str, message: str, runtime: bool = False) -> None:
        """Formats and emits one diagnostic.

        Args:
            line: The 1-based source line.
            where: Location suffix such as `" at 'x'"`, `" at end"`, or `""`.
            message: The error message.
            runtime: True for runtime errors, False for lexical and syntax errors.
        """
        label = "RuntimeError" if runtime else "Error"
        text = f"[line {line}] {label}{where}: {message}"
        self.diagnostics.append(text)
        if runtime:
            self.had_runtime_error = True
        else:
            self.had_error = True

        if self.color:
            label = colored(label, "red", attrs=["bold"], force_color=True)
            shown = f"[line {line}] {label}{where}: {message}"
        else:
            shown = text
        print(shown, file=self.stream if self.stream is not None else sys.stderr)

    def error(self, line: int, message: str) -> None:
        """Reports a lexical error that has no token to point at."""
        self.report(line, "", message)

    def token_error(self, token: Token, message: str) -> None:
        """Reports a syntax error at the given token."""
        self.report(token.line, where_of(token), message)

    def lexical_error(self, error: LoxLexicalError) -> None:
        self.error(error.line, error.message)

    def parse_error(self, error: LoxParseError) -> None:
        self.token_error(error.token, error.message)

    def runtime_error(self, error: LoxRuntimeError) -> None:
        """Reports a runtime error with its line and offending lexeme."""
        self.report(error.line, f" at '{error.token.lexeme}'", error.message, runtime=True)

    def reset(self) -> None:
        """Clears the failure flags, e.g. between REPL lines. Diagnostics are kept."""
        self.had_error = False
        self.had_runtime_error = False


__all__ = [
    "ErrorReporter",
    "LoxError",
    "LoxLexicalError",
    "LoxParseError",
    "LoxRuntimeError",
    "where_of",
]
