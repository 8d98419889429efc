"""
Lexical analyzer for the Lox programming language.

This module converts raw source text into a token sequence:

Classes:
    CharacterStream: Stream abstraction for reading characters with line tracking.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Functions:
    scan_tokens(source, reporter=None): Scan a whole program into a token list.

Features:
    - Skips spaces, tabs, carriage returns, newlines, and `//` line comments
    - Recognizes one/two-character operators with a single character of lookahead
    - Recognizes:
        * Identifiers and keywords (ASCII letters, digits, underscore)
        * Numbers (digits with an optional fractional part)
        * Strings (double-quoted, may span lines, no escape sequences)
        * Punctuation and operators

Errors:
    Unexpected characters and unterminated strings are reported to the
    `ErrorReporter` and recorded in `Lexer.errors`; scanning always continues
    and the token list always ends with an EOF token.

Example:
    >>> [str(t) for t in scan_tokens("print 1;")]
    ['PRINT print null', 'NUMBER 1 1.0', 'SEMICOLON ; null', 'EOF  null']

Exports:
    - CharacterStream
    - Lexer
    - scan_tokens
"""

import logging

from lox.lox_errors import ErrorReporter, LoxLexicalError
from lox.lox_tokens import (
    KEYWORDS,
    ONE_OR_TWO_CHAR_TOKENS,
    SINGLE_CHAR_TOKENS,
    Token,
    TokenType,
)

logger = logging.getLogger(__name__)


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def is_alphanumeric(ch: str) -> bool:
    return is_alpha(ch) or is_digit(ch)


class CharacterStream:
    """
    A utility for reading characters from a string source with line tracking.

    The stream also remembers where the current token started, so the lexer can
    slice the exact lexeme out of the source once the token is complete.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        start (int): Index where the token being scanned began.
    """

    def __init__(self, source: str, position: int = 0, line: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.start = position

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Returns:
            str: The next character.

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise IndexError(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Args:
            offset (int, optional): Number of characters to look ahead. Defaults to 0.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def match(self, expected: str) -> bool:
        """Consumes the next character only if it equals `expected`."""
        if self.peek() != expected:
            return False
        self.next()
        return True

    def mark(self) -> None:
        """Marks the current position as the start of a new lexeme."""
        self.start = self.position

    def lexeme(self) -> str:
        """Returns the source text from the last mark up to the current position."""
        return self.source[self.start : self.position]

    def end_of_file(self) -> bool:
        """Checks if the stream has reached the end of the source input.

        Returns:
            bool: True if the stream has consumed all characters, False otherwise.
        """
        return self.position >= len(self.source)


class Lexer:
    """Lexical analyzer for the Lox language.

    The Lexer takes a CharacterStream and converts it into a stream of Token objects.
    Errors never stop the scan: they are reported and the offending characters skipped.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        reporter (ErrorReporter): Sink for lexical diagnostics.
        errors (list[LoxLexicalError]): Every lexical error found so far.
    """

    def __init__(self, stream: CharacterStream, reporter: ErrorReporter | None = None) -> None:
        self.stream = stream
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.errors: list[LoxLexicalError] = []

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def error(self, line: int, message: str) -> None:
        err = LoxLexicalError(line, message)
        self.errors.append(err)
        self.reporter.lexical_error(err)

    def make_token(self, type_: TokenType, literal: float | str | None = None, line: int | None = None) -> Token:
        return Token(type_, self.stream.lexeme(), literal, self.stream.line if line is None else line)

    def skip_whitespace(self) -> None:
        """Skips all whitespace and `//` comments in the stream."""
        while not self.stream.end_of_file():
            ch = self.peek()
            if ch in " \t\r\n":
                self.advance()
            elif ch == "/" and self.stream.peek(1) == "/":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        """Advances through the stream until the end of a comment line."""
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def scan_identifier(self) -> Token:
        while is_alphanumeric(self.peek()):
            self.advance()
        text = self.stream.lexeme()
        return self.make_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def scan_number(self) -> Token:
        while is_digit(self.peek()):
            self.advance()
        # A trailing dot is left for the next token.
        if self.peek() == "." and is_digit(self.stream.peek(1)):
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        return self.make_token(TokenType.NUMBER, float(self.stream.lexeme()))

    def scan_string(self) -> Token | None:
        """Scans a string literal whose opening quote was already consumed.

        Returns:
            Token | None: The STRING token, or None if the literal is unterminated.
        """
        start_line = self.stream.line
        while not self.stream.end_of_file() and self.peek() != '"':
            self.advance()
        if self.stream.end_of_file():
            self.error(self.stream.line, "Unterminated string.")
            return None
        self.advance()
        text = self.stream.lexeme()
        return self.make_token(TokenType.STRING, text[1:-1], line=start_line)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Unexpected characters and unterminated strings are reported and skipped,
        so this always returns a real token, ending with EOF.

        Returns:
            Token: The next token parsed from the stream.
        """
        while True:
            self.skip_whitespace()
            self.stream.mark()
            if self.stream.end_of_file():
                return Token(TokenType.EOF, "", None, self.stream.line)

            line = self.stream.line
            ch = self.advance()

            if ch in SINGLE_CHAR_TOKENS:
                return self.make_token(SINGLE_CHAR_TOKENS[ch])

            if ch in ONE_OR_TWO_CHAR_TOKENS:
                alone, with_equal = ONE_OR_TWO_CHAR_TOKENS[ch]
                return self.make_token(with_equal if self.stream.match("=") else alone)

            if ch == "/":
                return self.make_token(TokenType.SLASH)

            if ch == '"':
                token = self.scan_string()
                if token is not None:
                    return token
                continue

            if is_digit(ch):
                return self.scan_number()

            if is_alpha(ch):
                return self.scan_identifier()

            self.error(line, "Unexpected character.")

    def scan_tokens(self) -> list[Token]:
        """Scans the remainder of the stream into a list ending with EOF."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == TokenType.EOF:
                break
        logger.debug("scanned %d tokens with %d lexical errors", len(tokens), len(self.errors))
        return tokens


def scan_tokens(source: str, reporter: ErrorReporter | None = None) -> list[Token]:
    """Scans `source` into tokens, reporting lexical errors to `reporter`."""
    return Lexer(CharacterStream(source), reporter).scan_tokens()


__all__ = ["CharacterStream", "Lexer", "scan_tokens"]
