"""
Lox Language Parser

Parses Lox tokens into a list of statement nodes by recursive descent.

Grammar (lowest to highest precedence)
--------------------------------------
    program     := declaration* EOF
    declaration := varDecl | statement
    varDecl     := "var" IDENTIFIER ("=" expression)? ";"
    statement   := printStmt | block | exprStmt
    printStmt   := "print" expression ";"
    block       := "{" declaration* "}"
    exprStmt    := expression ";"
    expression  := assignment
    assignment  := IDENTIFIER "=" assignment | equality
    equality    := comparison (("!=" | "==") comparison)*
    comparison  := term ((">" | ">=" | "<" | "<=") term)*
    term        := factor (("-" | "+") factor)*
    factor      := unary (("/" | "*") unary)*
    unary       := ("!" | "-") unary | primary
    primary     := NUMBER | STRING | "true" | "false" | "nil"
                 | IDENTIFIER | "(" expression ")"

Binary operators are left-associative; assignment is right-associative.

Parser Behavior
---------------
- Best-effort: a malformed statement is reported, skipped, and parsing resumes
  at the next statement boundary (see `Parser.synchronize`).
- An invalid assignment target is reported at the `=` token without unwinding,
  so the surrounding statement still parses.
- `parse()` never raises; diagnostics are kept in `Parser.errors` and handed to
  the `ErrorReporter`.

Entry Points
------------
- `parse()`: Parse a full program into a list of statements.
- `parse_expression()`: Parse one bare expression spanning the whole token stream (REPL mode).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from lox.lox_ast import (
    Assign,
    Binary,
    Block,
    Expr,
    Expression,
    Grouping,
    Literal,
    Print,
    Stmt,
    Unary,
    Var,
    Variable,
)
from lox.lox_errors import ErrorReporter, LoxParseError
from lox.lox_tokens import STATEMENT_STARTERS, Token, TokenType

logger = logging.getLogger(__name__)


class Parser:
    """
    Lox Parser Class

    Transforms a list of lexical tokens into statement nodes. The token list is
    expected to end with an EOF token, as produced by the lexer; one is appended
    if missing.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream to be parsed.
    position : int
        Index of the next token to consume.
    reporter : ErrorReporter
        Sink for syntax diagnostics.
    errors : list[LoxParseError]
        Every syntax error found, including non-fatal invalid assignment targets.

    Raises
    ------
    Nothing from `parse()`. `LoxParseError` is raised internally and caught at
    the declaration level, which is where recovery happens.
    """

    def __init__(self, tokens: list[Token], reporter: ErrorReporter | None = None) -> None:
        if not tokens or tokens[-1].type != TokenType.EOF:
            line = tokens[-1].line if tokens else 1
            tokens = list(tokens) + [Token(TokenType.EOF, "", None, line)]
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.errors: list[LoxParseError] = []

    # Token stream helpers

    def current(self) -> Token:
        return self.tokens[self.position]

    def previous(self) -> Token:
        return self.tokens[self.position - 1]

    def at_end(self) -> bool:
        return self.current().type == TokenType.EOF

    def advance(self) -> Token:
        """Consumes the current token and returns it. Never moves past EOF."""
        if not self.at_end():
            self.position += 1
        return self.previous()

    def check(self, type_: TokenType) -> bool:
        if self.at_end():
            return False
        return self.current().type == type_

    def match(self, *types: TokenType) -> bool:
        for type_ in types:
            if self.check(type_):
                self.advance()
                return True
        return False

    def consume(self, type_: TokenType, message: str) -> Token:
        if self.check(type_):
            return self.advance()
        raise self.error(self.current(), message)

    def error(self, token: Token, message: str) -> LoxParseError:
        """Records and reports a syntax error, returning it for the caller to raise or drop."""
        err = LoxParseError(token, message)
        self.errors.append(err)
        self.reporter.parse_error(err)
        logger.debug("parse error at line %d: %s", token.line, message)
        return err

    def synchronize(self) -> None:
        """Discards tokens until a likely statement boundary.

        A boundary is either just past a semicolon or right before a keyword
        that starts a statement.
        """
        self.advance()
        while not self.at_end():
            if self.previous().type == TokenType.SEMICOLON:
                break
            if self.current().type in STATEMENT_STARTERS:
                break
            self.advance()
        logger.debug("resynchronized at token %d (%s)", self.position, self.current().type.name)

    # Entry points

    def parse(self) -> list[Stmt]:
        """Parse a full Lox program and return its statements, skipping broken ones."""
        statements: list[Stmt] = []
        while not self.at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    def parse_expression(self) -> Expr | None:
        """Parse a single expression that must consume every remaining token.

        Returns:
            Expr | None: The expression, or None if any syntax error was reported.
        """
        try:
            expr = self.expression()
            if not self.at_end():
                raise self.error(self.current(), "Expect end of expression.")
        except LoxParseError:
            return None
        # Invalid assignment targets are reported without raising.
        return None if self.errors else expr

    # Statements

    def declaration(self) -> Stmt | None:
        try:
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except LoxParseError:
            self.synchronize()
            return None

    def var_declaration(self) -> Stmt:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self) -> Stmt:
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(tuple(self.block()))
        return self.expression_statement()

    def print_statement(self) -> Stmt:
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def expression_statement(self) -> Stmt:
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    def block(self) -> list[Stmt]:
        """Parse declarations up to the closing brace, which is consumed."""
        statements: list[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.equality()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # Reported without unwinding; the left side is returned as-is.
            self.error(equals, "Invalid assignment target.")

        return expr

    def binary_level(self, operand: Callable[[], Expr], *operators: TokenType) -> Expr:
        """Parses one left-associative precedence level of binary operators."""
        expr: Expr = operand()
        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def equality(self) -> Expr:
        return self.binary_level(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self) -> Expr:
        return self.binary_level(
            self.term,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        )

    def term(self) -> Expr:
        return self.binary_level(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self) -> Expr:
        return self.binary_level(self.unary, TokenType.SLASH, TokenType.STAR)

    def unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.primary()

    def primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise self.error(self.current(), "Expect expression.")


def parse(tokens: list[Token], reporter: ErrorReporter | None = None) -> list[Stmt]:
    """Parses `tokens` into statements, reporting syntax errors to `reporter`."""
    return Parser(tokens, reporter).parse()


__all__ = ["Parser", "parse"]
