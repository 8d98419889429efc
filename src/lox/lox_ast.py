"""
Defines the abstract syntax tree (AST) node structure for the Lox programming language.

Expression nodes:
    Literal, Grouping, Unary, Binary, Variable, Assign

Statement nodes:
    Expression, Print, Var, Block

All nodes are frozen dataclasses: the parser builds each tree once and nothing
downstream mutates it. The evaluator and printer match on the concrete node
class rather than dispatching through visitor methods.

Each node supports `to_dict()`, a plain-dictionary form (`ASTDict`) suitable for
JSON output, debugging, and structural assertions in tests. Tokens are reduced
to their lexeme and line in that form.

Example:
    >>> Binary(Literal(1.0), Token(TokenType.PLUS, "+", None, 1), Literal(2.0)).to_dict()["kind"]
    'binary'
"""

from dataclasses import dataclass
from typing import Any, TypedDict, Union

from lox.lox_tokens import Token

Value = Union[None, bool, float, str]
"""A runtime value: Nil (None), Boolean, Number (float), or String."""


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an AST node used for serialization.

    Fields:
        kind (str): The node kind (e.g., "binary", "var", "block").
        value (Any): Literal value, for literal nodes.
        name (str): Identifier name, for variable/assign/var nodes.
        operator (str): Operator lexeme, for unary/binary nodes.
        line (int): Line of the node's defining token, where it has one.
        children (list[ASTDict]): Sub-expressions or nested statements.
    """

    kind: str
    value: Any
    name: str
    operator: str
    line: int
    children: list["ASTDict"]


class Expr:
    """Base class for expression nodes."""

    def to_dict(self) -> ASTDict:  # pragma: no cover
        raise NotImplementedError


class Stmt:
    """Base class for statement nodes."""

    def to_dict(self) -> ASTDict:  # pragma: no cover
        raise NotImplementedError


@dataclass(frozen=True)
class Literal(Expr):
    value: Value

    def to_dict(self) -> ASTDict:
        return {"kind": "literal", "value": self.value, "children": []}


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr

    def to_dict(self) -> ASTDict:
        return {"kind": "grouping", "children": [self.expression.to_dict()]}


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr

    def to_dict(self) -> ASTDict:
        return {
            "kind": "unary",
            "operator": self.operator.lexeme,
            "line": self.operator.line,
            "children": [self.right.to_dict()],
        }


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    def to_dict(self) -> ASTDict:
        return {
            "kind": "binary",
            "operator": self.operator.lexeme,
            "line": self.operator.line,
            "children": [self.left.to_dict(), self.right.to_dict()],
        }


@dataclass(frozen=True)
class Variable(Expr):
    name: Token

    def to_dict(self) -> ASTDict:
        return {"kind": "variable", "name": self.name.lexeme, "line": self.name.line, "children": []}


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr

    def to_dict(self) -> ASTDict:
        return {
            "kind": "assign",
            "name": self.name.lexeme,
            "line": self.name.line,
            "children": [self.value.to_dict()],
        }


@dataclass(frozen=True)
class Expression(Stmt):
    """An expression evaluated for its side effects; the value is discarded."""

    expression: Expr

    def to_dict(self) -> ASTDict:
        return {"kind": "expression", "children": [self.expression.to_dict()]}


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr

    def to_dict(self) -> ASTDict:
        return {"kind": "print", "children": [self.expression.to_dict()]}


@dataclass(frozen=True)
class Var(Stmt):
    """A variable declaration. A missing initializer means the variable starts as nil."""

    name: Token
    initializer: Expr | None = None

    def to_dict(self) -> ASTDict:
        return {
            "kind": "var",
            "name": self.name.lexeme,
            "line": self.name.line,
            "children": [] if self.initializer is None else [self.initializer.to_dict()],
        }


@dataclass(frozen=True)
class Block(Stmt):
    statements: tuple[Stmt, ...] = ()

    def to_dict(self) -> ASTDict:
        return {"kind": "block", "children": [s.to_dict() for s in self.statements]}


__all__ = [
    "ASTDict",
    "Assign",
    "Binary",
    "Block",
    "Expr",
    "Expression",
    "Grouping",
    "Literal",
    "Print",
    "Stmt",
    "Unary",
    "Value",
    "Var",
    "Variable",
]
