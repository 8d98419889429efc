"""
Renders Lox ASTs as parenthesized prefix text.

`AstPrinter` turns a parsed tree back into a compact, unambiguous form that
makes grouping and precedence visible, e.g. `1 + 2 * 3` becomes
`(+ 1 (* 2 3))`. It backs the CLI's `--ast` mode and is handy in tests.

Forms:
    - Literal: `nil`, `true`, `3`, `2.5`, `"text"`
    - Grouping: `(group e)`
    - Unary / Binary: `(op e)` / `(op l r)`
    - Variable: its name
    - Assign: `(= name e)`
    - Expression statement: `(; e)`
    - Print: `(print e)`
    - Var: `(var name)` or `(var name e)`
    - Block: `(block s1 s2 ...)`

Raises:
    TypeError: If handed an object that is not a known AST node.
"""

from collections.abc import Sequence

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
from lox.lox_interpreter import stringify


class AstPrinter:
    """Produces the parenthesized text form of expressions and statements."""

    def print(self, node: Expr | Stmt) -> str:
        if isinstance(node, Stmt):
            return self.print_statement(node)
        return self.print_expression(node)

    def print_program(self, statements: Sequence[Stmt]) -> str:
        """Prints one statement per line."""
        return "\n".join(self.print_statement(s) for s in statements)

    def parenthesize(self, name: str, *parts: Expr | Stmt) -> str:
        inner = " ".join([name] + [self.print(p) for p in parts])
        return f"({inner})"

    def print_expression(self, expr: Expr) -> str:
        match expr:
            case Literal(value=str() as text):
                return f'"{text}"'
            case Literal(value=value):
                return stringify(value)
            case Grouping(expression=inner):
                return self.parenthesize("group", inner)
            case Unary(operator=operator, right=right):
                return self.parenthesize(operator.lexeme, right)
            case Binary(left=left, operator=operator, right=right):
                return self.parenthesize(operator.lexeme, left, right)
            case Variable(name=name):
                return name.lexeme
            case Assign(name=name, value=value_expr):
                return self.parenthesize(f"= {name.lexeme}", value_expr)
        raise TypeError(f"No printer for expression node: {expr!r}")

    def print_statement(self, stmt: Stmt) -> str:
        match stmt:
            case Expression(expression=expr):
                return self.parenthesize(";", expr)
            case Print(expression=expr):
                return self.parenthesize("print", expr)
            case Var(name=name, initializer=Expr() as initializer):
                return self.parenthesize(f"var {name.lexeme}", initializer)
            case Var(name=name):
                return f"(var {name.lexeme})"
            case Block(statements=statements):
                return self.parenthesize("block", *statements)
        raise TypeError(f"No printer for statement node: {stmt!r}")


__all__ = ["AstPrinter"]
