"""
Tree-walking evaluator for the Lox language.

The `Interpreter` executes statement lists against one persistent
`Environment`. Expressions are evaluated by structural pattern matching on the
AST node classes; each operator checks its operand types explicitly, so the
accepted type set of every operator is spelled out in one place.

Runtime values are plain Python objects:

    ======== ===========
    Lox      Python
    ======== ===========
    nil      None
    boolean  bool
    number   float
    string   str
    ======== ===========

`bool` is a subclass of `int` in Python but never counts as a number here.

Failure semantics:
    Type violations and undefined variables raise `LoxRuntimeError`.
    `Interpreter.execute` catches it, reports it, stops running the remaining
    statements, and returns it. Effects already applied (printed output, defined
    variables) are kept.

Example:
    >>> out: list[str] = []
    >>> interp = Interpreter(write=out.append)
    >>> interp.execute(parse(scan_tokens("print 1 + 2 * 3;")))
    >>> out
    ['7']
"""

import logging
import math
from collections.abc import Callable, Sequence

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
    Value,
    Var,
    Variable,
)
from lox.lox_environment import Environment
from lox.lox_errors import ErrorReporter, LoxRuntimeError
from lox.lox_tokens import Token, TokenType

logger = logging.getLogger(__name__)


def is_number(value: Value) -> bool:
    return isinstance(value, float) and not isinstance(value, bool)


def is_truthy(value: Value) -> bool:
    """nil and false are falsy; every other value, including 0 and "", is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left: Value, right: Value) -> bool:
    """Value equality without coercion.

    nil equals only nil. Numbers compare by bit pattern: NaN equals NaN and
    0 differs from -0.
    """
    if left is None or right is None:
        return left is None and right is None
    if type(left) is not type(right):
        return False
    if isinstance(left, float) and isinstance(right, float):
        if math.isnan(left) or math.isnan(right):
            return math.isnan(left) and math.isnan(right)
        return left == right and math.copysign(1.0, left) == math.copysign(1.0, right)
    return left == right


def stringify(value: Value) -> str:
    """Renders a runtime value the way `print` shows it."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = repr(value)
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return value


class Interpreter:
    """Executes Lox statements against a persistent root environment.

    Attributes:
        environment (Environment): Scope chain; its root frame outlives every `execute` call.
        write (Callable[[str], None]): Output sink receiving the rendered text of each `print`.
        reporter (ErrorReporter): Sink for runtime diagnostics.
    """

    def __init__(
        self,
        write: Callable[[str], None] | None = None,
        reporter: ErrorReporter | None = None,
        environment: Environment | None = None,
    ) -> None:
        self.environment = environment if environment is not None else Environment()
        self.write: Callable[[str], None] = write if write is not None else print
        self.reporter = reporter if reporter is not None else ErrorReporter()

    def execute(self, statements: Sequence[Stmt]) -> LoxRuntimeError | None:
        """Runs `statements` in order.

        Returns:
            LoxRuntimeError | None: The error that aborted execution, or None if
            every statement ran.
        """
        try:
            for stmt in statements:
                logger.debug("executing %s", type(stmt).__name__)
                self.execute_statement(stmt)
        except LoxRuntimeError as err:
            logger.debug("runtime error aborted execution at line %d", err.line)
            self.reporter.runtime_error(err)
            return err
        return None

    def execute_statement(self, stmt: Stmt) -> None:
        match stmt:
            case Expression(expression=expr):
                self.evaluate(expr)
            case Print(expression=expr):
                self.write(stringify(self.evaluate(expr)))
            case Var(name=name, initializer=initializer):
                value = None if initializer is None else self.evaluate(initializer)
                self.environment.define(name.lexeme, value)
            case Block(statements=statements):
                with self.environment.scope():
                    for inner in statements:
                        self.execute_statement(inner)
            case _:
                raise TypeError(f"Unknown statement node: {stmt!r}")

    def evaluate(self, expr: Expr) -> Value:
        """Evaluates one expression. Raises `LoxRuntimeError` on failure."""
        match expr:
            case Literal(value=value):
                return value
            case Grouping(expression=inner):
                return self.evaluate(inner)
            case Unary(operator=operator, right=right):
                return self.evaluate_unary(operator, self.evaluate(right))
            case Binary(left=left, operator=operator, right=right):
                lhs = self.evaluate(left)
                rhs = self.evaluate(right)
                return self.evaluate_binary(operator, lhs, rhs)
            case Variable(name=name):
                return self.environment.get(name)
            case Assign(name=name, value=value_expr):
                return self.environment.assign(name, self.evaluate(value_expr))
            case _:
                raise TypeError(f"Unknown expression node: {expr!r}")

    def evaluate_unary(self, operator: Token, right: Value) -> Value:
        match operator.type:
            case TokenType.BANG:
                return not is_truthy(right)
            case TokenType.MINUS:
                if not is_number(right):
                    raise LoxRuntimeError(operator, "Operand must be a number.")
                return -right  # type: ignore[operator]
        raise TypeError(f"Unknown unary operator: {operator.lexeme}")

    def evaluate_binary(self, operator: Token, left: Value, right: Value) -> Value:
        match operator.type:
            case TokenType.EQUAL_EQUAL:
                return is_equal(left, right)
            case TokenType.BANG_EQUAL:
                return not is_equal(left, right)
            case TokenType.PLUS:
                if is_number(left) and is_number(right):
                    return left + right  # type: ignore[operator]
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise LoxRuntimeError(operator, "Operands must be two numbers or two strings.")

        if not (is_number(left) and is_number(right)):
            raise LoxRuntimeError(operator, "Operands must be numbers.")
        a: float = left  # type: ignore[assignment]
        b: float = right  # type: ignore[assignment]

        match operator.type:
            case TokenType.MINUS:
                return a - b
            case TokenType.STAR:
                return a * b
            case TokenType.SLASH:
                return divide(a, b)
            case TokenType.GREATER:
                return a > b
            case TokenType.GREATER_EQUAL:
                return a >= b
            case TokenType.LESS:
                return a < b
            case TokenType.LESS_EQUAL:
                return a <= b
        raise TypeError(f"Unknown binary operator: {operator.lexeme}")


def divide(a: float, b: float) -> float:
    """IEEE-754 division: a zero divisor gives an infinity or NaN instead of raising."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


__all__ = ["Interpreter", "divide", "is_equal", "is_truthy", "stringify"]
