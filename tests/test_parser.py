import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lox.lox_ast import Assign, Binary, Block, Expression, Literal, Print, Stmt, Var, Variable
from lox.lox_errors import ErrorReporter
from lox.lox_lexer import scan_tokens
from lox.lox_parser import Parser
from lox.lox_printer import AstPrinter
from lox.lox_tokens import Token, TokenType


def parse(source: str) -> tuple[list[Stmt], Parser]:
    reporter = ErrorReporter(stream=io.StringIO())
    parser = Parser(scan_tokens(source, reporter), reporter)
    return parser.parse(), parser


def show(source: str) -> str:
    statements, parser = parse(source)
    assert parser.errors == []
    return AstPrinter().print_program(statements)


def messages(parser: Parser) -> list[str]:
    return parser.reporter.diagnostics


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 + 2 * 3;", "(; (+ 1 (* 2 3)))"),
        ("(1 + 2) * 3;", "(; (* (group (+ 1 2)) 3))"),
        ("1 - 2 - 3;", "(; (- (- 1 2) 3))"),
        ("8 / 4 / 2;", "(; (/ (/ 8 4) 2))"),
        ("-1 * 2;", "(; (* (- 1) 2))"),
        ("!!true;", "(; (! (! true)))"),
        ("1 < 2 == 3 >= 4;", "(; (== (< 1 2) (>= 3 4)))"),
        ("1 != 2 == false;", "(; (== (!= 1 2) false))"),
        ("a = b = 3;", "(; (= a (= b 3)))"),
        ("a = 1 + 2;", "(; (= a (+ 1 2)))"),
        ('print "hi" + nil;', '(print (+ "hi" nil))'),
        ("var x;", "(var x)"),
        ("var x = 2.5;", "(var x 2.5)"),
        ("{ var y = 1; print y; }", "(block (var y 1) (print y))"),
        ("{}", "(block)"),
        ("{ { 1; } }", "(block (block (; 1)))"),
    ],
)
def test_parse_structure(source: str, expected: str) -> None:
    assert show(source) == expected


def test_parse_produces_nodes() -> None:
    statements, _ = parse("var a = 1; a = 2;")
    assert isinstance(statements[0], Var)
    assert statements[0].initializer == Literal(1.0)
    assert isinstance(statements[1], Expression)
    assign = statements[1].expression
    assert isinstance(assign, Assign)
    assert assign.name.lexeme == "a"


def test_empty_program() -> None:
    statements, parser = parse("")
    assert statements == []
    assert parser.errors == []


def test_missing_semicolon_at_end() -> None:
    statements, parser = parse("print 1")
    assert statements == []
    assert messages(parser) == ["[line 1] Error at end: Expect ';' after value."]


@pytest.mark.parametrize(
    "source,diagnostic",
    [
        ("1 + 2", "[line 1] Error at end: Expect ';' after expression."),
        ("var 1 = 2;", "[line 1] Error at '1': Expect variable name."),
        ("var x = 1", "[line 1] Error at end: Expect ';' after variable declaration."),
        ("(1 + 2;", "[line 1] Error at ';': Expect ')' after expression."),
        ("{ print 1;", "[line 1] Error at end: Expect '}' after block."),
        ("print ;", "[line 1] Error at ';': Expect expression."),
        ("\n\n+;", "[line 3] Error at '+': Expect expression."),
    ],
)
def test_syntax_error_messages(source: str, diagnostic: str) -> None:
    _, parser = parse(source)
    assert messages(parser) == [diagnostic]
    assert parser.reporter.had_error


def test_invalid_assignment_target_keeps_tree() -> None:
    statements, parser = parse("1 = 2; print 3;")
    assert messages(parser) == ["[line 1] Error at '=': Invalid assignment target."]
    assert statements[0] == Expression(Literal(1.0))
    assert isinstance(statements[1], Print)


def test_grouped_variable_is_not_an_assignment_target() -> None:
    _, parser = parse("(a) = 1;")
    assert messages(parser) == ["[line 1] Error at '=': Invalid assignment target."]


def test_synchronizes_after_semicolon() -> None:
    statements, parser = parse("print 1; print ; print 3;")
    assert len(parser.errors) == 1
    assert AstPrinter().print_program(statements) == "(print 1)\n(print 3)"


def test_synchronizes_before_statement_keyword() -> None:
    statements, parser = parse("1 + + var x = 2; print x;")
    assert len(parser.errors) == 1
    assert AstPrinter().print_program(statements) == "(var x 2)\n(print x)"


def test_one_diagnostic_per_broken_statement() -> None:
    statements, parser = parse("print 1 print 2; var = ; print 3;")
    assert [e.message for e in parser.errors] == [
        "Expect ';' after value.",
        "Expect variable name.",
    ]
    assert AstPrinter().print_program(statements) == "(print 3)"


def test_error_inside_block_recovers_within_block() -> None:
    statements, parser = parse("{ print ; print 2; } print 3;")
    assert len(parser.errors) == 1
    assert AstPrinter().print_program(statements) == "(block (print 2))\n(print 3)"


def test_parse_never_raises_on_garbage() -> None:
    statements, parser = parse(") } ; = = print")
    assert parser.errors
    assert statements == []


def test_missing_eof_token_is_appended() -> None:
    tokens = [
        Token(TokenType.PRINT, "print", None, 1),
        Token(TokenType.NUMBER, "1", 1.0, 1),
        Token(TokenType.SEMICOLON, ";", None, 1),
    ]
    parser = Parser(tokens, ErrorReporter(stream=io.StringIO()))
    assert parser.parse() == [Print(Literal(1.0))]


def test_parse_expression_entrypoint() -> None:
    reporter = ErrorReporter(stream=io.StringIO())
    expr = Parser(scan_tokens("x == 1", reporter), reporter).parse_expression()
    assert isinstance(expr, Binary)
    assert isinstance(expr.left, Variable)


def test_parse_expression_rejects_trailing_tokens() -> None:
    reporter = ErrorReporter(stream=io.StringIO())
    expr = Parser(scan_tokens("1 2", reporter), reporter).parse_expression()
    assert expr is None
    assert reporter.diagnostics == ["[line 1] Error at '2': Expect end of expression."]


def test_block_statements_are_a_tuple() -> None:
    statements, _ = parse("{ print 1; }")
    assert isinstance(statements[0], Block)
    assert isinstance(statements[0].statements, tuple)


SNIPPETS = [
    "print 1 + 2;",
    "var a = (3);",
    "a = -b * c;",
    "{ var z; }",
    "print ;",
    "1 = 2;",
    "var",
    '"s" + "t";',
    "}",
]


@given(st.lists(st.sampled_from(SNIPPETS)))  # type: ignore[misc]
def test_parsing_is_deterministic(snippets: list[str]) -> None:
    source = "\n".join(snippets)
    first, p1 = parse(source)
    second, p2 = parse(source)
    assert first == second
    assert messages(p1) == messages(p2)


def test_parse_expression_rejects_invalid_assignment_target() -> None:
    reporter = ErrorReporter(stream=io.StringIO())
    expr = Parser(scan_tokens("a = 1 = 2", reporter), reporter).parse_expression()
    assert expr is None
    assert reporter.diagnostics == ["[line 1] Error at '=': Invalid assignment target."]
