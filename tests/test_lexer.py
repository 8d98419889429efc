import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lox.lox_errors import ErrorReporter
from lox.lox_lexer import CharacterStream, Lexer, scan_tokens
from lox.lox_tokens import KEYWORDS, Token, TokenType


def tokenize(source: str) -> tuple[list[Token], ErrorReporter]:
    reporter = ErrorReporter(stream=io.StringIO())
    return scan_tokens(source, reporter), reporter


def types(source: str) -> list[TokenType]:
    tokens, _ = tokenize(source)
    return [t.type for t in tokens]


def test_single_char_tokens() -> None:
    assert types("( ) { } , . - + ; * /") == [
        TokenType.LEFT_PAREN,
        TokenType.RIGHT_PAREN,
        TokenType.LEFT_BRACE,
        TokenType.RIGHT_BRACE,
        TokenType.COMMA,
        TokenType.DOT,
        TokenType.MINUS,
        TokenType.PLUS,
        TokenType.SEMICOLON,
        TokenType.STAR,
        TokenType.SLASH,
        TokenType.EOF,
    ]


def test_one_or_two_char_operators() -> None:
    assert types("! != = == < <= > >=") == [
        TokenType.BANG,
        TokenType.BANG_EQUAL,
        TokenType.EQUAL,
        TokenType.EQUAL_EQUAL,
        TokenType.LESS,
        TokenType.LESS_EQUAL,
        TokenType.GREATER,
        TokenType.GREATER_EQUAL,
        TokenType.EOF,
    ]


def test_operators_without_spaces() -> None:
    assert types("!===") == [TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL, TokenType.EOF]


def test_string_token() -> None:
    tokens, reporter = tokenize('"hello world"')
    assert tokens[0] == Token(TokenType.STRING, '"hello world"', "hello world", 1)
    assert not reporter.had_error


def test_multiline_string_keeps_start_line() -> None:
    tokens, _ = tokenize('"a\nb" x')
    assert tokens[0].literal == "a\nb"
    assert tokens[0].line == 1
    assert tokens[1].line == 2


def test_unterminated_string_reports_at_last_line() -> None:
    tokens, reporter = tokenize('print "abc\ndef')
    assert [t.type for t in tokens] == [TokenType.PRINT, TokenType.EOF]
    assert reporter.diagnostics == ["[line 2] Error: Unterminated string."]


def test_number_tokens() -> None:
    tokens, _ = tokenize("123 45.5")
    assert tokens[0] == Token(TokenType.NUMBER, "123", 123.0, 1)
    assert tokens[1] == Token(TokenType.NUMBER, "45.5", 45.5, 1)


def test_trailing_dot_is_not_part_of_number() -> None:
    tokens, _ = tokenize("1.")
    assert [(t.type, t.lexeme) for t in tokens] == [
        (TokenType.NUMBER, "1"),
        (TokenType.DOT, "."),
        (TokenType.EOF, ""),
    ]


def test_second_dot_ends_number() -> None:
    tokens, _ = tokenize("1.5.2")
    assert [t.lexeme for t in tokens[:3]] == ["1.5", ".", "2"]


@pytest.mark.parametrize("name", ["myVar", "_private", "UPPER", "x9", "Snake_Case_2"])
def test_identifier_token(name: str) -> None:
    tokens, reporter = tokenize(name)
    assert tokens[0] == Token(TokenType.IDENTIFIER, name, None, 1)
    assert not reporter.had_error


@pytest.mark.parametrize("word,type_", sorted(KEYWORDS.items()))
def test_keywords(word: str, type_: TokenType) -> None:
    assert types(word)[0] == type_


def test_keywords_are_case_sensitive() -> None:
    assert types("Print VAR")[:2] == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]


def test_comments_and_whitespace_are_skipped() -> None:
    tokens, _ = tokenize("  \t// a comment\r\n  123 // trailing")
    assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.EOF]
    assert tokens[0].line == 2


def test_line_tracking() -> None:
    tokens, _ = tokenize("x\n\ny\nz")
    assert [t.line for t in tokens] == [1, 3, 4, 4]


def test_unexpected_character_is_reported_and_skipped() -> None:
    tokens, reporter = tokenize("1 @ 2\n#")
    assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF]
    assert reporter.diagnostics == [
        "[line 1] Error: Unexpected character.",
        "[line 2] Error: Unexpected character.",
    ]
    assert reporter.had_error


def test_lexer_errors_are_collected() -> None:
    lexer = Lexer(CharacterStream('$ "open'), ErrorReporter(stream=io.StringIO()))
    lexer.scan_tokens()
    assert [e.message for e in lexer.errors] == [
        "Unexpected character.",
        "Unterminated string.",
    ]


def test_token_eof() -> None:
    tokens, _ = tokenize("")
    assert tokens == [Token(TokenType.EOF, "", None, 1)]


def test_token_str() -> None:
    tokens, _ = tokenize('var x = "s";')
    assert [str(t) for t in tokens] == [
        "VAR var null",
        "IDENTIFIER x null",
        "EQUAL = null",
        "STRING \"s\" s",
        "SEMICOLON ; null",
        "EOF  null",
    ]


def test_character_stream_read_past_end() -> None:
    stream = CharacterStream("a")
    assert stream.next() == "a"
    assert stream.peek() == ""
    with pytest.raises(IndexError):
        stream.next()


LEXEMES = [
    "(", ")", "{", "}", ",", ".", "-", "+", ";", "*", "/",
    "!", "!=", "=", "==", "<", "<=", ">", ">=",
    "foo", "_bar9", "Baz", "12", "3.25", '"hi there"', '""',
    "var", "nil", "print", "true", "and",
]


@given(st.lists(st.sampled_from(LEXEMES)))  # type: ignore[misc]
def test_relexing_lexemes_reconstructs_stream(lexemes: list[str]) -> None:
    tokens, reporter = tokenize(" ".join(lexemes))
    assert not reporter.had_error
    assert [t.lexeme for t in tokens[:-1]] == lexemes
    relexed, _ = tokenize(" ".join(t.lexeme for t in tokens[:-1]))
    assert relexed == tokens


@given(st.text())  # type: ignore[misc]
def test_scan_never_raises_and_ends_with_eof(source: str) -> None:
    tokens, _ = tokenize(source)
    assert tokens[-1].type == TokenType.EOF
    assert tokens == tokenize(source)[0]
