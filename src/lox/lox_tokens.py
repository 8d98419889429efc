"""
Token vocabulary for the Lox language.

This module holds everything the lexer and parser agree on at the token level:

Classes:
    TokenType: Enumeration of every token category the lexer can produce.
    Token: An immutable lexical token with its raw lexeme, decoded literal, and line.

Constants:
    KEYWORDS: Reserved words mapped to their token types.
    SINGLE_CHAR_TOKENS: Punctuation that is always a one-character token.
    ONE_OR_TWO_CHAR_TOKENS: Operators that may be followed by `=` to form a second token type.
    STATEMENT_STARTERS: Token types the parser treats as statement boundaries during recovery.

Example:
    >>> Token(TokenType.NUMBER, "42", 42.0, 1)
    Token(NUMBER, '42', 42.0, line=1)

Exports:
    - TokenType
    - Token
    - KEYWORDS
    - SINGLE_CHAR_TOKENS
    - ONE_OR_TWO_CHAR_TOKENS
    - STATEMENT_STARTERS
"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """All token types recognized by the Lox lexer."""

    # Single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS: dict[str, TokenType] = {
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# char -> (type alone, type when followed by "=")
ONE_OR_TWO_CHAR_TOKENS: dict[str, tuple[TokenType, TokenType]] = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

STATEMENT_STARTERS: frozenset[TokenType] = frozenset(
    {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }
)


@dataclass(frozen=True)
class Token:
    """Represents a single lexical token in the Lox language.

    Attributes:
        type (TokenType): The token's category.
        lexeme (str): The exact source substring the token was scanned from.
        literal (float | str | None): Decoded value for NUMBER and STRING tokens, else None.
        line (int): The 1-based line number where the token begins.
    """

    type: TokenType
    lexeme: str
    literal: float | str | None = None
    line: int = 1

    def __str__(self) -> str:
        """Renders the token the way the token dump prints it: `TYPE lexeme literal`."""
        literal = "null" if self.literal is None else self.literal
        return f"{self.type.name} {self.lexeme} {literal}"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.literal!r}, line={self.line})"


__all__ = [
    "KEYWORDS",
    "ONE_OR_TWO_CHAR_TOKENS",
    "SINGLE_CHAR_TOKENS",
    "STATEMENT_STARTERS",
    "Token",
    "TokenType",
]
