"""
pickaxe/lexer.py

Tokenizer (lexer) for the Pickaxe query subset.

Responsibilities:
- Convert statement text into a list of tokens with line/column positions
- Recognize keywords, identifiers, literals, and the few symbols the grammar uses
- Provide reliable error messages for unexpected characters and unterminated strings

Notes:
- String literals use single quotes: 'hello'
- Booleans: true/false (case-insensitive)
- NULL is tokenized as its own type; the parser decides where it is valid.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .errors import CompileError, Position


class TokenType(Enum):
    """Token categories recognized by the lexer."""
    EOF = auto()

    # Identifiers + literals
    IDENT = auto()
    INT = auto()
    STRING = auto()
    BOOL = auto()
    NULL = auto()

    # Symbols
    LPAREN = auto()   # (
    RPAREN = auto()   # )
    COMMA = auto()    # ,
    SEMI = auto()     # ;

    # Keywords
    SELECT = auto()
    VALUES = auto()
    AS = auto()
    SLEEP = auto()
    RAISE = auto()


KEYWORDS: dict[str, TokenType] = {
    "SELECT": TokenType.SELECT,
    "VALUES": TokenType.VALUES,
    "AS": TokenType.AS,
    "SLEEP": TokenType.SLEEP,
    "RAISE": TokenType.RAISE,
}

SYMBOLS: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    ";": TokenType.SEMI,
}


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    Attributes:
        typ: TokenType
        lexeme: The original text fragment
        value: Parsed value for literals/idents:
               - IDENT -> str
               - INT -> int
               - STRING -> str (without quotes)
               - BOOL -> bool
               - NULL -> None
        pos: Position in input (line/col)
    """
    typ: TokenType
    lexeme: str
    value: object | None
    pos: Position


def is_digit(ch: str) -> bool:
    """ASCII digits only; str.isdigit() also accepts e.g. superscripts."""
    return "0" <= ch <= "9"


def tokenize(source: str) -> list[Token]:
    """
    Tokenize statement text into a list of Token objects.

    Args:
        source: Raw statement text.

    Returns:
        List of Token, always terminated with EOF token.

    Raises:
        CompileError: for unexpected characters or unterminated strings.
    """
    tokens: list[Token] = []
    i = 0
    line = 1
    col = 1

    def cur_pos() -> Position:
        return Position(line=line, col=col)

    def advance(n: int = 1) -> None:
        """Advance the cursor by n characters while tracking line/column."""
        nonlocal i, line, col
        for _ in range(n):
            if i >= len(source):
                return
            ch = source[i]
            i += 1
            if ch == "\n":
                line += 1
                col = 1
            else:
                col += 1

    while i < len(source):
        ch = source[i]

        if ch.isspace():
            advance(1)
            continue

        # Line comment: -- ... (to end of line)
        if source.startswith("--", i):
            while i < len(source) and source[i] != "\n":
                advance(1)
            continue

        if ch in SYMBOLS:
            tokens.append(Token(SYMBOLS[ch], ch, None, cur_pos()))
            advance(1)
            continue

        if ch == "'":
            start = cur_pos()
            advance(1)
            buf: list[str] = []
            while True:
                if i >= len(source):
                    raise CompileError("Unterminated string literal", start)
                c = source[i]
                if c == "'":
                    advance(1)
                    break
                buf.append(c)
                advance(1)
            s = "".join(buf)
            tokens.append(Token(TokenType.STRING, f"'{s}'", s, start))
            continue

        if is_digit(ch) or (ch == "-" and i + 1 < len(source) and is_digit(source[i + 1])):
            start = cur_pos()
            j = i + 1
            while j < len(source) and is_digit(source[j]):
                j += 1
            lex = source[i:j]
            try:
                value = int(lex)
            except ValueError:
                # e.g. more digits than int() accepts
                raise CompileError("Invalid integer literal", start) from None
            tokens.append(Token(TokenType.INT, lex, value, start))
            advance(j - i)
            continue

        if ch.isalpha() or ch == "_":
            start = cur_pos()
            j = i
            while j < len(source) and (source[j].isalnum() or source[j] == "_"):
                j += 1

            lex = source[i:j]
            upper = lex.upper()

            if upper == "TRUE":
                tokens.append(Token(TokenType.BOOL, lex, True, start))
            elif upper == "FALSE":
                tokens.append(Token(TokenType.BOOL, lex, False, start))
            elif upper == "NULL":
                tokens.append(Token(TokenType.NULL, lex, None, start))
            elif upper in KEYWORDS:
                tokens.append(Token(KEYWORDS[upper], lex, upper, start))
            else:
                tokens.append(Token(TokenType.IDENT, lex, lex, start))

            advance(j - i)
            continue

        raise CompileError(f"Unexpected character: {ch!r}", cur_pos())

    tokens.append(Token(TokenType.EOF, "", None, Position(line=line, col=col)))
    return tokens
