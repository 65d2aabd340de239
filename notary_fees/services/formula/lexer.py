"""
Tokenizer for fee formulas.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from notary_fees.core.exceptions import FormulaSyntaxError

__all__ = ["TokenType", "Token", "tokenize"]


class TokenType(str, Enum):
    NUMBER = "NUMBER"
    IDENT = "IDENT"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    EOF = "EOF"


_SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str
    position: int


def _is_ident_start(char: str) -> bool:
    return char == "_" or ("a" <= char.lower() <= "z")


def _is_ident_part(char: str) -> bool:
    return _is_ident_start(char) or char.isdigit()


def tokenize(source: str) -> List[Token]:
    """Split a formula into tokens, ending with an EOF token."""
    tokens: List[Token] = []
    index = 0
    length = len(source)

    while index < length:
        char = source[index]

        if char in " \t\r\n":
            index += 1
            continue

        if char in _SINGLE_CHAR_TOKENS:
            tokens.append(Token(_SINGLE_CHAR_TOKENS[char], char, index))
            index += 1
            continue

        if char.isascii() and (char.isdigit() or char == "."):
            start = index
            while index < length and source[index].isascii() and source[index].isdigit():
                index += 1
            if index < length and source[index] == ".":
                index += 1
                while index < length and source[index].isascii() and source[index].isdigit():
                    index += 1
            text = source[start:index]
            if text == ".":
                raise FormulaSyntaxError("Unexpected character '.'", token=".", position=start)
            tokens.append(Token(TokenType.NUMBER, text, start))
            continue

        if char.isascii() and _is_ident_start(char):
            start = index
            while index < length and source[index].isascii() and _is_ident_part(source[index]):
                index += 1
            tokens.append(Token(TokenType.IDENT, source[start:index], start))
            continue

        raise FormulaSyntaxError(f"Unexpected character '{char}'", token=char, position=index)

    tokens.append(Token(TokenType.EOF, "", length))
    return tokens
