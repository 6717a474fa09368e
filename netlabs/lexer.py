"""A small lexical analyser for C-like expressions."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

DELIMITERS = frozenset(" +-*/,;%><=()[]{}")
OPERATORS = frozenset("+-*/><=")
DIGITS = frozenset("0123456789")
KEYWORDS = frozenset({
    "auto", "break", "case", "char", "const", "continue", "default", "do",
    "double", "else", "enum", "extern", "float", "for", "goto", "if",
    "int", "long", "register", "return", "short", "signed", "sizeof", "static",
    "struct", "switch", "typedef", "union", "unsigned", "void", "volatile", "while",
})
DEMO_EXPRESSIONS = ("int a = b + c", "int x=ab+bc+30+switch+ 0y ")

_END = "\0"


class TokenKind(Enum):
    OPERATOR = "Operator"
    KEYWORD = "Keyword"
    INTEGER = "Integer"
    IDENTIFIER = "Identifier"
    UNIDENTIFIED = "Unidentified"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str


def is_delimiter(char: str) -> bool:
    return len(char) == 1 and char in DELIMITERS


def is_operator(char: str) -> bool:
    return len(char) == 1 and char in OPERATORS


def is_valid_identifier(text: str) -> bool:
    """True unless the text starts with a digit or a delimiter."""
    first = text[:1]
    return first not in DIGITS and not is_delimiter(first) if first else True


def is_keyword(text: str) -> bool:
    return text in KEYWORDS


def is_integer(text: str) -> bool:
    return bool(text) and all(char in DIGITS for char in text)


def _classify(word: str) -> TokenKind:
    if is_keyword(word):
        return TokenKind.KEYWORD
    if is_integer(word):
        return TokenKind.INTEGER
    if is_valid_identifier(word):
        return TokenKind.IDENTIFIER
    return TokenKind.UNIDENTIFIED


def tokenize(text: str) -> Iterator[Token]:
    """Yield the tokens of an expression; the text ends at its first NUL."""
    text = text.split(_END, 1)[0]
    length = len(text)

    def at(position: int) -> str:
        return text[position] if position < length else _END

    left = right = 0
    while right <= length and left <= right:
        if not is_delimiter(at(right)):
            right += 1
        current = at(right)
        if is_delimiter(current) and left == right:
            if is_operator(current):
                yield Token(TokenKind.OPERATOR, current)
            right += 1
            left = right
        elif left != right and (is_delimiter(current) or right == length):
            word = text[left:right]
            kind = _classify(word)
            if kind in (TokenKind.KEYWORD, TokenKind.INTEGER) or not is_delimiter(at(right - 1)):
                yield Token(kind, word)
            left = right


def format_token(token: Token) -> str:
    return f"Token: {token.kind.value}, Value: {token.value}"


def main(argv=None) -> int:
    """Print the tokens of each given expression, or of the built-in examples."""
    parser = argparse.ArgumentParser(prog="lexer", description="Tokenize C-like expressions.")
    parser.add_argument("expressions", nargs="*", help="expressions to analyse")
    args = parser.parse_args(argv)
    expressions = args.expressions or list(DEMO_EXPRESSIONS)

    for number, expression in enumerate(expressions):
        if number:
            print(" ")
        print(f'For Expression "{expression}":')
        for token in tokenize(expression):
            print(format_token(token))
    return 0


if __name__ == "__main__":
    sys.exit(main())