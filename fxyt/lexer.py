"""
lexer.py

Turns program text into a lazy stream of tokens.

    tokenize("sin(X * 8) + T")  ->  IDENT sin, LPAREN, IDENT X, OPERATOR *,
                                    NUMBER 8.0, RPAREN, OPERATOR +, IDENT T,
                                    END

Whitespace is skipped. Numbers are unsigned (a leading '-' is unary minus,
handled by the parser). The single letters x/y/t are coordinates and are
reported upper-case whatever case they were written in.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum

from .errors import NumberOutOfRange, UnexpectedCharacter


class TokenKind(Enum):
    NUMBER = "number"
    IDENT = "identifier"
    OPERATOR = "operator"
    LPAREN = "'('"
    RPAREN = "')'"
    COMMA = "','"
    END = "end of input"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: object = None
    position: int = 0

    def __str__(self) -> str:
        if self.kind is TokenKind.NUMBER:
            return f"number {self.value:g}"
        if self.kind is TokenKind.IDENT:
            return f"identifier '{self.value}'"
        if self.kind is TokenKind.OPERATOR:
            return f"operator '{self.value}'"
        return self.kind.value


COORDINATES = ("X", "Y", "T")

# two-character operators must come before their one-character prefixes
OPERATORS = ("==", "!=", "<=", ">=", "<", ">", "+", "-", "*", "/", "%", "^", "?", ":")

WHITESPACE_RE = re.compile(r"\s+")
NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?")
IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
OPERATOR_RE = re.compile("|".join(re.escape(op) for op in OPERATORS))

PUNCTUATION = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}


def _number(text: str, pos: int) -> Token:
    value = float(text)
    if not math.isfinite(value):
        raise NumberOutOfRange(text, pos)
    return Token(TokenKind.NUMBER, value, pos)


def _ident(text: str, pos: int) -> Token:
    if text.upper() in COORDINATES:
        text = text.upper()
    return Token(TokenKind.IDENT, text, pos)


def tokenize(text: str):
    """
    Yield the tokens of `text` one at a time, finishing with a single END.

    Raises UnexpectedCharacter at the first character that cannot begin a
    token; nothing after it is scanned.
    """
    pos = 0
    n = len(text)

    while True:
        m = WHITESPACE_RE.match(text, pos)
        if m:
            pos = m.end()
        if pos >= n:
            break

        ch = text[pos]

        if ch in PUNCTUATION:
            yield Token(PUNCTUATION[ch], ch, pos)
            pos += 1
            continue

        m = NUMBER_RE.match(text, pos)
        if m:
            yield _number(m.group(), pos)
            pos = m.end()
            continue

        m = IDENT_RE.match(text, pos)
        if m:
            yield _ident(m.group(), pos)
            pos = m.end()
            continue

        m = OPERATOR_RE.match(text, pos)
        if m:
            yield Token(TokenKind.OPERATOR, m.group(), pos)
            pos = m.end()
            continue

        raise UnexpectedCharacter(ch, pos)

    yield Token(TokenKind.END, None, n)
