"""
parser.py

Recursive-descent parser: one method per precedence level, lowest first.

    expression      := conditional
    conditional     := comparison [ '?' conditional ':' conditional ]
    comparison      := additive { ('==' | '!=' | '<' | '<=' | '>' | '>=') additive }
    additive        := multiplicative { ('+' | '-') multiplicative }
    multiplicative  := unary { ('*' | '/' | '%') unary }
    unary           := '-' unary | power
    power           := primary [ '^' unary ]
    primary         := NUMBER | X | Y | T | CONSTANT
                     | '(' expression ')'
                     | NAME '(' [ expression { ',' expression } ] ')'

'?:' and '^' group to the right, every other binary level to the left.
Parsing stops at the first error; there is no recovery and no partial tree.
"""

import logging

from .errors import (
    ArityMismatch,
    NestingTooDeep,
    UnexpectedEndOfInput,
    UnexpectedToken,
    UnknownFunction,
)
from .functions import CONSTANTS, FUNCTIONS
from .lexer import COORDINATES, TokenKind, tokenize
from .nodes import BinaryOp, Call, Conditional, Coord, Literal, UnaryOp, Variable, depth

logger = logging.getLogger(__name__)

# parenthesis / unary nesting allowed while parsing
MAX_NESTING = 64
# depth of the finished tree (long flat chains like 1+1+1+... count too)
MAX_DEPTH = 256

COMPARISON_OPS = ("==", "!=", "<", "<=", ">", ">=")
ADDITIVE_OPS = ("+", "-")
MULTIPLICATIVE_OPS = ("*", "/", "%")


class Parser:
    def __init__(self, text: str):
        self.tokens = tokenize(text)
        self.nesting = 0
        self.advance()

    # --- token cursor ---

    def advance(self):
        self.tok = next(self.tokens)

    def at_operator(self, *ops) -> bool:
        return self.tok.kind is TokenKind.OPERATOR and self.tok.value in ops

    def error(self, expected: str):
        if self.tok.kind is TokenKind.END:
            raise UnexpectedEndOfInput(expected)
        raise UnexpectedToken(str(self.tok), expected, self.tok.position)

    def expect(self, kind: TokenKind, expected: str):
        if self.tok.kind is not kind:
            self.error(expected)
        tok = self.tok
        self.advance()
        return tok

    def expect_operator(self, op: str):
        if not self.at_operator(op):
            self.error(f"'{op}'")
        self.advance()

    def enter(self):
        self.nesting += 1
        if self.nesting > MAX_NESTING:
            self.nesting -= 1
            raise NestingTooDeep(self.tok.position, MAX_NESTING)

    # --- grammar ---

    def parse(self):
        """Parse the whole program; anything left over is an error."""
        start = self.tok.position
        node = self.expression()
        if self.tok.kind is not TokenKind.END:
            self.error("end of input")
        if depth(node) > MAX_DEPTH:
            raise NestingTooDeep(start, MAX_DEPTH)
        return node

    def expression(self):
        return self.conditional()

    def conditional(self):
        test = self.comparison()
        if not self.at_operator("?"):
            return test
        self.advance()
        self.enter()
        try:
            consequent = self.conditional()
            self.expect_operator(":")
            alternate = self.conditional()
        finally:
            self.nesting -= 1
        return Conditional(test, consequent, alternate)

    def comparison(self):
        node = self.additive()
        while self.at_operator(*COMPARISON_OPS):
            op = self.tok.value
            self.advance()
            node = BinaryOp(op, node, self.additive())
        return node

    def additive(self):
        node = self.multiplicative()
        while self.at_operator(*ADDITIVE_OPS):
            op = self.tok.value
            self.advance()
            node = BinaryOp(op, node, self.multiplicative())
        return node

    def multiplicative(self):
        node = self.unary()
        while self.at_operator(*MULTIPLICATIVE_OPS):
            op = self.tok.value
            self.advance()
            node = BinaryOp(op, node, self.unary())
        return node

    def unary(self):
        self.enter()
        try:
            if self.at_operator("-"):
                self.advance()
                return UnaryOp("-", self.unary())
            return self.power()
        finally:
            self.nesting -= 1

    def power(self):
        base = self.primary()
        if not self.at_operator("^"):
            return base
        self.advance()
        return BinaryOp("^", base, self.unary())

    def primary(self):
        tok = self.tok

        if tok.kind is TokenKind.NUMBER:
            self.advance()
            return Literal(tok.value)

        if tok.kind is TokenKind.LPAREN:
            self.advance()
            node = self.expression()
            self.expect(TokenKind.RPAREN, "')'")
            return node

        if tok.kind is TokenKind.IDENT:
            self.advance()
            if tok.value in COORDINATES:
                return Variable(Coord(tok.value))
            if self.tok.kind is TokenKind.LPAREN:
                return self.call(tok)
            if tok.value in CONSTANTS:
                return Literal(CONSTANTS[tok.value])
            if tok.value in FUNCTIONS:
                self.error(f"'(' after '{tok.value}'")
            raise UnexpectedToken(str(tok), "a coordinate, number, or function call", tok.position)

        self.error("an expression")

    def call(self, name_tok):
        name = name_tok.value
        if name not in FUNCTIONS:
            raise UnknownFunction(name, name_tok.position)
        self.advance()  # '('

        args = []
        if self.tok.kind is not TokenKind.RPAREN:
            args.append(self.expression())
            while self.tok.kind is TokenKind.COMMA:
                self.advance()
                args.append(self.expression())
        self.expect(TokenKind.RPAREN, "',' or ')'")

        arity = FUNCTIONS[name]["arity"]
        if len(args) != arity:
            raise ArityMismatch(name, arity, len(args))
        return Call(name, tuple(args))


def parse(text: str):
    """Parse program text into a tree; raises LexError or ParseError."""
    node = Parser(text).parse()
    logger.debug("parsed %r (%s)", text, type(node).__name__)
    return node
