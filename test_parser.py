"""Tests for the recursive-descent parser."""

import dataclasses
import math

import pytest

from fxyt.errors import (
    ArityMismatch,
    LexError,
    NestingTooDeep,
    ParseError,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
    UnexpectedToken,
    UnknownFunction,
)
from fxyt.nodes import (
    BinaryOp,
    Call,
    Conditional,
    Coord,
    Literal,
    UnaryOp,
    Variable,
    depth,
    uses_time,
    walk,
)
from fxyt.parser import MAX_DEPTH, MAX_NESTING, parse

X = Variable(Coord.X)
Y = Variable(Coord.Y)
T = Variable(Coord.T)


def lit(v):
    return Literal(float(v))


class TestPrecedence:
    def test_multiplication_binds_tighter_than_addition(self):
        assert parse("1 + 2 * 3") == BinaryOp("+", lit(1), BinaryOp("*", lit(2), lit(3)))

    def test_additive_is_left_associative(self):
        assert parse("1 - 2 - 3") == BinaryOp("-", BinaryOp("-", lit(1), lit(2)), lit(3))

    def test_multiplicative_is_left_associative(self):
        assert parse("8 / 4 % 3") == BinaryOp("%", BinaryOp("/", lit(8), lit(4)), lit(3))

    def test_power_is_right_associative(self):
        assert parse("2 ^ 3 ^ 2") == BinaryOp("^", lit(2), BinaryOp("^", lit(3), lit(2)))

    def test_unary_minus_is_below_power(self):
        assert parse("-2 ^ 2") == UnaryOp("-", BinaryOp("^", lit(2), lit(2)))

    def test_power_accepts_negative_exponent(self):
        assert parse("2 ^ -1") == BinaryOp("^", lit(2), UnaryOp("-", lit(1)))

    def test_unary_minus_is_above_multiplication(self):
        assert parse("-X * Y") == BinaryOp("*", UnaryOp("-", X), Y)

    def test_comparison_is_below_additive(self):
        assert parse("X + 1 > Y") == BinaryOp(">", BinaryOp("+", X, lit(1)), Y)

    def test_comparisons_chain_left(self):
        assert parse("X < Y == 1") == BinaryOp("==", BinaryOp("<", X, Y), lit(1))

    def test_parentheses_override(self):
        assert parse("(1 + 2) * 3") == BinaryOp("*", BinaryOp("+", lit(1), lit(2)), lit(3))

    def test_calls_bind_tightest(self):
        assert parse("-sin(X) ^ 2") == UnaryOp("-", BinaryOp("^", Call("sin", (X,)), lit(2)))


class TestConditional:
    def test_ternary(self):
        assert parse("X < Y ? 1 : 0") == Conditional(BinaryOp("<", X, Y), lit(1), lit(0))

    def test_ternary_is_right_associative(self):
        assert parse("X ? 1 : Y ? 2 : 3") == Conditional(X, lit(1), Conditional(Y, lit(2), lit(3)))

    def test_ternary_branches_are_full_expressions(self):
        assert parse("X ? Y ? 1 : 2 : 3") == Conditional(X, Conditional(Y, lit(1), lit(2)), lit(3))


class TestPrimaries:
    def test_coordinates(self):
        assert parse("x") == X
        assert parse("Y") == Y
        assert parse("t") == T

    def test_constants(self):
        assert parse("pi") == Literal(math.pi)
        assert parse("e") == Literal(math.e)

    def test_call_with_several_arguments(self):
        assert parse("atan2(Y, X)") == Call("atan2", (Y, X))
        assert parse("clamp(X, 0, 1)") == Call("clamp", (X, lit(0), lit(1)))

    def test_nested_calls(self):
        assert parse("max(abs(X), abs(Y))") == Call("max", (Call("abs", (X,)), Call("abs", (Y,))))


class TestTree:
    def test_nodes_are_immutable(self):
        node = parse("X + 1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.op = "-"

    def test_walk_is_preorder(self):
        node = parse("X + sin(Y)")
        assert [type(n).__name__ for n in walk(node)] == ["BinaryOp", "Variable", "Call", "Variable"]

    def test_depth(self):
        assert depth(parse("1")) == 1
        assert depth(parse("1 + 2 * 3")) == 3

    def test_uses_time(self):
        assert uses_time(parse("sin(T)"))
        assert uses_time(parse("X ? 1 : T"))
        assert uses_time(parse("0 * T"))
        assert not uses_time(parse("X * Y + pi"))


class TestParseErrors:
    def test_trailing_operator(self):
        with pytest.raises(UnexpectedEndOfInput):
            parse("1 +")

    def test_doubled_operator(self):
        with pytest.raises(UnexpectedToken) as exc:
            parse("1 + + 2")
        assert exc.value.position == 4

    def test_unknown_function(self):
        with pytest.raises(UnknownFunction) as exc:
            parse("foo(1)")
        assert exc.value.name == "foo"
        assert exc.value.position == 0

    def test_arity(self):
        with pytest.raises(ArityMismatch) as exc:
            parse("sin(1, 2)")
        assert (exc.value.name, exc.value.expected, exc.value.actual) == ("sin", 1, 2)

        with pytest.raises(ArityMismatch):
            parse("atan2(1)")
        with pytest.raises(ArityMismatch):
            parse("sin()")

    def test_missing_closing_parenthesis(self):
        with pytest.raises(UnexpectedEndOfInput):
            parse("(1 + 2")
        with pytest.raises(UnexpectedToken):
            parse("(1 + 2 3)")

    def test_missing_comma(self):
        with pytest.raises(UnexpectedToken) as exc:
            parse("max(1 2)")
        assert exc.value.position == 6

    def test_trailing_tokens(self):
        with pytest.raises(UnexpectedToken) as exc:
            parse("1 2")
        assert exc.value.expected == "end of input"
        assert exc.value.position == 2

    def test_empty_program(self):
        with pytest.raises(UnexpectedEndOfInput):
            parse("")
        with pytest.raises(UnexpectedEndOfInput):
            parse("   ")

    def test_incomplete_ternary(self):
        with pytest.raises(UnexpectedEndOfInput):
            parse("X ? 1")
        with pytest.raises(UnexpectedToken):
            parse("X ? 1 , 2")

    def test_function_without_arguments(self):
        with pytest.raises(UnexpectedEndOfInput):
            parse("sin")
        with pytest.raises(UnexpectedToken):
            parse("sin + 1")

    def test_unknown_identifier(self):
        with pytest.raises(UnexpectedToken):
            parse("foo")

    def test_lex_errors_propagate(self):
        with pytest.raises(UnexpectedCharacter):
            parse("X $ Y")
        with pytest.raises(LexError):
            parse("1 @")

    def test_all_parse_errors_share_a_base(self):
        for text in ("1 +", "1 + + 2", "foo(1)", "sin(1, 2)"):
            with pytest.raises(ParseError):
                parse(text)


class TestLimits:
    def test_parenthesis_nesting(self):
        text = "(" * (MAX_NESTING + 10) + "1" + ")" * (MAX_NESTING + 10)
        with pytest.raises(NestingTooDeep):
            parse(text)

    def test_moderate_nesting_is_fine(self):
        text = "(" * 30 + "X" + ")" * 30
        assert parse(text) == X

    def test_ternary_chain(self):
        text = "X ? 1 : " * (MAX_NESTING + 10) + "0"
        with pytest.raises(NestingTooDeep):
            parse(text)

    def test_long_flat_chain(self):
        with pytest.raises(NestingTooDeep):
            parse(" + ".join(["1"] * (MAX_DEPTH + 10)))
        node = parse(" + ".join(["1"] * 100))
        assert depth(node) == 100
