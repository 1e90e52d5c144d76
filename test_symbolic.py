"""Tests for the SymPy bridge."""

import sympy as sp

from fxyt.parser import parse
from fxyt.symbolic import T, X, Y, fmod, to_sympy, to_text


class TestToSympy:
    def test_arithmetic(self):
        assert to_sympy(parse("2 * X + Y")) == 2 * X + Y
        assert to_sympy(parse("X ^ 2 - T")) == X**2 - T

    def test_literals(self):
        assert to_sympy(parse("3")) == sp.Integer(3)
        assert to_sympy(parse("0.5")) == sp.Float(0.5)

    def test_functions(self):
        assert to_sympy(parse("sin(X)")) == sp.sin(X)
        assert to_sympy(parse("max(X, Y)")) == sp.Max(X, Y)

    def test_modulo_stays_fmod(self):
        assert to_sympy(parse("X % 2")) == fmod(X, 2)

    def test_conditional_with_constant_test_collapses(self):
        assert to_sympy(parse("1 ? X : Y")) == X
        assert to_sympy(parse("0 ? X : Y")) == Y

    def test_comparison_is_piecewise(self):
        assert isinstance(to_sympy(parse("X < Y")), sp.Piecewise)


class TestToText:
    def test_canonical_form(self):
        assert to_text(parse("Y + X")) == "X + Y"
        assert to_text(parse("-(X) * 2")) == "-2*X"
