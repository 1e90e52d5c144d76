"""
evaluator.py

Reference evaluator: walks a parsed tree for one (x, y, t) point and
returns a finite float, or raises the first EvalError it meets.

This is the authoritative definition of a program's value. The numba
kernel (kernel.py) computes the same thing in bulk and defers to this
module whenever a pixel fails.
"""

import math
from dataclasses import dataclass

import numpy as np

from .errors import DivisionByZero, DomainError, NumericOverflow
from .functions import BINARY_OPERATORS, DIVISION_OPERATORS, FUNCTIONS, UNARY_OPERATORS
from .nodes import BinaryOp, Call, Conditional, Coord, Literal, UnaryOp, Variable


@dataclass(frozen=True)
class EvalContext:
    """Normalized coordinates of one pixel of one frame, each in [-1, 1]."""

    x: float
    y: float
    t: float = 0.0

    def coordinate(self, coord: Coord) -> float:
        if coord is Coord.X:
            return self.x
        if coord is Coord.Y:
            return self.y
        return self.t


def _checked(name: str, value, args) -> float:
    """Classify a NaN / infinite result from functions.py into an EvalError."""
    value = float(value)
    if math.isfinite(value):
        return value
    if math.isnan(value):
        if name in DIVISION_OPERATORS:
            raise DivisionByZero(name)
        raise DomainError(name, args[0] if len(args) == 1 else tuple(args))
    raise NumericOverflow(name)


def _eval(node, ctx: EvalContext) -> float:
    if isinstance(node, Literal):
        return node.value

    if isinstance(node, Variable):
        return ctx.coordinate(node.coord)

    if isinstance(node, UnaryOp):
        v = _eval(node.operand, ctx)
        return _checked(node.op, UNARY_OPERATORS[node.op](v), (v,))

    if isinstance(node, BinaryOp):
        a = _eval(node.left, ctx)
        b = _eval(node.right, ctx)
        return _checked(node.op, BINARY_OPERATORS[node.op](a, b), (a, b))

    if isinstance(node, Call):
        args = [_eval(arg, ctx) for arg in node.args]
        return _checked(node.name, FUNCTIONS[node.name]["func"](*args), args)

    if isinstance(node, Conditional):
        # only the selected branch is evaluated
        if _eval(node.test, ctx) != 0.0:
            return _eval(node.consequent, ctx)
        return _eval(node.alternate, ctx)

    raise TypeError(f"not an expression node: {node!r}")


def evaluate(node, ctx: EvalContext) -> float:
    """
    Value of the program `node` at the point `ctx`.

    Pure and re-entrant: the tree is only read, and no state survives
    between calls.
    """
    # NaN / inf are classified by _checked; numpy's warnings would only repeat that
    with np.errstate(all="ignore"):
        return _eval(node, ctx)
