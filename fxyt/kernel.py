"""
kernel.py

Numba backend: compile a parsed program once, then evaluate a whole frame
in parallel.

Key idea: the tree is printed back out as straight-line Python, one
statement per node, in which every operator and built-in is a call into an
njit-compiled copy of functions.py, e.g.

    sin(X * 8) / Y   ->   def program(x, y, t, err):
                              v0 = _ck(op_mul(x, 8.0), err)
                              v1 = _ck(fn_sin(v0), err)
                              v2 = _ck(op_div(v1, y), err)
                              return v2

Statements rather than one nested expression keep the text flat however
deep the tree is. That text is exec'd, jitted with the signature
f(x, y, t, err) -> float64 and handed to a prange field kernel as a
first-class function. _ck flags any non-finite intermediate in the
one-cell `err` array instead of raising, so the kernel never fails; it
returns the field together with a mask of the pixels that did.
Conditionals become if/else blocks, so the branch that is not taken is
never executed.
"""

import logging
import math

import numpy as np
from numba import njit, prange, types

from .functions import BINARY_OPERATORS, FUNCTIONS, UNARY_OPERATORS
from .nodes import BinaryOp, Call, Conditional, Coord, Literal, UnaryOp, Variable

logger = logging.getLogger(__name__)


PROGRAM_SIG = types.float64(
    types.float64,      # x
    types.float64,      # y
    types.float64,      # t
    types.int64[:],     # err: set to 1 when anything goes non-finite
)

COORD_ARGS = {Coord.X: "x", Coord.Y: "y", Coord.T: "t"}


# ---------------------------------------------------------------------------
# Jitted primitives
# ---------------------------------------------------------------------------

@njit(types.float64(types.float64, types.int64[:]), cache=True, fastmath=False)
def _ck(v, err):
    if not math.isfinite(v):
        err[0] = 1
    return v


def _signature(arity: int):
    return types.float64(*([types.float64] * arity))


# Lazy namespace: jitted operators / built-ins live here, built on first use.
NS: dict = {}


def _namespace() -> dict:
    if NS:
        return NS
    logger.debug("compiling %d operators and built-ins", len(UNARY_OPERATORS)
                 + len(BINARY_OPERATORS) + len(FUNCTIONS))
    ns = {"_ck": _ck, "math": math, "np": np}
    for func in UNARY_OPERATORS.values():
        ns[func.__name__] = njit(_signature(1), cache=False, fastmath=False)(func)
    for func in BINARY_OPERATORS.values():
        ns[func.__name__] = njit(_signature(2), cache=False, fastmath=False)(func)
    for entry in FUNCTIONS.values():
        func = entry["func"]
        if func.__name__ not in ns:
            ns[func.__name__] = njit(_signature(entry["arity"]), cache=False, fastmath=False)(func)
    NS.update(ns)
    return NS


# ---------------------------------------------------------------------------
# tree -> source text
# ---------------------------------------------------------------------------

class SourceWriter:
    """Emit one assignment per operation; returns the name holding a node's value."""

    def __init__(self):
        self.lines = []
        self.count = 0

    def temp(self) -> str:
        name = f"v{self.count}"
        self.count += 1
        return name

    def assign(self, indent: int, call: str) -> str:
        name = self.temp()
        self.lines.append(f"{'    ' * indent}{name} = _ck({call}, err)")
        return name

    def emit(self, node, indent: int = 1) -> str:
        if isinstance(node, Literal):
            return repr(float(node.value))

        if isinstance(node, Variable):
            return COORD_ARGS[node.coord]

        if isinstance(node, UnaryOp):
            fn = UNARY_OPERATORS[node.op].__name__
            operand = self.emit(node.operand, indent)
            return self.assign(indent, f"{fn}({operand})")

        if isinstance(node, BinaryOp):
            fn = BINARY_OPERATORS[node.op].__name__
            left = self.emit(node.left, indent)
            right = self.emit(node.right, indent)
            return self.assign(indent, f"{fn}({left}, {right})")

        if isinstance(node, Call):
            fn = FUNCTIONS[node.name]["func"].__name__
            args = ", ".join([self.emit(arg, indent) for arg in node.args])
            return self.assign(indent, f"{fn}({args})")

        if isinstance(node, Conditional):
            pad = "    " * indent
            test = self.emit(node.test, indent)
            out = self.temp()
            self.lines.append(f"{pad}if {test} != 0.0:")
            consequent = self.emit(node.consequent, indent + 1)
            self.lines.append(f"{pad}    {out} = {consequent}")
            self.lines.append(f"{pad}else:")
            alternate = self.emit(node.alternate, indent + 1)
            self.lines.append(f"{pad}    {out} = {alternate}")
            return out

        raise TypeError(f"not an expression node: {node!r}")


def program_source(node, name: str = "program") -> str:
    writer = SourceWriter()
    result = writer.emit(node)
    lines = [f"def {name}(x, y, t, err):"]
    lines.extend(writer.lines)
    lines.append(f"    return {result}")
    return "\n".join(lines)


def compile_program(node):
    """Jit the tree into f(x, y, t, err) -> float64."""
    ns = dict(_namespace())
    src = program_source(node)
    exec(src, ns, ns)
    logger.debug("jitting program (%d lines)", src.count("\n") + 1)
    return njit(PROGRAM_SIG, cache=False, fastmath=False)(ns["program"])


# ---------------------------------------------------------------------------
# Field kernel
# ---------------------------------------------------------------------------

@njit(cache=False, fastmath=False, parallel=True)
def _scalar_field(fun, size, t):
    """
    Evaluate `fun` over a size x size grid at time t.

    Row j runs top (y = +1) to bottom (y = -1), column i left (x = -1) to
    right (x = +1). Returns (values, failed) where failed[j, i] marks the
    pixels whose evaluation produced a non-finite intermediate.
    """
    out = np.empty((size, size), dtype=np.float64)
    bad = np.zeros((size, size), dtype=np.bool_)
    denom = 1.0 if size <= 1 else (size - 1.0)

    for j in prange(size):
        err = np.zeros(1, dtype=np.int64)
        y = 1.0 - 2.0 * (j / denom)
        for i in range(size):
            x = -1.0 + 2.0 * (i / denom)
            err[0] = 0
            out[j, i] = fun(x, y, t, err)
            if err[0] != 0:
                bad[j, i] = True
    return out, bad


def scalar_field(program, size: int, t: float):
    return _scalar_field(program, int(size), float(t))
