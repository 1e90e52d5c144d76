"""
symbolic.py

Parsed tree -> SymPy expression, for printing a program in canonical form.

    to_sympy(parse("-(X) * 2 + sin(Y)"))  ->  -2*X + sin(Y)

Comparisons and conditionals become Piecewise expressions; '%' (C fmod,
unlike SymPy's Mod) stays an unevaluated fmod(a, b).
"""

import sympy as sp

from .nodes import BinaryOp, Call, Conditional, Coord, Literal, UnaryOp, Variable

X, Y, T = sp.symbols("X Y T", real=True)
SYMBOLS = {Coord.X: X, Coord.Y: Y, Coord.T: T}

fmod = sp.Function("fmod")

SP_FUNCS = {
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "asin": sp.asin,
    "acos": sp.acos,
    "atan": sp.atan,
    "atan2": sp.atan2,
    "sinh": sp.sinh,
    "cosh": sp.cosh,
    "tanh": sp.tanh,
    "sqrt": sp.sqrt,
    "abs": sp.Abs,
    "exp": sp.exp,
    "log": sp.log,
    "floor": sp.floor,
    "ceil": sp.ceiling,
    "sign": sp.sign,
    "min": sp.Min,
    "max": sp.Max,
    "pow": sp.Pow,
    "hypot": lambda a, b: sp.sqrt(a**2 + b**2),
    "clamp": lambda v, lo, hi: sp.Min(sp.Max(v, lo), hi),
    "mix": lambda a, b, t: a + (b - a) * t,
}

SP_RELATIONS = {
    "==": sp.Eq,
    "!=": sp.Ne,
    "<": sp.Lt,
    "<=": sp.Le,
    ">": sp.Gt,
    ">=": sp.Ge,
}


def _number(value: float):
    if float(value).is_integer():
        return sp.Integer(int(value))
    return sp.Float(value)


def to_sympy(node):
    if isinstance(node, Literal):
        return _number(node.value)

    if isinstance(node, Variable):
        return SYMBOLS[node.coord]

    if isinstance(node, UnaryOp):
        return -to_sympy(node.operand)

    if isinstance(node, BinaryOp):
        a = to_sympy(node.left)
        b = to_sympy(node.right)
        op = node.op
        if op == "+":
            return a + b
        if op == "-":
            return a - b
        if op == "*":
            return a * b
        if op == "/":
            return a / b
        if op == "%":
            return fmod(a, b)
        if op == "^":
            return sp.Pow(a, b)
        rel = SP_RELATIONS[op](a, b, evaluate=False)
        return sp.Piecewise((sp.Integer(1), rel), (sp.Integer(0), True))

    if isinstance(node, Call):
        return SP_FUNCS[node.name](*(to_sympy(arg) for arg in node.args))

    if isinstance(node, Conditional):
        test = to_sympy(node.test)
        return sp.Piecewise(
            (to_sympy(node.consequent), sp.Ne(test, 0)),
            (to_sympy(node.alternate), True),
        )

    raise TypeError(f"not an expression node: {node!r}")


def to_text(node) -> str:
    return sp.sstr(to_sympy(node))
