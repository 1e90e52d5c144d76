"""
functions.py

Numeric meaning of every operator and built-in function of the language.

Each entry is a plain scalar function of float64 arguments, written so that
it runs unchanged both as ordinary Python (the reference evaluator) and under
numba.njit (the parallel kernel). Neither version may raise, so failures are
reported through the returned value:

    NaN   -> the arguments are outside the function's domain
             (for '/' and '%': the divisor is zero)
    +-inf -> the result overflowed

All arguments are finite by construction, so a NaN or an infinity can only
come from the checks below or from a genuine overflow. The caller turns them
into DivisionByZero / DomainError / NumericOverflow.
"""

import math
import numpy as np


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------

def op_neg(a):
    return -a


def op_add(a, b):
    return a + b


def op_sub(a, b):
    return a - b


def op_mul(a, b):
    return a * b


def op_div(a, b):
    if b == 0.0:
        return np.nan
    return a / b


def op_mod(a, b):
    # C fmod: result has the sign of the dividend
    if b == 0.0:
        return np.nan
    return np.fmod(a, b)


def op_pow(a, b):
    if a < 0.0 and b != np.floor(b):
        return np.nan
    if a == 0.0 and b < 0.0:
        return np.nan
    return np.power(a, b)


def op_eq(a, b):
    return 1.0 if a == b else 0.0


def op_ne(a, b):
    return 1.0 if a != b else 0.0


def op_lt(a, b):
    return 1.0 if a < b else 0.0


def op_le(a, b):
    return 1.0 if a <= b else 0.0


def op_gt(a, b):
    return 1.0 if a > b else 0.0


def op_ge(a, b):
    return 1.0 if a >= b else 0.0


UNARY_OPERATORS = {
    "-": op_neg,
}

BINARY_OPERATORS = {
    "+": op_add,
    "-": op_sub,
    "*": op_mul,
    "/": op_div,
    "%": op_mod,
    "^": op_pow,
    "==": op_eq,
    "!=": op_ne,
    "<": op_lt,
    "<=": op_le,
    ">": op_gt,
    ">=": op_ge,
}

# a NaN from one of these means the right operand was zero
DIVISION_OPERATORS = ("/", "%")


# ---------------------------------------------------------------------------
# Built-in functions
# ---------------------------------------------------------------------------

def fn_sin(v):
    return np.sin(v)


def fn_cos(v):
    return np.cos(v)


def fn_tan(v):
    return np.tan(v)


def fn_asin(v):
    if v < -1.0 or v > 1.0:
        return np.nan
    return np.arcsin(v)


def fn_acos(v):
    if v < -1.0 or v > 1.0:
        return np.nan
    return np.arccos(v)


def fn_atan(v):
    return np.arctan(v)


def fn_atan2(a, b):
    return np.arctan2(a, b)


def fn_sinh(v):
    return np.sinh(v)


def fn_cosh(v):
    return np.cosh(v)


def fn_tanh(v):
    return np.tanh(v)


def fn_sqrt(v):
    if v < 0.0:
        return np.nan
    return np.sqrt(v)


def fn_abs(v):
    return np.abs(v)


def fn_exp(v):
    return np.exp(v)


def fn_log(v):
    if v <= 0.0:
        return np.nan
    return np.log(v)


def fn_floor(v):
    return np.floor(v)


def fn_ceil(v):
    return np.ceil(v)


def fn_sign(v):
    return np.sign(v)


def fn_min(a, b):
    return a if a <= b else b


def fn_max(a, b):
    return a if a >= b else b


def fn_hypot(a, b):
    return np.hypot(a, b)


def fn_clamp(v, lo, hi):
    if v < lo:
        return lo
    if v > hi:
        return hi
    return v


def fn_mix(a, b, t):
    return a + (b - a) * t


FUNCTIONS: dict[str, dict] = {
    "sin":   dict(func=fn_sin,   arity=1),
    "cos":   dict(func=fn_cos,   arity=1),
    "tan":   dict(func=fn_tan,   arity=1),
    "asin":  dict(func=fn_asin,  arity=1),
    "acos":  dict(func=fn_acos,  arity=1),
    "atan":  dict(func=fn_atan,  arity=1),
    "atan2": dict(func=fn_atan2, arity=2),
    "sinh":  dict(func=fn_sinh,  arity=1),
    "cosh":  dict(func=fn_cosh,  arity=1),
    "tanh":  dict(func=fn_tanh,  arity=1),
    "sqrt":  dict(func=fn_sqrt,  arity=1),
    "abs":   dict(func=fn_abs,   arity=1),
    "exp":   dict(func=fn_exp,   arity=1),
    "log":   dict(func=fn_log,   arity=1),
    "floor": dict(func=fn_floor, arity=1),
    "ceil":  dict(func=fn_ceil,  arity=1),
    "sign":  dict(func=fn_sign,  arity=1),
    "min":   dict(func=fn_min,   arity=2),
    "max":   dict(func=fn_max,   arity=2),
    "pow":   dict(func=op_pow,   arity=2),
    "hypot": dict(func=fn_hypot, arity=2),
    "clamp": dict(func=fn_clamp, arity=3),
    "mix":   dict(func=fn_mix,   arity=3),
}

CONSTANTS = {
    "pi": math.pi,
    "e": math.e,
}
