"""
fxyt: render expressions of X, Y and T to 256x256 images and animations.

    from fxyt import render
    result = render("sin(X*8 + T*pi) * Y")
    len(result)          # 256 frames, the program uses T
    result[0].pixels     # (256, 256, 3) uint8
"""

from .errors import (
    ArityMismatch,
    DivisionByZero,
    DomainError,
    EvalError,
    FxytError,
    LexError,
    NestingTooDeep,
    NumberOutOfRange,
    NumericOverflow,
    ParseError,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
    UnexpectedToken,
    UnknownFunction,
)
from .evaluator import EvalContext, evaluate
from .nodes import uses_time
from .parser import parse
from .render import Frame, RenderResult, render, render_ast

__version__ = "0.1.0"
