"""
errors.py

Every failure the renderer can report, grouped by the phase that raises it:

    FxytError
      LexError     -> bad characters / literals in the program text
      ParseError   -> grammatical rejection of the token stream
      EvalError    -> numeric failure at one pixel of one frame

Callers of render() only ever need to catch FxytError; the intermediate
class says which phase failed and str(err) is a printable message.
"""


class FxytError(Exception):
    """Base class of every error raised by the fxyt core."""


# ---------------------------------------------------------------------------
# Lexing
# ---------------------------------------------------------------------------

class LexError(FxytError):
    pass


class UnexpectedCharacter(LexError):
    def __init__(self, character: str, position: int):
        self.character = character
        self.position = position
        super().__init__(
            f"Found character {character!r} that does not start any token "
            f"at position {position}"
        )


class NumberOutOfRange(LexError):
    def __init__(self, text: str, position: int):
        self.text = text
        self.position = position
        shown = text if len(text) <= 24 else text[:21] + "..."
        super().__init__(f"Numeric literal {shown} at position {position} is too large")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class ParseError(FxytError):
    pass


class UnexpectedToken(ParseError):
    def __init__(self, found, expected: str, position: int):
        self.found = found
        self.expected = expected
        self.position = position
        super().__init__(f"Expected {expected} but found {found} at position {position}")


class UnexpectedEndOfInput(ParseError):
    def __init__(self, expected: str):
        self.expected = expected
        super().__init__(f"Program ended where {expected} was expected")


class UnknownFunction(ParseError):
    def __init__(self, name: str, position: int):
        self.name = name
        self.position = position
        super().__init__(f"Unknown function '{name}' at position {position}")


class ArityMismatch(ParseError):
    def __init__(self, name: str, expected: int, actual: int):
        self.name = name
        self.expected = expected
        self.actual = actual
        plural = "" if expected == 1 else "s"
        super().__init__(
            f"Function '{name}' takes {expected} argument{plural} but was given {actual}"
        )


class NestingTooDeep(ParseError):
    def __init__(self, position: int, limit: int):
        self.position = position
        self.limit = limit
        super().__init__(
            f"Expression nested more than {limit} levels deep at position {position}"
        )


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

class EvalError(FxytError):
    pass


class DivisionByZero(EvalError):
    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(f"Attempt to divide by zero with '{operator}'")


class DomainError(EvalError):
    def __init__(self, function: str, argument):
        self.function = function
        self.argument = argument
        super().__init__(f"Argument {argument!r} is outside the domain of '{function}'")


class NumericOverflow(EvalError):
    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(f"Result of '{operator}' is too large to represent")
