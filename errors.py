"""Error kinds raised by the arithmetic core and the expression layer.

Every core error derives from ``BigIntegerError`` and, where a builtin
exception already names the failure, from that builtin too.  Callers can
catch ``ZeroDivisionError`` or ``ValueError`` without importing this module.
"""
from __future__ import annotations


class BigIntegerError(ArithmeticError):
    """Base class for every failure raised by the arithmetic core."""

    kind = "BigIntegerError"


class InvalidFormatError(BigIntegerError, ValueError):
    """Raised when text is not an optionally signed decimal integer."""

    kind = "InvalidFormat"

    def __init__(self, text: object) -> None:
        self.text = text
        super().__init__(f"Invalid integer literal: {text!r}")


class DivisionByZeroError(BigIntegerError, ZeroDivisionError):
    kind = "DivisionByZero"

    def __init__(self) -> None:
        super().__init__("Division by zero")


class ModuloByZeroError(BigIntegerError, ZeroDivisionError):
    kind = "ModuloByZero"

    def __init__(self) -> None:
        super().__init__("Modulo by zero")


class NegativeExponentError(BigIntegerError, ValueError):
    kind = "NegativeExponent"

    def __init__(self, exponent: str) -> None:
        self.exponent = exponent
        super().__init__(f"Negative exponent not supported: {exponent}")


class NegativeFactorialError(BigIntegerError, ValueError):
    kind = "NegativeFactorial"

    def __init__(self, n: str) -> None:
        self.n = n
        super().__init__(f"Factorial of a negative number is not defined: {n}")


# ---------------------------------------------------------------------------
# Expression layer
# ---------------------------------------------------------------------------

class ExpressionError(ValueError):
    """Base class for failures in parsing or guarding an expression."""

    kind = "ExpressionError"


class ExpressionSyntaxError(ExpressionError):
    """Raised when an expression cannot be tokenized or parsed."""

    kind = "SyntaxError"

    def __init__(self, message: str, position: int) -> None:
        self.position = position
        super().__init__(f"{message} at position {position}")


class LimitExceededError(ExpressionError):
    """Raised when an expression asks for more work than the limits allow."""

    kind = "LimitExceeded"

    def __init__(self, what: str, limit: int) -> None:
        self.what = what
        self.limit = limit
        super().__init__(f"{what} exceeds the configured limit of {limit}")
