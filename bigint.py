"""Arbitrary-precision signed integers over decimal digit strings.

``BigInteger`` is an immutable sign-magnitude value: a ``negative`` flag
plus a canonical digit string (see ``magnitude``).  The operations are
plain module-level functions that take values and return new ones; none of
them ever modifies an operand.

Division is *truncating*: the quotient rounds toward zero and the
remainder takes the sign of the dividend, so for every ``b != 0``::

    add(multiply(divide(a, b), b), modulo(a, b)) == a

Decision branches carry the branch ids registered in ``contract.BRANCHES``
so white-box tests can trace coverage back to the contract.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import total_ordering

import magnitude
from errors import (
    DivisionByZeroError,
    InvalidFormatError,
    ModuloByZeroError,
    NegativeExponentError,
    NegativeFactorialError,
)

_DIGITS = re.compile(r"[0-9]+")
_LITERAL = re.compile(r"(-?)([0-9]+)")


# ---------------------------------------------------------------------------
# Value type
# ---------------------------------------------------------------------------

@total_ordering
@dataclass(frozen=True)
class BigInteger:
    """Signed integer of unbounded size.

    Construction normalizes: leading zeros are stripped and zero is always
    non-negative, so ``BigInteger("007") == BigInteger("7")`` and
    ``BigInteger("0", negative=True)`` is plain zero.

    Branches: NORM-ZERO-SIGN
    """

    digits: str = magnitude.ZERO
    negative: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.digits, str) or not _DIGITS.fullmatch(self.digits):
            raise InvalidFormatError(self.digits)

        digits = magnitude.strip_leading_zeros(self.digits)
        object.__setattr__(self, "digits", digits)
        if magnitude.is_zero(digits):                             # NORM-ZERO-SIGN
            object.__setattr__(self, "negative", False)
        else:
            object.__setattr__(self, "negative", bool(self.negative))

    # -- construction / conversion ------------------------------------------

    @classmethod
    def from_string(cls, text: str) -> BigInteger:
        return parse(text)

    @classmethod
    def from_int(cls, value: int) -> BigInteger:
        """Interop with native ints (tests and oracles only)."""
        return cls(str(abs(value)), negative=value < 0)

    def __int__(self) -> int:
        return int(format_decimal(self))

    def __str__(self) -> str:
        return format_decimal(self)

    def __repr__(self) -> str:
        return f"BigInteger('{format_decimal(self)}')"

    # -- predicates ---------------------------------------------------------

    @property
    def is_zero(self) -> bool:
        return magnitude.is_zero(self.digits)

    @property
    def is_odd(self) -> bool:
        return magnitude.is_odd(self.digits)

    # -- ordering -----------------------------------------------------------

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return compare(self, other) < 0

    # -- operators ----------------------------------------------------------
    # ``//`` and ``%`` are not overloaded: Python floors, this type truncates.

    def __neg__(self) -> BigInteger:
        return negate(self)

    def __pos__(self) -> BigInteger:
        return self

    def __abs__(self) -> BigInteger:
        return absolute(self)

    def __add__(self, other: object) -> BigInteger:
        rhs = _coerce(other)
        return NotImplemented if rhs is None else add(self, rhs)

    def __radd__(self, other: object) -> BigInteger:
        lhs = _coerce(other)
        return NotImplemented if lhs is None else add(lhs, self)

    def __sub__(self, other: object) -> BigInteger:
        rhs = _coerce(other)
        return NotImplemented if rhs is None else subtract(self, rhs)

    def __rsub__(self, other: object) -> BigInteger:
        lhs = _coerce(other)
        return NotImplemented if lhs is None else subtract(lhs, self)

    def __mul__(self, other: object) -> BigInteger:
        rhs = _coerce(other)
        return NotImplemented if rhs is None else multiply(self, rhs)

    def __rmul__(self, other: object) -> BigInteger:
        lhs = _coerce(other)
        return NotImplemented if lhs is None else multiply(lhs, self)

    def __pow__(self, other: object) -> BigInteger:
        rhs = _coerce(other)
        return NotImplemented if rhs is None else power(self, rhs)


ZERO = BigInteger(magnitude.ZERO)
ONE = BigInteger(magnitude.ONE)


def _coerce(value: object) -> BigInteger | None:
    if isinstance(value, BigInteger):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigInteger.from_int(value)
    return None


# ---------------------------------------------------------------------------
# Parsing / formatting
# ---------------------------------------------------------------------------

def parse(text: str) -> BigInteger:
    """Parse an optionally ``-``-signed run of decimal digits.

    Branches: PARSE-VALID, PARSE-INVALID
    """
    match = _LITERAL.fullmatch(text) if isinstance(text, str) else None
    if match is None:                                             # PARSE-INVALID
        raise InvalidFormatError(text)
    sign, digits = match.groups()
    return BigInteger(digits, negative=bool(sign))                # PARSE-VALID


def format_decimal(value: BigInteger) -> str:
    """Canonical text: optional ``-``, then digits without leading zeros."""
    return ("-" if value.negative else "") + value.digits


# ---------------------------------------------------------------------------
# Comparison and sign
# ---------------------------------------------------------------------------

def compare(a: BigInteger, b: BigInteger) -> int:
    """Signed three-way comparison: -1, 0 or 1.

    Branches: CMP-SIGN, CMP-NEGATIVE, CMP-NON-NEGATIVE
    """
    if a.negative != b.negative:                                  # CMP-SIGN
        return -1 if a.negative else 1
    order = magnitude.compare(a.digits, b.digits)
    if a.negative:                                                # CMP-NEGATIVE
        return -order
    return order                                                  # CMP-NON-NEGATIVE


def negate(value: BigInteger) -> BigInteger:
    return replace(value, negative=not value.negative)


def absolute(value: BigInteger) -> BigInteger:
    return replace(value, negative=False)


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

def add(a: BigInteger, b: BigInteger) -> BigInteger:
    """Signed addition.

    Branches: ADD-SAME-SIGN, ADD-CANCEL, ADD-LEFT-LARGER, ADD-RIGHT-LARGER
    """
    if a.negative == b.negative:                                  # ADD-SAME-SIGN
        return BigInteger(magnitude.add(a.digits, b.digits), a.negative)

    order = magnitude.compare(a.digits, b.digits)
    if order == 0:                                                # ADD-CANCEL
        return ZERO
    if order > 0:                                                 # ADD-LEFT-LARGER
        return BigInteger(magnitude.subtract(a.digits, b.digits), a.negative)
    return BigInteger(                                            # ADD-RIGHT-LARGER
        magnitude.subtract(b.digits, a.digits), b.negative
    )


def subtract(a: BigInteger, b: BigInteger) -> BigInteger:
    """``a - b`` as ``a + (-b)``; ``negate`` builds a new value, ``b`` is untouched."""
    return add(a, negate(b))


def multiply(a: BigInteger, b: BigInteger) -> BigInteger:
    """Signed product; negative only when exactly one operand is.

    Branches: MUL-SIGN
    """
    return BigInteger(                                            # MUL-SIGN
        magnitude.multiply(a.digits, b.digits), a.negative != b.negative
    )


def divide(a: BigInteger, b: BigInteger) -> BigInteger:
    """Quotient truncated toward zero.

    Branches: DIV-ZERO, DIV-NORMAL
    """
    if b.is_zero:                                                 # DIV-ZERO
        raise DivisionByZeroError()
    quotient, _ = magnitude.divmod_(a.digits, b.digits)
    return BigInteger(quotient, a.negative != b.negative)         # DIV-NORMAL


def modulo(a: BigInteger, b: BigInteger) -> BigInteger:
    """Remainder of truncating division; shares the dividend's sign.

    Branches: MOD-ZERO, MOD-NORMAL
    """
    if b.is_zero:                                                 # MOD-ZERO
        raise ModuloByZeroError()
    _, remainder = magnitude.divmod_(a.digits, b.digits)
    return BigInteger(remainder, a.negative)                      # MOD-NORMAL


def divide_with_remainder(
    a: BigInteger, b: BigInteger
) -> tuple[BigInteger, BigInteger]:
    """``(divide(a, b), modulo(a, b))`` from a single long-division pass."""
    if b.is_zero:
        raise DivisionByZeroError()
    quotient, remainder = magnitude.divmod_(a.digits, b.digits)
    return (
        BigInteger(quotient, a.negative != b.negative),
        BigInteger(remainder, a.negative),
    )


def power(base: BigInteger, exponent: BigInteger) -> BigInteger:
    """``base ** exponent`` for a non-negative exponent.

    The result is negative exactly when the base is negative and the
    exponent is odd.  ``power(x, 0) == 1`` for every ``x``, zero included.

    Branches: POW-NEGATIVE-EXP, POW-SIGN
    """
    if exponent.negative:                                         # POW-NEGATIVE-EXP
        raise NegativeExponentError(format_decimal(exponent))
    digits = magnitude.power(base.digits, exponent.digits)
    return BigInteger(                                            # POW-SIGN
        digits, base.negative and exponent.is_odd
    )


def factorial(n: BigInteger) -> BigInteger:
    """``n!`` for a non-negative ``n``; ``0! == 1``.

    Branches: FACT-NEGATIVE, FACT-NORMAL
    """
    if n.negative:                                                # FACT-NEGATIVE
        raise NegativeFactorialError(format_decimal(n))
    return BigInteger(magnitude.factorial(n.digits))              # FACT-NORMAL
