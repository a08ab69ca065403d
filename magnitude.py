"""Unsigned arithmetic on decimal digit strings.

A *magnitude* is a non-empty string of ASCII digits, most-significant
first, with no leading zero unless the value is exactly ``"0"``.  Every
function here accepts and returns magnitudes in that canonical form; signs
are handled one layer up in ``bigint``.

The algorithms are the schoolbook ones: carry/borrow loops for addition
and subtraction, digit-pair accumulation for multiplication, and long
division by repeated subtraction.  Decision branches carry the branch ids
registered in ``contract.BRANCHES``.
"""
from __future__ import annotations

ZERO = "0"
ONE = "1"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def strip_leading_zeros(digits: str) -> str:
    return digits.lstrip("0") or ZERO


def is_zero(digits: str) -> bool:
    return digits == ZERO


def is_odd(digits: str) -> bool:
    """Parity of the least-significant decimal digit."""
    return digits[-1] in "13579"


def compare(a: str, b: str) -> int:
    """Three-way comparison of two magnitudes: -1, 0 or 1.

    Branches: MAG-CMP-LENGTH, MAG-CMP-DIGITS
    """
    if len(a) != len(b):                                          # MAG-CMP-LENGTH
        return -1 if len(a) < len(b) else 1
    if a == b:
        return 0
    # Equal lengths, no leading zeros: lexical order is numeric order.
    return -1 if a < b else 1                                     # MAG-CMP-DIGITS


# ---------------------------------------------------------------------------
# Addition / subtraction
# ---------------------------------------------------------------------------

def add(a: str, b: str) -> str:
    """Sum of two magnitudes.

    Branches: MAG-ADD-CARRY
    """
    width = max(len(a), len(b))
    a, b = a.zfill(width), b.zfill(width)

    out: list[str] = []
    carry = 0
    for i in range(width - 1, -1, -1):
        carry, digit = divmod(int(a[i]) + int(b[i]) + carry, 10)
        out.append(str(digit))
    if carry:                                                     # MAG-ADD-CARRY
        out.append(str(carry))
    return "".join(reversed(out))


def _subtract(a: str, b: str) -> str:
    # Caller guarantees a >= b.
    b = b.zfill(len(a))
    out: list[str] = []
    borrow = 0
    for i in range(len(a) - 1, -1, -1):
        diff = int(a[i]) - int(b[i]) - borrow
        if diff < 0:                                              # MAG-SUB-BORROW
            diff += 10
            borrow = 1
        else:
            borrow = 0
        out.append(str(diff))
    return strip_leading_zeros("".join(reversed(out)))


def subtract(a: str, b: str) -> str:
    """Difference ``a - b`` of two magnitudes with ``a >= b``.

    Branches: MAG-SUB-BORROW, MAG-SUB-UNDERFLOW
    """
    if compare(a, b) < 0:                                         # MAG-SUB-UNDERFLOW
        raise ValueError(f"magnitude {a} is smaller than {b}")
    return _subtract(a, b)


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------

def multiply(a: str, b: str) -> str:
    """Schoolbook product of two magnitudes.

    Digit products are accumulated into a buffer of ``len(a) + len(b)``
    slots.  Each slot is reduced mod 10 when it is written and its carry
    pushed one slot to the left; the leftmost slot never exceeds 9 because
    the product always fits in ``len(a) + len(b)`` digits.

    Branches: MAG-MUL-ZERO
    """
    if is_zero(a) or is_zero(b):                                  # MAG-MUL-ZERO
        return ZERO

    da = [int(c) for c in a]
    db = [int(c) for c in b]
    buf = [0] * (len(da) + len(db))

    for i in range(len(da) - 1, -1, -1):
        for j in range(len(db) - 1, -1, -1):
            total = da[i] * db[j] + buf[i + j + 1]
            buf[i + j + 1] = total % 10
            buf[i + j] += total // 10

    return strip_leading_zeros("".join(map(str, buf)))


# ---------------------------------------------------------------------------
# Division
# ---------------------------------------------------------------------------

def divmod_(a: str, b: str) -> tuple[str, str]:
    """Long division of magnitudes: ``(quotient, remainder)``.

    Dividend digits are brought down left to right into a running
    remainder; at each position the divisor is subtracted while it still
    fits, which happens at most nine times.

    Branches: MAG-DIV-ZERO, MAG-DIV-FIT
    """
    if is_zero(b):                                                # MAG-DIV-ZERO
        raise ZeroDivisionError("magnitude division by zero")

    quotient: list[str] = []
    remainder = ZERO
    for digit in a:
        remainder = strip_leading_zeros(remainder + digit)
        count = 0
        while compare(remainder, b) >= 0:                         # MAG-DIV-FIT
            remainder = _subtract(remainder, b)
            count += 1
        quotient.append(str(count))

    return strip_leading_zeros("".join(quotient)), remainder


def halve(digits: str) -> str:
    """``digits // 2`` by a single left-to-right pass."""
    out: list[str] = []
    carry = 0
    for c in digits:
        current = carry * 10 + int(c)
        out.append(str(current // 2))
        carry = current % 2
    return strip_leading_zeros("".join(out))


# ---------------------------------------------------------------------------
# Composite operations
# ---------------------------------------------------------------------------

def power(base: str, exponent: str) -> str:
    """``base ** exponent`` by binary exponentiation on decimal digits.

    Branches: MAG-POW-ODD-STEP
    """
    result = ONE
    square = base
    while not is_zero(exponent):
        if is_odd(exponent):                                      # MAG-POW-ODD-STEP
            result = multiply(result, square)
        exponent = halve(exponent)
        if not is_zero(exponent):
            square = multiply(square, square)
    return result


def factorial(n: str) -> str:
    result = ONE
    counter = n
    while not is_zero(counter):
        result = multiply(result, counter)
        counter = _subtract(counter, ONE)
    return result
