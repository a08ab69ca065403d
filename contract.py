"""Executable contract for the big-integer operations.

Each operation is described by:
- postconditions: what the result must equal, checked against native
  Python ints as an oracle
- error conditions: which inputs must raise, and with which exception
- algebraic properties: relationships that must hold between calls of an
  implementation (anything exposing the ``bigint`` function names)

The contract is machine-readable.  The conformance tests and
``validation.counterexample_search`` iterate over it instead of
hand-writing one test per predicate.

Layers
------
Postcondition        result check against the native-int oracle
ErrorCondition       inputs that must raise a given exception
AlgebraicProperty    law over an implementation's operations
OperationContract    per-operation bundle of the above
BranchSpec           every decision point white-box tests must cover
Contract             the full contract
build_contract()     constructs the Contract
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable

import bigint
from bigint import ONE, ZERO, BigInteger
from errors import (
    DivisionByZeroError,
    ModuloByZeroError,
    NegativeExponentError,
    NegativeFactorialError,
)


# ---------------------------------------------------------------------------
# Contract building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]      # (*inputs: int, result) -> bool


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]    # (*inputs: int) -> bool
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many free BigInteger values the check needs
    check: Callable[..., bool]      # (impl, *values: BigInteger) -> bool


@dataclass(frozen=True)
class OperationContract:
    name: str
    arity: int
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the implementation that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation / helper this belongs to


@dataclass(frozen=True)
class Contract:
    operations: dict[str, OperationContract]
    branches: list[BranchSpec]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        return [
            (name, prop)
            for name, op in self.operations.items()
            for prop in op.properties
        ]

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        return [
            (name, post)
            for name, op in self.operations.items()
            for post in op.postconditions
        ]

    @property
    def branch_ids(self) -> set[str]:
        return {b.id for b in self.branches}


# ---------------------------------------------------------------------------
# Oracle helpers
# ---------------------------------------------------------------------------

def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity; this type, like C,
    Java and Rust, truncates toward zero instead.
    """
    q, r = divmod(a, b)
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def truncmod(a: int, b: int) -> int:
    """Remainder matching ``truncdiv``: same sign as the dividend."""
    return a - b * truncdiv(a, b)


def _is(result: Any, expected: int) -> bool:
    return isinstance(result, BigInteger) and int(result) == expected


# ---------------------------------------------------------------------------
# Branch registry
# ---------------------------------------------------------------------------

BRANCHES: list[BranchSpec] = [
    # bigint: construction and parsing
    BranchSpec("PARSE-VALID", "Literal accepted", "text matches -?[0-9]+", "parse"),
    BranchSpec("PARSE-INVALID", "InvalidFormatError raised",
               "text does not match -?[0-9]+", "parse"),
    BranchSpec("NORM-ZERO-SIGN", "Zero forced non-negative",
               "digits normalize to '0'", "construction"),
    # bigint: comparison
    BranchSpec("CMP-SIGN", "Signs differ, negative is smaller",
               "a.negative != b.negative", "compare"),
    BranchSpec("CMP-NEGATIVE", "Both negative, magnitude order reversed",
               "a.negative and b.negative", "compare"),
    BranchSpec("CMP-NON-NEGATIVE", "Both non-negative, magnitude order kept",
               "not a.negative and not b.negative", "compare"),
    # bigint: addition
    BranchSpec("ADD-SAME-SIGN", "Magnitudes added, shared sign kept",
               "a.negative == b.negative", "add"),
    BranchSpec("ADD-CANCEL", "Equal magnitudes of opposite sign give zero",
               "signs differ and |a| == |b|", "add"),
    BranchSpec("ADD-LEFT-LARGER", "Result takes the sign of a",
               "signs differ and |a| > |b|", "add"),
    BranchSpec("ADD-RIGHT-LARGER", "Result takes the sign of b",
               "signs differ and |a| < |b|", "add"),
    # bigint: multiplication / division
    BranchSpec("MUL-SIGN", "Product sign is XOR of operand signs",
               "a.negative != b.negative", "multiply"),
    BranchSpec("DIV-ZERO", "DivisionByZeroError raised", "b == 0", "divide"),
    BranchSpec("DIV-NORMAL", "Truncated quotient returned", "b != 0", "divide"),
    BranchSpec("MOD-ZERO", "ModuloByZeroError raised", "b == 0", "modulo"),
    BranchSpec("MOD-NORMAL", "Remainder with dividend's sign returned",
               "b != 0", "modulo"),
    # bigint: power / factorial
    BranchSpec("POW-NEGATIVE-EXP", "NegativeExponentError raised",
               "exponent < 0", "power"),
    BranchSpec("POW-SIGN", "Negative result for negative base and odd exponent",
               "base.negative and exponent is odd", "power"),
    BranchSpec("FACT-NEGATIVE", "NegativeFactorialError raised", "n < 0",
               "factorial"),
    BranchSpec("FACT-NORMAL", "Iterative product returned", "n >= 0",
               "factorial"),
    # magnitude
    BranchSpec("MAG-CMP-LENGTH", "Shorter magnitude is smaller",
               "len(a) != len(b)", "magnitude.compare"),
    BranchSpec("MAG-CMP-DIGITS", "Equal lengths compared digit by digit",
               "len(a) == len(b) and a != b", "magnitude.compare"),
    BranchSpec("MAG-ADD-CARRY", "Leftover carry prepends a digit",
               "carry after the leftmost column", "magnitude.add"),
    BranchSpec("MAG-SUB-BORROW", "Column borrows from its left neighbour",
               "a[i] - b[i] - borrow < 0", "magnitude.subtract"),
    BranchSpec("MAG-SUB-UNDERFLOW", "ValueError when minuend is smaller",
               "a < b", "magnitude.subtract"),
    BranchSpec("MAG-MUL-ZERO", "Zero operand short-circuits",
               "a == '0' or b == '0'", "magnitude.multiply"),
    BranchSpec("MAG-DIV-ZERO", "ZeroDivisionError on zero divisor",
               "b == '0'", "magnitude.divmod_"),
    BranchSpec("MAG-DIV-FIT", "Divisor subtracted from running remainder",
               "remainder >= b", "magnitude.divmod_"),
    BranchSpec("MAG-POW-ODD-STEP", "Accumulator multiplied by current square",
               "last exponent digit is odd", "magnitude.power"),
]


# ---------------------------------------------------------------------------
# Contract builder
# ---------------------------------------------------------------------------

def build_contract() -> Contract:
    """Construct the full contract for the big-integer operations."""

    # ------------------------------------------------------------------ add
    add_contract = OperationContract(
        name="add",
        arity=2,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals a + b",
                lambda a, b, result: _is(result, a + b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "add(a, b) == add(b, a)", 2,
                lambda impl, a, b: impl.add(a, b) == impl.add(b, a),
            ),
            AlgebraicProperty(
                "identity", "add(a, 0) == a", 1,
                lambda impl, a: impl.add(a, ZERO) == a,
            ),
            AlgebraicProperty(
                "inverse", "add(a, subtract(0, a)) == 0", 1,
                lambda impl, a: impl.add(a, impl.subtract(ZERO, a)) == ZERO,
            ),
            AlgebraicProperty(
                "associativity", "add(add(a, b), c) == add(a, add(b, c))", 3,
                lambda impl, a, b, c: (
                    impl.add(impl.add(a, b), c) == impl.add(a, impl.add(b, c))
                ),
            ),
        ],
    )

    # ------------------------------------------------------------- subtract
    subtract_contract = OperationContract(
        name="subtract",
        arity=2,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals a - b",
                lambda a, b, result: _is(result, a - b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "identity", "subtract(a, 0) == a", 1,
                lambda impl, a: impl.subtract(a, ZERO) == a,
            ),
            AlgebraicProperty(
                "self_inverse", "subtract(a, a) == 0", 1,
                lambda impl, a: impl.subtract(a, a) == ZERO,
            ),
            AlgebraicProperty(
                "anti_commutativity", "subtract(a, b) == -subtract(b, a)", 2,
                lambda impl, a, b: (
                    impl.subtract(a, b) == bigint.negate(impl.subtract(b, a))
                ),
            ),
            AlgebraicProperty(
                "operands_unchanged", "subtract leaves both operands as they were", 2,
                lambda impl, a, b: _leaves_operands(impl.subtract, a, b),
            ),
        ],
    )

    # ------------------------------------------------------------- multiply
    multiply_contract = OperationContract(
        name="multiply",
        arity=2,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals a * b",
                lambda a, b, result: _is(result, a * b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "multiply(a, b) == multiply(b, a)", 2,
                lambda impl, a, b: impl.multiply(a, b) == impl.multiply(b, a),
            ),
            AlgebraicProperty(
                "identity", "multiply(a, 1) == a", 1,
                lambda impl, a: impl.multiply(a, ONE) == a,
            ),
            AlgebraicProperty(
                "zero", "multiply(a, 0) == 0", 1,
                lambda impl, a: impl.multiply(a, ZERO) == ZERO,
            ),
            AlgebraicProperty(
                "distributivity", "a * (b + c) == a * b + a * c", 3,
                lambda impl, a, b, c: (
                    impl.multiply(a, impl.add(b, c))
                    == impl.add(impl.multiply(a, b), impl.multiply(a, c))
                ),
            ),
        ],
    )

    # --------------------------------------------------------------- divide
    divide_contract = OperationContract(
        name="divide",
        arity=2,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals a / b truncated toward zero",
                lambda a, b, result: _is(result, truncdiv(a, b)),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "division_by_zero", "DivisionByZeroError when b == 0",
                lambda a, b: b == 0,
                DivisionByZeroError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "reconstruction", "divide(a, b) * b + modulo(a, b) == a", 2,
                lambda impl, a, b: b.is_zero or (
                    impl.add(impl.multiply(impl.divide(a, b), b), impl.modulo(a, b))
                    == a
                ),
            ),
            AlgebraicProperty(
                "identity", "divide(a, 1) == a", 1,
                lambda impl, a: impl.divide(a, ONE) == a,
            ),
            AlgebraicProperty(
                "self", "divide(a, a) == 1 for a != 0", 1,
                lambda impl, a: a.is_zero or impl.divide(a, a) == ONE,
            ),
        ],
    )

    # --------------------------------------------------------------- modulo
    modulo_contract = OperationContract(
        name="modulo",
        arity=2,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals the truncating remainder",
                lambda a, b, result: _is(result, truncmod(a, b)),
            ),
            Postcondition(
                "remainder_bounded", "|result| < |b|",
                lambda a, b, result: abs(int(result)) < abs(b),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "modulo_by_zero", "ModuloByZeroError when b == 0",
                lambda a, b: b == 0,
                ModuloByZeroError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "remainder_bounded", "|modulo(a, b)| < |b|", 2,
                lambda impl, a, b: b.is_zero or (
                    bigint.absolute(impl.modulo(a, b)) < bigint.absolute(b)
                ),
            ),
            AlgebraicProperty(
                "remainder_sign", "modulo(a, b) is zero or shares a's sign", 2,
                lambda impl, a, b: b.is_zero or (
                    impl.modulo(a, b).is_zero
                    or impl.modulo(a, b).negative == a.negative
                ),
            ),
        ],
    )

    # ---------------------------------------------------------------- power
    power_contract = OperationContract(
        name="power",
        arity=2,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals a ** b",
                lambda a, b, result: _is(result, a ** b),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "negative_exponent", "NegativeExponentError when b < 0",
                lambda a, b: b < 0,
                NegativeExponentError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "zero_exponent", "power(a, 0) == 1", 1,
                lambda impl, a: impl.power(a, ZERO) == ONE,
            ),
            AlgebraicProperty(
                "unit_exponent", "power(a, 1) == a", 1,
                lambda impl, a: impl.power(a, ONE) == a,
            ),
        ],
    )

    # ------------------------------------------------------------ factorial
    factorial_contract = OperationContract(
        name="factorial",
        arity=1,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals n!",
                lambda n, result: _is(result, math.factorial(n)),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "negative_factorial", "NegativeFactorialError when n < 0",
                lambda n: n < 0,
                NegativeFactorialError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "recurrence", "factorial(n + 1) == (n + 1) * factorial(n)", 1,
                lambda impl, n: n.negative or (
                    impl.factorial(impl.add(n, ONE))
                    == impl.multiply(impl.add(n, ONE), impl.factorial(n))
                ),
            ),
        ],
    )

    # ------------------------------------------------------- format_decimal
    format_contract = OperationContract(
        name="format_decimal",
        arity=1,
        postconditions=[
            Postcondition(
                "canonical_text", "Text equals Python's rendering of the int",
                lambda a, result: result == str(a),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "round_trip", "parse(format_decimal(a)) == a", 1,
                lambda impl, a: impl.parse(impl.format_decimal(a)) == a,
            ),
        ],
    )

    return Contract(
        operations={
            "add": add_contract,
            "subtract": subtract_contract,
            "multiply": multiply_contract,
            "divide": divide_contract,
            "modulo": modulo_contract,
            "power": power_contract,
            "factorial": factorial_contract,
            "format_decimal": format_contract,
        },
        branches=list(BRANCHES),
    )


def _leaves_operands(op: Callable[..., Any], a: BigInteger, b: BigInteger) -> bool:
    before = (a.negative, a.digits, b.negative, b.digits)
    op(a, b)
    return (a.negative, a.digits, b.negative, b.digits) == before
