"""Counterexample search: discovers gaps between implementation and contract.

This module runs independently of the test suite.  It draws operands of
mixed sizes and signs (plus a fixed set of edge values) and checks:

1. Postcondition violations: results that differ from the native-int
   oracle in ``contract``.
2. Error condition violations: inputs that should raise but don't (or
   raise the wrong exception).
3. Property violations: algebraic relationships that fail for some
   input combination.

Any object exposing the ``bigint`` function names can be searched, so a
deliberately broken implementation can be shown to fail.

Run directly::

    python -m validation.counterexample_search --samples 500 --seed 1
"""
from __future__ import annotations

import argparse
import itertools
import random
import sys
from dataclasses import dataclass, field
from typing import Any

import bigint
from bigint import BigInteger
from contract import Contract, build_contract

EDGE_VALUES = (
    0, 1, -1, 2, -2, 9, -9, 10, -10, 99, -100,
    10**9, -(10**9) + 1, 10**18 - 1, 123456789123456789,
)
_FACTORIAL_EDGES = (-3, -1, 0, 1, 2, 5, 20)
_EXPONENT_EDGES = (-2, -1, 0, 1, 2, 3, 10, 33)
_BASE_EDGES = (0, 1, -1, 2, -2, 10, -10, 99)
_TRIPLE_EDGES = (0, 1, -1, 9, -10, 10**18 - 1)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    operation: str
    inputs: tuple
    expected: str
    actual: str
    description: str


@dataclass
class SearchReport:
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category} / {cx.operation}")
                lines.append(f"      Inputs:   {cx.inputs}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Operand generation
# ---------------------------------------------------------------------------

def random_operand(rng: random.Random, max_digits: int) -> int:
    """A signed int with a uniformly chosen number of digits."""
    digits = rng.randint(1, max_digits)
    low = 10 ** (digits - 1) if digits > 1 else 0
    value = rng.randrange(low, 10**digits)
    return -value if rng.random() < 0.5 else value


def _edges(op_name: str, position: int, arity: int) -> tuple[int, ...]:
    if op_name == "factorial":
        return _FACTORIAL_EDGES
    if op_name == "power":
        return _EXPONENT_EDGES if position == 1 else _BASE_EDGES
    return _TRIPLE_EDGES if arity > 2 else EDGE_VALUES


def _draw(op_name: str, position: int, rng: random.Random, max_digits: int) -> int:
    # factorial and power get small domains so results stay tractable
    if op_name == "factorial":
        return rng.randint(-5, 60)
    if op_name == "power":
        return rng.randint(-3, 40) if position == 1 else random_operand(rng, 6)
    return random_operand(rng, max_digits)


def generate_samples(
    op_name: str,
    arity: int,
    count: int,
    rng: random.Random,
    max_digits: int,
) -> list[tuple[int, ...]]:
    """Every edge-value combination, then random fill up to ``count``."""
    edges = [_edges(op_name, i, arity) for i in range(arity)]
    samples = list(itertools.product(*edges))
    while len(samples) < count:
        samples.append(
            tuple(_draw(op_name, i, rng, max_digits) for i in range(arity))
        )
    return samples


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def _should_error(op_contract, inputs: tuple[int, ...]) -> bool:
    return any(ec.trigger(*inputs) for ec in op_contract.error_conditions)


def search_postcondition_violations(
    impl: Any,
    contract: Contract,
    samples: dict[str, list[tuple[int, ...]]],
) -> tuple[list[Counterexample], int]:
    """Check every postcondition for every sample of every operation."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_contract in contract.operations.items():
        op = getattr(impl, op_name)
        for inputs in samples[op_name]:
            checks += 1
            # Inputs that are supposed to error are covered separately
            if _should_error(op_contract, inputs):
                continue

            try:
                result = op(*(BigInteger.from_int(v) for v in inputs))
            except Exception as e:
                cxs.append(Counterexample(
                    category="unexpected_error",
                    operation=op_name,
                    inputs=inputs,
                    expected="no error",
                    actual=f"{type(e).__name__}: {e}",
                    description="Operation raised an unexpected exception",
                ))
                continue

            for post in op_contract.postconditions:
                try:
                    ok = post.check(*inputs, result)
                except (TypeError, ValueError):
                    ok = False
                if not ok:
                    cxs.append(Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=inputs,
                        expected=post.description,
                        actual=f"result={result!r}",
                        description=f"Postcondition '{post.name}' violated",
                    ))

    return cxs, checks


def search_error_condition_violations(
    impl: Any,
    contract: Contract,
    samples: dict[str, list[tuple[int, ...]]],
) -> tuple[list[Counterexample], int]:
    """Verify every error condition triggers the right exception."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_contract in contract.operations.items():
        op = getattr(impl, op_name)
        for inputs in samples[op_name]:
            for ec in op_contract.error_conditions:
                if not ec.trigger(*inputs):
                    continue
                checks += 1
                try:
                    result = op(*(BigInteger.from_int(v) for v in inputs))
                    cxs.append(Counterexample(
                        category="missing_error",
                        operation=op_name,
                        inputs=inputs,
                        expected=ec.exception.__name__,
                        actual=f"result={result!r}",
                        description=(
                            f"Error condition '{ec.name}' should have "
                            f"triggered but didn't"
                        ),
                    ))
                except ec.exception:
                    pass  # expected
                except Exception as e:
                    cxs.append(Counterexample(
                        category="wrong_error",
                        operation=op_name,
                        inputs=inputs,
                        expected=ec.exception.__name__,
                        actual=f"{type(e).__name__}: {e}",
                        description=f"Wrong exception type for '{ec.name}'",
                    ))

    return cxs, checks


def search_property_violations(
    impl: Any,
    contract: Contract,
    rng: random.Random,
    count: int,
    max_digits: int,
) -> tuple[list[Counterexample], int]:
    """Check every algebraic property on ``count`` drawn value tuples."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, prop in contract.all_properties:
        for inputs in generate_samples(op_name, prop.arity, count, rng, max_digits):
            checks += 1
            values = [BigInteger.from_int(v) for v in inputs]
            try:
                ok = prop.check(impl, *values)
            except (ZeroDivisionError, ValueError):
                continue
            if not ok:
                cxs.append(Counterexample(
                    category="property_violation",
                    operation=op_name,
                    inputs=inputs,
                    expected=prop.description,
                    actual="property does not hold",
                    description=f"Property '{prop.name}' violated",
                ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(
    impl: Any = bigint,
    samples: int = 200,
    seed: int = 0,
    max_digits: int = 40,
) -> SearchReport:
    """Run the complete counterexample search against ``impl``."""
    rng = random.Random(seed)
    contract = build_contract()
    drawn = {
        name: generate_samples(name, op.arity, samples, rng, max_digits)
        for name, op in contract.operations.items()
    }

    report = SearchReport()
    for cxs, checks in (
        search_postcondition_violations(impl, contract, drawn),
        search_error_condition_violations(impl, contract, drawn),
        search_property_violations(impl, contract, rng, samples, max_digits),
    ):
        report.counterexamples.extend(cxs)
        report.checks_run += checks
    return report


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--samples", type=int, default=200,
                        help="Samples per operation and per property")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--max-digits", type=int, default=40,
                        help="Longest random operand, in digits")
    args = parser.parse_args(argv)

    report = run_search(samples=args.samples, seed=args.seed,
                        max_digits=args.max_digits)
    print(report.summary())
    return 0 if report.passed else 1


if __name__ == "__main__":
    sys.exit(main())
