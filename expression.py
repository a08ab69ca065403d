"""Arithmetic expressions over big integers.

Text is tokenized, parsed by recursive descent into a typed syntax tree,
and evaluated by dispatching each node to the ``bigint`` operations.
Nothing is ever handed to Python's own evaluator: the only things an
expression can do are the operations listed in ``FUNCTIONS`` and the
operators of the grammar below.

Grammar (lowest to highest precedence)::

    expr    := term (("+" | "-") term)*
    term    := unary (("*" | "/" | "%") unary)*
    unary   := ("-" | "+") unary | power
    power   := postfix (("^" | "**") unary)?
    postfix := primary "!"*
    primary := NUMBER | "(" expr ")" | NAME "(" expr ("," expr)* ")"

``/`` and ``%`` truncate toward zero, ``^`` is right-associative and binds
tighter than a leading minus (``-2^2 == -4``), ``!`` is factorial.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, Union

import bigint
from bigint import BigInteger
from errors import ExpressionSyntaxError, LimitExceededError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

NUMBER = "NUMBER"
NAME = "NAME"
OP = "OP"
END = "END"

_TOKEN = re.compile(
    r"(?P<space>\s+)"
    r"|(?P<number>[0-9]+)"
    r"|(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<op>\*\*|[-+*/%^!(),])"
)


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    position: int


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens, ending with a single ``END`` token."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN.match(text, pos)
        if match is None:
            raise ExpressionSyntaxError(f"Unexpected character {text[pos]!r}", pos)
        if match.lastgroup == "number":
            tokens.append(Token(NUMBER, match.group(), pos))
        elif match.lastgroup == "name":
            tokens.append(Token(NAME, match.group(), pos))
        elif match.lastgroup == "op":
            tokens.append(Token(OP, match.group(), pos))
        pos = match.end()
    tokens.append(Token(END, "", len(text)))
    return tokens


# ---------------------------------------------------------------------------
# Syntax tree
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Number:
    value: BigInteger


@dataclass(frozen=True)
class UnaryOp:
    op: str             # "-" or "+"
    operand: Node


@dataclass(frozen=True)
class BinaryOp:
    op: str             # one of "+ - * / % ^"
    left: Node
    right: Node


@dataclass(frozen=True)
class Factorial:
    operand: Node


@dataclass(frozen=True)
class Call:
    name: str
    args: tuple[Node, ...]


Node = Union[Number, UnaryOp, BinaryOp, Factorial, Call]


# name -> (argument count, operation)
FUNCTIONS: dict[str, tuple[int, Callable[..., BigInteger]]] = {
    "pow": (2, bigint.power),
    "fact": (1, bigint.factorial),
    "factorial": (1, bigint.factorial),
    "abs": (1, bigint.absolute),
    "neg": (1, bigint.negate),
    "div": (2, bigint.divide),
    "mod": (2, bigint.modulo),
}

BINARY_OPERATIONS: dict[str, Callable[[BigInteger, BigInteger], BigInteger]] = {
    "+": bigint.add,
    "-": bigint.subtract,
    "*": bigint.multiply,
    "/": bigint.divide,
    "%": bigint.modulo,
    "^": bigint.power,
}


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._index = 0

    @property
    def _current(self) -> Token:
        return self._tokens[self._index]

    def _accept(self, *ops: str) -> Token | None:
        token = self._current
        if token.kind == OP and token.text in ops:
            self._index += 1
            return token
        return None

    def _expect(self, op: str) -> Token:
        token = self._accept(op)
        if token is None:
            raise ExpressionSyntaxError(
                f"Expected {op!r}, found {self._describe(self._current)}",
                self._current.position,
            )
        return token

    @staticmethod
    def _describe(token: Token) -> str:
        return "end of input" if token.kind == END else repr(token.text)

    def parse(self) -> Node:
        node = self._expr()
        if self._current.kind != END:
            raise ExpressionSyntaxError(
                f"Unexpected {self._describe(self._current)}",
                self._current.position,
            )
        return node

    def _expr(self) -> Node:
        node = self._term()
        token = self._accept("+", "-")
        while token is not None:
            node = BinaryOp(token.text, node, self._term())
            token = self._accept("+", "-")
        return node

    def _term(self) -> Node:
        node = self._unary()
        token = self._accept("*", "/", "%")
        while token is not None:
            node = BinaryOp(token.text, node, self._unary())
            token = self._accept("*", "/", "%")
        return node

    def _unary(self) -> Node:
        token = self._accept("-", "+")
        if token is not None:
            return UnaryOp(token.text, self._unary())
        return self._power()

    def _power(self) -> Node:
        node = self._postfix()
        if self._accept("^", "**") is not None:
            return BinaryOp("^", node, self._unary())
        return node

    def _postfix(self) -> Node:
        node = self._primary()
        while self._accept("!") is not None:
            node = Factorial(node)
        return node

    def _primary(self) -> Node:
        token = self._current

        if token.kind == NUMBER:
            self._index += 1
            return Number(bigint.parse(token.text))

        if token.kind == NAME:
            self._index += 1
            return self._call(token)

        if self._accept("(") is not None:
            node = self._expr()
            self._expect(")")
            return node

        raise ExpressionSyntaxError(
            f"Expected a number, found {self._describe(token)}", token.position
        )

    def _call(self, name: Token) -> Call:
        if name.text not in FUNCTIONS:
            raise ExpressionSyntaxError(
                f"Unknown function {name.text!r}", name.position
            )
        self._expect("(")
        args = [self._expr()]
        while self._accept(",") is not None:
            args.append(self._expr())
        self._expect(")")

        arity, _ = FUNCTIONS[name.text]
        if len(args) != arity:
            raise ExpressionSyntaxError(
                f"{name.text}() takes {arity} argument(s), got {len(args)}",
                name.position,
            )
        return Call(name.text, tuple(args))


def parse_expression(text: str) -> Node:
    """Parse ``text`` into a syntax tree."""
    try:
        return _Parser(tokenize(text)).parse()
    except RecursionError:
        raise ExpressionSyntaxError("Expression is nested too deeply", 0) from None


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EvaluationLimits:
    """Upper bounds on the work one expression may request.

    ``max_result_digits`` bounds every product, power and factorial before
    it is computed.  ``None`` disables a limit.
    """

    max_length: int | None = None
    max_exponent: int | None = None
    max_factorial: int | None = None
    max_result_digits: int | None = None


UNLIMITED = EvaluationLimits()

_LOG10_E = 1 / math.log(10)


def _guard(value: BigInteger, limit: int | None, what: str) -> None:
    if limit is not None and value > BigInteger.from_int(limit):
        raise LimitExceededError(what, limit)


def _guard_result(digits: int, limits: EvaluationLimits) -> None:
    if limits.max_result_digits is not None and digits > limits.max_result_digits:
        raise LimitExceededError("result size in digits", limits.max_result_digits)


def _result_digits_unbounded(value: BigInteger, limits: EvaluationLimits) -> bool:
    # value >= 10 * max_result_digits: any power with base >= 2 or any
    # factorial of it is longer than the limit.
    return len(value.digits) > len(str(limits.max_result_digits)) + 1


def _power_digits(base: BigInteger, exponent: BigInteger) -> int:
    head = base.digits[:15]
    log10_base = math.log10(int(head)) + len(base.digits) - len(head)
    return math.floor(int(exponent) * log10_base) + 1


def _factorial_digits(n: BigInteger) -> int:
    return math.floor(math.lgamma(int(n) + 1) * _LOG10_E) + 1


def checked_multiply(
    a: BigInteger, b: BigInteger, limits: EvaluationLimits
) -> BigInteger:
    if not (a.is_zero or b.is_zero):
        _guard_result(len(a.digits) + len(b.digits) - 1, limits)
    return bigint.multiply(a, b)


def checked_power(
    base: BigInteger, exponent: BigInteger, limits: EvaluationLimits
) -> BigInteger:
    _guard(exponent, limits.max_exponent, "exponent")
    if (limits.max_result_digits is not None and not exponent.negative
            and base.digits not in ("0", "1")):
        if _result_digits_unbounded(exponent, limits):
            raise LimitExceededError(
                "result size in digits", limits.max_result_digits
            )
        _guard_result(_power_digits(base, exponent), limits)
    return bigint.power(base, exponent)


def checked_factorial(n: BigInteger, limits: EvaluationLimits) -> BigInteger:
    _guard(n, limits.max_factorial, "factorial argument")
    if limits.max_result_digits is not None and not n.negative:
        if _result_digits_unbounded(n, limits):
            raise LimitExceededError(
                "result size in digits", limits.max_result_digits
            )
        _guard_result(_factorial_digits(n), limits)
    return bigint.factorial(n)


def _apply(op: str, left: BigInteger, right: BigInteger,
           limits: EvaluationLimits) -> BigInteger:
    if op == "^":
        return checked_power(left, right, limits)
    if op == "*":
        return checked_multiply(left, right, limits)
    return BINARY_OPERATIONS[op](left, right)


def evaluate(node: Node, limits: EvaluationLimits = UNLIMITED) -> BigInteger:
    """Evaluate a syntax tree by dispatching to the ``bigint`` operations.

    Chains such as ``1+2+3+...``, ``5!!!`` and ``--7`` nest as deep as
    they are long; each is unwound in a loop instead of by recursion.
    """
    if isinstance(node, Number):
        return node.value

    if isinstance(node, UnaryOp):
        negations = 0
        while isinstance(node, UnaryOp):
            if node.op == "-":
                negations += 1
            node = node.operand
        operand = evaluate(node, limits)
        return bigint.negate(operand) if negations % 2 else operand

    if isinstance(node, BinaryOp):
        spine: list[BinaryOp] = []
        while isinstance(node, BinaryOp):
            spine.append(node)
            node = node.left
        value = evaluate(node, limits)
        for link in reversed(spine):
            value = _apply(link.op, value, evaluate(link.right, limits), limits)
        return value

    if isinstance(node, Factorial):
        depth = 0
        while isinstance(node, Factorial):
            depth += 1
            node = node.operand
        value = evaluate(node, limits)
        for _ in range(depth):
            value = checked_factorial(value, limits)
        return value

    if isinstance(node, Call):
        args = [evaluate(arg, limits) for arg in node.args]
        if node.name == "pow":
            return checked_power(args[0], args[1], limits)
        if node.name in ("fact", "factorial"):
            return checked_factorial(args[0], limits)
        _, operation = FUNCTIONS[node.name]
        return operation(*args)

    raise TypeError(f"Not an expression node: {node!r}")


def evaluate_expression(
    text: str, limits: EvaluationLimits = UNLIMITED
) -> BigInteger:
    """Parse and evaluate ``text``; the one-call entry point for front ends."""
    if limits.max_length is not None and len(text) > limits.max_length:
        raise LimitExceededError("expression length", limits.max_length)

    tree = parse_expression(text)
    try:
        result = evaluate(tree, limits)
    except RecursionError:
        raise ExpressionSyntaxError("Expression is nested too deeply", 0) from None
    logger.debug("evaluated %r -> %s digit(s)", text, len(result.digits))
    return result
