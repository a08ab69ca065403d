"""Request and response models for the calculator HTTP API.

Integer operands travel as decimal strings so their size is not limited by
JSON numbers.  Operand fields are validated by the core parser and
normalized to canonical form (``"007"`` becomes ``"7"``, ``"-0"`` becomes
``"0"``).
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from bigint import BigInteger, format_decimal, parse


def _canonical(v: str) -> str:
    # InvalidFormatError is a ValueError, which pydantic reports as a 422.
    return format_decimal(parse(v))


class BinaryOperation(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULO = "modulo"
    POWER = "power"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class EvaluateRequest(BaseModel):
    expression: str = Field(
        ...,
        min_length=1,
        description="Arithmetic expression, e.g. '(2^127 - 1) % 1000'",
    )

    @field_validator("expression")
    @classmethod
    def expression_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Expression must not be blank")
        return v


class BinaryOperationRequest(BaseModel):
    a: str = Field(..., description="Left operand as a decimal string")
    b: str = Field(..., description="Right operand as a decimal string")

    @field_validator("a", "b")
    @classmethod
    def operand_is_integer(cls, v: str) -> str:
        return _canonical(v)


class FactorialRequest(BaseModel):
    n: str = Field(..., description="Non-negative decimal integer")

    @field_validator("n")
    @classmethod
    def n_is_integer(cls, v: str) -> str:
        return _canonical(v)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class ResultResponse(BaseModel):
    result: str
    digits: int = Field(..., description="Number of digits in the magnitude")
    negative: bool

    @classmethod
    def from_value(cls, value: BigInteger) -> ResultResponse:
        return cls(
            result=format_decimal(value),
            digits=len(value.digits),
            negative=value.negative,
        )


class ErrorResponse(BaseModel):
    detail: str
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
