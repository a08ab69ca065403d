"""FastAPI endpoints for big-integer arithmetic.

Routes
------
GET    /health                   Liveness check
POST   /evaluate                 Evaluate an arithmetic expression
POST   /operations/factorial     n!
POST   /operations/{name}        add, subtract, multiply, divide, modulo, power

Arithmetic failures are translated by the exception handlers below, which
the app factory registers:

    BigIntegerError        400  {"detail": ..., "error": kind}
    ExpressionSyntaxError  422
    LimitExceededError     413
"""
from __future__ import annotations

import logging
from typing import Callable

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

import bigint
from bigint import BigInteger
from errors import BigIntegerError, ExpressionError, LimitExceededError
from expression import (
    checked_factorial,
    checked_multiply,
    checked_power,
    evaluate_expression,
)
from models import (
    BinaryOperation,
    BinaryOperationRequest,
    ErrorResponse,
    EvaluateRequest,
    FactorialRequest,
    HealthResponse,
    ResultResponse,
)
from settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calculator"])

# The settings instance is injected by the app factory (see app.py).
_settings: Settings | None = None


def set_settings(settings: Settings) -> None:
    """Inject the settings. Called once at app startup."""
    global _settings
    _settings = settings


def get_settings() -> Settings:
    assert _settings is not None, "Settings not initialized"
    return _settings


def _binary_operations(
    settings: Settings,
) -> dict[BinaryOperation, Callable[[BigInteger, BigInteger], BigInteger]]:
    limits = settings.limits()
    return {
        BinaryOperation.ADD: bigint.add,
        BinaryOperation.SUBTRACT: bigint.subtract,
        BinaryOperation.MULTIPLY: lambda a, b: checked_multiply(a, b, limits),
        BinaryOperation.DIVIDE: bigint.divide,
        BinaryOperation.MODULO: bigint.modulo,
        BinaryOperation.POWER: lambda a, b: checked_power(a, b, limits),
    }


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

def _error_response(status_code: int, e: Exception, kind: str) -> JSONResponse:
    body = ErrorResponse(detail=str(e), error=kind)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def arithmetic_error_handler(
    request: Request, e: BigIntegerError
) -> JSONResponse:
    logger.info("%s %s failed: %s", request.method, request.url.path, e)
    return _error_response(400, e, e.kind)


async def expression_error_handler(
    request: Request, e: ExpressionError
) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, e)
    status_code = 413 if isinstance(e, LimitExceededError) else 422
    return _error_response(status_code, e, e.kind)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse()


@router.post("/evaluate", response_model=ResultResponse)
def evaluate(payload: EvaluateRequest) -> ResultResponse:
    """Evaluate an arithmetic expression."""
    result = evaluate_expression(payload.expression, get_settings().limits())
    return ResultResponse.from_value(result)


@router.post("/operations/factorial", response_model=ResultResponse)
def factorial(payload: FactorialRequest) -> ResultResponse:
    """Compute n!."""
    n = bigint.parse(payload.n)
    return ResultResponse.from_value(checked_factorial(n, get_settings().limits()))


@router.post("/operations/{name}", response_model=ResultResponse)
def binary_operation(name: str, payload: BinaryOperationRequest) -> ResultResponse:
    """Apply one binary operation to ``a`` and ``b``."""
    try:
        operation = _binary_operations(get_settings())[BinaryOperation(name)]
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown operation: {name}")

    a = bigint.parse(payload.a)
    b = bigint.parse(payload.b)
    return ResultResponse.from_value(operation(a, b))
