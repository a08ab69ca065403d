"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""
from __future__ import annotations

from fastapi import FastAPI

from api import (
    arithmetic_error_handler,
    expression_error_handler,
    router,
    set_settings,
)
from errors import BigIntegerError, ExpressionError
from settings import Settings, get_settings


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts optional settings for testing; reads the environment if omitted.
    """
    if settings is None:
        settings = get_settings()

    set_settings(settings)

    app = FastAPI(
        title=settings.api_title,
        description=(
            "Exact arbitrary-precision integer arithmetic over decimal "
            "strings: addition, subtraction, multiplication, truncating "
            "division and modulo, exponentiation and factorial, plus an "
            "expression evaluator restricted to those operations."
        ),
        version=settings.api_version,
    )
    app.add_exception_handler(BigIntegerError, arithmetic_error_handler)
    app.add_exception_handler(ExpressionError, expression_error_handler)
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
