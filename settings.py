"""Runtime configuration for the REPL and the HTTP API.

Values come from the environment (prefix ``BIGINT_``) or a local ``.env``
file, e.g. ``BIGINT_MAX_EXPONENT=5000``.  The arithmetic core takes no
configuration; only the outer layers read these settings.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from expression import EvaluationLimits

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BIGINT_",
        env_file=".env",
        extra="ignore",
        validate_assignment=True,
    )

    # REPL
    prompt: str = ">> "
    exit_commands: list[str] = Field(default_factory=lambda: ["exit", "quit"])

    # Evaluation limits
    max_expression_length: int = Field(
        default=2_000, ge=1, description="Longest expression accepted, in characters"
    )
    max_exponent: int = Field(
        default=10_000, ge=0, description="Largest exponent accepted by ^ and pow()"
    )
    max_factorial: int = Field(
        default=1_000, ge=0, description="Largest argument accepted by ! and fact()"
    )
    max_result_digits: int = Field(
        default=2_000, ge=1,
        description="Longest product, power or factorial computed, in digits",
    )

    # Logging
    log_level: str = "WARNING"

    # API
    api_title: str = "BigInt Calculator API"
    api_version: str = "0.1.0"

    @field_validator("log_level")
    @classmethod
    def log_level_is_known(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("exit_commands")
    @classmethod
    def exit_commands_not_blank(cls, v: list[str]) -> list[str]:
        commands = [c.strip() for c in v if c.strip()]
        if not commands:
            raise ValueError("At least one exit command is required")
        return commands

    def limits(self) -> EvaluationLimits:
        return EvaluationLimits(
            max_length=self.max_expression_length,
            max_exponent=self.max_exponent,
            max_factorial=self.max_factorial,
            max_result_digits=self.max_result_digits,
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
