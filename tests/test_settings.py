"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from errors import LimitExceededError
from expression import EvaluationLimits, evaluate_expression
from settings import Settings, get_settings


class TestDefaults:

    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.prompt == ">> "
        assert s.exit_commands == ["exit", "quit"]
        assert s.max_expression_length == 2_000
        assert s.max_exponent == 10_000
        assert s.max_factorial == 1_000
        assert s.max_result_digits == 2_000
        assert s.log_level == "WARNING"
        assert s.api_title == "BigInt Calculator API"

    def test_limits(self):
        s = Settings(_env_file=None, max_exponent=7)
        assert s.limits() == EvaluationLimits(
            max_length=2_000, max_exponent=7, max_factorial=1_000,
            max_result_digits=2_000,
        )

    @pytest.mark.parametrize("text", ["3^10000", "9^100000", "1500!", "900!"])
    def test_default_limits_refuse_slow_requests(self, text):
        with pytest.raises(LimitExceededError):
            evaluate_expression(text, Settings(_env_file=None).limits())

    def test_default_limits_allow_moderate_requests(self):
        limits = Settings(_env_file=None).limits()
        assert len(evaluate_expression("3^1000", limits).digits) == 478
        assert len(evaluate_expression("400!", limits).digits) == 869


class TestEnvironment:

    def test_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("BIGINT_MAX_EXPONENT", "42")
        monkeypatch.setenv("BIGINT_PROMPT", "? ")
        s = Settings(_env_file=None)
        assert s.max_exponent == 42
        assert s.prompt == "? "

    def test_list_from_json(self, monkeypatch):
        monkeypatch.setenv("BIGINT_EXIT_COMMANDS", '["q", "bye"]')
        assert Settings(_env_file=None).exit_commands == ["q", "bye"]

    def test_unprefixed_ignored(self, monkeypatch):
        monkeypatch.setenv("MAX_EXPONENT", "1")
        assert Settings(_env_file=None).max_exponent == 10_000

    def test_dotenv_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("BIGINT_MAX_FACTORIAL=12\nUNRELATED=1\n")
        assert Settings(_env_file=env_file).max_factorial == 12

    def test_get_settings_is_cached(self, monkeypatch):
        monkeypatch.setenv("BIGINT_LOG_LEVEL", "debug")
        first = get_settings()
        assert first.log_level == "DEBUG"
        monkeypatch.setenv("BIGINT_LOG_LEVEL", "error")
        assert get_settings() is first
        get_settings.cache_clear()
        assert get_settings().log_level == "ERROR"


class TestValidation:

    def test_log_level_upper_cased(self):
        assert Settings(_env_file=None, log_level="info").log_level == "INFO"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    @pytest.mark.parametrize("field", [
        "max_exponent", "max_factorial", "max_expression_length",
        "max_result_digits",
    ])
    def test_negative_limits_rejected(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: -1})

    def test_zero_length_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_expression_length=0)

    def test_exit_commands_trimmed(self):
        s = Settings(_env_file=None, exit_commands=[" stop ", ""])
        assert s.exit_commands == ["stop"]

    def test_exit_commands_required(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, exit_commands=["  "])

    def test_assignment_validated(self):
        s = Settings(_env_file=None)
        with pytest.raises(ValidationError):
            s.max_factorial = -5
