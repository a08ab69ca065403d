"""Shared fixtures for calculator tests."""

from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

from app import create_app
from bigint import BigInteger
from settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep BIGINT_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("BIGINT_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Small limits so guard tests stay fast."""
    return Settings(
        _env_file=None,
        max_expression_length=200,
        max_exponent=500,
        max_factorial=100,
        max_result_digits=300,
    )


@pytest.fixture
def client(settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture
def big() -> BigInteger:
    """A 36-digit value, well past any machine word."""
    return BigInteger("123456789123456789123456789123456789")
