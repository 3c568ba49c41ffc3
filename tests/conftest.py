"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import httpx
import pytest

from retry_orchestrator.config import Settings
from retry_orchestrator.retry.policy import RetryPolicy, fixed_delay


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.RETRY_MAX_ATTEMPTS = 2
    """
    return Settings(
        APP_NAME="retry-orchestrator (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        RETRY_MAX_ATTEMPTS=5,
        RETRY_INITIAL_DELAY=0.0,
        RETRY_BACKOFF_BASE=2.0,
        RETRY_MAX_DELAY=0.0,
        HTTP_TIMEOUT=5.0,
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def no_wait_policy():
    """Factory for policies that never sleep between attempts.

    Usage:
        def test_something(no_wait_policy):
            policy = no_wait_policy(max_attempts=3)
    """
    def _create(max_attempts: int = 5, **kwargs) -> RetryPolicy:
        return RetryPolicy(max_attempts=max_attempts, backoff=fixed_delay(0), **kwargs)

    return _create


@pytest.fixture
def make_response():
    """Factory fixture to create httpx.Response objects with a given status."""
    def _create(status_code: int = 200, content: bytes = b"ok") -> httpx.Response:
        return httpx.Response(status_code, content=content)

    return _create
