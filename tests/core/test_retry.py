"""Tests for retry with exponential backoff."""

import asyncio

import pytest

from resume_editor.retry import (
    PermanentError,
    RetryConfig,
    TransientError,
    is_transient_error,
    retry_with_backoff,
)


class TestRetryWithBackoff:
    @pytest.mark.asyncio
    async def test_returns_first_success(self):
        async def ok(value):
            return value * 2

        assert await retry_with_backoff(ok, RetryConfig(max_attempts=3), 21) == 42

    @pytest.mark.asyncio
    async def test_retries_transient_errors(self):
        attempts = []

        async def flaky():
            attempts.append(1)
            if len(attempts) < 3:
                raise TransientError("try again")
            return "done"

        result = await retry_with_backoff(flaky, RetryConfig(max_attempts=3, base_delay=0.0))
        assert result == "done"
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        async def always_down():
            raise ConnectionError("connection refused")

        with pytest.raises(ConnectionError):
            await retry_with_backoff(always_down, RetryConfig(max_attempts=2, base_delay=0.0))

    @pytest.mark.asyncio
    async def test_permanent_errors_are_not_retried(self):
        attempts = []

        async def bad_request():
            attempts.append(1)
            raise ValueError("invalid api key")

        with pytest.raises(PermanentError) as excinfo:
            await retry_with_backoff(bad_request, RetryConfig(max_attempts=3, base_delay=0.0))
        assert len(attempts) == 1
        assert isinstance(excinfo.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_cancellation_is_not_retried(self):
        attempts = []

        async def cancelled():
            attempts.append(1)
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await retry_with_backoff(cancelled, RetryConfig(max_attempts=3, base_delay=0.0))
        assert len(attempts) == 1


class TestIsTransientError:
    @pytest.mark.parametrize(
        "error",
        [
            TransientError("x"),
            ConnectionError("x"),
            TimeoutError("x"),
            RuntimeError("Error code: 429 - rate limit exceeded"),
            RuntimeError("503 Service Unavailable"),
            RuntimeError("model is overloaded"),
        ],
    )
    def test_transient(self, error):
        assert is_transient_error(error)

    @pytest.mark.parametrize("error", [ValueError("invalid api key"), RuntimeError("Empty LLM response: no choices")])
    def test_permanent(self, error):
        assert not is_transient_error(error)


def test_retry_config_from_dict():
    config = RetryConfig.from_dict({"max_attempts": 3, "base_delay": 0.5})
    assert config.max_attempts == 3
    assert config.base_delay == 0.5
    assert RetryConfig.from_dict({}).max_attempts == 1
    assert RetryConfig.from_dict({"max_attempts": 0}).max_attempts == 1
