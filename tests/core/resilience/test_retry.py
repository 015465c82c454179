"""Tests for async retry with exponential backoff and jitter."""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from core.errors import AuthError, OneNoteError, PermanentError, ThrottlingError, TransientError
from core.resilience.retry import (
    AUTH_RETRY,
    DEFAULT_RETRY,
    RetryConfig,
    call_with_retry,
    with_retry_async,
)

# No real sleeping in tests
NO_DELAY = RetryConfig(max_attempts=3, base_delay=0.0, max_delay=0.0)


class TestRetryConfig:
    """Tests for RetryConfig."""

    def test_default_values(self):
        config = RetryConfig()
        assert config.max_attempts == 3
        assert config.base_delay == 1.0
        assert config.max_delay == 30.0
        assert config.exponential_base == 2.0
        assert config.respect_permanent is True
        assert config.respect_retry_after is True
        assert config.never_retry == set()

    def test_type_conversion_from_strings(self):
        """Config handles string inputs (e.g., from YAML)."""
        config = RetryConfig(
            max_attempts="5",
            base_delay="2.5",
            max_delay="60",
            exponential_base="3",
            respect_permanent="false",
        )
        assert config.max_attempts == 5
        assert config.base_delay == 2.5
        assert config.max_delay == 60.0
        assert config.exponential_base == 3.0
        assert config.respect_permanent is False

    def test_presets(self):
        assert DEFAULT_RETRY.max_attempts == 3
        assert AUTH_RETRY.max_attempts == 2
        assert AUTH_RETRY.base_delay == 0.5

    def test_delay_within_equal_jitter_bounds(self):
        config = RetryConfig(base_delay=2.0, max_delay=100.0)
        for attempt in range(4):
            base = 2.0 * (2.0**attempt)
            delay = config.get_delay(attempt)
            assert base / 2 <= delay <= base

    def test_delay_capped_at_max(self):
        config = RetryConfig(base_delay=10.0, max_delay=5.0)
        assert config.get_delay(5) == 5.0

    def test_delay_respects_retry_after(self):
        config = RetryConfig(max_delay=60.0)
        assert config.get_delay(0, ThrottlingError("slow", retry_after=7.0)) == 7.0

    def test_should_retry_transient(self):
        assert NO_DELAY.should_retry(TransientError("x"), 0)

    def test_should_not_retry_on_last_attempt(self):
        assert not NO_DELAY.should_retry(TransientError("x"), 2)

    def test_should_not_retry_auth_or_permanent(self):
        assert not NO_DELAY.should_retry(AuthError("x"), 0)
        assert not NO_DELAY.should_retry(PermanentError("x"), 0)

    def test_never_retry_overrides(self):
        config = RetryConfig(never_retry={TransientError})
        assert not config.should_retry(TransientError("x"), 0)

    def test_unknown_errors_retried_by_default(self):
        assert NO_DELAY.should_retry(OneNoteError("odd"), 0)
        assert NO_DELAY.should_retry(UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"), 0)

    def test_retry_unknown_disabled_keeps_transient(self):
        config = RetryConfig(max_attempts=3, base_delay=0.0, retry_unknown="false")
        assert config.retry_unknown is False
        assert not config.should_retry(OneNoteError("odd"), 0)
        assert not config.should_retry(UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"), 0)
        assert config.should_retry(TransientError("blip"), 0)


class TestWithRetryAsync:
    """Tests for the with_retry_async decorator."""

    async def test_success_first_try(self):
        func = AsyncMock(return_value="ok")
        func.__name__ = "func"

        result = await with_retry_async(NO_DELAY)(func)()

        assert result == "ok"
        assert func.await_count == 1

    async def test_retries_transient_then_succeeds(self):
        func = AsyncMock(side_effect=[TransientError("blip"), "ok"])
        func.__name__ = "func"

        result = await with_retry_async(NO_DELAY)(func)()

        assert result == "ok"
        assert func.await_count == 2

    async def test_raises_after_max_attempts(self):
        func = AsyncMock(side_effect=TransientError("down"))
        func.__name__ = "func"

        with pytest.raises(TransientError):
            await with_retry_async(NO_DELAY)(func)()

        assert func.await_count == 3

    async def test_permanent_error_not_retried(self):
        func = AsyncMock(side_effect=PermanentError("nope"))
        func.__name__ = "func"

        with pytest.raises(PermanentError):
            await with_retry_async(NO_DELAY)(func)()

        assert func.await_count == 1

    async def test_wraps_plain_exceptions(self):
        func = AsyncMock(side_effect=ConnectionError("connection refused"))
        func.__name__ = "func"

        with pytest.raises(OneNoteError) as exc_info:
            await with_retry_async(NO_DELAY)(func)()

        assert isinstance(exc_info.value, TransientError)
        assert func.await_count == 3

    async def test_on_retry_callback(self):
        func = AsyncMock(side_effect=[TransientError("blip"), "ok"])
        func.__name__ = "func"
        on_retry = Mock()

        await with_retry_async(NO_DELAY, on_retry=on_retry)(func)()

        on_retry.assert_called_once()
        error, attempt, _delay = on_retry.call_args[0]
        assert isinstance(error, TransientError)
        assert attempt == 0

    async def test_sleeps_between_attempts(self):
        func = AsyncMock(side_effect=[TransientError("blip"), "ok"])
        func.__name__ = "func"
        config = RetryConfig(max_attempts=2, base_delay=1.0)

        with patch("core.resilience.retry.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await with_retry_async(config)(func)()

        sleep.assert_awaited_once()
        assert 0.5 <= sleep.await_args[0][0] <= 1.0


class TestCallWithRetry:
    async def test_passes_arguments(self):
        async def add(a, b=0):
            return a + b

        assert await call_with_retry(add, 1, b=2, config=NO_DELAY) == 3

    async def test_uses_runtime_config(self):
        func = AsyncMock(side_effect=TransientError("down"))
        func.__name__ = "func"

        with pytest.raises(TransientError):
            await call_with_retry(func, config=RetryConfig(max_attempts=1))

        assert func.await_count == 1
