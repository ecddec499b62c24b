"""Tests for the exponential backoff executor."""
import pytest

from bot.exceptions import ProviderError, ShapeError
from bot.llm.backoff import retry_with_backoff


class Flaky:
    """Operation that fails a fixed number of times, then returns a value."""

    def __init__(self, failures: int, result="ok"):
        self.failures = failures
        self.result = result
        self.calls = 0
        self.raised = []

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            error = ProviderError(f"boom {self.calls}")
            self.raised.append(error)
            raise error
        return self.result


class TestRetryWithBackoff:

    async def test_success_first_try_no_delay(self, fake_sleep):
        operation = Flaky(failures=0)

        result = await retry_with_backoff(operation, "op", sleep=fake_sleep)

        assert result == "ok"
        assert operation.calls == 1
        assert fake_sleep.delays == []

    async def test_fails_twice_then_succeeds(self, fake_sleep):
        """Two failures: waits 1s, then 2s, and returns the third result."""
        operation = Flaky(failures=2, result={"lesson": True})

        result = await retry_with_backoff(operation, "op", sleep=fake_sleep)

        assert result == {"lesson": True}
        assert operation.calls == 3
        assert fake_sleep.delays == [1.0, 2.0]

    async def test_always_fails_reraises_last_error(self, fake_sleep):
        """Three attempts, two delays, and the very last exception object propagates."""
        operation = Flaky(failures=10)

        with pytest.raises(ProviderError) as exc_info:
            await retry_with_backoff(operation, "op", sleep=fake_sleep)

        assert operation.calls == 3
        assert fake_sleep.delays == [1.0, 2.0]
        assert exc_info.value is operation.raised[-1]

    async def test_shape_errors_are_retried_too(self, fake_sleep):
        calls = []

        async def operation():
            calls.append(1)
            raise ShapeError("missing quiz")

        with pytest.raises(ShapeError):
            await retry_with_backoff(operation, "op", sleep=fake_sleep)

        assert len(calls) == 3

    async def test_custom_attempts_and_delay(self, fake_sleep):
        operation = Flaky(failures=3)

        result = await retry_with_backoff(
            operation, "op", max_attempts=4, initial_delay_ms=500, sleep=fake_sleep,
        )

        assert result == "ok"
        assert fake_sleep.delays == [0.5, 1.0, 2.0]

    async def test_failures_are_logged_with_attempt_and_label(self, fake_sleep, caplog):
        operation = Flaky(failures=1)

        with caplog.at_level("WARNING", logger="bot.llm.backoff"):
            await retry_with_backoff(operation, "generatePlacementQuiz", sleep=fake_sleep)

        assert "Attempt 1/3 for generatePlacementQuiz failed" in caplog.text
