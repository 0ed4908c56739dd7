"""Tests for the fixed-delay retry policy."""

import asyncio

import pytest

from conceptsheet.core.retry import RetryExhaustedError, RetryPolicy


def _classify(value):
    return None if value else "empty"


def test_first_success_needs_no_delay(retry_policy, sleep):
    calls = []

    async def operation():
        calls.append(1)
        return "ok"

    assert asyncio.run(retry_policy.run(operation, _classify)) == "ok"
    assert len(calls) == 1
    assert sleep.delays == []


def test_success_on_second_attempt(retry_policy, sleep):
    outcomes = [RuntimeError("flaky"), "ok"]

    async def operation():
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    assert asyncio.run(retry_policy.run(operation, _classify)) == "ok"
    assert sleep.delays == [2.0]


def test_gives_up_after_max_attempts_without_trailing_delay(retry_policy, sleep):
    calls = []
    attempts = []

    async def operation():
        calls.append(1)
        return ""

    with pytest.raises(RetryExhaustedError) as exc_info:
        asyncio.run(
            retry_policy.run(
                operation,
                _classify,
                on_attempt=lambda attempt, total: attempts.append((attempt, total)),
            )
        )

    assert len(calls) == 3
    assert sleep.delays == [2.0, 2.0]
    assert attempts == [(1, 3), (2, 3), (3, 3)]
    assert exc_info.value.attempts == 3
    assert exc_info.value.last_error == "empty"


def test_last_error_is_from_final_attempt(retry_policy):
    errors = [ValueError("first"), ValueError("second"), ValueError("third")]

    async def operation():
        raise errors.pop(0)

    with pytest.raises(RetryExhaustedError) as exc_info:
        asyncio.run(retry_policy.run(operation, _classify))

    assert exc_info.value.last_error == "third"


def test_rejects_invalid_settings():
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)
    with pytest.raises(ValueError):
        RetryPolicy(delay_seconds=-1)
