"""Fixed-delay retry policy for external service calls."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from conceptsheet.core.config import (
    get_max_generation_attempts,
    get_retry_delay_seconds,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class RetryExhaustedError(Exception):
    """Raised when every attempt of a RetryPolicy failed."""

    def __init__(self, attempts: int, last_error: str):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")


@dataclass
class AttemptFailure:
    """Why a single attempt did not count as a success."""

    attempt: int
    message: str


@dataclass(frozen=True)
class RetryPolicy:
    """Run an async operation up to max_attempts times.

    An attempt fails when the operation raises or when ``classify`` returns a
    failure message for its value. A fixed delay separates failed attempts;
    there is no delay after the final one.
    """

    max_attempts: int = 3
    delay_seconds: float = 2.0
    sleep: Sleep = asyncio.sleep

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")

    @classmethod
    def from_config(cls, sleep: Sleep = asyncio.sleep) -> RetryPolicy:
        return cls(
            max_attempts=get_max_generation_attempts(),
            delay_seconds=get_retry_delay_seconds(),
            sleep=sleep,
        )

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        classify: Callable[[T], str | None],
        on_attempt: Callable[[int, int], None] | None = None,
        label: str = "operation",
    ) -> T:
        """Run ``operation`` until ``classify`` accepts its value.

        Args:
            operation: Zero-argument coroutine factory, called once per attempt
            classify: Returns None for a usable value, else a failure message
            on_attempt: Called with (attempt, max_attempts) before each attempt
            label: Name used in log messages

        Returns:
            The first accepted value

        Raises:
            RetryExhaustedError: If every attempt failed
        """
        failure: AttemptFailure | None = None

        for attempt in range(1, self.max_attempts + 1):
            if on_attempt is not None:
                on_attempt(attempt, self.max_attempts)

            try:
                value = await operation()
            except Exception as e:
                failure = AttemptFailure(attempt=attempt, message=str(e) or repr(e))
                logger.warning(
                    "Attempt %d/%d for %s failed: %s",
                    attempt,
                    self.max_attempts,
                    label,
                    e,
                    exc_info=True,
                )
            else:
                message = classify(value)
                if message is None:
                    return value
                failure = AttemptFailure(attempt=attempt, message=message)
                logger.warning(
                    "Attempt %d/%d for %s failed: %s",
                    attempt,
                    self.max_attempts,
                    label,
                    message,
                )

            if attempt < self.max_attempts:
                await self.sleep(self.delay_seconds)

        raise RetryExhaustedError(self.max_attempts, failure.message)
