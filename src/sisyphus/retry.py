"""Retry policy configuration for outbound requests."""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Sequence

ResponseFailedFilter = Callable[[Any], Awaitable[bool]]
FailedAttemptCallback = Callable[[int], Awaitable[None]]


async def _never_failed(response: Any) -> bool:
    return False


async def _noop(attempt: int) -> None:
    return None


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for one retried request.

    Attributes:
        max_attempts: Total number of attempts, including the first one.
        response_failed_filter: Async predicate; returning True marks a
            successfully transported response as a failed attempt.
        on_failed_attempt: Async callback awaited with the zero-based index
            of every failed attempt, the last one included. Use it for
            delays, backoff or telemetry.
    """
    max_attempts: int = 1
    response_failed_filter: ResponseFailedFilter = field(default=_never_failed)
    on_failed_attempt: FailedAttemptCallback = field(default=_noop)

    def __post_init__(self) -> None:
        """Validate configuration."""
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int):
            raise TypeError("max_attempts must be an int")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if not callable(self.response_failed_filter):
            raise TypeError("response_failed_filter must be callable")
        if not callable(self.on_failed_attempt):
            raise TypeError("on_failed_attempt must be callable")


def backoff_hook(delays: Sequence[float]) -> FailedAttemptCallback:
    """Build an ``on_failed_attempt`` callback sleeping from a delay table.

    After failed attempt ``i`` the callback sleeps ``delays[i]`` seconds;
    once the table runs out the last delay repeats. An empty table never
    sleeps.
    """
    table = tuple(float(delay) for delay in delays)
    if any(delay < 0 for delay in table):
        raise ValueError("delays must be >= 0")

    async def _sleep(attempt: int) -> None:
        if not table:
            return
        delay = table[attempt] if attempt < len(table) else table[-1]
        await asyncio.sleep(delay)

    return _sleep
