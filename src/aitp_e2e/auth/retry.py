"""Bounded polling with a fixed delay between attempts."""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from ..exceptions import RetryExhausted

T = TypeVar("T")


async def poll(
    fetch: Callable[[], Awaitable[Optional[T]]],
    *,
    attempts: int = 5,
    interval: float = 2.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Call ``fetch`` until it returns something other than None.

    Args:
        fetch: Coroutine function returning a result or None.
        attempts: Maximum number of calls.
        interval: Seconds to wait between calls. There is no wait after the
            last call.
        sleep: Sleep implementation, replaceable in tests.

    Returns:
        The first non-None result.

    Raises:
        RetryExhausted: If every attempt returned None.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    for attempt in range(1, attempts + 1):
        result = await fetch()
        if result is not None:
            return result
        if attempt < attempts:
            await sleep(interval)

    raise RetryExhausted(attempts)
