"""Retry with exponential backoff for async completion calls."""

from __future__ import annotations

import asyncio
import functools
import logging
import random
from typing import TYPE_CHECKING, ParamSpec, TypeVar

from srt_summarizer.summarizer.models import CompletionError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def backoff_delay(
    attempt: int,
    *,
    base_delay: float,
    max_delay: float,
    jitter: float,
) -> float:
    """Delay before retrying after the given (1-based) failed attempt.

    Grows as base_delay * 2**(attempt - 1), capped at max_delay, plus up to
    `jitter` times that value of random spread.
    """
    delay = min(max_delay, base_delay * 2 ** (attempt - 1))
    if jitter > 0:
        delay += random.uniform(0, jitter * delay)  # noqa: S311
    return delay


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    jitter: float = 0.1,
    exceptions: tuple[type[Exception], ...] = (CompletionError,),
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Retry an async function on the given exceptions.

    After `max_attempts` failures the last exception propagates unchanged.
    Any other exception propagates immediately.

    Example:
        @retry(max_attempts=5, base_delay=0.5)
        async def call_model(prompt: str) -> str: ...

    """
    if max_attempts < 1:
        msg = f"max_attempts must be at least 1, got {max_attempts}"
        raise ValueError(msg)

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            attempt = 1
            while True:
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt >= max_attempts:
                        logger.error("Giving up after %d attempts: %s", attempt, e)  # noqa: TRY400
                        raise
                    delay = backoff_delay(
                        attempt,
                        base_delay=base_delay,
                        max_delay=max_delay,
                        jitter=jitter,
                    )
                    logger.warning(
                        "Attempt %d/%d failed (%s), retrying in %.2fs",
                        attempt,
                        max_attempts,
                        e,
                        delay,
                    )
                    await asyncio.sleep(delay)
                    attempt += 1

        return wrapper

    return decorator
