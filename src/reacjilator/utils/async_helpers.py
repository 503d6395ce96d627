"""Async utilities and the bridge's exception hierarchy.

This module provides:
- Custom exceptions for the reaction translation pipeline
- The randomized startup delay applied before each event is processed
- Timeout wrappers for async operations
"""

from __future__ import annotations

import asyncio
import builtins
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

log = structlog.get_logger()

T = TypeVar("T")

Delay = Callable[[], Awaitable[float]]


# =============================================================================
# Custom Exceptions
# =============================================================================


class BridgeError(Exception):
    """Base exception for all bridge errors."""


class AuthenticationError(BridgeError):
    """Inbound request failed signature verification."""


class FetchError(BridgeError):
    """Failed to fetch the reacted-to message and its thread."""


class TranslationError(BridgeError):
    """The translation provider rejected or failed the request."""


class PostError(BridgeError):
    """Failed to post the translated reply."""


class TimeoutError(BridgeError):
    """Operation timed out."""


# =============================================================================
# Startup Delay
# =============================================================================


def random_jitter(max_ms: int, rng: random.Random | None = None) -> Delay:
    """Create a delay that sleeps a uniformly random time in [0, max_ms).

    Reactions arriving together (several users, or webhook redeliveries)
    are spread out before they hit ``conversations.replies``.

    Args:
        max_ms: Exclusive upper bound of the delay in milliseconds.
        rng: Random source, for deterministic tests.

    Returns:
        An async callable returning the number of seconds slept.
    """
    source = rng or random.Random()

    async def delay() -> float:
        seconds = source.random() * max_ms / 1000
        await asyncio.sleep(seconds)
        return seconds

    return delay


async def no_delay() -> float:
    """Delay that returns immediately."""
    return 0.0


# =============================================================================
# Timeout Utilities
# =============================================================================


async def with_timeout(
    coro: Awaitable[T],
    timeout: float,
    error_message: str | None = None,
) -> T:
    """Execute an awaitable with a timeout.

    Args:
        coro: The coroutine to execute.
        timeout: Timeout in seconds.
        error_message: Custom error message for timeout.

    Returns:
        The result of the coroutine.

    Raises:
        TimeoutError: If the operation times out.
    """
    try:
        return await asyncio.wait_for(coro, timeout=timeout)
    except builtins.TimeoutError as e:
        msg = error_message or f"Operation timed out after {timeout}s"
        log.warning("operation_timeout", timeout=timeout)
        raise TimeoutError(msg) from e
