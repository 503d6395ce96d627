"""Tests for async utility functions."""

from __future__ import annotations

import asyncio
import random
from unittest.mock import AsyncMock, patch

import pytest

from reacjilator.utils.async_helpers import (
    AuthenticationError,
    BridgeError,
    FetchError,
    PostError,
    TimeoutError,
    TranslationError,
    no_delay,
    random_jitter,
    with_timeout,
)


class TestCustomExceptions:
    """Test custom exception classes."""

    @pytest.mark.parametrize(
        "error_class",
        [AuthenticationError, FetchError, TranslationError, PostError, TimeoutError],
    )
    def test_inherits_from_bridge_error(self, error_class: type[BridgeError]) -> None:
        error = error_class("failed")
        assert isinstance(error, BridgeError)
        assert str(error) == "failed"


class TestRandomJitter:
    """Tests for the randomized startup delay."""

    async def test_sleeps_within_bounds(self) -> None:
        with patch("reacjilator.utils.async_helpers.asyncio.sleep", new=AsyncMock()) as sleep:
            delay = random_jitter(5000, rng=random.Random(42))
            for _ in range(50):
                slept = await delay()
                assert 0 <= slept < 5.0
                sleep.assert_awaited_with(slept)

    async def test_deterministic_with_seed(self) -> None:
        with patch("reacjilator.utils.async_helpers.asyncio.sleep", new=AsyncMock()):
            first = [await random_jitter(5000, rng=random.Random(7))() for _ in range(3)]
            second = [await random_jitter(5000, rng=random.Random(7))() for _ in range(3)]
        assert first == second

    async def test_zero_bound(self) -> None:
        assert await random_jitter(0)() == 0.0

    async def test_no_delay(self) -> None:
        assert await no_delay() == 0.0


class TestWithTimeout:
    """Tests for with_timeout."""

    async def test_completes(self) -> None:
        async def quick() -> str:
            return "done"

        assert await with_timeout(quick(), timeout=1.0) == "done"

    async def test_times_out(self) -> None:
        async def slow() -> None:
            await asyncio.sleep(10)

        with pytest.raises(TimeoutError, match="took too long"):
            await with_timeout(slow(), timeout=0.01, error_message="took too long")
