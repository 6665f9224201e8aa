"""Unit tests for goai/ai/pacing.py"""

from unittest.mock import AsyncMock, patch

import pytest

from goai.ai.pacing import Pacer


@pytest.mark.asyncio
async def test_bonus_cycles_shorten_the_wait() -> None:
    pacer = Pacer(stored_cycles=5)
    with patch("goai.ai.pacing.sleep", new_callable=AsyncMock) as mock_sleep:
        await pacer.wait_cycle()

    mock_sleep.assert_awaited_once_with(40)
    assert pacer.stored_cycles == 3


@pytest.mark.asyncio
async def test_long_wait_without_bonus_cycles() -> None:
    pacer = Pacer(stored_cycles=0)
    with patch("goai.ai.pacing.sleep", new_callable=AsyncMock) as mock_sleep:
        await pacer.wait_cycle()

    mock_sleep.assert_awaited_once_with(200)
    assert pacer.stored_cycles == 0


@pytest.mark.asyncio
async def test_bonus_cycles_can_be_saved() -> None:
    pacer = Pacer(stored_cycles=5)
    with patch("goai.ai.pacing.sleep", new_callable=AsyncMock) as mock_sleep:
        await pacer.wait_cycle(use_offline_cycles=False)

    mock_sleep.assert_awaited_once_with(200)
    assert pacer.stored_cycles == 5


@pytest.mark.asyncio
async def test_scan_pause() -> None:
    pacer = Pacer()
    with patch("goai.ai.pacing.sleep", new_callable=AsyncMock) as mock_sleep:
        await pacer.scan_pause()

    mock_sleep.assert_awaited_once_with(10)
