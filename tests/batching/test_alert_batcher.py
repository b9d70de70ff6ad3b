"""Tests for AlertBatcher."""

import asyncio
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from alerts.models import AlertTriggerEvent
from batching.alert_batcher import AlertBatcher


# 30 ms
SHORT_WINDOW = 0.0005


def make_event(event_id: str = "e1", ticker: str = "SBER") -> AlertTriggerEvent:
    return AlertTriggerEvent(
        id=event_id,
        alert_id=f"alert-{event_id}",
        ticker=ticker,
        triggered_at=datetime(2026, 1, 14, 12, 0),
        trigger_reason="Conditions met: PRICE > 250 (actual: 255.50)",
        price_at_trigger=255.5,
    )


class TestAlertBatcherWindow:
    """Timer-driven delivery."""

    @pytest.mark.asyncio
    async def test_batch_delivered_after_window(self) -> None:
        batcher = AlertBatcher()
        callback = MagicMock()

        batcher.add_to_batch("SBER", make_event("e1"), SHORT_WINDOW, callback)
        batcher.add_to_batch("SBER", make_event("e2"), SHORT_WINDOW, callback)

        assert batcher.pending_count("SBER") == 2
        callback.assert_not_called()

        await asyncio.sleep(0.1)

        callback.assert_called_once()
        key, events = callback.call_args.args
        assert key == "SBER"
        assert [e.id for e in events] == ["e1", "e2"]
        assert batcher.pending_keys == []

    @pytest.mark.asyncio
    async def test_new_event_restarts_window(self) -> None:
        batcher = AlertBatcher()
        callback = MagicMock()
        window = 0.002  # 120 ms

        batcher.add_to_batch("SBER", make_event("e1"), window, callback)
        await asyncio.sleep(0.08)
        batcher.add_to_batch("SBER", make_event("e2"), window, callback)
        await asyncio.sleep(0.08)

        # 160 ms after the first event, but only 80 ms after the second
        callback.assert_not_called()

        await asyncio.sleep(0.2)
        callback.assert_called_once()
        assert len(callback.call_args.args[1]) == 2

    @pytest.mark.asyncio
    async def test_keys_are_independent(self) -> None:
        batcher = AlertBatcher()
        callback = MagicMock()

        batcher.add_to_batch("SBER", make_event("e1", "SBER"), SHORT_WINDOW, callback)
        batcher.add_to_batch("GAZP", make_event("e2", "GAZP"), SHORT_WINDOW, callback)
        assert sorted(batcher.pending_keys) == ["GAZP", "SBER"]

        await asyncio.sleep(0.1)

        delivered = {call.args[0]: call.args[1] for call in callback.call_args_list}
        assert set(delivered) == {"SBER", "GAZP"}
        assert len(delivered["SBER"]) == 1

    @pytest.mark.asyncio
    async def test_failing_callback_still_clears_state(self) -> None:
        batcher = AlertBatcher()
        callback = MagicMock(side_effect=RuntimeError("delivery down"))

        batcher.add_to_batch("SBER", make_event("e1"), SHORT_WINDOW, callback)
        await asyncio.sleep(0.1)

        callback.assert_called_once()
        assert batcher.pending_count("SBER") == 0

        # The key starts a fresh batch afterwards
        ok = MagicMock()
        batcher.add_to_batch("SBER", make_event("e2"), SHORT_WINDOW, ok)
        await asyncio.sleep(0.1)
        assert [e.id for e in ok.call_args.args[1]] == ["e2"]

    @pytest.mark.asyncio
    async def test_coroutine_callback(self) -> None:
        batcher = AlertBatcher()
        callback = AsyncMock()

        batcher.add_to_batch("SBER", make_event("e1"), SHORT_WINDOW, callback)
        await asyncio.sleep(0.1)
        await batcher.drain()

        callback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failing_coroutine_callback_is_logged(self, caplog) -> None:
        batcher = AlertBatcher()
        callback = AsyncMock(side_effect=RuntimeError("delivery down"))

        batcher.add_to_batch("SBER", make_event("e1"), SHORT_WINDOW, callback)
        await asyncio.sleep(0.1)
        await batcher.drain()

        assert "delivery down" in caplog.text
        assert batcher.pending_keys == []

    @pytest.mark.asyncio
    async def test_pending_deadline_moves_with_each_event(self) -> None:
        batcher = AlertBatcher()
        loop = asyncio.get_running_loop()

        assert batcher.pending_deadline("SBER") is None

        before = loop.time()
        batcher.add_to_batch("SBER", make_event("e1"), 10, MagicMock())
        first = batcher.pending_deadline("SBER")
        assert first >= before + 600

        await asyncio.sleep(0.01)
        batcher.add_to_batch("SBER", make_event("e2"), 10, MagicMock())
        assert batcher.pending_deadline("SBER") > first

        batcher.cancel_all()
        assert batcher.pending_deadline("SBER") is None

    def test_add_requires_running_loop(self) -> None:
        with pytest.raises(RuntimeError):
            AlertBatcher().add_to_batch("SBER", make_event(), SHORT_WINDOW, MagicMock())


class TestAlertBatcherFlush:
    """flush_all and cancel_all."""

    @pytest.mark.asyncio
    async def test_flush_all_delivers_immediately(self) -> None:
        batcher = AlertBatcher()
        timer_callback = MagicMock()
        flush_callback = MagicMock()

        batcher.add_to_batch("SBER", make_event("e1", "SBER"), 10, timer_callback)
        batcher.add_to_batch("GAZP", make_event("e2", "GAZP"), 10, timer_callback)

        batcher.flush_all(flush_callback)

        assert flush_callback.call_count == 2
        assert batcher.pending_keys == []

        await asyncio.sleep(0.05)
        timer_callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_flush_all_isolates_failures(self) -> None:
        batcher = AlertBatcher()
        delivered: list[str] = []

        def callback(key, events):
            if key == "SBER":
                raise RuntimeError("delivery down")
            delivered.append(key)

        batcher.add_to_batch("SBER", make_event("e1", "SBER"), 10, callback)
        batcher.add_to_batch("GAZP", make_event("e2", "GAZP"), 10, callback)

        batcher.flush_all(callback)

        assert delivered == ["GAZP"]
        assert batcher.pending_keys == []

    @pytest.mark.asyncio
    async def test_cancel_all_drops_events(self) -> None:
        batcher = AlertBatcher()
        callback = MagicMock()

        batcher.add_to_batch("SBER", make_event("e1"), SHORT_WINDOW, callback)
        batcher.cancel_all()
        await asyncio.sleep(0.1)

        callback.assert_not_called()
        assert batcher.pending_count("SBER") == 0
