# src/batching/alert_batcher.py
"""Per-ticker batching of trigger events."""
import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from alerts.models import AlertTriggerEvent


logger = logging.getLogger(__name__)


# Receives (key, events). May return an awaitable, which is scheduled as a task.
BatchCallback = Callable[[str, list[AlertTriggerEvent]], Awaitable[None] | None]


@dataclass
class _Batch:
    """Pending events for one key and the timer that will flush them."""

    events: list[AlertTriggerEvent] = field(default_factory=list)
    handle: asyncio.TimerHandle | None = None
    deadline: float | None = None  # event loop time


class AlertBatcher:
    """Coalesces bursts of trigger events per instrument.

    Every new event for a key restarts that key's window, so a burst is
    delivered as one batch once the key has been quiet for ``window_minutes``.
    Timers run on the asyncio event loop, which serializes appends and
    flushes for the same key. A failing callback is logged and never prevents
    the key's buffer and timer from being cleared.
    """

    def __init__(self) -> None:
        self._batches: dict[str, _Batch] = {}
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending_keys(self) -> list[str]:
        """Keys with buffered events."""
        return [key for key, batch in self._batches.items() if batch.events]

    def pending_count(self, key: str) -> int:
        """Number of buffered events for ``key``."""
        batch = self._batches.get(key)
        return len(batch.events) if batch else 0

    def pending_deadline(self, key: str) -> float | None:
        """Event loop time at which ``key``'s batch will be delivered, None if nothing is pending."""
        batch = self._batches.get(key)
        if batch is None or not batch.events:
            return None
        return batch.deadline

    def add_to_batch(
        self,
        key: str,
        event: AlertTriggerEvent,
        window_minutes: float,
        on_ready: BatchCallback,
    ) -> None:
        """Add an event to the key's batch and restart the key's window.

        Must be called from a running event loop.

        Args:
            key: Batch key, normally the ticker.
            event: Trigger event to buffer.
            window_minutes: Quiet period after which the batch is delivered.
            on_ready: Called once with (key, events) when the window expires.
        """
        loop = asyncio.get_running_loop()

        batch = self._batches.setdefault(key, _Batch())
        batch.events.append(event)

        if batch.handle is not None:
            batch.handle.cancel()

        delay = window_minutes * 60
        batch.handle = loop.call_later(delay, self._on_window_expired, key, on_ready)
        batch.deadline = loop.time() + delay

        logger.debug(f"Batched event {event.id} for {key} ({len(batch.events)} pending)")

    def flush_all(self, on_ready: BatchCallback) -> None:
        """Deliver every pending batch now.

        Timers are cancelled first. Each key's callback is isolated, and all
        buffers are cleared afterwards even if a callback fails.
        """
        for batch in self._batches.values():
            if batch.handle is not None:
                batch.handle.cancel()

        try:
            for key, batch in list(self._batches.items()):
                if not batch.events:
                    continue
                try:
                    self._deliver(key, list(batch.events), on_ready)
                except Exception as e:
                    logger.error(f"Error in batch callback for {key}: {e}")
        finally:
            self._batches.clear()

    def cancel_all(self) -> None:
        """Drop all pending batches without delivering them."""
        for batch in self._batches.values():
            if batch.handle is not None:
                batch.handle.cancel()

        dropped = sum(len(batch.events) for batch in self._batches.values())
        if dropped:
            logger.warning(f"Dropped {dropped} batched events")
        self._batches.clear()

    async def drain(self) -> None:
        """Wait for deliveries started from coroutine callbacks."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _on_window_expired(self, key: str, on_ready: BatchCallback) -> None:
        """Timer callback: deliver the key's batch and clear its state."""
        batch = self._batches.get(key)
        if batch is None:
            return

        try:
            if batch.events:
                self._deliver(key, list(batch.events), on_ready)
        except Exception as e:
            logger.error(f"Error in batch callback for {key}: {e}")
        finally:
            self._batches.pop(key, None)

    def _deliver(self, key: str, events: list[AlertTriggerEvent], on_ready: BatchCallback) -> None:
        logger.info(f"Delivering batch of {len(events)} events for {key}")
        result = on_ready(key, events)

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(lambda t: self._on_delivery_done(key, t))

    def _on_delivery_done(self, key: str, task: asyncio.Future) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Error in batch callback for {key}: {error}")
