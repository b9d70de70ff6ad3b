"""Evaluation cycle over a set of alerts."""

import inspect
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta

from alerts.factory import mark_triggered
from alerts.models import Alert, AlertTriggerEvent
from batching.alert_batcher import AlertBatcher, BatchCallback
from engine.alert_engine import AlertEngine
from history.trigger_history import TriggerHistory
from models.market_data import MarketData, NewsData, PriceDataPoint
from monitor.models import EvaluationSummary
from monitor.settings import MonitorSettings


logger = logging.getLogger(__name__)


class AlertMonitor:
    """Evaluates many alerts and hands their events to delivery.

    A failure while evaluating one alert is logged and counted; it never stops
    the rest of the cycle. Fired events go into the batcher (keyed by ticker)
    when batching is enabled for the alert, otherwise straight to ``on_deliver``.
    """

    def __init__(
        self,
        engine: AlertEngine,
        settings: MonitorSettings | None = None,
        batcher: AlertBatcher | None = None,
        history: TriggerHistory | None = None,
        on_deliver: BatchCallback | None = None,
    ):
        """Initialize the monitor.

        Args:
            engine: Engine that evaluates single alerts.
            settings: Monitor settings. Defaults to MonitorSettings().
            batcher: Batcher for coalescing events. A new one is created if omitted.
            history: Trigger history to record emitted events in.
            on_deliver: Receives (ticker, events) for each delivery.
        """
        self._engine = engine
        self._settings = settings or MonitorSettings()
        self._batcher = batcher or AlertBatcher()
        self._history = history
        self._on_deliver = on_deliver

    @property
    def batcher(self) -> AlertBatcher:
        return self._batcher

    async def run_cycle(
        self,
        alerts: Sequence[Alert],
        market_data: Mapping[str, MarketData],
        news: Mapping[str, NewsData] | None = None,
        history: Mapping[str, Sequence[PriceDataPoint]] | None = None,
        now: datetime | None = None,
    ) -> EvaluationSummary:
        """Evaluate every alert against the snapshot for its ticker.

        Args:
            alerts: Alerts to evaluate.
            market_data: Market snapshot per ticker.
            news: Aggregated news per ticker.
            history: Price history per ticker.
            now: Evaluation time shared by all alerts in the cycle.

        Returns:
            EvaluationSummary of the cycle.
        """
        news = news or {}
        history = history or {}
        summary = EvaluationSummary(timestamp=now or datetime.now())

        if self._history is not None:
            self._prune_history(summary.timestamp)

        logger.info(f"Evaluating {len(alerts)} alerts")

        for alert in alerts:
            snapshot = market_data.get(alert.ticker)
            if snapshot is None:
                logger.warning(f"No market data for ticker: {alert.ticker}")
                summary.skipped += 1
                continue

            try:
                result = await self._engine.evaluate(
                    alert,
                    snapshot,
                    news.get(alert.ticker),
                    history.get(alert.ticker),
                    now=now,
                )
            except Exception as e:
                logger.error(f"Error evaluating alert {alert.id}: {e}")
                summary.errors += 1
                continue

            summary.evaluated += 1

            if not result.triggered or result.event is None:
                continue

            summary.triggered += 1
            summary.events.append(result.event)
            summary.updated_alerts.append(mark_triggered(alert, result.event))

            if self._history is not None and self._settings.record_history:
                self._history.record(result.event)

            await self._dispatch(alert, result.event)

        logger.info(
            f"Evaluation complete: {summary.evaluated} evaluated, {summary.triggered} triggered, "
            f"{summary.skipped} skipped, {summary.errors} errors"
        )
        return summary

    def _prune_history(self, now: datetime) -> None:
        """Drop history events older than the retention window."""
        before = len(self._history)
        self._history.clear(before=now - timedelta(days=self._settings.history_retention_days))
        dropped = before - len(self._history)
        if dropped:
            logger.debug(f"Pruned {dropped} trigger events from history")

    async def flush(self) -> None:
        """Deliver all batched events now and wait for async deliveries."""
        self._batcher.flush_all(self._deliver_batch)
        await self._batcher.drain()

    async def _dispatch(self, alert: Alert, event: AlertTriggerEvent) -> None:
        """Batch the event or deliver it right away."""
        if self._settings.batching_enabled and alert.frequency.batching_enabled:
            self._batcher.add_to_batch(
                alert.ticker,
                event,
                alert.frequency.batching_window_minutes,
                self._deliver_batch,
            )
            return

        try:
            result = self._deliver_batch(alert.ticker, [event])
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Error delivering event {event.id} for {alert.ticker}: {e}")

    def _deliver_batch(self, ticker: str, events: list[AlertTriggerEvent]):
        if self._on_deliver is None:
            logger.debug(f"No delivery callback; {len(events)} events for {ticker} not delivered")
            return None
        return self._on_deliver(ticker, events)
