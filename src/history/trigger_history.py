# src/history/trigger_history.py
"""In-memory trigger history."""
from collections import Counter, defaultdict
from collections.abc import Sequence
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from alerts.models import Alert, AlertStatus, AlertTriggerEvent
from gate.alert_gate import to_zone
from history.models import AlertStatistics


AVERAGE_WINDOW_DAYS = 30


class TriggerHistory:
    """Keeps emitted trigger events per alert.

    ``count_triggers_on`` matches the gate's trigger-counter signature, so a
    history can back the daily limit directly. Days are calendar days in the
    configured timezone.
    """

    def __init__(self, timezone: str = "UTC"):
        """Initialize an empty history.

        Args:
            timezone: Zone that defines calendar days.
        """
        self._tz = ZoneInfo(timezone)
        self._events: dict[str, list[AlertTriggerEvent]] = defaultdict(list)

    def __len__(self) -> int:
        return sum(len(events) for events in self._events.values())

    def record(self, event: AlertTriggerEvent) -> None:
        """Record an emitted trigger event."""
        self._events[event.alert_id].append(event)

    def events_for(self, alert_id: str) -> list[AlertTriggerEvent]:
        """Events of one alert, oldest first."""
        return sorted(self._events.get(alert_id, []), key=lambda e: to_zone(e.triggered_at, self._tz))

    def all_events(self) -> list[AlertTriggerEvent]:
        """Every recorded event, oldest first."""
        events = [event for events in self._events.values() for event in events]
        return sorted(events, key=lambda e: to_zone(e.triggered_at, self._tz))

    def count_triggers_on(self, alert_id: str, day: date) -> int:
        """Number of times the alert fired on ``day``."""
        return sum(
            1
            for event in self._events.get(alert_id, [])
            if self._local_date(event.triggered_at) == day
        )

    def count_triggers_today(self, alert_id: str, today: date | None = None) -> int:
        """Number of times the alert fired today."""
        if today is None:
            today = datetime.now(self._tz).date()
        return self.count_triggers_on(alert_id, today)

    def clear(self, before: datetime | None = None) -> None:
        """Forget events, or only events older than ``before``."""
        if before is None:
            self._events.clear()
            return

        cutoff = to_zone(before, self._tz)
        for alert_id in list(self._events.keys()):
            self._events[alert_id] = [
                event
                for event in self._events[alert_id]
                if to_zone(event.triggered_at, self._tz) >= cutoff
            ]
            if not self._events[alert_id]:
                del self._events[alert_id]

    def statistics(self, alerts: Sequence[Alert], now: datetime | None = None) -> AlertStatistics:
        """Summarize alert activity as of ``now``.

        Args:
            alerts: Alerts to report on; also used to resolve each event's rule type.
            now: Reference time. Defaults to the current time.

        Returns:
            AlertStatistics for the recorded events.
        """
        now = to_zone(now, self._tz) if now is not None else datetime.now(self._tz)
        today = now.date()
        week_start = today - timedelta(days=today.weekday())
        month_start = today.replace(day=1)
        average_start = today - timedelta(days=AVERAGE_WINDOW_DAYS - 1)

        events = self.all_events()
        days = [self._local_date(event.triggered_at) for event in events]

        alert_types = {alert.id: alert.type for alert in alerts}
        ticker_counts = Counter(event.ticker for event in events)
        type_counts = Counter(
            alert_types[event.alert_id] for event in events if event.alert_id in alert_types
        )

        return AlertStatistics(
            total_alerts=len(alerts),
            active_alerts=sum(1 for alert in alerts if alert.status == AlertStatus.ACTIVE),
            triggered_today=sum(1 for d in days if d == today),
            triggered_this_week=sum(1 for d in days if week_start <= d <= today),
            triggered_this_month=sum(1 for d in days if month_start <= d <= today),
            average_triggers_per_day=sum(1 for d in days if average_start <= d <= today) / AVERAGE_WINDOW_DAYS,
            most_triggered_ticker=ticker_counts.most_common(1)[0][0] if ticker_counts else "",
            most_triggered_alert_type=type_counts.most_common(1)[0][0] if type_counts else None,
        )

    def _local_date(self, value: datetime) -> date:
        return to_zone(value, self._tz).date()
