"""Data models for trigger history."""

from dataclasses import dataclass

from alerts.models import RuleType


@dataclass
class AlertStatistics:
    """Summary of alert activity.

    Attributes:
        total_alerts: Number of alerts considered.
        active_alerts: Alerts with ACTIVE status.
        triggered_today: Triggers on the current day.
        triggered_this_week: Triggers since Monday of the current week.
        triggered_this_month: Triggers since the first of the current month.
        average_triggers_per_day: Triggers over the last 30 days divided by 30.
        most_triggered_ticker: Ticker with the most triggers, "" if none.
        most_triggered_alert_type: Rule type with the most triggers, None if none.
    """

    total_alerts: int
    active_alerts: int
    triggered_today: int
    triggered_this_week: int
    triggered_this_month: int
    average_triggers_per_day: float
    most_triggered_ticker: str
    most_triggered_alert_type: RuleType | None
