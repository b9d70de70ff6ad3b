"""Data models for the alert monitor."""

from dataclasses import dataclass, field
from datetime import datetime

from alerts.models import Alert, AlertTriggerEvent


@dataclass
class EvaluationSummary:
    """Result of one evaluation cycle over many alerts.

    Attributes:
        evaluated: Alerts the engine evaluated.
        triggered: Alerts that fired.
        skipped: Alerts without market data for their ticker.
        errors: Alerts whose evaluation raised.
        events: Trigger events emitted in this cycle.
        updated_alerts: Copies of fired alerts with trigger bookkeeping applied,
            for the alert repository to persist.
        timestamp: When the cycle ran.
    """

    evaluated: int = 0
    triggered: int = 0
    skipped: int = 0
    errors: int = 0
    events: list[AlertTriggerEvent] = field(default_factory=list)
    updated_alerts: list[Alert] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)
