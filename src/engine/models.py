"""Data models for the alert engine."""

from dataclasses import dataclass, field

from alerts.models import AlertTriggerEvent
from gate.models import GateStatus


@dataclass
class EngineResult:
    """Outcome of evaluating one alert.

    Attributes:
        triggered: Whether the alert fired.
        event: The trigger event, set only when triggered.
        reason: Why the alert did or did not fire.
        conditions_met: Satisfied conditions or detected signals, also kept
            when an anomaly was suppressed by news.
        gate_status: Gate result, set when the gate ran.
    """

    triggered: bool
    event: AlertTriggerEvent | None = None
    reason: str | None = None
    conditions_met: list[str] = field(default_factory=list)
    gate_status: GateStatus | None = None
