"""Gate module for alert suppression checks."""

from .alert_gate import (
    AlertGate,
    TriggerCounter,
    has_reached_daily_limit,
    is_expired,
    is_in_cooldown,
    is_in_quiet_hours,
)
from .models import GateCheckResult, GateStatus

__all__ = [
    "AlertGate",
    "GateCheckResult",
    "GateStatus",
    "TriggerCounter",
    "has_reached_daily_limit",
    "is_expired",
    "is_in_cooldown",
    "is_in_quiet_hours",
]
