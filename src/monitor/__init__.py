"""Monitor module for running evaluation cycles."""

from .alert_monitor import AlertMonitor
from .models import EvaluationSummary
from .settings import MonitorSettings

__all__ = [
    "AlertMonitor",
    "EvaluationSummary",
    "MonitorSettings",
]
