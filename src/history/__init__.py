"""Trigger history for daily limits and statistics."""

from .models import AlertStatistics
from .trigger_history import TriggerHistory

__all__ = ["AlertStatistics", "TriggerHistory"]
