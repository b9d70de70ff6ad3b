"""Configuration for the alert monitor."""

from pydantic import BaseModel, Field


class MonitorSettings(BaseModel):
    """Settings for AlertMonitor.

    Attributes:
        batching_enabled: Allow batching at all; alerts also opt in through
            their frequency policy.
        record_history: Record emitted events in the trigger history.
        history_retention_days: Events older than this are dropped from the
            trigger history at the start of each cycle. Keep it at 31 or more
            for month and 30-day statistics.
    """

    batching_enabled: bool = True
    record_history: bool = True
    history_retention_days: int = Field(default=31, ge=1, le=366)
