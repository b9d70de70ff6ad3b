"""Configuration for the alert engine."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

from alerts.models import AnomalyConfig


class EngineSettings(BaseModel):
    """Settings for AlertEngine.

    Attributes:
        timezone: Zone for quiet hours and for naive timestamps.
        news_sentiment_threshold: NEWS_TRIGGERED alerts fire below this sentiment.
        default_anomaly_config: Used for ANOMALY alerts that carry no config.
    """

    timezone: str = "UTC"
    news_sentiment_threshold: float = Field(default=-0.3, ge=-1.0, le=1.0)
    default_anomaly_config: AnomalyConfig = Field(default_factory=AnomalyConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate that timezone is a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v
