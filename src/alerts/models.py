# src/alerts/models.py
"""Alert rule definitions and the trigger event the engine emits."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RuleType(str, Enum):
    """Kind of rule, selects the evaluator."""

    THRESHOLD = "THRESHOLD"
    MULTI_CONDITION = "MULTI_CONDITION"
    NEWS_TRIGGERED = "NEWS_TRIGGERED"
    ANOMALY = "ANOMALY"


class AlertStatus(str, Enum):
    ACTIVE = "ACTIVE"
    TRIGGERED = "TRIGGERED"
    SNOOZED = "SNOOZED"
    DISMISSED = "DISMISSED"
    EXPIRED = "EXPIRED"
    DISABLED = "DISABLED"


class AlertPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ConditionField(str, Enum):
    """Market or news value a condition reads."""

    PRICE = "PRICE"
    PRICE_CHANGE = "PRICE_CHANGE"  # percent vs previous close
    VOLUME = "VOLUME"
    VOLUME_RATIO = "VOLUME_RATIO"  # volume / average volume
    PE_RATIO = "PE_RATIO"
    RSI = "RSI"
    MOVING_AVG_50 = "MOVING_AVG_50"
    MOVING_AVG_200 = "MOVING_AVG_200"
    NEWS_SENTIMENT = "NEWS_SENTIMENT"
    MARKET_CAP = "MARKET_CAP"


class ConditionOperator(str, Enum):
    GREATER_THAN = "GREATER_THAN"
    LESS_THAN = "LESS_THAN"
    GREATER_THAN_EQUAL = "GREATER_THAN_EQUAL"
    LESS_THAN_EQUAL = "LESS_THAN_EQUAL"
    EQUAL = "EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    PERCENTAGE_CHANGE = "PERCENTAGE_CHANGE"
    CROSSES_ABOVE = "CROSSES_ABOVE"
    CROSSES_BELOW = "CROSSES_BELOW"


class GroupLogic(str, Enum):
    AND = "AND"
    OR = "OR"


class UserAction(str, Enum):
    """What the user did with a trigger event."""

    PENDING = "PENDING"
    VIEWED = "VIEWED"
    DISMISSED = "DISMISSED"
    SNOOZED = "SNOOZED"


TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"


class Condition(BaseModel):
    """A single (field, operator, value) check."""

    model_config = ConfigDict(frozen=True)

    id: str
    field: ConditionField
    operator: ConditionOperator
    value: float
    baseline_value: Optional[float] = None


class ConditionGroup(BaseModel):
    """Conditions combined with one boolean operator."""

    model_config = ConfigDict(frozen=True)

    id: str
    logic: GroupLogic
    conditions: list[Condition] = Field(default_factory=list)


class AlertFrequency(BaseModel):
    """How often an alert may fire.

    Attributes:
        max_per_day: Maximum triggers per calendar day.
        cooldown_minutes: Minimum minutes between two triggers.
        batching_enabled: Coalesce same-ticker triggers before delivery.
        batching_window_minutes: Rolling window used when batching.
    """

    model_config = ConfigDict(frozen=True)

    max_per_day: int = Field(default=3, ge=1, le=100)
    cooldown_minutes: float = Field(default=60, ge=0)
    batching_enabled: bool = True
    batching_window_minutes: float = Field(default=15, ge=1, le=1440)


class QuietHours(BaseModel):
    """Do-not-disturb window.

    Attributes:
        enabled: Whether the window applies at all.
        start_time: Start of the window, "HH:MM" 24h.
        end_time: End of the window, "HH:MM" 24h. May be before start_time
            for overnight windows.
        days: Weekdays the window applies on, 0 = Sunday through 6 = Saturday.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    start_time: str = Field(default="22:00", pattern=TIME_OF_DAY_PATTERN)
    end_time: str = Field(default="08:00", pattern=TIME_OF_DAY_PATTERN)
    days: list[int] = Field(default_factory=lambda: [0, 1, 2, 3, 4, 5, 6])

    @field_validator("days")
    @classmethod
    def validate_days(cls, v: list[int]) -> list[int]:
        """Validate that every day is in 0..6."""
        invalid = [d for d in v if d < 0 or d > 6]
        if invalid:
            raise ValueError(f"Invalid weekday numbers: {invalid}. Must be 0 (Sunday) to 6 (Saturday)")
        return v


class AnomalyConfig(BaseModel):
    """Thresholds for the anomaly detector."""

    model_config = ConfigDict(frozen=True)

    price_change_threshold: float = Field(default=15.0, ge=0, le=100)
    volume_spike_multiplier: float = Field(default=5.0, ge=1, le=100)
    statistical_sigma: float = Field(default=2.0, ge=0.5, le=5)
    requires_no_news: bool = True
    news_lookback_hours: int = Field(default=24, ge=1, le=168)


class Alert(BaseModel):
    """A user-defined watch rule.

    Alerts are owned by the alert repository. The engine reads them and never
    changes them; bookkeeping updates go through ``mark_triggered``.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: Optional[str] = None
    ticker: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)

    type: RuleType
    priority: AlertPriority = AlertPriority.MEDIUM
    status: AlertStatus = AlertStatus.ACTIVE

    condition_groups: list[ConditionGroup] = Field(default_factory=list)
    anomaly_config: Optional[AnomalyConfig] = None

    frequency: AlertFrequency = Field(default_factory=AlertFrequency)
    quiet_hours: QuietHours = Field(default_factory=QuietHours)

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    last_triggered_at: Optional[datetime] = None
    triggered_count: int = Field(default=0, ge=0)

    expires_at: Optional[datetime] = None

    notify_via_app: bool = True
    notify_via_push: bool = True
    notify_via_email: bool = False


class AlertTriggerEvent(BaseModel):
    """Record of an alert firing.

    ``user_action``, ``action_at`` and ``snoozed_until`` are updated by the
    delivery layer after emission.
    """

    id: str
    alert_id: str
    ticker: str

    triggered_at: datetime
    trigger_reason: str
    conditions_met: list[str] = Field(default_factory=list)

    price_at_trigger: float
    volume_at_trigger: Optional[float] = None
    news_count: Optional[int] = None
    sentiment: Optional[float] = None

    user_action: UserAction = UserAction.PENDING
    action_at: Optional[datetime] = None
    snoozed_until: Optional[datetime] = None
