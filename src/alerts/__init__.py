"""Alert rule definitions."""

from alerts.factory import create_alert, create_condition, create_condition_group, mark_triggered
from alerts.models import (
    Alert,
    AlertFrequency,
    AlertPriority,
    AlertStatus,
    AlertTriggerEvent,
    AnomalyConfig,
    Condition,
    ConditionField,
    ConditionGroup,
    ConditionOperator,
    GroupLogic,
    QuietHours,
    RuleType,
    UserAction,
)

__all__ = [
    "Alert",
    "AlertFrequency",
    "AlertPriority",
    "AlertStatus",
    "AlertTriggerEvent",
    "AnomalyConfig",
    "Condition",
    "ConditionField",
    "ConditionGroup",
    "ConditionOperator",
    "GroupLogic",
    "QuietHours",
    "RuleType",
    "UserAction",
    "create_alert",
    "create_condition",
    "create_condition_group",
    "mark_triggered",
]
