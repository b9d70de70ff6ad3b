# src/alerts/factory.py
"""Builders for alert definitions."""
import uuid
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from alerts.models import (
    Alert,
    AlertTriggerEvent,
    Condition,
    ConditionField,
    ConditionGroup,
    ConditionOperator,
    GroupLogic,
    RuleType,
)


def create_condition(
    field: ConditionField,
    operator: ConditionOperator,
    value: float,
    baseline_value: float | None = None,
) -> Condition:
    """Create a condition with a fresh id."""
    return Condition(
        id=str(uuid.uuid4()),
        field=field,
        operator=operator,
        value=value,
        baseline_value=baseline_value,
    )


def create_condition_group(
    logic: GroupLogic,
    conditions: Iterable[Condition] = (),
) -> ConditionGroup:
    """Create a condition group with a fresh id."""
    return ConditionGroup(
        id=str(uuid.uuid4()),
        logic=logic,
        conditions=list(conditions),
    )


def create_alert(
    ticker: str,
    name: str,
    rule_type: RuleType,
    condition_groups: Iterable[ConditionGroup] = (),
    **overrides: Any,
) -> Alert:
    """Create an active alert with default frequency and quiet-hours policies.

    Args:
        ticker: Instrument the alert watches.
        name: Display name.
        rule_type: Which evaluator handles the alert.
        condition_groups: Groups for THRESHOLD / MULTI_CONDITION alerts.
        **overrides: Any other Alert field (e.g. ``anomaly_config``, ``frequency``).

    Returns:
        A validated Alert.
    """
    now = datetime.now()
    fields: dict[str, Any] = {
        "id": str(uuid.uuid4()),
        "ticker": ticker.upper(),
        "name": name,
        "type": rule_type,
        "condition_groups": list(condition_groups),
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return Alert(**fields)


def mark_triggered(alert: Alert, event: AlertTriggerEvent) -> Alert:
    """Return a copy of ``alert`` with trigger bookkeeping applied.

    The copy is what the alert repository persists; the original is untouched.
    """
    return alert.model_copy(
        update={
            "last_triggered_at": event.triggered_at,
            "triggered_count": alert.triggered_count + 1,
            "updated_at": event.triggered_at,
        }
    )
