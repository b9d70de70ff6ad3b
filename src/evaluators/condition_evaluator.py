# src/evaluators/condition_evaluator.py
"""Evaluator for THRESHOLD and MULTI_CONDITION alerts."""
from collections.abc import Sequence

from alerts.models import Condition, ConditionGroup, GroupLogic
from evaluators.models import ConditionResult, EvaluationContext, EvaluationResult
from evaluators.operators import compare_values, get_field_value, operator_to_symbol
from models.market_data import MarketData, NewsData


NO_CONDITIONS_MET = "No conditions met"


def _format_target(value: float) -> str:
    """Render a condition threshold without a trailing ``.0``."""
    return str(int(value)) if float(value).is_integer() else str(value)


def evaluate_single_condition(
    condition: Condition,
    market_data: MarketData,
    news_data: NewsData | None = None,
) -> ConditionResult:
    """Evaluate one condition against the snapshots.

    A field the snapshot does not carry is never met.
    """
    actual = get_field_value(condition.field, market_data, news_data)

    if actual is None:
        return ConditionResult(
            met=False,
            description=f"{condition.field.value} data unavailable",
        )

    met = compare_values(actual, condition.operator, condition.value)
    description = (
        f"{condition.field.value} {operator_to_symbol(condition.operator)} "
        f"{_format_target(condition.value)} (actual: {actual:.2f})"
    )
    return ConditionResult(met=met, description=description)


def evaluate_group(
    group: ConditionGroup,
    market_data: MarketData,
    news_data: NewsData | None = None,
) -> tuple[bool, list[ConditionResult]]:
    """Evaluate a group with its own AND/OR logic.

    Returns:
        Tuple of (group_met, per-condition results). A group without
        conditions is met under AND and not met under OR.
    """
    results = [
        evaluate_single_condition(condition, market_data, news_data)
        for condition in group.conditions
    ]

    if group.logic == GroupLogic.AND:
        group_met = all(r.met for r in results)
    else:
        group_met = any(r.met for r in results)

    return group_met, results


def evaluate_conditions(
    condition_groups: Sequence[ConditionGroup],
    market_data: MarketData,
    news_data: NewsData | None = None,
) -> EvaluationResult:
    """Evaluate condition groups; any true group triggers the rule.

    Only groups that evaluate true contribute their satisfied conditions.
    """
    conditions_met: list[str] = []
    triggered = False

    for group in condition_groups:
        group_met, results = evaluate_group(group, market_data, news_data)
        if group_met:
            triggered = True
            conditions_met.extend(r.description for r in results if r.met)

    reason = f"Conditions met: {', '.join(conditions_met)}" if triggered else NO_CONDITIONS_MET
    return EvaluationResult(triggered=triggered, reason=reason, conditions_met=conditions_met)


class ConditionEvaluator:
    """Runs an alert's condition groups."""

    def evaluate(self, context: EvaluationContext) -> EvaluationResult:
        return evaluate_conditions(
            context.alert.condition_groups,
            context.market_data,
            context.news_data,
        )
