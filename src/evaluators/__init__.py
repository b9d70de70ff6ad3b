"""Rule evaluators for the alert engine."""

from evaluators.anomaly_evaluator import AnomalyEvaluator, calculate_statistics, evaluate_anomaly
from evaluators.condition_evaluator import (
    ConditionEvaluator,
    evaluate_conditions,
    evaluate_group,
    evaluate_single_condition,
)
from evaluators.models import (
    ConditionResult,
    EvaluationContext,
    EvaluationResult,
    InsufficientDataError,
    PriceStatistics,
    RuleEvaluator,
)
from evaluators.news_evaluator import NewsTriggerEvaluator, evaluate_news_trigger
from evaluators.operators import compare_values, get_field_value, operator_to_symbol

__all__ = [
    "AnomalyEvaluator",
    "ConditionEvaluator",
    "ConditionResult",
    "EvaluationContext",
    "EvaluationResult",
    "InsufficientDataError",
    "NewsTriggerEvaluator",
    "PriceStatistics",
    "RuleEvaluator",
    "calculate_statistics",
    "compare_values",
    "evaluate_anomaly",
    "evaluate_conditions",
    "evaluate_group",
    "evaluate_news_trigger",
    "evaluate_single_condition",
    "get_field_value",
    "operator_to_symbol",
]
