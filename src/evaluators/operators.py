# src/evaluators/operators.py
"""Field extraction and operator comparison helpers."""
from alerts.models import ConditionField, ConditionOperator
from models.market_data import MarketData, NewsData


# Absolute tolerance for EQUAL / NOT_EQUAL
EQUALITY_TOLERANCE = 0.01

OPERATOR_SYMBOLS: dict[ConditionOperator, str] = {
    ConditionOperator.GREATER_THAN: ">",
    ConditionOperator.LESS_THAN: "<",
    ConditionOperator.GREATER_THAN_EQUAL: "≥",
    ConditionOperator.LESS_THAN_EQUAL: "≤",
    ConditionOperator.EQUAL: "=",
    ConditionOperator.NOT_EQUAL: "≠",
    ConditionOperator.PERCENTAGE_CHANGE: "%Δ",
    ConditionOperator.CROSSES_ABOVE: "↑",
    ConditionOperator.CROSSES_BELOW: "↓",
}


def compare_values(actual: float, operator: ConditionOperator, target: float) -> bool:
    """Compare ``actual`` against ``target`` using ``operator``.

    Args:
        actual: Observed value.
        operator: Comparison to apply.
        target: Threshold from the condition. For PERCENTAGE_CHANGE this is the
            minimum absolute percent move.

    Returns:
        True if the condition is met. CROSSES_ABOVE and CROSSES_BELOW need a
        previous observation and always return False.
    """
    if operator == ConditionOperator.GREATER_THAN:
        return actual > target
    elif operator == ConditionOperator.LESS_THAN:
        return actual < target
    elif operator == ConditionOperator.GREATER_THAN_EQUAL:
        return actual >= target
    elif operator == ConditionOperator.LESS_THAN_EQUAL:
        return actual <= target
    elif operator == ConditionOperator.EQUAL:
        return abs(actual - target) < EQUALITY_TOLERANCE
    elif operator == ConditionOperator.NOT_EQUAL:
        return abs(actual - target) >= EQUALITY_TOLERANCE
    elif operator == ConditionOperator.PERCENTAGE_CHANGE:
        return abs(actual) >= target

    # CROSSES_ABOVE / CROSSES_BELOW
    return False


def operator_to_symbol(operator: ConditionOperator) -> str:
    """Display symbol for an operator."""
    return OPERATOR_SYMBOLS.get(operator, str(operator.value))


def get_field_value(
    field: ConditionField,
    market_data: MarketData,
    news_data: NewsData | None = None,
) -> float | None:
    """Read a condition field from the snapshots.

    Returns:
        The numeric value, or None when the snapshot does not carry it.
    """
    if field == ConditionField.PRICE:
        return market_data.price
    elif field == ConditionField.PRICE_CHANGE:
        if market_data.previous_close == 0:
            return None
        return market_data.price_change_percent
    elif field == ConditionField.VOLUME:
        return market_data.volume
    elif field == ConditionField.VOLUME_RATIO:
        if not market_data.average_volume:
            return None
        return market_data.volume / market_data.average_volume
    elif field == ConditionField.PE_RATIO:
        return market_data.pe_ratio
    elif field == ConditionField.RSI:
        return market_data.rsi
    elif field == ConditionField.MOVING_AVG_50:
        return market_data.moving_avg_50
    elif field == ConditionField.MOVING_AVG_200:
        return market_data.moving_avg_200
    elif field == ConditionField.NEWS_SENTIMENT:
        if news_data is None:
            return None
        return news_data.average_sentiment
    elif field == ConditionField.MARKET_CAP:
        return market_data.market_cap

    return None
