# src/evaluators/anomaly_evaluator.py
"""Evaluator for ANOMALY alerts."""
import math
from collections.abc import Sequence

import pandas as pd

from alerts.models import AnomalyConfig
from evaluators.models import (
    EvaluationContext,
    EvaluationResult,
    InsufficientDataError,
    PriceStatistics,
)
from models.market_data import MarketData, NewsData, PriceDataPoint


# Minimum history length before the statistical outlier test runs
MIN_HISTORY_POINTS = 20

EXPLAINED_BY_NEWS = "Anomaly detected but explained by news"


def calculate_statistics(data: Sequence[PriceDataPoint]) -> PriceStatistics:
    """Calculate mean and population standard deviation of prices.

    Args:
        data: Historical price points.

    Returns:
        PriceStatistics for the series.

    Raises:
        InsufficientDataError: If ``data`` is empty.
    """
    if len(data) == 0:
        raise InsufficientDataError("calculate_statistics requires at least one data point")

    prices = pd.Series([point.price for point in data], dtype="float64")
    return PriceStatistics(
        mean=float(prices.mean()),
        std_dev=float(prices.std(ddof=0)),
    )


def _z_score(price: float, stats: PriceStatistics) -> float:
    """Distance from the mean in standard deviations.

    A flat history has zero spread, so any move off it is infinitely far.
    """
    deviation = abs(price - stats.mean)
    if stats.std_dev == 0:
        return 0.0 if deviation == 0 else math.inf
    return deviation / stats.std_dev


def evaluate_anomaly(
    market_data: MarketData,
    news_data: NewsData | None,
    historical_data: Sequence[PriceDataPoint] | None,
    config: AnomalyConfig | None = None,
) -> EvaluationResult:
    """Detect price, volume and statistical anomalies.

    Signals are OR-ed. When ``requires_no_news`` is set and the ticker has
    news, the result is not triggered but still lists the detected signals.

    Args:
        market_data: Current snapshot.
        news_data: Aggregated news, if any.
        historical_data: Price history for the z-score test.
        config: Detector thresholds. Defaults to ``AnomalyConfig()``.

    Returns:
        EvaluationResult with one description per detected signal.
    """
    config = config or AnomalyConfig()
    conditions_met: list[str] = []

    # 1. Price change vs previous close
    price_change = market_data.price_change_percent
    is_price_anomaly = abs(price_change) >= config.price_change_threshold
    if is_price_anomaly:
        conditions_met.append(
            f"Price change: {price_change:.2f}% (threshold: {config.price_change_threshold:g}%)"
        )

    # 2. Volume spike vs average volume
    is_volume_spike = False
    if market_data.average_volume:
        is_volume_spike = market_data.volume >= market_data.average_volume * config.volume_spike_multiplier
        if is_volume_spike:
            ratio = market_data.volume / market_data.average_volume
            conditions_met.append(f"Volume spike: {ratio:.1f}x average")

    # 3. Statistical outlier vs history
    is_statistical_outlier = False
    if historical_data and len(historical_data) >= MIN_HISTORY_POINTS:
        stats = calculate_statistics(historical_data)
        z_score = _z_score(market_data.price, stats)
        is_statistical_outlier = z_score >= config.statistical_sigma
        if is_statistical_outlier:
            if math.isinf(z_score):
                conditions_met.append(
                    f"Statistical outlier: moved off flat history at {stats.mean:.2f}"
                )
            else:
                conditions_met.append(f"Statistical outlier: {z_score:.2f}σ from mean")

    has_recent_news = news_data is not None and news_data.news_count > 0
    if config.requires_no_news and has_recent_news:
        return EvaluationResult(
            triggered=False,
            reason=EXPLAINED_BY_NEWS,
            conditions_met=conditions_met,
        )

    triggered = is_price_anomaly or is_volume_spike or is_statistical_outlier
    reason = f"Anomaly detected: {'; '.join(conditions_met)}" if triggered else "No anomaly detected"
    return EvaluationResult(triggered=triggered, reason=reason, conditions_met=conditions_met)


class AnomalyEvaluator:
    """Runs the anomaly detector with the alert's config or a default one."""

    def __init__(self, default_config: AnomalyConfig | None = None):
        self.default_config = default_config or AnomalyConfig()

    def evaluate(self, context: EvaluationContext) -> EvaluationResult:
        return evaluate_anomaly(
            context.market_data,
            context.news_data,
            context.historical_data,
            context.alert.anomaly_config or self.default_config,
        )
