"""Data models shared by the rule evaluators."""

from dataclasses import dataclass, field
from typing import Protocol

from alerts.models import Alert
from models.market_data import MarketData, NewsData, PriceDataPoint


class InsufficientDataError(ValueError):
    """Raised when a statistic is requested over an empty series."""


@dataclass(frozen=True)
class EvaluationContext:
    """Everything an evaluator may look at for one alert.

    Attributes:
        alert: The rule being evaluated.
        market_data: Current snapshot for the alert's ticker.
        news_data: Aggregated news for the ticker, if fetched.
        historical_data: Price history for the statistical test, if fetched.
    """

    alert: Alert
    market_data: MarketData
    news_data: NewsData | None = None
    historical_data: list[PriceDataPoint] | None = None


@dataclass
class EvaluationResult:
    """Outcome of evaluating one rule.

    Attributes:
        triggered: Whether the rule fired.
        reason: Human-readable explanation.
        conditions_met: Descriptions of the satisfied conditions or detected signals.
    """

    triggered: bool
    reason: str
    conditions_met: list[str] = field(default_factory=list)


@dataclass
class ConditionResult:
    """Outcome of a single condition check."""

    met: bool
    description: str


@dataclass(frozen=True)
class PriceStatistics:
    """Mean and population standard deviation of a price series."""

    mean: float
    std_dev: float


class RuleEvaluator(Protocol):
    """Common interface of all rule evaluators."""

    def evaluate(self, context: EvaluationContext) -> EvaluationResult:
        ...
