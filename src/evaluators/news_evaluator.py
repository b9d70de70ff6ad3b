# src/evaluators/news_evaluator.py
"""Evaluator for NEWS_TRIGGERED alerts."""
from evaluators.models import EvaluationContext, EvaluationResult
from models.market_data import NewsData


DEFAULT_SENTIMENT_THRESHOLD = -0.3


def evaluate_news_trigger(
    news_data: NewsData | None,
    sentiment_threshold: float = DEFAULT_SENTIMENT_THRESHOLD,
) -> EvaluationResult:
    """Trigger on negative aggregate news sentiment.

    Args:
        news_data: Aggregated news for the ticker.
        sentiment_threshold: Sentiment strictly below this value triggers.

    Returns:
        EvaluationResult; never triggered without articles or sentiment.
    """
    if news_data is None or news_data.news_count == 0:
        return EvaluationResult(triggered=False, reason="No news data available")

    sentiment = news_data.average_sentiment
    if sentiment is not None and sentiment < sentiment_threshold:
        return EvaluationResult(
            triggered=True,
            reason=f"Negative news sentiment detected: {sentiment:.2f}",
            conditions_met=[f"{news_data.news_count} news articles with negative sentiment"],
        )

    return EvaluationResult(triggered=False, reason="No negative news sentiment")


class NewsTriggerEvaluator:
    """Fires when news sentiment falls below a threshold."""

    def __init__(self, sentiment_threshold: float = DEFAULT_SENTIMENT_THRESHOLD):
        self.sentiment_threshold = sentiment_threshold

    def evaluate(self, context: EvaluationContext) -> EvaluationResult:
        return evaluate_news_trigger(context.news_data, self.sentiment_threshold)
