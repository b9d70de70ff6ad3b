"""Tests for NEWS_TRIGGERED evaluation."""

from alerts.models import Alert, RuleType
from evaluators.models import EvaluationContext
from evaluators.news_evaluator import NewsTriggerEvaluator, evaluate_news_trigger
from models.market_data import MarketData, NewsData


class TestEvaluateNewsTrigger:
    """Tests for evaluate_news_trigger."""

    def test_no_news(self) -> None:
        result = evaluate_news_trigger(None)

        assert result.triggered is False
        assert result.reason == "No news data available"

    def test_zero_articles(self) -> None:
        result = evaluate_news_trigger(NewsData(ticker="GAZP", average_sentiment=-0.9, news_count=0))

        assert result.triggered is False
        assert result.reason == "No news data available"

    def test_negative_sentiment_triggers(self) -> None:
        news = NewsData(ticker="GAZP", average_sentiment=-0.45, news_count=4)

        result = evaluate_news_trigger(news)

        assert result.triggered is True
        assert result.reason == "Negative news sentiment detected: -0.45"
        assert result.conditions_met == ["4 news articles with negative sentiment"]

    def test_threshold_is_strict(self) -> None:
        news = NewsData(ticker="GAZP", average_sentiment=-0.3, news_count=1)

        result = evaluate_news_trigger(news, sentiment_threshold=-0.3)

        assert result.triggered is False
        assert result.reason == "No negative news sentiment"

    def test_missing_sentiment_does_not_trigger(self) -> None:
        news = NewsData(ticker="GAZP", average_sentiment=None, news_count=2)
        assert evaluate_news_trigger(news).triggered is False


class TestNewsTriggerEvaluator:
    def test_custom_threshold(self) -> None:
        alert = Alert(id="a1", ticker="GAZP", name="Gazprom news", type=RuleType.NEWS_TRIGGERED)
        context = EvaluationContext(
            alert=alert,
            market_data=MarketData(ticker="GAZP", price=160.0, previous_close=162.0, volume=0),
            news_data=NewsData(ticker="GAZP", average_sentiment=-0.2, news_count=2),
        )

        assert NewsTriggerEvaluator().evaluate(context).triggered is False
        assert NewsTriggerEvaluator(sentiment_threshold=-0.1).evaluate(context).triggered is True
