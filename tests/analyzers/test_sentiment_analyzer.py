# tests/analyzers/test_sentiment_analyzer.py
import pytest

from analyzers.sentiment_analyzer import SentimentAnalyzer
from analyzers.sentiment_result import SentimentLabel
from models.market_data import NewsItem


def make_article(title: str, description: str | None = None, article_id: str = "n1") -> NewsItem:
    return NewsItem(id=article_id, title=title, description=description)


class TestSentimentAnalyzer:
    def test_analyze_bullish_text(self):
        analyzer = SentimentAnalyzer()
        result = analyzer.analyze("Record high profit as dividend is raised")

        assert result.label == SentimentLabel.BULLISH
        assert result.score == pytest.approx(0.6)
        assert set(result.matched_positive) == {"record high", "profit", "dividend"}

    def test_analyze_bearish_text(self):
        analyzer = SentimentAnalyzer()
        result = analyzer.analyze("Shares plunge after rating downgrade")

        assert result.label == SentimentLabel.BEARISH
        assert result.score == pytest.approx(-0.4)
        assert set(result.matched_negative) == {"plunge", "downgrade"}

    def test_mixed_keywords_cancel(self):
        analyzer = SentimentAnalyzer()
        result = analyzer.analyze("Profit up but debt rises")

        assert result.label == SentimentLabel.NEUTRAL
        assert result.score == pytest.approx(0.0)

    def test_matching_is_case_insensitive(self):
        analyzer = SentimentAnalyzer()
        assert analyzer.analyze("BANKRUPTCY filing").score == pytest.approx(-0.2)

    def test_score_is_clamped(self):
        analyzer = SentimentAnalyzer(keyword_weight=0.5)
        result = analyzer.analyze("plunge decline drop loss crisis")

        assert result.score == -1.0

    def test_analyze_empty_text_returns_neutral(self):
        analyzer = SentimentAnalyzer()

        assert analyzer.analyze("").score == 0.0
        assert analyzer.analyze("   ").label == SentimentLabel.NEUTRAL

    def test_custom_keywords(self):
        analyzer = SentimentAnalyzer(positive_keywords=["рост"], negative_keywords=["падение"])

        assert analyzer.analyze("Падение акций").score == pytest.approx(-0.2)
        assert analyzer.analyze("Рост выручки").score == pytest.approx(0.2)
        assert analyzer.analyze("plunge").score == 0.0

    def test_analyze_article_uses_title_and_description(self):
        analyzer = SentimentAnalyzer()
        article = make_article("Quarterly report", "Company posts a loss amid crisis")

        assert analyzer.analyze_article(article).score == pytest.approx(-0.4)

    def test_analyze_batch(self):
        analyzer = SentimentAnalyzer()
        results = analyzer.analyze_batch([
            make_article("Dividend growth", article_id="n1"),
            make_article("Lawsuit filed", article_id="n2"),
        ])

        assert len(results) == 2
        assert results[0].label == SentimentLabel.BULLISH
        assert results[1].label == SentimentLabel.BEARISH

    def test_calculate_sentiment_is_mean(self):
        analyzer = SentimentAnalyzer()
        articles = [
            make_article("Selloff deepens on sanction risk", article_id="n1"),  # -0.6
            make_article("Analysts see expansion", article_id="n2"),  # +0.2
        ]

        assert analyzer.calculate_sentiment(articles) == pytest.approx(-0.2)

    def test_calculate_sentiment_no_articles(self):
        assert SentimentAnalyzer().calculate_sentiment([]) == 0.0

    def test_build_news_data(self):
        analyzer = SentimentAnalyzer()
        articles = [make_article("Shares plunge", article_id="n1")]

        news = analyzer.build_news_data("GAZP", articles)

        assert news.ticker == "GAZP"
        assert news.news_count == 1
        assert news.average_sentiment == pytest.approx(-0.2)
        assert news.articles == articles
