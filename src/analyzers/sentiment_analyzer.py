# src/analyzers/sentiment_analyzer.py
import logging
from collections.abc import Iterable, Sequence

from analyzers.sentiment_result import SentimentResult
from models.market_data import NewsData, NewsItem


logger = logging.getLogger(__name__)


DEFAULT_NEGATIVE_KEYWORDS = (
    "plunge",
    "decline",
    "drop",
    "loss",
    "crisis",
    "bankruptcy",
    "risk",
    "debt",
    "downgrade",
    "default",
    "sanction",
    "lawsuit",
    "selloff",
)

DEFAULT_POSITIVE_KEYWORDS = (
    "growth",
    "profit",
    "surge",
    "record high",
    "beat",
    "dividend",
    "upgrade",
    "expansion",
    "innovation",
    "leader",
    "breakthrough",
    "rally",
)


class SentimentAnalyzer:
    """Keyword-based sentiment scoring for news articles.

    Each matched keyword moves an article's score by ``keyword_weight``
    (negative keywords down, positive keywords up). Article scores are clamped
    to [-1, 1]; a batch score is the plain mean of its articles.
    """

    DEFAULT_KEYWORD_WEIGHT = 0.2

    def __init__(
        self,
        positive_keywords: Iterable[str] | None = None,
        negative_keywords: Iterable[str] | None = None,
        keyword_weight: float = DEFAULT_KEYWORD_WEIGHT,
    ):
        """Initialize the sentiment analyzer.

        Args:
            positive_keywords: Keywords that raise the score. Defaults to
                English financial vocabulary.
            negative_keywords: Keywords that lower the score.
            keyword_weight: Score step per matched keyword.
        """
        self.positive_keywords = [
            k.lower() for k in (positive_keywords if positive_keywords is not None else DEFAULT_POSITIVE_KEYWORDS)
        ]
        self.negative_keywords = [
            k.lower() for k in (negative_keywords if negative_keywords is not None else DEFAULT_NEGATIVE_KEYWORDS)
        ]
        self.keyword_weight = keyword_weight

    def analyze(self, text: str) -> SentimentResult:
        """Score a single piece of text."""
        if not text or not text.strip():
            return SentimentResult(score=0.0)

        lowered = text.lower()
        matched_negative = [k for k in self.negative_keywords if k in lowered]
        matched_positive = [k for k in self.positive_keywords if k in lowered]

        score = self.keyword_weight * (len(matched_positive) - len(matched_negative))
        score = max(-1.0, min(1.0, score))

        return SentimentResult(
            score=score,
            matched_positive=matched_positive,
            matched_negative=matched_negative,
        )

    def analyze_article(self, article: NewsItem) -> SentimentResult:
        """Score an article from its title and description."""
        return self.analyze(f"{article.title} {article.description or ''}")

    def analyze_batch(self, articles: Sequence[NewsItem]) -> list[SentimentResult]:
        """Score each article."""
        return [self.analyze_article(article) for article in articles]

    def calculate_sentiment(self, articles: Sequence[NewsItem]) -> float:
        """Average sentiment across articles, 0.0 (neutral) for none."""
        if not articles:
            return 0.0

        results = self.analyze_batch(articles)
        return sum(r.score for r in results) / len(results)

    def build_news_data(self, ticker: str, articles: Sequence[NewsItem]) -> NewsData:
        """Aggregate raw articles into the NewsData the evaluators consume."""
        sentiment = self.calculate_sentiment(articles)
        logger.debug(f"{ticker}: {len(articles)} articles, sentiment {sentiment:.2f}")
        return NewsData(
            ticker=ticker,
            articles=list(articles),
            average_sentiment=sentiment,
            news_count=len(articles),
        )
