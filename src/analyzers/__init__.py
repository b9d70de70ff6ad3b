"""Analyzers package for news sentiment."""

from analyzers.sentiment_analyzer import SentimentAnalyzer
from analyzers.sentiment_result import SentimentLabel, SentimentResult

__all__ = [
    "SentimentAnalyzer",
    "SentimentLabel",
    "SentimentResult",
]
