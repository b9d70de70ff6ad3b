# src/analyzers/sentiment_result.py
from enum import Enum

from pydantic import BaseModel, Field


class SentimentLabel(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class SentimentResult(BaseModel):
    """Result from scoring one news article."""

    score: float = Field(ge=-1.0, le=1.0, description="Sentiment score, -1 very negative to 1 very positive")
    matched_positive: list[str] = Field(default_factory=list)
    matched_negative: list[str] = Field(default_factory=list)

    @property
    def label(self) -> SentimentLabel:
        """Direction of the score."""
        if self.score > 0:
            return SentimentLabel.BULLISH
        if self.score < 0:
            return SentimentLabel.BEARISH
        return SentimentLabel.NEUTRAL

    @property
    def matched_keywords(self) -> list[str]:
        return [*self.matched_positive, *self.matched_negative]
