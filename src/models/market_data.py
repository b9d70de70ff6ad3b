# src/models/market_data.py
"""Immutable market and news snapshots supplied by the data feeds."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MarketData(BaseModel):
    """A single market data snapshot for one ticker."""

    model_config = ConfigDict(frozen=True)

    ticker: str = Field(..., min_length=1)
    price: float
    previous_close: float
    volume: float = Field(ge=0)
    average_volume: Optional[float] = Field(default=None, ge=0)
    pe_ratio: Optional[float] = None
    rsi: Optional[float] = Field(default=None, ge=0, le=100)
    moving_avg_50: Optional[float] = None
    moving_avg_200: Optional[float] = None
    market_cap: Optional[float] = Field(default=None, ge=0)
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def price_change_percent(self) -> float:
        """Percent change from previous close, 0.0 when there is no previous close."""
        if self.previous_close == 0:
            return 0.0
        return (self.price - self.previous_close) / self.previous_close * 100


class NewsItem(BaseModel):
    """A news article as delivered by the news feed."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: Optional[str] = None
    source: str = ""
    published_at: datetime = Field(default_factory=datetime.now)
    image_url: Optional[str] = None
    article_url: str = ""
    relevant_assets: list[str] = Field(default_factory=list)


class NewsData(BaseModel):
    """Aggregated news for a ticker."""

    model_config = ConfigDict(frozen=True)

    ticker: str
    articles: list[NewsItem] = Field(default_factory=list)
    average_sentiment: Optional[float] = Field(default=None, ge=-1.0, le=1.0)
    news_count: int = Field(default=0, ge=0)


class PriceDataPoint(BaseModel):
    """Historical price point used by the statistical anomaly test."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    price: float
    volume: float = Field(default=0, ge=0)
