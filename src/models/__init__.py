"""Market and news snapshot models consumed by the alert engine."""

from models.market_data import MarketData, NewsData, NewsItem, PriceDataPoint

__all__ = ["MarketData", "NewsData", "NewsItem", "PriceDataPoint"]
