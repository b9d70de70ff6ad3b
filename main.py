# main.py
"""Run one alert evaluation cycle over a JSON snapshot file."""
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from alerts.models import Alert, AlertTriggerEvent
from analyzers import SentimentAnalyzer
from config.settings import Settings
from engine import AlertEngine
from history import TriggerHistory
from models.market_data import MarketData, NewsData, NewsItem, PriceDataPoint
from monitor import AlertMonitor, EvaluationSummary


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

CONFIG_PATH = Path("config/settings.yaml")


def print_startup_banner(settings: Settings) -> None:
    """Print system startup banner."""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.system.name}")
    logger.info(f"Version: {settings.system.version}")
    logger.info(f"Timezone: {settings.engine.timezone}")
    logger.info("=" * 60)


def load_and_validate_config(config_path: Path = CONFIG_PATH) -> Settings:
    """Load and validate configuration.

    Falls back to defaults (plus environment overrides) when the YAML file
    does not exist.

    Returns:
        Settings object.

    Raises:
        SystemExit: If the YAML file cannot be parsed or validated.
    """
    load_dotenv()
    logger.info("✓ Loaded environment variables")

    if not config_path.exists():
        logger.warning(f"{config_path} not found, using defaults")
        return Settings().with_env_overrides()

    try:
        settings = Settings.from_yaml(config_path)
        logger.info(f"✓ Settings loaded from {config_path}")
    except Exception as e:
        logger.error(f"Failed to parse {config_path}: {e}")
        sys.exit(1)

    return settings


def load_snapshot(path: Path, analyzer: SentimentAnalyzer) -> dict[str, Any]:
    """Load alerts and market snapshots from a JSON document.

    Expected keys: ``alerts`` (list), ``market_data`` (list), optional
    ``news`` (list of {ticker, articles}) and ``history`` (ticker -> points).
    News sentiment is computed from the articles when not supplied.

    Raises:
        SystemExit: If the file is missing or invalid.
    """
    if not path.exists():
        logger.error(f"Snapshot file not found: {path}")
        sys.exit(1)

    try:
        document = json.loads(path.read_text())
        if not isinstance(document, dict):
            raise TypeError(f"expected a JSON object, got {type(document).__name__}")

        alerts = [Alert.model_validate(a) for a in document.get("alerts", [])]
        market_data = {
            m.ticker: m for m in (MarketData.model_validate(d) for d in document.get("market_data", []))
        }

        news: dict[str, NewsData] = {}
        for entry in document.get("news", []):
            if "average_sentiment" in entry:
                item = NewsData.model_validate(entry)
            else:
                articles = [NewsItem.model_validate(a) for a in entry.get("articles", [])]
                item = analyzer.build_news_data(entry["ticker"], articles)
            news[item.ticker] = item

        history = {
            ticker: [PriceDataPoint.model_validate(p) for p in points]
            for ticker, points in document.get("history", {}).items()
        }
    except (json.JSONDecodeError, ValidationError, KeyError, AttributeError, TypeError) as e:
        logger.error(f"Invalid snapshot file {path}: {e}")
        sys.exit(1)

    logger.info(f"✓ Loaded {len(alerts)} alerts, {len(market_data)} tickers from {path}")
    return {"alerts": alerts, "market_data": market_data, "news": news, "history": history}


def log_batch(ticker: str, events: list[AlertTriggerEvent]) -> None:
    """Delivery callback: log a delivered batch."""
    logger.info(f"🔔 {ticker}: {len(events)} alert(s)")
    for event in events:
        logger.info(f"   - {event.trigger_reason}")


def initialize_components(settings: Settings) -> tuple[SentimentAnalyzer, AlertMonitor]:
    """Build analyzer, history, engine and monitor from settings."""
    sentiment = settings.analyzers.sentiment
    analyzer = SentimentAnalyzer(
        positive_keywords=sentiment.positive_keywords,
        negative_keywords=sentiment.negative_keywords,
        keyword_weight=sentiment.keyword_weight,
    )
    logger.info("✓ SentimentAnalyzer initialized")

    history = TriggerHistory(timezone=settings.engine.timezone)
    engine = AlertEngine(
        settings=settings.engine,
        count_triggers=history.count_triggers_on,
    )
    logger.info("✓ AlertEngine initialized")

    monitor = AlertMonitor(
        engine=engine,
        settings=settings.monitor,
        history=history,
        on_deliver=log_batch,
    )
    logger.info("✓ AlertMonitor initialized")

    return analyzer, monitor


async def run(snapshot_path: Path, config_path: Path = CONFIG_PATH) -> EvaluationSummary:
    """Load everything, run one cycle and deliver all batches."""
    settings = load_and_validate_config(config_path)
    logging.getLogger().setLevel(settings.system.log_level)
    print_startup_banner(settings)

    analyzer, monitor = initialize_components(settings)
    snapshot = load_snapshot(snapshot_path, analyzer)

    summary = await monitor.run_cycle(
        snapshot["alerts"],
        snapshot["market_data"],
        news=snapshot["news"],
        history=snapshot["history"],
    )
    await monitor.flush()

    logger.info(
        f"✅ Evaluation complete: {summary.evaluated} evaluated, {summary.triggered} triggered"
    )
    return summary


def main() -> None:
    if len(sys.argv) != 2:
        logger.error("Usage: python main.py <snapshot.json>")
        sys.exit(1)

    asyncio.run(run(Path(sys.argv[1])))


if __name__ == "__main__":
    main()
