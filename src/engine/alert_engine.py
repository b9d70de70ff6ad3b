"""Alert evaluation engine."""

import logging
import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime

from alerts.models import Alert, AlertStatus, AlertTriggerEvent, RuleType
from engine.models import EngineResult
from engine.settings import EngineSettings
from evaluators.anomaly_evaluator import AnomalyEvaluator
from evaluators.condition_evaluator import ConditionEvaluator
from evaluators.models import EvaluationContext, EvaluationResult, RuleEvaluator
from evaluators.news_evaluator import NewsTriggerEvaluator
from gate.alert_gate import AlertGate, TriggerCounter, to_zone
from models.market_data import MarketData, NewsData, PriceDataPoint


logger = logging.getLogger(__name__)


def default_evaluators(settings: EngineSettings) -> dict[RuleType, RuleEvaluator]:
    """Evaluator for every rule type."""
    condition_evaluator = ConditionEvaluator()
    return {
        RuleType.THRESHOLD: condition_evaluator,
        RuleType.MULTI_CONDITION: condition_evaluator,
        RuleType.NEWS_TRIGGERED: NewsTriggerEvaluator(settings.news_sentiment_threshold),
        RuleType.ANOMALY: AnomalyEvaluator(settings.default_anomaly_config),
    }


class AlertEngine:
    """Decides whether an alert fires for a market snapshot.

    Evaluation order:
    1. Skip alerts that are not ACTIVE
    2. Skip snapshots for a different ticker
    3. Gate: expiry, quiet hours, cooldown, daily limit
    4. Dispatch to the evaluator for the alert's rule type
    5. Build a trigger event if the evaluator fired

    The engine performs no I/O and never modifies the alert.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        gate: AlertGate | None = None,
        evaluators: Mapping[RuleType, RuleEvaluator] | None = None,
        count_triggers: TriggerCounter | None = None,
    ):
        """Initialize the engine.

        Args:
            settings: Engine settings. Defaults to EngineSettings().
            gate: Gate to use. Built from settings and ``count_triggers``
                when omitted.
            evaluators: Evaluator per rule type. Must cover every RuleType.
            count_triggers: Trigger-history lookup for the daily limit.

        Raises:
            ValueError: If ``evaluators`` misses a rule type.
        """
        self._settings = settings or EngineSettings()
        self._gate = gate or AlertGate(
            timezone=self._settings.timezone,
            count_triggers=count_triggers,
        )
        self._evaluators = dict(evaluators) if evaluators is not None else default_evaluators(self._settings)

        missing = [t.value for t in RuleType if t not in self._evaluators]
        if missing:
            raise ValueError(f"No evaluator registered for rule types: {', '.join(missing)}")

    @property
    def gate(self) -> AlertGate:
        return self._gate

    async def evaluate(
        self,
        alert: Alert,
        market_data: MarketData,
        news_data: NewsData | None = None,
        historical_data: Sequence[PriceDataPoint] | None = None,
        now: datetime | None = None,
    ) -> EngineResult:
        """Evaluate a single alert against market and news data.

        Args:
            alert: Alert to evaluate.
            market_data: Current snapshot for the alert's ticker.
            news_data: Aggregated news for the ticker, if available.
            historical_data: Price history for the statistical anomaly test.
            now: Evaluation time. Defaults to the current time in the
                configured timezone.

        Returns:
            EngineResult with the trigger event when the alert fired.
        """
        now = to_zone(now, self._gate.tz) if now is not None else self._gate.now()

        if alert.status != AlertStatus.ACTIVE:
            return EngineResult(triggered=False, reason=f"Alert is {alert.status.value}")

        if market_data.ticker != alert.ticker:
            logger.warning(
                f"Alert {alert.id} watches {alert.ticker} but got market data for {market_data.ticker}"
            )
            return EngineResult(
                triggered=False,
                reason=f"Ticker mismatch: expected {alert.ticker}, got {market_data.ticker}",
            )

        gate_status = self._gate.check(alert, now)
        if not gate_status.is_open:
            blocking = gate_status.blocking_check
            logger.info(f"Alert {alert.id} suppressed by {blocking.name}: {blocking.reason}")
            return EngineResult(triggered=False, reason=blocking.reason, gate_status=gate_status)

        evaluator = self._evaluators.get(alert.type)
        if evaluator is None:
            logger.warning(f"Unknown alert type for alert {alert.id}: {alert.type.value}")
            return EngineResult(
                triggered=False,
                reason=f"Unknown alert type: {alert.type.value}",
                gate_status=gate_status,
            )

        context = EvaluationContext(
            alert=alert,
            market_data=market_data,
            news_data=news_data,
            historical_data=list(historical_data) if historical_data is not None else None,
        )

        try:
            result = evaluator.evaluate(context)
        except Exception as e:
            logger.error(f"Error evaluating alert {alert.id} ({alert.type.value}): {e}")
            return EngineResult(
                triggered=False,
                reason=f"Evaluation failed: {e}",
                gate_status=gate_status,
            )

        if not result.triggered:
            return EngineResult(
                triggered=False,
                reason=result.reason,
                conditions_met=list(result.conditions_met),
                gate_status=gate_status,
            )

        event = self._build_event(alert, market_data, news_data, result, now)
        logger.info(f"Alert {alert.id} triggered for {alert.ticker}: {result.reason}")

        return EngineResult(
            triggered=True,
            event=event,
            reason=result.reason,
            conditions_met=list(result.conditions_met),
            gate_status=gate_status,
        )

    def _build_event(
        self,
        alert: Alert,
        market_data: MarketData,
        news_data: NewsData | None,
        result: EvaluationResult,
        now: datetime,
    ) -> AlertTriggerEvent:
        """Create the trigger event for a fired alert."""
        return AlertTriggerEvent(
            id=str(uuid.uuid4()),
            alert_id=alert.id,
            ticker=alert.ticker,
            triggered_at=now,
            trigger_reason=result.reason,
            conditions_met=list(result.conditions_met),
            price_at_trigger=market_data.price,
            volume_at_trigger=market_data.volume,
            news_count=news_data.news_count if news_data is not None else None,
            sentiment=news_data.average_sentiment if news_data is not None else None,
        )
