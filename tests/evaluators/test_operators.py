"""Tests for operator comparison and field extraction."""

import pytest

from alerts.models import ConditionField, ConditionOperator
from evaluators.operators import compare_values, get_field_value, operator_to_symbol
from models.market_data import MarketData, NewsData


def make_market_data(**overrides) -> MarketData:
    fields = {
        "ticker": "SBER",
        "price": 255.5,
        "previous_close": 250.0,
        "volume": 3_000_000,
        "average_volume": 1_000_000,
        "pe_ratio": 4.2,
        "rsi": 65.0,
        "moving_avg_50": 240.0,
        "moving_avg_200": 230.0,
        "market_cap": 5.5e12,
    }
    fields.update(overrides)
    return MarketData(**fields)


class TestCompareValues:
    """Tests for compare_values."""

    @pytest.mark.parametrize(
        "actual, operator, target, expected",
        [
            (255.5, ConditionOperator.GREATER_THAN, 250, True),
            (250.0, ConditionOperator.GREATER_THAN, 250, False),
            (249.0, ConditionOperator.LESS_THAN, 250, True),
            (250.0, ConditionOperator.GREATER_THAN_EQUAL, 250, True),
            (250.0, ConditionOperator.LESS_THAN_EQUAL, 250, True),
            (250.005, ConditionOperator.EQUAL, 250, True),
            (250.02, ConditionOperator.EQUAL, 250, False),
            (250.02, ConditionOperator.NOT_EQUAL, 250, True),
            (250.005, ConditionOperator.NOT_EQUAL, 250, False),
            (-6.0, ConditionOperator.PERCENTAGE_CHANGE, 5, True),
            (4.9, ConditionOperator.PERCENTAGE_CHANGE, 5, False),
        ],
    )
    def test_comparisons(self, actual, operator, target, expected) -> None:
        assert compare_values(actual, operator, target) is expected

    @pytest.mark.parametrize(
        "operator", [ConditionOperator.CROSSES_ABOVE, ConditionOperator.CROSSES_BELOW]
    )
    def test_crossing_operators_never_met(self, operator) -> None:
        """Crossings need a previous observation the snapshot does not carry."""
        assert compare_values(1_000.0, operator, 0.0) is False
        assert compare_values(-1_000.0, operator, 0.0) is False


class TestOperatorToSymbol:
    def test_symbols(self) -> None:
        assert operator_to_symbol(ConditionOperator.GREATER_THAN) == ">"
        assert operator_to_symbol(ConditionOperator.LESS_THAN_EQUAL) == "≤"
        assert operator_to_symbol(ConditionOperator.NOT_EQUAL) == "≠"
        assert operator_to_symbol(ConditionOperator.PERCENTAGE_CHANGE) == "%Δ"


class TestGetFieldValue:
    """Tests for get_field_value."""

    def test_market_fields(self) -> None:
        data = make_market_data()

        assert get_field_value(ConditionField.PRICE, data) == 255.5
        assert get_field_value(ConditionField.VOLUME, data) == 3_000_000
        assert get_field_value(ConditionField.PE_RATIO, data) == 4.2
        assert get_field_value(ConditionField.RSI, data) == 65.0
        assert get_field_value(ConditionField.MOVING_AVG_50, data) == 240.0
        assert get_field_value(ConditionField.MOVING_AVG_200, data) == 230.0
        assert get_field_value(ConditionField.MARKET_CAP, data) == 5.5e12

    def test_price_change(self) -> None:
        data = make_market_data()
        assert get_field_value(ConditionField.PRICE_CHANGE, data) == pytest.approx(2.2)

    def test_price_change_unavailable_without_previous_close(self) -> None:
        data = make_market_data(previous_close=0.0)
        assert get_field_value(ConditionField.PRICE_CHANGE, data) is None

    def test_volume_ratio(self) -> None:
        data = make_market_data()
        assert get_field_value(ConditionField.VOLUME_RATIO, data) == pytest.approx(3.0)

    @pytest.mark.parametrize("average_volume", [None, 0])
    def test_volume_ratio_unavailable(self, average_volume) -> None:
        data = make_market_data(average_volume=average_volume)
        assert get_field_value(ConditionField.VOLUME_RATIO, data) is None

    def test_missing_optional_indicator(self) -> None:
        data = make_market_data(pe_ratio=None)
        assert get_field_value(ConditionField.PE_RATIO, data) is None

    def test_news_sentiment(self) -> None:
        data = make_market_data()
        news = NewsData(ticker="SBER", average_sentiment=-0.4, news_count=2)

        assert get_field_value(ConditionField.NEWS_SENTIMENT, data, news) == -0.4
        assert get_field_value(ConditionField.NEWS_SENTIMENT, data) is None
