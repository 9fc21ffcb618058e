from datetime import datetime, timedelta, timezone
import pytest
from token_advisor.models.price import PriceSample, PriceSeries

START = datetime(2025, 1, 1, tzinfo=timezone.utc)


def build_series(prices, step=timedelta(days=1), start=START, token_id="sonic-3"):
    samples = tuple(
        PriceSample(timestamp=start + i * step, price=p) for i, p in enumerate(prices)
    )
    return PriceSeries(token_id=token_id, days=30, samples=samples)


def build_daily_closes(closes, per_day=4):
    """Series with `per_day` samples per UTC day; the last one is the close."""
    prices = []
    for close in closes:
        prices.extend([close * 1.01] * (per_day - 1) + [close])
    return build_series(prices, step=timedelta(hours=24 / per_day))


def market_chart_payload(series: PriceSeries) -> dict:
    return {
        "prices": [
            [int(s.timestamp.timestamp() * 1000), s.price] for s in series.samples
        ]
    }


@pytest.fixture
def month_series():
    closes = [100.0 + (i % 5) for i in range(28)] + [100.0, 95.0]
    return build_daily_closes(closes)
