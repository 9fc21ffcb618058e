import numpy as np
import pandas as pd
from ..errors import InsufficientDataError
from ..models.price import DailyBucket, PriceSeries, ensure_ascending


# --------------------------
# Moving average
# --------------------------
def moving_average(series: PriceSeries, period: int = 7) -> float:
    if period <= 0:
        raise ValueError("period must be positive")
    if len(series) < period:
        raise InsufficientDataError(
            f"Not enough price data to calculate moving average "
            f"(need {period}, have {len(series)})"
        )
    return float(np.mean(series.prices[-period:]))


# --------------------------
# Daily buckets (UTC)
# --------------------------
def daily_buckets(series: PriceSeries) -> list[DailyBucket]:
    """
    Group samples by UTC calendar day. Each bucket closes on the
    last sample of its day; buckets come back oldest first.
    """
    ensure_ascending(series.samples)
    if not series.samples:
        return []

    index = pd.to_datetime([s.timestamp for s in series.samples], utc=True)
    prices = pd.Series(series.prices, index=index)
    grouped = prices.groupby(index.date)

    return [
        DailyBucket(day=day, close=float(close), samples=int(count))
        for day, close, count in zip(grouped.last().index, grouped.last(), grouped.size())
    ]


# --------------------------
# Day over day change
# --------------------------
def day_over_day_change(series: PriceSeries) -> float:
    """
    Percentage change between the last two daily closes.
    Positive means the price fell, negative means it rose.
    """
    buckets = daily_buckets(series)
    if len(buckets) < 2:
        raise InsufficientDataError(
            f"Need at least 2 days of prices, have {len(buckets)}"
        )

    old_price = buckets[-2].close
    new_price = buckets[-1].close
    return ((old_price - new_price) / old_price) * 100


# --------------------------
# Volatility
# --------------------------
def percent_changes(series: PriceSeries) -> np.ndarray:
    prices = np.array(series.prices, dtype=float)
    return np.diff(prices) / prices[:-1] * 100


def volatility(series: PriceSeries) -> float:
    """Population std dev of consecutive percentage changes."""
    if len(series) < 2:
        raise InsufficientDataError("Need at least 2 prices to compute volatility")
    return float(np.std(percent_changes(series), ddof=0))
