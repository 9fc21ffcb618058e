import random
from typing import Optional

# (max |priceDrop|, (low, high)) checked in order; last band catches the rest
RISE_BANDS = [
    (3.0, (1.0, 1.3)),
    (10.0, (1.4, 1.7)),
    (float("inf"), (1.8, 1.9)),
]

DROP_BANDS = [
    (3.0, (0.7, 1.0)),
    (10.0, (0.3, 0.6)),
    (float("inf"), (0.0, 0.2)),
]


def drop_factor_band(price_drop: float) -> tuple[float, float]:
    """Return the (min, max) band for a signed day-over-day change."""
    bands = RISE_BANDS if price_drop < 0 else DROP_BANDS
    magnitude = abs(price_drop)
    for limit, band in bands:
        if magnitude <= limit:
            return band
    return bands[-1][1]


def get_price_drop_factor(price_drop: float, rng: Optional[random.Random] = None) -> float:
    """
    Map a day-over-day change (positive = price fell) to a presentational
    risk factor in [0.0, 1.9]. The value is drawn uniformly inside its band,
    so identical inputs can give different outputs.
    """
    low, high = drop_factor_band(price_drop)
    draw = (rng or random).uniform(low, high)
    return round(min(max(draw, low), high), 2)
