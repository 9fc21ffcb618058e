import random
import pytest
from token_advisor.services.risk_factor import drop_factor_band, get_price_drop_factor


@pytest.mark.parametrize(
    "price_drop, band",
    [
        (-0.5, (1.0, 1.3)),
        (-3.0, (1.0, 1.3)),
        (-7.0, (1.4, 1.7)),
        (-12.0, (1.8, 1.9)),
        (0.0, (0.7, 1.0)),
        (3.0, (0.7, 1.0)),
        (5.0, (0.3, 0.6)),
        (10.0, (0.3, 0.6)),
        (42.0, (0.0, 0.2)),
    ],
)
def test_factor_stays_in_band(price_drop, band):
    assert drop_factor_band(price_drop) == band
    low, high = band
    for _ in range(200):
        factor = get_price_drop_factor(price_drop)
        assert low <= factor <= high
        assert factor == round(factor, 2)


def test_seeded_rng_is_repeatable():
    a = get_price_drop_factor(5.0, random.Random(7))
    b = get_price_drop_factor(5.0, random.Random(7))
    assert a == b
