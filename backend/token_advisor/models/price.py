# models/price.py

from datetime import date, datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, model_validator
from ..errors import SeriesOrderError


class PriceSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(..., description="UTC time of the sample")
    price: float = Field(..., gt=0, description="Price in quote currency units")

    @classmethod
    def from_market_chart(cls, pair: list) -> "PriceSample":
        """Build a sample from a CoinGecko ``[timestamp_ms, price]`` pair."""
        timestamp_ms, price = pair
        return cls(
            timestamp=datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc),
            price=price,
        )


def ensure_ascending(samples):
    """Raise SeriesOrderError unless timestamps are strictly increasing."""
    for prev, cur in zip(samples, samples[1:]):
        if cur.timestamp <= prev.timestamp:
            raise SeriesOrderError(
                f"Sample at {cur.timestamp.isoformat()} does not follow "
                f"{prev.timestamp.isoformat()}"
            )


class PriceSeries(BaseModel):
    """Trailing price history for one token, ascending by timestamp."""

    model_config = ConfigDict(frozen=True)

    token_id: str
    vs_currency: str = "usd"
    days: int = 30
    samples: tuple[PriceSample, ...] = ()

    @model_validator(mode="after")
    def _check_order(self):
        ensure_ascending(self.samples)
        return self

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def prices(self) -> list[float]:
        return [s.price for s in self.samples]

    @property
    def latest_price(self) -> float:
        return self.samples[-1].price


class DailyBucket(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: date
    close: float
    samples: int


class SpotPrice(BaseModel):
    token_id: str = Field(..., description="CoinGecko token id, e.g., sonic-3")
    price: float = Field(..., gt=0)
    currency: str = "USD"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "token_id": "sonic-3",
                "price": 0.4821,
                "currency": "USD",
                "timestamp": "2025-01-12T18:25:43.511Z",
            }
        },
    )
