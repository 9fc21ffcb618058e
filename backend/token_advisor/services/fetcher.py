from typing import Optional
import httpx
from pydantic import ValidationError
from ..utils.logger import log
from ..config.settings import settings
from ..errors import RetrievalError, SeriesOrderError
from ..models.price import PriceSample, PriceSeries, SpotPrice

logger = log


class PriceFetcher:
    """CoinGecko client for spot prices and trailing price history."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base = settings.COINGECKO_BASE_URL.rstrip("/")
        self.timeout = settings.HTTP_TIMEOUT
        self.headers = {"accept": "application/json"}
        if settings.COINGECKO_API_KEY:
            self.headers["x-cg-demo-api-key"] = settings.COINGECKO_API_KEY
        self.transport = transport

    async def _get_json(self, path: str, params: dict):
        url = f"{self.base}{path}"
        async with httpx.AsyncClient(
            timeout=self.timeout, headers=self.headers, transport=self.transport
        ) as client:
            try:
                r = await client.get(url, params=params)
                r.raise_for_status()
                return r.json()
            except httpx.HTTPStatusError as e:
                logger.error(f"CoinGecko returned {e.response.status_code} for {path}")
                raise RetrievalError(
                    f"Market data request failed with status {e.response.status_code}"
                ) from e
            except httpx.HTTPError as e:
                logger.error(f"CoinGecko request failed for {path}: {e}")
                raise RetrievalError(f"Market data provider unreachable: {e}") from e
            except ValueError as e:
                raise RetrievalError("Market data response is not valid JSON") from e

    async def fetch_price_history(self, token_id: str, days: Optional[int] = None) -> PriceSeries:
        days = days or settings.HISTORY_DAYS
        vs_currency = settings.VS_CURRENCY
        data = await self._get_json(
            f"/coins/{token_id}/market_chart",
            {"vs_currency": vs_currency, "days": days},
        )

        pairs = data.get("prices") if isinstance(data, dict) else None
        if not isinstance(pairs, list):
            raise RetrievalError(f"Market chart for {token_id} has no prices array")

        try:
            samples = tuple(PriceSample.from_market_chart(p) for p in pairs)
            series = PriceSeries(
                token_id=token_id, vs_currency=vs_currency, days=days, samples=samples
            )
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise RetrievalError(f"Malformed price pair in market chart for {token_id}") from e
        except SeriesOrderError as e:
            raise RetrievalError(f"Market chart for {token_id} is out of order: {e}") from e

        logger.info(f"Fetched {len(series)} price samples for {token_id} ({days}d)")
        return series

    async def fetch_spot_price(self, token_id: str) -> SpotPrice:
        vs_currency = settings.VS_CURRENCY
        data = await self._get_json(
            "/simple/price",
            {"ids": token_id, "vs_currencies": vs_currency},
        )
        logger.debug(f"Spot price response: {data}")

        try:
            price = float(data[token_id][vs_currency])
        except (KeyError, TypeError, ValueError) as e:
            raise RetrievalError(f"No {vs_currency} price for {token_id} in response") from e

        try:
            return SpotPrice(token_id=token_id, price=price, currency=vs_currency.upper())
        except ValidationError as e:
            raise RetrievalError(f"Invalid {vs_currency} price {price} for {token_id}") from e


# global instance
price_fetcher = PriceFetcher()
