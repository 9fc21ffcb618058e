import httpx
import pytest
from token_advisor.errors import RetrievalError
from token_advisor.services.fetcher import PriceFetcher
from conftest import build_series, market_chart_payload


def fetcher_returning(status=200, json=None, content=None, seen=None):
    def handler(request: httpx.Request):
        if seen is not None:
            seen.append(request)
        if content is not None:
            return httpx.Response(status, content=content)
        return httpx.Response(status, json=json)

    return PriceFetcher(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_price_history_builds_ascending_series():
    source = build_series([1.0, 2.0, 3.0])
    seen = []
    fetcher = fetcher_returning(json=market_chart_payload(source), seen=seen)

    series = await fetcher.fetch_price_history("sonic-3", days=30)

    assert series.prices == [1.0, 2.0, 3.0]
    assert [s.timestamp for s in series.samples] == [s.timestamp for s in source.samples]
    assert series.samples[0].timestamp.tzinfo is not None
    assert seen[0].url.path.endswith("/coins/sonic-3/market_chart")
    assert seen[0].url.params["vs_currency"] == "usd"
    assert seen[0].url.params["days"] == "30"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"error": "coin not found"},
        {"prices": "nope"},
        {"prices": [[1735689600000]]},
        {"prices": [[1735689600000, -1.0]]},
        {"prices": [[1e300, 1.0]]},
        {"prices": [[1735776000000, 1.0], [1735689600000, 2.0]]},
    ],
)
async def test_fetch_price_history_malformed_payload(payload):
    fetcher = fetcher_returning(json=payload)
    with pytest.raises(RetrievalError):
        await fetcher.fetch_price_history("sonic-3")


@pytest.mark.asyncio
async def test_fetch_price_history_http_error():
    fetcher = fetcher_returning(status=429, json={"status": "rate limited"})
    with pytest.raises(RetrievalError):
        await fetcher.fetch_price_history("sonic-3")


@pytest.mark.asyncio
async def test_fetch_price_history_unreachable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = PriceFetcher(transport=httpx.MockTransport(handler))
    with pytest.raises(RetrievalError):
        await fetcher.fetch_price_history("sonic-3")


@pytest.mark.asyncio
async def test_fetch_price_history_invalid_json():
    fetcher = fetcher_returning(content=b"<html>oops</html>")
    with pytest.raises(RetrievalError):
        await fetcher.fetch_price_history("sonic-3")


@pytest.mark.asyncio
async def test_fetch_spot_price():
    fetcher = fetcher_returning(json={"sonic-3": {"usd": 0.4821}})
    spot = await fetcher.fetch_spot_price("sonic-3")
    assert spot.price == 0.4821
    assert spot.currency == "USD"
    assert spot.token_id == "sonic-3"


@pytest.mark.asyncio
@pytest.mark.parametrize("price", [0, -0.5])
async def test_fetch_spot_price_rejects_non_positive_price(price):
    fetcher = fetcher_returning(json={"sonic-3": {"usd": price}})
    with pytest.raises(RetrievalError):
        await fetcher.fetch_spot_price("sonic-3")


@pytest.mark.asyncio
async def test_fetch_spot_price_missing_token():
    fetcher = fetcher_returning(json={})
    with pytest.raises(RetrievalError):
        await fetcher.fetch_spot_price("sonic-3")
