import pytest
from fastapi.testclient import TestClient
from token_advisor import main
from token_advisor.errors import RetrievalError
from token_advisor.graphql import queries
from token_advisor.models.analysis import RiskAnalysis
from token_advisor.models.price import SpotPrice

ANALYSIS = RiskAnalysis(
    moving_average=0.51,
    risk_level="high",
    recommendation="Sharp swings.",
    suggested_investment=30,
    price_drop_factor=0.1,
    price_drop=12.5,
)


class StubFetcher:
    def __init__(self, error=None):
        self.error = error

    async def fetch_spot_price(self, token_id):
        if self.error:
            raise self.error
        return SpotPrice(token_id=token_id, price=0.4821)


class StubService:
    def __init__(self):
        self.tokens = []

    async def analyze_token_risk(self, token_id):
        self.tokens.append(token_id)
        return ANALYSIS


@pytest.fixture
def client():
    return TestClient(main.app)


def test_price_route(client, monkeypatch):
    monkeypatch.setattr(main, "price_fetcher", StubFetcher())
    body = client.get("/api/price").json()
    assert body["success"] is True
    assert body["price"] == 0.4821
    assert body["token_id"] == main.settings.TOKEN_ID


def test_price_route_upstream_failure(client, monkeypatch):
    monkeypatch.setattr(main, "price_fetcher", StubFetcher(error=RetrievalError("down")))
    response = client.get("/api/price", params={"token_id": "bitcoin"})
    assert response.status_code == 502
    assert response.json()["success"] is False
    assert "bitcoin" in response.json()["message"]


def test_analyze_route(client, monkeypatch):
    service = StubService()
    monkeypatch.setattr(main, "analysis_service", service)
    body = client.get("/api/analyze", params={"token_id": "bitcoin"}).json()
    assert service.tokens == ["bitcoin"]
    assert body["success"] is True
    assert body["analysis"]["riskLevel"] == "high"
    assert body["analysis"]["priceDropFactor"] == 0.1
    assert body["analysis"]["priceDrop"] == 12.5


def test_graphql_analyze_token(client, monkeypatch):
    monkeypatch.setattr(queries, "analysis_service", StubService())
    response = client.post(
        "/graphql",
        json={"query": '{ analyzeToken(tokenId: "sonic-3") { riskLevel suggestedInvestment priceDrop } }'},
    )
    data = response.json()["data"]["analyzeToken"]
    assert data == {"riskLevel": "high", "suggestedInvestment": 30.0, "priceDrop": 12.5}


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
