import strawberry
from typing import Optional
from token_advisor.config.settings import settings
from token_advisor.services.fetcher import price_fetcher
from token_advisor.services.analysis_service import analysis_service


@strawberry.type
class SpotPrice:
    token_id: str
    price: float
    currency: str
    timestamp: str


@strawberry.type
class RiskAnalysis:
    moving_average: float
    risk_level: str
    recommendation: str
    suggested_investment: float
    price_drop_factor: float
    price_drop: float


@strawberry.type
class Query:
    @strawberry.field
    async def spot_price(self, token_id: Optional[str] = None) -> SpotPrice:
        spot = await price_fetcher.fetch_spot_price(token_id or settings.TOKEN_ID)
        return SpotPrice(
            token_id=spot.token_id,
            price=spot.price,
            currency=spot.currency,
            timestamp=spot.timestamp.isoformat(),
        )

    @strawberry.field
    async def analyze_token(self, token_id: Optional[str] = None) -> RiskAnalysis:
        analysis = await analysis_service.analyze_token_risk(token_id or settings.TOKEN_ID)
        return RiskAnalysis(**analysis.model_dump())
