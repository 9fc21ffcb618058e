# models/analysis.py

from typing import Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

RiskLevel = Literal["low", "medium", "high"]

FALLBACK_RECOMMENDATION = "Analysis failed. Consider standard diversification approaches."


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AdvisoryInput(_CamelModel):
    """Statistics handed to the advisory model for one token."""

    token_id: str
    current_price: float
    moving_average_7d: float
    moving_average_30d: float
    volatility: float
    price_drop: float
    price_drop_factor: float


class AdvisoryResult(_CamelModel):
    """Validated JSON body returned by the advisory model."""

    risk_level: RiskLevel
    recommendation: str = Field(..., min_length=1)
    suggested_investment: float = Field(..., gt=0)

    @field_validator("risk_level", mode="before")
    @classmethod
    def _normalize_risk_level(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("suggested_investment", mode="before")
    @classmethod
    def _strip_currency(cls, value):
        # models sometimes answer "$20"
        if isinstance(value, str):
            return value.strip().lstrip("$").replace(",", "")
        return value


class RiskAnalysis(_CamelModel):
    moving_average: float
    risk_level: RiskLevel
    recommendation: str
    suggested_investment: float
    price_drop_factor: float = Field(..., ge=0.0, le=1.9)
    price_drop: float

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "movingAverage": 0.4712,
                "riskLevel": "medium",
                "recommendation": "Moderate swings; keep the position small.",
                "suggestedInvestment": 20,
                "priceDropFactor": 0.42,
                "priceDrop": 5.1,
            }
        },
    )

    @classmethod
    def fallback(cls) -> "RiskAnalysis":
        """Placeholder record returned whenever the pipeline fails."""
        return cls(
            moving_average=0,
            risk_level="medium",
            recommendation=FALLBACK_RECOMMENDATION,
            suggested_investment=20,
            price_drop_factor=0.5,
            price_drop=0,
        )

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)
