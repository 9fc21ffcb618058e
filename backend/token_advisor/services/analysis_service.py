import random
from typing import Optional
from ..config.settings import settings
from ..models.analysis import AdvisoryInput, RiskAnalysis
from ..utils.logger import log
from .advisory import AdvisoryClient, advisory_client
from .fetcher import PriceFetcher, price_fetcher
from .risk_factor import get_price_drop_factor
from . import statistics

logger = log


class RiskAnalysisService:
    def __init__(
        self,
        fetcher: Optional[PriceFetcher] = None,
        advisor: Optional[AdvisoryClient] = None,
        rng: Optional[random.Random] = None,
    ):
        self.fetcher = fetcher or price_fetcher
        self.advisor = advisor or advisory_client
        self.rng = rng

    async def _run_pipeline(self, token_id: str) -> RiskAnalysis:
        series = await self.fetcher.fetch_price_history(token_id, settings.HISTORY_DAYS)

        ma_short = statistics.moving_average(series, settings.SHORT_MA_PERIOD)
        ma_long = statistics.moving_average(series, settings.LONG_MA_PERIOD)
        vol = statistics.volatility(series)
        price_drop = statistics.day_over_day_change(series)
        drop_factor = get_price_drop_factor(price_drop, self.rng)

        advisory = await self.advisor.advise(
            AdvisoryInput(
                token_id=token_id,
                current_price=series.latest_price,
                moving_average_7d=ma_short,
                moving_average_30d=ma_long,
                volatility=vol,
                price_drop=price_drop,
                price_drop_factor=drop_factor,
            )
        )

        return RiskAnalysis(
            moving_average=ma_short,
            risk_level=advisory.risk_level,
            recommendation=advisory.recommendation,
            suggested_investment=advisory.suggested_investment,
            price_drop_factor=drop_factor,
            price_drop=price_drop,
        )

    async def analyze_token_risk(self, token_id: str) -> RiskAnalysis:
        """
        Run the full analysis for one token. Never raises: any failure
        along the way yields RiskAnalysis.fallback().
        """
        try:
            analysis = await self._run_pipeline(token_id)
        except Exception as e:
            logger.error(f"Error analyzing token risk for {token_id}: {type(e).__name__}: {e}")
            logger.warning(f"Returning fallback analysis for {token_id}")
            return RiskAnalysis.fallback()

        logger.info(
            f"Analysis for {token_id}: risk={analysis.risk_level} "
            f"drop={analysis.price_drop:.2f}% factor={analysis.price_drop_factor}"
        )
        return analysis


# global instance
analysis_service = RiskAnalysisService()


async def analyze_token_risk(token_id: str) -> RiskAnalysis:
    return await analysis_service.analyze_token_risk(token_id)
