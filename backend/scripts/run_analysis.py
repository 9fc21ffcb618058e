import asyncio
import json
import sys
from token_advisor.config.settings import settings
from token_advisor.services.analysis_service import analysis_service


async def main(token_id: str):
    analysis = await analysis_service.analyze_token_risk(token_id)

    print(f"Risk analysis for {token_id}")
    print(f"Risk level:           {analysis.risk_level}")
    print(f"7-day moving average: {analysis.moving_average:.6f}")
    direction = "drop" if analysis.price_drop > 0 else "rise"
    print(f"Day-over-day:         {direction} of {abs(analysis.price_drop):.2f}%")
    print(f"Price drop factor:    {analysis.price_drop_factor:.2f}")
    print(f"Suggested investment: ${analysis.suggested_investment:.2f}")
    print()
    print(json.dumps(analysis.to_response(), indent=2))


if __name__ == "__main__":
    token = sys.argv[1] if len(sys.argv) > 1 else settings.TOKEN_ID
    asyncio.run(main(token))
