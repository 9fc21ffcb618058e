"""
Advisory client: turns computed price statistics into a risk classification
using an OpenAI chat completion constrained to a JSON object.
"""

import json
from typing import Any, Dict, List, Optional
import httpx
from pydantic import ValidationError
from ..utils.logger import log
from ..config.settings import settings
from ..errors import AdvisoryError
from ..models.analysis import AdvisoryInput, AdvisoryResult

logger = log

SYSTEM_PROMPT = (
    "You are a cryptocurrency investment analyst. Analyze the provided data and "
    "suggest an investment risk level (low, medium, or high) based on the data. "
    "Every time you are asked, answer with a different tone."
)

USER_PROMPT_TEMPLATE = """
Please analyze this token data and provide an investment recommendation:

Token: {token_id}
Current Price: ${current_price}
7-Day Moving Average: ${moving_average_7d}
30-Day Moving Average: ${moving_average_30d}
Volatility (Std Dev of Daily % Change): {volatility:.2f}%
Day-over-Day Price Change: {direction} of {magnitude:.2f}%
Price Drop Factor: {price_drop_factor:.2f}

Classify the risk as:
- Low Risk (suggest $10 investment) if volatility is low and price is stable or gradually increasing
- Medium Risk (suggest $20 investment) if there's moderate volatility or unclear trend
- High Risk (suggest $30 investment) if there's high volatility or sharp price movements

Format your response as JSON with fields: riskLevel (low, medium, or high), recommendation (brief explanation), suggestedInvestment (dollar amount)
"""


def build_messages(data: AdvisoryInput) -> List[Dict[str, str]]:
    # price_drop > 0 means the price fell
    direction = "drop" if data.price_drop > 0 else "rise"
    user_prompt = USER_PROMPT_TEMPLATE.format(
        token_id=data.token_id,
        current_price=data.current_price,
        moving_average_7d=data.moving_average_7d,
        moving_average_30d=data.moving_average_30d,
        volatility=data.volatility,
        direction=direction,
        magnitude=abs(data.price_drop),
        price_drop_factor=data.price_drop_factor,
    )
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt.strip()},
    ]


def extract_content(response_data: Any) -> Optional[str]:
    """Pull choices[0].message.content out of a chat completion body."""
    if not isinstance(response_data, dict):
        raise AdvisoryError("Completion body is not a JSON object")
    choices = response_data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise AdvisoryError("Completion body has no choices")
    choice = choices[0]
    message = choice.get("message") if isinstance(choice, dict) else None
    if not isinstance(message, dict):
        raise AdvisoryError("Completion choice has no message object")
    content = message.get("content")
    if content is not None and not isinstance(content, str):
        raise AdvisoryError("Completion message content is not text")
    return content


def parse_advisory(content: Optional[str]) -> AdvisoryResult:
    if not content or not content.strip():
        raise AdvisoryError("Advisory response content is empty")
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        raise AdvisoryError(f"Advisory response is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise AdvisoryError("Advisory response is not a JSON object")
    try:
        return AdvisoryResult.model_validate(payload)
    except ValidationError as e:
        raise AdvisoryError(f"Advisory response is missing or has invalid fields: {e}") from e


class AdvisoryClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_base = settings.OPENAI_BASE_URL.rstrip("/")
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_MODEL
        self.timeout = settings.ADVISORY_TIMEOUT
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        if not self.api_key:
            raise AdvisoryError("OPENAI_API_KEY is not configured")
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _complete(self, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        payload = {
            "model": self.model,
            "messages": messages,
            "response_format": {"type": "json_object"},
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(
                    f"{self.api_base}/chat/completions",
                    headers=self._headers(),
                    json=payload,
                )
            except httpx.TimeoutException as e:
                logger.error("OpenAI API request timed out")
                raise AdvisoryError("Advisory request timed out") from e
            except httpx.RequestError as e:
                logger.error(f"OpenAI API request error: {e}")
                raise AdvisoryError(f"Advisory request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"OpenAI API error {response.status_code}: {response.text}")
            if response.status_code == 401:
                raise AdvisoryError("OpenAI authentication failed. Check your OPENAI_API_KEY.")
            if response.status_code == 429:
                raise AdvisoryError("OpenAI rate limit exceeded.")
            raise AdvisoryError(f"OpenAI API error {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise AdvisoryError("OpenAI API returned a non-JSON body") from e

    async def advise(self, data: AdvisoryInput) -> AdvisoryResult:
        response_data = await self._complete(build_messages(data))

        result = parse_advisory(extract_content(response_data))
        logger.info(f"Advisory for {data.token_id}: {result.risk_level} risk")
        return result


# global instance
advisory_client = AdvisoryClient()
