from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class Settings(BaseSettings):
    """
    Global application settings loaded from environment variables.
    Automatically loads values from a .env file if present.
    """

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # allow extra env vars without crashing
    )

    # App
    ENV: str = Field("development", description="Environment: development, production")
    DEBUG: bool = Field(True, description="Debug mode enabled/disabled")

    # Token
    TOKEN_ID: str = Field("sonic-3", description="Default CoinGecko token id")
    VS_CURRENCY: str = Field("usd", description="Quote currency for all prices")

    # Analysis windows
    HISTORY_DAYS: int = Field(30, description="Trailing window of price history, in days")
    SHORT_MA_PERIOD: int = Field(7, description="Samples in the short moving average")
    LONG_MA_PERIOD: int = Field(30, description="Samples in the long moving average")

    # Market data (CoinGecko)
    COINGECKO_BASE_URL: str = Field("https://api.coingecko.com/api/v3")
    COINGECKO_API_KEY: Optional[str] = Field(None, description="Demo API key (optional)")
    HTTP_TIMEOUT: float = Field(10.0, description="Seconds before a market data request times out")

    # Advisory (OpenAI)
    OPENAI_API_KEY: Optional[str] = Field(None, description="OpenAI API key (required for advisory)")
    OPENAI_BASE_URL: str = Field("https://api.openai.com/v1")
    OPENAI_MODEL: str = Field("gpt-4o")
    ADVISORY_TIMEOUT: float = Field(60.0, description="Seconds before a completion request times out")


# Global instance
settings = Settings()
