"""Application configuration loaded from environment variables.

Nested sections use ``__`` as the delimiter, e.g.::

    MARKETSTACK__ACCESS_KEY=...
    GOLDAPI__ACCESS_TOKEN=...
    QUOTE__SYMBOL=SGOL
    QUOTE__SECONDARY_IDENTIFIER=XAU/USD
    LOGGING__LEVEL=DEBUG

A ``.env`` file in the working directory is read as well.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MarketstackConfig(BaseModel):
    """Ticker metadata / end-of-day provider settings."""

    base_url: str = "http://api.marketstack.com/v1"
    access_key: str = Field(default="", repr=False)
    exchange: str | None = None

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("exchange")
    @classmethod
    def empty_exchange_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip().upper() or None


class GoldApiConfig(BaseModel):
    """Spot metal price provider settings."""

    base_url: str = "https://www.goldapi.io/api"
    access_token: str = Field(default="", repr=False)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class QuoteConfig(BaseModel):
    """What to look up."""

    symbol: str = "SGOL"
    secondary_identifier: str | None = "XAU/USD"

    @field_validator("symbol")
    @classmethod
    def symbol_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("symbol must not be empty")
        return value

    @field_validator("secondary_identifier")
    @classmethod
    def empty_identifier_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip().strip("/") or None


class LoggingConfig(BaseModel):
    """Log output settings."""

    level: str = "INFO"
    format: Literal["text", "json"] = "text"


class Config(BaseSettings):
    """Top-level configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    marketstack: MarketstackConfig = Field(default_factory=MarketstackConfig)
    goldapi: GoldApiConfig = Field(default_factory=GoldApiConfig)
    quote: QuoteConfig = Field(default_factory=QuoteConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
