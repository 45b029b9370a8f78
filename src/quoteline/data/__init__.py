"""Data layer for ticker metadata, end-of-day quotes and spot prices."""

from .errors import (
    FetchError,
    HttpStatusError,
    MissingFieldError,
    NetworkError,
    ParseError,
)
from .models import EodQuote, SpotPrice, TickerInfo
from .provider import (
    MockSpotPriceProvider,
    MockTickerDataProvider,
    SpotPriceProvider,
    TickerDataProvider,
)
from .providers import GoldApiProvider, MarketstackProvider

__all__ = [
    "EodQuote",
    "FetchError",
    "GoldApiProvider",
    "HttpStatusError",
    "MarketstackProvider",
    "MissingFieldError",
    "MockSpotPriceProvider",
    "MockTickerDataProvider",
    "NetworkError",
    "ParseError",
    "SpotPrice",
    "SpotPriceProvider",
    "TickerDataProvider",
    "TickerInfo",
]
