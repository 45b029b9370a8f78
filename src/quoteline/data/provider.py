"""Abstract data provider interfaces for ticker and spot price data."""

from abc import ABC, abstractmethod
from decimal import Decimal

from .errors import EOD_QUOTE_STEP, SPOT_PRICE_STEP, TICKER_INFO_STEP, HttpStatusError
from .models import EodQuote, SpotPrice, TickerInfo


class TickerDataProvider(ABC):
    """Source of ticker metadata and end-of-day prices."""

    @abstractmethod
    async def get_ticker_info(self, symbol: str) -> TickerInfo:
        """Get descriptive metadata for a symbol.

        Args:
            symbol: Ticker symbol (e.g., 'SGOL')

        Returns:
            TickerInfo whose ``symbol`` is the provider's canonical form

        Raises:
            FetchError: If the request fails or the response is unusable
        """
        pass

    @abstractmethod
    async def get_latest_eod(self, symbol: str) -> EodQuote:
        """Get the latest end-of-day quote for a symbol.

        Args:
            symbol: Canonical ticker symbol

        Returns:
            EodQuote for the most recently completed session

        Raises:
            FetchError: If the request fails or the response is unusable
        """
        pass


class SpotPriceProvider(ABC):
    """Source of commodity spot prices."""

    @abstractmethod
    async def get_spot_price(self, identifier: str) -> SpotPrice:
        """Get the current spot price for a commodity.

        Args:
            identifier: Provider-specific code, e.g. 'XAU' or 'XAU/USD'

        Returns:
            SpotPrice with price and currency

        Raises:
            FetchError: If the request fails or the response is unusable
        """
        pass


class MockTickerDataProvider(TickerDataProvider):
    """Mock ticker provider for development without API keys.

    Returns fixed but realistic data. ``fail_on`` makes the named step
    raise an HTTP 503 error instead.
    """

    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.calls: list[tuple[str, str]] = []

    async def get_ticker_info(self, symbol: str) -> TickerInfo:
        self.calls.append((TICKER_INFO_STEP, symbol))
        if self.fail_on == TICKER_INFO_STEP:
            raise HttpStatusError(TICKER_INFO_STEP, symbol, 503, "mock failure")
        return TickerInfo(name=f"{symbol.upper()} Mock Trust", symbol=symbol.upper())

    async def get_latest_eod(self, symbol: str) -> EodQuote:
        self.calls.append((EOD_QUOTE_STEP, symbol))
        if self.fail_on == EOD_QUOTE_STEP:
            raise HttpStatusError(EOD_QUOTE_STEP, symbol, 503, "mock failure")
        return EodQuote(
            open=Decimal("20.10"),
            high=Decimal("20.50"),
            low=Decimal("19.90"),
            close=Decimal("20.30"),
            volume=1_000_000,
        )


class MockSpotPriceProvider(SpotPriceProvider):
    """Mock spot price provider returning a fixed USD price."""

    def __init__(self, price: Decimal = Decimal("1950.25"), fail: bool = False) -> None:
        self.price = price
        self.fail = fail
        self.calls: list[str] = []

    async def get_spot_price(self, identifier: str) -> SpotPrice:
        self.calls.append(identifier)
        if self.fail:
            raise HttpStatusError(SPOT_PRICE_STEP, identifier, 503, "mock failure")
        return SpotPrice(price=self.price, currency="USD", identifier=identifier)
