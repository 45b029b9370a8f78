"""Marketstack data provider implementation."""

from decimal import Decimal
from urllib.parse import quote

from ...config import MarketstackConfig
from ...utils.logging import get_logger
from ..errors import EOD_QUOTE_STEP, TICKER_INFO_STEP
from ..http import get_json, require_field, to_decimal, to_int, to_str
from ..models import EodQuote, TickerInfo
from ..provider import TickerDataProvider

logger = get_logger(__name__)


class MarketstackProvider(TickerDataProvider):
    """Marketstack ticker and end-of-day data provider.

    Authenticates with the ``access_key`` query parameter.
    Requires an access key from https://marketstack.com/
    """

    def __init__(self, config: MarketstackConfig) -> None:
        """Initialize Marketstack provider.

        Args:
            config: Provider configuration with access key
        """
        if not config.access_key:
            raise ValueError("Marketstack access key is required")

        self.base_url = config.base_url
        self.access_key = config.access_key
        self.exchange = config.exchange

    def _params(self) -> dict[str, str]:
        params = {"access_key": self.access_key}
        if self.exchange:
            params["exchange"] = self.exchange
        return params

    def _ticker_url(self, symbol: str) -> str:
        return f"{self.base_url}/tickers/{quote(symbol, safe='')}"

    async def get_ticker_info(self, symbol: str) -> TickerInfo:
        """Get ticker name and canonical symbol from Marketstack."""
        data = await get_json(
            self._ticker_url(symbol),
            step=TICKER_INFO_STEP,
            symbol=symbol,
            params=self._params(),
        )

        def field(name: str) -> str:
            value = require_field(data, name, step=TICKER_INFO_STEP, symbol=symbol)
            return to_str(value, name, step=TICKER_INFO_STEP, symbol=symbol)

        info = TickerInfo(name=field("name"), symbol=field("symbol"))

        logger.info(
            "ticker_info_fetched",
            requested=symbol,
            symbol=info.symbol,
            name=info.name,
        )

        return info

    async def get_latest_eod(self, symbol: str) -> EodQuote:
        """Get the latest end-of-day quote from Marketstack."""
        data = await get_json(
            f"{self._ticker_url(symbol)}/eod/latest",
            step=EOD_QUOTE_STEP,
            symbol=symbol,
            params=self._params(),
        )

        def price(name: str) -> Decimal:
            value = require_field(data, name, step=EOD_QUOTE_STEP, symbol=symbol)
            return to_decimal(value, name, step=EOD_QUOTE_STEP, symbol=symbol)

        open_, high, low, close = (price(name) for name in ("open", "high", "low", "close"))
        volume = to_int(
            require_field(data, "volume", step=EOD_QUOTE_STEP, symbol=symbol),
            "volume",
            step=EOD_QUOTE_STEP,
            symbol=symbol,
        )

        eod = EodQuote(open=open_, high=high, low=low, close=close, volume=volume)

        logger.info(
            "eod_quote_fetched",
            symbol=symbol,
            close=float(eod.close),
            volume=eod.volume,
        )

        return eod
