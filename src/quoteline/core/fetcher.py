"""Quote fetcher orchestrating the ticker, end-of-day and spot price lookups.

The fetch runs two independent branches concurrently:

1. ticker-info -> eod-quote: the ticker lookup returns the provider's
   canonical symbol, which the end-of-day lookup then uses verbatim. A
   ticker-info failure ends this branch.
2. spot-price: a single lookup keyed by a commodity identifier.

Every step's fields are handed to the sink as soon as the step succeeds;
every failed step is handed to the sink as a ``FetchError``.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from quoteline.config import Config
from quoteline.data.errors import (
    EOD_QUOTE_STEP,
    SPOT_PRICE_STEP,
    TICKER_INFO_STEP,
    FetchError,
)
from quoteline.data.models import EodQuote, SpotPrice, TickerInfo
from quoteline.data.provider import (
    MockSpotPriceProvider,
    MockTickerDataProvider,
    SpotPriceProvider,
    TickerDataProvider,
)
from quoteline.data.providers import GoldApiProvider, MarketstackProvider
from quoteline.reporting.sinks import ReportSink
from quoteline.utils.logging import get_logger

logger = get_logger(__name__, component="QuoteFetcher")


@dataclass
class FetchReport:
    """Summary of one fetch run.

    Attributes:
        requested_symbol: Symbol the caller asked for
        symbol: Canonical symbol (equal to requested_symbol until ticker-info succeeds)
        started_at: When the fetch started
        secondary_identifier: Spot price identifier, if the spot step ran
        ticker_info: Result of the ticker-info step
        eod_quote: Result of the eod-quote step
        spot_price: Result of the spot-price step
        errors: Failed steps, in the order they failed
        duration_seconds: Wall time of the whole fetch
    """

    requested_symbol: str
    symbol: str
    started_at: datetime
    secondary_identifier: str | None = None
    ticker_info: TickerInfo | None = None
    eod_quote: EodQuote | None = None
    spot_price: SpotPrice | None = None
    errors: list[FetchError] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        """True when no attempted step failed."""
        return not self.errors

    @property
    def failed_steps(self) -> list[str]:
        return [e.step for e in self.errors]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""

        def fields(item: TickerInfo | EodQuote | SpotPrice | None) -> dict[str, Any] | None:
            if item is None:
                return None
            return {
                key: float(value) if isinstance(value, Decimal) else value
                for key, value in item.as_fields().items()
            }

        return {
            "requested_symbol": self.requested_symbol,
            "symbol": self.symbol,
            "secondary_identifier": self.secondary_identifier,
            "started_at": self.started_at.isoformat(),
            "duration_seconds": round(self.duration_seconds, 3),
            "ticker_info": fields(self.ticker_info),
            "eod_quote": fields(self.eod_quote),
            "spot_price": fields(self.spot_price),
            "errors": [e.to_dict() for e in self.errors],
        }


class QuoteFetcher:
    """Fetch ticker info, the latest EOD quote and an optional spot price.

    Example:
        >>> fetcher = QuoteFetcher(MarketstackProvider(cfg), LogSink(), GoldApiProvider(gcfg))
        >>> report = await fetcher.fetch_quote("SGOL", secondary_identifier="XAU/USD")
        >>> print(report.eod_quote.close, report.spot_price.price)
    """

    def __init__(
        self,
        ticker_provider: TickerDataProvider,
        sink: ReportSink,
        spot_provider: SpotPriceProvider | None = None,
    ) -> None:
        """Initialize the QuoteFetcher.

        Args:
            ticker_provider: Source of ticker info and EOD quotes
            sink: Receiver for per-step results
            spot_provider: Source of spot prices; the spot step is skipped without one
        """
        self.ticker_provider = ticker_provider
        self.spot_provider = spot_provider
        self.sink = sink
        self._logger = logger

    async def fetch_quote(
        self, symbol: str, secondary_identifier: str | None = None
    ) -> FetchReport:
        """Run the ticker/EOD chain and the spot lookup concurrently.

        Args:
            symbol: Ticker symbol to look up
            secondary_identifier: Spot price identifier (e.g. 'XAU'); None skips the spot step

        Returns:
            FetchReport with whatever succeeded and the errors of what did not

        Raises:
            ValueError: If the symbol is empty
        """
        symbol = symbol.strip()
        if not symbol:
            raise ValueError("symbol must not be empty")

        start_time = datetime.now()
        report = FetchReport(requested_symbol=symbol, symbol=symbol, started_at=start_time)

        branches = [self._fetch_ticker_chain(symbol, report)]

        if secondary_identifier:
            if self.spot_provider is None:
                self._logger.warning(
                    "spot_step_skipped",
                    identifier=secondary_identifier,
                    reason="no spot price provider configured",
                )
            else:
                report.secondary_identifier = secondary_identifier
                branches.append(
                    self._fetch_spot_price(self.spot_provider, secondary_identifier, report)
                )

        self._logger.info(
            "quote_fetch_start",
            symbol=symbol,
            identifier=report.secondary_identifier,
        )

        await asyncio.gather(*branches)

        report.duration_seconds = (datetime.now() - start_time).total_seconds()

        self._logger.info(
            "quote_fetch_complete",
            symbol=report.symbol,
            requested_symbol=symbol,
            ok=report.ok,
            failed_steps=report.failed_steps,
            duration_seconds=report.duration_seconds,
        )

        return report

    async def _fetch_ticker_chain(self, symbol: str, report: FetchReport) -> None:
        try:
            info = await self.ticker_provider.get_ticker_info(symbol)
        except FetchError as e:
            self._record_failure(e, report)
            return

        report.ticker_info = info
        if info.symbol != symbol:
            self._logger.debug("symbol_canonicalized", requested=symbol, canonical=info.symbol)
        report.symbol = info.symbol
        self.sink.report(TICKER_INFO_STEP, symbol, info.as_fields())

        try:
            eod = await self.ticker_provider.get_latest_eod(info.symbol)
        except FetchError as e:
            self._record_failure(e, report)
            return

        report.eod_quote = eod
        self.sink.report(EOD_QUOTE_STEP, info.symbol, eod.as_fields())

    async def _fetch_spot_price(
        self, provider: SpotPriceProvider, identifier: str, report: FetchReport
    ) -> None:
        try:
            spot = await provider.get_spot_price(identifier)
        except FetchError as e:
            self._record_failure(e, report)
            return

        report.spot_price = spot
        self.sink.report(SPOT_PRICE_STEP, identifier, spot.as_fields())

    def _record_failure(self, error: FetchError, report: FetchReport) -> None:
        self._logger.error(
            "fetch_step_failed",
            step=error.step,
            symbol=error.symbol,
            error=str(error),
            error_type=error.kind,
        )
        report.errors.append(error)
        self.sink.report_failure(error)


def build_fetcher(config: Config, sink: ReportSink, mock: bool = False) -> QuoteFetcher:
    """Create a QuoteFetcher with providers chosen from configuration.

    Args:
        config: Application configuration
        sink: Receiver for per-step results
        mock: Use the mock providers instead of the real APIs

    Returns:
        QuoteFetcher; it has no spot provider when no GoldAPI token is configured

    Raises:
        ValueError: If the Marketstack access key is missing (and mock is False)
    """
    if mock:
        return QuoteFetcher(MockTickerDataProvider(), sink, MockSpotPriceProvider())

    spot_provider: SpotPriceProvider | None = None
    if config.goldapi.access_token:
        spot_provider = GoldApiProvider(config.goldapi)

    return QuoteFetcher(MarketstackProvider(config.marketstack), sink, spot_provider)
