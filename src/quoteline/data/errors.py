"""Errors raised while fetching market data."""

from typing import Any

TICKER_INFO_STEP = "ticker-info"
EOD_QUOTE_STEP = "eod-quote"
SPOT_PRICE_STEP = "spot-price"


class FetchError(Exception):
    """A fetch step failed.

    Attributes:
        step: Step name (``ticker-info``, ``eod-quote`` or ``spot-price``)
        symbol: Symbol or identifier the step was run for
        cause: Underlying exception, if any
    """

    def __init__(
        self,
        step: str,
        symbol: str,
        detail: str,
        cause: BaseException | None = None,
    ) -> None:
        self.step = step
        self.symbol = symbol
        self.detail = detail
        self.cause = cause
        super().__init__(f"{step} failed for {symbol}: {detail}")

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable summary of the failure."""
        return {
            "step": self.step,
            "symbol": self.symbol,
            "kind": self.kind,
            "message": str(self),
        }


class NetworkError(FetchError):
    """The request could not be sent or timed out."""


class HttpStatusError(FetchError):
    """The provider answered with a non-success status code."""

    def __init__(
        self,
        step: str,
        symbol: str,
        status: int,
        provider_message: str | None = None,
    ) -> None:
        self.status = status
        self.provider_message = provider_message
        detail = f"HTTP {status}"
        if provider_message:
            detail += f" ({provider_message})"
        super().__init__(step, symbol, detail)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status"] = self.status
        return data


class ParseError(FetchError):
    """The response body is not valid JSON or holds an unusable value."""


class MissingFieldError(FetchError):
    """An expected key is absent from the response body."""

    def __init__(self, step: str, symbol: str, field: str) -> None:
        self.field = field
        super().__init__(step, symbol, f"missing field '{field}'")

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.field
        return data
