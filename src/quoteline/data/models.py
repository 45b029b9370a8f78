"""Data models for ticker metadata, end-of-day quotes and spot prices."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

METAL_NAMES = {
    "XAU": "Spot Gold",
    "XAG": "Spot Silver",
    "XPT": "Spot Platinum",
    "XPD": "Spot Palladium",
    "XRH": "Spot Rhodium",
}


@dataclass(frozen=True)
class TickerInfo:
    """Descriptive metadata for a ticker symbol."""

    name: str
    symbol: str

    def as_fields(self) -> dict[str, Any]:
        return {"name": self.name, "symbol": self.symbol}


@dataclass(frozen=True)
class EodQuote:
    """Latest end-of-day trading data for a symbol."""

    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: int

    def as_fields(self) -> dict[str, Any]:
        return {
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }


@dataclass(frozen=True)
class SpotPrice:
    """Current spot price for a commodity.

    Attributes:
        price: Spot price in ``currency``
        currency: ISO currency code reported by the provider
        identifier: Identifier the price was requested with, e.g. ``XAU/USD``
    """

    price: Decimal
    currency: str
    identifier: str = ""

    @property
    def metal(self) -> str:
        """Metal code part of the identifier (``XAU`` for ``XAU/USD``)."""
        return self.identifier.split("/", 1)[0].upper()

    @property
    def display_name(self) -> str:
        """Human-readable name, falling back to the metal code."""
        return METAL_NAMES.get(self.metal, self.metal)

    def as_fields(self) -> dict[str, Any]:
        return {"price": self.price, "currency": self.currency}
