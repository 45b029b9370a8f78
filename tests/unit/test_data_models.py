"""Tests for data models and fetch errors."""

from decimal import Decimal

from quoteline.data.errors import (
    EOD_QUOTE_STEP,
    TICKER_INFO_STEP,
    FetchError,
    HttpStatusError,
    MissingFieldError,
    NetworkError,
    ParseError,
)
from quoteline.data.models import EodQuote, SpotPrice, TickerInfo


class TestTickerInfo:
    """Tests for TickerInfo."""

    def test_as_fields(self) -> None:
        """Fields are exactly name and symbol."""
        info = TickerInfo(name="abrdn Physical Gold Shares ETF", symbol="SGOL")

        assert info.as_fields() == {
            "name": "abrdn Physical Gold Shares ETF",
            "symbol": "SGOL",
        }


class TestEodQuote:
    """Tests for EodQuote."""

    def test_as_fields_order_and_values(self) -> None:
        """Fields come out in open/high/low/close/volume order, unchanged."""
        quote = EodQuote(
            open=Decimal("20.1"),
            high=Decimal("20.5"),
            low=Decimal("19.9"),
            close=Decimal("20.3"),
            volume=1_000_000,
        )

        fields = quote.as_fields()

        assert list(fields) == ["open", "high", "low", "close", "volume"]
        assert fields["close"] == Decimal("20.3")
        assert fields["volume"] == 1_000_000


class TestSpotPrice:
    """Tests for SpotPrice."""

    def test_as_fields_excludes_identifier(self) -> None:
        """Only price and currency are reported."""
        spot = SpotPrice(price=Decimal("1950.25"), currency="USD", identifier="XAU")

        assert spot.as_fields() == {"price": Decimal("1950.25"), "currency": "USD"}

    def test_display_name_for_known_metals(self) -> None:
        """Metal codes map to readable names, with or without a currency suffix."""
        assert SpotPrice(Decimal("1"), "USD", "XAU").display_name == "Spot Gold"
        assert SpotPrice(Decimal("1"), "USD", "XAG/USD").display_name == "Spot Silver"
        assert SpotPrice(Decimal("1"), "EUR", "xpt/EUR").display_name == "Spot Platinum"
        assert SpotPrice(Decimal("1"), "USD", "XPD").display_name == "Spot Palladium"
        assert SpotPrice(Decimal("1"), "USD", "XRH").display_name == "Spot Rhodium"

    def test_display_name_falls_back_to_code(self) -> None:
        """Unknown codes are shown as-is."""
        spot = SpotPrice(Decimal("1"), "USD", "XCU/USD")

        assert spot.metal == "XCU"
        assert spot.display_name == "XCU"


class TestFetchErrors:
    """Tests for the FetchError hierarchy."""

    def test_all_kinds_are_fetch_errors(self) -> None:
        """Every error kind can be caught as FetchError."""
        errors = [
            NetworkError(TICKER_INFO_STEP, "SGOL", "connection refused"),
            HttpStatusError(TICKER_INFO_STEP, "SGOL", 404),
            ParseError(EOD_QUOTE_STEP, "SGOL", "invalid JSON body"),
            MissingFieldError(EOD_QUOTE_STEP, "SGOL", "volume"),
        ]

        for error in errors:
            assert isinstance(error, FetchError)

    def test_message_names_step_and_symbol(self) -> None:
        """Message carries enough context to diagnose the failure."""
        error = HttpStatusError(TICKER_INFO_STEP, "SGOL", 404, "Not found")

        assert str(error) == "ticker-info failed for SGOL: HTTP 404 (Not found)"
        assert error.status == 404
        assert error.step == TICKER_INFO_STEP

    def test_missing_field_error(self) -> None:
        """MissingFieldError records the field name."""
        error = MissingFieldError(EOD_QUOTE_STEP, "SGOL", "volume")

        assert error.field == "volume"
        assert "missing field 'volume'" in str(error)

    def test_cause_is_kept(self) -> None:
        """Underlying exception is available as cause."""
        cause = ConnectionRefusedError("refused")
        error = NetworkError(TICKER_INFO_STEP, "SGOL", "refused", cause=cause)

        assert error.cause is cause

    def test_to_dict(self) -> None:
        """Serialized form includes kind-specific details."""
        assert MissingFieldError(EOD_QUOTE_STEP, "SGOL", "volume").to_dict() == {
            "step": "eod-quote",
            "symbol": "SGOL",
            "kind": "MissingFieldError",
            "message": "eod-quote failed for SGOL: missing field 'volume'",
            "field": "volume",
        }
        assert HttpStatusError(TICKER_INFO_STEP, "SGOL", 404).to_dict()["status"] == 404
