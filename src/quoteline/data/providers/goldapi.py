"""GoldAPI spot metal price provider implementation."""

from urllib.parse import quote

from ...config import GoldApiConfig
from ...utils.logging import get_logger
from ..errors import SPOT_PRICE_STEP
from ..http import get_json, require_field, to_decimal, to_str
from ..models import SpotPrice
from ..provider import SpotPriceProvider

logger = get_logger(__name__)


class GoldApiProvider(SpotPriceProvider):
    """GoldAPI spot price provider.

    Identifiers are metal codes with an optional quote currency, e.g.
    ``XAU`` or ``XAU/USD``. Authenticates with the ``x-access-token`` header.
    Requires an access token from https://www.goldapi.io/
    """

    def __init__(self, config: GoldApiConfig) -> None:
        """Initialize GoldAPI provider.

        Args:
            config: Provider configuration with access token
        """
        if not config.access_token:
            raise ValueError("GoldAPI access token is required")

        self.base_url = config.base_url
        self.access_token = config.access_token

    async def get_spot_price(self, identifier: str) -> SpotPrice:
        """Get current spot price from GoldAPI."""
        data = await get_json(
            f"{self.base_url}/{quote(identifier, safe='/')}",
            step=SPOT_PRICE_STEP,
            symbol=identifier,
            headers={"x-access-token": self.access_token},
        )

        price = to_decimal(
            require_field(data, "price", step=SPOT_PRICE_STEP, symbol=identifier),
            "price",
            step=SPOT_PRICE_STEP,
            symbol=identifier,
        )
        currency = to_str(
            require_field(data, "currency", step=SPOT_PRICE_STEP, symbol=identifier),
            "currency",
            step=SPOT_PRICE_STEP,
            symbol=identifier,
        )

        spot = SpotPrice(price=price, currency=currency, identifier=identifier)

        logger.info(
            "spot_price_fetched",
            identifier=identifier,
            name=spot.display_name,
            price=float(spot.price),
            currency=spot.currency,
        )

        return spot
