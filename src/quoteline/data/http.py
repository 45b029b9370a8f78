"""HTTP helpers shared by the provider clients.

All transport, status and decoding failures are converted to the
:class:`~quoteline.data.errors.FetchError` hierarchy here so providers only
deal with field extraction.
"""

import asyncio
import json
from decimal import Decimal, InvalidOperation
from typing import Any

import aiohttp

from ..utils.logging import get_logger
from .errors import HttpStatusError, MissingFieldError, NetworkError, ParseError

logger = get_logger(__name__)


def _provider_message(payload: bytes) -> str | None:
    """Pull a human-readable message out of an error body, if there is one."""
    try:
        data = json.loads(payload)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    error = data.get("error")
    if isinstance(error, dict):
        message = error.get("message") or error.get("code")
        return str(message) if message else None
    if isinstance(error, str):
        return error
    message = data.get("message")
    return str(message) if message else None


async def get_json(
    url: str,
    *,
    step: str,
    symbol: str,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> dict[str, Any]:
    """GET ``url`` and decode the body as a JSON object.

    Args:
        url: Request URL without query string
        step: Fetch step name, used in errors
        symbol: Symbol or identifier, used in errors
        params: Query parameters
        headers: Extra request headers

    Returns:
        Decoded JSON object

    Raises:
        NetworkError: If the request could not be completed
        HttpStatusError: If the response status is not 2xx
        ParseError: If the body is not a JSON object
    """
    logger.debug("http_get", url=url, step=step, symbol=symbol)

    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url, params=params, headers=headers) as response:
                status = response.status
                payload = await response.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise NetworkError(step, symbol, str(e) or type(e).__name__, cause=e) from e

    if not 200 <= status < 300:
        raise HttpStatusError(step, symbol, status, _provider_message(payload))

    try:
        data = json.loads(payload)
    except ValueError as e:
        raise ParseError(step, symbol, f"invalid JSON body: {e}", cause=e) from e

    if not isinstance(data, dict):
        raise ParseError(step, symbol, f"expected a JSON object, got {type(data).__name__}")

    result: dict[str, Any] = data
    return result


def require_field(data: dict[str, Any], field: str, *, step: str, symbol: str) -> Any:
    """Return ``data[field]``, treating an absent key and null the same way."""
    value = data.get(field)
    if value is None:
        raise MissingFieldError(step, symbol, field)
    return value


def to_decimal(value: Any, field: str, *, step: str, symbol: str) -> Decimal:
    """Convert a JSON number (or numeric string) to Decimal without float noise."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ParseError(step, symbol, f"field '{field}' is not a number: {value!r}")
    try:
        result = Decimal(str(value))
    except InvalidOperation as e:
        message = f"field '{field}' is not a number: {value!r}"
        raise ParseError(step, symbol, message, cause=e) from e
    if not result.is_finite():
        raise ParseError(step, symbol, f"field '{field}' is not finite: {value!r}")
    return result


def to_int(value: Any, field: str, *, step: str, symbol: str) -> int:
    """Convert a JSON integer; integral floats such as ``1000000.0`` are accepted."""
    if isinstance(value, bool):
        raise ParseError(step, symbol, f"field '{field}' is not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        try:
            return int(value)
        except ValueError as e:
            message = f"field '{field}' is not an integer: {value!r}"
            raise ParseError(step, symbol, message, cause=e) from e
    raise ParseError(step, symbol, f"field '{field}' is not an integer: {value!r}")


def to_str(value: Any, field: str, *, step: str, symbol: str) -> str:
    if not isinstance(value, str):
        raise ParseError(step, symbol, f"field '{field}' is not a string: {value!r}")
    return value
