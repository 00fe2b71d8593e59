"""Token price oracle.

Prices come from the Gravity chain-info API, which publishes ERC20 metadata
including an exchange rate in micro-USD. A token the API does not know, or a
rate that is not a positive number, means "no data" (``None``); transport,
HTTP and decoding failures raise ``PriceUnavailable``. Callers recover from
both by asking the user for a manual price.
"""

from __future__ import annotations

import decimal
import os
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Protocol

import httpx
import structlog

from bridge_fees.errors import ParseError, PriceUnavailable
from bridge_fees.fees.arithmetic import DECIMAL_HIGH_PREC_CONTEXT, parse_decimal
from bridge_fees.models.tokens import token_symbol

if TYPE_CHECKING:
    from bridge_fees.models.tokens import CosmosToken, EvmToken

logger = structlog.get_logger()

DEFAULT_ORACLE_URL = os.environ.get("BRIDGE_FEES_ORACLE_URL", "https://info.gravitychain.io:9000")
DEFAULT_ORACLE_TIMEOUT = float(os.environ.get("BRIDGE_FEES_ORACLE_TIMEOUT", "10"))

# exchange_rate is published in millionths of a USD
EXCHANGE_RATE_SCALE = Decimal(10**6)

# Symbols listed more than once; the value is the index of the entry to use
DEFAULT_SYMBOL_ENTRY_INDEX = {"USDC": 1}


@dataclass(frozen=True)
class PriceQuote:
    """A unit price returned by an oracle.

    Attributes:
        symbol: Symbol the price was looked up by
        price: Fiat (USD) value of one token unit, always > 0
        source: Where the price came from (e.g. 'gravity_info')
    """

    symbol: str
    price: Decimal
    source: str


class PriceOracle(Protocol):
    """Protocol for token price lookups."""

    async def fetch_price(self, token: EvmToken | CosmosToken) -> PriceQuote | None:
        """Fetch the unit price of a token.

        Args:
            token: Token to price

        Returns:
            PriceQuote, or None when the oracle has no data for the token

        Raises:
            Exception: Any transport or decoding failure
        """
        ...


class GravityInfoPriceOracle:
    """Price oracle backed by the Gravity chain-info ``erc20_metadata`` endpoint."""

    SOURCE = "gravity_info"

    def __init__(
        self,
        base_url: str = DEFAULT_ORACLE_URL,
        timeout_seconds: float = DEFAULT_ORACLE_TIMEOUT,
        client: httpx.AsyncClient | None = None,
        symbol_entry_index: dict[str, int] | None = None,
    ) -> None:
        """Initialize the oracle client.

        Args:
            base_url: Chain-info API base URL
            timeout_seconds: HTTP timeout used when no client is supplied
            client: Optional shared AsyncClient (the caller owns its lifecycle)
            symbol_entry_index: Which entry to use for symbols listed several times
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._client = client
        self._symbol_entry_index = (
            DEFAULT_SYMBOL_ENTRY_INDEX if symbol_entry_index is None else symbol_entry_index
        )

    async def fetch_price(self, token: EvmToken | CosmosToken) -> PriceQuote | None:
        """Fetch the unit price of a token by its symbol."""
        return await self.fetch_symbol_price(token_symbol(token))

    async def fetch_symbol_price(self, symbol: str) -> PriceQuote | None:
        """Fetch the unit price for a symbol.

        Returns:
            PriceQuote, or None if the symbol is unknown or its rate unusable

        Raises:
            PriceUnavailable: If the metadata could not be fetched or decoded
        """
        entries = await self.fetch_metadata()
        price = self._price_from_metadata(symbol, entries)
        if price is None:
            logger.debug("oracle_price_not_found", symbol=symbol)
            return None
        return PriceQuote(symbol=symbol, price=price, source=self.SOURCE)

    async def fetch_metadata(self) -> list[dict[str, Any]]:
        """Fetch the raw token metadata list.

        Floats in the payload are decoded as Decimal.

        Raises:
            PriceUnavailable: On transport, HTTP status or decoding failure
        """
        url = f"{self.base_url}/erc20_metadata"

        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.get(url)
            response.raise_for_status()
            data = response.json(parse_float=Decimal)
        except httpx.HTTPError as e:
            logger.warning("oracle_request_failed", url=url, error=str(e))
            raise PriceUnavailable(f"Failed to fetch token metadata: {e}") from e
        except ValueError as e:
            logger.warning("oracle_response_invalid", url=url, error=str(e))
            raise PriceUnavailable(f"Invalid token metadata response: {e}") from e

        if not isinstance(data, list):
            raise PriceUnavailable("Invalid token metadata response: expected a list")

        return [entry for entry in data if isinstance(entry, dict)]

    def _price_from_metadata(
        self, symbol: str, entries: list[dict[str, Any]]
    ) -> Decimal | None:
        """Pick the entry for a symbol and convert its exchange rate to USD."""
        matches = [entry for entry in entries if entry.get("symbol") == symbol]
        index = self._symbol_entry_index.get(symbol, 0)
        if index >= len(matches):
            return None

        rate = matches[index].get("exchange_rate")
        if rate is None or isinstance(rate, bool):
            return None

        try:
            rate_decimal = parse_decimal(rate)
        except ParseError:
            return None

        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            price = rate_decimal / EXCHANGE_RATE_SCALE
        if price <= 0:
            return None
        return price


async def has_price_data(oracle: PriceOracle, token: EvmToken | CosmosToken) -> bool:
    """Check whether the oracle can price a token.

    Oracle failures count as "no data".
    """
    try:
        return await oracle.fetch_price(token) is not None
    except Exception as e:
        logger.debug("oracle_price_check_failed", symbol=token_symbol(token), error=str(e))
        return False


__all__ = [
    "DEFAULT_ORACLE_TIMEOUT",
    "DEFAULT_ORACLE_URL",
    "DEFAULT_SYMBOL_ENTRY_INDEX",
    "EXCHANGE_RATE_SCALE",
    "GravityInfoPriceOracle",
    "PriceOracle",
    "PriceQuote",
    "has_price_data",
]
