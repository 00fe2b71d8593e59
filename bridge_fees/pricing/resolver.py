"""Price resolution state machine.

For the selected token the resolver holds exactly one ``ResolvedPrice``:

    Unavailable --resolve(token)--> Loading --oracle price--> FromOracle
                                            --no data/error--> NeedsManual

In ``NeedsManual`` each manual keystroke is validated against a decimal
literal grammar; rejected input leaves the state untouched.

Every call to ``resolve`` bumps a generation counter. A response that
arrives after a newer token was selected is discarded (last token wins,
not last response).
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from bridge_fees.errors import ParseError
from bridge_fees.fees.arithmetic import parse_decimal
from bridge_fees.models.tokens import token_symbol
from bridge_fees.observability import EventLogger, default_event_logger

if TYPE_CHECKING:
    from bridge_fees.models.tokens import CosmosToken, EvmToken
    from bridge_fees.pricing.oracle import PriceOracle, PriceQuote

# Partial or complete non-negative decimal literal: "", "12", "12.", ".5", "12.5"
MANUAL_PRICE_PATTERN = re.compile(r"^[0-9]*[.]?[0-9]*$")


@dataclass(frozen=True)
class Loading:
    """Oracle query in flight."""


@dataclass(frozen=True)
class FromOracle:
    """Price supplied by the oracle."""

    value: Decimal


@dataclass(frozen=True)
class NeedsManual:
    """Oracle had no usable price; waiting for the user to type one.

    Attributes:
        manual_input: The raw text entered so far
        valid: True if the input parses to a price > 0
    """

    manual_input: str = ""
    valid: bool = False


@dataclass(frozen=True)
class Unavailable:
    """No token selected."""


ResolvedPrice = Loading | FromOracle | NeedsManual | Unavailable

LOADING = Loading()
UNAVAILABLE = Unavailable()


def parse_manual_price(raw: str) -> Decimal | None:
    """Parse manual price input, returning None unless it is a price > 0."""
    if not raw or not MANUAL_PRICE_PATTERN.fullmatch(raw):
        return None
    try:
        price = parse_decimal(raw)
    except ParseError:
        # "." alone matches the grammar but is not a number
        return None
    return price if price > 0 else None


def usable_price(state: ResolvedPrice) -> Decimal | None:
    """Unit price usable for fee quotes, or None if not yet available."""
    if isinstance(state, FromOracle):
        return state.value
    if isinstance(state, NeedsManual) and state.valid:
        return parse_manual_price(state.manual_input)
    return None


class PriceResolver:
    """Resolve a token's unit price from an oracle, falling back to manual entry.

    Attributes:
        timeout_seconds: Upper bound on one oracle query, None for no bound
    """

    def __init__(
        self,
        oracle: PriceOracle,
        *,
        event_logger: EventLogger | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._oracle = oracle
        self._log = event_logger or default_event_logger("price_resolver")
        self.timeout_seconds = timeout_seconds

        self._state: ResolvedPrice = UNAVAILABLE
        self._token: EvmToken | CosmosToken | None = None
        self._generation = 0

    @property
    def state(self) -> ResolvedPrice:
        return self._state

    @property
    def token(self) -> EvmToken | CosmosToken | None:
        return self._token

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def usable_price(self) -> Decimal | None:
        return usable_price(self._state)

    def reset(self) -> None:
        """Forget the current token and supersede any in-flight query."""
        self._generation += 1
        self._token = None
        self._state = UNAVAILABLE

    async def resolve(self, token: EvmToken | CosmosToken) -> ResolvedPrice:
        """Resolve the unit price for a newly selected token.

        Enters ``Loading`` (dropping any manual input), queries the oracle and
        moves to ``FromOracle`` or ``NeedsManual``. If another token was
        selected while the query was suspended, its result is discarded and
        the newer state is returned unchanged.

        Args:
            token: The selected token

        Returns:
            The resolver state after this call
        """
        self._generation += 1
        generation = self._generation
        self._token = token
        self._state = LOADING

        symbol = token_symbol(token)
        quote = await self._query_oracle(token, symbol)

        if generation != self._generation:
            self._log.log(
                "debug",
                "price_stale_response_discarded",
                {"symbol": symbol, "generation": generation, "current": self._generation},
            )
            return self._state

        if quote is None or not quote.price.is_finite() or quote.price <= 0:
            self._log.log("info", "price_needs_manual_entry", {"symbol": symbol})
            self._state = NeedsManual()
        else:
            self._log.log(
                "debug", "price_resolved", {"symbol": symbol, "price": str(quote.price)}
            )
            self._state = FromOracle(quote.price)

        return self._state

    def on_manual_price_input(self, raw: str) -> bool:
        """Apply a manual price keystroke.

        Only meaningful while waiting for manual entry. Input that is not a
        partial or complete non-negative decimal literal is ignored.

        Args:
            raw: The full text of the manual price field

        Returns:
            True if the input was accepted
        """
        if not isinstance(self._state, NeedsManual):
            return False
        if not MANUAL_PRICE_PATTERN.fullmatch(raw):
            self._log.log("debug", "manual_price_rejected", {"input": raw})
            return False

        self._state = NeedsManual(manual_input=raw, valid=parse_manual_price(raw) is not None)
        return True

    async def _query_oracle(
        self, token: EvmToken | CosmosToken, symbol: str
    ) -> PriceQuote | None:
        """Query the oracle, mapping failures and timeouts to "no data"."""
        try:
            if self.timeout_seconds is not None:
                return await asyncio.wait_for(
                    self._oracle.fetch_price(token), timeout=self.timeout_seconds
                )
            return await self._oracle.fetch_price(token)
        except asyncio.CancelledError:
            raise
        except TimeoutError:
            self._log.log(
                "warning",
                "price_oracle_timeout",
                {"symbol": symbol, "timeout_seconds": self.timeout_seconds},
            )
            return None
        except Exception as e:
            self._log.log("warning", "price_oracle_failed", {"symbol": symbol, "error": str(e)})
            return None


__all__ = [
    "FromOracle",
    "LOADING",
    "Loading",
    "MANUAL_PRICE_PATTERN",
    "NeedsManual",
    "PriceResolver",
    "ResolvedPrice",
    "UNAVAILABLE",
    "Unavailable",
    "parse_manual_price",
    "usable_price",
]
