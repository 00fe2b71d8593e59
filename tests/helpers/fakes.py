"""Fake collaborators for the price oracle, fee-quote provider and logger.

The gated variants block each call until the test releases it, which lets
tests control the order in which concurrent responses arrive.
"""

import asyncio
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from bridge_fees.models.fees import FeeOption
from bridge_fees.pricing.oracle import PriceQuote


class RecordingEventLogger:
    """EventLogger that keeps every event for assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def log(self, level: str, message: str, context: dict[str, Any] | None = None) -> None:
        self.events.append((level, message, dict(context or {})))

    def messages(self) -> list[str]:
        return [message for _, message, _ in self.events]


class FakePriceOracle:
    """Oracle returning fixed prices by symbol; unknown symbols have no data."""

    def __init__(
        self,
        prices: dict[str, str] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.prices = prices or {}
        self.error = error
        self.calls: list[str] = []

    async def fetch_price(self, token) -> PriceQuote | None:
        self.calls.append(token.symbol)
        if self.error is not None:
            raise self.error
        price = self.prices.get(token.symbol)
        if price is None:
            return None
        return PriceQuote(symbol=token.symbol, price=Decimal(price), source="fake")


class GatedPriceOracle(FakePriceOracle):
    """Oracle whose calls block until ``release(symbol)`` is called."""

    def __init__(self, prices: dict[str, str] | None = None) -> None:
        super().__init__(prices)
        self._gates: dict[str, asyncio.Event] = {}

    def _gate(self, symbol: str) -> asyncio.Event:
        return self._gates.setdefault(symbol, asyncio.Event())

    def release(self, symbol: str) -> None:
        self._gate(symbol).set()

    async def fetch_price(self, token) -> PriceQuote | None:
        await self._gate(token.symbol).wait()
        return await super().fetch_price(token)


class HangingPriceOracle:
    """Oracle that never answers."""

    async def fetch_price(self, token) -> PriceQuote | None:
        await asyncio.Event().wait()
        return None


class FakeFeeProvider:
    """Fee-quote provider returning queued responses in order.

    Each queued item is either a fee set or an exception to raise. The last
    item is reused once the queue is exhausted.
    """

    def __init__(self, *responses: Sequence[FeeOption] | Exception) -> None:
        self.responses = list(responses) or [()]
        self.calls: list[tuple[str, str, str, Decimal]] = []

    def _next(self) -> Sequence[FeeOption] | Exception:
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    async def get_fees(self, from_chain, to_chain, token, unit_price) -> Sequence[FeeOption]:
        self.calls.append((from_chain, to_chain, token.symbol, unit_price))
        response = self._next()
        if isinstance(response, Exception):
            raise response
        return response


class GatedFeeProvider:
    """Fee-quote provider whose n-th call blocks until ``release(n)``."""

    def __init__(self, *responses: Sequence[FeeOption] | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, str, str, Decimal]] = []
        self._gates: dict[int, asyncio.Event] = {}

    def _gate(self, index: int) -> asyncio.Event:
        return self._gates.setdefault(index, asyncio.Event())

    def release(self, index: int) -> None:
        self._gate(index).set()

    async def get_fees(self, from_chain, to_chain, token, unit_price) -> Sequence[FeeOption]:
        index = len(self.calls)
        self.calls.append((from_chain, to_chain, token.symbol, unit_price))
        await self._gate(index).wait()
        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        return response


class HangingFeeProvider:
    """Fee-quote provider that never answers."""

    async def get_fees(self, from_chain, to_chain, token, unit_price) -> Sequence[FeeOption]:
        await asyncio.Event().wait()
        return ()
