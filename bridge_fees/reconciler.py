"""Fee reconciliation.

Requests fee sets from the fee-quote provider and keeps the selected fee in
step with them. The selection is tracked by identifier: when a refreshed
set still offers the selected identifier, the refreshed option replaces the
cached one; otherwise the first option is selected.

Each request captures a generation number. Responses (and failures) that
come back after a newer refresh or a clear are discarded.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from decimal import Decimal
from typing import TYPE_CHECKING, Protocol

from bridge_fees.errors import FeeQuoteError, FeeQuoteGenericError, FeeQuoteWalletError
from bridge_fees.models.fees import FeeOption, FeeSet, reconcile_selection
from bridge_fees.models.tokens import token_symbol
from bridge_fees.observability import EventLogger, default_event_logger

if TYPE_CHECKING:
    from bridge_fees.models.tokens import CosmosToken, EvmToken

# Substrings in a provider error that indicate a missing wallet connection
WALLET_ERROR_MARKERS = ("wallet", "gas price")


class FeeQuoteProvider(Protocol):
    """Protocol for bridge fee quotes."""

    async def get_fees(
        self,
        from_chain: str,
        to_chain: str,
        token: EvmToken | CosmosToken,
        unit_price: Decimal,
    ) -> Sequence[FeeOption]:
        """Fetch the available fee options for a transfer.

        Args:
            from_chain: Source chain
            to_chain: Destination chain
            token: Token being bridged
            unit_price: Fiat value of one token unit

        Returns:
            Fee options in provider order (the first is the default)

        Raises:
            Exception: Any failure; messages mentioning a wallet or the gas
                price indicate an unmet wallet precondition
        """
        ...


def classify_fee_quote_error(error: BaseException) -> FeeQuoteError:
    """Map a fee-quote failure onto the error taxonomy.

    Args:
        error: The exception raised by the provider

    Returns:
        The error itself if already classified, otherwise a
        FeeQuoteWalletError or FeeQuoteGenericError wrapping its message
    """
    if isinstance(error, FeeQuoteError):
        return error

    message = str(error)
    lowered = message.lower()
    if any(marker in lowered for marker in WALLET_ERROR_MARKERS):
        return FeeQuoteWalletError(message)
    return FeeQuoteGenericError(message)


class FeeReconciler:
    """Fetch fee sets and reconcile the selected fee against them.

    Attributes:
        timeout_seconds: Upper bound on one fee-quote request, None for no bound
    """

    def __init__(
        self,
        provider: FeeQuoteProvider,
        *,
        event_logger: EventLogger | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._provider = provider
        self._log = event_logger or default_event_logger("fee_reconciler")
        self.timeout_seconds = timeout_seconds

        self._fees: FeeSet = ()
        self._selection: FeeOption | None = None
        self._error: FeeQuoteError | None = None
        self._loading = False
        self._generation = 0

    @property
    def fees(self) -> FeeSet:
        return self._fees

    @property
    def selection(self) -> FeeOption | None:
        return self._selection

    @property
    def error(self) -> FeeQuoteError | None:
        return self._error

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def generation(self) -> int:
        return self._generation

    def clear(self) -> None:
        """Drop fees, selection and error, superseding any in-flight request."""
        self._generation += 1
        self._fees = ()
        self._selection = None
        self._error = None
        self._loading = False

    def select(self, fee: FeeOption) -> None:
        """Select a fee option on user request.

        Accepted unconditionally; the next refresh reconciles it like any
        other selection.
        """
        self._log.log("info", "fee_selected", {"fee_id": fee.id, "amount": str(fee.amount)})
        self._selection = fee

    async def refresh(
        self,
        from_chain: str,
        to_chain: str,
        token: EvmToken | CosmosToken,
        unit_price: Decimal | None,
    ) -> FeeSet:
        """Fetch a fresh fee set and reconcile the selection.

        Without a usable unit price no request is made and the fee set is
        empty. Provider failures never propagate: the fee set is emptied and
        the classified error is kept in ``error``.

        Args:
            from_chain: Source chain
            to_chain: Destination chain
            token: Token being bridged
            unit_price: Usable unit price, or None if not yet available

        Returns:
            The current fee set after this call
        """
        self._generation += 1
        generation = self._generation
        self._error = None

        if unit_price is None:
            self._fees = ()
            self._selection = None
            self._loading = False
            return self._fees

        symbol = token_symbol(token)
        self._loading = True

        try:
            fetched = await self._request_fees(from_chain, to_chain, token, unit_price)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if generation != self._generation:
                self._log_stale(generation, symbol)
                return self._fees

            error = classify_fee_quote_error(e)
            self._log.log(
                "warning",
                "fee_quote_failed",
                {
                    "from_chain": from_chain,
                    "to_chain": to_chain,
                    "symbol": symbol,
                    "error_kind": error.kind.value,
                    "error": str(e),
                },
            )
            self._fees = ()
            self._selection = None
            self._error = error
            self._loading = False
            return self._fees

        if generation != self._generation:
            self._log_stale(generation, symbol)
            return self._fees

        self._fees = tuple(fetched)
        self._selection = reconcile_selection(self._selection, self._fees)
        self._loading = False

        self._log.log(
            "debug",
            "fees_refreshed",
            {
                "from_chain": from_chain,
                "to_chain": to_chain,
                "symbol": symbol,
                "fee_count": len(self._fees),
                "selected_fee_id": self._selection.id if self._selection else None,
            },
        )
        return self._fees

    async def _request_fees(
        self,
        from_chain: str,
        to_chain: str,
        token: EvmToken | CosmosToken,
        unit_price: Decimal,
    ) -> Sequence[FeeOption]:
        request = self._provider.get_fees(from_chain, to_chain, token, unit_price)
        if self.timeout_seconds is None:
            return await request
        try:
            return await asyncio.wait_for(request, timeout=self.timeout_seconds)
        except TimeoutError as e:
            raise FeeQuoteGenericError(
                f"Fee quote timed out after {self.timeout_seconds}s"
            ) from e

    def _log_stale(self, generation: int, symbol: str) -> None:
        self._log.log(
            "debug",
            "fee_quote_stale_response_discarded",
            {"symbol": symbol, "generation": generation, "current": self._generation},
        )


__all__ = [
    "FeeQuoteProvider",
    "FeeReconciler",
    "WALLET_ERROR_MARKERS",
    "classify_fee_quote_error",
]
