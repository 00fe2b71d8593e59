"""Fee selector session.

Composes price resolution, fee reconciliation and affordability annotation
for one user session. The presentation layer feeds inputs in (token, chain
pair, amount, balance, manual price keystrokes, fee clicks) and renders the
``FeeSelectorState`` returned by ``snapshot()``.

Control flow:
- token change: fees and error are cleared, the price is re-resolved, then
  fees are fetched if a usable price exists
- chain pair change: fees are re-fetched if a usable price exists
- manual price keystroke: fees are re-fetched (or emptied) when accepted
- amount or balance change: only affordability changes
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from bridge_fees.affordability import annotate_affordability
from bridge_fees.errors import FeeErrorKind, ParseError
from bridge_fees.fees.arithmetic import DecimalLike, is_insufficient_balance, max_bridge_amount
from bridge_fees.fees.config import DEFAULT_FEE_CONFIG, FeeConfig
from bridge_fees.models.fees import FeeOption, FeeSet
from bridge_fees.models.tokens import price_denom, token_identity, token_symbol
from bridge_fees.observability import EventLogger, default_event_logger
from bridge_fees.pricing.resolver import (
    Loading,
    NeedsManual,
    PriceResolver,
    ResolvedPrice,
    Unavailable,
)
from bridge_fees.reconciler import FeeReconciler

if TYPE_CHECKING:
    from bridge_fees.models.tokens import CosmosToken, EvmToken
    from bridge_fees.pricing.oracle import PriceOracle
    from bridge_fees.reconciler import FeeQuoteProvider

ENTER_PRICE_MESSAGE = "Enter token price above to calculate fees"
NO_FEES_MESSAGE = "Connect Ethereum wallet to calculate fees"


class SelectorStatus(Enum):
    """What the fee area of the UI should show."""

    IDLE = "idle"
    LOADING_PRICE = "loading_price"
    LOADING_FEES = "loading_fees"
    NEEDS_PRICE = "needs_price"
    ERROR = "error"
    NO_FEES = "no_fees"
    READY = "ready"


@dataclass(frozen=True)
class FeeSelectorState:
    """Snapshot of everything the presentation layer renders.

    Attributes:
        token: Selected token, if any
        price_denom: Price denomination of the selected token
        resolved_price: Current price resolution state
        fees: Current fee set
        selection: Selected fee option
        disabled: Per-fee flags, aligned with ``fees``; True when the fee
            plus the entered amount exceeds the balance
        error: Kind of the last fee-quote failure
        message: Short user-facing message for the current status
        status: Current status of the fee area
        max_amount: Largest amount bridgeable with the selected fee
        insufficient_balance: Whether the entered amount plus fees exceeds
            the balance with the selected fee
    """

    token: EvmToken | CosmosToken | None
    price_denom: str | None
    resolved_price: ResolvedPrice
    fees: FeeSet
    selection: FeeOption | None
    disabled: tuple[bool, ...]
    error: FeeErrorKind | None
    message: str | None
    status: SelectorStatus
    max_amount: Decimal | None = None
    insufficient_balance: bool | None = None

    @property
    def needs_manual_price(self) -> bool:
        return isinstance(self.resolved_price, NeedsManual)


class FeeSelector:
    """Price resolution and fee selection for one bridge-transfer form."""

    def __init__(
        self,
        oracle: PriceOracle,
        provider: FeeQuoteProvider,
        *,
        from_chain: str,
        to_chain: str,
        config: FeeConfig | None = None,
        event_logger: EventLogger | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            oracle: Price oracle
            provider: Fee-quote provider
            from_chain: Initial source chain
            to_chain: Initial destination chain
            config: Fee configuration. Uses DEFAULT_FEE_CONFIG if not provided.
            event_logger: Logger shared by the session's components. Each
                component gets its own structlog logger if not provided.
        """
        self.config = config or DEFAULT_FEE_CONFIG
        self._log = event_logger or default_event_logger("fee_selector")
        self._resolver = PriceResolver(
            oracle,
            event_logger=event_logger,
            timeout_seconds=self.config.price_timeout_seconds,
        )
        self._reconciler = FeeReconciler(
            provider,
            event_logger=event_logger,
            timeout_seconds=self.config.fee_quote_timeout_seconds,
        )

        self._token: EvmToken | CosmosToken | None = None
        self._from_chain = from_chain
        self._to_chain = to_chain
        self._amount: DecimalLike | None = None
        self._balance: DecimalLike | None = None

    @property
    def resolver(self) -> PriceResolver:
        return self._resolver

    @property
    def reconciler(self) -> FeeReconciler:
        return self._reconciler

    @property
    def token(self) -> EvmToken | CosmosToken | None:
        return self._token

    @property
    def route(self) -> tuple[str, str]:
        return self._from_chain, self._to_chain

    async def select_token(self, token: EvmToken | CosmosToken) -> FeeSelectorState:
        """Select a token, resolve its price and fetch fees.

        Selecting a token with the same identity as the current one is a no-op.
        """
        if self._token is not None and token_identity(token) == token_identity(self._token):
            return self.snapshot()

        self._log.log(
            "info",
            "token_selected",
            {"symbol": token_symbol(token), "price_denom": price_denom(token)},
        )
        self._token = token
        self._reconciler.clear()

        await self._resolver.resolve(token)
        if self._token is not token or isinstance(self._resolver.state, Loading):
            # Superseded by a newer selection while the oracle was queried
            return self.snapshot()

        await self._refresh_fees()
        return self.snapshot()

    def clear_token(self) -> FeeSelectorState:
        """Deselect the token, dropping price, fees and selection."""
        self._token = None
        self._resolver.reset()
        self._reconciler.clear()
        return self.snapshot()

    async def set_route(self, from_chain: str, to_chain: str) -> FeeSelectorState:
        """Change the chain pair, re-fetching fees when a price is usable."""
        if (from_chain, to_chain) == (self._from_chain, self._to_chain):
            return self.snapshot()

        self._from_chain = from_chain
        self._to_chain = to_chain
        if self._token is not None and self._resolver.usable_price is not None:
            await self._refresh_fees()
        return self.snapshot()

    def set_amount(self, amount: DecimalLike | None) -> FeeSelectorState:
        """Update the entered transfer amount."""
        self._amount = amount
        return self.snapshot()

    def set_balance(self, balance: DecimalLike | None) -> FeeSelectorState:
        """Update the user's balance."""
        self._balance = balance
        return self.snapshot()

    async def on_manual_price_input(self, raw: str) -> bool:
        """Handle a manual price keystroke.

        Returns:
            True if the input was accepted (and fees refreshed)
        """
        if not self._resolver.on_manual_price_input(raw):
            return False
        if self._token is not None:
            await self._refresh_fees()
        return True

    def on_fee_clicked(self, fee: FeeOption) -> FeeSelectorState:
        """Handle a click on a fee option."""
        self._reconciler.select(fee)
        return self.snapshot()

    def snapshot(self) -> FeeSelectorState:
        """Current state for the presentation layer."""
        fees = self._reconciler.fees
        selection = self._reconciler.selection
        error = self._reconciler.error
        status, message = self._status()
        max_amount, insufficient = self._solvency(selection)

        return FeeSelectorState(
            token=self._token,
            price_denom=price_denom(self._token) if self._token is not None else None,
            resolved_price=self._resolver.state,
            fees=fees,
            selection=selection,
            disabled=annotate_affordability(fees, self._amount, self._balance, self._log),
            error=error.kind if error is not None else None,
            message=message,
            status=status,
            max_amount=max_amount,
            insufficient_balance=insufficient,
        )

    async def _refresh_fees(self) -> None:
        if self._token is None:
            return
        await self._reconciler.refresh(
            self._from_chain,
            self._to_chain,
            self._token,
            self._resolver.usable_price,
        )

    def _status(self) -> tuple[SelectorStatus, str | None]:
        state = self._resolver.state
        if isinstance(state, Unavailable):
            return SelectorStatus.IDLE, None
        if isinstance(state, Loading):
            return SelectorStatus.LOADING_PRICE, None
        if self._reconciler.loading:
            return SelectorStatus.LOADING_FEES, None
        if isinstance(state, NeedsManual) and not state.valid:
            return SelectorStatus.NEEDS_PRICE, ENTER_PRICE_MESSAGE
        error = self._reconciler.error
        if error is not None:
            return SelectorStatus.ERROR, error.user_message
        if not self._reconciler.fees:
            return SelectorStatus.NO_FEES, NO_FEES_MESSAGE
        return SelectorStatus.READY, None

    def _solvency(self, selection: FeeOption | None) -> tuple[Decimal | None, bool | None]:
        if selection is None or self._balance is None:
            return None, None
        amount = Decimal(0) if self._amount is None or self._amount == "" else self._amount
        try:
            max_amount = max_bridge_amount(
                self._balance, selection.amount, self.config.max_amount_decimals
            )
            insufficient = is_insufficient_balance(self._balance, amount, selection.amount)
        except (ParseError, ArithmeticError) as e:
            self._log.log("debug", "solvency_unavailable", {"error": str(e)})
            return None, None
        return max_amount, insufficient


__all__ = [
    "ENTER_PRICE_MESSAGE",
    "FeeSelector",
    "FeeSelectorState",
    "NO_FEES_MESSAGE",
    "SelectorStatus",
]
