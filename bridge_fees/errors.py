"""Error taxonomy for price resolution and fee reconciliation.

None of these errors is fatal to the host: every failure degrades to an
empty or disabled state plus, at most, a short user-facing message.
"""

from __future__ import annotations

from enum import Enum

WALLET_ERROR_MESSAGE = "Connect Ethereum wallet to calculate fees"
GENERIC_ERROR_MESSAGE = "Error calculating fees"


class FeeErrorKind(Enum):
    """Classification of fee-quote failures."""

    WALLET = "wallet"
    GENERIC = "generic"


class BridgeFeeError(Exception):
    """Base class for errors raised by this package."""

    pass


class ParseError(BridgeFeeError, ValueError):
    """A numeric input could not be parsed as a decimal."""

    def __init__(self, value: object, detail: str | None = None) -> None:
        self.value = value
        message = f"Not a valid decimal: {value!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class PriceUnavailable(BridgeFeeError):
    """The price oracle failed or returned unusable data.

    Recovered locally by switching the resolver to manual entry.
    """

    pass


class FeeQuoteError(BridgeFeeError):
    """Base class for fee-quote failures.

    Attributes:
        kind: Classification used to pick the user-facing message
        user_message: Short message safe to show to the user
    """

    kind: FeeErrorKind = FeeErrorKind.GENERIC
    user_message: str = GENERIC_ERROR_MESSAGE


class FeeQuoteWalletError(FeeQuoteError):
    """A wallet or gas-price precondition was not met."""

    kind = FeeErrorKind.WALLET
    user_message = WALLET_ERROR_MESSAGE


class FeeQuoteGenericError(FeeQuoteError):
    """Any other fee-quote failure."""

    kind = FeeErrorKind.GENERIC
    user_message = GENERIC_ERROR_MESSAGE


__all__ = [
    "BridgeFeeError",
    "FeeErrorKind",
    "FeeQuoteError",
    "FeeQuoteGenericError",
    "FeeQuoteWalletError",
    "GENERIC_ERROR_MESSAGE",
    "ParseError",
    "PriceUnavailable",
    "WALLET_ERROR_MESSAGE",
]
