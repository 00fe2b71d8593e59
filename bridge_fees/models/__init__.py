"""Pydantic models for tokens and bridge fee options."""

from bridge_fees.models.fees import (
    FeeOption,
    FeeSet,
    find_fee,
    is_same_fee,
    reconcile_selection,
)
from bridge_fees.models.tokens import (
    ChainFamily,
    CosmosToken,
    EvmToken,
    Token,
    price_denom,
    token_denom,
    token_identity,
    token_symbol,
)
from bridge_fees.models.types import NonNegativeAmount

__all__ = [
    # Types
    "NonNegativeAmount",
    # Tokens
    "ChainFamily",
    "CosmosToken",
    "EvmToken",
    "Token",
    "price_denom",
    "token_denom",
    "token_identity",
    "token_symbol",
    # Fees
    "FeeOption",
    "FeeSet",
    "find_fee",
    "is_same_fee",
    "reconcile_selection",
]
