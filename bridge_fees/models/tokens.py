"""Token descriptors.

A token lives on one of two chain families. Each family has its own model;
the shared accessors below dispatch on the variant explicitly instead of
probing optional fields.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class ChainFamily(str, Enum):
    """Chain family a token lives on."""

    EVM = "evm"
    COSMOS = "cosmos"


class EvmToken(BaseModel):
    """ERC20-style token on an EVM chain."""

    kind: Literal["evm"] = "evm"
    symbol: str = Field(min_length=1)
    address: str
    decimals: int = Field(ge=0, le=77)
    price_denom: str | None = Field(
        default=None,
        alias="priceDenom",
        description="Denomination used for price display. Defaults to the symbol.",
    )

    model_config = {"frozen": True, "populate_by_name": True}


class CosmosToken(BaseModel):
    """Bank-module token on a Cosmos chain."""

    kind: Literal["cosmos"] = "cosmos"
    symbol: str = Field(min_length=1)
    denom: str = Field(min_length=1)
    decimals: int = Field(ge=0, le=77)
    price_denom: str | None = Field(
        default=None,
        alias="priceDenom",
        description="Denomination used for price display. Defaults to the denom.",
    )

    model_config = {"frozen": True, "populate_by_name": True}


Token = Annotated[EvmToken | CosmosToken, Field(discriminator="kind")]


def token_symbol(token: EvmToken | CosmosToken) -> str:
    """Ticker symbol of the token."""
    return token.symbol


def token_denom(token: EvmToken | CosmosToken) -> str:
    """On-chain denomination: contract address for EVM, bank denom for Cosmos."""
    if isinstance(token, EvmToken):
        return token.address
    if isinstance(token, CosmosToken):
        return token.denom
    raise TypeError(f"Unsupported token type: {type(token).__name__}")


def price_denom(token: EvmToken | CosmosToken) -> str:
    """Denomination the token's price is expressed in.

    Uses the explicit ``price_denom`` when set, otherwise the symbol for EVM
    tokens and the bank denom for Cosmos tokens.
    """
    if token.price_denom:
        return token.price_denom
    if isinstance(token, EvmToken):
        return token.symbol
    if isinstance(token, CosmosToken):
        return token.denom
    raise TypeError(f"Unsupported token type: {type(token).__name__}")


def token_identity(token: EvmToken | CosmosToken) -> tuple[ChainFamily, str]:
    """Identity used to decide whether a token selection actually changed."""
    return ChainFamily(token.kind), token.symbol
