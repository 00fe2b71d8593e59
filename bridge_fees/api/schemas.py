"""Request and response models for the calculator API.

Decimal values travel as strings so no precision is lost in JSON.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from bridge_fees.fees.arithmetic import DEFAULT_AMOUNT_DECIMALS
from bridge_fees.models.types import NonNegativeAmount


def decimal_str(value: Decimal) -> str:
    """Render a Decimal as a plain (non-scientific) string."""
    return format(value, "f")


class ChainFeeRequest(BaseModel):
    bridge_amount: NonNegativeAmount = Field(alias="bridgeAmount")

    model_config = {"populate_by_name": True}


class ChainFeeResponse(BaseModel):
    chain_fee: str = Field(alias="chainFee")

    model_config = {"populate_by_name": True}


class MaxAmountRequest(BaseModel):
    balance: NonNegativeAmount
    bridge_fee: NonNegativeAmount = Field(alias="bridgeFee")
    decimals: int = Field(default=DEFAULT_AMOUNT_DECIMALS, ge=0, le=36)

    model_config = {"populate_by_name": True}


class MaxAmountResponse(BaseModel):
    max_amount: str = Field(alias="maxAmount")

    model_config = {"populate_by_name": True}


class TotalCostRequest(BaseModel):
    bridge_amount: NonNegativeAmount = Field(alias="bridgeAmount")
    bridge_fee: NonNegativeAmount = Field(alias="bridgeFee")
    balance: NonNegativeAmount | None = None

    model_config = {"populate_by_name": True}


class TotalCostResponse(BaseModel):
    total_cost: str = Field(alias="totalCost")
    chain_fee: str = Field(alias="chainFee")
    insufficient_balance: bool | None = Field(default=None, alias="insufficientBalance")

    model_config = {"populate_by_name": True}


class PriceResponse(BaseModel):
    symbol: str
    price: str
    source: str
