"""API endpoints for the bridge fee calculator."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from bridge_fees.api.schemas import (
    ChainFeeRequest,
    ChainFeeResponse,
    MaxAmountRequest,
    MaxAmountResponse,
    PriceResponse,
    TotalCostRequest,
    TotalCostResponse,
    decimal_str,
)
from bridge_fees.errors import PriceUnavailable
from bridge_fees.fees.arithmetic import (
    chain_fee,
    is_insufficient_balance,
    max_bridge_amount,
    total_bridge_cost,
)
from bridge_fees.pricing.oracle import GravityInfoPriceOracle

logger = structlog.get_logger()

router = APIRouter()


def get_price_oracle() -> GravityInfoPriceOracle:
    """Dependency provider for the price oracle.

    Override this in tests to inject a fake oracle:
        app.dependency_overrides[get_price_oracle] = lambda: fake_oracle
    """
    return GravityInfoPriceOracle()


@router.post("/fees/chain-fee", response_model=ChainFeeResponse)
async def compute_chain_fee(request: ChainFeeRequest) -> ChainFeeResponse:
    """Chain fee (20 bps) for a bridge amount."""
    return ChainFeeResponse(chain_fee=decimal_str(chain_fee(request.bridge_amount)))


@router.post("/fees/max-amount", response_model=MaxAmountResponse)
async def compute_max_amount(request: MaxAmountRequest) -> MaxAmountResponse:
    """Largest amount that can be bridged with the given balance and bridge fee."""
    amount = max_bridge_amount(request.balance, request.bridge_fee, request.decimals)
    return MaxAmountResponse(max_amount=decimal_str(amount))


@router.post("/fees/total-cost", response_model=TotalCostResponse, response_model_exclude_none=True)
async def compute_total_cost(request: TotalCostRequest) -> TotalCostResponse:
    """Total cost of a transfer and, when a balance is given, whether it is covered."""
    insufficient = None
    if request.balance is not None:
        insufficient = is_insufficient_balance(
            request.balance, request.bridge_amount, request.bridge_fee
        )

    return TotalCostResponse(
        total_cost=decimal_str(total_bridge_cost(request.bridge_amount, request.bridge_fee)),
        chain_fee=decimal_str(chain_fee(request.bridge_amount)),
        insufficient_balance=insufficient,
    )


@router.get("/prices/{symbol}", response_model=PriceResponse)
async def get_price(
    symbol: str,
    oracle: GravityInfoPriceOracle = Depends(get_price_oracle),
) -> PriceResponse:
    """Unit price of a token symbol from the oracle.

    Error Handling:
        - Symbol unknown or price unusable: 404
        - Oracle unreachable or response invalid: 503
    """
    try:
        quote = await oracle.fetch_symbol_price(symbol)
    except PriceUnavailable as e:
        logger.warning("price_lookup_failed", symbol=symbol, error=str(e))
        raise HTTPException(status_code=503, detail="Price oracle unavailable") from e

    if quote is None:
        raise HTTPException(status_code=404, detail=f"No price data for {symbol}")

    return PriceResponse(symbol=quote.symbol, price=decimal_str(quote.price), source=quote.source)
