"""Bridge fee arithmetic and configuration.

This module provides the pure Decimal math behind fee selection:
- Chain fee (20 bps of the bridged amount)
- Maximum bridgeable amount for a balance and bridge fee
- Total cost and solvency check

Usage:
    from bridge_fees.fees import max_bridge_amount, is_insufficient_balance

    amount = max_bridge_amount("100", "1")  # Decimal("98.802395")
    assert not is_insufficient_balance("100", amount, "1")
"""

from bridge_fees.fees.arithmetic import (
    CHAIN_FEE_RATE,
    DECIMAL_HIGH_PREC_CONTEXT,
    DEFAULT_AMOUNT_DECIMALS,
    DecimalLike,
    chain_fee,
    high_precision_context,
    is_insufficient_balance,
    max_bridge_amount,
    parse_decimal,
    total_bridge_cost,
)
from bridge_fees.fees.config import DEFAULT_FEE_CONFIG, FeeConfig

__all__ = [
    # Arithmetic
    "CHAIN_FEE_RATE",
    "DECIMAL_HIGH_PREC_CONTEXT",
    "DEFAULT_AMOUNT_DECIMALS",
    "DecimalLike",
    "chain_fee",
    "high_precision_context",
    "is_insufficient_balance",
    "max_bridge_amount",
    "parse_decimal",
    "total_bridge_cost",
    # Config
    "FeeConfig",
    "DEFAULT_FEE_CONFIG",
]
