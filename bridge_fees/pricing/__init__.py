"""Token price resolution.

Usage:
    from bridge_fees.pricing import GravityInfoPriceOracle, NeedsManual, PriceResolver

    resolver = PriceResolver(GravityInfoPriceOracle())
    state = await resolver.resolve(token)

    if resolver.usable_price is None and isinstance(state, NeedsManual):
        resolver.on_manual_price_input("12.5")
"""

from bridge_fees.pricing.oracle import (
    DEFAULT_ORACLE_TIMEOUT,
    DEFAULT_ORACLE_URL,
    GravityInfoPriceOracle,
    PriceOracle,
    PriceQuote,
    has_price_data,
)
from bridge_fees.pricing.resolver import (
    LOADING,
    MANUAL_PRICE_PATTERN,
    UNAVAILABLE,
    FromOracle,
    Loading,
    NeedsManual,
    PriceResolver,
    ResolvedPrice,
    Unavailable,
    parse_manual_price,
    usable_price,
)

__all__ = [
    # Oracle
    "PriceOracle",
    "PriceQuote",
    "GravityInfoPriceOracle",
    "has_price_data",
    "DEFAULT_ORACLE_URL",
    "DEFAULT_ORACLE_TIMEOUT",
    # Resolver
    "PriceResolver",
    "ResolvedPrice",
    "Loading",
    "FromOracle",
    "NeedsManual",
    "Unavailable",
    "LOADING",
    "UNAVAILABLE",
    "MANUAL_PRICE_PATTERN",
    "parse_manual_price",
    "usable_price",
]
