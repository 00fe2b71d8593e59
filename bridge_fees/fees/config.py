"""Fee and price-resolution configuration."""

from dataclasses import dataclass

from bridge_fees.fees.arithmetic import DEFAULT_AMOUNT_DECIMALS


@dataclass(frozen=True)
class FeeConfig:
    """Centralized configuration for fee selection.

    Attributes:
        max_amount_decimals: Decimal places kept for the max bridge amount (default: 6)
        price_timeout_seconds: Upper bound on an oracle query. A timed-out
            query is handled like an oracle failure (manual entry). None disables it.
        fee_quote_timeout_seconds: Upper bound on a fee-quote request. A timed-out
            request surfaces the generic fee error. None disables it.
    """

    max_amount_decimals: int = DEFAULT_AMOUNT_DECIMALS

    price_timeout_seconds: float | None = 10.0
    fee_quote_timeout_seconds: float | None = 30.0


# Default configuration instance
DEFAULT_FEE_CONFIG = FeeConfig()
