"""Affordability annotation for fee options.

An option is disabled when its fee plus the entered transfer amount
exceeds the balance. Annotations are recomputed on every call; nothing is
cached, so they always reflect the current amount and balance.
"""

from __future__ import annotations

import decimal
from collections.abc import Sequence
from decimal import Decimal

from bridge_fees.errors import ParseError
from bridge_fees.fees.arithmetic import DecimalLike, high_precision_context, parse_decimal
from bridge_fees.models.fees import FeeOption
from bridge_fees.observability import EventLogger


def is_fee_disabled(
    fee: FeeOption,
    amount: DecimalLike | None,
    balance: DecimalLike | None,
    event_logger: EventLogger | None = None,
) -> bool:
    """True if selecting ``fee`` would exceed the balance.

    An empty amount counts as zero. Any value that cannot be parsed makes
    the option disabled.

    Args:
        fee: The fee option
        amount: Transfer amount currently entered
        balance: The user's balance
        event_logger: Optional logger for unparseable inputs

    Returns:
        True if ``fee.amount + amount > balance`` or the inputs are unusable
    """
    try:
        entered = Decimal(0) if amount is None or amount == "" else parse_decimal(amount)
        available = parse_decimal(balance)
    except ParseError as e:
        if event_logger is not None:
            event_logger.log(
                "debug", "fee_affordability_unparseable", {"fee_id": fee.id, "error": str(e)}
            )
        return True

    with decimal.localcontext(high_precision_context(fee.amount, entered, extra_digits=1)):
        return fee.amount + entered > available


def annotate_affordability(
    fees: Sequence[FeeOption],
    amount: DecimalLike | None,
    balance: DecimalLike | None,
    event_logger: EventLogger | None = None,
) -> tuple[bool, ...]:
    """Disabled flag for each fee option, aligned by index with ``fees``."""
    return tuple(is_fee_disabled(fee, amount, balance, event_logger) for fee in fees)


__all__ = [
    "annotate_affordability",
    "is_fee_disabled",
]
