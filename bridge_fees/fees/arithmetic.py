"""Bridge fee arithmetic.

Pure functions over ``decimal.Decimal``. The relationship between a
balance and the amount that can be bridged is:

    balance = bridge_amount + bridge_fee + chain_fee
    chain_fee = bridge_amount * CHAIN_FEE_RATE

so the largest affordable amount is:

    bridge_amount = (balance - bridge_fee) / (1 + CHAIN_FEE_RATE)

All computations run in a high-precision context, widened when the
operands need it, so that large balances expressed in minimal
denomination keep every digit.
"""

from __future__ import annotations

import decimal
import re
from decimal import ROUND_DOWN, Decimal, InvalidOperation

from bridge_fees.errors import ParseError

# Chain fee: 20 basis points (0.2%) of the bridged amount
CHAIN_FEE_RATE = Decimal("0.002")

# Decimal places kept by max_bridge_amount when not specified
DEFAULT_AMOUNT_DECIMALS = 6

# Baseline precision: 78 digits holds any uint256 minimal-denomination amount
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

# Largest accepted power of ten, in both directions
MAX_DECIMAL_MAGNITUDE = 96

# ASCII decimal literal: optional sign, digits with optional fraction, optional exponent
DECIMAL_LITERAL_PATTERN = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)

DecimalLike = Decimal | int | str


def parse_decimal(value: DecimalLike) -> Decimal:
    """Parse a value into a finite Decimal.

    Strings must be plain ASCII decimal literals; digit separators and
    non-ASCII digits are rejected even though ``Decimal`` accepts them.

    Args:
        value: Decimal, int or decimal string

    Returns:
        The parsed Decimal

    Raises:
        ParseError: If the value is a float, malformed, not finite, or
            beyond MAX_DECIMAL_MAGNITUDE
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or isinstance(value, float):
        raise ParseError(value, "binary floats are not accepted")
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        text = value.strip()
        if not DECIMAL_LITERAL_PATTERN.fullmatch(text):
            raise ParseError(value)
        try:
            result = Decimal(text)
        except InvalidOperation as err:
            raise ParseError(value) from err
    else:
        raise ParseError(value, f"unsupported type {type(value).__name__}")

    if not result.is_finite():
        raise ParseError(value, "not finite")
    if result and (
        result.adjusted() > MAX_DECIMAL_MAGNITUDE
        or result.as_tuple().exponent < -MAX_DECIMAL_MAGNITUDE
    ):
        raise ParseError(value, "out of range")
    return result


def high_precision_context(*values: Decimal, extra_digits: int = 0) -> decimal.Context:
    """Copy of DECIMAL_HIGH_PREC_CONTEXT wide enough for ``values``.

    The precision covers every digit between the most and the least
    significant digit of ``values``, plus ``extra_digits``.
    """
    context = DECIMAL_HIGH_PREC_CONTEXT.copy()
    if values:
        top = max(v.adjusted() for v in values)
        bottom = min(v.as_tuple().exponent for v in values)
        context.prec = max(context.prec, top - bottom + 1 + extra_digits)
    return context


def chain_fee(bridge_amount: DecimalLike) -> Decimal:
    """Chain fee for a bridge amount (no rounding applied)."""
    amount = parse_decimal(bridge_amount)
    with decimal.localcontext(high_precision_context(amount, CHAIN_FEE_RATE, extra_digits=1)):
        return amount * CHAIN_FEE_RATE


def max_bridge_amount(
    balance: DecimalLike,
    bridge_fee: DecimalLike,
    decimals: int = DEFAULT_AMOUNT_DECIMALS,
) -> Decimal:
    """Maximum amount that can be bridged given a balance and bridge fee.

    The result is truncated toward zero to ``decimals`` places, so that the
    total cost of bridging it never exceeds the balance.

    Args:
        balance: The user's token balance
        bridge_fee: The selected bridge fee amount
        decimals: Number of decimal places to keep

    Returns:
        The maximum bridge amount, or exactly ``Decimal(0)`` when the fee
        consumes the whole balance
    """
    balance_value = parse_decimal(balance)
    fee_value = parse_decimal(bridge_fee)

    with decimal.localcontext(high_precision_context(balance_value, fee_value, extra_digits=1)):
        available = balance_value - fee_value
    if available <= 0:
        return Decimal(0)

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT) as context:
        # Every integer digit plus the kept places and a guard digit, truncated
        context.prec = max(context.prec, available.adjusted() + decimals + 2)
        context.rounding = ROUND_DOWN
        amount = available / (1 + CHAIN_FEE_RATE)
        return amount.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_DOWN)


def total_bridge_cost(bridge_amount: DecimalLike, bridge_fee: DecimalLike) -> Decimal:
    """Total cost of a bridge transfer: amount + bridge fee + chain fee."""
    amount = parse_decimal(bridge_amount)
    fee = parse_decimal(bridge_fee)
    fee_on_chain = chain_fee(amount)
    with decimal.localcontext(high_precision_context(amount, fee, fee_on_chain, extra_digits=1)):
        return amount + fee + fee_on_chain


def is_insufficient_balance(
    balance: DecimalLike,
    bridge_amount: DecimalLike,
    bridge_fee: DecimalLike,
) -> bool:
    """True if the balance does not cover the total bridge cost.

    A balance exactly equal to the total cost is sufficient.
    """
    return parse_decimal(balance) < total_bridge_cost(bridge_amount, bridge_fee)


__all__ = [
    "CHAIN_FEE_RATE",
    "DECIMAL_HIGH_PREC_CONTEXT",
    "DECIMAL_LITERAL_PATTERN",
    "DEFAULT_AMOUNT_DECIMALS",
    "DecimalLike",
    "MAX_DECIMAL_MAGNITUDE",
    "chain_fee",
    "high_precision_context",
    "is_insufficient_balance",
    "max_bridge_amount",
    "parse_decimal",
    "total_bridge_cost",
]
