"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_fee

    fee = make_fee("fast", amount="2.5")
"""

from decimal import Decimal

from bridge_fees.models.fees import FeeOption


def make_fee(
    fee_id: str = "standard",
    amount: str | int | Decimal = "1",
    label: str | None = None,
    denom: str = "usdc",
    amount_in_currency: str | int | Decimal | None = None,
) -> FeeOption:
    """Create a fee option with sensible defaults.

    Args:
        fee_id: Provider identifier (default: "standard")
        amount: Fee amount in token units (default: 1)
        label: Human label (default: the capitalized identifier)
        denom: Fee denomination (default: "usdc")
        amount_in_currency: Fiat amount (default: same as amount)

    Returns:
        FeeOption instance ready for testing
    """
    return FeeOption(
        id=fee_id,
        label=label if label is not None else fee_id.capitalize(),
        amount=amount,
        denom=denom,
        amount_in_currency=amount if amount_in_currency is None else amount_in_currency,
    )


def make_fee_set(*amounts: str) -> tuple[FeeOption, ...]:
    """Create a slow/standard/fast style fee set from amounts, in order."""
    names = ["slow", "standard", "fast", "instant"]
    return tuple(make_fee(names[i], amount) for i, amount in enumerate(amounts))
