"""Fee option models and selection reconciliation."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

from bridge_fees.models.types import NonNegativeAmount


class FeeOption(BaseModel):
    """A bridge fee option offered by the fee-quote provider.

    Fee options are immutable; a new fetch produces a new set that
    supersedes the old one.
    """

    id: str = Field(description="Opaque, provider-assigned identifier.")
    label: str
    amount: NonNegativeAmount = Field(description="Fee amount in token units.")
    denom: str = Field(description="Fee denomination symbol.")
    amount_in_currency: NonNegativeAmount = Field(
        alias="amountInCurrency",
        description="Fiat-equivalent of the fee amount.",
    )

    model_config = {"frozen": True, "populate_by_name": True}


FeeSet = tuple[FeeOption, ...]


def is_same_fee(fee_a: FeeOption, fee_b: FeeOption) -> bool:
    """True if every field of the two options matches."""
    return fee_a.model_dump() == fee_b.model_dump()


def find_fee(fees: Sequence[FeeOption], fee_id: str) -> FeeOption | None:
    """Find a fee option by identifier."""
    for fee in fees:
        if fee.id == fee_id:
            return fee
    return None


def reconcile_selection(
    selection: FeeOption | None,
    fees: Sequence[FeeOption],
) -> FeeOption | None:
    """Re-derive the current selection from a freshly fetched fee set.

    - If the selected identifier is still offered, the new option at that
      identifier wins, even when its other fields changed.
    - Otherwise the first option of a non-empty set is selected.
    - An empty set has no selection.

    Args:
        selection: The previously selected option, if any
        fees: The freshly fetched fee set

    Returns:
        The reconciled selection
    """
    if not fees:
        return None

    if selection is not None:
        current = find_fee(fees, selection.id)
        if current is not None:
            return current

    return fees[0]
