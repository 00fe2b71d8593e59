"""Shared type definitions for bridge fee models."""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from bridge_fees.fees.arithmetic import parse_decimal


def validate_decimal(value: Any) -> Decimal:
    """Validate that a value is an exact decimal amount.

    Args:
        value: Decimal, int or decimal string

    Returns:
        The parsed Decimal

    Raises:
        ValueError: If value is a float or not a finite decimal
    """
    # ParseError subclasses ValueError, which pydantic reports as a validation error
    return parse_decimal(value)


def validate_non_negative_decimal(value: Any) -> Decimal:
    """Validate an exact decimal amount that must not be negative."""
    result = validate_decimal(value)
    if result < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    return result


# Exact decimal amount >= 0
NonNegativeAmount = Annotated[
    Decimal,
    BeforeValidator(validate_non_negative_decimal),
    Field(description="Exact non-negative decimal amount"),
]
