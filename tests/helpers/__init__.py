"""Test helpers module for shared test utilities.

- constants: Tokens and chain names
- factories: Fee option factory functions
- fakes: Fake oracle, fee-quote provider and event logger
"""

from tests.helpers.constants import ATOM, ETHEREUM, GRAV, GRAVITY, OSMOSIS, USDC, WETH
from tests.helpers.factories import make_fee, make_fee_set
from tests.helpers.fakes import (
    FakeFeeProvider,
    FakePriceOracle,
    GatedFeeProvider,
    GatedPriceOracle,
    HangingFeeProvider,
    HangingPriceOracle,
    RecordingEventLogger,
)

__all__ = [
    # Constants
    "ATOM",
    "GRAV",
    "USDC",
    "WETH",
    "ETHEREUM",
    "GRAVITY",
    "OSMOSIS",
    # Factories
    "make_fee",
    "make_fee_set",
    # Fakes
    "FakeFeeProvider",
    "FakePriceOracle",
    "GatedFeeProvider",
    "GatedPriceOracle",
    "HangingFeeProvider",
    "HangingPriceOracle",
    "RecordingEventLogger",
]
