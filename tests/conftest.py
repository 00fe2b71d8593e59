"""Pytest configuration and fixtures."""

import pytest

from bridge_fees.fees.config import FeeConfig
from tests.helpers import FakeFeeProvider, FakePriceOracle, RecordingEventLogger, make_fee_set


@pytest.fixture
def event_logger() -> RecordingEventLogger:
    """An event logger that records every event."""
    return RecordingEventLogger()


@pytest.fixture
def fee_set():
    """A slow/standard/fast fee set."""
    return make_fee_set("0.5", "1", "2")


@pytest.fixture
def price_oracle() -> FakePriceOracle:
    """An oracle that knows USDC and WETH but not the Cosmos tokens."""
    return FakePriceOracle({"USDC": "1.0001", "ETH": "2500", "WETH": "2500"})


@pytest.fixture
def fee_provider(fee_set) -> FakeFeeProvider:
    """A provider that always returns the standard fee set."""
    return FakeFeeProvider(fee_set)


@pytest.fixture
def no_timeouts() -> FeeConfig:
    """Fee configuration without timeouts, for tests that gate responses."""
    return FeeConfig(price_timeout_seconds=None, fee_quote_timeout_seconds=None)
