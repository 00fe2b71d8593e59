"""Tests for the price resolver state machine."""

import asyncio
from decimal import Decimal

import pytest

from bridge_fees.errors import PriceUnavailable
from bridge_fees.pricing.resolver import (
    FromOracle,
    Loading,
    NeedsManual,
    PriceResolver,
    Unavailable,
    parse_manual_price,
    usable_price,
)
from tests.helpers import (
    ATOM,
    GRAV,
    USDC,
    FakePriceOracle,
    GatedPriceOracle,
    HangingPriceOracle,
    RecordingEventLogger,
)


async def make_manual_resolver() -> PriceResolver:
    """Resolver waiting for manual entry for GRAV."""
    resolver = PriceResolver(FakePriceOracle())
    await resolver.resolve(GRAV)
    assert resolver.state == NeedsManual()
    return resolver


class TestParseManualPrice:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("12.5", Decimal("12.5")),
            ("12.", Decimal("12")),
            (".5", Decimal("0.5")),
            ("0.0001", Decimal("0.0001")),
        ],
    )
    def test_positive_prices(self, raw, expected):
        assert parse_manual_price(raw) == expected

    @pytest.mark.parametrize("raw", ["", ".", "0", "0.000", "12.5.3", "abc", "-1", "1e3"])
    def test_unusable_prices(self, raw):
        assert parse_manual_price(raw) is None


class TestUsablePrice:
    def test_states(self):
        assert usable_price(Unavailable()) is None
        assert usable_price(Loading()) is None
        assert usable_price(FromOracle(Decimal("1.01"))) == Decimal("1.01")
        assert usable_price(NeedsManual("", False)) is None
        assert usable_price(NeedsManual("0", False)) is None
        assert usable_price(NeedsManual("2.5", True)) == Decimal("2.5")


class TestResolve:
    """Tests for oracle resolution."""

    def test_initial_state_is_unavailable(self):
        resolver = PriceResolver(FakePriceOracle())
        assert resolver.state == Unavailable()
        assert resolver.token is None
        assert resolver.usable_price is None

    @pytest.mark.asyncio
    async def test_oracle_price(self):
        resolver = PriceResolver(FakePriceOracle({"USDC": "0.9998"}))

        state = await resolver.resolve(USDC)

        assert state == FromOracle(Decimal("0.9998"))
        assert resolver.usable_price == Decimal("0.9998")
        assert resolver.token is USDC

    @pytest.mark.asyncio
    async def test_no_data_needs_manual_entry(self):
        resolver = PriceResolver(FakePriceOracle({"USDC": "1"}))

        state = await resolver.resolve(GRAV)

        assert state == NeedsManual("", False)
        assert resolver.usable_price is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", ["0", "-3"])
    async def test_non_positive_price_needs_manual_entry(self, price):
        resolver = PriceResolver(FakePriceOracle({"GRAV": price}))
        assert await resolver.resolve(GRAV) == NeedsManual()

    @pytest.mark.asyncio
    async def test_oracle_failure_needs_manual_entry(self):
        logger = RecordingEventLogger()
        oracle = FakePriceOracle(error=PriceUnavailable("connection refused"))
        resolver = PriceResolver(oracle, event_logger=logger)

        state = await resolver.resolve(USDC)

        assert state == NeedsManual()
        assert "price_oracle_failed" in logger.messages()

    @pytest.mark.asyncio
    async def test_unexpected_oracle_exception_needs_manual_entry(self):
        resolver = PriceResolver(FakePriceOracle(error=KeyError("exchange_rate")))
        assert await resolver.resolve(USDC) == NeedsManual()

    @pytest.mark.asyncio
    async def test_timeout_needs_manual_entry(self):
        logger = RecordingEventLogger()
        resolver = PriceResolver(HangingPriceOracle(), event_logger=logger, timeout_seconds=0.01)

        assert await resolver.resolve(USDC) == NeedsManual()
        assert "price_oracle_timeout" in logger.messages()

    @pytest.mark.asyncio
    async def test_loading_while_query_in_flight(self):
        oracle = GatedPriceOracle({"USDC": "1"})
        resolver = PriceResolver(oracle)

        task = asyncio.create_task(resolver.resolve(USDC))
        await asyncio.sleep(0)
        assert resolver.state == Loading()
        assert resolver.usable_price is None

        oracle.release("USDC")
        assert await task == FromOracle(Decimal("1"))

    @pytest.mark.asyncio
    async def test_new_token_clears_manual_input(self):
        resolver = await make_manual_resolver()
        resolver.on_manual_price_input("3")

        assert await resolver.resolve(ATOM) == NeedsManual("", False)

    @pytest.mark.asyncio
    async def test_reset(self):
        resolver = PriceResolver(FakePriceOracle({"USDC": "1"}))
        await resolver.resolve(USDC)

        resolver.reset()

        assert resolver.state == Unavailable()
        assert resolver.token is None


class TestStaleResponses:
    """Last token wins, not last response."""

    @pytest.mark.asyncio
    async def test_late_response_for_previous_token_is_discarded(self):
        oracle = GatedPriceOracle({"USDC": "1", "ATOM": "9.5"})
        logger = RecordingEventLogger()
        resolver = PriceResolver(oracle, event_logger=logger)

        first = asyncio.create_task(resolver.resolve(ATOM))
        await asyncio.sleep(0)
        second = asyncio.create_task(resolver.resolve(USDC))
        await asyncio.sleep(0)

        oracle.release("USDC")
        assert await second == FromOracle(Decimal("1"))

        oracle.release("ATOM")
        await first

        assert resolver.state == FromOracle(Decimal("1"))
        assert resolver.token is USDC
        assert "price_stale_response_discarded" in logger.messages()

    @pytest.mark.asyncio
    async def test_early_response_for_previous_token_is_discarded(self):
        oracle = GatedPriceOracle({"USDC": "1", "ATOM": "9.5"})
        resolver = PriceResolver(oracle)

        first = asyncio.create_task(resolver.resolve(ATOM))
        await asyncio.sleep(0)
        second = asyncio.create_task(resolver.resolve(GRAV))
        await asyncio.sleep(0)

        oracle.release("ATOM")
        await first
        assert resolver.state == Loading()

        oracle.release("GRAV")
        assert await second == NeedsManual()

    @pytest.mark.asyncio
    async def test_response_after_reset_is_discarded(self):
        oracle = GatedPriceOracle({"USDC": "1"})
        resolver = PriceResolver(oracle)

        task = asyncio.create_task(resolver.resolve(USDC))
        await asyncio.sleep(0)
        resolver.reset()
        oracle.release("USDC")
        await task

        assert resolver.state == Unavailable()


class TestManualInput:
    """Tests for manual price keystrokes."""

    @pytest.mark.asyncio
    async def test_valid_price_accepted(self):
        resolver = await make_manual_resolver()

        assert resolver.on_manual_price_input("12.5") is True
        assert resolver.state == NeedsManual("12.5", True)
        assert resolver.usable_price == Decimal("12.5")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["12.5.3", "abc", "-1", "1,5", "1e3", " 1", "12.5\n"])
    async def test_malformed_input_rejected(self, raw):
        resolver = await make_manual_resolver()
        resolver.on_manual_price_input("12.5")

        assert resolver.on_manual_price_input(raw) is False
        assert resolver.state == NeedsManual("12.5", True)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["", "0", ".", "0.", "0.00"])
    async def test_partial_input_accepted_but_not_usable(self, raw):
        resolver = await make_manual_resolver()

        assert resolver.on_manual_price_input(raw) is True
        assert resolver.state == NeedsManual(raw, False)
        assert resolver.usable_price is None

    @pytest.mark.asyncio
    async def test_keystroke_sequence(self):
        resolver = await make_manual_resolver()

        for raw in ["1", "12", "12.", "12.5"]:
            assert resolver.on_manual_price_input(raw)
        assert resolver.on_manual_price_input("12.5.") is False

        assert resolver.usable_price == Decimal("12.5")

    @pytest.mark.asyncio
    async def test_ignored_when_oracle_price_known(self):
        resolver = PriceResolver(FakePriceOracle({"USDC": "1"}))
        await resolver.resolve(USDC)

        assert resolver.on_manual_price_input("2") is False
        assert resolver.state == FromOracle(Decimal("1"))

    def test_ignored_without_token(self):
        resolver = PriceResolver(FakePriceOracle())
        assert resolver.on_manual_price_input("2") is False
        assert resolver.state == Unavailable()
