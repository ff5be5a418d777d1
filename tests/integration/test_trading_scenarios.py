"""End-to-end trading scenarios against the pricing engine.

These tests walk a curve through sequences of quotes and committed trades
and check the conservation properties that hold across them.
"""

import pytest

from launchpad.constants import CURVE_SUPPLY, U64_MAX
from launchpad.errors import CurveGraduated, InsufficientSupply, MathOverflow
from launchpad.graduation import should_graduate
from launchpad.pricing.fees import FeeCalculator, FeeConfig
from launchpad.trading import apply_buy, apply_sell
from tests.helpers import ONE_SOL, SCENARIO_SUPPLY, SOL_PRICE, make_config, make_state


class TestWorkedExample:
    """The $0.0000042 -> $0.0000069 curve at $150 per coin."""

    def test_first_buy(self, engine, scenario_config):
        """1M tokens cost about 0.028 SOL with a one-percent fee on top."""
        quote = engine.quote_buy(make_state(), scenario_config, 1_000_000, SOL_PRICE)
        breakdown = FeeCalculator(FeeConfig(100)).apply(quote)

        assert 28_000_000 < quote.cost_or_proceeds < 28_100_000
        assert breakdown.fee == quote.cost_or_proceeds // 100
        breakdown.ensure_within(29_000_000)

    def test_sold_out_without_enough_value_stays_put(self, engine, scenario_config):
        """The whole small curve raises about $4,350, short of $12,000."""
        state = make_state()
        quote = engine.quote_buy(state, scenario_config, SCENARIO_SUPPLY, SOL_PRICE)
        state = apply_buy(state, scenario_config, quote)

        assert state.tokens_sold == SCENARIO_SUPPLY
        assert not state.is_graduated
        assert not should_graduate(state, scenario_config)

        raised = engine.usd_raised(state.reserve, SOL_PRICE)
        assert 4_300 * 10**8 < raised < 4_400 * 10**8


class TestReserveConservation:
    """Buys followed by matching sells leave no residue."""

    def test_reverse_order_sells_restore_reserve(self, engine, scenario_config):
        amounts = [1_000_000, 37_000_001, 250_000_000, 3]
        state = make_state()
        paid = 0

        for amount in amounts:
            quote = engine.quote_buy(state, scenario_config, amount, SOL_PRICE)
            state = apply_buy(state, scenario_config, quote)
            paid += quote.cost_or_proceeds

        assert state.reserve == paid

        for amount in reversed(amounts):
            quote = engine.quote_sell(state, scenario_config, amount, SOL_PRICE)
            state = apply_sell(state, scenario_config, quote)

        assert state.tokens_sold == 0
        assert state.reserve == 0
        assert state.total_volume == 2 * paid
        assert state.trade_count == 2 * len(amounts)

    def test_round_trip_never_profits(self, engine, scenario_config):
        """Buying and immediately selling returns exactly what was paid."""
        state = make_state(tokens_sold=123_456_789, reserve=100 * ONE_SOL)
        buy = engine.quote_buy(state, scenario_config, 10_000_000, SOL_PRICE)
        after_buy = apply_buy(state, scenario_config, buy)
        sell = engine.quote_sell(after_buy, scenario_config, 10_000_000, SOL_PRICE)
        after_sell = apply_sell(after_buy, scenario_config, sell)

        assert sell.cost_or_proceeds == buy.cost_or_proceeds
        assert after_sell.reserve == state.reserve


class TestGraduationFlow:
    """Selling out the default curve at $150 graduates it."""

    def test_buy_out_in_chunks(self, engine, default_config):
        state = make_state()
        chunk = CURVE_SUPPLY // 8

        for _ in range(8):
            assert not state.is_graduated
            quote = engine.quote_buy(state, default_config, chunk, SOL_PRICE)
            state = apply_buy(state, default_config, quote)

        assert state.tokens_sold == CURVE_SUPPLY
        assert state.is_graduated
        # About $18.5k raised against the $12k threshold
        raised = engine.usd_raised(state.reserve, SOL_PRICE)
        assert raised > default_config.graduation_threshold

    def test_graduated_curve_is_closed(self, engine, default_config):
        state = make_state(tokens_sold=CURVE_SUPPLY, reserve=200 * ONE_SOL, is_graduated=True)
        quote = engine.quote_sell(state, default_config, 1_000, SOL_PRICE)
        with pytest.raises(CurveGraduated):
            apply_sell(state, default_config, quote)

    def test_no_buy_past_supply(self, engine, default_config):
        state = make_state(tokens_sold=CURVE_SUPPLY)
        with pytest.raises(InsufficientSupply):
            engine.quote_buy(state, default_config, 1, SOL_PRICE)


class TestExtremeInputs:
    """Large inputs fail cleanly instead of wrapping."""

    @pytest.mark.parametrize("rate", [1, SOL_PRICE, U64_MAX])
    def test_quotes_are_bounded_or_fail(self, engine, rate):
        config = make_config(curve_supply=U64_MAX)
        for amount in (1, 10**9, U64_MAX):
            try:
                quote = engine.quote_buy(make_state(), config, amount, rate)
            except MathOverflow:
                continue
            assert 1 <= quote.cost_or_proceeds <= U64_MAX
