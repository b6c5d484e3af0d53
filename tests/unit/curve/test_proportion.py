"""Tests for short-token proportion calculations."""

import pytest

from logit_amm.constants import PROPORTION_SCALE
from logit_amm.curve.proportion import spot_proportion, trade_proportion_in, trade_proportion_out
from logit_amm.safe_int import Underflow


class TestSpotProportion:
    def test_balanced_pool(self):
        assert spot_proportion(100, 100) == PROPORTION_SCALE // 2

    def test_skewed_pool(self):
        assert spot_proportion(1, 3) == PROPORTION_SCALE // 4

    def test_rounds_down(self):
        assert spot_proportion(1, 2) == PROPORTION_SCALE // 3

    def test_empty_pool_is_zero(self):
        assert spot_proportion(0, 0) == 0

    def test_one_sided_pool(self):
        assert spot_proportion(5, 0) == PROPORTION_SCALE
        assert spot_proportion(0, 5) == 0


class TestTradeProportion:
    """The denominator stays at the pre-trade total."""

    def test_sell_adds_to_numerator(self):
        assert trade_proportion_in(50, 100, 100) == 150 * PROPORTION_SCALE // 200

    def test_buy_subtracts_from_numerator(self):
        assert trade_proportion_out(50, 100, 100) == PROPORTION_SCALE // 4

    def test_buy_entire_short_side(self):
        assert trade_proportion_out(100, 100, 100) == 0

    def test_buy_more_than_short_raises(self):
        with pytest.raises(Underflow):
            trade_proportion_out(101, 100, 100)

    def test_sell_can_exceed_one(self):
        """Selling more than the underlying side pushes p past 1."""
        assert trade_proportion_in(300, 100, 100) == 2 * PROPORTION_SCALE

    def test_empty_pool_is_zero(self):
        assert trade_proportion_in(10, 0, 0) == 0
        assert trade_proportion_out(0, 0, 0) == 0
