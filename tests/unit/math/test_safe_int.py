"""Tests for SafeInt checked arithmetic."""

import pytest

from logit_amm.safe_int import DivisionByZero, S, SafeInt, Underflow


class TestConstruction:
    def test_wraps_int(self):
        assert S(5).value == 5

    def test_wraps_safe_int(self):
        assert S(S(7)).value == 7

    def test_rejects_bool(self):
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_rejects_float(self):
        with pytest.raises(TypeError):
            SafeInt(1.5)


class TestArithmetic:
    def test_add(self):
        assert S(2) + 3 == 5
        assert 3 + S(2) == 5

    def test_sub(self):
        assert S(5) - 3 == 2

    def test_sub_to_zero(self):
        assert S(5) - S(5) == 0

    def test_sub_underflow_raises(self):
        with pytest.raises(Underflow):
            S(3) - 5

    def test_rsub_underflow_raises(self):
        with pytest.raises(Underflow):
            3 - S(5)

    def test_mul(self):
        assert S(4) * 5 == 20
        assert 5 * S(4) == 20

    def test_floordiv_rounds_down(self):
        assert S(7) // 2 == 3

    def test_floordiv_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            S(1) // 0

    def test_chained_expression(self):
        """Pro-rata share computation as used by the pool."""
        shares = (S(10_000) * 1_000_000) // 100_000
        assert shares.value == 100_000


class TestComparisons:
    def test_ordering(self):
        assert S(1) < 2
        assert S(2) <= S(2)
        assert S(3) > 2
        assert S(3) >= 3

    def test_bool(self):
        assert not S(0)
        assert S(1)

    def test_int(self):
        assert int(S(9)) == 9


class TestNamedOperations:
    def test_min(self):
        assert S(4).min(7) == 4
        assert S(9).min(S(2)) == 2

    def test_saturating_sub_positive(self):
        assert S(10).saturating_sub(4) == 6

    def test_saturating_sub_clamps_to_zero(self):
        """A balance below its baseline measures as nothing received."""
        assert S(4).saturating_sub(10) == 0

