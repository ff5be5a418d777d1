"""Tests for fixed-point exp and ln."""

import math

import pytest

from launchpad.constants import PRECISION
from launchpad.errors import ExponentOutOfRange, InvalidRange, MathOverflow
from launchpad.math.fixed_point import LN2_18, exp_taylor, ln_fixed

P = PRECISION


class TestExpTaylor:
    """Tests for the truncated Taylor exponential."""

    def test_exp_zero_is_one(self):
        """e^0 is exactly one at scale."""
        assert exp_taylor(0, P) == P

    def test_exp_one(self):
        """e^1 matches e to within truncation error."""
        assert abs(exp_taylor(P, P) - 2_718_281_828_459) <= 40

    @pytest.mark.parametrize("x", [0.001, 0.25, 0.5, 1.5, 2.8, 3.9])
    def test_matches_float_reference(self, x):
        """Results agree with math.exp to about one part in 1e9."""
        result = exp_taylor(int(x * P), P)
        expected = math.exp(int(x * P) / P) * P
        assert abs(result - expected) <= expected * 1e-9

    def test_exp_upper_bound(self):
        """The largest supported exponent still converges."""
        result = exp_taylor(4 * P, P)
        expected = math.exp(4) * P
        assert abs(result - expected) <= expected * 1e-9

    def test_truncates_toward_zero(self):
        """The series never overshoots the true value."""
        assert exp_taylor(P, P) <= math.e * P

    def test_strictly_increasing(self):
        """Larger exponents give larger results, even by one unit."""
        points = [0, 1, 2, 1_000, P // 2, P, 2 * P, 4 * P - 1, 4 * P]
        values = [exp_taylor(x, P) for x in points]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_deterministic(self):
        """Repeated evaluation gives bit-identical output."""
        assert exp_taylor(1_234_567_890_123, P) == exp_taylor(1_234_567_890_123, P)

    def test_exponent_out_of_range(self):
        """Exponents above 4.0 are rejected."""
        with pytest.raises(ExponentOutOfRange):
            exp_taylor(4 * P + 1, P)

    def test_out_of_range_is_math_overflow(self):
        assert issubclass(ExponentOutOfRange, MathOverflow)

    def test_intermediate_overflow(self):
        """Huge scales overflow u128 inside the series and raise."""
        scale = 10**30
        with pytest.raises(MathOverflow):
            exp_taylor(4 * scale, scale)


class TestLnFixed:
    """Tests for the fixed-point natural logarithm."""

    def test_ln_one_is_zero(self):
        assert ln_fixed(P, P) == 0

    def test_ln_two(self):
        """ln(2) is exact up to rescaling truncation."""
        assert ln_fixed(2 * P, P) == LN2_18 * P // 10**18

    @pytest.mark.parametrize("x", [1.000001, 1.5, math.e, 10.0, 16.428571, 54.5])
    def test_matches_float_reference(self, x):
        """Results agree with math.log within a couple of units."""
        scaled = int(x * P)
        expected = math.log(scaled / P) * P
        assert abs(ln_fixed(scaled, P) - expected) <= 2

    def test_monotone(self):
        points = [P, P + 1, 3 * P // 2, 2 * P, 7 * P, 50 * P]
        values = [ln_fixed(x, P) for x in points]
        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_below_one_raises(self):
        """Arguments below 1.0 are outside the curve's domain."""
        with pytest.raises(InvalidRange):
            ln_fixed(P - 1, P)

    def test_exp_of_ln_round_trips(self):
        """exp(ln(x)) recovers x to within a few parts per billion."""
        x = 16_428_571_428_571  # 690 / 42
        assert abs(exp_taylor(ln_fixed(x, P), P) - x) <= x * 1e-9
