from fractions import Fraction

import pytest

from ringint.euclid import euclid
from ringint.rounding import ROUNDING_DELTA, as_int, round_div, round_fraction


class TestRoundFraction:
    """Tests for round_fraction"""

    def test_delta(self):
        """The bias is 0.49, not 0.5"""
        assert ROUNDING_DELTA == Fraction(49, 100)

    @pytest.mark.parametrize("num, den, expected", [
        (0, 1, 0),
        (49, 100, 0),
        (1, 2, 0),
        (99, 200, 0),
        (51, 100, 1),
        (13, 5, 3),
        (11, 5, 2),
        (7, 1, 7),
        (-1, 2, 0),
        (-51, 100, -1),
        (-17, 10, -2),
        (-4, 5, -1),
        (-7, 1, -7),
    ])
    def test_values(self, num, den, expected):
        """Values within 0.49 of an integer go to it; x.5 goes toward zero"""
        assert round_fraction(Fraction(num, den)) == expected

    def test_int_input(self):
        """Plain ints pass through"""
        assert round_fraction(12) == 12
        assert round_fraction(-12) == -12

    def test_returns_int(self):
        """Result is a real int, not a Fraction"""
        assert type(round_fraction(Fraction(5, 2))) is int

    def test_huge(self):
        """No float conversion happens anywhere, so huge values stay exact"""
        big = 3 ** 2000
        assert round_fraction(Fraction(2 * big + 1, 2)) == big
        assert round_fraction(Fraction(100 * big + 51, 100)) == big + 1
        assert round_fraction(Fraction(-(100 * big + 51), 100)) == -(big + 1)

    def test_input_untouched(self):
        """The argument is not consumed"""
        f = Fraction(7, 3)
        round_fraction(f)
        assert f == Fraction(7, 3)


class TestRoundDiv:
    """Tests for round_div"""

    def test_main(self):
        """Same as round_fraction(Fraction(a, b))"""
        for a in range(-50, 51):
            for b in range(1, 12):
                assert round_div(a, b) == round_fraction(Fraction(a, b))

    @pytest.mark.parametrize("b", [0, -1, -5])
    def test_bad_denominator(self, b):
        """b must be positive"""
        with pytest.raises(ValueError):
            round_div(1, b)


class TestAsInt:
    """Tests for as_int"""

    def test_main(self):
        """ints and integral floats convert"""
        assert as_int(3) == 3
        assert as_int(-3.0) == -3
        assert type(as_int(4.0)) is int

    def test_fractional(self):
        """Fractional floats are rejected rather than truncated"""
        with pytest.raises(ValueError):
            as_int(2.5)


class TestEuclid:
    """Tests for the shared Euclidean loop, driven with plain ints"""

    def test_int_gcd(self):
        """Ordinary integer gcd, in either argument order"""
        assert euclid(12, 18, divmod, abs) == 6
        assert euclid(18, 12, divmod, abs) == 6
        assert euclid(17, 5, divmod, abs) == 1

    def test_zero(self):
        """gcd(a, 0) == a and gcd(0, 0) == 0"""
        assert euclid(7, 0, divmod, abs) == 7
        assert euclid(0, 7, divmod, abs) == 7
        assert euclid(0, 0, divmod, abs) == 0

    def test_descent_failure(self):
        """A division that never shrinks the remainder is reported instead of looping forever"""
        with pytest.raises(ArithmeticError):
            euclid(10, 3, lambda a, b: (0, a), abs)
