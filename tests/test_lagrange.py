import logging
import random

import pytest

from sympy import isprime, primerange

from ringint.lagrange import RANDOMIZED_MIN_BITS, four_squares, prime_quaternion, two_squares


def assert_four_squares(n: int, parts: tuple):
    """Validate a four-square decomposition of n"""
    assert len(parts) == 4
    assert all(isinstance(x, int) for x in parts)
    assert all(x >= 0 for x in parts)
    assert list(parts) == sorted(parts, reverse=True)
    assert sum(x * x for x in parts) == n


class TestTwoSquares:
    """Tests for two_squares"""

    @pytest.mark.parametrize("p, expected", [
        (2, (1, 1)),
        (5, (2, 1)),
        (13, (3, 2)),
        (17, (4, 1)),
        (29, (5, 2)),
        (97, (9, 4)),
    ])
    def test_known(self, p, expected):
        """Small primes have a unique decomposition"""
        assert two_squares(p) == expected

    def test_range(self):
        """Every prime 1 mod 4 below 5000"""
        for p in primerange(3, 5000):
            if p % 4 != 1:
                continue

            a, b = two_squares(p)
            assert a >= b > 0
            assert a * a + b * b == p

    def test_large(self):
        """A Mersenne prime is 3 mod 4, so use the next 1 mod 4 prime above 2^127"""
        p = 2 ** 127 + 1
        while p % 4 != 1 or not isprime(p):
            p += 2

        a, b = two_squares(p)
        assert a * a + b * b == p

    @pytest.mark.parametrize("p", [3, 7, 9, 21, 25, 1, 0, -5])
    def test_invalid(self, p):
        """Anything other than 2 or a prime 1 mod 4 is rejected"""
        with pytest.raises(ValueError):
            two_squares(p)


class TestPrimeQuaternion:
    """Tests for prime_quaternion"""

    def test_norm(self):
        """The result has norm p"""
        for p in primerange(2, 500):
            assert prime_quaternion(p).norm() == p

    def test_independent(self):
        """Callers get their own value back, never the cached one"""
        a = prime_quaternion(13)
        a.update(0, 0, 0, 0)

        b = prime_quaternion(13)
        assert b.norm() == 13
        assert a is not b

    @pytest.mark.parametrize("p", [0, 1, 4, 15, -3])
    def test_invalid(self, p):
        """Only primes have a quaternion of norm p here"""
        with pytest.raises(ValueError):
            prime_quaternion(p)


class TestFourSquares:
    """Tests for four_squares"""

    def test_small(self):
        """Every n below 1000"""
        for n in range(1000):
            assert_four_squares(n, four_squares(n))

    @pytest.mark.parametrize("n, expected", [
        (0, (0, 0, 0, 0)),
        (1, (1, 0, 0, 0)),
        (4, (2, 0, 0, 0)),
        (7, (2, 1, 1, 1)),
    ])
    def test_known(self, n, expected):
        """Forced decompositions"""
        assert four_squares(n) == expected

    def test_powers_of_four(self):
        """4^s * m scales the decomposition of m by 2^s"""
        n = 4 ** 40 * 7
        parts = four_squares(n)
        assert_four_squares(n, parts)
        assert parts == (2 ** 41, 2 ** 40, 2 ** 40, 2 ** 40)

    def test_factored_composite(self):
        """Composite values below the randomized threshold, with repeated factors"""
        for n in (3 ** 7 * 5 ** 3 * 11, 2 * 3 * 5 * 7 * 11 * 13 * 17 * 19 * 23, 999_999_937, 2 ** 61 - 1):
            assert_four_squares(n, four_squares(n))

    def test_randomized(self):
        """Large inputs go through the randomized search"""
        rng = random.Random(1)
        for n in (2 ** 521 - 1, 3 ** 200, 2 ** RANDOMIZED_MIN_BITS + 3, 10 ** 40 + 2):
            assert_four_squares(n, four_squares(n, rng))

    def test_deterministic_rng(self):
        """The same seed gives the same decomposition"""
        n = 3 ** 150 + 2
        assert four_squares(n, random.Random(7)) == four_squares(n, random.Random(7))

    def test_default_rng(self):
        """Without an rng the system source is used"""
        n = 10 ** 30 + 1
        assert_four_squares(n, four_squares(n))

    def test_negative(self):
        """Negative values have no decomposition"""
        with pytest.raises(ValueError):
            four_squares(-1)

    def test_logging(self, caplog):
        """The chosen strategy is logged at debug level"""
        caplog.set_level(logging.DEBUG, logger="ringint.lagrange")

        four_squares(4 ** 3 * 15)
        assert "factoring 4-bit reduced part" in caplog.text

        caplog.clear()
        four_squares(2 ** 521 - 1, random.Random(3))
        assert "randomized search on 521-bit reduced part" in caplog.text
        assert "found prime remainder" in caplog.text
