"""
Sums of two and four squares, built on the Gaussian gcd and the Hurwitz gcrd.

    two_squares(p)   p = a^2 + b^2     for p = 2 or a prime p = 1 (mod 4)
    four_squares(n)  n = a^2 + b^2 + c^2 + d^2   for any n >= 0
"""
import logging
import random

from functools import cache
from math import isqrt
from typing import Optional

from sympy import factorint, isprime
from sympy.ntheory import sqrt_mod

from ringint.gaussian import gaussianint
from ringint.quat import hurwitzint

logger = logging.getLogger(__name__)

# Numbers with fewer bits (after removing powers of 4) are factored; larger ones use the randomized search.
RANDOMIZED_MIN_BITS = 64


def two_squares(p: int) -> tuple[int, int]:
    """
    Write a prime p = 2 or p = 1 (mod 4) as a^2 + b^2 with a >= b >= 0.

    With t^2 = -1 (mod p), p divides (t+i)(t-i) but neither factor, so gcd(p, t+i) has norm p.

    Raises:
        ValueError: If p is not such a prime.
    """
    p = int(p)
    if p == 2:
        return 1, 1

    if p % 4 != 1 or not isprime(p):
        raise ValueError(f"{p} is not a prime congruent to 1 mod 4")

    t = sqrt_mod(p - 1, p)
    if t is None:
        # Euler's criterion says -1 is a residue for every p = 1 (mod 4)
        raise ArithmeticError(f"No square root of -1 mod {p}")

    g = gaussianint(p).gcd(gaussianint(int(t), 1))
    if g.norm() != p:
        raise ArithmeticError(f"two-squares construction failed for {p=}: gcd has norm {g.norm()}")

    a, b = abs(g.real), abs(g.imag)
    return (a, b) if a >= b else (b, a)


@cache
def _find_uv_for_prime(p: int) -> tuple[int, int]:
    """
    Find u,v with 1 + u^2 + v^2 = 0 (mod p), for an odd prime p.
        Deterministic search over u, solving for v with a modular square root.

    Raises:
        ArithmeticError: If we fail to find a good u,v pair.
    """
    for u in range(p):
        v = sqrt_mod((-1 - u * u) % p, p)
        if v is not None:
            return u, int(v)

    raise ArithmeticError("Failed to find u,v (unexpected for prime p)")


@cache
def _prime_over_rational(p: int) -> hurwitzint:
    if p == 2:
        return hurwitzint(1, 1, 0, 0)

    u, v = _find_uv_for_prime(p)
    base = hurwitzint(p).gcrd(hurwitzint(1, u, v, 0))

    if base.norm() != p:
        raise ArithmeticError(f"prime construction failed for {p=}: gcrd did not have norm p")

    return base


def prime_quaternion(p: int) -> hurwitzint:
    """
    A Hurwitz integer of norm p, for a rational prime p.
        Found as gcrd(p, 1+ui+vj), the standard construction in the proof of the four-square theorem.

    Returns:
        hurwitzint: A fresh value; the cached one is never handed out since hurwitzint is mutable.

    Raises:
        ValueError: If p is not a prime.
        ArithmeticError: If the gcrd does not have norm p.
    """
    p = int(p)
    if not isprime(p):
        raise ValueError(f"{p} is not a prime")

    return _prime_over_rational(p).copy()


def _four_squares_factored(m: int) -> tuple[int, int, int, int]:
    """Multiply together a norm-p quaternion per prime factor, then read the squares off a Lipschitz associate."""
    q = hurwitzint(1)
    for p, e in sorted((int(f), int(x)) for f, x in factorint(m).items()):
        if e & 1:
            q = q * _prime_over_rational(p)

        # p^2 is the norm of the scalar p
        if e >> 1:
            q = q * (p ** (e >> 1))

    r, i, j, k = q.lipschitz_associate().val_int()
    return r, i, j, k


def _four_squares_randomized(m: int, rng: random.Random) -> tuple[int, int, int, int]:
    """
    Rabin-Shallit: draw x, y until m - x^2 - y^2 is a prime p = 1 (mod 4), then split p with two_squares.

    m must be odd or 2 (mod 4). The parities of x and y are fixed so that p = 1 (mod 4):
        m = 1 (mod 4): x, y both even
        m = 2 (mod 4): x odd, y even
        m = 3 (mod 4): x, y both odd
    """
    px, py = {1: (0, 0), 2: (1, 0), 3: (1, 1)}[m % 4]

    attempts = 0
    while True:
        attempts += 1

        x = rng.randint(0, isqrt(m))
        if (x & 1) != px:
            x ^= 1
        rest = m - x * x
        if rest < 0:
            continue

        y = rng.randint(0, isqrt(rest))
        if (y & 1) != py:
            y ^= 1
        p = rest - y * y
        if p < 0:
            continue

        if p == 1:
            a, b = 1, 0
        elif isprime(p):
            a, b = two_squares(p)
        else:
            continue

        logger.debug("four_squares: found prime remainder after %d attempts", attempts)
        return x, y, a, b


def four_squares(n: int, rng: Optional[random.Random] = None) -> tuple[int, int, int, int]:
    """
    Lagrange's four-square decomposition.

    Args:
        n: A non-negative integer.
        rng: Randomness for the large-n search. Defaults to random.SystemRandom().

    Returns:
        tuple: Four non-negative integers (a, b, c, d), a >= b >= c >= d, with a^2 + b^2 + c^2 + d^2 == n.

    Raises:
        ValueError: If n is negative.
    """
    n = int(n)
    if n < 0:
        raise ValueError("Only non-negative integers are sums of four squares")

    if n == 0:
        return 0, 0, 0, 0

    # n = 4^s * m with m not divisible by 4; squares of the m solution scale by 2^s
    s = 0
    m = n
    while m % 4 == 0:
        m >>= 2
        s += 1

    if m.bit_length() < RANDOMIZED_MIN_BITS:
        logger.debug("four_squares: factoring %d-bit reduced part", m.bit_length())
        parts = _four_squares_factored(m)
    else:
        logger.debug("four_squares: randomized search on %d-bit reduced part", m.bit_length())
        parts = _four_squares_randomized(m, rng if rng is not None else random.SystemRandom())

    a, b, c, d = sorted((abs(x) << s for x in parts), reverse=True)
    return a, b, c, d
