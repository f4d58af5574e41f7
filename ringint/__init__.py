from ringint.gaussian import gaussianint, gcd
from ringint.lagrange import four_squares, prime_quaternion, two_squares
from ringint.quat import format_doubled, gcrd, hurwitzint
from ringint.rounding import ROUNDING_DELTA, round_div, round_fraction

__all__ = [
    "ROUNDING_DELTA",
    "format_doubled",
    "four_squares",
    "gaussianint",
    "gcd",
    "gcrd",
    "hurwitzint",
    "prime_quaternion",
    "round_div",
    "round_fraction",
    "two_squares",
]
