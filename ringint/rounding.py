from fractions import Fraction
from math import trunc
from typing import Union

# Bias added (or subtracted) before truncating toward zero. Deliberately not 1/2:
#   x.5 rounds toward zero, anything from x.51 up rounds away from it.
ROUNDING_DELTA = Fraction(49, 100)


def round_fraction(f: Union[Fraction, int]) -> int:
    """
    Round an exact rational to a nearby integer using the fixed ROUNDING_DELTA bias.

        f >= 0:  trunc(f + 0.49)
        f < 0:   trunc(f - 0.49)

    Examples:
        0.5 -> 0, 0.51 -> 1, 2.6 -> 3, -0.5 -> 0, -1.7 -> -2

    Returns:
        int: The rounded value.
    """
    if f < 0:
        return trunc(f - ROUNDING_DELTA)
    return trunc(f + ROUNDING_DELTA)


def round_div(a: int, b: int) -> int:
    """Round a/b with round_fraction. b must be > 0."""
    if b <= 0:
        raise ValueError("b must be > 0")

    return round_fraction(Fraction(a, b))


def as_int(n: Union[int, float]) -> int:
    """Convert an int, or a float with no fractional part, to int."""
    if isinstance(n, float) and not n.is_integer():
        raise ValueError(f"Expected an integral value, got {n!r}")

    return int(n)
