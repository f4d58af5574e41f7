from typing import Callable, TypeVar

T = TypeVar("T")


def euclid(a: T,
           b: T,
           divmod_method: Callable[[T, T], tuple[T, T]],
           norm: Callable[[T], int]) -> T:
    """
    Euclidean algorithm over any ring with a division-with-remainder and a norm whose minimum is zero.

    The larger-norm operand is divided first. Each step replaces (a, b) with (b, a mod b) until the
    remainder is zero; the last non-zero divisor is returned.

    Args:
        a: First operand.
        b: Second operand.
        divmod_method: Returns (quotient, remainder) for a divided by b.
        norm: The descent measure.

    Returns:
        The gcd. gcd(a, 0) is a, and gcd(0, 0) is 0.

    Raises:
        ArithmeticError: If a remainder fails to shrink the norm, which would mean the division is broken.
    """
    if norm(a) < norm(b):
        a, b = b, a

    last = norm(b)
    if last == 0:
        return a

    while True:
        _, r = divmod_method(a, b)
        nr = norm(r)
        if nr == 0:
            return b

        if nr >= last:
            raise ArithmeticError("Euclidean descent failed (non-decreasing remainder norm)")

        a, b, last = b, r, nr
