from typing import Iterator, Union

from .euclid import euclid
from .rounding import as_int, round_div

OTHER_OP_TYPES = Union[int, float]
_OTHER_OP_TYPES = (int, float)  # mypyc-friendly for isinstance
OP_TYPES = Union["gaussianint", OTHER_OP_TYPES]


class gaussianint:
    """
    Gaussian integer real + imag*i, with both parts unbounded Python ints.

    Arithmetic operators return new values and never touch their operands.
    Only set() and update() write into an existing value, which is also why
    gaussianint is not hashable.
    """

    __slots__ = ("real", "imag")

    real: int
    imag: int

    def __init__(self, real: OTHER_OP_TYPES = 0, imag: OTHER_OP_TYPES = 0) -> None:
        self.real = as_int(real)
        self.imag = as_int(imag)

    # region constructors / conversions
    @classmethod
    def _make(cls, real: int, imag: int) -> "gaussianint":
        return cls(real, imag)

    @classmethod
    def _from_obj(cls, n: OP_TYPES) -> "gaussianint":
        """Convert an int or integral float to a purely real gaussianint"""
        if isinstance(n, gaussianint):
            return n

        if isinstance(n, _OTHER_OP_TYPES):
            return cls._make(as_int(n), 0)

        raise TypeError(f"Unable to convert type {type(n)} to gaussianint")

    def set(self, other: "gaussianint") -> "gaussianint":
        """Overwrite this value with other. Returns self."""
        self.real, self.imag = other.real, other.imag
        return self

    def update(self, real: OTHER_OP_TYPES, imag: OTHER_OP_TYPES) -> "gaussianint":
        """Overwrite this value from raw components. Returns self."""
        self.real, self.imag = as_int(real), as_int(imag)
        return self

    def copy(self) -> "gaussianint":
        return self._make(self.real, self.imag)
    # endregion

    def conjugate(self) -> "gaussianint":
        """real + imag*i -> real - imag*i"""
        return self._make(self.real, -self.imag)

    def norm(self) -> int:
        """N(a + bi) = a^2 + b^2, multiplicative and never negative."""
        return self.real * self.real + self.imag * self.imag

    def __abs__(self) -> int:
        return self.norm()

    def cmp_norm(self, other: "gaussianint") -> int:
        """-1, 0 or 1 as the norm of self is smaller, equal or larger than the norm of other."""
        a, b = self.norm(), other.norm()
        return (a > b) - (a < b)

    def is_zero(self) -> bool:
        return self.real == 0 and self.imag == 0

    def is_one(self) -> bool:
        """
        True for a positive purely real value.

        Note this is looser than == 1: any real > 0 with imag == 0 passes.
        """
        return self.real > 0 and self.imag == 0

    def __add__(self, other: OP_TYPES) -> "gaussianint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if isinstance(other, gaussianint):
            return self._make(self.real + other.real, self.imag + other.imag)

        return NotImplemented

    def __radd__(self, other: OTHER_OP_TYPES) -> "gaussianint":
        return self.__add__(other)

    def __sub__(self, other: OP_TYPES) -> "gaussianint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if isinstance(other, gaussianint):
            return self._make(self.real - other.real, self.imag - other.imag)

        return NotImplemented

    def __rsub__(self, other: OTHER_OP_TYPES) -> "gaussianint":
        return self.__neg__().__add__(other)

    def __neg__(self) -> "gaussianint":
        return self._make(-self.real, -self.imag)

    def __pos__(self) -> "gaussianint":
        return self.copy()

    def __mul__(self, other: OP_TYPES) -> "gaussianint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, gaussianint):
            return NotImplemented

        a, b = self.real, self.imag
        c, d = other.real, other.imag
        return self._make(a * c - b * d, a * d + b * c)

    def __rmul__(self, other: OTHER_OP_TYPES) -> "gaussianint":
        return self.__mul__(other)

    def __pow__(self, exp: int) -> "gaussianint":
        e = int(exp)
        if e < 0:
            raise ValueError("Negative powers not supported")

        result = gaussianint(1, 0)
        base: gaussianint = self
        while e:
            if e & 1:
                result = result * base

            e >>= 1
            if e:
                base = base * base

        return result

    # region Euclidean division
    def __divmod__(self, other: OP_TYPES) -> tuple["gaussianint", "gaussianint"]:
        """
        Euclidean division: self = q * other + r with N(r) < N(other).

        q is self * conj(other) / N(other) with each part rounded by round_fraction.

        Raises:
            ZeroDivisionError: if other == 0
            TypeError: if other is an unsupported type
        """
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, gaussianint):
            raise TypeError(f"Unable to divide gaussianint and type {type(other)}")

        n = other.norm()
        if n == 0:
            raise ZeroDivisionError("gaussianint division by zero")

        num = self * other.conjugate()
        q = self._make(round_div(num.real, n), round_div(num.imag, n))
        return q, self - q * other

    def __floordiv__(self, other: OP_TYPES) -> "gaussianint":
        q, _ = divmod(self, other)
        return q

    def __truediv__(self, other: OP_TYPES) -> "gaussianint":
        # / is Euclidean division in this domain
        return self.__floordiv__(other)

    def __mod__(self, other: OP_TYPES) -> "gaussianint":
        _, r = divmod(self, other)
        return r

    def __rfloordiv__(self, other: OTHER_OP_TYPES) -> "gaussianint":
        if isinstance(other, _OTHER_OP_TYPES):
            return self._from_obj(other).__floordiv__(self)

        return NotImplemented

    def __rtruediv__(self, other: OTHER_OP_TYPES) -> "gaussianint":
        return self.__rfloordiv__(other)
    # endregion

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __iter__(self) -> Iterator[int]:
        return iter((self.real, self.imag))

    def __len__(self) -> int:
        return 2

    def __getitem__(self, idx: int) -> int:
        if idx == 0:
            return self.real
        if idx == 1:
            return self.imag
        raise IndexError("gaussianint index out of range (valid: 0..1)")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, gaussianint):
            return False

        return self.real == other.real and self.imag == other.imag

    def __repr__(self) -> str:
        if not self:
            return "0"

        out = str(self.real) if self.real else ""
        if self.imag:
            sign = "-" if self.imag < 0 else ("+" if out else "")
            mag = -self.imag if self.imag < 0 else self.imag
            out += f"{sign}{'' if mag == 1 else mag}i"

        return out

    # region GCD
    def _normalize_unit(self) -> "gaussianint":
        """Associate with real > 0 and imag >= 0, found by rotating through the units 1, i, -1, -i."""
        g = self
        for _ in range(4):
            if g.real > 0 and g.imag >= 0:
                return g
            g = g._make(-g.imag, g.real)  # g * i

        return g  # only zero gets here

    def gcd(self, other: OP_TYPES, *, normalize: bool = False) -> "gaussianint":
        """
        Greatest common divisor by the Euclidean algorithm.

        Unique only up to the units 1, i, -1, -i. The associate is whatever the
        algorithm lands on unless normalize=True.

        Returns:
            gaussianint: A new value, independent of both operands.
        """
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, gaussianint):
            raise TypeError(f"Unable to divide gaussianint and type {type(other)}")

        g = euclid(self, other, _divmod, gaussianint.norm).copy()
        return g._normalize_unit() if normalize else g
    # endregion


def _divmod(a: gaussianint, b: gaussianint) -> tuple[gaussianint, gaussianint]:
    return a.__divmod__(b)


def gcd(a: gaussianint, b: OP_TYPES, *, normalize: bool = False) -> gaussianint:
    """Simply a helper method to match existing Python gcd syntax"""
    return a.gcd(b, normalize=normalize)
