from fractions import Fraction
from typing import ClassVar, Iterator, Union

from .euclid import euclid
from .rounding import as_int, round_div, round_fraction

OTHER_OP_TYPES = Union[int, float]
_OTHER_OP_TYPES = (int, float)  # mypyc-friendly for isinstance
OP_TYPES = Union["hurwitzint", OTHER_OP_TYPES]


def _to_doubled(r: OTHER_OP_TYPES,
                i: OTHER_OP_TYPES,
                j: OTHER_OP_TYPES,
                k: OTHER_OP_TYPES,
                doubled: bool) -> tuple[int, int, int, int]:
    """Convert raw components to the stored doubled form, enforcing the Hurwitz parity constraint."""
    r0, i0, j0, k0 = as_int(r), as_int(i), as_int(j), as_int(k)

    if not doubled:
        r0 <<= 1
        i0 <<= 1
        j0 <<= 1
        k0 <<= 1

    # All four must have the same parity.
    if ((r0 ^ i0) & 1) or ((r0 ^ j0) & 1) or ((r0 ^ k0) & 1):
        raise ValueError("For Hurwitz integers, the doubled components must all have the same parity")

    return r0, i0, j0, k0


def _fmt_doubled(mag: int) -> str:
    """Render a non-negative doubled value as its true decimal: 1 -> 0.5, 4 -> 2, 7 -> 3.5"""
    whole = str(mag >> 1)
    return whole + ".5" if mag & 1 else whole


def format_doubled(R: int, I: int, J: int, K: int) -> str:  # noqa: E741
    """
    Decimal form of (R + I*i + J*j + K*k) / 2 with half-integers written out:
        1+i+j+k, -0.5i-0.5j+0.5k, 1.5+2k, 0

    Works on raw doubled components and does not check the Hurwitz parity constraint.
    """
    out = ""
    for dbl, sym in ((R, ""), (I, "i"), (J, "j"), (K, "k")):
        if dbl == 0:
            continue

        sign = "-" if dbl < 0 else ("+" if out else "")
        mag = -dbl if dbl < 0 else dbl
        # 1i -> i, but the real part keeps its 1
        out += sign + (sym if mag == 2 and sym else _fmt_doubled(mag) + sym)

    return out or "0"


class hurwitzint:
    """
    Hurwitz quaternion integer.

    Internally stored doubled, as (R, I, J, K) representing:
        (R + I*i + J*j + K*k) / 2

    Integrality constraint (Hurwitz order):
        R, I, J, K must all have the same parity
        (all even = Lipschitz, all odd = true Hurwitz half-integer element).

    Notes:
      - Multiplication is non-commutative. Division is on the right:
            divmod(a, b) == (q, r) with a == q*b + r
      - The reduced norm is always an integer for valid Hurwitz elements:
            N(q) = (R^2 + I^2 + J^2 + K^2) / 4
      - Arithmetic returns new values; only set() and update() write into an existing one.
    """

    __slots__ = ("dbl_r", "dbl_i", "dbl_j", "dbl_k")

    dbl_r: int
    dbl_i: int
    dbl_j: int
    dbl_k: int

    UNITS: ClassVar[list["hurwitzint"]] = []

    def __init__(
        self,
        r: OTHER_OP_TYPES = 0,
        i: OTHER_OP_TYPES = 0,
        j: OTHER_OP_TYPES = 0,
        k: OTHER_OP_TYPES = 0,
        *,
        doubled: bool = False,
    ) -> None:
        """
        Initialize a hurwitzint.

        Args:
            r:
                If doubled=False (default): interpreted as integer components (Lipschitz):
                    q = r + i*i + j*j + k*k
                If doubled=True: interpreted as twice the true components:
                    q = (r + i*i + j*j + k*k) / 2
                (So (1+i+j+k)/2 is hurwitzint(1, 1, 1, 1, doubled=True).)
            i: See r.
            j: See r.
            k: See r.
            doubled:
                Whether inputs are already in the doubled representation.

        Raises:
            ValueError: If parity is incorrect, or a float component is not integral.
        """
        self.dbl_r, self.dbl_i, self.dbl_j, self.dbl_k = _to_doubled(r, i, j, k, doubled)

    # region constructors / conversions
    @classmethod
    def _make(cls, R: int, I: int, J: int, K: int) -> "hurwitzint":  # noqa: E741
        """Construct a new value from doubled components R,I,J,K."""
        return cls(R, I, J, K, doubled=True)

    @classmethod
    def _from_obj(cls, n: OP_TYPES) -> "hurwitzint":
        """Convert a scalar to a purely real hurwitzint"""
        if isinstance(n, hurwitzint):
            return n

        if isinstance(n, _OTHER_OP_TYPES):
            return cls._make(2 * as_int(n), 0, 0, 0)

        raise TypeError(f"Unable to convert type {type(n)} to hurwitzint")

    def set(self, other: "hurwitzint") -> "hurwitzint":
        """Overwrite this value with other. Returns self."""
        self.dbl_r, self.dbl_i, self.dbl_j, self.dbl_k = other.dbl_r, other.dbl_i, other.dbl_j, other.dbl_k
        return self

    def update(self,
               r: OTHER_OP_TYPES,
               i: OTHER_OP_TYPES,
               j: OTHER_OP_TYPES,
               k: OTHER_OP_TYPES,
               *,
               doubled: bool = False) -> "hurwitzint":
        """
        Overwrite this value from raw components, interpreted as in __init__.

        The value is left untouched when the parity check fails.

        Returns:
            hurwitzint: self
        """
        self.dbl_r, self.dbl_i, self.dbl_j, self.dbl_k = _to_doubled(r, i, j, k, doubled)
        return self

    def copy(self) -> "hurwitzint":
        return self._make(self.dbl_r, self.dbl_i, self.dbl_j, self.dbl_k)

    def val(self) -> tuple[Fraction, Fraction, Fraction, Fraction]:
        """The true scalar components, exactly."""
        return (Fraction(self.dbl_r, 2), Fraction(self.dbl_i, 2), Fraction(self.dbl_j, 2), Fraction(self.dbl_k, 2))

    def val_int(self) -> tuple[int, int, int, int]:
        """
        The true scalar components, each rounded with round_fraction.

        Exact for Lipschitz values. A half-integer component x.5 rounds toward zero.
        """
        r, i, j, k = self.val()
        return round_fraction(r), round_fraction(i), round_fraction(j), round_fraction(k)
    # endregion

    @property
    def is_lipschitz(self) -> bool:
        """True iff all components are integers (i.e., all doubled components even)."""
        return ((self.dbl_r | self.dbl_i | self.dbl_j | self.dbl_k) & 1) == 0

    def doubled_components(self) -> tuple[int, int, int, int]:
        """Return the stored doubled components (R,I,J,K) for (...)/2."""
        return self.dbl_r, self.dbl_i, self.dbl_j, self.dbl_k

    def conjugate(self) -> "hurwitzint":
        """Quaternion conjugation: a+bi+cj+dk -> a-bi-cj-dk."""
        return self._make(self.dbl_r, -self.dbl_i, -self.dbl_j, -self.dbl_k)

    def norm(self) -> int:
        """
        Reduced norm:
            N((R+Ii+Jj+Kk)/2) = (R^2+I^2+J^2+K^2)/4

        Always an integer for valid Hurwitz integers.

        Raises:
            ArithmeticError: If there is a non-integral norm due to parity violation.

        Returns:
            int: The norm.
        """
        num = self.dbl_r * self.dbl_r + self.dbl_i * self.dbl_i + self.dbl_j * self.dbl_j + self.dbl_k * self.dbl_k
        if num & 3:
            raise ArithmeticError("Non-integral norm; parity constraint violated")

        return num >> 2

    def __abs__(self) -> int:
        return self.norm()

    def cmp_norm(self, other: "hurwitzint") -> int:
        """-1, 0 or 1 as the norm of self is smaller, equal or larger than the norm of other."""
        a, b = self.norm(), other.norm()
        return (a > b) - (a < b)

    def is_zero(self) -> bool:
        return (self.dbl_r | self.dbl_i | self.dbl_j | self.dbl_k) == 0

    def __add__(self, other: OP_TYPES) -> "hurwitzint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if isinstance(other, hurwitzint):
            return self._make(self.dbl_r + other.dbl_r,
                              self.dbl_i + other.dbl_i,
                              self.dbl_j + other.dbl_j,
                              self.dbl_k + other.dbl_k)

        return NotImplemented

    def __radd__(self, other: OTHER_OP_TYPES) -> "hurwitzint":
        return self.__add__(other)

    def __sub__(self, other: OP_TYPES) -> "hurwitzint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if isinstance(other, hurwitzint):
            return self._make(self.dbl_r - other.dbl_r,
                              self.dbl_i - other.dbl_i,
                              self.dbl_j - other.dbl_j,
                              self.dbl_k - other.dbl_k)

        return NotImplemented

    def __rsub__(self, other: OTHER_OP_TYPES) -> "hurwitzint":
        return self.__neg__().__add__(other)

    def __neg__(self) -> "hurwitzint":
        return self._make(-self.dbl_r, -self.dbl_i, -self.dbl_j, -self.dbl_k)

    def __pos__(self) -> "hurwitzint":
        return self.copy()

    def __mul__(self, other: OP_TYPES) -> "hurwitzint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, hurwitzint):
            return NotImplemented

        # Hamilton product on doubled components.
        # (2x)(2y) = 4xy but we store 2xy, so every component is halved afterwards.
        r1, i1, j1, k1 = self.dbl_r, self.dbl_i, self.dbl_j, self.dbl_k
        r2, i2, j2, k2 = other.dbl_r, other.dbl_i, other.dbl_j, other.dbl_k

        # i^2=j^2=k^2=ijk=-1, so ij=k, jk=i, ki=j
        R = r1 * r2 - i1 * i2 - j1 * j2 - k1 * k2
        I = r1 * i2 + i1 * r2 + j1 * k2 - k1 * j2  # noqa: E741
        J = r1 * j2 - i1 * k2 + j1 * r2 + k1 * i2
        K = r1 * k2 + i1 * j2 - j1 * i2 + k1 * r2

        # Must be even to land back in the Hurwitz order.
        if (R | I | J | K) & 1:
            raise ArithmeticError("Non-integral product; parity constraint violated")

        return self._make(R >> 1, I >> 1, J >> 1, K >> 1)

    def __rmul__(self, other: OTHER_OP_TYPES) -> "hurwitzint":
        # Real scalars are central, so the side doesn't matter
        return self.__mul__(other)

    def __pow__(self, exp: int) -> "hurwitzint":
        e = int(exp)
        if e < 0:
            raise ValueError("Negative powers not supported")

        result = hurwitzint(1, 0, 0, 0)  # multiplicative identity
        base: hurwitzint = self
        while e:
            if e & 1:
                result = result * base

            e >>= 1
            if e:
                base = base * base

        return result

    # region Euclidean division (Hurwitz order is norm-Euclidean)
    def __divmod__(self, other: OP_TYPES) -> tuple["hurwitzint", "hurwitzint"]:
        """
        Right-divisor Euclidean division in the Hurwitz quaternion order:
            self = q * other + r,   N(r) < N(other)

        q approximates self * conj(other) / N(other). Two lattice points are tried, the
        integer point and the half-integer point nearest that quotient (each component rounded
        with round_fraction), and whichever leaves the smaller remainder wins, the integer one on a tie.
        The half-integer point matters: with integer quotients alone, (1+i+j+k)/2 divided by 1
        would leave itself as the remainder.

        Returns:
            (q, r)

        Raises:
            ZeroDivisionError: if other == 0
            TypeError: if other is an unsupported type
        """
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, hurwitzint):
            raise TypeError(f"Unable to divide hurwitzint and type {type(other)}")

        n = other.norm()
        if n == 0:
            raise ZeroDivisionError("hurwitzint division by zero")

        # num is stored doubled, so each true quotient component is num_c / (2n)
        num = self * other.conjugate()
        den = 2 * n
        R, I, J, K = num.dbl_r, num.dbl_i, num.dbl_j, num.dbl_k  # noqa: E741

        q_whole = self._make(2 * round_div(R, den), 2 * round_div(I, den),
                             2 * round_div(J, den), 2 * round_div(K, den))
        r_whole = self - q_whole * other

        # x - 1/2 == (num_c - n) / (2n); round that and add the half back
        q_half = self._make(2 * round_div(R - n, den) + 1, 2 * round_div(I - n, den) + 1,
                            2 * round_div(J - n, den) + 1, 2 * round_div(K - n, den) + 1)
        r_half = self - q_half * other

        if r_half.norm() < r_whole.norm():
            return q_half, r_half

        return q_whole, r_whole

    def __floordiv__(self, other: OP_TYPES) -> "hurwitzint":
        q, _ = divmod(self, other)
        return q

    def __truediv__(self, other: OP_TYPES) -> "hurwitzint":
        # / is Euclidean division in this domain
        return self.__floordiv__(other)

    def __mod__(self, other: OP_TYPES) -> "hurwitzint":
        _, r = divmod(self, other)
        return r

    def __rfloordiv__(self, other: OTHER_OP_TYPES) -> "hurwitzint":
        if isinstance(other, _OTHER_OP_TYPES):
            return self._from_obj(other).__floordiv__(self)

        return NotImplemented

    def __rtruediv__(self, other: OTHER_OP_TYPES) -> "hurwitzint":
        return self.__rfloordiv__(other)
    # endregion

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __iter__(self) -> Iterator[int]:
        return iter((self.dbl_r, self.dbl_i, self.dbl_j, self.dbl_k))

    def __len__(self) -> int:
        return 4

    def __getitem__(self, idx: int) -> int:
        if idx == 0:
            return self.dbl_r
        if idx == 1:
            return self.dbl_i
        if idx == 2:
            return self.dbl_j
        if idx == 3:
            return self.dbl_k
        raise IndexError("hurwitzint index out of range (valid: 0..3)")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, hurwitzint):
            return False

        return self.doubled_components() == other.doubled_components()

    def __repr__(self) -> str:
        return format_doubled(self.dbl_r, self.dbl_i, self.dbl_j, self.dbl_k)

    # region GCRD
    def _normalize_unit(self) -> "hurwitzint":
        """
        Deterministic associate choice up to ±1.

        Full normalization up to the 24 Hurwitz units is possible, but this keeps things
        cheap and stable: multiply by -1 so the first nonzero doubled component is > 0.
        """
        for c in self:
            if c != 0:
                return -self if c < 0 else self

        return self

    def gcrd(self, other: OP_TYPES, *, normalize: bool = False) -> "hurwitzint":
        """
        Greatest common right-divisor via the right-divisor Euclidean algorithm.

        The result g satisfies:
            self = x * g and other = y * g
        and is unique only up to left multiplication by one of the 24 units.

        Returns:
            hurwitzint: A new value, independent of both operands.
        """
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, hurwitzint):
            raise TypeError(f"Unable to divide hurwitzint and type {type(other)}")

        g = euclid(self, other, _divmod, hurwitzint.norm).copy()
        return g._normalize_unit() if normalize else g
    # endregion

    def lipschitz_associate(self) -> "hurwitzint":
        """
        A right associate self*u (u a unit) whose components are all integers.

        Every Hurwitz integer has one; the norm is unchanged.

        Raises:
            ArithmeticError: If no unit works, which would mean UNITS is broken.
        """
        if self.is_lipschitz:
            return self.copy()

        for u in hurwitzint.UNITS:
            cand = self * u
            if cand.is_lipschitz:
                return cand

        raise ArithmeticError("No Lipschitz associate found")


if not hurwitzint.UNITS:
    def units() -> list["hurwitzint"]:
        """All 24 units of the Hurwitz order"""
        # ±1, ±i, ±j, ±k, and (±1±i±j±k)/2 (16 of them).
        out: list[hurwitzint] = []

        one = hurwitzint(1, 0, 0, 0)
        i = hurwitzint(0, 1, 0, 0)
        j = hurwitzint(0, 0, 1, 0)
        k = hurwitzint(0, 0, 0, 1)

        for s in (-1, 1):
            out.extend([s * one, s * i, s * j, s * k])

        out.extend([
            hurwitzint(a, b, c, d, doubled=True)
            for a in (-1, 1)
            for b in (-1, 1)
            for c in (-1, 1)
            for d in (-1, 1)
        ])

        out.sort(key=lambda u: u.doubled_components())
        return out

    hurwitzint.UNITS = units()


def _divmod(a: hurwitzint, b: hurwitzint) -> tuple[hurwitzint, hurwitzint]:
    return a.__divmod__(b)


def gcrd(a: hurwitzint, b: OP_TYPES, *, normalize: bool = False) -> hurwitzint:
    """Simply a helper method to match existing Python gcd syntax"""
    return a.gcrd(b, normalize=normalize)
