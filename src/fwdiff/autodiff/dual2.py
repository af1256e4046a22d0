from collections.abc import Sequence
from typing import Self

import numpy as np
import numpy.typing as npt

from fwdiff.autodiff.dual import DualNumber
from fwdiff.error import DIV_BY_ZERO, nan_like, report_error
from fwdiff.typing import Real


class Dual2[T: Real](DualNumber[T]):
    r"""Second-order dual number :math:`a+b\varepsilon_1+c\varepsilon_2`, where
    :math:`\varepsilon_1^3=0` and :math:`\varepsilon_1\varepsilon_2=0`.

    Parameters
    ----------
    a : T, default=0.0
    b : T, default=0.0
    c : T, default=0.0

    Attributes
    ----------
    a : T
        Real part, the value of a quantity.
    b : T
        First-order dual part, the first derivative of the quantity.
    c : T
        Second-order dual part, the second derivative of the quantity.

    Notes
    -----
    `c` holds the second derivative itself rather than the second Taylor
    coefficient, so multiplication follows the Leibniz rule
    :math:`(uv)''=u''v+2u'v'+uv''`.

    Examples
    --------
    >>> x = Dual2.variable(2.0)
    >>> x * x * x
    Dual2(a=8.0, b=12.0, c=12.0)
    """

    __slots__ = ("a", "b", "c")
    a: T
    b: T
    c: T

    def __init__(self, a: T | int = 0.0, b: T | int = 0.0, c: T | int = 0.0):
        if not (self._is_real(a) and self._is_real(b) and self._is_real(c)):
            raise TypeError("coefficients of Dual2 must be real")

        self.a = a  # type: ignore
        self.b = b  # type: ignore
        self.c = c  # type: ignore

    @classmethod
    def variable(cls, x: T) -> Self:
        """Return `x` seeded as the independent variable (``b = 1``, ``c = 0``)."""
        ZERO = x * 0
        return cls(x, ZERO + 1, ZERO)

    @classmethod
    def from_vec(cls, v: Sequence[T] | npt.NDArray) -> Self:
        """Construct a dual number from its vector form ``[a, b, c]``."""
        a, b, c = v
        return cls(a, b, c)

    def to_vec(self) -> npt.NDArray:
        """Return the vector form ``[a, b, c]``."""
        return np.array([self.a, self.b, self.c])

    def conjugate(self) -> Self:
        return self.__class__(self.a, -self.b, -self.c)

    def inverse(self) -> Self:
        """Return the multiplicative inverse.

        The second-order part is :math:`2b^2/a^3-c/a^2`. If the real part is zero,
        :data:`~fwdiff.error.ErrorKind.DIV_BY_ZERO` is reported and NaN is returned.
        """
        if self.a == 0:
            report_error("Dual2.inverse", self.a, DIV_BY_ZERO)
            return self._nan()

        r = 1 / self.a
        r2 = r * r
        return self.__class__(r, -self.b * r2, 2 * self.b * self.b * r2 * r - self.c * r2)

    def to_string(self, epsilon1: str = "e1", epsilon2: str = "e2") -> str:
        sign1 = " + " if self.b >= 0 else " - "
        sign2 = " + " if self.c >= 0 else " - "
        return f"{self.a}{sign1}{abs(self.b)}{epsilon1}{sign2}{abs(self.c)}{epsilon2}"

    def _nan(self) -> Self:
        nan = nan_like(self.a)
        return self.__class__(nan, nan, nan)

    def _chain(self, f: T, df: T, d2f: T) -> Self:
        # (f o u)'' = f''(u) u'^2 + f'(u) u''
        return self.__class__(f, df * self.b, d2f * self.b * self.b + df * self.c)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(a={self.a!r}, b={self.b!r}, c={self.c!r})"

    def __str__(self) -> str:
        return self.to_string()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return other.a == self.a and other.b == self.b and other.c == self.c  # type: ignore

    def __add__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, type(self)):
            return self.__class__(self.a + rhs.a, self.b + rhs.b, self.c + rhs.c)

        if self._is_real(rhs):
            return self.__class__(self.a + rhs, self.b, self.c)

        return NotImplemented

    def __sub__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, type(self)):
            return self.__class__(self.a - rhs.a, self.b - rhs.b, self.c - rhs.c)

        if self._is_real(rhs):
            return self.__class__(self.a - rhs, self.b, self.c)

        return NotImplemented

    def __mul__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, type(self)):
            a = self.a * rhs.a
            b = self.a * rhs.b + self.b * rhs.a
            c = self.a * rhs.c + 2 * self.b * rhs.b + self.c * rhs.a
            return self.__class__(a, b, c)

        if self._is_real(rhs):
            return self.__class__(self.a * rhs, self.b * rhs, self.c * rhs)

        return NotImplemented

    def __truediv__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, type(self)):
            if rhs.a == 0:
                report_error("Dual2.__truediv__", rhs.a, DIV_BY_ZERO)
                return self._nan()

            return self.__mul__(rhs.inverse())

        if self._is_real(rhs):
            if rhs == 0:
                report_error("Dual2.__truediv__", rhs, DIV_BY_ZERO)
                return self._nan()

            return self.__class__(self.a / rhs, self.b / rhs, self.c / rhs)

        return NotImplemented

    def __neg__(self) -> Self:
        return self.__class__(-self.a, -self.b, -self.c)

    def __pos__(self) -> Self:
        return self.__class__(self.a, self.b, self.c)

    def __radd__(self, lhs: T | int) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        return self.__class__(lhs + self.a, self.b, self.c)

    def __rsub__(self, lhs: T | int) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        return self.__class__(lhs - self.a, -self.b, -self.c)

    def __rmul__(self, lhs: T | int) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        return self.__class__(lhs * self.a, lhs * self.b, lhs * self.c)

    def __rtruediv__(self, lhs: T | int) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        if self.a == 0:
            report_error("Dual2.__rtruediv__", self.a, DIV_BY_ZERO)
            return self._nan()

        return self.inverse().__rmul__(lhs)
