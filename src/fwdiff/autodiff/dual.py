import numbers
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import ClassVar, Final, Self

import mpmath
import numpy as np
import numpy.typing as npt

from fwdiff import function as fdf
from fwdiff.error import DIV_BY_ZERO, nan_like, report_error
from fwdiff.typing import Real


class DualNumber[T: Real](ABC):
    """Abstract base class for the number types of :mod:`fwdiff.autodiff`.

    Each concrete class owns a table of elementary-function overloads. Functions of
    :mod:`fwdiff.function` look the table up through :meth:`_fwdiff_overload_`, so
    that ``fdf.sin(x)`` propagates derivatives whenever `x` is a dual number.

    Warnings
    --------
    Instances are treated as immutable values; never assign to their attributes.
    The concrete classes cannot be subclassed.
    """

    __slots__ = ()
    __IS_SEALED: Final = True
    __array_ufunc__ = None
    _overloads: ClassVar[dict[Callable, Callable]]
    a: T

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        if cls.__IS_SEALED:
            raise RuntimeError("subclassing is forbidden")

        cls._overloads = {}

    @classmethod
    def register(cls, fun: Callable) -> Callable[[Callable], Callable]:
        """Return a decorator that registers an overload of `fun` for this class."""

        def decorator(impl: Callable) -> Callable:
            cls._overloads[fun] = impl
            return impl

        return decorator

    @staticmethod
    def _is_real(value: object) -> bool:
        return isinstance(value, mpmath.mpf | numbers.Real)

    @abstractmethod
    def _nan(self) -> Self:
        """Return an instance of the same shape whose components are all NaN."""
        raise NotImplementedError

    def _fwdiff_overload_(self, fun, *args):
        if (impl := self._overloads.get(fun)) is None:
            return NotImplemented

        return impl(*args)

    def __pow__(self, rhs) -> Self:
        if not self._is_real(rhs) and not isinstance(rhs, type(self)):
            return NotImplemented

        return fdf.pow(self, rhs)

    def __rpow__(self, lhs) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        return fdf.pow(lhs, self)

    def __abs__(self) -> Self:
        return fdf.abs(self)


DualNumber._DualNumber__IS_SEALED = False  # type: ignore


class Dual1[T: Real](DualNumber[T]):
    r"""First-order dual number :math:`a+b\varepsilon`, where
    :math:`\varepsilon^2=0`.

    Parameters
    ----------
    a : T, default=0.0
        Real part.
    b : T, default=0.0
        Dual part.

    Attributes
    ----------
    a : T
        Real part, the value of a quantity.
    b : T
        Dual part, the derivative of the quantity with respect to some parameter.

    Examples
    --------
    >>> x = Dual1(3.0, 1.0)
    >>> x * x
    Dual1(a=9.0, b=6.0)
    >>> print(1 / Dual1(2.0, 1.0))
    0.5 - 0.25e
    """

    __slots__ = ("a", "b")
    a: T
    b: T

    def __init__(self, a: T | int = 0.0, b: T | int = 0.0):
        if not (self._is_real(a) and self._is_real(b)):
            raise TypeError("coefficients of Dual1 must be real")

        self.a = a  # type: ignore
        self.b = b  # type: ignore

    @classmethod
    def variable(cls, x: T) -> Self:
        """Return `x` seeded as the independent variable (dual part one)."""
        return cls(x, x * 0 + 1)

    @classmethod
    def from_vec(cls, v: Sequence[T] | npt.NDArray) -> Self:
        """Construct a dual number from its vector form ``[a, b]``."""
        a, b = v
        return cls(a, b)

    def to_vec(self) -> npt.NDArray:
        """Return the vector form ``[a, b]``."""
        return np.array([self.a, self.b])

    def to_mat(self) -> npt.NDArray:
        r"""Return the matrix form :math:`\begin{pmatrix}a&b\\0&a\end{pmatrix}`.

        The matrix form of a product is the matrix product of the matrix forms.
        """
        return np.array([[self.a, self.b], [self.a * 0, self.a]])

    def conjugate(self) -> Self:
        """Return the dual conjugate ``a - b e``."""
        return self.__class__(self.a, -self.b)

    def inverse(self) -> Self:
        """Return the multiplicative inverse.

        If the real part is zero, :data:`~fwdiff.error.ErrorKind.DIV_BY_ZERO` is
        reported and NaN is returned.
        """
        if self.a == 0:
            report_error("Dual1.inverse", self.a, DIV_BY_ZERO)
            return self._nan()

        return self.__class__(1 / self.a, -self.b / (self.a * self.a))

    def to_string(self, epsilon: str = "e") -> str:
        sign = " + " if self.b >= 0 else " - "
        return f"{self.a}{sign}{abs(self.b)}{epsilon}"

    def _nan(self) -> Self:
        nan = nan_like(self.a)
        return self.__class__(nan, nan)

    def _chain(self, f: T, df: T) -> Self:
        return self.__class__(f, df * self.b)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(a={self.a!r}, b={self.b!r})"

    def __str__(self) -> str:
        return self.to_string()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return other.a == self.a and other.b == self.b  # type: ignore

    def __add__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, type(self)):
            return self.__class__(self.a + rhs.a, self.b + rhs.b)

        if self._is_real(rhs):
            return self.__class__(self.a + rhs, self.b)

        return NotImplemented

    def __sub__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, type(self)):
            return self.__class__(self.a - rhs.a, self.b - rhs.b)

        if self._is_real(rhs):
            return self.__class__(self.a - rhs, self.b)

        return NotImplemented

    def __mul__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, type(self)):
            return self.__class__(self.a * rhs.a, self.a * rhs.b + self.b * rhs.a)

        if self._is_real(rhs):
            return self.__class__(self.a * rhs, self.b * rhs)

        return NotImplemented

    def __truediv__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, type(self)):
            if rhs.a == 0:
                report_error("Dual1.__truediv__", rhs.a, DIV_BY_ZERO)
                return self._nan()

            s = rhs.a * rhs.a
            return self.__class__(self.a / rhs.a, (self.b * rhs.a - self.a * rhs.b) / s)

        if self._is_real(rhs):
            if rhs == 0:
                report_error("Dual1.__truediv__", rhs, DIV_BY_ZERO)
                return self._nan()

            return self.__class__(self.a / rhs, self.b / rhs)

        return NotImplemented

    def __neg__(self) -> Self:
        return self.__class__(-self.a, -self.b)

    def __pos__(self) -> Self:
        return self.__class__(self.a, self.b)

    def __radd__(self, lhs: T | int) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        return self.__class__(lhs + self.a, self.b)

    def __rsub__(self, lhs: T | int) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        return self.__class__(lhs - self.a, -self.b)

    def __rmul__(self, lhs: T | int) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        return self.__class__(lhs * self.a, lhs * self.b)

    def __rtruediv__(self, lhs: T | int) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        return self.__class__(lhs, self.b * 0).__truediv__(self)
