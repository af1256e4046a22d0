from collections.abc import Iterable, Sequence
from typing import Self

import numpy as np
import numpy.typing as npt

from fwdiff.autodiff.dual import DualNumber
from fwdiff.error import DIV_BY_ZERO, nan_like, report_error
from fwdiff.typing import Real


class MultiDual[T: Real](DualNumber[T]):
    r"""Multivariate dual number :math:`a+\sum_i v_i\varepsilon_i`, where
    :math:`\varepsilon_i\varepsilon_j=0` for all :math:`i,j`.

    Parameters
    ----------
    a : T
        Real part.
    v : Iterable[T] | ndarray
        Dual part. Its length is the number of independent variables.

    Attributes
    ----------
    a : T
    v : ndarray
        One-dimensional array of partial derivatives.

    Notes
    -----
    Combining two multidual numbers with different numbers of independent variables
    raises :class:`ValueError`.

    Examples
    --------
    >>> x, y = MultiDual.variable(2.0, 3.0)
    >>> z = x * y + 1
    >>> z.a
    7.0
    >>> z.v
    array([3., 2.])
    """

    __slots__ = ("a", "v")
    a: T
    v: npt.NDArray

    def __init__(self, a: T | int, v: Iterable[T] | npt.NDArray):
        if not self._is_real(a):
            raise TypeError("real part of MultiDual must be real")

        self.a = a  # type: ignore
        self.v = np.array(v if isinstance(v, np.ndarray) else list(v))

        if self.v.ndim != 1 or len(self.v) == 0:
            raise ValueError("dual part must be a non-empty one-dimensional array")

    @classmethod
    def constant(cls, value: T, n: int) -> Self:
        """Return `value` as a constant with respect to `n` variables."""
        return cls(value, np.zeros(n))

    @classmethod
    def variable(cls, *args: T) -> tuple[Self, ...]:
        """Return `args` seeded as independent variables.

        The dual part of the `i`-th result is the `i`-th standard basis vector.
        """
        basis = np.eye(len(args))
        return tuple(cls(arg, row) for arg, row in zip(args, basis))

    def size(self) -> int:
        """Number of independent variables."""
        return len(self.v)

    def conjugate(self) -> Self:
        return self.__class__(self.a, -self.v)

    def inverse(self) -> Self:
        """Return the multiplicative inverse.

        If the real part is zero, :data:`~fwdiff.error.ErrorKind.DIV_BY_ZERO` is
        reported and NaN is returned.
        """
        if self.a == 0:
            report_error("MultiDual.inverse", self.a, DIV_BY_ZERO)
            return self._nan()

        return self.__class__(1 / self.a, self.v * (-1 / (self.a * self.a)))

    def to_string(self, epsilon: str = "e") -> str:
        return f"{self.a} + {self.v.tolist()}{epsilon}"

    def _nan(self) -> Self:
        nan = nan_like(self.a)
        return self.__class__(nan, [nan] * len(self.v))

    def _chain(self, f: T, df: T) -> Self:
        return self.__class__(f, self.v * df)

    def _check_size(self, other: "MultiDual") -> None:
        if len(other.v) != len(self.v):
            raise ValueError(
                f"number of variables does not match: {len(self.v)} != {len(other.v)}"
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(a={self.a!r}, v={self.v.tolist()!r})"

    def __str__(self) -> str:
        return self.to_string()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return bool(other.a == self.a and np.array_equal(other.v, self.v))  # type: ignore

    def __add__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, type(self)):
            self._check_size(rhs)
            return self.__class__(self.a + rhs.a, self.v + rhs.v)

        if self._is_real(rhs):
            return self.__class__(self.a + rhs, self.v)

        return NotImplemented

    def __sub__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, type(self)):
            self._check_size(rhs)
            return self.__class__(self.a - rhs.a, self.v - rhs.v)

        if self._is_real(rhs):
            return self.__class__(self.a - rhs, self.v)

        return NotImplemented

    def __mul__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, type(self)):
            self._check_size(rhs)
            return self.__class__(self.a * rhs.a, rhs.v * self.a + self.v * rhs.a)

        if self._is_real(rhs):
            return self.__class__(self.a * rhs, self.v * rhs)

        return NotImplemented

    def __truediv__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, type(self)):
            self._check_size(rhs)

            if rhs.a == 0:
                report_error("MultiDual.__truediv__", rhs.a, DIV_BY_ZERO)
                return self._nan()

            s = rhs.a * rhs.a
            return self.__class__(self.a / rhs.a, (self.v * rhs.a - rhs.v * self.a) / s)

        if self._is_real(rhs):
            if rhs == 0:
                report_error("MultiDual.__truediv__", rhs, DIV_BY_ZERO)
                return self._nan()

            return self.__class__(self.a / rhs, self.v / rhs)

        return NotImplemented

    def __neg__(self) -> Self:
        return self.__class__(-self.a, -self.v)

    def __pos__(self) -> Self:
        return self.__class__(self.a, self.v)

    def __radd__(self, lhs: T | int) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        return self.__class__(lhs + self.a, self.v)

    def __rsub__(self, lhs: T | int) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        return self.__class__(lhs - self.a, -self.v)

    def __rmul__(self, lhs: T | int) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        return self.__class__(lhs * self.a, self.v * lhs)

    def __rtruediv__(self, lhs: T | int) -> Self:
        if not self._is_real(lhs):
            return NotImplemented

        return self.inverse().__rmul__(lhs)


def pack_function_arg(x: Sequence | npt.NDArray) -> npt.NDArray[np.object_]:
    """Return `x` as an array of multidual numbers seeded as independent variables.

    Evaluating a function on the result once yields its gradient (or Jacobian
    matrix) in the dual parts.

    Examples
    --------
    >>> arg = pack_function_arg([1.0, 2.0])
    >>> arg[1]
    MultiDual(a=2.0, v=[0.0, 1.0])
    """
    result = np.empty(len(x), dtype=object)

    for i, item in enumerate(MultiDual.variable(*x)):
        result[i] = item

    return result


def extract_real(xs: Iterable) -> npt.NDArray:
    """Return the real parts of `xs`.

    Elements that are not multidual numbers are taken as they are.
    """
    return np.array([x.a if isinstance(x, MultiDual) else x for x in xs])


def extract_dual(xs: Iterable, n: int | None = None) -> npt.NDArray:
    """Return the matrix whose `j`-th row is the dual part of ``xs[j]``.

    Parameters
    ----------
    xs : Iterable
        Multidual numbers. Real elements are constants and give zero rows.
    n : int | None, optional
        Number of independent variables. Required only if no element of `xs` is a
        multidual number.

    Raises
    ------
    TypeError
        If an element is neither a :class:`MultiDual` nor a real number.
    ValueError
        If the numbers of variables disagree.
    """
    xs = list(xs)

    if n is None:
        n = next((x.size() for x in xs if isinstance(x, MultiDual)), None)

        if n is None:
            raise ValueError("number of variables cannot be inferred")

    rows: list[npt.NDArray] = []

    for x in xs:
        if isinstance(x, MultiDual):
            if x.size() != n:
                raise ValueError(f"number of variables does not match: {x.size()} != {n}")

            rows.append(x.v)
        elif DualNumber._is_real(x):
            rows.append(np.zeros(n))
        else:
            raise TypeError(f"expected MultiDual or a real number, got {type(x).__name__}")

    return np.array(rows).reshape(len(rows), n)
