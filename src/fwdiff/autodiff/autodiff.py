import functools
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

import numpy as np
import numpy.typing as npt

from fwdiff import function as fdf
from fwdiff.autodiff.dual import Dual1, DualNumber
from fwdiff.autodiff.dual2 import Dual2
from fwdiff.autodiff.multidual import extract_dual, pack_function_arg
from fwdiff.error import DIV_BY_ZERO, nan_like, report_error

_logger = logging.getLogger(__name__)


def _as_vector(x: Any, name: str) -> npt.NDArray:
    x = np.asarray(x)

    if x.ndim != 1 or len(x) == 0:
        raise ValueError(f"{name} must be a non-empty one-dimensional array")

    if x.dtype.kind in "biu":
        x = x.astype(float)

    return x


def _object_array(items: Iterable) -> npt.NDArray[np.object_]:
    items = list(items)
    result = np.empty(len(items), dtype=object)

    for i, item in enumerate(items):
        result[i] = item

    return result


def _tangent(y: Any, cls: type[DualNumber], name: str, zero: Any) -> Any:
    if isinstance(y, cls):
        return getattr(y, name)

    if not DualNumber._is_real(y):
        raise TypeError(
            f"expected {cls.__name__} or a real number, got {type(y).__name__}"
        )

    # a constant function
    return zero


def _is_vector(y: Any) -> bool:
    return isinstance(y, Sequence | np.ndarray)


def _curried[F: Callable](driver: F) -> F:
    # driver(fun) returns a function of the remaining arguments
    @functools.wraps(driver)
    def wrapper(fun, *args):
        if args:
            return driver(fun, *args)

        def result(*args):
            return driver(fun, *args)

        return result

    return wrapper  # type: ignore


@_curried
def derivative(fun: Callable[[Any], Any], x: Any) -> Any:
    """Return the derivative of the univariate function at a point.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It receives a :class:`Dual1`.
    x : float | mpmath.mpf
        Point at which the derivative is evaluated.

    Examples
    --------
    >>> derivative(lambda x: x**3, 2.0)
    12.0
    """
    return _tangent(fun(Dual1.variable(x)), Dual1, "b", x * 0)


@_curried
def second_derivative(fun: Callable[[Any], Any], x: Any) -> Any:
    """Return the second derivative of the univariate function at a point.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It receives a :class:`Dual2`.
    x : float | mpmath.mpf
        Point at which the second derivative is evaluated.

    Examples
    --------
    >>> second_derivative(lambda x: x**3, 2.0)
    12.0
    """
    return _tangent(fun(Dual2.variable(x)), Dual2, "c", x * 0)


@_curried
def gradient(fun: Callable[[npt.NDArray], Any], x: Sequence | npt.NDArray) -> npt.NDArray:
    """Return the gradient of the multivariate scalar-valued function at a point.

    `fun` is evaluated once on :func:`pack_function_arg` of `x`.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It receives a one-dimensional array of
        :class:`MultiDual`.
    x : Sequence | ndarray
        Point at which the gradient is evaluated.

    Returns
    -------
    ndarray
        Gradient of `fun`. If `fun` turns out to be constant, the zero vector is
        returned.

    Warnings
    --------
    `fun` must be written with arithmetic operators and the functions of
    :mod:`fwdiff.function`, so that the same formula can be evaluated on reals and
    on dual numbers.

    Examples
    --------
    >>> gradient(lambda x: x[0] * x[1], [2.0, 3.0])
    array([3., 2.])
    """
    x = _as_vector(x, "x")
    n = len(x)
    _logger.debug("gradient: %d variables, 1 evaluation", n)
    return extract_dual([fun(pack_function_arg(x.tolist()))], n)[0]


@_curried
def gradient_mono(
    fun: Callable[[npt.NDArray], Any], x: Sequence | npt.NDArray
) -> npt.NDArray:
    """Return the gradient computed one coordinate at a time.

    Unlike :func:`gradient`, `fun` is evaluated once per coordinate on an array of
    :class:`Dual1` in which only that coordinate is seeded. This is slower but
    independent of :class:`MultiDual`, which makes it useful for cross-checking.

    Examples
    --------
    >>> gradient_mono(lambda x: x[0] * x[1], [2.0, 3.0])
    array([3., 2.])
    """
    values = _as_vector(x, "x").tolist()
    n = len(values)
    _logger.debug("gradient_mono: %d variables, %d evaluations", n, n)
    result = []

    for i in range(n):
        arg = _object_array(
            Dual1.variable(v) if j == i else Dual1(v, v * 0)
            for j, v in enumerate(values)
        )
        result.append(_tangent(fun(arg), Dual1, "b", values[i] * 0))

    return np.array(result)


@_curried
def divergence(fun: Callable[[npt.NDArray], Any], x: Sequence | npt.NDArray) -> Any:
    """Return the divergence of the function at a point.

    If `fun` returns a scalar, the sum of its partial derivatives is returned. If it
    returns a vector field, i.e. a sequence of as many components as variables, the
    trace of its Jacobian matrix is returned.

    Raises
    ------
    ValueError
        If the vector field and the point differ in dimension.

    Examples
    --------
    >>> f = lambda x: [x[0] * x[1], x[0] + x[1]]
    >>> print(divergence(f, [2.0, 3.0]))
    4.0
    """
    x = _as_vector(x, "x")
    n = len(x)
    _logger.debug("divergence: %d variables, 1 evaluation", n)
    y = fun(pack_function_arg(x.tolist()))

    if not _is_vector(y):
        return extract_dual([y], n)[0].sum()

    jac = extract_dual(y, n)

    if jac.shape[0] != n:
        raise ValueError(f"vector field must have {n} components, got {jac.shape[0]}")

    return jac.trace()


@_curried
def jacobian(fun: Callable[[npt.NDArray], Any], x: Sequence | npt.NDArray) -> npt.NDArray:
    """Return the Jacobian matrix of the multivariate vector-valued function.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It receives a one-dimensional array of
        :class:`MultiDual` and returns a sequence of `M` components.
    x : Sequence | ndarray
        Point of `N` variables at which the Jacobian matrix is evaluated.

    Returns
    -------
    ndarray
        `M` x `N` matrix whose `(i, j)` entry is the partial derivative of the `i`-th
        component with respect to the `j`-th variable. A scalar-valued `fun` gives a
        single row.

    Examples
    --------
    >>> jacobian(lambda x: [x[0] * x[1], x[0] + x[1]], [2.0, 3.0])
    array([[3., 2.],
           [1., 1.]])
    """
    x = _as_vector(x, "x")
    n = len(x)
    _logger.debug("jacobian: %d variables, 1 evaluation", n)
    y = fun(pack_function_arg(x.tolist()))
    return extract_dual(y if _is_vector(y) else [y], n)


@_curried
def curl(fun: Callable[[npt.NDArray], Any], x: Sequence | npt.NDArray) -> npt.NDArray:
    r"""Return the curl :math:`\nabla\times f` of a three-dimensional vector field.

    The curl is read off the Jacobian matrix :math:`J` of a single evaluation as
    :math:`(J_{32}-J_{23}, J_{13}-J_{31}, J_{21}-J_{12})`.

    Raises
    ------
    ValueError
        If `x` or the vector field does not have three components.

    Examples
    --------
    >>> curl(lambda x: [x[0] * x[1], x[1] * x[2], x[2] * x[0]], [1.0, 2.0, 3.0])
    array([-2., -3., -1.])
    """
    x = _as_vector(x, "x")

    if len(x) != 3:
        raise ValueError(f"x must have 3 components, got {len(x)}")

    _logger.debug("curl: 3 variables, 1 evaluation")
    y = fun(pack_function_arg(x.tolist()))

    if not _is_vector(y) or len(y) != 3:
        raise ValueError("vector field must have 3 components")

    jac = extract_dual(y, 3)
    return np.array(
        [jac[2, 1] - jac[1, 2], jac[0, 2] - jac[2, 0], jac[1, 0] - jac[0, 1]]
    )


@_curried
def laplacian(fun: Callable[[npt.NDArray], Any], x: Sequence | npt.NDArray) -> Any:
    r"""Return the Laplacian :math:`\sum_i\partial^2f/\partial x_i^2` at a point.

    `fun` is evaluated once per coordinate on an array of :class:`Dual2` in which
    only that coordinate is seeded.

    Examples
    --------
    >>> laplacian(lambda x: x[0] * x[0] + x[1] * x[1] * x[1], [1.0, 2.0])
    14.0
    """
    values = _as_vector(x, "x").tolist()
    n = len(values)
    _logger.debug("laplacian: %d variables, %d evaluations", n, n)
    result = values[0] * 0

    for i in range(n):
        arg = _object_array(
            Dual2.variable(v) if j == i else Dual2(v, v * 0, v * 0)
            for j, v in enumerate(values)
        )
        result += _tangent(fun(arg), Dual2, "c", values[i] * 0)

    return result


@_curried
def directional_derivative(
    fun: Callable[[npt.NDArray], Any],
    x: Sequence | npt.NDArray,
    v: Sequence | npt.NDArray,
) -> npt.NDArray:
    r"""Return the projection of the gradient onto a direction.

    The result is :math:`\hat{v}(\hat{v}\cdot\nabla f)`, where
    :math:`\hat{v}=v/\|v\|`.

    Parameters
    ----------
    fun : Callable
        Differentiated function, as in :func:`gradient`.
    x : Sequence | ndarray
        Point at which the gradient is evaluated.
    v : Sequence | ndarray
        Direction. If it is zero, :data:`~fwdiff.error.ErrorKind.DIV_BY_ZERO` is
        reported and a vector of NaN is returned.

    Raises
    ------
    ValueError
        If `x` and `v` differ in length.

    Examples
    --------
    >>> directional_derivative(lambda x: x[0] * x[1], [2.0, 3.0], [2.0, 0.0])
    array([3., 0.])
    """
    x = _as_vector(x, "x")
    v = _as_vector(v, "v")

    if len(v) != len(x):
        raise ValueError(f"direction must have {len(x)} components, got {len(v)}")

    norm = fdf.sqrt(sum(fdf.square(t) for t in v.tolist()))

    if norm == 0:
        report_error("directional_derivative", norm, DIV_BY_ZERO)
        return np.array([nan_like(norm)] * len(x))

    u = v / norm
    return u * (u @ gradient(fun, x))
