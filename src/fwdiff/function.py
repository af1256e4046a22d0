"""
###############################################
Mathematical functions (:mod:`fwdiff.function`)
###############################################

.. currentmodule:: fwdiff.function

This module provides the elementary functions on which automatic differentiation is
built. Every function accepts :class:`float`, :class:`int`, :class:`mpmath.mpf`, and
the number types of :mod:`fwdiff.autodiff`, so a formula written once with these
functions can be evaluated on reals and differentiated alike.

Outside its domain, a function reports the violation through
:func:`fwdiff.error.report_error` and returns NaN (cf. :mod:`fwdiff.error`).

Powers and roots
================

.. autosummary::
    :toctree: generated/

    square
    cube
    pow
    sqrt

Exponential and logarithmic functions
=====================================

.. autosummary::
    :toctree: generated/

    exp
    ln
    log2
    log10

Trigonometric functions
=======================

.. autosummary::
    :toctree: generated/

    sin
    cos
    tan
    cot
    asin
    acos
    atan

Hyperbolic functions
====================

.. autosummary::
    :toctree: generated/

    sinh
    cosh
    tanh

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    abs
    sgn

"""

import math
import numbers
from types import ModuleType
from typing import Any

import mpmath

from fwdiff.error import (
    DIV_BY_ZERO,
    OUT_OF_DOMAIN,
    OUT_OF_RANGE,
    ErrorKind,
    nan_like,
    report_error,
)


def _overload(x: Any, fun: Any, *args) -> Any:
    if method := getattr(type(x), "_fwdiff_overload_", None):
        if (res := method(x, fun, *args)) is not NotImplemented:
            return res

        raise TypeError(f"{fun.__name__}() is not defined for {type(x).__name__}")

    return NotImplemented


def _backend(x: Any, name: str) -> ModuleType:
    match x:
        case mpmath.mpf():
            return mpmath

        case numbers.Real():
            return math

        case _:
            raise TypeError(f"{name}() is not defined for {type(x).__name__}")


def _fail(name: str, x: Any, kind: ErrorKind, result: Any = None) -> Any:
    report_error(name, x, kind)
    return nan_like(x) if result is None else result


def square[T](x: T, /) -> T:
    """Square of `x`.

    Examples
    --------
    >>> square(3.0)
    9.0
    """
    if (res := _overload(x, square, x)) is not NotImplemented:
        return res

    _backend(x, "square")
    return x * x  # type: ignore


def cube[T](x: T, /) -> T:
    """Cube of `x`."""
    if (res := _overload(x, cube, x)) is not NotImplemented:
        return res

    _backend(x, "cube")
    return x * x * x  # type: ignore


def pow(x, y, /):
    """`x` raised to the power `y`.

    If either argument is a dual number, the derivative is propagated through it.
    A negative base requires an integral exponent.

    A dual exponent is evaluated as ``exp(y * ln(x))``, so the base must then be
    positive. The exception is a zero base with a positive exponent, where the
    derivative with respect to the exponent is zero. A negative base with a dual
    exponent reports :data:`~fwdiff.error.ErrorKind.OUT_OF_DOMAIN`.

    Examples
    --------
    >>> pow(2.0, 10)
    1024.0
    >>> pow(-8.0, 1 / 3)
    nan
    """
    for z in (x, y):
        if (res := _overload(z, pow, x, y)) is not NotImplemented:
            return res

    backend = _backend(x, "pow")
    _backend(y, "pow")

    if x == 0 and y < 0:
        return _fail("pow", x, DIV_BY_ZERO)

    if x < 0 and not mpmath.isint(y):
        return _fail("pow", x, OUT_OF_DOMAIN)

    if backend is mpmath or isinstance(y, mpmath.mpf):
        return mpmath.power(x, y)

    try:
        return math.pow(x, y)
    except OverflowError:
        sign = -1.0 if x < 0 and mpmath.isint(y) and int(y) % 2 != 0 else 1.0
        return _fail("pow", x, OUT_OF_RANGE, math.copysign(math.inf, sign))


def sqrt[T](x: T, /) -> T:
    """Square root.

    Examples
    --------
    >>> sqrt(2.0)
    1.4142135623730951
    """
    if (res := _overload(x, sqrt, x)) is not NotImplemented:
        return res

    backend = _backend(x, "sqrt")

    if x < 0:  # type: ignore
        return _fail("sqrt", x, OUT_OF_DOMAIN)

    return backend.sqrt(x)


def exp[T](x: T, /) -> T:
    """Exponential."""
    if (res := _overload(x, exp, x)) is not NotImplemented:
        return res

    backend = _backend(x, "exp")

    try:
        return backend.exp(x)
    except OverflowError:
        return _fail("exp", x, OUT_OF_RANGE, math.inf)


def ln[T](x: T, /) -> T:
    """Natural logarithm.

    ``ln(0)`` reports :data:`~fwdiff.error.ErrorKind.OUT_OF_RANGE` and returns
    negative infinity.
    """
    if (res := _overload(x, ln, x)) is not NotImplemented:
        return res

    backend = _backend(x, "ln")

    if x < 0:  # type: ignore
        return _fail("ln", x, OUT_OF_DOMAIN)

    if x == 0:
        return _fail("ln", x, OUT_OF_RANGE, -backend.inf)

    return backend.log(x)


def log2[T](x: T, /) -> T:
    """Binary logarithm."""
    if (res := _overload(x, log2, x)) is not NotImplemented:
        return res

    backend = _backend(x, "log2")

    if x < 0:  # type: ignore
        return _fail("log2", x, OUT_OF_DOMAIN)

    if x == 0:
        return _fail("log2", x, OUT_OF_RANGE, -backend.inf)

    if backend is mpmath:
        return mpmath.log(x, 2)

    return math.log2(x)  # type: ignore


def log10[T](x: T, /) -> T:
    """Common logarithm."""
    if (res := _overload(x, log10, x)) is not NotImplemented:
        return res

    backend = _backend(x, "log10")

    if x < 0:  # type: ignore
        return _fail("log10", x, OUT_OF_DOMAIN)

    if x == 0:
        return _fail("log10", x, OUT_OF_RANGE, -backend.inf)

    return backend.log10(x)


def sin[T](x: T, /) -> T:
    """Sine.

    Examples
    --------
    >>> sin(0.0)
    0.0
    """
    if (res := _overload(x, sin, x)) is not NotImplemented:
        return res

    backend = _backend(x, "sin")

    if mpmath.isinf(x):
        return _fail("sin", x, OUT_OF_DOMAIN)

    return backend.sin(x)


def cos[T](x: T, /) -> T:
    """Cosine."""
    if (res := _overload(x, cos, x)) is not NotImplemented:
        return res

    backend = _backend(x, "cos")

    if mpmath.isinf(x):
        return _fail("cos", x, OUT_OF_DOMAIN)

    return backend.cos(x)


def tan[T](x: T, /) -> T:
    """Tangent."""
    if (res := _overload(x, tan, x)) is not NotImplemented:
        return res

    backend = _backend(x, "tan")

    if mpmath.isinf(x):
        return _fail("tan", x, OUT_OF_DOMAIN)

    if backend.cos(x) == 0:
        return _fail("tan", x, DIV_BY_ZERO)

    return backend.tan(x)


def cot[T](x: T, /) -> T:
    """Cotangent."""
    if (res := _overload(x, cot, x)) is not NotImplemented:
        return res

    backend = _backend(x, "cot")

    if mpmath.isinf(x):
        return _fail("cot", x, OUT_OF_DOMAIN)

    s = backend.sin(x)

    if s == 0:
        return _fail("cot", x, DIV_BY_ZERO)

    return backend.cos(x) / s


def asin[T](x: T, /) -> T:
    """Inverse sine."""
    if (res := _overload(x, asin, x)) is not NotImplemented:
        return res

    backend = _backend(x, "asin")

    if x < -1 or x > 1:  # type: ignore
        return _fail("asin", x, OUT_OF_DOMAIN)

    return backend.asin(x)


def acos[T](x: T, /) -> T:
    """Inverse cosine."""
    if (res := _overload(x, acos, x)) is not NotImplemented:
        return res

    backend = _backend(x, "acos")

    if x < -1 or x > 1:  # type: ignore
        return _fail("acos", x, OUT_OF_DOMAIN)

    return backend.acos(x)


def atan[T](x: T, /) -> T:
    """Inverse tangent."""
    if (res := _overload(x, atan, x)) is not NotImplemented:
        return res

    return _backend(x, "atan").atan(x)


def sinh[T](x: T, /) -> T:
    """Hyperbolic sine."""
    if (res := _overload(x, sinh, x)) is not NotImplemented:
        return res

    backend = _backend(x, "sinh")

    try:
        return backend.sinh(x)
    except OverflowError:
        return _fail("sinh", x, OUT_OF_RANGE, math.copysign(math.inf, x))  # type: ignore


def cosh[T](x: T, /) -> T:
    """Hyperbolic cosine."""
    if (res := _overload(x, cosh, x)) is not NotImplemented:
        return res

    backend = _backend(x, "cosh")

    try:
        return backend.cosh(x)
    except OverflowError:
        return _fail("cosh", x, OUT_OF_RANGE, math.inf)


def tanh[T](x: T, /) -> T:
    """Hyperbolic tangent."""
    if (res := _overload(x, tanh, x)) is not NotImplemented:
        return res

    return _backend(x, "tanh").tanh(x)


def abs[T](x: T, /) -> T:
    """Absolute value.

    The derivative at zero is taken to be zero.
    """
    if (res := _overload(x, abs, x)) is not NotImplemented:
        return res

    return _backend(x, "abs").fabs(x)


def sgn(x, /) -> int:
    """Sign of `x` (1 if positive, -1 if negative, 0 otherwise).

    For a dual number, this is the sign of its real part.

    Examples
    --------
    >>> sgn(-2.5), sgn(0.0), sgn(3)
    (-1, 0, 1)
    """
    if (res := _overload(x, sgn, x)) is not NotImplemented:
        return res

    _backend(x, "sgn")
    return 1 if x > 0 else (-1 if x < 0 else 0)
