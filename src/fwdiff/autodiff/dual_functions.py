"""Elementary functions on first-order dual numbers.

Every rule computes the real part with :mod:`fwdiff.function` and the dual part as
``f'(a) * b``. :class:`Dual1` and :class:`MultiDual` only differ in the shape of
the dual part, which :meth:`_chain` hides, so the same rules are registered for
both classes.
"""

from collections.abc import Callable

import mpmath

from fwdiff import function as fdf
from fwdiff.autodiff.dual import Dual1, DualNumber
from fwdiff.autodiff.multidual import MultiDual
from fwdiff.error import DIV_BY_ZERO, OUT_OF_DOMAIN, ErrorKind, report_error

type FirstOrder = Dual1 | MultiDual


def _register(fun: Callable) -> Callable[[Callable], Callable]:
    def decorator(impl: Callable) -> Callable:
        Dual1.register(fun)(impl)
        MultiDual.register(fun)(impl)
        return impl

    return decorator


def _fail[T: FirstOrder](name: str, x: T, kind: ErrorKind) -> T:
    report_error(f"{name}({type(x).__name__})", x.a, kind)
    return x._nan()


@_register(fdf.square)
def square[T: FirstOrder](x: T) -> T:
    return x * x


@_register(fdf.cube)
def cube[T: FirstOrder](x: T) -> T:
    return x * x * x


@_register(fdf.pow)
def pow(x, n):
    if isinstance(n, Dual1 | MultiDual):
        if (x.a if isinstance(x, DualNumber) else x) == 0 and n.a > 0:
            # x^n ln x vanishes at x = 0
            return fdf.pow(x, n.a) + n * 0

        return fdf.exp(n * fdf.ln(x))

    a = x.a

    if a == 0 and n < 1 and n != 0:
        return _fail("pow", x, DIV_BY_ZERO)

    if a < 0 and not mpmath.isint(n):
        return _fail("pow", x, OUT_OF_DOMAIN)

    if n == 0:
        return x._chain(a * 0 + 1, a * 0)

    p = fdf.pow(a, n - 1)
    return x._chain(p * a, n * p)


@_register(fdf.sqrt)
def sqrt[T: FirstOrder](x: T) -> T:
    if x.a < 0:
        return _fail("sqrt", x, OUT_OF_DOMAIN)

    if x.a == 0:
        return _fail("sqrt", x, DIV_BY_ZERO)

    s = fdf.sqrt(x.a)
    return x._chain(s, 1 / (2 * s))


@_register(fdf.exp)
def exp[T: FirstOrder](x: T) -> T:
    e = fdf.exp(x.a)
    return x._chain(e, e)


@_register(fdf.ln)
def ln[T: FirstOrder](x: T) -> T:
    if x.a <= 0:
        return _fail("ln", x, OUT_OF_DOMAIN)

    return x._chain(fdf.ln(x.a), 1 / x.a)


@_register(fdf.log2)
def log2[T: FirstOrder](x: T) -> T:
    if x.a <= 0:
        return _fail("log2", x, OUT_OF_DOMAIN)

    return x._chain(fdf.log2(x.a), 1 / (x.a * fdf.ln(x.a * 0 + 2)))


@_register(fdf.log10)
def log10[T: FirstOrder](x: T) -> T:
    if x.a <= 0:
        return _fail("log10", x, OUT_OF_DOMAIN)

    return x._chain(fdf.log10(x.a), 1 / (x.a * fdf.ln(x.a * 0 + 10)))


@_register(fdf.sin)
def sin[T: FirstOrder](x: T) -> T:
    if mpmath.isinf(x.a):
        return _fail("sin", x, OUT_OF_DOMAIN)

    return x._chain(fdf.sin(x.a), fdf.cos(x.a))


@_register(fdf.cos)
def cos[T: FirstOrder](x: T) -> T:
    if mpmath.isinf(x.a):
        return _fail("cos", x, OUT_OF_DOMAIN)

    return x._chain(fdf.cos(x.a), -fdf.sin(x.a))


@_register(fdf.tan)
def tan[T: FirstOrder](x: T) -> T:
    if mpmath.isinf(x.a):
        return _fail("tan", x, OUT_OF_DOMAIN)

    if fdf.cos(x.a) == 0:
        return _fail("tan", x, DIV_BY_ZERO)

    t = fdf.tan(x.a)
    return x._chain(t, 1 + t * t)


@_register(fdf.cot)
def cot[T: FirstOrder](x: T) -> T:
    if mpmath.isinf(x.a):
        return _fail("cot", x, OUT_OF_DOMAIN)

    if fdf.sin(x.a) == 0:
        return _fail("cot", x, DIV_BY_ZERO)

    k = fdf.cot(x.a)
    return x._chain(k, -(1 + k * k))


@_register(fdf.asin)
def asin[T: FirstOrder](x: T) -> T:
    if x.a <= -1 or x.a >= 1:
        return _fail("asin", x, OUT_OF_DOMAIN)

    return x._chain(fdf.asin(x.a), 1 / fdf.sqrt(1 - x.a * x.a))


@_register(fdf.acos)
def acos[T: FirstOrder](x: T) -> T:
    if x.a <= -1 or x.a >= 1:
        return _fail("acos", x, OUT_OF_DOMAIN)

    return x._chain(fdf.acos(x.a), -1 / fdf.sqrt(1 - x.a * x.a))


@_register(fdf.atan)
def atan[T: FirstOrder](x: T) -> T:
    return x._chain(fdf.atan(x.a), 1 / (1 + x.a * x.a))


@_register(fdf.sinh)
def sinh[T: FirstOrder](x: T) -> T:
    return x._chain(fdf.sinh(x.a), fdf.cosh(x.a))


@_register(fdf.cosh)
def cosh[T: FirstOrder](x: T) -> T:
    return x._chain(fdf.cosh(x.a), fdf.sinh(x.a))


@_register(fdf.tanh)
def tanh[T: FirstOrder](x: T) -> T:
    t = fdf.tanh(x.a)
    return x._chain(t, 1 - t * t)


@_register(fdf.abs)
def abs[T: FirstOrder](x: T) -> T:
    return x._chain(fdf.abs(x.a), fdf.sgn(x.a))


@_register(fdf.sgn)
def sgn(x: FirstOrder) -> int:
    return fdf.sgn(x.a)
