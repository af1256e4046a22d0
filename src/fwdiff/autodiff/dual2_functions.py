"""Elementary functions on second-order dual numbers.

Each rule evaluates ``f``, ``f'`` and ``f''`` at the real part and combines them with
the dual parts by :meth:`Dual2._chain`, i.e. the second-order chain rule
:math:`(f\\circ u)''=f''(u)u'^2+f'(u)u''`.
"""

import mpmath

from fwdiff import function as fdf
from fwdiff.autodiff.dual2 import Dual2
from fwdiff.error import DIV_BY_ZERO, OUT_OF_DOMAIN, ErrorKind, report_error


def _fail(name: str, x: Dual2, kind: ErrorKind) -> Dual2:
    report_error(f"{name}(Dual2)", x.a, kind)
    return x._nan()


@Dual2.register(fdf.square)
def square(x: Dual2) -> Dual2:
    return x * x


@Dual2.register(fdf.cube)
def cube(x: Dual2) -> Dual2:
    return x * x * x


@Dual2.register(fdf.pow)
def pow(x, n):
    if isinstance(n, Dual2):
        if (x.a if isinstance(x, Dual2) else x) == 0 and n.a > 0:
            return fdf.pow(x, n.a) + n * 0

        return fdf.exp(n * fdf.ln(x))

    a = x.a

    # f'' is unbounded at zero below n = 2, apart from n = 0 and n = 1
    if a == 0 and n < 2 and n != 0 and n != 1:
        return _fail("pow", x, DIV_BY_ZERO)

    if a < 0 and not mpmath.isint(n):
        return _fail("pow", x, OUT_OF_DOMAIN)

    ZERO = a * 0

    if n == 0:
        return x._chain(ZERO + 1, ZERO, ZERO)

    if n == 1:
        return x._chain(a, ZERO + 1, ZERO)

    p = fdf.pow(a, n - 2)
    return x._chain(p * a * a, n * p * a, n * (n - 1) * p)


@Dual2.register(fdf.sqrt)
def sqrt(x: Dual2) -> Dual2:
    if x.a < 0:
        return _fail("sqrt", x, OUT_OF_DOMAIN)

    if x.a == 0:
        return _fail("sqrt", x, DIV_BY_ZERO)

    s = fdf.sqrt(x.a)
    ds = 1 / (2 * s)
    return x._chain(s, ds, -ds / (2 * x.a))


@Dual2.register(fdf.exp)
def exp(x: Dual2) -> Dual2:
    e = fdf.exp(x.a)
    return x._chain(e, e, e)


@Dual2.register(fdf.ln)
def ln(x: Dual2) -> Dual2:
    if x.a <= 0:
        return _fail("ln", x, OUT_OF_DOMAIN)

    r = 1 / x.a
    return x._chain(fdf.ln(x.a), r, -r * r)


@Dual2.register(fdf.log2)
def log2(x: Dual2) -> Dual2:
    if x.a <= 0:
        return _fail("log2", x, OUT_OF_DOMAIN)

    r = 1 / x.a
    k = 1 / fdf.ln(x.a * 0 + 2)
    return x._chain(fdf.log2(x.a), k * r, -k * r * r)


@Dual2.register(fdf.log10)
def log10(x: Dual2) -> Dual2:
    if x.a <= 0:
        return _fail("log10", x, OUT_OF_DOMAIN)

    r = 1 / x.a
    k = 1 / fdf.ln(x.a * 0 + 10)
    return x._chain(fdf.log10(x.a), k * r, -k * r * r)


@Dual2.register(fdf.sin)
def sin(x: Dual2) -> Dual2:
    if mpmath.isinf(x.a):
        return _fail("sin", x, OUT_OF_DOMAIN)

    s = fdf.sin(x.a)
    return x._chain(s, fdf.cos(x.a), -s)


@Dual2.register(fdf.cos)
def cos(x: Dual2) -> Dual2:
    if mpmath.isinf(x.a):
        return _fail("cos", x, OUT_OF_DOMAIN)

    c = fdf.cos(x.a)
    return x._chain(c, -fdf.sin(x.a), -c)


@Dual2.register(fdf.tan)
def tan(x: Dual2) -> Dual2:
    if mpmath.isinf(x.a):
        return _fail("tan", x, OUT_OF_DOMAIN)

    if fdf.cos(x.a) == 0:
        return _fail("tan", x, DIV_BY_ZERO)

    t = fdf.tan(x.a)
    dt = 1 + t * t
    return x._chain(t, dt, 2 * t * dt)


@Dual2.register(fdf.cot)
def cot(x: Dual2) -> Dual2:
    if mpmath.isinf(x.a):
        return _fail("cot", x, OUT_OF_DOMAIN)

    if fdf.sin(x.a) == 0:
        return _fail("cot", x, DIV_BY_ZERO)

    k = fdf.cot(x.a)
    dk = -(1 + k * k)
    return x._chain(k, dk, -2 * k * dk)


@Dual2.register(fdf.asin)
def asin(x: Dual2) -> Dual2:
    if x.a <= -1 or x.a >= 1:
        return _fail("asin", x, OUT_OF_DOMAIN)

    q = 1 - x.a * x.a
    r = 1 / fdf.sqrt(q)
    return x._chain(fdf.asin(x.a), r, x.a * r / q)


@Dual2.register(fdf.acos)
def acos(x: Dual2) -> Dual2:
    if x.a <= -1 or x.a >= 1:
        return _fail("acos", x, OUT_OF_DOMAIN)

    q = 1 - x.a * x.a
    r = 1 / fdf.sqrt(q)
    return x._chain(fdf.acos(x.a), -r, -x.a * r / q)


@Dual2.register(fdf.atan)
def atan(x: Dual2) -> Dual2:
    r = 1 / (1 + x.a * x.a)
    return x._chain(fdf.atan(x.a), r, -2 * x.a * r * r)


@Dual2.register(fdf.sinh)
def sinh(x: Dual2) -> Dual2:
    s = fdf.sinh(x.a)
    return x._chain(s, fdf.cosh(x.a), s)


@Dual2.register(fdf.cosh)
def cosh(x: Dual2) -> Dual2:
    c = fdf.cosh(x.a)
    return x._chain(c, fdf.sinh(x.a), c)


@Dual2.register(fdf.tanh)
def tanh(x: Dual2) -> Dual2:
    t = fdf.tanh(x.a)
    dt = 1 - t * t
    return x._chain(t, dt, -2 * t * dt)


@Dual2.register(fdf.abs)
def abs(x: Dual2) -> Dual2:
    return x._chain(fdf.abs(x.a), fdf.sgn(x.a), x.a * 0)


@Dual2.register(fdf.sgn)
def sgn(x: Dual2) -> int:
    return fdf.sgn(x.a)
