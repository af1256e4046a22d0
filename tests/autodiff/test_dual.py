import math
import operator

import mpmath
import numpy as np
import pytest

from fwdiff import function as fdf
from fwdiff.autodiff import Dual1, Dual2
from fwdiff.error import DIV_BY_ZERO, OUT_OF_DOMAIN, MathError, isnan, localcontext

FUNCTIONS = [
    (fdf.square, 1.3),
    (fdf.cube, -0.4),
    (fdf.sqrt, 2.5),
    (fdf.exp, 0.7),
    (fdf.ln, 1.7),
    (fdf.log2, 3.0),
    (fdf.log10, 0.2),
    (fdf.sin, 0.9),
    (fdf.cos, 2.1),
    (fdf.tan, 0.3),
    (fdf.cot, 0.6),
    (fdf.asin, 0.2),
    (fdf.acos, -0.6),
    (fdf.atan, 1.2),
    (fdf.sinh, 0.5),
    (fdf.cosh, -0.8),
    (fdf.tanh, 0.4),
]

OPERATORS = [
    (operator.add, operator.iadd),
    (operator.sub, operator.isub),
    (operator.mul, operator.imul),
    (operator.truediv, operator.itruediv),
]


@pytest.mark.parametrize("fun, x", FUNCTIONS)
def test_finite_difference(fun, x):
    h = 1e-5
    y = fun(Dual1(x, 1.0))
    assert y.a == pytest.approx(fun(x))
    assert y.b == pytest.approx((fun(x + h) - fun(x - h)) / (2 * h), rel=1e-6)


def test_scenarios():
    assert fdf.square(Dual1(3, 1)) == Dual1(9, 6)
    assert fdf.sin(Dual1(0.0, 1.0)) == Dual1(0.0, 1.0)

    with localcontext() as ctx:
        y = Dual1(0.0, 5.0).inverse()
        assert math.isnan(y.a) and math.isnan(y.b)
        assert ctx.flags == {DIV_BY_ZERO}

    with localcontext() as ctx:
        y = fdf.ln(Dual1(-1.0, 1.0))
        assert math.isnan(y.a) and math.isnan(y.b)
        assert ctx.flags == {OUT_OF_DOMAIN}


def test_arithmetic():
    x = Dual1(2.0, 3.0)
    y = Dual1(-1.0, 0.5)
    assert x + y == Dual1(1.0, 3.5)
    assert x - y == Dual1(3.0, 2.5)
    assert x * y == Dual1(-2.0, -2.0)
    assert x / y == Dual1(-2.0, -4.0)
    assert -x == Dual1(-2.0, -3.0)
    assert +x == x
    assert 1 + x == Dual1(3.0, 3.0)
    assert 1 - x == Dual1(-1.0, -3.0)
    assert 2 * x == Dual1(4.0, 6.0)
    assert x / 2 == Dual1(1.0, 1.5)
    assert 1 / x == x.inverse()
    assert np.float64(2.0) * x == Dual1(4.0, 6.0)
    assert x * x.conjugate() == Dual1(4.0, 0.0)


@pytest.mark.parametrize("op, iop", OPERATORS)
def test_inplace_operators(op, iop):
    x = Dual1(2.0, 3.0)
    y = Dual1(-1.0, 0.5)
    z = x
    z = iop(z, y)
    assert z == op(x, y)
    assert x == Dual1(2.0, 3.0)

    z = x
    z = iop(z, 4.0)
    assert z == op(x, 4.0)


def test_division_by_zero():
    with localcontext() as ctx:
        assert isnan(Dual1(1.0, 1.0) / Dual1(0.0, 1.0))
        assert isnan(Dual1(1.0, 1.0) / 0)
        assert isnan(3.0 / Dual1(0.0, 2.0))
        assert ctx.count == 3


def test_pow():
    x = Dual1(3.0, 1.0)
    assert x**2 == Dual1(9.0, 6.0)
    assert Dual1(2.0, 1.0) ** 0 == Dual1(1.0, 0.0)
    assert Dual1(0.0, 1.0) ** 2 == Dual1(0.0, 0.0)

    y = 2.0 ** Dual1(3.0, 1.0)
    assert y.a == pytest.approx(8.0)
    assert y.b == pytest.approx(8.0 * math.log(2.0))

    z = Dual1(2.0, 1.0) ** Dual1(2.0, 1.0)
    assert z.a == pytest.approx(4.0)
    assert z.b == pytest.approx(4.0 * (math.log(2.0) + 1.0))

    with localcontext() as ctx:
        assert isnan(Dual1(0.0, 1.0) ** 0.5)
        assert ctx.flags == {DIV_BY_ZERO}

    with localcontext() as ctx:
        assert isnan(Dual1(-2.0, 1.0) ** 0.5)
        assert ctx.flags == {OUT_OF_DOMAIN}


def test_pow_dual_exponent():
    with localcontext() as ctx:
        assert fdf.pow(0.0, Dual1(2.0, 1.0)) == Dual1(0.0, 0.0)
        assert Dual1(0.0, 1.0) ** Dual1(2.0, 1.0) == Dual1(0.0, 0.0)
        assert Dual1(0.0, 1.0) ** Dual1(1.0, 1.0) == Dual1(0.0, 1.0)
        assert ctx.count == 0

    with localcontext() as ctx:
        assert isnan(fdf.pow(-2.0, Dual1(2.0, 1.0)))
        assert ctx.flags == {OUT_OF_DOMAIN}
        assert ctx.count == 1


def test_abs_sgn():
    assert abs(Dual1(-2.0, 3.0)) == Dual1(2.0, -3.0)
    assert fdf.abs(Dual1(2.0, 3.0)) == Dual1(2.0, 3.0)
    assert fdf.sgn(Dual1(-2.0, 1.0)) == -1


def test_domain_violation_reported_once():
    cases = [
        (fdf.sqrt, 0.0, DIV_BY_ZERO),
        (fdf.sqrt, -1.0, OUT_OF_DOMAIN),
        (fdf.cot, 0.0, DIV_BY_ZERO),
        (fdf.asin, 1.0, OUT_OF_DOMAIN),
        (fdf.acos, -1.0, OUT_OF_DOMAIN),
        (fdf.log2, 0.0, OUT_OF_DOMAIN),
        (fdf.sin, math.inf, OUT_OF_DOMAIN),
    ]

    for fun, a, kind in cases:
        with localcontext() as ctx:
            assert isnan(fun(Dual1(a, 1.0)))
            assert ctx.flags == {kind}
            assert ctx.count == 1


def test_nan_propagation():
    with localcontext() as ctx:
        y = fdf.sin(fdf.ln(Dual1(-1.0, 1.0)) * 2 + 1)
        assert math.isnan(y.a) and math.isnan(y.b)
        assert ctx.count == 1

    with localcontext() as ctx:
        assert isnan(fdf.ln(Dual1(math.nan, 1.0)))
        assert ctx.count == 0


def test_traps():
    with localcontext(traps=True):
        with pytest.raises(MathError) as excinfo:
            fdf.ln(Dual1(-1.0, 1.0))

    assert excinfo.value.kind is OUT_OF_DOMAIN
    assert excinfo.value.function == "ln(Dual1)"
    assert excinfo.value.value == -1.0


def test_vec_mat():
    x = Dual1(0.1, -2.7)
    assert Dual1.from_vec(x.to_vec()) == x
    assert Dual1.from_vec([1.0, 2.0]) == Dual1(1.0, 2.0)

    y = Dual1(-1.3, 0.25)
    assert x.to_mat() == pytest.approx(np.array([[0.1, -2.7], [0.0, 0.1]]))
    assert (x * y).to_mat() == pytest.approx(x.to_mat() @ y.to_mat())
    assert (x + y).to_mat() == pytest.approx(x.to_mat() + y.to_mat())


def test_string():
    x = Dual1(1.0, -2.0)
    assert str(x) == "1.0 - 2.0e"
    assert Dual1(1.0, 2.0).to_string("h") == "1.0 + 2.0h"
    assert repr(x) == "Dual1(a=1.0, b=-2.0)"
    assert Dual1() == Dual1(0.0, 0.0)
    assert Dual1.variable(4.0) == Dual1(4.0, 1.0)


def test_type_error():
    with pytest.raises(TypeError):
        Dual1("1.0", 1.0)  # type: ignore

    with pytest.raises(TypeError):
        Dual1(1.0, 1.0) + Dual2(1.0, 1.0, 0.0)  # type: ignore

    with pytest.raises(TypeError):
        Dual1(1.0, 1.0) * "x"  # type: ignore


def test_sealed():
    with pytest.raises(RuntimeError):

        class _(Dual1):
            pass

    with pytest.raises(RuntimeError):

        class _(Dual2):
            pass


def test_mpmath():
    with mpmath.workdps(40):
        x = Dual1.variable(mpmath.mpf(2))
        y = fdf.exp(fdf.sin(x))
        expected = mpmath.cos(2) * mpmath.exp(mpmath.sin(2))
        assert isinstance(y.b, mpmath.mpf)
        assert mpmath.almosteq(y.b, expected, 1e-35)
