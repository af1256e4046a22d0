import math

import mpmath
import pytest

from fwdiff import function as fdf
from fwdiff.error import DIV_BY_ZERO, OUT_OF_DOMAIN, OUT_OF_RANGE, localcontext


def test_powers():
    assert fdf.square(-3.0) == 9.0
    assert fdf.cube(-2) == -8
    assert fdf.pow(2.0, 0.5) == pytest.approx(math.sqrt(2.0))
    assert fdf.pow(-2.0, 3) == -8.0
    assert fdf.sqrt(0.0) == 0.0

    with localcontext() as ctx:
        assert math.isnan(fdf.pow(-8.0, 1 / 3))
        assert ctx.flags == {OUT_OF_DOMAIN}

    with localcontext() as ctx:
        assert math.isnan(fdf.pow(0.0, -1))
        assert ctx.flags == {DIV_BY_ZERO}

    with localcontext() as ctx:
        assert fdf.pow(10.0, 400) == math.inf
        assert fdf.pow(-10.0, 401) == -math.inf
        assert ctx.flags == {OUT_OF_RANGE}
        assert ctx.count == 2


def test_exp_log():
    assert fdf.exp(0.0) == 1.0
    assert fdf.ln(math.e) == pytest.approx(1.0)
    assert fdf.log2(8.0) == 3.0
    assert fdf.log10(1000.0) == pytest.approx(3.0)

    with localcontext() as ctx:
        assert fdf.exp(1000.0) == math.inf
        assert ctx.flags == {OUT_OF_RANGE}

    with localcontext() as ctx:
        assert fdf.ln(0.0) == -math.inf
        assert fdf.log2(0.0) == -math.inf
        assert ctx.flags == {OUT_OF_RANGE}

    with localcontext() as ctx:
        assert math.isnan(fdf.log10(-1.0))
        assert ctx.flags == {OUT_OF_DOMAIN}


def test_trigonometric():
    x = 0.7
    assert fdf.tan(x) == pytest.approx(math.sin(x) / math.cos(x))
    assert fdf.cot(x) == pytest.approx(math.cos(x) / math.sin(x))
    assert fdf.asin(1.0) == pytest.approx(math.pi / 2)
    assert fdf.acos(1.0) == 0.0
    assert fdf.atan(1.0) == pytest.approx(math.pi / 4)

    with localcontext() as ctx:
        assert math.isnan(fdf.cot(0.0))
        assert ctx.flags == {DIV_BY_ZERO}

    with localcontext() as ctx:
        assert math.isnan(fdf.sin(math.inf))
        assert math.isnan(fdf.asin(1.5))
        assert math.isnan(fdf.acos(-1.5))
        assert ctx.flags == {OUT_OF_DOMAIN}
        assert ctx.count == 3


def test_hyperbolic():
    assert fdf.tanh(0.5) == pytest.approx(math.tanh(0.5))
    assert fdf.cosh(0.0) == 1.0

    with localcontext() as ctx:
        assert fdf.sinh(-1000.0) == -math.inf
        assert fdf.cosh(1000.0) == math.inf
        assert ctx.count == 2


def test_abs_sgn():
    assert fdf.abs(-2.5) == 2.5
    assert fdf.sgn(-0.0) == 0
    assert fdf.sgn(mpmath.mpf(-3)) == -1


def test_nan_input_is_not_reported():
    with localcontext() as ctx:
        assert math.isnan(fdf.sqrt(math.nan))
        assert math.isnan(fdf.asin(math.nan))
        assert math.isnan(fdf.ln(math.nan))
        assert ctx.count == 0


def test_mpmath():
    with mpmath.workdps(50):
        x = fdf.sqrt(mpmath.mpf(2))
        assert isinstance(x, mpmath.mpf)
        assert mpmath.almosteq(x * x, 2, 1e-45)
        assert isinstance(fdf.log2(mpmath.mpf(8)), mpmath.mpf)
        assert isinstance(fdf.pow(mpmath.mpf(2), 0.5), mpmath.mpf)

    with localcontext() as ctx:
        assert mpmath.isnan(fdf.ln(mpmath.mpf(-1)))
        assert ctx.flags == {OUT_OF_DOMAIN}


def test_unsupported_type():
    with pytest.raises(TypeError):
        fdf.sin("0")  # type: ignore

    with pytest.raises(TypeError):
        fdf.exp(1j)  # type: ignore
