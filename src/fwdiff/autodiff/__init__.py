"""
##################################################
Automatic differentiation (:mod:`fwdiff.autodiff`)
##################################################

.. currentmodule:: fwdiff.autodiff

This module provides forward-mode automatic differentiation. A function written with
arithmetic operators and the functions of :mod:`fwdiff.function` is evaluated on dual
numbers, whose dual parts carry the derivatives alongside the value.

>>> from fwdiff import function as fdf
>>> f = lambda x: fdf.sin(x[0]) * x[1]
>>> gradient(f, [0.0, 2.0])
array([2., 0.])

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    derivative
    second_derivative
    gradient
    gradient_mono
    divergence
    jacobian
    curl
    laplacian
    directional_derivative

Number systems containing infinitesimals
----------------------------------------

.. autosummary::
    :toctree: generated/

    DualNumber
    Dual1
    Dual2
    MultiDual

Seeding and extraction
----------------------

.. autosummary::
    :toctree: generated/

    pack_function_arg
    extract_real
    extract_dual

"""

from . import dual2_functions, dual_functions
from .autodiff import (
    curl,
    derivative,
    directional_derivative,
    divergence,
    gradient,
    gradient_mono,
    jacobian,
    laplacian,
    second_derivative,
)
from .dual import Dual1, DualNumber
from .dual2 import Dual2
from .multidual import MultiDual, extract_dual, extract_real, pack_function_arg

DualNumber._DualNumber__IS_SEALED = True  # type: ignore

__all__ = [
    "curl",
    "derivative",
    "directional_derivative",
    "divergence",
    "gradient",
    "gradient_mono",
    "jacobian",
    "laplacian",
    "second_derivative",
    "DualNumber",
    "Dual1",
    "Dual2",
    "MultiDual",
    "pack_function_arg",
    "extract_real",
    "extract_dual",
]
