import logging

from .autodiff import (
    Dual1,
    Dual2,
    MultiDual,
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
from .error import (
    ErrorContext,
    ErrorKind,
    MathError,
    getcontext,
    localcontext,
    setcontext,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Dual1",
    "Dual2",
    "MultiDual",
    "curl",
    "derivative",
    "directional_derivative",
    "divergence",
    "gradient",
    "gradient_mono",
    "jacobian",
    "laplacian",
    "second_derivative",
    "ErrorContext",
    "ErrorKind",
    "MathError",
    "getcontext",
    "localcontext",
    "setcontext",
]
