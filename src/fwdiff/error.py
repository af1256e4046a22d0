"""
####################################
Error handling (:mod:`fwdiff.error`)
####################################

.. currentmodule:: fwdiff.error

Elementary functions never raise on a domain violation by default. Instead, they
report the violation once through the error context of the current thread and
return a value whose every component is NaN, which then propagates through all
subsequent arithmetic.

>>> from fwdiff import function as fdf
>>> with localcontext() as ctx:
...     y = fdf.ln(-1.0)
>>> isnan(y), ctx.flags == {ErrorKind.OUT_OF_DOMAIN}
(True, True)

Setting `traps` turns the first violation into an exception.

>>> with localcontext(traps=True):
...     fdf.ln(-1.0)
Traceback (most recent call last):
    ...
fwdiff.error.MathError: ln(-1.0): argument out of the domain of the called function

Error channel
=============

.. autosummary::
    :toctree: generated/

    ErrorContext
    getcontext
    setcontext
    localcontext
    report_error

Errors
======

.. autosummary::
    :toctree: generated/

    ErrorKind
    ErrorReport
    MathError

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    isnan
    nan_like

"""

import contextlib
import contextvars
import enum
import logging
import math
from collections.abc import Iterator
from typing import Any, Final, NamedTuple

import mpmath

_logger = logging.getLogger(__name__)


class ErrorKind(enum.Enum):
    """Kind of a reported math error.

    Attributes
    ----------
    DIV_BY_ZERO
    OUT_OF_DOMAIN
    OUT_OF_RANGE
    """

    DIV_BY_ZERO = "division by zero"
    OUT_OF_DOMAIN = "argument out of the domain of the called function"
    OUT_OF_RANGE = "result out of range"

    @property
    def description(self) -> str:
        return self.value

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}>"


DIV_BY_ZERO: Final = ErrorKind.DIV_BY_ZERO
OUT_OF_DOMAIN: Final = ErrorKind.OUT_OF_DOMAIN
OUT_OF_RANGE: Final = ErrorKind.OUT_OF_RANGE


class MathError(ArithmeticError):
    """Error raised on a domain violation when the current context traps errors.

    Parameters
    ----------
    kind : ErrorKind
    function : str
        Name of the function that detected the violation.
    value : Any
        Value that triggered the violation.

    Attributes
    ----------
    kind : ErrorKind
    function : str
    value : Any
    """

    kind: ErrorKind
    function: str
    value: Any

    def __init__(self, kind: ErrorKind, function: str, value: Any):
        super().__init__(f"{function}({value}): {kind.description}")
        self.kind = kind
        self.function = function
        self.value = value


class ErrorReport(NamedTuple):
    """Single report recorded by :func:`report_error`."""

    function: str
    value: Any
    kind: ErrorKind


class ErrorContext:
    """Error channel shared by the elementary functions.

    Parameters
    ----------
    traps : bool, default=False
        If ``True``, :func:`report_error` raises :class:`MathError` instead of
        letting the caller return NaN.

    Attributes
    ----------
    traps : bool
    flags : set[ErrorKind]
        Kinds of errors reported since the last :meth:`clear_flags`.
    last_error : ErrorReport | None
        The most recent report.
    count : int
        Number of reports since the last :meth:`clear_flags`.
    """

    __slots__ = ("traps", "flags", "last_error", "count")
    traps: bool
    flags: set[ErrorKind]
    last_error: ErrorReport | None
    count: int

    def __init__(self, traps: bool = False):
        self.traps = traps
        self.flags = set()
        self.last_error = None
        self.count = 0

    def __repr__(self) -> str:
        flags = sorted(x.name for x in self.flags)
        return f"{type(self).__name__}(traps={self.traps!r}, flags={flags!r})"

    def clear_flags(self) -> None:
        """Forget every report recorded so far."""
        self.flags.clear()
        self.last_error = None
        self.count = 0

    def copy(self) -> "ErrorContext":
        """Return a context with the same settings and no recorded reports."""
        return self.__class__(traps=self.traps)


_current: contextvars.ContextVar[ErrorContext] = contextvars.ContextVar(
    "fwdiff_error_context"
)


def getcontext() -> ErrorContext:
    """Return the error context of the current thread, creating it if needed."""
    try:
        return _current.get()
    except LookupError:
        ctx = ErrorContext()
        _current.set(ctx)
        return ctx


def setcontext(ctx: ErrorContext) -> None:
    """Set the error context of the current thread."""
    if not isinstance(ctx, ErrorContext):
        raise TypeError("ctx must be an ErrorContext")

    _current.set(ctx)


@contextlib.contextmanager
def localcontext(
    ctx: ErrorContext | None = None, *, traps: bool | None = None
) -> Iterator[ErrorContext]:
    """Return a context manager that activates an error context for a block.

    Parameters
    ----------
    ctx : ErrorContext | None, optional
        Context to activate. If omitted, a fresh context inheriting the settings of
        the current one is used.
    traps : bool | None, optional
        Overrides the `traps` setting of the activated context.

    The previous context is restored on exit, even if the block raises.
    """
    if ctx is None:
        ctx = getcontext().copy()

    if traps is not None:
        ctx.traps = traps

    token = _current.set(ctx)

    try:
        yield ctx
    finally:
        _current.reset(token)


def report_error(function: str, value: Any, kind: ErrorKind) -> None:
    """Report a math error through the current error context.

    Parameters
    ----------
    function : str
        Name of the function that detected the violation.
    value : Any
        Value that triggered the violation.
    kind : ErrorKind

    Raises
    ------
    MathError
        If the current context traps errors.
    """
    ctx = getcontext()
    _logger.debug("%s(%r): %s", function, value, kind.description)
    ctx.flags.add(kind)
    ctx.last_error = ErrorReport(function, value, kind)
    ctx.count += 1

    if ctx.traps:
        raise MathError(kind, function, value)


def nan_like(x: Any) -> Any:
    """Return a quiet NaN of the same real type as `x`.

    Examples
    --------
    >>> nan_like(1.0)
    nan
    >>> nan_like(mpmath.mpf(1))
    mpf('nan')
    """
    if isinstance(x, mpmath.mpf):
        return mpmath.mpf("nan")

    return math.nan


def isnan(x: Any) -> bool:
    """Return ``True`` if `x` is NaN or a number with a NaN component.

    NaN is the only value that does not compare equal to itself, and every number
    type of :mod:`fwdiff.autodiff` compares componentwise, so this works for reals
    and dual numbers alike.
    """
    return not (x == x)
