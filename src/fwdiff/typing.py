"""
#############################
Typing (:mod:`fwdiff.typing`)
#############################

.. autoclass:: Real
    :show-inheritance:
    :no-members:

"""

from abc import abstractmethod
from typing import Protocol, Self


class Real(Protocol):
    """Coefficient type of the dual numbers, such as :class:`float`,
    :class:`int`, or :class:`mpmath.mpf`.

    Arithmetic is mixed with Python integers (``x * 0 + 1`` builds a unit of the
    same type), and the domain checks order the real part against integers.
    """

    __slots__ = ()

    @abstractmethod
    def __add__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __sub__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __mul__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __truediv__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __radd__(self, lhs: int) -> Self: ...

    @abstractmethod
    def __rsub__(self, lhs: int) -> Self: ...

    @abstractmethod
    def __rmul__(self, lhs: int) -> Self: ...

    @abstractmethod
    def __rtruediv__(self, lhs: int) -> Self: ...

    @abstractmethod
    def __neg__(self) -> Self: ...

    @abstractmethod
    def __lt__(self, rhs: Self | int) -> bool: ...

    @abstractmethod
    def __le__(self, rhs: Self | int) -> bool: ...
