"""Algebraic structures that drive matrix arithmetic.

A matrix never knows what "addition" means for its elements. It asks its
algebra. This module defines the two shapes of algebra the matrix layer
understands:

1. Ring: (nil, one, plus, times)
2. Field: Ring + (minus, div)

Semirings (Boolean OR/AND, tropical min-plus) are modelled as Rings: nothing
in the matrix layer needs additive inverses unless subtraction is requested,
and subtraction is only offered when the algebra is a Field.

Preconditions (documented, never checked):
    - plus and times are associative
    - nil is the identity of plus, one is the identity of times
    - times distributes over plus
Matrix identities such as (A + B) + C == A + (B + C) and A * I == A hold only
when the supplied operators satisfy these laws.
"""

from dataclasses import dataclass
from functools import reduce
from typing import Callable, Generic, Iterable, TypeVar

from kaliningraph.exceptions import UnsupportedOperation

T = TypeVar("T")


@dataclass(frozen=True)
class Ring(Generic[T]):
    """Ring (or semiring) over elements of type T.

    Attributes:
        nil: Additive identity
        one: Multiplicative identity
        plus: Binary addition (T, T) -> T
        times: Binary multiplication (T, T) -> T
    """

    nil: T
    one: T
    plus: Callable[[T, T], T]
    times: Callable[[T, T], T]

    def sum(self, items: Iterable[T]) -> T:
        """Fold items with plus, starting from nil."""
        return reduce(self.plus, items, self.nil)

    def product(self, items: Iterable[T]) -> T:
        """Fold items with times, starting from one."""
        return reduce(self.times, items, self.one)


@dataclass(frozen=True)
class Field(Ring[T]):
    """Ring with subtraction and division.

    Division by nil is whatever the supplied div does; the integer field's
    div always raises.
    """

    minus: Callable[[T, T], T]
    div: Callable[[T, T], T]


@dataclass(frozen=True)
class UndefinedAlgebra(Ring[T]):
    """Marker type for the placeholder returned by undefined_algebra.

    Its nil and one are both the sample element it was built from, so they
    must never be used to build identities.
    """


def _fail(a, b):
    raise UnsupportedOperation(
        "No algebra supplied: arithmetic is undefined for this matrix"
    )


def undefined_algebra(nil: T) -> Ring[T]:
    """Placeholder algebra for containers that carry no arithmetic.

    Construction succeeds; any attempt to add or multiply fails at the point
    of use with UnsupportedOperation.
    """
    return UndefinedAlgebra(nil=nil, one=nil, plus=_fail, times=_fail)


def is_field(algebra: Ring) -> bool:
    """True if the algebra offers minus and div."""
    return isinstance(algebra, Field)


def require_arithmetic(algebra: Ring) -> None:
    """Raise UnsupportedOperation if algebra is the undefined placeholder."""
    if isinstance(algebra, UndefinedAlgebra):
        _fail(algebra.nil, algebra.nil)
