"""Common utility types and functions for the treemap library.

This module provides the ordering type, comparator helpers and small
mixins shared by the tree implementation.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from enum import Enum
from typing import Any, Callable, Generator, List

__all__ = [
    "Comparator",
    "Impossible",
    "Iterating",
    "Ordering",
    "Sized",
    "compare",
    "key_by",
    "natural_compare",
    "reverse",
]


class Impossible(Exception):
    """Exception raised when encountering theoretically impossible states.

    Used to indicate internal consistency violations in tree operations.
    """

    pass


class Ordering(Enum):
    """Enumeration representing the result of a comparison operation."""

    Lt = -1
    Eq = 0
    Gt = 1

    @staticmethod
    def of(result: Any) -> Ordering:
        """Normalize a three-way comparison result.

        Args:
            result: An Ordering, or any value comparable with 0 whose sign
                gives the order (int, float, Fraction, Decimal and so on).

        Returns:
            The Ordering with the same sign.

        Raises:
            TypeError: If the result cannot be compared with 0.
        """
        if isinstance(result, Ordering):
            return result
        if result < 0:
            return Ordering.Lt
        elif result > 0:
            return Ordering.Gt
        else:
            return Ordering.Eq


type Comparator[T] = Callable[[T, T], Any]


class Sized(metaclass=ABCMeta):
    @abstractmethod
    def size(self) -> int: ...

    def null(self) -> bool:
        return self.size() == 0

    def __bool__(self) -> bool:
        return not self.null()

    def __len__(self) -> int:
        return self.size()


class Iterating[U](metaclass=ABCMeta):
    @abstractmethod
    def iter(self) -> Generator[U]: ...

    def list(self) -> List[U]:
        return list(self.iter())


def natural_compare(a: Any, b: Any) -> int:
    """Compare two values by their own ordering.

    Uses the objects' __eq__ and __lt__ methods, so any type with a
    consistent natural order works.

    Args:
        a: First value to compare.
        b: Second value to compare.

    Returns:
        -1, 0 or 1 as a is less than, equal to or greater than b.
    """
    if a == b:
        return 0
    elif a < b:
        return -1
    else:
        return 1


def compare[T](a: T, b: T, comparator: Comparator[T] = natural_compare) -> Ordering:
    """Compare two values and return their ordering relationship.

    Args:
        a: First value to compare.
        b: Second value to compare.
        comparator: Three-way comparator to use, natural order by default.

    Returns:
        Ordering indicating the relationship between a and b.
    """
    return Ordering.of(comparator(a, b))


def reverse[T](comparator: Comparator[T] = natural_compare) -> Comparator[T]:
    """Flip a comparator so that it orders values descending.

    Example:
        >>> from treemap.common import compare, reverse
        >>> compare(1, 2)
        <Ordering.Lt: -1>
        >>> compare(1, 2, reverse())
        <Ordering.Gt: 1>
    """

    def flipped(a: T, b: T) -> Ordering:
        result = Ordering.of(comparator(a, b))
        if result == Ordering.Lt:
            return Ordering.Gt
        elif result == Ordering.Gt:
            return Ordering.Lt
        else:
            return Ordering.Eq

    return flipped


def key_by[T, S](
    fn: Callable[[T], S], comparator: Comparator[S] = natural_compare
) -> Comparator[T]:
    """Build a comparator that orders values by a projection.

    Args:
        fn: Projection applied to both values before comparing.
        comparator: Comparator for the projected values.

    Returns:
        A comparator over the original values.

    Example:
        >>> from treemap.common import compare, key_by
        >>> compare("pear", "fig", key_by(len))
        <Ordering.Gt: 1>
    """

    def projected(a: T, b: T) -> Any:
        return comparator(fn(a), fn(b))

    return projected
