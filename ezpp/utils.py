from __future__ import annotations

from typing import Callable, Generic, TypeVar, overload

import numpy as np


_OwnerT = TypeVar("_OwnerT")
_ValueT = TypeVar("_ValueT")


class lazyval(Generic[_OwnerT, _ValueT]):
    """Decorator to lazily compute and cache a value."""

    def __init__(self, fget: Callable[[_OwnerT], _ValueT]):
        self._fget = fget
        self._name: str | None = None
        self.__doc__ = fget.__doc__

    def __set_name__(self, owner: type[_OwnerT], name: str) -> None:
        self._name = name

    @overload
    def __get__(self, instance: None, owner: type[_OwnerT]) -> "lazyval[_OwnerT, _ValueT]":
        ...

    @overload
    def __get__(self, instance: _OwnerT, owner: type[_OwnerT]) -> _ValueT:
        ...

    def __get__(
        self,
        instance: _OwnerT | None,
        owner: type[_OwnerT],
    ) -> _ValueT | "lazyval[_OwnerT, _ValueT]":
        if instance is None:
            return self

        if self._name is None:
            raise AttributeError("lazyval descriptor is missing attribute name")

        value = self._fget(instance)
        vars(instance)[self._name] = value
        return value


class no_default:
    """Sentinel type; this should not be instantiated.

    This type is used so functions can tell the difference between no argument
    passed and an explicit value passed even if ``None`` is a valid value.

    Notes
    -----
    This is implemented as a type to make functions which use this as a default
    argument serializable.
    """

    def __new__(cls) -> "no_default":  # pragma: no cover - construction forbidden
        raise TypeError("cannot create instances of sentinel type")


def accuracy(count_300: int, count_100: int, count_50: int, count_miss: int) -> float:
    """Calculate osu! standard accuracy from discrete hit counts."""
    points_of_hits = count_300 * 300 + count_100 * 100 + count_50 * 50
    total_hits = count_300 + count_100 + count_50 + count_miss
    return points_of_hits / (total_hits * 300)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, breaking ties away from zero.

    ``round`` and ``np.round`` both round half to even which does not match
    the game's scoring code.
    """
    return int(np.copysign(np.floor(np.abs(value) + 0.5), value))
