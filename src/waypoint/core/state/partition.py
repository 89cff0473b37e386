"""Stable two-way partition of a sequence."""
from __future__ import annotations

from typing import Callable, Iterable, List, Tuple, TypeVar

T = TypeVar("T")


def partition(items: Iterable[T], predicate: Callable[[T], bool]) -> Tuple[List[T], List[T]]:
    """Split ``items`` by ``predicate``, keeping relative order in both halves.

    Returns:
        ``(selected, rest)`` where ``selected`` holds the items for which the
        predicate is true.
    """
    selected: List[T] = []
    rest: List[T] = []
    for item in items:
        if predicate(item):
            selected.append(item)
        else:
            rest.append(item)
    return selected, rest


__all__ = ["partition"]
