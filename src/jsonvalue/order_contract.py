"""Canonical ordering for object members.

Object payloads are stored in key order. Members are canonicalized once, where
a carrier becomes an object payload, and every later reader (the serializer,
the comparator, `Value.keys()`) trusts the stored order instead of sorting
again.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def first_order_violation(
    values: Sequence[T],
    *,
    key: Callable[[T], Any] | None = None,
) -> int | None:
    """Index of the first item that sorts before its predecessor, if any."""
    previous: Any = None
    for index, item in enumerate(values):
        marker = item if key is None else key(item)
        if index and previous > marker:
            return index
        previous = marker
    return None


def is_ordered(values: Iterable[T], *, key: Callable[[T], Any] | None = None) -> bool:
    return first_order_violation(list(values), key=key) is None


def sort_once(
    values: Iterable[T],
    *,
    source: str,
    key: Callable[[T], Any] | None = None,
) -> list[T]:
    """Return `values` in order, sorting only when the caller's order regresses.

    `source` names the canonicalization point; it is carried for log context.
    """
    items = list(values)
    if first_order_violation(items, key=key) is None:
        return items
    logger.debug("sorting %d unordered members at %s", len(items), source)
    return sorted(items, key=key)
