"""Structural equality and total ordering over values.

Integer and Number share one numeric ordering class and compare by numeric
value, so ``Value(42) == Value(42.0)``. Every other pair of kinds orders by
`Kind` declaration order first and by payload second:

- bools: ``False < True``
- strings: by code point, which is the same order as their UTF-8 bytes
- arrays: lexicographically, element by element
- objects: lexicographically over the key-sorted ``(key, value)`` pairs

NaN payloads are never equal, as with Python floats, but the ordering places
them after every other number and ties them with each other, so sorting a
NaN-bearing tree is still deterministic.
"""

from __future__ import annotations

import math
from functools import cmp_to_key
from typing import TYPE_CHECKING, Iterable

from jsonvalue.invariants import never
from jsonvalue.kind import Kind

if TYPE_CHECKING:
    from jsonvalue.value import Value


def _numeric(value: Value) -> int | float:
    if value.kind is Kind.INTEGER:
        return value.int_value()
    return value.number_value()


def _nan_rank(number: int | float) -> int:
    return 1 if isinstance(number, float) and math.isnan(number) else 0


def _compare_numbers(left: int | float, right: int | float) -> int:
    left_rank = _nan_rank(left)
    right_rank = _nan_rank(right)
    if left_rank or right_rank:
        return _cmp(left_rank, right_rank)
    return _cmp(left, right)


def values_equal(left: Value, right: Value) -> bool:
    if left.is_number and right.is_number:
        return _numeric(left) == _numeric(right)
    kind = left.kind
    if kind is not right.kind:
        return False
    if kind is Kind.NUL:
        return True
    if kind is Kind.BOOL:
        return left.bool_value() == right.bool_value()
    if kind is Kind.STRING:
        return left.string_value() == right.string_value()
    if kind is Kind.ARRAY:
        left_items = left.array_items()
        right_items = right.array_items()
        if len(left_items) != len(right_items):
            return False
        return all(
            values_equal(left_item, right_item)
            for left_item, right_item in zip(left_items, right_items)
        )
    if kind is Kind.OBJECT:
        left_members = left.object_items()
        right_members = right.object_items()
        if len(left_members) != len(right_members):
            return False
        for (left_key, left_item), (right_key, right_item) in zip(
            left_members.items(), right_members.items()
        ):
            if left_key != right_key or not values_equal(left_item, right_item):
                return False
        return True
    never("unknown value kind", kind=kind)


def compare_values(left: Value, right: Value) -> int:
    """Three-way comparison: negative, zero or positive."""
    if left.is_number and right.is_number:
        return _compare_numbers(_numeric(left), _numeric(right))
    left_rank = left.kind.order_rank
    right_rank = right.kind.order_rank
    if left_rank != right_rank:
        return _cmp(left_rank, right_rank)
    kind = left.kind
    if kind is Kind.NUL:
        return 0
    if kind is Kind.BOOL:
        return _cmp(left.bool_value(), right.bool_value())
    if kind is Kind.STRING:
        return _cmp(left.string_value(), right.string_value())
    if kind is Kind.ARRAY:
        return _compare_sequences(left.array_items(), right.array_items())
    if kind is Kind.OBJECT:
        left_members = list(left.object_items().items())
        right_members = list(right.object_items().items())
        for (left_key, left_item), (right_key, right_item) in zip(
            left_members, right_members
        ):
            if left_key != right_key:
                return _cmp(left_key, right_key)
            result = compare_values(left_item, right_item)
            if result:
                return result
        return _cmp(len(left_members), len(right_members))
    never("unknown value kind", kind=kind)


def value_less(left: Value, right: Value) -> bool:
    return compare_values(left, right) < 0


def sorted_values(values: Iterable[Value], *, reverse: bool = False) -> list[Value]:
    return sorted(values, key=cmp_to_key(compare_values), reverse=reverse)


def _compare_sequences(left: tuple[Value, ...], right: tuple[Value, ...]) -> int:
    for left_item, right_item in zip(left, right):
        result = compare_values(left_item, right_item)
        if result:
            return result
    return _cmp(len(left), len(right))


def _cmp(left, right) -> int:
    return (left > right) - (left < right)
