from __future__ import annotations

import logging

import pytest

from jsonvalue.order_contract import first_order_violation, is_ordered, sort_once


def test_sort_once_keeps_ordered_input() -> None:
    values = ["a", "b", "b", "c"]
    ordered = sort_once(values, source="test")
    assert ordered == values
    assert ordered is not values


def test_sort_once_sorts_on_regression(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="jsonvalue.order_contract")
    assert sort_once(iter(["b", "a", "c"]), source="test-source") == ["a", "b", "c"]
    assert "test-source" in caplog.text


def test_sort_once_uses_key() -> None:
    pairs = [("b", 1), ("a", 2)]
    assert sort_once(pairs, source="test", key=lambda item: item[0]) == [
        ("a", 2),
        ("b", 1),
    ]


def test_first_order_violation() -> None:
    assert first_order_violation([]) is None
    assert first_order_violation([1, 1, 2]) is None
    assert first_order_violation([1, 3, 2, 0]) == 2
    assert first_order_violation([("b", 0), ("a", 9)], key=lambda item: item[0]) == 1


def test_is_ordered() -> None:
    assert is_ordered([])
    assert is_ordered(iter([1, 2]))
    assert not is_ordered([2, 1])
    assert is_ordered([("a", 9), ("b", 0)], key=lambda item: item[0])
