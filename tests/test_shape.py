from __future__ import annotations

from jsonvalue import Kind, Value, has_shape, parse
from jsonvalue.shape import ShapeCheck, shape_fields


def test_shape_accepts_matching_object() -> None:
    value = Value({"id": 1, "name": "a", "tags": [], "extra": None})
    check = value.has_shape({"id": Kind.INTEGER, "name": Kind.STRING, "tags": Kind.ARRAY})
    assert check.ok
    assert check.error == ""
    assert bool(check) is True


def test_shape_reports_wrong_kind() -> None:
    value = Value({"a": 1.5})
    check = has_shape(value, {"a": Kind.INTEGER})
    assert not check
    assert check.error == 'bad type for a in {"a": 1.5}: expected integer, got number'


def test_shape_reports_missing_field() -> None:
    check = Value({"a": 1}).has_shape({"a": Kind.INTEGER, "b": Kind.STRING})
    assert check == ShapeCheck(False, 'missing field b in {"a": 1}')


def test_shape_missing_field_is_not_a_null_field() -> None:
    assert not Value({}).has_shape({"a": Kind.NUL})
    assert Value({"a": None}).has_shape({"a": Kind.NUL})


def test_shape_rejects_non_object() -> None:
    check = Value([1, 2]).has_shape({})
    assert check.error == "expected JSON object, got [1, 2]"
    assert Value().has_shape({}).error == "expected JSON object, got null"


def test_shape_accepts_pair_sequences_and_reports_first_mismatch() -> None:
    value = Value({"a": "x", "b": "y"})
    check = value.has_shape([("b", Kind.BOOL), ("a", Kind.BOOL)])
    assert check.error == 'bad type for b in {"a": "x", "b": "y"}: expected bool, got string'


def test_shape_integer_rejects_parsed_fractional_spelling() -> None:
    assert parse('{"n": 1}').has_shape({"n": Kind.INTEGER})
    assert not parse('{"n": 1.0}').has_shape({"n": Kind.INTEGER})
    assert parse('{"n": 1e0}').has_shape({"n": Kind.NUMBER})


def test_shape_fields_normalizes_carriers() -> None:
    assert shape_fields({"a": Kind.BOOL}) == [("a", Kind.BOOL)]
    assert shape_fields((("b", Kind.STRING),)) == [("b", Kind.STRING)]
    assert Value({}).has_shape([])
