"""One-level structural checks over object values.

A shape names the direct fields an object must carry and the exact `Kind` each
must have. The check does not descend into nested values.

Integer and Number are distinct kinds here even though they compare equal as
values. A field the parser read from ``1`` is INTEGER, while ``1.0`` or
``1e0`` is NUMBER, so a shape expecting ``Kind.INTEGER`` rejects ``1.5`` and
also rejects ``1.0``. Callers accepting any number should check
`Value.is_number` on the field instead of listing it in the shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Mapping, TypeAlias

from jsonvalue.kind import Kind

if TYPE_CHECKING:
    from jsonvalue.value import Value

Shape: TypeAlias = Mapping[str, Kind] | Iterable[tuple[str, Kind]]


@dataclass(frozen=True)
class ShapeCheck:
    ok: bool
    error: str = ""

    def __bool__(self) -> bool:
        return self.ok


def shape_fields(shape: Shape) -> list[tuple[str, Kind]]:
    if isinstance(shape, Mapping):
        return list(shape.items())
    return [(name, kind) for name, kind in shape]


def has_shape(value: Value, shape: Shape) -> ShapeCheck:
    if not value.is_object:
        return ShapeCheck(False, f"expected JSON object, got {value.to_text()}")
    for name, expected in shape_fields(shape):
        field = value.get(name)
        if field is None:
            return ShapeCheck(False, f"missing field {name} in {value.to_text()}")
        if field.kind is not expected:
            return ShapeCheck(
                False,
                f"bad type for {name} in {value.to_text()}: "
                f"expected {expected.label}, got {field.kind.label}",
            )
    return ShapeCheck(True)
