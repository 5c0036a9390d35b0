from __future__ import annotations

from enum import Enum


class Kind(Enum):
    """Tag of a JSON value.

    Declaration order is significant: it is the cross-kind ordering used by
    the comparator (with INTEGER and NUMBER collapsed into one numeric class).
    """

    NUL = 0
    INTEGER = 1
    NUMBER = 2
    BOOL = 3
    STRING = 4
    ARRAY = 5
    OBJECT = 6

    @property
    def is_numeric(self) -> bool:
        return self is Kind.INTEGER or self is Kind.NUMBER

    @property
    def order_rank(self) -> int:
        if self is Kind.NUMBER:
            return Kind.INTEGER.value
        return self.value

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[Kind, str] = {
    Kind.NUL: "null",
    Kind.INTEGER: "integer",
    Kind.NUMBER: "number",
    Kind.BOOL: "bool",
    Kind.STRING: "string",
    Kind.ARRAY: "array",
    Kind.OBJECT: "object",
}
