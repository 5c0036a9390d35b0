from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from jsonvalue.invariants import never
from jsonvalue.kind import Kind

if TYPE_CHECKING:
    from jsonvalue.value import Value

LINE_SEPARATOR = chr(0x2028)
PARAGRAPH_SEPARATOR = chr(0x2029)

_ESCAPE_RE = re.compile(
    '[\\x00-\\x1f"\\\\' + LINE_SEPARATOR + PARAGRAPH_SEPARATOR + "]"
)
_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    # Valid in JSON, but terminate string literals in script languages.
    LINE_SEPARATOR: "\\u2028",
    PARAGRAPH_SEPARATOR: "\\u2029",
}


def _escape_match(match: re.Match[str]) -> str:
    ch = match.group()
    escaped = _ESCAPES.get(ch)
    if escaped is None:
        return f"\\u{ord(ch):04x}"
    return escaped


def escape_string(text: str) -> str:
    """Quote `text` as a JSON string literal."""
    return '"' + _ESCAPE_RE.sub(_escape_match, text) + '"'


def format_number(number: float) -> str:
    if not math.isfinite(number):
        return "null"
    return repr(number)


def dump_into(value: Value, out: list[str]) -> None:
    """Append the canonical text of `value` to `out`.

    Sort-contract note:
    - Object members are emitted in key-sorted order (the Value invariant).
    - Array order is preserved.
    """
    kind = value.kind
    if kind is Kind.NUL:
        out.append("null")
    elif kind is Kind.INTEGER:
        out.append(str(value.int_value()))
    elif kind is Kind.NUMBER:
        out.append(format_number(value.number_value()))
    elif kind is Kind.BOOL:
        out.append("true" if value.bool_value() else "false")
    elif kind is Kind.STRING:
        out.append(escape_string(value.string_value()))
    elif kind is Kind.ARRAY:
        out.append("[")
        for index, item in enumerate(value.array_items()):
            if index:
                out.append(", ")
            dump_into(item, out)
        out.append("]")
    elif kind is Kind.OBJECT:
        out.append("{")
        for index, (key, item) in enumerate(value.object_items().items()):
            if index:
                out.append(", ")
            out.append(escape_string(key))
            out.append(": ")
            dump_into(item, out)
        out.append("}")
    else:
        never("unknown value kind", kind=kind)


def dump_text(value: Value) -> str:
    out: list[str] = []
    dump_into(value, out)
    return "".join(out)
