"""jsonvalue package root."""

from jsonvalue.exceptions import NeverRaise, NeverThrown
from jsonvalue.invariants import never
from jsonvalue.kind import Kind
from jsonvalue.parser import (
    MAX_DEPTH,
    MultiParseOutcome,
    ParseErrorKind,
    ParseFailure,
    ParseOutcome,
    parse,
    parse_checked,
    parse_multi,
)
from jsonvalue.serialize import dump_text, escape_string
from jsonvalue.shape import ShapeCheck, has_shape
from jsonvalue.value import NULL, JsonConvertible, Value

__all__ = [
    "__version__",
    "Kind",
    "JsonConvertible",
    "MAX_DEPTH",
    "MultiParseOutcome",
    "NULL",
    "NeverRaise",
    "NeverThrown",
    "ParseErrorKind",
    "ParseFailure",
    "ParseOutcome",
    "ShapeCheck",
    "Value",
    "dump_text",
    "escape_string",
    "has_shape",
    "never",
    "parse",
    "parse_checked",
    "parse_multi",
]

__version__ = "0.1.0"
