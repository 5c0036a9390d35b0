"""Recursive-descent JSON parser.

Every production returns either the parsed result or a `ParseFailure`. A caller
that receives a failure returns it unchanged, so the first failure reached is
the one reported and the rest of the input is never examined.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from jsonvalue.invariants import require
from jsonvalue.value import Value

logger = logging.getLogger(__name__)

MAX_DEPTH = 200

# Decimal digits that always fit a signed 64-bit integer.
INTEGER_DIGITS_BUDGET = 18

_WHITESPACE_RE = re.compile(r"[ \t\n\r]*")
_PLAIN_RUN_RE = re.compile(r'[^"\\\x00-\x1f]+')
_HEX4_RE = re.compile(r"[0-9a-fA-F]{4}")
_SIMPLE_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_DIGITS = frozenset("0123456789")
_NONZERO_DIGITS = frozenset("123456789")


class ParseErrorKind(str, Enum):
    UNEXPECTED_END = "unexpected_end"
    INVALID_ENCODING = "invalid_encoding"
    INVALID_ESCAPE = "invalid_escape"
    UNESCAPED_CONTROL = "unescaped_control"
    INVALID_NUMBER = "invalid_number"
    NESTING_TOO_DEEP = "nesting_too_deep"
    EXPECTED_TOKEN = "expected_token"
    TRAILING_GARBAGE = "trailing_garbage"


@dataclass(frozen=True)
class ParseFailure:
    kind: ParseErrorKind
    message: str
    offset: int


@dataclass(frozen=True)
class ParserLimits:
    max_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        depth = int(self.max_depth)
        require(depth > 0, "invalid parser max_depth", max_depth=self.max_depth)
        object.__setattr__(self, "max_depth", depth)


@dataclass(frozen=True)
class ParseOutcome:
    value: Value
    failure: ParseFailure | None = None

    @property
    def failed(self) -> bool:
        return self.failure is not None

    @property
    def error(self) -> str:
        return "" if self.failure is None else self.failure.message


@dataclass(frozen=True)
class MultiParseOutcome:
    values: tuple[Value, ...]
    failure: ParseFailure | None = None

    @property
    def failed(self) -> bool:
        return self.failure is not None

    @property
    def error(self) -> str:
        return "" if self.failure is None else self.failure.message


_Parsed = Union[Value, ParseFailure]


def describe_char(ch: str) -> str:
    """Format one input character for an error message."""
    if not ch:
        return "end of input"
    code = ord(ch)
    if 0x20 <= code <= 0x7F:
        return f"'{ch}' ({code})"
    return f"({code})"


class _Parser:
    def __init__(self, text: str, *, limits: ParserLimits) -> None:
        self.text = text
        self.index = 0
        self.limits = limits

    def fail(self, kind: ParseErrorKind, message: str, *, offset: int | None = None) -> ParseFailure:
        return ParseFailure(
            kind=kind,
            message=message,
            offset=self.index if offset is None else offset,
        )

    def at_end(self) -> bool:
        return self.index >= len(self.text)

    def peek(self) -> str:
        return self.text[self.index] if self.index < len(self.text) else ""

    def skip_whitespace(self) -> None:
        self.index = _WHITESPACE_RE.match(self.text, self.index).end()

    def next_token(self) -> str | ParseFailure:
        self.skip_whitespace()
        if self.at_end():
            return self.fail(ParseErrorKind.UNEXPECTED_END, "unexpected end of input")
        ch = self.text[self.index]
        self.index += 1
        return ch

    def parse_document(self) -> _Parsed:
        """Parse one top-level value.

        Each nesting level costs two interpreter frames, so a generous
        `max_depth` can exhaust the stack before the depth guard trips; that
        case is reported as the same nesting failure.
        """
        start = self.index
        try:
            return self.parse_value(0)
        except RecursionError:
            return self.fail(
                ParseErrorKind.NESTING_TOO_DEEP,
                "exceeded maximum nesting depth",
                offset=start,
            )

    def parse_value(self, depth: int) -> _Parsed:
        ch = self.next_token()
        if isinstance(ch, ParseFailure):
            return ch
        if ch == "-" or ch in _DIGITS:
            self.index -= 1
            return self.parse_number()
        if ch == "t":
            return self.expect("true", Value.boolean(True))
        if ch == "f":
            return self.expect("false", Value.boolean(False))
        if ch == "n":
            return self.expect("null", Value.null())
        if ch == '"':
            text = self.parse_string()
            if isinstance(text, ParseFailure):
                return text
            return Value.string(text)
        if ch == "{":
            return self.parse_object(depth + 1)
        if ch == "[":
            return self.parse_array(depth + 1)
        return self.fail(
            ParseErrorKind.EXPECTED_TOKEN,
            f"expected value, got {describe_char(ch)}",
            offset=self.index - 1,
        )

    def expect(self, literal: str, result: Value) -> _Parsed:
        start = self.index - 1
        if self.text.startswith(literal, start):
            self.index = start + len(literal)
            return result
        got = self.text[start:start + len(literal)]
        return self.fail(
            ParseErrorKind.EXPECTED_TOKEN,
            f"parse error: expected {literal}, got {got}",
            offset=start,
        )

    def parse_number(self) -> _Parsed:
        text = self.text
        start = self.index
        if self.peek() == "-":
            self.index += 1
        digits_start = self.index

        ch = self.peek()
        if ch == "0":
            self.index += 1
            if self.peek() in _DIGITS:
                return self.fail(
                    ParseErrorKind.INVALID_NUMBER,
                    "leading 0s not permitted in numbers",
                )
        elif ch in _NONZERO_DIGITS:
            self.index += 1
            self._skip_digits()
        elif not ch:
            return self.fail(ParseErrorKind.UNEXPECTED_END, "unexpected end of input in number")
        else:
            return self.fail(
                ParseErrorKind.INVALID_NUMBER,
                f"invalid {describe_char(ch)} in number",
            )

        ch = self.peek()
        if ch not in (".", "e", "E") and self.index - digits_start <= INTEGER_DIGITS_BUDGET:
            return Value.integer(int(text[start:self.index]))

        if self.peek() == ".":
            self.index += 1
            if not self._has_digit():
                return self.fail(
                    ParseErrorKind.INVALID_NUMBER,
                    "at least one digit required in fractional part",
                )
            self._skip_digits()

        if self.peek() in ("e", "E"):
            self.index += 1
            if self.peek() in ("+", "-"):
                self.index += 1
            if not self._has_digit():
                return self.fail(
                    ParseErrorKind.INVALID_NUMBER,
                    "at least one digit required in exponent",
                )
            self._skip_digits()

        return Value.number(float(text[start:self.index]))

    def _has_digit(self) -> bool:
        return self.peek() in _DIGITS

    def _skip_digits(self) -> None:
        while self._has_digit():
            self.index += 1

    def parse_string(self) -> str | ParseFailure:
        text = self.text
        chunks: list[str] = []
        # A \u escape is held back until the next token shows whether it is
        # the high half of a surrogate pair.
        pending = -1
        while True:
            if self.at_end():
                return self.fail(ParseErrorKind.UNEXPECTED_END, "unexpected end of input in string")
            run = _PLAIN_RUN_RE.match(text, self.index)
            if run is not None:
                if pending >= 0:
                    chunks.append(chr(pending))
                    pending = -1
                chunks.append(run.group())
                self.index = run.end()
                continue

            ch = text[self.index]
            self.index += 1
            if ch == '"':
                if pending >= 0:
                    chunks.append(chr(pending))
                return "".join(chunks)
            if ch != "\\":
                return self.fail(
                    ParseErrorKind.UNESCAPED_CONTROL,
                    f"unescaped {describe_char(ch)} in string",
                    offset=self.index - 1,
                )

            if self.at_end():
                return self.fail(ParseErrorKind.UNEXPECTED_END, "unexpected end of input in string")
            ch = text[self.index]
            self.index += 1

            if ch == "u":
                digits = text[self.index:self.index + 4]
                if _HEX4_RE.fullmatch(digits) is None:
                    return self.fail(ParseErrorKind.INVALID_ESCAPE, f"bad \\u escape: {digits}")
                codepoint = int(digits, 16)
                self.index += 4
                if 0xD800 <= pending <= 0xDBFF and 0xDC00 <= codepoint <= 0xDFFF:
                    chunks.append(
                        chr((((pending - 0xD800) << 10) | (codepoint - 0xDC00)) + 0x10000)
                    )
                    pending = -1
                else:
                    # Unpaired surrogates are kept as lone code points.
                    if pending >= 0:
                        chunks.append(chr(pending))
                    pending = codepoint
                continue

            if pending >= 0:
                chunks.append(chr(pending))
                pending = -1
            simple = _SIMPLE_ESCAPES.get(ch)
            if simple is None:
                return self.fail(
                    ParseErrorKind.INVALID_ESCAPE,
                    f"invalid escape character {describe_char(ch)}",
                    offset=self.index - 1,
                )
            chunks.append(simple)

    def _check_depth(self, depth: int) -> ParseFailure | None:
        if depth > self.limits.max_depth:
            return self.fail(
                ParseErrorKind.NESTING_TOO_DEEP,
                "exceeded maximum nesting depth",
                offset=self.index - 1,
            )
        return None

    def parse_object(self, depth: int) -> _Parsed:
        too_deep = self._check_depth(depth)
        if too_deep is not None:
            return too_deep
        members: dict[str, Value] = {}
        ch = self.next_token()
        if isinstance(ch, ParseFailure):
            return ch
        if ch == "}":
            return Value._from_members(members)
        while True:
            if ch != '"':
                return self.fail(
                    ParseErrorKind.EXPECTED_TOKEN,
                    f"expected '\"' in object, got {describe_char(ch)}",
                    offset=self.index - 1,
                )
            key = self.parse_string()
            if isinstance(key, ParseFailure):
                return key
            ch = self.next_token()
            if isinstance(ch, ParseFailure):
                return ch
            if ch != ":":
                return self.fail(
                    ParseErrorKind.EXPECTED_TOKEN,
                    f"expected ':' in object, got {describe_char(ch)}",
                    offset=self.index - 1,
                )
            item = self.parse_value(depth)
            if isinstance(item, ParseFailure):
                return item
            # Duplicate keys: last write wins.
            members[key] = item
            ch = self.next_token()
            if isinstance(ch, ParseFailure):
                return ch
            if ch == "}":
                return Value._from_members(members)
            if ch != ",":
                return self.fail(
                    ParseErrorKind.EXPECTED_TOKEN,
                    f"expected ',' in object, got {describe_char(ch)}",
                    offset=self.index - 1,
                )
            ch = self.next_token()
            if isinstance(ch, ParseFailure):
                return ch

    def parse_array(self, depth: int) -> _Parsed:
        too_deep = self._check_depth(depth)
        if too_deep is not None:
            return too_deep
        items: list[Value] = []
        self.skip_whitespace()
        if self.peek() == "]":
            self.index += 1
            return Value._from_items(items)
        while True:
            item = self.parse_value(depth)
            if isinstance(item, ParseFailure):
                return item
            items.append(item)
            ch = self.next_token()
            if isinstance(ch, ParseFailure):
                return ch
            if ch == "]":
                return Value._from_items(items)
            if ch != ",":
                return self.fail(
                    ParseErrorKind.EXPECTED_TOKEN,
                    f"expected ',' in list, got {describe_char(ch)}",
                    offset=self.index - 1,
                )


def _decode(text: str | bytes) -> str | ParseFailure:
    if isinstance(text, str):
        return text
    try:
        return bytes(text).decode("utf-8", "surrogatepass")
    except UnicodeDecodeError as exc:
        return ParseFailure(
            kind=ParseErrorKind.INVALID_ENCODING,
            message=f"invalid UTF-8 in input at byte {exc.start}",
            offset=exc.start,
        )


def _log_failure(failure: ParseFailure) -> None:
    logger.debug(
        "parse failed (%s) at offset %d: %s",
        failure.kind.value,
        failure.offset,
        failure.message,
    )


def parse_checked(text: str | bytes, *, max_depth: int = MAX_DEPTH) -> ParseOutcome:
    """Parse exactly one document.

    On failure the outcome holds a Null value and the first failure; check
    `outcome.failed`, not the value's kind, since ``null`` parses to Null too.
    """
    limits = ParserLimits(max_depth=max_depth)
    decoded = _decode(text)
    if isinstance(decoded, ParseFailure):
        _log_failure(decoded)
        return ParseOutcome(value=Value.null(), failure=decoded)
    parser = _Parser(decoded, limits=limits)
    result = parser.parse_document()
    if isinstance(result, ParseFailure):
        _log_failure(result)
        return ParseOutcome(value=Value.null(), failure=result)
    parser.skip_whitespace()
    if not parser.at_end():
        failure = parser.fail(
            ParseErrorKind.TRAILING_GARBAGE,
            f"unexpected trailing {describe_char(parser.peek())}",
        )
        _log_failure(failure)
        return ParseOutcome(value=Value.null(), failure=failure)
    return ParseOutcome(value=result)


def parse(text: str | bytes, *, max_depth: int = MAX_DEPTH) -> Value:
    """Parse one document, returning Null on failure and discarding the error."""
    return parse_checked(text, max_depth=max_depth).value


def parse_multi(text: str | bytes, *, max_depth: int = MAX_DEPTH) -> MultiParseOutcome:
    """Parse a stream of concatenated documents.

    Documents need no separator beyond optional whitespace. Parsing stops at the
    first failure; the values read so far are kept and followed by the Null the
    failing document produced.
    """
    limits = ParserLimits(max_depth=max_depth)
    decoded = _decode(text)
    if isinstance(decoded, ParseFailure):
        _log_failure(decoded)
        return MultiParseOutcome(values=(), failure=decoded)
    parser = _Parser(decoded, limits=limits)
    values: list[Value] = []
    parser.skip_whitespace()
    while not parser.at_end():
        result = parser.parse_document()
        if isinstance(result, ParseFailure):
            _log_failure(result)
            values.append(Value.null())
            return MultiParseOutcome(values=tuple(values), failure=result)
        values.append(result)
        parser.skip_whitespace()
    return MultiParseOutcome(values=tuple(values))
