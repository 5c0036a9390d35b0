"""Tagged JSON value model.

A `Value` holds exactly one `Kind` and a payload consistent with it:

=========  ==========================================
Kind       payload
=========  ==========================================
NUL        ``None``
INTEGER    ``int`` within the signed 64-bit range
NUMBER     ``float``
BOOL       ``bool``
STRING     ``str``
ARRAY      ``list[Value]`` (insertion order)
OBJECT     ``dict[str, Value]`` read in sorted key order
=========  ==========================================

Container payloads are owned: building a value from other values deep-clones
them, `copy()` deep-clones, and `take()` moves the payload out and leaves the
source Null. No two live values share a payload.

Reads never fail. Accessors of the wrong kind return neutral defaults, and
indexing a missing element returns the shared, immutable `NULL` sentinel.
`get()` is the variant that reports absence as ``None`` instead.

Mutation goes through `set()`, `entry()` and `append()` only. Each vivifies a
Null receiver into the container it needs and reports failure (``False`` or
``None``) without mutating when the receiver holds another kind.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from functools import total_ordering
from types import MappingProxyType
from typing import Iterator, TypeAlias, Union

from jsonvalue import compare, serialize
from jsonvalue.json_types import NativeInput, NativeValue
from jsonvalue.kind import Kind
from jsonvalue.order_contract import sort_once
from jsonvalue.shape import Shape, ShapeCheck, has_shape

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_EMPTY_MEMBERS: Mapping[str, "Value"] = MappingProxyType({})


class JsonConvertible(ABC):
    """Capability of external types that know their own JSON form.

    Types opt in by subclassing (or ``JsonConvertible.register``); a type that
    merely happens to define ``to_json`` is not converted.
    """

    @abstractmethod
    def to_json(self) -> "ValueSource":
        ...


ValueSource: TypeAlias = Union[
    "Value",
    JsonConvertible,
    None,
    bool,
    int,
    float,
    str,
    Mapping[str, "ValueSource"],
    Iterable["ValueSource"],
]


def _checked_int(number: int) -> int:
    if number < INT64_MIN or number > INT64_MAX:
        raise OverflowError(f"integer {number} does not fit in a signed 64-bit value")
    return number


def _member_key(item: tuple[str, Value]) -> str:
    return item[0]


class _Members(dict):
    """Object payload whose iteration order is sorted key order.

    An insert that lands before the current last key only clears `ordered`;
    `canonical()` restores key order in place on the next read, so a run of
    out-of-order inserts costs one sort.
    """

    __slots__ = ("ordered",)

    def __init__(self, items: Iterable[tuple[str, Value]] = ()) -> None:
        super().__init__(items)
        self.ordered = True

    def put(self, key: str, item: Value) -> None:
        if self.ordered and self and key not in self and key < next(reversed(self)):
            self.ordered = False
        self[key] = item

    def canonical(self) -> _Members:
        if not self.ordered:
            items = sort_once(self.items(), source="value.object_insert", key=_member_key)
            self.clear()
            self.update(items)
            self.ordered = True
        return self


class _MemberView(Mapping):
    """Read-only, always key-ordered view of an object's members."""

    __slots__ = ("_members",)

    def __init__(self, members: _Members) -> None:
        self._members = members

    def __getitem__(self, key: str) -> Value:
        return self._members[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._members.canonical())

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self)!r})"


def _sorted_members(members: Mapping[str, Value] | Iterable[tuple[str, Value]]) -> _Members:
    items = members.items() if isinstance(members, Mapping) else members
    # Lexical key order defines canonical object identity.
    return _Members(sort_once(items, source="value.object_members", key=_member_key))


def _coerce(source: object) -> tuple[Kind, object]:
    if source is None:
        return Kind.NUL, None
    if isinstance(source, Value):
        return source._kind, _clone_payload(source)
    if isinstance(source, bool):
        return Kind.BOOL, source
    if isinstance(source, int):
        return Kind.INTEGER, _checked_int(int(source))
    if isinstance(source, float):
        return Kind.NUMBER, float(source)
    if isinstance(source, str):
        return Kind.STRING, str(source)
    if isinstance(source, JsonConvertible):
        return _coerce(source.to_json())
    if isinstance(source, Mapping):
        members: dict[str, Value] = {}
        for key, item in source.items():
            if not isinstance(key, str):
                raise TypeError(
                    f"object keys must be str, got {type(key).__name__}"
                )
            members[key] = Value(item)
        return Kind.OBJECT, _sorted_members(members)
    if isinstance(source, (bytes, bytearray, memoryview)):
        raise TypeError(f"cannot build a JSON value from {type(source).__name__}")
    if isinstance(source, (set, frozenset)):
        return Kind.ARRAY, compare.sorted_values(Value(item) for item in source)
    if isinstance(source, Iterable):
        return Kind.ARRAY, [Value(item) for item in source]
    raise TypeError(f"cannot build a JSON value from {type(source).__name__}")


def _clone_payload(value: Value) -> object:
    kind = value._kind
    if kind is Kind.ARRAY:
        return [item.copy() for item in value._payload]
    if kind is Kind.OBJECT:
        return _Members((key, item.copy()) for key, item in value._payload.canonical().items())
    return value._payload


@total_ordering
class Value:
    __slots__ = ("_kind", "_payload", "_frozen")

    def __init__(self, source: ValueSource = None) -> None:
        kind, payload = _coerce(source)
        self._kind = kind
        self._payload = payload
        self._frozen = False

    @classmethod
    def _make(cls, kind: Kind, payload: object) -> Value:
        value = cls.__new__(cls)
        value._kind = kind
        value._payload = payload
        value._frozen = False
        return value

    @classmethod
    def _from_members(cls, members: dict[str, Value]) -> Value:
        """Adopt freshly built members without cloning them."""
        return cls._make(Kind.OBJECT, _sorted_members(members))

    @classmethod
    def _from_items(cls, items: list[Value]) -> Value:
        """Adopt freshly built items without cloning them."""
        return cls._make(Kind.ARRAY, items)

    # Named constructors.

    @classmethod
    def null(cls) -> Value:
        return cls._make(Kind.NUL, None)

    @classmethod
    def integer(cls, number: int) -> Value:
        return cls._make(Kind.INTEGER, _checked_int(int(number)))

    @classmethod
    def number(cls, number: float) -> Value:
        return cls._make(Kind.NUMBER, float(number))

    @classmethod
    def boolean(cls, flag: bool) -> Value:
        return cls._make(Kind.BOOL, bool(flag))

    @classmethod
    def string(cls, text: str) -> Value:
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")
        return cls._make(Kind.STRING, text)

    @classmethod
    def array(cls, items: Iterable[ValueSource] = ()) -> Value:
        return cls._make(Kind.ARRAY, [Value(item) for item in items])

    @classmethod
    def object(cls, members: Mapping[str, ValueSource] | Iterable[tuple[str, ValueSource]] = ()) -> Value:
        pairs = members.items() if isinstance(members, Mapping) else members
        built: dict[str, Value] = {}
        for key, item in pairs:
            if not isinstance(key, str):
                raise TypeError(f"object keys must be str, got {type(key).__name__}")
            built[key] = Value(item)
        return cls._from_members(built)

    @classmethod
    def from_native(cls, payload: NativeInput) -> Value:
        """Build a value from plain JSON data (what `json.loads` returns).

        Unlike the general constructor this accepts only dict, list, tuple,
        str, int, float, bool and None.
        """
        if payload is None or isinstance(payload, (bool, int, float, str)):
            return cls(payload)
        if isinstance(payload, dict):
            members: dict[str, Value] = {}
            for key, item in payload.items():
                if not isinstance(key, str):
                    raise TypeError(f"object keys must be str, got {type(key).__name__}")
                members[key] = cls.from_native(item)
            return cls._from_members(members)
        if isinstance(payload, (list, tuple)):
            return cls._from_items([cls.from_native(item) for item in payload])
        raise TypeError(f"not a native JSON value: {type(payload).__name__}")

    def to_native(self) -> NativeValue:
        kind = self._kind
        if kind is Kind.ARRAY:
            return [item.to_native() for item in self._payload]
        if kind is Kind.OBJECT:
            return {key: item.to_native() for key, item in self._payload.canonical().items()}
        return self._payload

    # Kind predicates.

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def is_null(self) -> bool:
        return self._kind is Kind.NUL

    @property
    def is_number(self) -> bool:
        return self._kind.is_numeric

    @property
    def is_bool(self) -> bool:
        return self._kind is Kind.BOOL

    @property
    def is_string(self) -> bool:
        return self._kind is Kind.STRING

    @property
    def is_array(self) -> bool:
        return self._kind is Kind.ARRAY

    @property
    def is_object(self) -> bool:
        return self._kind is Kind.OBJECT

    # Accessors with neutral defaults.

    def number_value(self) -> float:
        if self._kind.is_numeric:
            return float(self._payload)
        return 0.0

    def int_value(self) -> int:
        if self._kind is Kind.INTEGER:
            return self._payload
        if self._kind is Kind.NUMBER:
            try:
                return int(self._payload)
            except (OverflowError, ValueError):
                return 0
        return 0

    def bool_value(self) -> bool:
        return self._payload if self._kind is Kind.BOOL else False

    def string_value(self) -> str:
        return self._payload if self._kind is Kind.STRING else ""

    def array_items(self) -> tuple[Value, ...]:
        return tuple(self._payload) if self._kind is Kind.ARRAY else ()

    def object_items(self) -> Mapping[str, Value]:
        if self._kind is Kind.OBJECT:
            return _MemberView(self._payload)
        return _EMPTY_MEMBERS

    def keys(self) -> list[str]:
        return list(self._payload.canonical()) if self._kind is Kind.OBJECT else []

    def size(self) -> int:
        return len(self._payload) if self._kind is Kind.ARRAY else 0

    def __iter__(self) -> Iterator[Value]:
        return iter(self.array_items())

    def __contains__(self, key: object) -> bool:
        return self._kind is Kind.OBJECT and key in self._payload

    def get(self, selector: int | str) -> Value | None:
        """Return the element or member `selector`, or None when absent."""
        if isinstance(selector, bool):
            raise TypeError("values are indexed by int position or str key, not bool")
        if isinstance(selector, int):
            if self._kind is Kind.ARRAY and 0 <= selector < len(self._payload):
                return self._payload[selector]
            return None
        if isinstance(selector, str):
            if self._kind is Kind.OBJECT:
                return self._payload.get(selector)
            return None
        raise TypeError(
            f"values are indexed by int position or str key, not {type(selector).__name__}"
        )

    def __getitem__(self, selector: int | str) -> Value:
        found = self.get(selector)
        return NULL if found is None else found

    # Mutators.

    def _vivify(self, kind: Kind) -> bool:
        if self._frozen:
            return False
        if self._kind is Kind.NUL:
            self._kind = kind
            self._payload = _Members() if kind is Kind.OBJECT else []
            return True
        return self._kind is kind

    def set(self, key: str, source: ValueSource) -> bool:
        """Store a clone of `source` under `key`, replacing any previous member.

        A Null receiver becomes an empty object first. Any other non-object
        receiver is left untouched and False is returned.
        """
        if not isinstance(key, str):
            raise TypeError(f"object keys must be str, got {type(key).__name__}")
        item = Value(source)
        if not self._vivify(Kind.OBJECT):
            return False
        self._payload.put(key, item)
        return True

    def __setitem__(self, key: str, source: ValueSource) -> None:
        if not self.set(key, source):
            raise TypeError(f"cannot assign member {key!r} on a {self._kind.label} value")

    def entry(self, key: str) -> Value | None:
        """Get-or-create the member `key` for in-place editing.

        Precondition: the receiver is Null or an object. A Null receiver becomes
        an empty object; an absent member is created as Null. Returns None and
        leaves the receiver untouched otherwise.
        """
        if not isinstance(key, str):
            raise TypeError(f"object keys must be str, got {type(key).__name__}")
        if not self._vivify(Kind.OBJECT):
            return None
        child = self._payload.get(key)
        if child is None:
            child = Value()
            self._payload.put(key, child)
        return child

    def append(self, source: ValueSource) -> bool:
        item = Value(source)
        if not self._vivify(Kind.ARRAY):
            return False
        self._payload.append(item)
        return True

    # Ownership.

    def copy(self) -> Value:
        return Value._make(self._kind, _clone_payload(self))

    def __copy__(self) -> Value:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, object]) -> Value:
        return self.copy()

    def take(self) -> Value:
        """Move the payload into a new value and leave this one Null."""
        if self._frozen:
            return Value()
        moved = Value._make(self._kind, self._payload)
        self._kind = Kind.NUL
        self._payload = None
        return moved

    # Comparison.

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return compare.values_equal(self, other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return compare.value_less(self, other)

    __hash__ = None  # type: ignore[assignment]

    # Text and shape.

    def to_text(self) -> str:
        return serialize.dump_text(self)

    def write_text(self, out: list[str]) -> None:
        serialize.dump_into(self, out)

    def has_shape(self, shape: Shape) -> ShapeCheck:
        return has_shape(self, shape)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Value({self._kind.name}, {self.to_text()})"


def _frozen_null() -> Value:
    value = Value._make(Kind.NUL, None)
    value._frozen = True
    return value


NULL = _frozen_null()
