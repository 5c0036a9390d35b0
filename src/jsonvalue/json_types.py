"""Plain Python carriers exchanged with `Value` at the native boundary.

`NativeValue` is what `Value.to_native()` returns and what the stdlib `json`
module reads and writes. `NativeInput` is what `Value.from_native()` accepts,
which additionally admits tuples as arrays.
"""

from __future__ import annotations

from typing import TypeAlias


NativeScalar: TypeAlias = str | int | float | bool | None
NativeValue: TypeAlias = NativeScalar | list["NativeValue"] | dict[str, "NativeValue"]
NativeInput: TypeAlias = (
    NativeScalar
    | list["NativeInput"]
    | tuple["NativeInput", ...]
    | dict[str, "NativeInput"]
)
