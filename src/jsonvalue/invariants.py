"""Invariant markers for jsonvalue."""

from __future__ import annotations

from typing import NoReturn

from jsonvalue.exceptions import NeverThrown


def never(reason: str = "", **env: object) -> NoReturn:
    """Mark a code path as intentionally unreachable.

    The optional env payload is attached to the raised exception for
    diagnostics; it is not evaluated otherwise.
    """
    raise NeverThrown(reason or "never() marker reached", env=env)


def require(condition: bool, reason: str, **env: object) -> None:
    if not condition:
        never(reason, **env)
