"""Exception protocol markers for jsonvalue."""

from __future__ import annotations

from typing import Mapping


class NeverRaise(RuntimeError):
    """Sentinel exception that should be statically unreachable.

    Raising this exception signals that a code path the value model treats as
    impossible (an unknown kind, a broken limit invariant) was reached anyway.
    """

    def __init__(self, message: str, *, env: Mapping[str, object] | None = None):
        super().__init__(message)
        self.reason = message
        self.env = dict(env or {})

    @property
    def marker_payload_dict(self) -> dict[str, object]:
        return {
            "reason": self.reason,
            "env": {key: repr(value) for key, value in sorted(self.env.items())},
        }


class NeverThrown(NeverRaise):
    """Alias for NeverRaise used by the explicit never() marker."""
