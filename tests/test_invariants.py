from __future__ import annotations

import pytest

from jsonvalue import invariants
from jsonvalue.exceptions import NeverRaise, NeverThrown


def test_never_raises_never_thrown() -> None:
    with pytest.raises(NeverThrown):
        invariants.never("boom", flag=True)


def test_never_without_reason_uses_default_message() -> None:
    with pytest.raises(NeverThrown) as exc_info:
        invariants.never()
    assert str(exc_info.value) == "never() marker reached"


def test_require_passes_and_fails() -> None:
    invariants.require(True, "unused")
    with pytest.raises(NeverRaise) as exc_info:
        invariants.require(False, "limit broken", depth=0)
    assert exc_info.value.reason == "limit broken"
    assert exc_info.value.env == {"depth": 0}


def test_marker_payload_dict() -> None:
    with pytest.raises(NeverThrown) as exc_info:
        invariants.never("boom", kind="x", count=2)
    assert exc_info.value.marker_payload_dict == {
        "reason": "boom",
        "env": {"count": "2", "kind": "'x'"},
    }
