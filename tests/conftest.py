from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


import pytest

from tests.env_helpers import JSONVALUE_ENV_KEYS
from tests.env_helpers import restore_env as _restore_env
from tests.env_helpers import set_env as _set_env


@pytest.fixture(autouse=True)
def _isolated_jsonvalue_env():
    previous = _set_env({key: None for key in JSONVALUE_ENV_KEYS})
    try:
        yield
    finally:
        _restore_env(previous)


@pytest.fixture
def env_scope():
    return _set_env


@pytest.fixture
def restore_env():
    return _restore_env


@pytest.fixture
def nested_arrays():
    def _make(depth: int, *, leaf: str = "1") -> str:
        return "[" * depth + leaf + "]" * depth

    return _make


@pytest.fixture
def nested_objects():
    def _make(depth: int, *, leaf: str = "1") -> str:
        return '{"k":' * depth + leaf + "}" * depth

    return _make
