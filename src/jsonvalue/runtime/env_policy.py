from __future__ import annotations

import os

_TRUTHY_VALUES = {"1", "true", "yes", "on"}
_FALSEY_VALUES = {"0", "false", "no", "off"}

MAX_DEPTH_ENV = "JSONVALUE_MAX_DEPTH"
DEBUG_ENV = "JSONVALUE_DEBUG"


def env_text(name: str, *, default: str = "") -> str:
    return os.getenv(name, default).strip()


def env_flag(name: str, *, default: bool = False) -> bool:
    value = env_text(name).lower()
    if value in _TRUTHY_VALUES:
        return True
    if value in _FALSEY_VALUES:
        return False
    return default
