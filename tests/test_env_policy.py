from __future__ import annotations

from jsonvalue.runtime import env_policy


def test_env_text_strips_and_defaults(env_scope, restore_env) -> None:
    previous = env_scope({"JSONVALUE_MAX_DEPTH": "  12 "})
    try:
        assert env_policy.env_text(env_policy.MAX_DEPTH_ENV) == "12"
        assert env_policy.env_text("JSONVALUE_UNSET_FOR_TEST", default=" x ") == "x"
    finally:
        restore_env(previous)


def test_env_flag_values(env_scope, restore_env) -> None:
    for raw, expected in (("1", True), ("Yes", True), ("off", False), ("0", False)):
        previous = env_scope({env_policy.DEBUG_ENV: raw})
        try:
            assert env_policy.env_flag(env_policy.DEBUG_ENV) is expected
        finally:
            restore_env(previous)
    previous = env_scope({env_policy.DEBUG_ENV: "maybe"})
    try:
        assert env_policy.env_flag(env_policy.DEBUG_ENV, default=True) is True
        assert env_policy.env_flag(env_policy.DEBUG_ENV) is False
    finally:
        restore_env(previous)
