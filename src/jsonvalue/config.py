from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from jsonvalue.parser import MAX_DEPTH, ParserLimits
from jsonvalue.runtime import env_policy

DEFAULT_CONFIG_NAME = "jsonvalue.toml"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def parser_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("parser", {})
    return section if isinstance(section, dict) else {}


def _as_depth(value: TomlValue) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            depth = int(text)
            return depth if depth > 0 else None
    return None


def resolve_parser_limits(
    root: Path | None = None, config_path: Path | None = None
) -> ParserLimits:
    """Resolve parser limits: environment, then `[parser]` table, then default."""
    env_depth = _as_depth(env_policy.env_text(env_policy.MAX_DEPTH_ENV))
    if env_depth is not None:
        return ParserLimits(max_depth=env_depth)
    section = parser_defaults(root=root, config_path=config_path)
    file_depth = _as_depth(section.get("max_depth"))
    if file_depth is not None:
        return ParserLimits(max_depth=file_depth)
    return ParserLimits(max_depth=MAX_DEPTH)
