from __future__ import annotations

from dataclasses import dataclass, fields, replace
from functools import cache
from pathlib import Path
from typing import Final, cast

import yaml  # type: ignore[import-untyped]

LOG_PREFIX: Final[str] = "go-escape-lint: "
_CONFIG_SECTION: Final[str] = "lint"


class ConfigError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


@dataclass(frozen=True, slots=True)
class LintConfig:
    source_suffix: str = ".go"
    test_suffix: str = "_test.go"
    skip_dir_names: tuple[str, ...] = ("vendor",)
    max_comment_length: int = 20
    typo_distance_threshold: int = 3
    log_prefix: str = LOG_PREFIX

    def __post_init__(self) -> None:
        if not self.source_suffix:
            raise ConfigError("E_CONFIG_INVALID", "source_suffix must be non-empty")
        if not self.test_suffix:
            raise ConfigError("E_CONFIG_INVALID", "test_suffix must be non-empty")
        if any(not name for name in self.skip_dir_names):
            raise ConfigError("E_CONFIG_INVALID", "skip_dir_names entries must be non-empty")
        if self.max_comment_length < 0:
            raise ConfigError("E_CONFIG_INVALID", "max_comment_length must be >= 0")
        if self.typo_distance_threshold < 0:
            raise ConfigError("E_CONFIG_INVALID", "typo_distance_threshold must be >= 0")


DEFAULT_LINT_CONFIG: Final[LintConfig] = LintConfig()


def load_lint_config(path: str | Path | None = None) -> LintConfig:
    """Load lint settings from a YAML file with a top-level ``lint`` mapping.

    Keys left out keep their defaults; unknown keys are rejected. Without a
    path the built-in defaults are returned.
    """
    if path is None:
        return DEFAULT_LINT_CONFIG
    return _load_lint_config_cached(str(Path(path).resolve()))


@cache
def _load_lint_config_cached(path: str) -> LintConfig:
    raw = _read_yaml_file(Path(path))
    section = raw.get(_CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError("E_CONFIG_INVALID", f"'{_CONFIG_SECTION}' must be a mapping")
    block = cast(dict[str, object], section)

    known = {field.name for field in fields(LintConfig)}
    unknown = sorted(str(key) for key in block if key not in known)
    if unknown:
        raise ConfigError("E_CONFIG_INVALID", f"unknown config keys: {', '.join(unknown)}")

    overrides: dict[str, object] = {}
    for key in ("source_suffix", "test_suffix", "log_prefix"):
        if key in block:
            overrides[key] = _require_string(block, key)
    for key in ("max_comment_length", "typo_distance_threshold"):
        if key in block:
            overrides[key] = _require_int(block, key)
    if "skip_dir_names" in block:
        overrides["skip_dir_names"] = _require_string_tuple(block, "skip_dir_names")
    return replace(DEFAULT_LINT_CONFIG, **overrides)


def _read_yaml_file(path: Path) -> dict[str, object]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            "E_CONFIG_INVALID",
            f"unable to read config file '{path}': {exc}",
        ) from exc
    try:
        payload = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise ConfigError(
            "E_CONFIG_INVALID",
            f"unable to parse config file '{path}': {exc}",
        ) from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError("E_CONFIG_INVALID", f"config file '{path}' must contain a mapping")
    return cast(dict[str, object], payload)


def _require_string(data: dict[str, object], key: str) -> str:
    value = data.get(key)
    if isinstance(value, str) and value:
        return value
    raise ConfigError("E_CONFIG_INVALID", f"missing or invalid string for key '{key}'")


def _require_int(data: dict[str, object], key: str) -> int:
    value = data.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise ConfigError("E_CONFIG_INVALID", f"missing or invalid integer for key '{key}'")


def _require_string_tuple(data: dict[str, object], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, list):
        raise ConfigError("E_CONFIG_INVALID", f"missing or invalid list for key '{key}'")
    items: list[str] = []
    for item in cast(list[object], value):
        if not isinstance(item, str) or not item:
            raise ConfigError("E_CONFIG_INVALID", f"invalid string entry for key '{key}'")
        items.append(item)
    return tuple(items)
