from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from histbar.infra.config_schema import validate_config


DEFAULTS_PATH = Path(__file__).resolve().parents[1] / "configs" / "defaults.yaml"


class ConfigError(ValueError):
    """Raised for config loading and merge failures."""


def load_yaml(path: str | Path) -> dict[str, Any]:
    path_obj = Path(path)
    if not path_obj.exists():
        raise ConfigError(f"Config file not found: {path_obj}")
    try:
        raw = yaml.safe_load(path_obj.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path_obj}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML root must be a mapping: {path_obj}")
    return raw


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge a config layer over ``base``; sections merge key by key.

    An empty section in the layer (``histogram:`` with nothing under it) leaves
    the base section untouched, and a scalar cannot replace a whole section.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        section = merged.get(key)
        if not isinstance(section, dict):
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, dict):
            merged[key] = deep_merge(section, value)
        elif value is not None:
            raise ConfigError(f"'{key}' is a section and must be a mapping, got {value!r}")
    return merged


def parse_override_value(raw: str) -> Any:
    lowered = raw.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    try:
        if "." in raw or "e" in lowered:
            return float(raw)
        return int(raw)
    except ValueError:
        return raw


def set_by_path(target: dict[str, Any], path: str, value: Any, *, source: str = "--set") -> None:
    *sections, leaf = path.split(".")
    if not leaf or not all(sections):
        raise ConfigError(f"Invalid {source} key '{path}'")
    cursor = target
    for name in sections:
        child = cursor.setdefault(name, {})
        if not isinstance(child, dict):
            raise ConfigError(f"Invalid {source} key '{path}': '{name}' is not a section")
        cursor = child
    cursor[leaf] = value


def apply_overrides(
    config: dict[str, Any],
    overrides: list[str] | None,
    *,
    source: str = "--set",
) -> dict[str, Any]:
    """Apply ``dotted.path=value`` strings; ``source`` names the layer in error messages."""
    if not overrides:
        return config

    updated = copy.deepcopy(config)
    for item in overrides:
        key, sep, raw_value = item.partition("=")
        if not sep:
            raise ConfigError(f"Invalid {source} override '{item}'. Expected dotted.path=value")
        set_by_path(updated, key.strip(), parse_override_value(raw_value.strip()), source=source)
    return updated


def resolve_config(
    config_path: str | Path | None = None,
    env_overrides: list[str] | None = None,
    cli_overrides: list[str] | None = None,
    defaults_path: str | Path | None = None,
) -> dict[str, Any]:
    resolved = load_yaml(defaults_path or DEFAULTS_PATH)

    if config_path:
        resolved = deep_merge(resolved, load_yaml(config_path))

    resolved = apply_overrides(resolved, env_overrides, source="environment")
    resolved = apply_overrides(resolved, cli_overrides)

    validate_config(resolved)
    return resolved
