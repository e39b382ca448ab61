"""Load WarrenConfig from warren.yaml or warren.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import dataclasses
import tomllib
from pathlib import Path

import yaml

from warren._errors import ConfigError
from warren.config import WarrenConfig

CONFIG_FILES: tuple[str, ...] = ("warren.yaml", "warren.yml", "warren.toml")

_FIELDS = frozenset(f.name for f in dataclasses.fields(WarrenConfig)) - {"root"}


def load_config(root: Path, **overrides: object) -> WarrenConfig:
    """Load WarrenConfig from root, optionally merging warren.yaml.

    Looks for warren.yaml, warren.yml, or warren.toml in root. If found,
    loads and merges with overrides. Overrides take precedence; ``None``
    overrides are ignored so unset CLI flags fall through to the file.

    Raises:
        ConfigError: If the merged config names an unknown key.

    """
    file_config = _read_warren_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}

    unknown = sorted(set(merged) - _FIELDS)
    if unknown:
        msg = f"Unknown warren config key(s): {', '.join(unknown)}"
        raise ConfigError(msg)

    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    return WarrenConfig(root=root, **merged)  # type: ignore[arg-type]


def _read_warren_config(root: Path) -> dict[str, object]:
    """Read warren config from yaml/toml if present. Returns empty dict otherwise."""
    for name in CONFIG_FILES:
        path = root / name
        if path.is_file():
            return _parse_toml(path) if path.suffix == ".toml" else _parse_yaml(path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config. Returns empty dict on error."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return _flatten_warren_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config. Returns empty dict on error."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    return _flatten_warren_section(data)


def _flatten_warren_section(data: dict[str, object]) -> dict[str, object]:
    """Extract warren.* keys into top-level config."""
    result: dict[str, object] = {}
    section = data.get("warren")
    if isinstance(section, dict):
        result.update(section)
    for k, v in data.items():
        if k != "warren" and k in _FIELDS:
            result[k] = v
    return result
