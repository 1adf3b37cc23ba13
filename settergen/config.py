"""Configuration loading for settergen (.settergen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

CONFIG_FILENAME = ".settergen.yml"

MARKER = "//gen:setters"

# Field names eligible for setter generation. Fixed at build time, not read
# from the config file.
DEFAULT_TARGET_FIELDS: Tuple[str, ...] = ("CreatedAt", "UpdatedAt")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class FormatterConfig:
    """Canonicalization settings for generated Go code."""

    gofmt: bool = False
    gofmt_path: str = "gofmt"


@dataclass
class CompatConfig:
    """Switches that reproduce historical output byte for byte."""

    legacy_channel_keyword: bool = False


@dataclass
class GeneratorConfig:
    """Effective settings for one generation run."""

    root: Path
    target_fields: Tuple[str, ...] = DEFAULT_TARGET_FIELDS
    marker: str = MARKER
    formatter: FormatterConfig = field(default_factory=FormatterConfig)
    compat: CompatConfig = field(default_factory=CompatConfig)


def load_config(config_path: Path) -> GeneratorConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.exists():
        return GeneratorConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    formatter = FormatterConfig()
    formatter_data = _as_dict(data.get("formatter"))
    if formatter_data:
        gofmt = _as_bool(formatter_data.get("gofmt"))
        if gofmt is not None:
            formatter.gofmt = gofmt
        gofmt_path = _as_str(formatter_data.get("gofmt_path"))
        if gofmt_path:
            formatter.gofmt_path = gofmt_path

    compat = CompatConfig()
    compat_data = _as_dict(data.get("compat"))
    if compat_data:
        compat.legacy_channel_keyword = bool(
            _as_bool(compat_data.get("legacy_channel_keyword"))
        )

    return GeneratorConfig(root=root, formatter=formatter, compat=compat)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser().resolve()
    if config_path.is_dir():
        return config_path / CONFIG_FILENAME
    if config_path.name != CONFIG_FILENAME:
        return config_path.parent / CONFIG_FILENAME
    return config_path


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "CompatConfig",
    "ConfigError",
    "DEFAULT_TARGET_FIELDS",
    "FormatterConfig",
    "GeneratorConfig",
    "MARKER",
    "load_config",
]
