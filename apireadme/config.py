"""Configuration loading for apireadme (.apireadme.yml and tsconfig.json)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .logging import get_logger

CONFIG_FILENAME = ".apireadme.yml"
DEFAULT_README = "README.md"
DEFAULT_TSCONFIG = "tsconfig.json"

logger = get_logger("config")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ApiReadmeConfig:
    """Represents the settings defined in .apireadme.yml."""

    root: Path
    readme: str = DEFAULT_README
    tsconfig: str = DEFAULT_TSCONFIG
    include: List[str] = field(default_factory=list)

    @property
    def readme_path(self) -> Path:
        return self.root / self.readme

    @property
    def tsconfig_path(self) -> Path:
        return self.root / self.tsconfig


def load_config(config_path: Path) -> ApiReadmeConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ApiReadmeConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    return ApiReadmeConfig(
        root=root,
        readme=_as_str(data.get("readme")) or DEFAULT_README,
        tsconfig=_as_str(data.get("tsconfig")) or DEFAULT_TSCONFIG,
        include=_as_str_list(data.get("include")),
    )


def load_include_patterns(tsconfig_path: Path) -> List[str]:
    """Return the `include` patterns of a tsconfig.json, or [] when unavailable."""
    try:
        data = json.loads(tsconfig_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.debug("No tsconfig found at %s", tsconfig_path)
        return []
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.debug("Ignoring unreadable tsconfig %s: %s", tsconfig_path, exc)
        return []

    include = data.get("include") if isinstance(data, dict) else None
    if not isinstance(include, list):
        return []
    return [item for item in include if isinstance(item, str)]


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
