"""
Configuration and path management.

Loads the content directory, the images directory and the per-tag display
overrides into an immutable Settings snapshot. The config file is YAML; JSON
is valid YAML, so a plain ``config.json`` works too.

Resolution order for the config file:
  1. Explicit path (``--config``)
  2. MDCMS_CONFIG environment variable
  3. Walk up from cwd looking for mdcms.yaml, mdcms.yml or config.json
  4. Global config file (~/.config/mdcms/config.yaml)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from mdcms.core.errors import ConfigError

CONFIG_ENV_VAR = "MDCMS_CONFIG"
LOCAL_CONFIG_NAMES = ("mdcms.yaml", "mdcms.yml", "config.json")


@dataclass(frozen=True)
class TagOverride:
    """Optional display overrides for one tag. Empty fields are ignored."""

    name: str = ""
    icon: str = ""
    images_dir: Path | None = None


@dataclass(frozen=True)
class Settings:
    """Immutable configuration snapshot."""

    content_dir: Path
    images_dir: Path
    tag_config: Mapping[str, TagOverride] = field(
        default_factory=lambda: MappingProxyType({})
    )
    source: Path | None = None


def get_global_config_path() -> Path:
    """Return the path to the global mdcms config file.

    Respects XDG_CONFIG_HOME if set, otherwise defaults to
    ~/.config/mdcms/config.yaml.
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"
    return base / "mdcms" / "config.yaml"


def _walk_up_for_config(start_path: Path) -> Path | None:
    """Walk up the directory tree looking for a local config file."""
    current = start_path.resolve()
    while True:
        for name in LOCAL_CONFIG_NAMES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        if current == current.parent:
            return None
        current = current.parent


def find_config_file(
    path: Path | None = None, start_path: Path | None = None
) -> Path:
    """Find the config file using tiered resolution.

    Args:
        path: Explicit config path (highest priority)
        start_path: Starting directory for the walk-up search (defaults to cwd)

    Returns:
        Path to the config file

    Raises:
        FileNotFoundError: If no config file is found by any method
    """
    if path is not None:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path).expanduser()
        if candidate.is_file():
            return candidate
        raise FileNotFoundError(f"{CONFIG_ENV_VAR}={env_path} is not a file.")

    if start_path is None:
        start_path = Path.cwd()
    local = _walk_up_for_config(Path(start_path))
    if local is not None:
        return local

    global_path = get_global_config_path()
    if global_path.is_file():
        return global_path

    raise FileNotFoundError(
        f"No config file found from {start_path}. Create one of "
        f"{', '.join(LOCAL_CONFIG_NAMES)}, set {CONFIG_ENV_VAR}, or write "
        f"{global_path}."
    )


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _resolve_dir(value: Any, key: str, base_dir: Path) -> Path:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty string")
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def _parse_override(tag: str, raw: Any, base_dir: Path) -> TagOverride:
    if raw is None:
        return TagOverride()
    if not isinstance(raw, Mapping):
        raise ConfigError(f"tagConfig entry for '{tag}' must be a mapping")

    values: dict[str, Any] = {}
    for attr, keys in (
        ("name", ("name",)),
        ("icon", ("icon",)),
        ("images_dir", ("imagesDir", "images_dir")),
    ):
        value = _pick(raw, *keys)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(f"tagConfig.{tag}.{keys[0]} must be a string")
        if attr == "images_dir":
            # Same rule as the top-level imagesDir; empty means no override
            if value:
                values[attr] = _resolve_dir(
                    value, f"tagConfig.{tag}.{keys[0]}", base_dir
                )
            continue
        values[attr] = value
    return TagOverride(**values)


def parse_settings(
    data: Any, base_dir: Path, source: Path | None = None
) -> Settings:
    """Build Settings from decoded config data.

    Args:
        data: Decoded config document
        base_dir: Directory relative paths are resolved against
        source: Config file the data came from

    Raises:
        ConfigError: If the data has the wrong shape
    """
    if not isinstance(data, Mapping):
        raise ConfigError("config root must be a mapping")

    content_dir = _resolve_dir(
        _pick(data, "contentDir", "content_dir"), "contentDir", base_dir
    )
    images_raw = _pick(data, "imagesDir", "images_dir")
    images_dir = (
        content_dir if images_raw is None
        else _resolve_dir(images_raw, "imagesDir", base_dir)
    )

    tag_raw = _pick(data, "tagConfig", "tag_config") or {}
    if not isinstance(tag_raw, Mapping):
        raise ConfigError("'tagConfig' must be a mapping of tag to overrides")

    overrides = {
        str(tag): _parse_override(str(tag), raw, base_dir)
        for tag, raw in tag_raw.items()
    }

    return Settings(
        content_dir=content_dir,
        images_dir=images_dir,
        tag_config=MappingProxyType(overrides),
        source=source,
    )


def load_settings(path: Path | None = None) -> Settings:
    """Locate, read and parse the config file.

    Args:
        path: Explicit config path (optional)

    Returns:
        Settings snapshot

    Raises:
        FileNotFoundError: If no config file can be located
        ConfigError: If the file cannot be read or parsed
    """
    config_path = find_config_file(path)
    try:
        text = config_path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot load {config_path}: {e}") from e

    return parse_settings(data, config_path.parent.resolve(), source=config_path)
