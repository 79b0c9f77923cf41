# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""
Configuration for MiniML documents.

Loaded from:
1. Defaults (this file)
2. Config file (~/.config/miniml/config.toml) if exists
3. Environment variables (MINIML_*) override file
4. An explicit config passed to MiniMLDocument overrides everything
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class MiniMLConfig:
    """Rendering and persistence settings."""
    indent: str = "\t"
    newline: str = "\n"
    encoding: str = "utf-8"
    write_empty_ids: bool = False  # emit '' for nodes without an id
    check_unique_ids: bool = True  # set_id refuses ids already in the document
    atomic_write: bool = True  # write a temp file, then replace the source


_FIELD_TYPES: dict[str, type] = {
    "indent": str,
    "newline": str,
    "encoding": str,
    "write_empty_ids": bool,
    "check_unique_ids": bool,
    "atomic_write": bool,
}


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "miniml" / "config.toml"
    return Path.home() / ".config" / "miniml" / "config.toml"


def load_config() -> MiniMLConfig:
    """Load config from file if exists, else return defaults."""
    config = MiniMLConfig()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.warning("Ignoring unreadable config file %s: %s", path, exc)
        else:
            config = _apply_toml(config, data)

    return _apply_env(config)


def _convert(value: object, conv: type) -> object:
    """Convert a raw setting; strings like "true", "1", "yes" are True for bools."""
    if conv is bool and isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return conv(value)


def _apply_toml(config: MiniMLConfig, data: dict) -> MiniMLConfig:
    """Apply the [miniml] table (or top-level keys) of a toml file."""
    section = data.get("miniml", data)
    if not isinstance(section, dict):
        logger.warning("Ignoring non-table miniml entry in config file")
        return config
    for key, conv in _FIELD_TYPES.items():
        if key in section:
            with contextlib.suppress(ValueError, TypeError):
                setattr(config, key, _convert(section[key], conv))
    return config


def _apply_env(config: MiniMLConfig) -> MiniMLConfig:
    """Apply environment variable overrides."""
    for attr, conv in _FIELD_TYPES.items():
        val = os.environ.get(f"MINIML_{attr.upper()}")
        if val is not None:
            with contextlib.suppress(ValueError):
                setattr(config, attr, _convert(val, conv))
    return config


_config: MiniMLConfig | None = None


def get_config() -> MiniMLConfig:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached global config so the next get_config() reloads it."""
    global _config
    _config = None
