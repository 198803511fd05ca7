"""Configuration loading and logging bootstrap."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILES = ("default.yaml", "local.yaml")


def load_yaml(path: Path) -> dict[str, Any]:
    """Read one window-manager config layer; a missing layer contributes nothing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Window manager config layer must be a YAML mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Overlay one config layer on another; nested sections merge key by key."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_effective_config(root: Path, extra: Path | None = None) -> dict[str, Any]:
    """Merge ``config/default.yaml``, ``config/local.yaml`` and an optional extra file."""
    config_dir = root / "config"
    merged: dict[str, Any] = {}
    for name in CONFIG_FILES:
        merged = merge_dicts(merged, load_yaml(config_dir / name))
    if extra is not None:
        if not extra.exists():
            raise ValueError(f"Config file not found: {extra}")
        merged = merge_dicts(merged, load_yaml(extra))
    return merged


def configure_logging(config: dict[str, Any], level: str | None = None) -> None:
    """Apply the ``logging`` section to the ``dwm`` logger tree."""
    log_cfg = config.get("logging", {})
    name = (level or log_cfg.get("level") or "WARNING").upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {name}")
    logging.basicConfig(format=log_cfg.get("format", "%(levelname)s %(name)s: %(message)s"))
    logging.getLogger("dwm").setLevel(numeric)
