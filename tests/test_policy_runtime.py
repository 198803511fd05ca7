"""Configuration loading tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from core.policy_runtime import configure_logging, load_effective_config, load_yaml, merge_dicts

ROOT = Path(__file__).resolve().parents[1]


def test_merge_dicts_is_recursive() -> None:
    base = {"geometry": {"top_inset": 32, "bottom_inset": 80}, "a": 1}
    merged = merge_dicts(base, {"geometry": {"top_inset": 24}, "b": 2})
    assert merged == {"geometry": {"top_inset": 24, "bottom_inset": 80}, "a": 1, "b": 2}
    assert base["geometry"]["top_inset"] == 32


def test_missing_file_is_empty(tmp_path: Path) -> None:
    assert load_yaml(tmp_path / "nope.yaml") == {}


def test_non_mapping_yaml_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError, match="config layer must be a YAML mapping"):
        load_yaml(path)


def test_local_overrides_default(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "default.yaml").write_text(
        "geometry:\n  top_inset: 32\n  bottom_inset: 80\n", encoding="utf-8"
    )
    (config_dir / "local.yaml").write_text("geometry:\n  bottom_inset: 64\n", encoding="utf-8")
    extra = tmp_path / "extra.yaml"
    extra.write_text("viewport:\n  width: 640\n", encoding="utf-8")

    config = load_effective_config(tmp_path, extra=extra)
    assert config["geometry"] == {"top_inset": 32, "bottom_inset": 64}
    assert config["viewport"]["width"] == 640


def test_missing_extra_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        load_effective_config(tmp_path, extra=tmp_path / "missing.yaml")


def test_shipped_default_config_matches_builtin_values() -> None:
    config = load_effective_config(ROOT)
    assert config["geometry"]["top_inset"] == 32
    assert config["geometry"]["minimum_size"]["desktop"] == {"width": 400, "height": 300}
    assert config["transitions"]["durations"]["opening"] == 0.8


def test_configure_logging_sets_dwm_level() -> None:
    configure_logging({"logging": {"level": "debug"}})
    assert logging.getLogger("dwm").level == logging.DEBUG
    configure_logging({}, level="warning")
    assert logging.getLogger("dwm").level == logging.WARNING
    with pytest.raises(ValueError):
        configure_logging({}, level="chatty")
