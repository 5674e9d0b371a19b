"""Tests for gotrim.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from gotrim.config import ConfigError, GoTrimConfig, ImportsConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, GoTrimConfig)
    assert config.root == tmp_path.resolve()
    assert config.blocks is True
    assert config.imports == ImportsConfig()
    assert config.exclude_paths == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".gotrim.yml"
    config_file.write_text(
        """
blocks: false
imports:
  collapse: true
  organize: "no"
  remove_unused: false
  local_prefix: example.com/me
  tool: goimports
exclude_paths:
  - "gen/"
  - "*_string.go"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.blocks is False
    assert config.imports.collapse is True
    assert config.imports.organize is False
    assert config.imports.remove_unused is False
    assert config.imports.local_prefix == "example.com/me"
    assert config.imports.tool == "goimports"
    assert config.exclude_paths == ["gen/", "*_string.go"]


def test_load_config_treats_empty_file_as_defaults(tmp_path: Path) -> None:
    (tmp_path / ".gotrim.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).imports.tool == "builtin"


def test_load_config_rejects_unknown_import_tool(tmp_path: Path) -> None:
    (tmp_path / ".gotrim.yml").write_text("imports:\n  tool: gofumpt\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".gotrim.yml").write_text("- blocks\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_wraps_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".gotrim.yml").write_text("imports: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)
