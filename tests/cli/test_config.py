# Copyright 2026 dbmlparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the CLI configuration module."""

from pathlib import Path

import pytest

from dbmlparse.cli.config import CliConfig, ConfigError, load_config

# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a config file and return its path."""
    config_file = tmp_path / ".dbmlparse.yaml"
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_empty_config_uses_defaults(tmp_path: Path) -> None:
    """An empty file yields the default settings."""
    assert load_config(_write_config(tmp_path, "")) == CliConfig()


def test_full_config(tmp_path: Path) -> None:
    """All fields are read from the file."""
    content = """\
indent: 4
trace: true
log-level: info
"""
    config = load_config(_write_config(tmp_path, content))
    assert config.indent == 4
    assert config.trace is True
    assert config.log_level == "INFO"


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(_write_config(tmp_path, "indent: [1,\n"))


def test_non_mapping(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="must be a YAML mapping"):
        load_config(_write_config(tmp_path, "- indent\n"))


def test_unknown_field(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="unknown field"):
        load_config(_write_config(tmp_path, "colour: blue\n"))


@pytest.mark.parametrize("value", ["-1", "true", "'2'"])
def test_bad_indent(tmp_path: Path, value: str) -> None:
    with pytest.raises(ConfigError, match="'indent'"):
        load_config(_write_config(tmp_path, f"indent: {value}\n"))


def test_bad_trace(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="'trace'"):
        load_config(_write_config(tmp_path, "trace: sometimes\n"))


def test_bad_log_level(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="'log-level'"):
        load_config(_write_config(tmp_path, "log-level: LOUD\n"))
