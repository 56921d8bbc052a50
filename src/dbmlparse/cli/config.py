# Copyright 2026 dbmlparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the dbmlparse CLI configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".dbmlparse.yaml"

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class CliConfig:
    """Settings for the command-line front end.

    Attributes:
        indent: Indentation width of JSON output.
        trace: Whether parse milestones are logged to stderr.
        log_level: Level name at which milestones are logged.
    """

    indent: int = 2
    trace: bool = False
    log_level: str = "DEBUG"


def load_config(path: Path) -> CliConfig:
    """Load and parse a dbmlparse configuration file.

    Args:
        path: Path to the `.dbmlparse.yaml` file.

    Returns:
        A CliConfig instance populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


# ################
# Implementation
# ################


def _parse_config(text: str, source_label: str = "<string>") -> CliConfig:
    """Parse config YAML text into a CliConfig.

    An empty document yields the defaults.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return CliConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(set(data) - {"indent", "trace", "log-level"})
    if unknown:
        raise ConfigError(f"{source_label}: unknown field(s): {', '.join(map(str, unknown))}")

    config = CliConfig()
    if "indent" in data:
        indent = data["indent"]
        # bool is a subclass of int
        if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
            raise ConfigError(f"{source_label}: 'indent' must be a non-negative integer")
        config.indent = indent
    if "trace" in data:
        trace = data["trace"]
        if not isinstance(trace, bool):
            raise ConfigError(f"{source_label}: 'trace' must be a boolean")
        config.trace = trace
    if "log-level" in data:
        level = data["log-level"]
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigError(f"{source_label}: 'log-level' must be one of {', '.join(LOG_LEVELS)}")
        config.log_level = level.upper()
    return config
