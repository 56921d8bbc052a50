# Copyright 2026 dbmlparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Diagnostic tracing hooks for parse milestones.

A hook is any callable taking a message and a mapping of parameters. The
parser calls it when it finishes a project, table, column, index, enum, ref,
or table group. Hooks never affect what the parser returns.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Mapping
from typing import Any

import structlog

# ###############
# Public Interface
# ###############

Logger = Callable[[str, Mapping[str, Any]], None]


def noop_logger(message: str, params: Mapping[str, Any]) -> None:
    """Discard every milestone."""


def structlog_logger(level: int = logging.DEBUG) -> Logger:
    """Return a hook that emits milestones through structlog.

    Each parameter is bound onto the logger as a key/value pair and the
    message is prefixed with ``[dbmlparse]``.

    Args:
        level: A stdlib logging level such as ``logging.DEBUG``.
    """

    def _log(message: str, params: Mapping[str, Any]) -> None:
        log = structlog.get_logger(_LOGGER_NAME).bind(**params)
        log.log(level, f"[dbmlparse] {message}")

    return _log


def configure_logging(level: str = "DEBUG") -> None:
    """Configure structlog to render to stderr at the given level name."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_LEVEL_MAP.get(level.upper(), logging.DEBUG)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


# ################
# Implementation
# ################

_LOGGER_NAME = "dbmlparse"

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}
