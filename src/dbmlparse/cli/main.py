# Copyright 2026 dbmlparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the dbmlparse command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from dbmlparse.cli.config import CONFIG_FILE_NAME, CliConfig, ConfigError, load_config
from dbmlparse.model import Document
from dbmlparse.parser import ParseError, parse
from dbmlparse.tracing import Logger, configure_logging, noop_logger, structlog_logger

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the dbmlparse CLI."""
    parser = argparse.ArgumentParser(
        prog="dbmlparse",
        description="dbmlparse - DBML schema parser",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to a configuration file (default: ./{CONFIG_FILE_NAME} if present)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # parse subcommand
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a DBML file and print it as JSON",
        description="Parse a DBML file and print the resulting document model as JSON.",
    )
    parse_parser.add_argument("file", type=Path, help="DBML file to parse")
    parse_parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="JSON indentation width (default: 2)",
    )
    parse_parser.add_argument(
        "--trace",
        action="store_true",
        default=None,
        help="Log parse milestones to stderr",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check that DBML files parse",
        description="Parse each DBML file and report what it declares.",
    )
    check_parser.add_argument("files", type=Path, nargs="+", help="DBML files to check")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    try:
        config = _load_config(args.config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "parse":
        return _cmd_parse(args, config)
    if args.command == "check":
        return _cmd_check(args)
    return 0


def _load_config(path: Path | None) -> CliConfig:
    """Load the explicit config file, or the one in the working directory."""
    if path is not None:
        return load_config(path)
    default_path = Path.cwd() / CONFIG_FILE_NAME
    if default_path.exists():
        return load_config(default_path)
    return CliConfig()


def _cmd_parse(args: argparse.Namespace, config: CliConfig) -> int:
    """Handle the parse subcommand."""
    indent = config.indent if args.indent is None else args.indent
    if indent < 0:
        print("Error: --indent must be non-negative.", file=sys.stderr)
        return 1

    logger: Logger = noop_logger
    if args.trace or (args.trace is None and config.trace):
        configure_logging(config.log_level)
        logger = structlog_logger(logging.getLevelName(config.log_level))

    document = _parse_file(args.file, logger)
    if document is None:
        return 1
    print(document.model_dump_json(indent=indent or None, by_alias=True))
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    failed = False
    for path in args.files:
        document = _parse_file(path, noop_logger)
        if document is None:
            failed = True
            continue
        print(
            f"{path}: {len(document.tables)} table(s), {len(document.refs)} ref(s), "
            f"{len(document.enums)} enum(s), {len(document.table_groups)} table group(s)"
        )
    if failed:
        return 1
    print("No issues found.")
    return 0


def _parse_file(path: Path, logger: Logger) -> Document | None:
    """Read and parse one file, reporting failures on stderr."""
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
        return None
    try:
        return parse(source, logger)
    except ParseError as exc:
        print(f"Error: {path}: {exc}", file=sys.stderr)
        return None
