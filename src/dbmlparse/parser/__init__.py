# Copyright 2026 dbmlparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Scanner and parser for DBML documents."""

from dbmlparse.parser.lexer import Scanner, Token, TokenType, tokenize
from dbmlparse.parser.parser import ParseError, Parser, TokenSource, parse

__all__ = [
    "parse",
    "Parser",
    "ParseError",
    "TokenSource",
    "Scanner",
    "Token",
    "TokenType",
    "tokenize",
]
