# Copyright 2026 dbmlparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for DBML documents.

Turns raw source text into tokens on demand. The scanner never raises: bad
input comes back as ILLEGAL tokens for the parser to report.
"""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the DBML scanner."""

    # Keywords
    PROJECT = "Project"
    TABLE = "Table"
    REF = "Ref"
    REFS = "Refs"
    ENUM = "Enum"
    TABLEGROUP = "TableGroup"
    NOTE = "Note"
    AS = "as"
    INDEXES = "Indexes"
    PK = "pk"
    PRIMARY = "primary"
    KEY = "key"
    UNIQUE = "unique"
    INCREMENT = "increment"
    DEFAULT = "default"
    NOT = "not"
    NULL = "null"
    TYPE = "type"
    HEADERCOLOR = "headercolor"

    # Symbols and operators
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LBRACK = "["
    RBRACK = "]"
    COLON = ":"
    COMMA = ","
    HASH = "#"
    GTR = ">"
    LSS = "<"
    SUB = "-"

    # Literals
    IDENT = "IDENT"
    STRING = "STRING"
    DSTRING = "DSTRING"
    TSTRING = "TSTRING"
    INT = "INT"
    FLOAT = "FLOAT"
    EXPR = "EXPR"

    COMMENT = "COMMENT"
    ILLEGAL = "ILLEGAL"

    # End of file
    EOF = "EOF"


KEYWORD_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.PROJECT,
        TokenType.TABLE,
        TokenType.REF,
        TokenType.REFS,
        TokenType.ENUM,
        TokenType.TABLEGROUP,
        TokenType.NOTE,
        TokenType.AS,
        TokenType.INDEXES,
        TokenType.PK,
        TokenType.PRIMARY,
        TokenType.KEY,
        TokenType.UNIQUE,
        TokenType.INCREMENT,
        TokenType.DEFAULT,
        TokenType.NOT,
        TokenType.NULL,
        TokenType.TYPE,
        TokenType.HEADERCOLOR,
    }
)


def is_ident(token_type: TokenType) -> bool:
    """Return True for identifiers and for keywords, which may double as names."""
    return token_type == TokenType.IDENT or token_type in KEYWORD_TYPES


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token (decoded content for string literals).
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    value: str
    line: int
    column: int


class Scanner:
    """Pull-based token source over a DBML document.

    ``read()`` advances exactly one token; ``line_info()`` reports where the
    most recently read token starts.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tok_line = 1
        self._tok_column = 1

    def read(self) -> tuple[TokenType, str]:
        """Scan and return the next token as a ``(type, literal)`` pair."""
        self._skip_whitespace()
        self._tok_line = self._line
        self._tok_column = self._column
        if self._pos >= len(self._source):
            return TokenType.EOF, ""
        return self._scan_token()

    def line_info(self) -> tuple[int, int]:
        """Return the 1-based (line, column) of the last token read."""
        return self._tok_line, self._tok_column

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character ``offset`` positions ahead, or '' past the end."""
        if self._pos + offset < len(self._source):
            return self._source[self._pos + offset]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._source) and self._current() in " \t\r\n":
            self._advance()

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> tuple[TokenType, str]:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()

        if ch == "/" and self._peek() == "/":
            return self._scan_line_comment()
        if ch == "/" and self._peek() == "*":
            return self._scan_block_comment()
        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            return _SINGLE_CHAR_TOKENS[ch], ch
        if ch == "'" and self._peek() == "'" and self._peek(2) == "'":
            return self._scan_triple_string()
        if ch == "'":
            return self._scan_string("'", TokenType.STRING)
        if ch == '"':
            return self._scan_string('"', TokenType.DSTRING)
        if ch == "`":
            return self._scan_expression()
        if ch.isdigit():
            return self._scan_number()
        if ch.isalpha() or ch == "_":
            return self._scan_identifier_or_keyword()
        self._advance()
        return TokenType.ILLEGAL, ch

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _scan_line_comment(self) -> tuple[TokenType, str]:
        """Consume from '//' through end-of-line (exclusive of the newline itself)."""
        start = self._pos
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()
        return TokenType.COMMENT, self._source[start : self._pos]

    def _scan_block_comment(self) -> tuple[TokenType, str]:
        """Consume from '/*' through the matching '*/'."""
        start = self._pos
        self._advance()  # /
        self._advance()  # *
        while self._pos < len(self._source):
            if self._current() == "*" and self._peek() == "/":
                self._advance()  # *
                self._advance()  # /
                return TokenType.COMMENT, self._source[start : self._pos]
            self._advance()
        return TokenType.ILLEGAL, self._source[start : self._pos]

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, quote: str, token_type: TokenType) -> tuple[TokenType, str]:
        """Scan a single-line quoted string literal with escape sequences."""
        self._advance()  # opening quote
        chars: list[str] = []
        while self._pos < len(self._source):
            ch = self._current()
            if ch == quote:
                self._advance()  # closing quote
                return token_type, "".join(chars)
            if ch == "\n":
                break
            if ch == "\\":
                self._advance()
                if self._pos >= len(self._source):
                    break
                chars.append(_ESCAPES.get(self._current(), self._current()))
                self._advance()
            else:
                chars.append(ch)
                self._advance()
        return TokenType.ILLEGAL, quote + "".join(chars)

    def _scan_triple_string(self) -> tuple[TokenType, str]:
        """Scan a ''' delimited string, which may span several lines."""
        for _ in range(3):
            self._advance()
        chars: list[str] = []
        while self._pos < len(self._source):
            ch = self._current()
            if ch == "'" and self._peek() == "'" and self._peek(2) == "'":
                for _ in range(3):
                    self._advance()
                return TokenType.TSTRING, "".join(chars)
            if ch == "\\" and self._peek():
                self._advance()
                chars.append(_ESCAPES.get(self._current(), self._current()))
                self._advance()
            else:
                chars.append(ch)
                self._advance()
        return TokenType.ILLEGAL, "'''" + "".join(chars)

    def _scan_expression(self) -> tuple[TokenType, str]:
        """Scan a backtick expression; its text is kept unevaluated."""
        self._advance()  # opening `
        start = self._pos
        while self._pos < len(self._source):
            if self._current() == "`":
                value = self._source[start : self._pos]
                self._advance()  # closing `
                return TokenType.EXPR, value
            self._advance()
        return TokenType.ILLEGAL, "`" + self._source[start : self._pos]

    def _scan_number(self) -> tuple[TokenType, str]:
        """Scan an integer or floating-point literal.

        A float requires at least one digit on both sides of the decimal point.
        A digit run running straight into letters (``3498db``) is an identifier.
        """
        start = self._pos
        while self._pos < len(self._source) and self._current().isdigit():
            self._advance()

        if self._current().isalpha() or self._current() == "_":
            self._consume_identifier_chars()
            return TokenType.IDENT, self._source[start : self._pos]

        if self._current() == "." and self._peek().isdigit():
            self._advance()  # consume the '.'
            while self._pos < len(self._source) and self._current().isdigit():
                self._advance()
            return TokenType.FLOAT, self._source[start : self._pos]
        return TokenType.INT, self._source[start : self._pos]

    def _scan_identifier_or_keyword(self) -> tuple[TokenType, str]:
        """Scan an identifier and map it to a keyword token type if applicable."""
        start = self._pos
        self._consume_identifier_chars()
        value = self._source[start : self._pos]
        return _KEYWORDS.get(value.lower(), TokenType.IDENT), value

    def _consume_identifier_chars(self) -> None:
        while self._pos < len(self._source) and (
            self._current().isalnum() or self._current() in "_."
        ):
            self._advance()


def tokenize(source: str) -> list[Token]:
    """Tokenize DBML source text into a list of tokens.

    Comments are kept. The final token is always a single EOF token.

    Args:
        source: The full text of a DBML document.

    Returns:
        A list of Token objects ending with a single EOF token.
    """
    scanner = Scanner(source)
    tokens: list[Token] = []
    while True:
        token_type, value = scanner.read()
        line, column = scanner.line_info()
        tokens.append(Token(token_type, value, line, column))
        if token_type == TokenType.EOF:
            return tokens


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "project": TokenType.PROJECT,
    "table": TokenType.TABLE,
    "ref": TokenType.REF,
    "refs": TokenType.REFS,
    "enum": TokenType.ENUM,
    "tablegroup": TokenType.TABLEGROUP,
    "note": TokenType.NOTE,
    "as": TokenType.AS,
    "indexes": TokenType.INDEXES,
    "pk": TokenType.PK,
    "primary": TokenType.PRIMARY,
    "key": TokenType.KEY,
    "unique": TokenType.UNIQUE,
    "increment": TokenType.INCREMENT,
    "default": TokenType.DEFAULT,
    "not": TokenType.NOT,
    "null": TokenType.NULL,
    "type": TokenType.TYPE,
    "headercolor": TokenType.HEADERCOLOR,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACK,
    "]": TokenType.RBRACK,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    "#": TokenType.HASH,
    ">": TokenType.GTR,
    "<": TokenType.LSS,
    "-": TokenType.SUB,
}

_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "\\": "\\",
}
