# Copyright 2026 dbmlparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for DBML documents.

Pulls tokens one at a time from a token source and builds a Document. Every
decision is made on the single token currently held; nothing is re-read and
nothing is backtracked. The first syntax error aborts the whole parse.
"""

import re
from typing import Protocol

from dbmlparse.model.entities import (
    Column,
    ColumnSettings,
    Document,
    Enum,
    EnumValue,
    Index,
    IndexSettings,
    Project,
    Ref,
    Relationship,
    Table,
    TableGroup,
    TableSettings,
)
from dbmlparse.model.types import ColumnDefault, ColumnDefaultType, RelationshipType
from dbmlparse.parser.lexer import Scanner, TokenType, is_ident
from dbmlparse.tracing import Logger, noop_logger

# ###############
# Public Interface
# ###############


class TokenSource(Protocol):
    """Anything that hands out tokens one at a time, like ``Scanner``."""

    def read(self) -> tuple[TokenType, str]: ...

    def line_info(self) -> tuple[int, int]: ...


class ParseError(Exception):
    """Raised when the parser encounters a syntactically invalid construct.

    Attributes:
        line: 1-based line number of the offending token.
        column: 1-based column number of the offending token.
        literal: The text of the offending token.
        token: The type of the offending token.
        expected: What was expected at that point.
    """

    def __init__(self, expected: str, literal: str, token: TokenType, line: int, column: int) -> None:
        super().__init__(
            f"Line {line}, column {column}: invalid token {literal!r} ({token.name}), expected: {expected}"
        )
        self.expected = expected
        self.literal = literal
        self.token = token
        self.line = line
        self.column = column


def parse(source: str, logger: Logger = noop_logger) -> Document:
    """Parse DBML source text into a Document.

    Args:
        source: The full text of a DBML document.
        logger: Optional hook called at each parse milestone.

    Returns:
        A Document holding the project, tables, refs, enums and table groups
        in source order.

    Raises:
        ParseError: If the source is syntactically invalid.
    """
    return Parser(Scanner(source), logger).parse()


class Parser:
    """Recursive-descent parser over a one-token lookahead stream.

    An instance holds the current token and parses a single document; create
    a new instance (and token source) for every parse.
    """

    def __init__(self, source: TokenSource, logger: Logger = noop_logger) -> None:
        self._source = source
        self._logger = logger
        self._token = TokenType.ILLEGAL
        self._lit = ""

    def parse(self) -> Document:
        """Parse the full token stream and return a Document."""
        project = Project()
        tables: list[Table] = []
        refs: list[Ref] = []
        enums: list[Enum] = []
        table_groups: list[TableGroup] = []
        while True:
            self._next()
            if self._token == TokenType.PROJECT:
                # A later Project block replaces an earlier one.
                project = self._parse_project()
                self._trace("found project", project=project)
            elif self._token == TokenType.TABLE:
                table = self._parse_table()
                self._trace("found table", table=table)
                tables.append(table)
            elif self._token in (TokenType.REF, TokenType.REFS):
                ref = self._parse_ref()
                self._trace("found ref", ref=ref)
                refs.append(ref)
            elif self._token == TokenType.ENUM:
                enum = self._parse_enum()
                self._trace("found enum", enum=enum)
                enums.append(enum)
            elif self._token == TokenType.TABLEGROUP:
                table_group = self._parse_table_group()
                self._trace("found table group", table_group=table_group)
                table_groups.append(table_group)
            elif self._token == TokenType.EOF:
                return Document(
                    project=project,
                    tables=tables,
                    refs=refs,
                    enums=enums,
                    table_groups=table_groups,
                )
            else:
                raise self._error("Project, Ref, Table, Enum, TableGroup")

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _next(self) -> None:
        """Advance to the next non-comment token."""
        while True:
            self._token, self._lit = self._source.read()
            if self._token != TokenType.COMMENT:
                return

    def _error(self, expected: str) -> ParseError:
        """Build a ParseError for the current token."""
        line, column = self._source.line_info()
        return ParseError(expected, self._lit, self._token, line, column)

    def _require(self, expected: str, *types: TokenType) -> str:
        """Return the current literal if the current token is one of ``types``.

        Does not advance. Raises ParseError naming ``expected`` otherwise.
        """
        if self._token not in types:
            raise self._error(expected)
        return self._lit

    def _trace(self, message: str, **params: object) -> None:
        self._logger(message, params)

    # ------------------------------------------------------------------
    # Common value parsers
    # ------------------------------------------------------------------

    def _parse_string(self) -> str:
        """Advance and return the literal of a quoted string of any form."""
        self._next()
        return self._require(
            "string, double quote string, triple string",
            TokenType.STRING,
            TokenType.DSTRING,
            TokenType.TSTRING,
        )

    def _parse_description(self) -> str:
        """Parse ``: <string>`` following a setting keyword."""
        self._next()
        self._require(":", TokenType.COLON)
        return self._parse_string()

    def _parse_note_value(self) -> str:
        """Parse the value of a note whose ':' or '{' is the current token.

        Leaves the cursor on the string (colon form) or on the closing '}'.
        """
        if self._token == TokenType.COLON:
            return self._parse_string()
        self._require(": | {", TokenType.LBRACE)
        note = self._parse_string()
        self._next()
        self._require("}", TokenType.RBRACE)
        return note

    # ------------------------------------------------------------------
    # Project
    # ------------------------------------------------------------------

    def _parse_project(self) -> Project:
        """Parse: Project <name> { [database_type: <string>] [note: <string>] }"""
        self._next()
        name = self._require("project_name", TokenType.IDENT, TokenType.DSTRING)
        self._next()
        self._require("{", TokenType.LBRACE)
        note = ""
        database_type = ""
        while True:
            self._next()
            if self._token == TokenType.IDENT:
                if self._lit != "database_type":
                    raise self._error("database_type")
                database_type = self._parse_description()
            elif self._token == TokenType.NOTE:
                self._next()
                note = self._parse_note_value()
            elif self._token == TokenType.RBRACE:
                return Project(name=name, note=note, database_type=database_type)
            else:
                raise self._error("database_type, note, }")

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _parse_table(self) -> Table:
        """Parse: Table <name> [as <alias>] [<settings>] { <body> }"""
        self._next()
        name = self._parse_table_name()
        self._next()

        alias = ""
        if self._token == TokenType.AS:
            self._next()
            alias = self._require("as NAME", TokenType.IDENT, TokenType.STRING, TokenType.DSTRING)
            self._next()

        settings = TableSettings()
        note = ""
        if self._token == TokenType.LBRACK:
            settings, note = self._parse_table_settings()
            self._next()  # consume ]

        self._require("{", TokenType.LBRACE)
        self._next()
        columns: list[Column] = []
        indexes: list[Index] = []
        while self._token != TokenType.RBRACE:
            if self._token == TokenType.INDEXES:
                indexes.extend(self._parse_indexes())
                continue
            if not (is_ident(self._token) or self._token in (TokenType.STRING, TokenType.DSTRING)):
                raise self._error("column name, Note, Indexes, }")
            leading_token = self._token
            column_name = self._lit
            self._next()
            if leading_token == TokenType.NOTE and self._token in (TokenType.COLON, TokenType.LBRACE):
                note = self._parse_note_value()
                self._next()
            else:
                columns.append(self._parse_column(name, column_name))

        return Table(
            name=name,
            alias=alias,
            note=note,
            columns=columns,
            indexes=indexes,
            settings=settings,
        )

    def _parse_table_name(self) -> str:
        """Accept an identifier, a quoted name, or any word-like literal.

        The last case lets keywords such as ``project`` name a table.
        """
        if self._token in (TokenType.IDENT, TokenType.DSTRING) or _NAME_PATTERN.fullmatch(self._lit):
            return self._lit
        raise self._error("table name")

    def _parse_table_settings(self) -> tuple[TableSettings, str]:
        """Parse: [ headercolor: #<hex>, note: <string> ]

        Returns the settings and the note (empty if none was given).
        """
        header_color = ""
        note = ""
        comma_allowed = False
        while True:
            self._next()
            if self._token == TokenType.COMMA:
                if not comma_allowed:
                    raise self._error("headercolor, note")
                comma_allowed = False
                continue
            if self._token == TokenType.RBRACK:
                return TableSettings(header_color=header_color), note
            if self._token == TokenType.HEADERCOLOR:
                self._next()
                self._require(":", TokenType.COLON)
                self._next()
                self._require("#", TokenType.HASH)
                self._next()
                color = self._require("color string", TokenType.IDENT, TokenType.INT)
                header_color = f"#{color}"
            elif self._token == TokenType.NOTE:
                note = self._parse_description()
            else:
                raise self._error("headercolor, note")
            comma_allowed = True

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def _parse_column(self, table_name: str, name: str) -> Column:
        """Parse: <name> <type> [(<int>)] [<settings>]

        The name has already been consumed; the cursor is on the type.
        """
        column_type = self._require("int, varchar,...", TokenType.IDENT, TokenType.DSTRING)
        self._next()

        if self._token == TokenType.LPAREN:
            self._next()
            size = self._require("int", TokenType.INT)
            self._next()
            self._require(")", TokenType.RPAREN)
            column_type = f"{column_type}({size})"
            self._next()

        settings = ColumnSettings()
        if self._token == TokenType.LBRACK:
            settings = self._parse_column_settings(f"{table_name}.{name}")
            self._next()  # consume ]

        column = Column(name=name, type=column_type, settings=settings)
        self._trace("found column", column=column)
        return column

    def _parse_column_settings(self, endpoint: str) -> ColumnSettings:
        """Parse: [ <setting> (, <setting>)* ]

        A comma is only valid right after a setting. ``endpoint`` is the
        ``table.column`` recorded as the source of an inline ref.
        """
        pk = False
        unique = False
        increment = False
        null = True
        note = ""
        ref: Relationship | None = None
        default: ColumnDefault | None = None
        comma_allowed = False

        while True:
            self._next()
            if self._token == TokenType.COMMA:
                if not comma_allowed:
                    raise self._error("pk | primary key | unique")
                comma_allowed = False
                continue
            if self._token == TokenType.RBRACK:
                return ColumnSettings(
                    pk=pk,
                    unique=unique,
                    increment=increment,
                    null=null,
                    note=note,
                    ref=ref,
                    default=default,
                )

            if self._token == TokenType.PK:
                pk = True
            elif self._token == TokenType.PRIMARY:
                self._next()
                self._require("key", TokenType.KEY)
                pk = True
            elif self._token == TokenType.REF:
                self._next()
                self._require(":", TokenType.COLON)
                self._next()
                rel_type = self._parse_relationship_type()
                self._next()
                target = self._require("table.column_id", TokenType.IDENT, TokenType.DSTRING)
                ref = Relationship(from_=endpoint, to=target, type=rel_type)
            elif self._token == TokenType.NOT:
                self._next()
                self._require("null", TokenType.NULL)
                null = False
            elif self._token == TokenType.NULL:
                null = True
            elif self._token == TokenType.UNIQUE:
                unique = True
            elif self._token == TokenType.INCREMENT:
                increment = True
            elif self._token == TokenType.DEFAULT:
                self._next()
                self._require(":", TokenType.COLON)
                self._next()
                default = self._parse_column_default()
            elif self._token == TokenType.NOTE:
                note = self._parse_description()
            else:
                raise self._error("pk, primary key, ref, not null, null, unique, increment, default, note")
            comma_allowed = True

    def _parse_column_default(self) -> ColumnDefault:
        """Classify the current token as a typed column default."""
        token, lit = self._token, self._lit
        if token in (TokenType.STRING, TokenType.DSTRING):
            return ColumnDefault(raw=lit, value=lit, type=ColumnDefaultType.STRING)
        if token == TokenType.INT:
            try:
                int_value = int(lit, 10)
            except ValueError as exc:
                raise self._error(f"default int value: {exc}") from exc
            return ColumnDefault(raw=lit, value=int_value, type=ColumnDefaultType.NUMBER)
        if token == TokenType.FLOAT:
            try:
                float_value = float(lit)
            except ValueError as exc:
                raise self._error(f"default float value: {exc}") from exc
            return ColumnDefault(raw=lit, value=float_value, type=ColumnDefaultType.NUMBER)
        if token == TokenType.EXPR:
            return ColumnDefault(raw=lit, value=lit, type=ColumnDefaultType.EXPRESSION)
        if token == TokenType.IDENT and lit in _BOOLEAN_LITERALS:
            return ColumnDefault(raw=lit, value=_BOOLEAN_LITERALS[lit], type=ColumnDefaultType.BOOLEAN)
        if token == TokenType.NULL:
            # Tagged BOOLEAN; there is no separate null tag.
            return ColumnDefault(raw=lit, value=None, type=ColumnDefaultType.BOOLEAN)
        raise self._error("default value")

    # ------------------------------------------------------------------
    # Indexes
    # ------------------------------------------------------------------

    def _parse_indexes(self) -> list[Index]:
        """Parse: Indexes { <index>* }

        Leaves the cursor on the token after the closing '}'.
        """
        self._next()
        self._require("{", TokenType.LBRACE)
        self._next()
        indexes: list[Index] = []
        while self._token != TokenType.RBRACE:
            index = self._parse_index()
            self._trace("found index", index=index)
            indexes.append(index)
        self._next()  # consume }
        return indexes

    def _parse_index(self) -> Index:
        """Parse: (<field> | ( <field> [, <field>]* )) [<settings>]"""
        fields: list[str] = []
        if self._token == TokenType.LPAREN:
            self._next()
            while self._is_index_field():
                fields.append(self._index_field())
                self._next()
                if self._token == TokenType.COMMA:
                    self._next()
            self._require(")", TokenType.RPAREN)
            if not fields:
                raise self._error("field_name")
        elif self._is_index_field():
            fields.append(self._index_field())
        else:
            raise self._error("field_name")
        self._next()

        settings = IndexSettings()
        if self._token == TokenType.LBRACK:
            settings = self._parse_index_settings()
            self._next()  # consume ]
        return Index(fields=fields, settings=settings)

    def _is_index_field(self) -> bool:
        return is_ident(self._token) or self._token in (TokenType.DSTRING, TokenType.EXPR)

    def _index_field(self) -> str:
        if self._token == TokenType.EXPR:
            return f"`{self._lit}`"
        return self._lit

    def _parse_index_settings(self) -> IndexSettings:
        """Parse: [ name: <string>, note: <string>, pk, unique, type: hash|btree ]"""
        name = ""
        note = ""
        pk = False
        unique = False
        index_type: str | None = None
        comma_allowed = False

        while True:
            self._next()
            if self._token == TokenType.COMMA:
                if not comma_allowed:
                    raise self._error("[index settings...]")
                comma_allowed = False
                continue
            if self._token == TokenType.RBRACK:
                return IndexSettings(name=name, note=note, pk=pk, unique=unique, type=index_type)

            if self._token == TokenType.IDENT and self._lit.lower() == "name":
                name = self._parse_description()
            elif self._token == TokenType.NOTE:
                note = self._parse_description()
            elif self._token == TokenType.PK:
                pk = True
            elif self._token == TokenType.UNIQUE:
                unique = True
            elif self._token == TokenType.TYPE:
                self._next()
                self._require(":", TokenType.COLON)
                self._next()
                if self._token != TokenType.IDENT or self._lit not in _INDEX_TYPES:
                    raise self._error("hash|btree")
                index_type = self._lit
            else:
                raise self._error("note|name|type|pk|unique")
            comma_allowed = True

    # ------------------------------------------------------------------
    # Refs
    # ------------------------------------------------------------------

    def _parse_ref(self) -> Ref:
        """Parse: Ref [<name>]: <relationship>  |  Ref(s) [<name>] { <relationship>* }"""
        self._next()
        name = ""
        if self._token in (TokenType.IDENT, TokenType.DSTRING):
            name = self._lit
            self._next()

        if self._token == TokenType.COLON:
            self._next()
            return Ref(name=name, relationships=[self._parse_relationship()])

        if self._token == TokenType.LBRACE:
            relationships: list[Relationship] = []
            self._next()
            while self._token != TokenType.RBRACE:
                if self._token not in (TokenType.IDENT, TokenType.DSTRING):
                    raise self._error("Ref: { from > to }")
                relationships.append(self._parse_relationship())
                self._next()
            return Ref(name=name, relationships=relationships)

        raise self._error("Ref: | Refs {}")

    def _parse_relationship(self) -> Relationship:
        """Parse: <from> (> | < | -) <to>, leaving the cursor on <to>."""
        source = self._require("(rel from) table.column_name", TokenType.IDENT, TokenType.DSTRING)
        self._next()
        rel_type = self._parse_relationship_type()
        self._next()
        target = self._require("(rel to) table.column_name", TokenType.IDENT, TokenType.DSTRING)
        return Relationship(from_=source, to=target, type=rel_type)

    def _parse_relationship_type(self) -> RelationshipType:
        rel_type = _RELATIONSHIP_TYPES.get(self._token)
        if rel_type is None:
            raise self._error("> | < | -")
        return rel_type

    # ------------------------------------------------------------------
    # Enums
    # ------------------------------------------------------------------

    def _parse_enum(self) -> Enum:
        """Parse: Enum <name> { (<value> [ [note: <string>] ])* }"""
        self._next()
        if not (is_ident(self._token) or self._token == TokenType.DSTRING):
            raise self._error("enum name")
        name = self._lit
        self._next()
        self._require("{", TokenType.LBRACE)
        self._next()

        values: list[EnumValue] = []
        while is_ident(self._token) or self._token == TokenType.DSTRING:
            value_name = self._lit
            note = ""
            self._next()
            if self._token == TokenType.LBRACK:
                self._next()
                if self._token == TokenType.NOTE:
                    note = self._parse_description()
                    self._next()
                self._require("]", TokenType.RBRACK)
                self._next()
            values.append(EnumValue(name=value_name, note=note))

        self._require("}", TokenType.RBRACE)
        return Enum(name=name, values=values)

    # ------------------------------------------------------------------
    # Table groups
    # ------------------------------------------------------------------

    def _parse_table_group(self) -> TableGroup:
        """Parse: TableGroup <name> { <table>* }"""
        self._next()
        name = self._require("table group name", TokenType.IDENT, TokenType.DSTRING)
        self._next()
        self._require("{", TokenType.LBRACE)
        self._next()

        members: list[str] = []
        while self._token in (TokenType.IDENT, TokenType.DSTRING):
            members.append(self._lit)
            self._next()

        self._require("}", TokenType.RBRACE)
        return TableGroup(name=name, members=members)


# ################
# Implementation
# ################

_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")

_INDEX_TYPES: frozenset[str] = frozenset({"hash", "btree"})

_BOOLEAN_LITERALS: dict[str, bool] = {
    "true": True,
    "false": False,
}

_RELATIONSHIP_TYPES: dict[TokenType, RelationshipType] = {
    TokenType.GTR: RelationshipType.MANY_TO_ONE,
    TokenType.LSS: RelationshipType.ONE_TO_MANY,
    TokenType.SUB: RelationshipType.ONE_TO_ONE,
}
