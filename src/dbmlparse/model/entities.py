# Copyright 2026 dbmlparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entities of the DBML document model."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from dbmlparse.model.types import ColumnDefault, RelationshipType

# ###############
# Public Interface
# ###############


class Relationship(BaseModel):
    """A link between two ``table.column`` endpoints."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: str = _Field(default="", alias="from")
    to: str
    type: RelationshipType


class Ref(BaseModel):
    """A named or anonymous group of relationships."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    relationships: list[Relationship] = _Field(default_factory=list)


class ColumnSettings(BaseModel):
    """Attributes from a column's bracketed settings list."""

    model_config = ConfigDict(frozen=True)

    pk: bool = False
    unique: bool = False
    increment: bool = False
    null: bool = True
    note: str = ""
    ref: Relationship | None = None
    default: ColumnDefault | None = None


class Column(BaseModel):
    """A table column. ``type`` keeps a size argument verbatim, e.g. ``varchar(255)``."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    settings: ColumnSettings = _Field(default_factory=ColumnSettings)


class IndexSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    note: str = ""
    pk: bool = False
    unique: bool = False
    type: Literal["hash", "btree"] | None = None


class Index(BaseModel):
    """An index over one or more fields of a table."""

    model_config = ConfigDict(frozen=True)

    fields: list[str] = _Field(min_length=1)
    settings: IndexSettings = _Field(default_factory=IndexSettings)


class TableSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    header_color: str = ""


class Table(BaseModel):
    """A table definition with its columns and indexes."""

    model_config = ConfigDict(frozen=True)

    name: str
    alias: str = ""
    note: str = ""
    columns: list[Column] = _Field(default_factory=list)
    indexes: list[Index] = _Field(default_factory=list)
    settings: TableSettings = _Field(default_factory=TableSettings)


class EnumValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    note: str = ""


class Enum(BaseModel):
    """An enumeration and its ordered values."""

    model_config = ConfigDict(frozen=True)

    name: str
    values: list[EnumValue] = _Field(default_factory=list)


class TableGroup(BaseModel):
    """A named grouping of table names. Members are not checked against declared tables."""

    model_config = ConfigDict(frozen=True)

    name: str
    members: list[str] = _Field(default_factory=list)


class Project(BaseModel):
    """Project metadata."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    note: str = ""
    database_type: str = ""


class Document(BaseModel):
    """Top-level model representing the parsed contents of a single DBML document."""

    model_config = ConfigDict(frozen=True)

    project: Project = _Field(default_factory=Project)
    tables: list[Table] = _Field(default_factory=list)
    refs: list[Ref] = _Field(default_factory=list)
    enums: list[Enum] = _Field(default_factory=list)
    table_groups: list[TableGroup] = _Field(default_factory=list)
