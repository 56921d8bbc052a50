# Copyright 2026 dbmlparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document model for parsed DBML (project, tables, refs, enums, table groups)."""

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

__all__ = [
    # Value types
    "ColumnDefault",
    "ColumnDefaultType",
    "RelationshipType",
    # Entities
    "Relationship",
    "Ref",
    "ColumnSettings",
    "Column",
    "IndexSettings",
    "Index",
    "TableSettings",
    "Table",
    "EnumValue",
    "Enum",
    "TableGroup",
    "Project",
    "Document",
]
