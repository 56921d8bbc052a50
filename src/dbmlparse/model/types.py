# Copyright 2026 dbmlparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Value types shared by the DBML document model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

# ###############
# Public Interface
# ###############


class ColumnDefaultType(Enum):
    """Type tag of a column default value.

    Integers and floats share NUMBER. A literal ``null`` default is tagged
    BOOLEAN with a ``None`` value.
    """

    UNKNOWN = "unknown"
    NUMBER = "number"
    STRING = "string"
    EXPRESSION = "expression"
    BOOLEAN = "boolean"


class RelationshipType(Enum):
    """Cardinality of a relationship, derived from its operator."""

    MANY_TO_ONE = "many-to-one"
    ONE_TO_MANY = "one-to-many"
    ONE_TO_ONE = "one-to-one"


class ColumnDefault(BaseModel):
    """The typed default value of a column.

    Attributes:
        raw: The literal text as written (without quotes or backticks).
        value: The converted value: str, int, float, bool, or None.
        type: The tag the value was classified under.
    """

    model_config = ConfigDict(frozen=True)

    raw: str
    value: str | int | float | bool | None = None
    type: ColumnDefaultType = ColumnDefaultType.UNKNOWN
