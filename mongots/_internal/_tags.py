# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""Native schema type tags and their TypeScript renditions.

Schema definitions may spell a field type in several ways: a Python
builtin (``str``, ``int``), a Mongoose type name (``"String"``), or one
of the marker classes in :class:`Types`.  All spellings are folded into
a single :class:`NativeTag` once, when a schema is constructed, so that
the compiler only ever deals with the closed enumeration.
"""

from __future__ import annotations
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Final,
)

import datetime
import decimal
import enum

if TYPE_CHECKING:
    from collections.abc import Mapping


class StrEnum(str, enum.Enum):
    pass


class NativeTag(StrEnum):
    String = "String"
    Number = "Number"
    Boolean = "Boolean"
    Date = "Date"
    Buffer = "Buffer"
    ObjectId = "ObjectId"
    Decimal128 = "Decimal128"
    Mixed = "Mixed"
    Map = "Map"


class SchemaType:
    schema_name: ClassVar[str]

    def __init_subclass__(cls) -> None:
        super().__init_subclass__()
        cls.schema_name = cls.__name__


class ObjectId(SchemaType):
    pass


class Decimal128(SchemaType):
    pass


class Mixed(SchemaType):
    pass


class Map(SchemaType):
    pass


class Buffer(SchemaType):
    pass


class Types:
    """Marker types for schema definitions without a Python builtin."""

    ObjectId = ObjectId
    Decimal128 = Decimal128
    Mixed = Mixed
    Map = Map
    Buffer = Buffer


_NATIVE_TAGS: Final[dict[Any, NativeTag]] = {
    str: NativeTag.String,
    "String": NativeTag.String,
    int: NativeTag.Number,
    float: NativeTag.Number,
    "Number": NativeTag.Number,
    bool: NativeTag.Boolean,
    "Boolean": NativeTag.Boolean,
    datetime.datetime: NativeTag.Date,
    datetime.date: NativeTag.Date,
    "Date": NativeTag.Date,
    bytes: NativeTag.Buffer,
    bytearray: NativeTag.Buffer,
    Buffer: NativeTag.Buffer,
    "Buffer": NativeTag.Buffer,
    ObjectId: NativeTag.ObjectId,
    "ObjectId": NativeTag.ObjectId,
    "ObjectID": NativeTag.ObjectId,
    Decimal128: NativeTag.Decimal128,
    decimal.Decimal: NativeTag.Decimal128,
    "Decimal128": NativeTag.Decimal128,
    Mixed: NativeTag.Mixed,
    Any: NativeTag.Mixed,
    object: NativeTag.Mixed,
    "Mixed": NativeTag.Mixed,
    Map: NativeTag.Map,
    dict: NativeTag.Map,
    "Map": NativeTag.Map,
}

# Returned by resolve_base_type() for values that describe a nested
# object rather than a terminal type.
NESTED_OBJECT: Final = "{}"

OBJECT_ID_TYPE: Final = "mongoose.Types.ObjectId"


def native_tag(value: Any) -> NativeTag | None:
    if isinstance(value, NativeTag):
        return value
    if not isinstance(value, (str, type)) and value is not Any:
        return None
    return _NATIVE_TAGS.get(value)


def _enum_values(spec: Mapping[str, Any]) -> list[str]:
    values = spec.get("enum")
    if isinstance(values, dict):
        values = values.get("values")
    if not isinstance(values, (list, tuple)):
        return []
    return [str(v) for v in values]


def resolve_base_type(
    key: str,
    spec: Mapping[str, Any],
    *,
    is_document: bool,
) -> str | None:
    """Resolve the terminal TypeScript type of a field spec.

    Returns ``None`` when the field must be omitted and NESTED_OBJECT
    when *spec* describes a nested object that has to be compiled one
    level deeper.  Never raises.
    """
    tag = spec.get("type")
    if not isinstance(tag, NativeTag):
        return NESTED_OBJECT

    match tag:
        case NativeTag.String:
            values = _enum_values(spec)
            if values:
                return '"' + '" | "'.join(values) + '"'
            return "string"
        case NativeTag.Number:
            # version counters are never part of the generated types
            return None if key == "__v" else "number"
        case NativeTag.Boolean:
            return "boolean"
        case NativeTag.Date:
            return "Date"
        case NativeTag.Buffer:
            return "Buffer"
        case NativeTag.Decimal128:
            return "mongoose.Types.Decimal128" if is_document else "number"
        case NativeTag.ObjectId:
            return OBJECT_ID_TYPE
        case NativeTag.Mixed:
            return "any"
        case NativeTag.Map:
            if is_document:
                return "mongoose.Types.Map<any>"
            return "Map<string, any>"
        case _:
            return NESTED_OBJECT
