"""Field types and the message container for amp."""

from __future__ import annotations

from .fields import BigIntField, BlobField, Field, FieldType, JsonField, StringField
from .message import MAX_FIELDS, Cursor, Message

__all__ = [
    "Message",
    "Cursor",
    "MAX_FIELDS",
    "Field",
    "FieldType",
    "BlobField",
    "StringField",
    "BigIntField",
    "JsonField",
]
