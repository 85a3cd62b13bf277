"""Ordered, bounded container of AMP fields.

A Message holds at most MAX_FIELDS fields in push order. Fields are appended
with one push method per value kind and are never inserted mid-sequence or
removed individually; release() drops them all at once.

Traversal comes in two flavours:

- the embedded cursor (get_first()/get_next()), one per message;
- independent Cursor objects from cursor() or iter(message), any number of
  which can walk the same message at the same time.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from ..exceptions import AllocationError, CapacityError, FieldValueError
from .fields import (
    BigIntField,
    BlobField,
    Field,
    JsonField,
    StringField,
    make_bigint,
    make_blob,
    make_json,
    make_string,
)

MAX_FIELDS = 15

_FIELD_CLASSES = (BlobField, StringField, BigIntField, JsonField)


class Cursor:
    """Independent position over a message's fields.

    A fresh cursor is unset. first() moves it to the head; next() advances it
    by one and returns None once it has gone past the tail. Unset cursors treat
    next() as the first step. A cursor is also an iterator over the fields that
    remain after its current position.

    Example:
        >>> cursor = message.cursor()
        >>> field = cursor.first()
        >>> while field is not None:
        ...     print(field.type, field.value)
        ...     field = cursor.next()
    """

    __slots__ = ("_message", "_index")

    def __init__(self, message: Message) -> None:
        self._message = message
        self._index = -1

    @property
    def current(self) -> Field | None:
        """Field under the cursor, or None when unset or exhausted."""
        if 0 <= self._index < len(self._message._fields):
            return self._message._fields[self._index]
        return None

    def first(self) -> Field | None:
        self._index = 0
        return self.current

    def next(self) -> Field | None:
        if self._index < len(self._message._fields):
            self._index += 1
        return self.current

    def __iter__(self) -> Iterator[Field]:
        return self

    def __next__(self) -> Field:
        field = self.next()
        if field is None:
            raise StopIteration
        return field


class Message:
    """An AMP message: up to MAX_FIELDS typed fields in push order.

    Example:
        >>> msg = Message()
        >>> msg.push_blob(b"\\x01\\x02\\x03")
        >>> msg.push_string("hello")
        >>> msg.push_bigint(123451234512345)
        >>> msg.push_json({"payload": "value"})
        >>> msg.count
        4
    """

    def __init__(self) -> None:
        self._fields: list[Field] = []
        self._cursor = Cursor(self)

    @classmethod
    def create(cls) -> Message:
        """Create an empty message."""
        return cls()

    @property
    def count(self) -> int:
        """Number of fields in the message."""
        return len(self._fields)

    @property
    def fields(self) -> tuple[Field, ...]:
        """Snapshot of the fields in push order."""
        return tuple(self._fields)

    def push(self, field: Field) -> None:
        """Append an already built field.

        Raises:
            CapacityError: If the message already holds MAX_FIELDS fields
            FieldValueError: If ``field`` is not an AMP field
        """
        self._check_capacity()
        if not isinstance(field, _FIELD_CLASSES):
            raise FieldValueError(f"Expected an AMP field, got {type(field).__name__}")
        self._fields.append(field)

    def push_blob(self, data: bytes | bytearray | memoryview) -> None:
        """Append a copy of ``data`` as a blob field."""
        self._check_capacity()
        self._fields.append(self._build(make_blob, data))

    def push_string(self, text: str) -> None:
        """Append ``text`` as a string field."""
        self._check_capacity()
        self._fields.append(self._build(make_string, text))

    def push_bigint(self, value: int) -> None:
        """Append a signed 64-bit integer field."""
        self._check_capacity()
        self._fields.append(self._build(make_bigint, value))

    def push_json(self, value: Any) -> None:
        """Append a deep copy of a structured JSON value."""
        self._check_capacity()
        self._fields.append(self._build(make_json, value))

    def get_first(self) -> Field | None:
        """Reset the embedded cursor to the head and return the head field."""
        return self._cursor.first()

    def get_next(self) -> Field | None:
        """Advance the embedded cursor; None once past the last field."""
        return self._cursor.next()

    def cursor(self) -> Cursor:
        """Return a new cursor that does not share state with any other."""
        return Cursor(self)

    def release(self) -> None:
        """Drop every field and reset the embedded cursor."""
        self._fields.clear()
        self._cursor = Cursor(self)

    def _check_capacity(self, incoming: int = 1) -> None:
        if len(self._fields) + incoming > MAX_FIELDS:
            raise CapacityError(
                f"Message holds {len(self._fields)} fields, cannot add {incoming} "
                f"(maximum {MAX_FIELDS})"
            )

    def _extend(self, fields: list[Field]) -> None:
        # All-or-nothing append used by the decoder
        self._check_capacity(len(fields))
        self._fields.extend(fields)

    @staticmethod
    def _build(factory: Any, value: Any) -> Field:
        try:
            return factory(value)  # type: ignore[no-any-return]
        except MemoryError as e:
            raise AllocationError("Unable to allocate field") from e

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return Cursor(self)

    def __getitem__(self, index: int) -> Field:
        return self._fields[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return self._fields == other._fields

    def __repr__(self) -> str:
        kinds = ", ".join(field.type.value for field in self._fields)
        return f"Message(count={len(self._fields)}, fields=[{kinds}])"
