"""Field types carried by AMP messages.

Each field kind is a frozen Pydantic model tagged by ``type``; ``Field`` is the
discriminated union of the four kinds. Fields own their payload: blobs are
copied into ``bytes`` and JSON values are deep-copied at construction time.
"""

from __future__ import annotations

import copy
import enum
import math
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, JsonValue, ValidationError, field_validator
from pydantic import Field as PydanticField

from ..exceptions import FieldValueError

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

BIGINT_SIZE = 8


class FieldType(enum.Enum):
    """The four value kinds a field can carry."""

    BLOB = "blob"
    STRING = "string"
    BIGINT = "bigint"
    JSON = "json"

    @property
    def marker(self) -> bytes:
        """Two-byte wire marker for this type (empty for blobs)."""
        return _MARKERS[self]


_MARKERS: dict[FieldType, bytes] = {
    FieldType.BLOB: b"",
    FieldType.STRING: b"s:",
    FieldType.BIGINT: b"b:",
    FieldType.JSON: b"j:",
}


class _BaseField(BaseModel):
    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="forbid",
    )

    @property
    def marker(self) -> bytes:
        return self.type.marker  # type: ignore[attr-defined,no-any-return]

    @property
    def size(self) -> int:
        """Payload size in bytes, excluding the wire marker."""
        raise NotImplementedError


class BlobField(_BaseField):
    """Raw byte payload with arbitrary content."""

    type: Literal[FieldType.BLOB] = FieldType.BLOB
    value: bytes

    @property
    def size(self) -> int:
        return len(self.value)


class StringField(_BaseField):
    """Text payload, sent as UTF-8 without terminator."""

    type: Literal[FieldType.STRING] = FieldType.STRING
    value: str

    @field_validator("value")
    @classmethod
    def _check_encodable(cls, value: str) -> str:
        # Lone surrogates only survive when they came from surrogateescape
        value.encode("utf-8", "surrogateescape")
        return value

    def encoded(self) -> bytes:
        return self.value.encode("utf-8", "surrogateescape")

    @property
    def size(self) -> int:
        return len(self.encoded())


class BigIntField(_BaseField):
    """Signed 64-bit integer."""

    type: Literal[FieldType.BIGINT] = FieldType.BIGINT
    value: int = PydanticField(ge=INT64_MIN, le=INT64_MAX)

    @property
    def size(self) -> int:
        return BIGINT_SIZE


class JsonField(_BaseField):
    """Structured JSON value (object, array, string, number, boolean or null).

    The value is a tree of plain Python objects. Its wire form is the canonical
    minified text produced at encode time.
    """

    type: Literal[FieldType.JSON] = FieldType.JSON
    value: JsonValue

    @field_validator("value")
    @classmethod
    def _check_finite(cls, value: JsonValue) -> JsonValue:
        # NaN and Infinity have no JSON text form
        if _has_non_finite(value):
            raise ValueError("JSON numbers must be finite")
        return value

    def text(self) -> bytes:
        """Canonical minified JSON text of the value."""
        from ..codec.jsontext import dump_json

        return dump_json(self.value)

    @property
    def size(self) -> int:
        return len(self.text())


def _has_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(item) for item in value.values())
    if isinstance(value, list):
        return any(_has_non_finite(item) for item in value)
    return False


Field = Annotated[
    Union[BlobField, StringField, BigIntField, JsonField],
    PydanticField(discriminator="type"),
]


def _build(model: type[_BaseField], value: Any) -> _BaseField:
    try:
        return model(value=value)
    except ValidationError as e:
        raise FieldValueError(f"Invalid {model.__name__} value: {e}") from e


def make_blob(data: bytes | bytearray | memoryview) -> BlobField:
    """Build a blob field from any bytes-like object (the bytes are copied)."""
    if isinstance(data, str) or not isinstance(data, (bytes, bytearray, memoryview)):
        raise FieldValueError(f"Blob value must be bytes-like, got {type(data).__name__}")
    return _build(BlobField, bytes(data))  # type: ignore[return-value]


def make_string(text: str) -> StringField:
    """Build a string field from text that is valid UTF-8."""
    if isinstance(text, str):
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise FieldValueError(f"String value is not valid UTF-8 text: {e}") from e
    return _build(StringField, text)  # type: ignore[return-value]


def make_bigint(value: int) -> BigIntField:
    """Build a 64-bit signed integer field."""
    return _build(BigIntField, value)  # type: ignore[return-value]


def make_json(value: Any) -> JsonField:
    """Build a JSON field holding a private deep copy of ``value``."""
    return _build(JsonField, copy.deepcopy(value))  # type: ignore[return-value]
