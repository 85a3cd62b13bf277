"""AMP message decoder.

This module provides decode(), which parses one message from the front of a
buffer and hands back the unconsumed remainder, so several messages sent
back-to-back on one stream can be decoded without copying the input.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple, Union

from pydantic import ValidationError

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import (
    AllocationError,
    DecodeError,
    MalformedFieldError,
    MalformedJsonError,
    TruncatedInputError,
)
from ..logging import get_logger
from ..models.fields import BigIntField, BlobField, Field, FieldType, JsonField, StringField
from ..models.message import Message
from .jsontext import load_json
from .wire import (
    HEADER_SIZE,
    LENGTH_SIZE,
    LENGTH_STRUCT,
    MARKER_SIZE,
    classify,
    unpack_bigint,
    unpack_header,
)

logger = get_logger(__name__)

Buffer = Union[bytes, bytearray, memoryview]


class Decoded(NamedTuple):
    """Result of decode(): the message and the bytes left after it."""

    message: Message
    remaining: memoryview


def decode(data: Buffer, config: CodecConfig | None = None) -> Decoded:
    """Decode the message at the front of ``data``.

    Args:
        data: Buffer starting with a complete encoded message; any bytes
            after it are left untouched
        config: Codec configuration (DEFAULT_CONFIG if None)

    Returns:
        Decoded(message, remaining), where ``remaining`` is a zero-copy view of
        ``data`` starting right after the consumed bytes

    Raises:
        InvalidVersionError: If the header carries another protocol version
        TruncatedInputError: If the buffer ends before the declared data
        MalformedFieldError: If a field's marker and length disagree
        MalformedJsonError: If a JSON field's text cannot be parsed

    Examples:
        ```python
        from amp import decode

        message, rest = decode(stream_bytes)
        for field in message:
            print(field.type, field.value)

        # Next message on the same stream
        if rest:
            second, rest = decode(rest)
        ```
    """
    message = Message()
    remaining = decode_into(message, data, config)
    return Decoded(message, remaining)


def decode_into(message: Message, data: Buffer, config: CodecConfig | None = None) -> memoryview:
    """Decode the message at the front of ``data`` and append its fields to ``message``.

    Either every decoded field is appended or, on any error, ``message`` is
    left exactly as it was.

    Returns:
        Zero-copy view of ``data`` after the consumed bytes

    Raises:
        CapacityError: If ``message`` cannot take all decoded fields
        DecodeError: Any of the errors raised by decode()
    """
    config = config or DEFAULT_CONFIG
    view = memoryview(data).cast("B")

    try:
        fields, consumed = _parse(view, config)
    except DecodeError as e:
        logger.debug("message.decode_failed", error=e.code.value, reason=str(e))
        raise
    except MemoryError as e:
        raise AllocationError("Unable to allocate decoded fields") from e

    message._extend(fields)

    logger.debug("message.decoded", field_count=len(fields), consumed=consumed)

    return view[consumed:]


def iter_decode(data: Buffer, config: CodecConfig | None = None) -> Iterator[Message]:
    """Decode every message in a buffer holding back-to-back messages.

    Raises:
        DecodeError: On the first message that fails to decode, including a
            trailing partial message
    """
    view = memoryview(data).cast("B")
    while view:
        message, view = decode(view, config)
        yield message


def _parse(view: memoryview, config: CodecConfig) -> tuple[list[Field], int]:
    """Parse one message into a staging list of fields.

    Returns:
        (fields, consumed byte count)
    """
    if len(view) < HEADER_SIZE:
        raise TruncatedInputError("Empty buffer, expected a message header", needed=HEADER_SIZE)

    count = unpack_header(view[0])
    position = HEADER_SIZE

    fields: list[Field] = []
    for index in range(count):
        if len(view) - position < LENGTH_SIZE:
            raise TruncatedInputError(
                f"Truncated length prefix of field {index}",
                needed=LENGTH_SIZE - (len(view) - position),
            )
        (length,) = LENGTH_STRUCT.unpack_from(view, position)
        position += LENGTH_SIZE

        if config.max_field_size is not None and length > config.max_field_size:
            raise MalformedFieldError(
                f"Field {index} declares {length} bytes, limit is {config.max_field_size}"
            )

        available = len(view) - position
        if length > available:
            raise TruncatedInputError(
                f"Field {index} declares {length} bytes but only {available} remain",
                needed=length - available,
            )

        fields.append(_decode_field(view[position : position + length], index, config))
        position += length

    return fields, position


def _decode_field(data: memoryview, index: int, config: CodecConfig) -> Field:
    """Decode one field from its length-delimited bytes (marker included)."""
    field_type = classify(data)

    if field_type is FieldType.BLOB:
        return BlobField(value=bytes(data))

    payload = data[MARKER_SIZE:]

    if field_type is FieldType.STRING:
        try:
            text = str(payload, "utf-8", config.string_errors)
        except UnicodeDecodeError as e:
            raise MalformedFieldError(f"Field {index}: invalid UTF-8 string: {e}") from e
        return StringField(value=text)

    if field_type is FieldType.BIGINT:
        try:
            return BigIntField(value=unpack_bigint(payload, config.bigint_byteorder))
        except MalformedFieldError as e:
            raise MalformedFieldError(f"Field {index}: {e}") from e

    try:
        return JsonField(value=load_json(payload))
    except ValidationError as e:
        raise MalformedJsonError(f"Field {index}: unsupported JSON value: {e}") from e
