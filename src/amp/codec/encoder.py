"""AMP message encoder.

This module provides the encode() function that serializes a Message into a
single byte buffer. Payloads are rendered in a first pass so the output buffer
is allocated once at its final size.
"""

from __future__ import annotations

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import AllocationError, EncodeError
from ..logging import get_logger
from ..models.fields import BigIntField, BlobField, Field, JsonField, StringField
from ..models.message import Message
from .wire import (
    HEADER_SIZE,
    LENGTH_SIZE,
    LENGTH_STRUCT,
    MAX_LENGTH,
    pack_bigint,
    pack_header,
)

logger = get_logger(__name__)


def encode(message: Message, config: CodecConfig | None = None) -> bytes:
    """Encode a message to AMP wire format.

    Fields are written in push order, each as a 4-byte big-endian length, the
    type marker (none for blobs) and the payload. JSON values are rendered as
    minified text; BigInt values as 8 bytes in ``config.bigint_byteorder``.

    Args:
        message: Message to encode
        config: Codec configuration (DEFAULT_CONFIG if None)

    Returns:
        Encoded message

    Raises:
        CapacityError: If the message holds more than MAX_FIELDS fields
        EncodeError: If a field is too large for its length prefix
        AllocationError: If the output buffer cannot be allocated

    Examples:
        ```python
        from amp import Message, encode

        msg = Message()
        msg.push_blob(b"\\x01\\x02\\x03")
        msg.push_string("hello")

        data = encode(msg)
        assert data[0] == 0x12
        ```
    """
    config = config or DEFAULT_CONFIG
    fields = message.fields

    header = pack_header(len(fields))

    try:
        parts = [_encode_field(field, config) for field in fields]

        total = HEADER_SIZE + sum(
            LENGTH_SIZE + len(marker) + len(payload) for marker, payload in parts
        )
        buffer = bytearray(total)
    except MemoryError as e:
        raise AllocationError("Unable to allocate encoded buffer") from e

    buffer[0] = header
    position = HEADER_SIZE
    for marker, payload in parts:
        LENGTH_STRUCT.pack_into(buffer, position, len(marker) + len(payload))
        position += LENGTH_SIZE
        buffer[position : position + len(marker)] = marker
        position += len(marker)
        buffer[position : position + len(payload)] = payload
        position += len(payload)

    logger.debug("message.encoded", field_count=len(fields), size=total)

    return bytes(buffer)


def _encode_field(field: Field, config: CodecConfig) -> tuple[bytes, bytes]:
    """Render one field as its (marker, payload) pair.

    Raises:
        EncodeError: If marker plus payload exceed the 32-bit length prefix
    """
    if isinstance(field, BlobField):
        payload = field.value
    elif isinstance(field, StringField):
        payload = field.encoded()
    elif isinstance(field, BigIntField):
        payload = pack_bigint(field.value, config.bigint_byteorder)
    elif isinstance(field, JsonField):
        payload = field.text()
    else:
        raise EncodeError(f"Unsupported field {type(field).__name__}")

    marker = field.marker
    if len(marker) + len(payload) > MAX_LENGTH:
        raise EncodeError(
            f"{field.type.value} field of {len(payload)} bytes exceeds the "
            f"{MAX_LENGTH}-byte length limit"
        )

    return marker, payload
