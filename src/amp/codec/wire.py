"""Low-level AMP wire primitives.

Layout of one message::

    byte0 = (VERSION << 4) | field_count
    repeat field_count times:
        length   4 bytes, big-endian, marker + payload
        marker   2 bytes, b"s:" | b"b:" | b"j:" (absent for blobs)
        payload  length - len(marker) bytes
"""

from __future__ import annotations

import struct

from ..config import ByteOrder
from ..exceptions import CapacityError, InvalidVersionError, MalformedFieldError
from ..models.fields import BIGINT_SIZE, FieldType
from ..models.message import MAX_FIELDS

VERSION = 1

HEADER_SIZE = 1
LENGTH_SIZE = 4
MARKER_SIZE = 2
MAX_LENGTH = 0xFFFFFFFF

LENGTH_STRUCT = struct.Struct(">I")

_BIGINT_STRUCTS = {
    "big": struct.Struct(">q"),
    "little": struct.Struct("<q"),
}

_TYPES_BY_MARKER: dict[bytes, FieldType] = {
    FieldType.STRING.marker: FieldType.STRING,
    FieldType.BIGINT.marker: FieldType.BIGINT,
    FieldType.JSON.marker: FieldType.JSON,
}


def pack_header(field_count: int) -> int:
    """Build the header byte for ``field_count`` fields.

    Raises:
        CapacityError: If the count does not fit the 4-bit header field
    """
    if not 0 <= field_count <= MAX_FIELDS:
        raise CapacityError(
            f"Message has {field_count} fields, header allows at most {MAX_FIELDS}"
        )
    return (VERSION << 4) | field_count


def unpack_header(byte: int) -> int:
    """Validate a header byte and return its field count.

    Raises:
        InvalidVersionError: If the version nibble is not VERSION
    """
    version = (byte & 0xF0) >> 4
    if version != VERSION:
        raise InvalidVersionError(version, VERSION)
    return byte & 0x0F


def classify(payload: memoryview) -> FieldType:
    """Classify a field from the leading bytes of its length-delimited data.

    Anything that does not start with a known marker is a blob, including a
    blob shorter than a marker. A blob whose first two bytes happen to spell a
    marker is indistinguishable from that type on the wire.
    """
    if len(payload) < MARKER_SIZE:
        return FieldType.BLOB
    return _TYPES_BY_MARKER.get(bytes(payload[:MARKER_SIZE]), FieldType.BLOB)


def pack_bigint(value: int, byteorder: ByteOrder = "big") -> bytes:
    return _BIGINT_STRUCTS[byteorder].pack(value)


def unpack_bigint(data: memoryview, byteorder: ByteOrder = "big") -> int:
    """Read an 8-byte two's complement integer.

    Raises:
        MalformedFieldError: If ``data`` is not exactly 8 bytes
    """
    if len(data) != BIGINT_SIZE:
        raise MalformedFieldError(
            f"BigInt payload must be {BIGINT_SIZE} bytes, got {len(data)} bytes"
        )
    return int(_BIGINT_STRUCTS[byteorder].unpack(data)[0])
