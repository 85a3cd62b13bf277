"""amp: AMP binary message codec

A Python library for AMP, a compact self-describing binary format carrying a
small ordered set of typed values (blobs, strings, 64-bit integers and JSON
documents) across a transport or IPC boundary.

Key Features:
- Up to 15 typed fields per message, kept in push order
- One push method per value kind, backed by Pydantic field models
- Prefix decoding with a zero-copy remainder for pipelined streams
- All-or-nothing decoding with bounds-checked field lengths

Quick Start:
    >>> from amp import Message, decode, encode
    >>>
    >>> msg = Message()
    >>> msg.push_blob(b"\\x01\\x02\\x03")
    >>> msg.push_string("hello")
    >>> msg.push_bigint(123451234512345)
    >>> msg.push_json({"payload": "value"})
    >>> data = encode(msg)
    >>> len(data)
    58
    >>> decoded, rest = decode(data)
    >>> [field.value for field in decoded]
    [b'\\x01\\x02\\x03', 'hello', 123451234512345, {'payload': 'value'}]

Wire format note: a blob whose first two bytes spell a type marker ("s:",
"b:" or "j:") decodes as that type. Callers that send arbitrary binary data
starting with those bytes must wrap it themselves.
"""

from __future__ import annotations

from .codec import MAX_FIELDS, VERSION, Decoded, decode, decode_into, encode, iter_decode
from .config import DEFAULT_CONFIG, CodecConfig
from .exceptions import (
    AllocationError,
    AmpError,
    CapacityError,
    DecodeError,
    EncodeError,
    ErrorCode,
    FieldValueError,
    InvalidVersionError,
    MalformedFieldError,
    MalformedJsonError,
    TruncatedInputError,
)
from .logging import configure_logging, get_logger
from .models import (
    BigIntField,
    BlobField,
    Cursor,
    Field,
    FieldType,
    JsonField,
    Message,
    StringField,
)
from .stream import StreamDecoder
from .utils import encoded_size, field_sizes

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Message",
    "Cursor",
    "encode",
    "decode",
    "decode_into",
    "iter_decode",
    "Decoded",
    "StreamDecoder",
    # Fields
    "Field",
    "FieldType",
    "BlobField",
    "StringField",
    "BigIntField",
    "JsonField",
    # Protocol constants
    "VERSION",
    "MAX_FIELDS",
    # Configuration
    "CodecConfig",
    "DEFAULT_CONFIG",
    # Exceptions
    "AmpError",
    "ErrorCode",
    "CapacityError",
    "AllocationError",
    "FieldValueError",
    "EncodeError",
    "DecodeError",
    "InvalidVersionError",
    "MalformedFieldError",
    "MalformedJsonError",
    "TruncatedInputError",
    # Sizing
    "encoded_size",
    "field_sizes",
    # Logging
    "configure_logging",
    "get_logger",
    # Version
    "__version__",
]
