"""Message size calculation utilities.

This module provides functions to calculate the encoded size of a message
without encoding it.
"""

from __future__ import annotations

from ..codec.wire import HEADER_SIZE, LENGTH_SIZE
from ..models.fields import Field
from ..models.message import Message


def field_size(field: Field) -> int:
    """Size in bytes of one encoded field: length prefix, marker and payload."""
    return LENGTH_SIZE + len(field.marker) + field.size


def encoded_size(message: Message) -> int:
    """Calculate the encoded size of a message in bytes.

    JSON fields are rendered to measure their text, so this costs about as much
    as encoding them.

    Example:
        >>> msg = Message()
        >>> msg.push_blob(b"\\x01\\x02\\x03")
        >>> msg.push_string("hello")
        >>> encoded_size(msg)
        19  # header 1 + (4 + 3) + (4 + 2 + 5)
    """
    return HEADER_SIZE + sum(field_size(field) for field in message)


def field_sizes(message: Message) -> list[int]:
    """Get the encoded size in bytes of each field, in push order.

    Example:
        >>> field_sizes(msg)
        [7, 11]
    """
    return [field_size(field) for field in message]
