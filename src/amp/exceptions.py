"""Exception hierarchy for amp.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from AmpError for easy catching of any amp-specific error,
and each carries an ErrorCode so callers can switch on the failure kind.
"""

from __future__ import annotations

import enum


class ErrorCode(enum.Enum):
    """Status codes for every failure the codec can report."""

    CAPACITY_EXCEEDED = "capacity-exceeded"
    ALLOCATION_FAILURE = "allocation-failure"
    INVALID_VALUE = "invalid-value"
    ENCODE_FAILURE = "encode-failure"
    INVALID_VERSION = "invalid-version"
    MALFORMED_FIELD = "malformed-field"
    MALFORMED_JSON = "malformed-json-text"
    TRUNCATED_INPUT = "truncated-input"


class AmpError(Exception):
    """Base exception for all amp errors.

    Subclasses set ``code``; the base class carries none.
    """

    code: ErrorCode | None = None


class CapacityError(AmpError):
    """Raised when a message would hold more than MAX_FIELDS fields.

    Examples:
        - Pushing a 16th field
        - Encoding a message whose count no longer fits the header nibble
        - Decoding into a message that cannot take all decoded fields
    """

    code = ErrorCode.CAPACITY_EXCEEDED


class AllocationError(AmpError):
    """Raised when memory for a field or an output buffer cannot be obtained."""

    code = ErrorCode.ALLOCATION_FAILURE


class FieldValueError(AmpError, ValueError):
    """Raised when a pushed value cannot be turned into a field.

    Examples:
        - Pushing a str as a blob
        - BigInt outside the signed 64-bit range
        - JSON value containing a non-JSON type (set, bytes, object...)
    """

    code = ErrorCode.INVALID_VALUE


class EncodeError(AmpError):
    """Raised when encoding a message fails.

    Examples:
        - Field payload does not fit the 32-bit length prefix
    """

    code = ErrorCode.ENCODE_FAILURE


class DecodeError(AmpError):
    """Base class for failures while decoding binary data."""

    code: ErrorCode = ErrorCode.MALFORMED_FIELD


class InvalidVersionError(DecodeError):
    """Raised when the header's version nibble is not the supported version."""

    code = ErrorCode.INVALID_VERSION

    def __init__(self, version: int, expected: int) -> None:
        super().__init__(f"Unsupported protocol version {version}, expected {expected}")
        self.version = version
        self.expected = expected


class MalformedFieldError(DecodeError):
    """Raised when a field's marker and length do not agree.

    Examples:
        - BigInt field whose payload is not 8 bytes
        - String field that is not valid UTF-8
        - Declared length above the configured limit
    """

    code = ErrorCode.MALFORMED_FIELD


class MalformedJsonError(DecodeError):
    """Raised when a JSON field's text cannot be parsed."""

    code = ErrorCode.MALFORMED_JSON


class TruncatedInputError(DecodeError):
    """Raised when the buffer ends before the declared data.

    The caller may accumulate more bytes and retry.
    """

    code = ErrorCode.TRUNCATED_INPUT

    def __init__(self, message: str, needed: int | None = None) -> None:
        super().__init__(message)
        self.needed = needed
