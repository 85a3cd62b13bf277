"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from amp import Message

# Blob [1,2,3], "hello", 123451234512345, {"payload":"value"}; BigInt big-endian
REFERENCE_BYTES = bytes.fromhex(
    "14"
    "00000003" "010203"
    "00000007" "733a" "68656c6c6f"
    "0000000a" "623a" "000070473afaedd9"
    "00000015" "6a3a" "7b227061796c6f6164223a2276616c7565227d"
)  # fmt: skip

# Same message as written by legacy native-order writers on little-endian hosts
LEGACY_REFERENCE_BYTES = bytes.fromhex(
    "14"
    "00000003" "010203"
    "00000007" "733a" "68656c6c6f"
    "0000000a" "623a" "d9edfa3a47700000"
    "00000015" "6a3a" "7b227061796c6f6164223a2276616c7565227d"
)  # fmt: skip


@pytest.fixture
def reference_message() -> Message:
    """Message with one field of each type."""
    msg = Message()
    msg.push_blob(bytes([1, 2, 3]))
    msg.push_string("hello")
    msg.push_bigint(123451234512345)
    msg.push_json({"payload": "value"})
    return msg


@pytest.fixture
def reference_bytes() -> bytes:
    """Encoding of reference_message with the default configuration."""
    return REFERENCE_BYTES


@pytest.fixture
def legacy_reference_bytes() -> bytes:
    """Encoding of reference_message with a little-endian BigInt."""
    return LEGACY_REFERENCE_BYTES


@pytest.fixture
def full_message() -> Message:
    """Message holding the maximum number of fields."""
    msg = Message()
    for i in range(15):
        msg.push_bigint(i)
    return msg
