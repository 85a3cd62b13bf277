"""End-to-end integration tests for the AMP workflow."""

from __future__ import annotations

import pytest

from amp import (
    CodecConfig,
    FieldType,
    MalformedJsonError,
    Message,
    StreamDecoder,
    decode,
    decode_into,
    encode,
    encoded_size,
    iter_decode,
)


def _telemetry(seq: int) -> Message:
    msg = Message()
    msg.push_bigint(seq)
    msg.push_string(f"sensor-{seq}")
    msg.push_blob(bytes([seq % 256]) * (seq + 1))
    msg.push_json({"seq": seq, "ok": seq % 2 == 0, "tags": ["a", "b"]})
    return msg


def test_build_encode_decode_walk() -> None:
    """Test the sender to receiver workflow with the embedded cursor."""
    # Sender
    msg = _telemetry(7)
    data = encode(msg)
    assert len(data) == encoded_size(msg)

    # Receiver
    received, rest = decode(data)
    assert len(rest) == 0

    field = received.get_first()
    values = []
    while field is not None:
        values.append((field.type, field.value))
        field = received.get_next()

    assert values == [
        (FieldType.BIGINT, 7),
        (FieldType.STRING, "sensor-7"),
        (FieldType.BLOB, b"\x07" * 8),
        (FieldType.JSON, {"seq": 7, "ok": False, "tags": ["a", "b"]}),
    ]

    # Release and reuse the same container
    received.release()
    assert received.count == 0
    decode_into(received, data)
    assert received == msg


def test_pipelined_stream_in_chunks() -> None:
    """Test a stream of messages split at arbitrary points."""
    sent = [_telemetry(seq) for seq in range(20)]
    stream = b"".join(encode(msg) for msg in sent)

    decoder = StreamDecoder()
    received: list[Message] = []
    for start in range(0, len(stream), 13):
        received.extend(decoder.feed(stream[start : start + 13]))

    assert received == sent
    assert decoder.pending == 0
    assert list(iter_decode(stream)) == sent


def test_stream_stops_at_corrupt_message() -> None:
    """Test a corrupt message blocks the stream until reset."""
    good = encode(_telemetry(1))
    bad = b"\x11" + (4).to_bytes(4, "big") + b"j:{x"

    decoder = StreamDecoder()
    with pytest.raises(MalformedJsonError):
        decoder.feed(good + bad)

    assert decoder.pending == len(bad)
    with pytest.raises(MalformedJsonError):
        decoder.feed()

    decoder.reset()
    assert decoder.pending == 0
    assert decoder.feed(good) == [_telemetry(1)]


def test_legacy_interop(legacy_reference_bytes: bytes, reference_bytes: bytes) -> None:
    """Test converting a little-endian legacy buffer to the default layout."""
    legacy = CodecConfig(bigint_byteorder="little")

    msg, _ = decode(legacy_reference_bytes, legacy)

    assert encode(msg) == reference_bytes
    assert encode(msg, legacy) == legacy_reference_bytes


def test_independent_cursors_across_readers(reference_bytes: bytes) -> None:
    """Test two readers walking one decoded message."""
    msg, _ = decode(reference_bytes)
    header_reader = msg.cursor()
    body_reader = msg.cursor()

    assert header_reader.first() is not None
    body = list(body_reader)

    assert [field.type for field in body] == [
        FieldType.BLOB,
        FieldType.STRING,
        FieldType.BIGINT,
        FieldType.JSON,
    ]
    assert header_reader.next() is msg[1]
