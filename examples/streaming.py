#!/usr/bin/env python3
"""Pipelined AMP messages over a byte stream.

This example demonstrates:
1. Sending several messages back-to-back on one stream
2. Receiving them in arbitrary chunks with StreamDecoder
3. Walking each message with an independent cursor
"""

from __future__ import annotations

from amp import Message, StreamDecoder, configure_logging, encode


def make_reading(sensor: str, value: int) -> Message:
    msg = Message()
    msg.push_string(sensor)
    msg.push_bigint(value)
    msg.push_json({"unit": "mV", "ok": value >= 0})
    return msg


def main() -> None:
    """Run the streaming example."""
    configure_logging(log_level="DEBUG")

    stream = b"".join(encode(make_reading(f"sensor-{i}", i * 100 - 150)) for i in range(4))

    decoder = StreamDecoder()
    for start in range(0, len(stream), 7):
        for msg in decoder.feed(stream[start : start + 7]):
            print(" | ".join(repr(field.value) for field in msg.cursor()))

    print(f"{decoder.pending} bytes left over")


if __name__ == "__main__":
    main()
