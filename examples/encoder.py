#!/usr/bin/env python3
"""AMP encoder example.

This example demonstrates:
1. Creating a message
2. Pushing one field of each type
3. Encoding to the AMP wire format
"""

from __future__ import annotations

from amp import Message, encode, field_sizes


def main() -> None:
    """Run the encoder example."""
    msg = Message()

    msg.push_blob(bytes([1, 2, 3]))
    msg.push_string("hello")
    msg.push_bigint(123451234512345)

    # The message keeps its own copy; later changes to payload are not seen
    payload = {"payload": "value"}
    msg.push_json(payload)
    payload["payload"] = "changed"

    data = encode(msg)

    content = ", ".join(f"0x{byte:02x}" for byte in data)
    print(f"encoded buffer size={len(data)}, content='{content}'")
    print(f"field sizes: {field_sizes(msg)}")

    msg.release()


if __name__ == "__main__":
    main()
