#!/usr/bin/env python3
"""AMP decoder example.

This example demonstrates:
1. Decoding a message from the front of a buffer
2. Walking the fields with the message cursor
3. Printing each field according to its type
"""

from __future__ import annotations

from amp import FieldType, decode

# Blob [1,2,3], "hello", 123451234512345, {"payload":"value"}
BUFFER = bytes(
    [
        0x14, 0x00, 0x00, 0x00, 0x03, 0x01, 0x02, 0x03, 0x00, 0x00, 0x00, 0x07,
        0x73, 0x3A, 0x68, 0x65, 0x6C, 0x6C, 0x6F, 0x00, 0x00, 0x00, 0x0A, 0x62,
        0x3A, 0x00, 0x00, 0x70, 0x47, 0x3A, 0xFA, 0xED, 0xD9, 0x00, 0x00, 0x00,
        0x15, 0x6A, 0x3A, 0x7B, 0x22, 0x70, 0x61, 0x79, 0x6C, 0x6F, 0x61, 0x64,
        0x22, 0x3A, 0x22, 0x76, 0x61, 0x6C, 0x75, 0x65, 0x22, 0x7D,
    ]
)  # fmt: skip


def main() -> None:
    """Run the decoder example."""
    msg, rest = decode(BUFFER)
    print(f"decoded {msg.count} fields, {len(rest)} bytes left")

    field = msg.get_first()
    while field is not None:
        if field.type is FieldType.BLOB:
            print("<Buffer" + "".join(f" {byte:02x}" for byte in field.value) + ">")
        elif field.type is FieldType.JSON:
            print(field.text().decode("utf-8"))
        else:
            print(field.value)
        field = msg.get_next()

    msg.release()


if __name__ == "__main__":
    main()
