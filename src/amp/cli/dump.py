"""Message demo and dump CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path

from ..codec.decoder import iter_decode
from ..codec.encoder import encode
from ..config import CodecConfig
from ..models.fields import Field, FieldType, JsonField
from ..models.message import Message
from ..utils.sizing import encoded_size, field_sizes


def build_demo_message() -> Message:
    """Build the reference message: one field of each kind."""
    msg = Message()
    msg.push_blob(bytes([1, 2, 3]))
    msg.push_string("hello")
    msg.push_bigint(123451234512345)
    msg.push_json({"payload": "value"})
    return msg


def format_buffer(data: bytes) -> str:
    """Render an encoded buffer as ``encoded buffer size=N, content='0x.., ...'``."""
    content = ", ".join(f"0x{byte:02x}" for byte in data)
    return f"encoded buffer size={len(data)}, content='{content}'"


def format_field(field: Field) -> str:
    """Render one field the way a human reads it."""
    if field.type is FieldType.BLOB:
        return "<Buffer" + "".join(f" {byte:02x}" for byte in field.value) + ">"
    if isinstance(field, JsonField):
        return field.text().decode("utf-8")
    return str(field.value)


def run_demo(config: CodecConfig) -> None:
    """Encode the reference message and print the buffer."""
    print(format_buffer(encode(build_demo_message(), config)))


def read_input(source: str, hex_input: bool) -> bytes:
    """Read raw (or hex text) bytes from a file path, ``-`` meaning stdin.

    Raises:
        FileNotFoundError: If the path does not exist
        ValueError: If hex input is not valid hexadecimal
    """
    if source == "-":
        data = sys.stdin.buffer.read()
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        data = path.read_bytes()

    if hex_input:
        text = data.decode("ascii").replace("0x", "").replace(",", " ")
        return bytes.fromhex(" ".join(text.split()))
    return data


def dump_messages(data: bytes, config: CodecConfig, verbose: bool = False) -> int:
    """Decode every message in ``data`` and print its fields.

    Returns:
        Number of messages decoded
    """
    count = 0
    for count, message in enumerate(iter_decode(data, config), 1):
        if verbose:
            sizes = " ".join(str(size) for size in field_sizes(message))
            print(
                f"--- message {count}: {message.count} fields, "
                f"{encoded_size(message)} bytes [{sizes}] ---"
            )
        for field in message:
            print(format_field(field))
    return count
