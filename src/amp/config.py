"""Codec configuration.

This module provides the configuration dataclass shared by the encoder, the
decoder and the stream decoder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ByteOrder = Literal["big", "little"]


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for AMP encoding and decoding.

    Attributes:
        bigint_byteorder: Byte order of the 8-byte BigInt payload (default "big").
            The rest of the format is big-endian, so "big" is the portable choice.
            Use "little" to talk to legacy peers on little-endian hosts that
            write the native int64 bytes.

        max_field_size: Largest declared field length (marker included) the
            decoder accepts, or None for no limit beyond the buffer itself.
            Useful to refuse absurd lengths before waiting for more stream data.

        strict_utf8: When True (default), a String payload that is not valid
            UTF-8 is a malformed field. When False, it decodes with the
            "surrogateescape" handler so the received bytes re-encode exactly.

    Examples:
        ```python
        from amp import CodecConfig, decode, encode

        # Interoperate with legacy native-order peers on x86
        legacy = CodecConfig(bigint_byteorder="little")
        data = encode(msg, config=legacy)

        # Refuse fields above 64 KiB
        guarded = CodecConfig(max_field_size=64 * 1024)
        message, rest = decode(data, config=guarded)
        ```
    """

    bigint_byteorder: ByteOrder = "big"
    max_field_size: int | None = None
    strict_utf8: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.bigint_byteorder not in ("big", "little"):
            raise ValueError(
                f"bigint_byteorder must be 'big' or 'little', got {self.bigint_byteorder!r}"
            )

        if self.max_field_size is not None and self.max_field_size < 0:
            raise ValueError(f"max_field_size must be >= 0, got {self.max_field_size}")

    @property
    def string_errors(self) -> str:
        """Error handler used when decoding String payloads."""
        return "strict" if self.strict_utf8 else "surrogateescape"


DEFAULT_CONFIG = CodecConfig()
