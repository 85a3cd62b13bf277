"""AMP binary codec.

This module provides encoding and decoding between Message containers and the
AMP wire format.
"""

from __future__ import annotations

from .decoder import Decoded, decode, decode_into, iter_decode
from .encoder import encode
from .wire import MAX_FIELDS, VERSION

__all__ = [
    "encode",
    "decode",
    "decode_into",
    "iter_decode",
    "Decoded",
    "VERSION",
    "MAX_FIELDS",
]
