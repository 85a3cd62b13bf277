"""Incremental decoding of AMP messages arriving in chunks.

A transport rarely delivers exactly one message per read. StreamDecoder keeps
the bytes received so far and hands out every message that has fully arrived,
leaving a partial message buffered until the rest of it is fed.
"""

from __future__ import annotations

from .codec.decoder import Buffer, decode
from .config import DEFAULT_CONFIG, CodecConfig
from .exceptions import DecodeError, TruncatedInputError
from .logging import get_logger
from .models.message import Message

logger = get_logger(__name__)


class StreamDecoder:
    """Accumulate bytes and decode complete messages from them.

    Truncated input is not an error here: it means the rest of the message has
    not arrived yet. Any other decode error propagates from feed(); the bad
    message stays at the head of the buffer, and messages completed before it
    are returned by the next feed() call.

    Example:
        >>> decoder = StreamDecoder()
        >>> for chunk in chunks:
        ...     for message in decoder.feed(chunk):
        ...         handle(message)
        >>> decoder.pending
        0
    """

    def __init__(self, config: CodecConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._buffer = bytearray()
        self._ready: list[Message] = []

    @property
    def pending(self) -> int:
        """Number of buffered bytes not yet decoded."""
        return len(self._buffer)

    def feed(self, chunk: Buffer = b"") -> list[Message]:
        """Add received bytes and return the messages they complete.

        Raises:
            DecodeError: If buffered data is not a valid message (other than
                being incomplete)
        """
        self._buffer += chunk

        messages = self._ready
        self._ready = []

        # Decode from a snapshot so no view pins the growable buffer
        remaining = memoryview(bytes(self._buffer))
        try:
            while remaining:
                try:
                    message, remaining = decode(remaining, self.config)
                except TruncatedInputError as e:
                    logger.debug("stream.incomplete", pending=len(remaining), needed=e.needed)
                    break
                messages.append(message)
                logger.debug("stream.message_ready", field_count=message.count)
        except DecodeError:
            self._ready = messages
            raise
        finally:
            del self._buffer[: len(self._buffer) - len(remaining)]

        return messages

    def reset(self) -> None:
        """Drop buffered bytes and undelivered messages."""
        self._buffer.clear()
        self._ready.clear()
