"""HTML entity encoder.

Replaces selected bytes with named or numeric character references. Every
byte value has a representation, so encoding never fails.
"""

from typing import Iterable, Iterator, List, Optional

from htmlencode.character import LINE_FEED, is_printable, named_reference
from htmlencode.shared.config import TranscodeConfig
from htmlencode.shared.logging import get_logger


def numeric_reference(byte: int, use_hex: bool = False) -> bytes:
    """Format a byte as a numeric character reference.

    Args:
        byte: Byte value in 0..255
        use_hex: Use ``&#xHH;`` with two uppercase digits instead of ``&#N;``

    Returns:
        Reference such as ``b"&#60;"`` or ``b"&#x3C;"``
    """
    if use_hex:
        return b"&#x%02X;" % byte
    return b"&#%d;" % byte


def build_encoding_table(config: TranscodeConfig) -> List[bytes]:
    """Compute the output for each of the 256 byte values under ``config``."""
    table = []
    for byte in range(256):
        if config.line_mode and byte == LINE_FEED:
            table.append(bytes((byte,)))
        elif (config.encode_all
              or (config.encode_binary and not is_printable(byte))
              or byte in config.special_chars):
            named = named_reference(byte)
            if named is not None and not config.encode_all:
                table.append(named)
            else:
                table.append(numeric_reference(byte, config.use_hex))
        else:
            table.append(bytes((byte,)))
    return table


class EntityEncoder:
    """Incremental encoder from raw bytes to entity-encoded bytes.

    Input may be fed in arbitrary chunks; the output does not depend on where
    the chunks are split. ``close`` produces the trailing line feed.
    """

    def __init__(
        self,
        config: Optional[TranscodeConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or TranscodeConfig()
        self.logger = get_logger(__name__, correlation_id, "encoder")
        self._table = build_encoding_table(self.config)
        self._escaped = bytes(
            byte for byte in range(256) if self._table[byte] != bytes((byte,))
        )
        self.bytes_read = 0
        self.entities_encoded = 0
        self.closed = False

    def feed(self, data: bytes) -> bytes:
        """Encode a chunk of input.

        Raises:
            RuntimeError: If the encoder was already closed
        """
        if self.closed:
            raise RuntimeError("Cannot feed a closed encoder")
        if not data:
            return b""

        self.bytes_read += len(data)
        # Deleting the escaped bytes leaves only the literal ones
        self.entities_encoded += len(data) - len(data.translate(None, self._escaped))
        table = self._table
        return b"".join([table[byte] for byte in data])

    def close(self) -> bytes:
        """Finish encoding and return the trailing line feed if one is due."""
        if self.closed:
            return b""
        self.closed = True
        self.logger.debug(
            "Encoding finished",
            extra={
                "bytes_read": self.bytes_read,
                "entities_encoded": self.entities_encoded,
            }
        )
        if self.config.suppress_newline:
            return b""
        return b"\n"

    def iter_encode(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        """Encode an iterable of chunks, yielding each non-empty output chunk."""
        for chunk in chunks:
            output = self.feed(chunk)
            if output:
                yield output
        tail = self.close()
        if tail:
            yield tail
