"""Simple whole-buffer API for htmlencode.

``encode`` and ``decode`` cover the common case of an in-memory byte string;
``htmlencode.codec`` has the incremental classes for streams.
"""

from typing import Optional, Union

from htmlencode.codec import EntityDecoder, EntityEncoder
from htmlencode.shared.config import TranscodeConfig

InputType = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: InputType) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Expected bytes or str, got {type(data).__name__}")


def encode(
    data: InputType,
    config: Optional[TranscodeConfig] = None,
    correlation_id: Optional[str] = None
) -> bytes:
    """Encode a whole input into HTML entity references.

    Args:
        data: Raw input; text is encoded as UTF-8 first
        config: Encoding options (the ``decode`` flag is ignored)
        correlation_id: Optional correlation ID for log records

    Returns:
        Encoded bytes, including the trailing line feed unless suppressed

    Examples:
        >>> encode(b"<a href='x'>", TranscodeConfig(suppress_newline=True))
        b'&lt;a href=&#39;x&#39;&gt;'
    """
    encoder = EntityEncoder(config, correlation_id)
    return encoder.feed(_as_bytes(data)) + encoder.close()


def decode(
    data: InputType,
    config: Optional[TranscodeConfig] = None,
    correlation_id: Optional[str] = None
) -> bytes:
    """Decode HTML entity references back into raw bytes.

    Args:
        data: Entity-encoded input; text is encoded as UTF-8 first
        config: Transcoding options (decoding has no tunable behavior)
        correlation_id: Optional correlation ID for log records

    Returns:
        Decoded bytes

    Raises:
        MalformedEntityError: If the input contains a reference that cannot
            be decoded

    Examples:
        >>> decode(b"&lt;p&gt;&#65;&#x42;&apos;")
        b"<p>AB'"
    """
    decoder = EntityDecoder(config, correlation_id)
    return decoder.feed(_as_bytes(data)) + decoder.close()
