"""Blocking stream driver for the entity encoder and decoder.

Reads a binary input stream chunk by chunk, runs the codec selected by the
configuration and writes each result chunk to the output stream as soon as it
is produced.
"""

import time
from typing import BinaryIO, Callable, Iterator, Optional, Union

from htmlencode.shared.config import TranscodeConfig
from htmlencode.shared.logging import get_logger
from htmlencode.shared.result import MS_PER_SECOND, TranscodeMetrics

from .decoder import EntityDecoder, MalformedEntityError
from .encoder import EntityEncoder

Codec = Union[EntityEncoder, EntityDecoder]


def create_codec(
    config: TranscodeConfig,
    correlation_id: Optional[str] = None
) -> Codec:
    """Create the encoder or decoder selected by ``config.decode``."""
    if config.decode:
        return EntityDecoder(config, correlation_id)
    return EntityEncoder(config, correlation_id)


def iter_chunks(source: BinaryIO, buffer_size: int) -> Iterator[bytes]:
    """Yield chunks from a binary stream until end of input.

    ``read1`` is preferred when the stream has it, so data typed on a terminal
    is processed as soon as it arrives instead of after a full buffer.
    """
    read: Callable[[int], bytes] = getattr(source, "read1", source.read)
    while True:
        chunk = read(buffer_size)
        if not chunk:
            break
        yield chunk


def _write(sink: BinaryIO, data: bytes, metrics: TranscodeMetrics) -> None:
    if data:
        sink.write(data)
        sink.flush()
        metrics.bytes_written += len(data)


def transcode(
    source: BinaryIO,
    sink: BinaryIO,
    config: Optional[TranscodeConfig] = None,
    correlation_id: Optional[str] = None
) -> TranscodeMetrics:
    """Encode or decode everything from ``source`` into ``sink``.

    Args:
        source: Binary input stream, read until exhausted
        sink: Binary output stream, flushed after every chunk
        config: Transcoding configuration (defaults to encoding)
        correlation_id: Optional correlation ID for log records

    Returns:
        TranscodeMetrics for the completed pass

    Raises:
        MalformedEntityError: When decoding hits a bad entity. Everything
            decoded before the bad entity has been written to ``sink``.
    """
    config = config or TranscodeConfig()
    logger = get_logger(__name__, correlation_id, "stream")
    codec = create_codec(config, correlation_id)
    metrics = TranscodeMetrics(mode=config.mode)
    start_time = time.time()

    logger.debug(
        "Starting transcode",
        extra={"mode": config.mode, "buffer_size": config.buffer_size}
    )

    try:
        for chunk in iter_chunks(source, config.buffer_size):
            metrics.chunks_processed += 1
            metrics.bytes_read += len(chunk)
            _write(sink, codec.feed(chunk), metrics)
        _write(sink, codec.close(), metrics)
    except MalformedEntityError as e:
        _write(sink, e.output, metrics)
        raise
    finally:
        metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
        if isinstance(codec, EntityEncoder):
            metrics.entities_encoded = codec.entities_encoded
        else:
            metrics.entities_decoded = codec.entities_decoded

    logger.debug("Transcode finished", extra=metrics.to_dict())
    return metrics
