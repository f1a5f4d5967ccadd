"""Entity codec for htmlencode.

The incremental encoder and decoder, the malformed-entity exceptions and the
stream driver that connects them to binary file objects.
"""

from .decoder import (
    MAX_ENTITY_LENGTH,
    BadDecimalEntityError,
    BadHexEntityError,
    EntityDecoder,
    MalformedEntityError,
    UnknownEntityError,
    UnterminatedEntityError,
    resolve_entity,
)
from .encoder import EntityEncoder, build_encoding_table, numeric_reference
from .stream import create_codec, iter_chunks, transcode

__all__ = [
    "MAX_ENTITY_LENGTH",
    "BadDecimalEntityError",
    "BadHexEntityError",
    "EntityDecoder",
    "MalformedEntityError",
    "UnknownEntityError",
    "UnterminatedEntityError",
    "resolve_entity",
    "EntityEncoder",
    "build_encoding_table",
    "numeric_reference",
    "create_codec",
    "iter_chunks",
    "transcode",
]
