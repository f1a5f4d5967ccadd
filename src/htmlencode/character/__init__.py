"""Character tables for htmlencode.

Byte classification and the named entity table shared by the encoder and
decoder.
"""

from .classification import LINE_FEED, PRINTABLE_TABLE, is_printable
from .entities import (
    AMPERSAND,
    ENTITY_NAMES,
    NAMED_ENTITIES,
    NAMED_REFERENCES,
    SEMICOLON,
    named_reference,
    resolve_name,
)

__all__ = [
    "LINE_FEED",
    "PRINTABLE_TABLE",
    "is_printable",
    "AMPERSAND",
    "ENTITY_NAMES",
    "NAMED_ENTITIES",
    "NAMED_REFERENCES",
    "SEMICOLON",
    "named_reference",
    "resolve_name",
]
